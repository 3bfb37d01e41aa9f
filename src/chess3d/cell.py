"""
A cell of the cube

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# The cube is always 8x8x8. Every axis has the same length.
BOARD_SIZE = 8


def in_bounds(x: int, y: int, z: int) -> bool:
    """True if all three coordinates lie in [0, BOARD_SIZE)"""
    return 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE and 0 <= z < BOARD_SIZE


@dataclass(frozen=True)
class Cell:
    x: int
    y: int
    z: int

    def is_within_bounds(self) -> bool:
        return in_bounds(self.x, self.y, self.z)

    def offset(self, dx: int, dy: int, dz: int) -> Cell:
        """Neighbouring cell. NOTE: no bounds check, the result might lie outside of the cube"""
        return Cell(self.x + dx, self.y + dy, self.z + dz)

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.x, self.y, self.z)


def all_cells() -> list[Cell]:
    return [
        Cell(x, y, z)
        for x in range(BOARD_SIZE)
        for y in range(BOARD_SIZE)
        for z in range(BOARD_SIZE)
    ]
