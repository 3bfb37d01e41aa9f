"""
Fixed offset tables shared by the move generator and the attack detector.
"""

from itertools import permutations

Vector = tuple[int, int, int]


def is_orthogonal(vector: Vector) -> bool:
    """Exactly one axis changes: |dx| + |dy| + |dz| = 1"""
    return sum(abs(d) for d in vector) == 1


# All 26 unit steps to the neighbours of a cell
ALL_DIRECTIONS: list[Vector] = [
    (dx, dy, dz)
    for dx in (-1, 0, 1)
    for dy in (-1, 0, 1)
    for dz in (-1, 0, 1)
    if (dx, dy, dz) != (0, 0, 0)
]

# Rook lines: along a single axis (6 of them)
ORTHOGONAL_DIRECTIONS: list[Vector] = [v for v in ALL_DIRECTIONS if is_orthogonal(v)]

# Bishop lines: more than one axis changes (12 planar diagonals + 8 space diagonals)
DIAGONAL_DIRECTIONS: list[Vector] = [
    v for v in ALL_DIRECTIONS if not is_orthogonal(v)
]

# Knight leaps: every arrangement of (2, 1, 0) over the three axes, with all sign combinations (24 of them)
KNIGHT_OFFSETS: list[Vector] = sorted(
    {
        (sx * a, sy * b, sz * c)
        for a, b, c in permutations((2, 1, 0))
        for sx in (-1, 1)
        for sy in (-1, 1)
        for sz in (-1, 1)
    }
)

# Pawns take on any of the 8 horizontal neighbours, one layer forward. The z-step depends on the color.
PAWN_CAPTURE_OFFSETS: list[tuple[int, int]] = [
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)
]
