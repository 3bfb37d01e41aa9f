"""Helpers for implementing Castling rules. Need to be imported by multiple sources"""

from dataclasses import dataclass
from enum import Enum

from src.chess3d.cell import BOARD_SIZE, Cell
from src.chess3d.pieces import Color


class CastlingSide(Enum):
    KINGSIDE = "king"
    QUEENSIDE = "queen"


# The (y, z) row where each king starts. Castling is only possible from this row.
HOME_ROW: dict[Color, tuple[int, int]] = {
    Color.WHITE: (3, 0),
    Color.BLACK: (3, BOARD_SIZE - 1),
}


@dataclass(frozen=True)
class CastlingColumns:
    """
    Columns (x values on the home row) involved in castling to one side.

    * rook_x: where the rook has to stand (unmoved)
    * must_be_empty: nothing may stand between king and rook
    * must_be_safe: transit squares that may not be attacked by the opponent
    * king_step: the king moves two columns towards the rook
    """

    rook_x: int
    must_be_empty: tuple[int, ...]
    must_be_safe: tuple[int, ...]
    king_step: int

    def rook_to_x(self, king_to_x: int) -> int:
        """The rook lands on the column next to the king, on the side the king came from"""
        return king_to_x - self.king_step // 2


CASTLING_RULES: dict[CastlingSide, CastlingColumns] = {
    CastlingSide.KINGSIDE: CastlingColumns(
        rook_x=BOARD_SIZE - 1, must_be_empty=(5, 6), must_be_safe=(5, 6), king_step=2
    ),
    CastlingSide.QUEENSIDE: CastlingColumns(
        rook_x=0, must_be_empty=(1, 2, 3), must_be_safe=(2, 3), king_step=-2
    ),
}


def is_on_home_row(color: Color, cell: Cell) -> bool:
    return (cell.y, cell.z) == HOME_ROW[color]


def row_cells(columns: tuple[int, ...], row_of: Cell) -> list[Cell]:
    """The cells with the given x values on the same row/layer as `row_of`"""
    return [Cell(x, row_of.y, row_of.z) for x in columns]


def castling_rook_cells(side: CastlingSide, king_to: Cell) -> tuple[Cell, Cell]:
    """Where the rook comes from and where it ends up, given the destination of the king"""
    rule = CASTLING_RULES[side]
    rook_from = Cell(rule.rook_x, king_to.y, king_to.z)
    rook_to = Cell(rule.rook_to_x(king_to.x), king_to.y, king_to.z)
    return rook_from, rook_to
