"""Defines the types of chess pieces"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Self

from src.chess3d.cell import Cell


class PieceType(Enum):
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()


class Color(Enum):
    WHITE = auto()
    BLACK = auto()

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE

    @property
    def pawn_direction(self) -> int:
        """White pawns move UP through the layers (+z), Black pawns move DOWN"""
        return 1 if self == Color.WHITE else -1


LETTER_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_LETTER: dict[PieceType, str] = {
    value: key for key, value in LETTER_TO_PIECE.items()
}


PIECE_POINTS: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
}

# Pawns start on these layers and promote when they reach the opposite back layer
PAWN_START_LAYER: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: 6}
PROMOTION_LAYER: dict[Color, int] = {Color.WHITE: 7, Color.BLACK: 0}


@dataclass
class Piece:
    type: PieceType
    color: Color
    # NOTE: the cell is a copy of where the board stores the piece. Only Board.place_piece() writes it.
    cell: Cell = field(default_factory=lambda: Cell(0, 0, 0))
    has_moved: bool = False
    points: int = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        # The King's worth is undefined (does not count towards total points)
        self.points = PIECE_POINTS.get(self.type, 0)

    @classmethod
    def from_letter(cls, character: str) -> Self:
        # upper case: White pieces, lower case: Black pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = LETTER_TO_PIECE[character.lower()]
        return cls(piece_type, color)

    def to_letter(self) -> str:
        letter = PIECE_TO_LETTER[self.type]
        return letter.upper() if self.color == Color.WHITE else letter

    def promote_to(self, new_type: PieceType) -> Self:
        """A promoted pawn is replaced by a fresh piece (same color, same cell) that counts as moved."""
        return type(self)(new_type, self.color, self.cell, has_moved=True)
