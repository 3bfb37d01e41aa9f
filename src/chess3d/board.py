"""The Board owns the pieces: one optional piece for each of the 8x8x8 cells of the cube"""

from copy import deepcopy
from dataclasses import dataclass
from typing import Iterable, Optional, Self

from src.chess3d.attacks import is_attacked, king_in_check
from src.chess3d.cell import BOARD_SIZE, Cell, all_cells
from src.chess3d.moves import Move, valid_moves
from src.chess3d.pieces import Color, Piece, PieceType
from src.core.exceptions import GameStateError, OutOfRangeError

# Layer pattern of the major pieces. Rows are indexed by y, the characters within a row by x.
# White uses it on layer z=0, Black uses the same pattern on layer z=7.
MAJOR_PIECE_PATTERN: list[str] = [
    "rnbrrbnr",
    "nnbnnbnn",
    "bbbqqbbb",
    "rnqqkqnr",
    "rnqqqqnr",
    "bbbqqbbb",
    "nnbnnbnn",
    "rnbrrbnr",
]
PAWN_PATTERN: list[str] = ["p" * BOARD_SIZE] * BOARD_SIZE

EMPTY_CHARACTERS = (".", " ")


@dataclass
class Board:
    position: dict[Cell, Optional[Piece]]

    @classmethod
    def empty(cls) -> Self:
        return cls({cell: None for cell in all_cells()})

    @classmethod
    def from_layers(cls, layers: dict[int, list[str]]) -> Self:
        """Construct a board from string patterns, one list of rows per layer.

        * The key of the dictionary is the layer (z)
        * Each layer has 8 rows (index = y), each row 8 characters (index = x)
        * Upper case letters are White pieces, lower case letters are Black pieces ('p', 'n', 'b', 'r', 'q', 'k')
        * '.' or ' ' denotes an empty cell
        * Layers that are not mentioned are empty

        ex. a lone white rook in the corner of the bottom layer:
        {0: ["R.......", "........", ...]}
        """
        board = cls.empty()
        for z, rows in layers.items():
            if len(rows) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in rows):
                raise ValueError(
                    f"Layer {z} must consist of {BOARD_SIZE} rows of {BOARD_SIZE} characters."
                )
            for y, row in enumerate(rows):
                for x, character in enumerate(row):
                    if character in EMPTY_CHARACTERS:
                        continue
                    board.place_piece(Piece.from_letter(character), Cell(x, y, z))
        return board

    @classmethod
    def initial_layout(cls) -> Self:
        """
        The starting arrangement:
        * z=0: White major pieces, z=1: White pawns
        * z=6: Black pawns, z=7: Black major pieces
        * layers 2 through 5 are empty

        The kings start on (4, 3, 0) and (4, 3, 7), with a rook on both ends of that row.
        """
        top = BOARD_SIZE - 1
        return cls.from_layers(
            {
                0: [row.upper() for row in MAJOR_PIECE_PATTERN],
                1: [row.upper() for row in PAWN_PATTERN],
                top - 1: PAWN_PATTERN,
                top: MAJOR_PIECE_PATTERN,
            }
        )

    def piece(self, cell: Cell) -> Optional[Piece]:
        try:
            return self.position[cell]
        except KeyError:
            raise OutOfRangeError(f"{cell} lies outside of the board.") from None

    def place_piece(self, piece: Piece, cell: Cell) -> None:
        """Put a piece on a cell (overwrites anything that was standing there)."""
        if cell not in self.position:
            raise OutOfRangeError(f"Cannot place a piece on {cell}: outside of the board.")
        piece.cell = cell
        self.position[cell] = piece

    def remove_piece(self, cell: Cell) -> Optional[Piece]:
        """Clear a cell and hand back whatever stood there."""
        removed = self.piece(cell)
        self.position[cell] = None
        return removed

    def move_piece(self, from_cell: Cell, to_cell: Cell) -> Optional[Piece]:
        """Relocate the piece on `from_cell`. Returns the piece that got displaced from `to_cell` (if any)."""
        piece_that_moved = self.remove_piece(from_cell)
        if piece_that_moved is None:
            raise GameStateError(f"No piece on {from_cell} to move.")
        displaced = self.remove_piece(to_cell)
        self.place_piece(piece_that_moved, to_cell)
        return displaced

    def copy(self) -> Self:
        """Scratch copy for simulating moves. The game itself never needs this."""
        return deepcopy(self)

    # -- QUERIES --
    def pieces(self) -> list[Piece]:
        return [piece for piece in self.position.values() if piece is not None]

    def locate_pieces(
        self, piece_type: PieceType, color: Optional[Color] = None
    ) -> list[Cell]:
        return [
            piece.cell
            for piece in self.pieces()
            if piece.type == piece_type and (color is None or piece.color == color)
        ]

    def locate_color(self, color: Color) -> list[Cell]:
        return [piece.cell for piece in self.pieces() if piece.color == color]

    def find_king(self, color: Color) -> Optional[Piece]:
        kings = self.locate_pieces(PieceType.KING, color)
        return self.piece(kings[0]) if kings else None

    def empty_cells(self) -> list[Cell]:
        return [cell for cell, piece in self.position.items() if piece is None]

    def is_any_occupied(self, cells: Iterable[Cell]) -> bool:
        return any(self.piece(cell) is not None for cell in cells)

    def is_any_under_attack(self, cells: Iterable[Cell], by_color: Color) -> bool:
        return any(is_attacked(cell, by_color, self) for cell in cells)

    def is_check(self, color: Color) -> bool:
        """Is the king of the given color under attack?"""
        return king_in_check(color, self)

    def generate_candidate_moves(self, color: Color) -> dict[Cell, list[Move]]:
        """Pseudo-legal moves of every piece of the given color, keyed by the cell the piece stands on."""
        return {
            cell: valid_moves(self.piece(cell), self)
            for cell in self.locate_color(color)
        }

    def count_material(self) -> dict[Color, int]:
        """Tally the points of material each player has on the board"""
        return {
            color: sum(piece.points for piece in self.pieces() if piece.color == color)
            for color in Color
        }
