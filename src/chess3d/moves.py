"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the move sets for each piece type.

NOTE: the moves generated here are pseudo-legal. Nothing checks whether a move leaves your own king attacked
(see `strictly_legal_moves()` in src/chess3d/applier.py for the optional filter).
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Protocol

from src.chess3d.attacks import king_in_check
from src.chess3d.castling import (
    CASTLING_RULES,
    CastlingSide,
    is_on_home_row,
    row_cells,
)
from src.chess3d.cell import BOARD_SIZE, Cell
from src.chess3d.directions import (
    DIAGONAL_DIRECTIONS,
    KNIGHT_OFFSETS,
    ORTHOGONAL_DIRECTIONS,
    PAWN_CAPTURE_OFFSETS,
    Vector,
)
from src.chess3d.pieces import PAWN_START_LAYER, Color, Piece, PieceType


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, cell: Cell) -> Optional[Piece]: ...
    def find_king(self, color: Color) -> Optional[Piece]: ...
    def is_any_occupied(self, cells: Iterable[Cell]) -> bool: ...
    def is_any_under_attack(self, cells: Iterable[Cell], by_color: Color) -> bool: ...


@dataclass(frozen=True)
class Move:
    """A destination for the selected piece. The piece itself knows where it comes from."""

    to_cell: Cell
    capture: bool = False
    castle: Optional[CastlingSide] = None


# --- MOVEMENT RULES ---
def raycasting_move(
    piece: Piece,
    board: Board,
    directions: list[Vector],
    max_distance: int = BOARD_SIZE - 1,
) -> list[Move]:
    """
    Raycasting algorithm
    -----

    ---
    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the cube.

    * empty cell: move there and keep going
    * opponent's piece: can be captured, but the ray stops there
    * own piece: the ray stops before it
    """
    moves: list[Move] = []
    for dx, dy, dz in directions:
        for distance in range(1, max_distance + 1):
            target_cell = piece.cell.offset(dx * distance, dy * distance, dz * distance)
            if not target_cell.is_within_bounds():
                break

            piece_found = board.piece(target_cell)
            if piece_found is not None:
                if piece_found.color != piece.color:
                    moves.append(Move(target_cell, capture=True))
                break

            moves.append(Move(target_cell))
    return moves


def single_step_move(piece: Piece, board: Board, deltas: list[Vector]) -> list[Move]:
    """Raycasting is for sliding pieces. This is the equivalent for knights, which just jump to a fixed offset"""
    moves: list[Move] = []
    for dx, dy, dz in deltas:
        target_cell = piece.cell.offset(dx, dy, dz)
        if not target_cell.is_within_bounds():
            continue

        piece_found = board.piece(target_cell)
        if piece_found is None:
            moves.append(Move(target_cell))
        elif piece_found.color != piece.color:
            moves.append(Move(target_cell, capture=True))
    return moves


def candidate_pawn_moves(piece: Piece, board: Board) -> list[Move]:
    """
    A pawn:
    - moves by a single cell forward (White moves up the layers, Black moves down)
    - It can move by two in its first move (so when on its starting layer), if both cells are free
    - takes on any of the 8 horizontal neighbours of the cell in front of it

    NOTE: No en passant in this variant
    """
    moves: list[Move] = []
    dz = piece.color.pawn_direction

    one_step = piece.cell.offset(0, 0, dz)
    if one_step.is_within_bounds() and board.piece(one_step) is None:
        moves.append(Move(one_step))

        two_steps = piece.cell.offset(0, 0, 2 * dz)
        on_starting_layer = piece.cell.z == PAWN_START_LAYER[piece.color]
        if (
            on_starting_layer
            and two_steps.is_within_bounds()
            and board.piece(two_steps) is None
        ):
            moves.append(Move(two_steps))

    for dx, dy in PAWN_CAPTURE_OFFSETS:
        target_cell = piece.cell.offset(dx, dy, dz)
        if not target_cell.is_within_bounds():
            continue
        piece_found = board.piece(target_cell)
        if piece_found is not None and piece_found.color != piece.color:
            moves.append(Move(target_cell, capture=True))
    return moves


def candidate_knight_moves(piece: Piece, board: Board) -> list[Move]:
    """Knights leap two cells along one axis and one cell along another"""
    return single_step_move(piece, board, KNIGHT_OFFSETS)


def candidate_bishop_moves(piece: Piece, board: Board) -> list[Move]:
    """Bishops move along the diagonals: more than one axis changes with every step"""
    return raycasting_move(piece, board, DIAGONAL_DIRECTIONS)


def candidate_rook_moves(piece: Piece, board: Board) -> list[Move]:
    """Rooks move along a single axis"""
    return raycasting_move(piece, board, ORTHOGONAL_DIRECTIONS)


def candidate_queen_moves(piece: Piece, board: Board) -> list[Move]:
    """
    The Queen combines the rook moves (single axis) and bishop moves (diagonals)
    """
    return raycasting_move(piece, board, ORTHOGONAL_DIRECTIONS + DIAGONAL_DIRECTIONS)


def candidate_king_moves(piece: Piece, board: Board) -> list[Move]:
    """
    The king moves like the queen, but a single cell at the time.

    Castling is modelled as a special king move.
    """
    moves = raycasting_move(
        piece, board, ORTHOGONAL_DIRECTIONS + DIAGONAL_DIRECTIONS, max_distance=1
    )
    moves.extend(castling_moves(piece, board))
    return moves


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Piece, Board], list[Move]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


def valid_moves(piece: Piece, board: Board) -> list[Move]:
    """All pseudo-legal moves of the piece (order carries no meaning)"""
    movement_rule = MOVEMENT_RULES[piece.type]
    return movement_rule(piece, board)


# -- CASTLING MOVES ---
def castling_moves(king: Piece, board: Board) -> list[Move]:
    """
    Find the castling moves for the given king
    ---

    **you are allowed to castle if**

    * Your king has not moved and stands on its home row/layer.
    * You are not currently in check (you cannot castle out of check).
    * The rook in the corner of that side is yours and has not moved.
    * The cells between the king and the rook are empty.
    * The transit cells are not under attack.

    NOTE: only the transit cells in CASTLING_RULES are checked for attacks. The destination gets no check of its own.
    """
    color = king.color
    if king.has_moved or not is_on_home_row(color, king.cell):
        return []

    # Cannot castle out of a check.
    if king_in_check(color, board):
        return []

    moves: list[Move] = []
    for side, rule in CASTLING_RULES.items():
        king_to = king.cell.offset(rule.king_step, 0, 0)
        if not king_to.is_within_bounds():
            continue

        rook = board.piece(Cell(rule.rook_x, king.cell.y, king.cell.z))
        if (
            rook is None
            or rook.type != PieceType.ROOK
            or rook.color != color
            or rook.has_moved
        ):
            continue

        if board.is_any_occupied(row_cells(rule.must_be_empty, king.cell)):
            continue

        transit_cells = row_cells(rule.must_be_safe, king.cell)
        if board.is_any_under_attack(transit_cells, color.opponent):
            continue

        # survived the checks? add the castling move.
        moves.append(Move(king_to, castle=side))
    return moves
