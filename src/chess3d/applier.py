"""
Applying moves to the board.

A move either fully commits or leaves the board untouched. The one exception is pawn promotion, which is a
two-phase protocol:

1. `apply_move()` notices the pawn reaches the last layer and returns a `PendingPromotion` instead of committing.
2. `complete_promotion()` finishes the move once the caller picked the piece type.

The board is not touched in between (the pawn still stands on its origin cell).
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.chess3d.board import Board
from src.chess3d.castling import castling_rook_cells
from src.chess3d.moves import Move, valid_moves
from src.chess3d.pieces import PROMOTION_LAYER, Color, Piece, PieceType
from src.core.exceptions import GameStateError, IllegalMoveError
from src.core.shared_types import Status

logger = logging.getLogger(__name__)

PROMOTION_OPTIONS: list[PieceType] = [
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
]

WIN_STATUS: dict[Color, Status] = {
    Color.WHITE: Status.WHITE_WINS,
    Color.BLACK: Status.BLACK_WINS,
}


@dataclass(frozen=True)
class PendingPromotion:
    """The request handed back to the caller: which pawn wants to promote on which cell."""

    piece: Piece
    move: Move


@dataclass(frozen=True)
class MoveResult:
    """
    Outcome of applying a move.

    * committed moves: `pending` is None, `captured` holds the removed piece (if any)
    * promotion waiting for a choice: only `pending` is set, nothing happened on the board
    """

    captured: Optional[Piece] = None
    status: Status = Status.ACTIVE
    pending: Optional[PendingPromotion] = None

    @property
    def is_committed(self) -> bool:
        return self.pending is None


def is_promotion(piece: Piece, move: Move) -> bool:
    """A pawn reaching the back layer of the opponent"""
    return (
        piece.type == PieceType.PAWN
        and move.to_cell.z == PROMOTION_LAYER[piece.color]
    )


def apply_move(
    board: Board,
    piece: Piece,
    move: Move,
    promote_to: Optional[PieceType] = None,
) -> MoveResult:
    """
    Update the board in place
    -----

    1. pawn reaching the last layer without a choice of piece type? --> hand back a pending promotion
    2. clear the origin cell
    3. remove whatever stands on the destination (capturing the king wins the game)
    4. place the piece (or the piece it promotes into) on the destination, marked as moved
    5. castling: also move the rook next to the king

    NOTE: flipping the side to move is left to the owner of the turn (the Game)
    """
    if promote_to is not None:
        _assert_valid_promotion(piece, move, promote_to)

    if is_promotion(piece, move) and promote_to is None:
        logger.debug("Promotion pending for pawn on %s", piece.cell)
        return MoveResult(pending=PendingPromotion(piece, move))

    origin = piece.cell
    board.remove_piece(origin)
    captured = board.remove_piece(move.to_cell)

    status = Status.ACTIVE
    if captured is not None and captured.type == PieceType.KING:
        status = WIN_STATUS[piece.color]

    if promote_to is not None:
        placed = piece.promote_to(promote_to)
    else:
        placed = piece
        placed.has_moved = True
    board.place_piece(placed, move.to_cell)

    if move.castle is not None:
        _move_castling_rook(board, move)

    return MoveResult(captured=captured, status=status)


def _assert_valid_promotion(piece: Piece, move: Move, piece_type: PieceType) -> None:
    if not is_promotion(piece, move):
        raise IllegalMoveError(
            f"{piece.color.name} {piece.type.name} moving to {move.to_cell} does not promote."
        )
    if piece_type not in PROMOTION_OPTIONS:
        raise IllegalMoveError(
            f"Cannot promote to {piece_type.name}. Pick one of {', '.join(p.name for p in PROMOTION_OPTIONS)}."
        )


def _move_castling_rook(board: Board, move: Move) -> None:
    """The king already moved two columns. Bring the rook from the corner to the cell next to it."""
    assert move.castle is not None
    rook_from, rook_to = castling_rook_cells(move.castle, move.to_cell)
    rook = board.piece(rook_from)
    if rook is None:
        return
    board.move_piece(rook_from, rook_to)
    rook.has_moved = True


def complete_promotion(
    board: Board, pending: PendingPromotion, piece_type: PieceType
) -> MoveResult:
    """Second phase of a promotion: the caller picked what the pawn turns into."""
    pawn = pending.piece
    if board.piece(pawn.cell) is not pawn:
        raise GameStateError(
            f"The pawn waiting for promotion is no longer on {pawn.cell}."
        )
    return apply_move(board, pawn, pending.move, promote_to=piece_type)


# -- OPTIONAL: STRICT LEGALITY ---
def is_putting_yourself_in_check(piece: Piece, move: Move, board: Board) -> bool:
    """Return True if the move leaves your own king attacked

    plan:
    1. Copy the board
    2. make the candidate move (promotions are tried with a queen, the choice does not matter for your own king)
    3. determine if your king is in check on the new board
    """
    scratch = board.copy()
    scratch_piece = scratch.piece(piece.cell)
    assert scratch_piece is not None
    promote_to = PieceType.QUEEN if is_promotion(piece, move) else None
    apply_move(scratch, scratch_piece, move, promote_to=promote_to)
    return scratch.is_check(piece.color)


def strictly_legal_moves(piece: Piece, board: Board) -> list[Move]:
    """
    The pseudo-legal moves, minus the ones that leave your own king in check.

    NOTE: this is NOT what the game uses by default (see Settings.filter_self_check).
    """
    return [
        move
        for move in valid_moves(piece, board)
        if not is_putting_yourself_in_check(piece, move, board)
    ]
