"""
The Game class will be the entrypoint into the domain layer for the service layer.
It owns everything around the board that changes during play: whose turn it is, the status,
the captured pieces and a promotion waiting for a choice.

The rules themselves live in the modules it orchestrates (moves, attacks, applier).
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from src.chess3d.applier import (
    MoveResult,
    PendingPromotion,
    apply_move,
    complete_promotion,
    strictly_legal_moves,
)
from src.chess3d.board import Board
from src.chess3d.cell import Cell
from src.chess3d.moves import Move, valid_moves
from src.chess3d.pieces import Color, Piece, PieceType
from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    NotYourTurnError,
    PendingPromotionError,
)
from src.core.shared_types import Status

logger = logging.getLogger(__name__)

WINNERS: dict[Status, Color] = {
    Status.WHITE_WINS: Color.WHITE,
    Status.BLACK_WINS: Color.BLACK,
}


def _empty_buckets() -> dict[Color, list[Piece]]:
    return {Color.WHITE: [], Color.BLACK: []}


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    turn: Color = Color.WHITE
    status: Status = Status.ACTIVE
    # captured pieces are kept in the bucket of their own color
    captured: dict[Color, list[Piece]] = field(default_factory=_empty_buckets)
    pending_promotion: Optional[PendingPromotion] = None
    selected: Optional[Piece] = None
    highlighted: list[Move] = field(default_factory=list)
    filter_self_check: bool = False

    @classmethod
    def new_game(cls, filter_self_check: bool = False) -> Self:
        """Start from the fixed initial layout, White to move."""
        return cls(board=Board.initial_layout(), filter_self_check=filter_self_check)

    @property
    def is_over(self) -> bool:
        return self.status != Status.ACTIVE

    @property
    def winner(self) -> Optional[Color]:
        """The game only ends by capturing a king."""
        return WINNERS.get(self.status)

    def valid_moves(self, cell: Cell) -> list[Move]:
        """
        Moves of the piece standing on `cell`.
        ----

        1. The game must still be running and not waiting for a promotion choice
        2. There must be a piece, and it has to belong to the side on move
        3. Generate its moves (pseudo-legal unless the session filters self-check)
        """
        piece = self._assert_can_move(cell)
        return self._moves_for(piece)

    def make_move(self, from_cell: Cell, to_cell: Cell) -> MoveResult:
        """
        Attempt to make a move
        -----

        The destination has to be one of the generated moves (anything else is rejected without changing anything).
        A pawn reaching the last layer does not move yet: the result carries a pending promotion that must be
        resolved with `complete_promotion()`.
        """
        piece = self._assert_can_move(from_cell)
        move = self._find_move(piece, to_cell)

        result = apply_move(self.board, piece, move)
        if not result.is_committed:
            self.pending_promotion = result.pending
            logger.info(
                "%s pawn on %s waits for a promotion choice", piece.color.name, from_cell
            )
            return result

        self._commit(piece, move, result)
        return result

    def complete_promotion(self, piece_type: PieceType) -> MoveResult:
        """The caller picked the piece type for the pawn that is waiting on the last layer."""
        pending = self.pending_promotion
        if pending is None:
            raise GameStateError("There is no promotion waiting for a choice.")

        try:
            result = complete_promotion(self.board, pending, piece_type)
        except GameStateError:
            # the pawn is gone, nothing is left to promote
            self.pending_promotion = None
            raise
        self.pending_promotion = None
        logger.info(
            "%s pawn promotes to %s on %s",
            pending.piece.color.name,
            piece_type.name,
            pending.move.to_cell,
        )
        self._commit(pending.piece, pending.move, result)
        return result

    def handle_click(self, cell: Cell) -> Optional[MoveResult]:
        """
        Player intent arrives as clicks on cells.
        ----

        * clicking a highlighted destination of the selected piece makes that move
        * clicking one of your own pieces selects it (and highlights its moves)
        * anything else clears the selection

        Clicks are ignored while the game is over or a promotion waits for a choice.
        """
        if self.is_over or self.pending_promotion is not None:
            return None

        if self.selected is not None:
            if any(move.to_cell == cell for move in self.highlighted):
                return self.make_move(self.selected.cell, cell)

        clicked = self.board.piece(cell)
        if clicked is not None and clicked.color == self.turn:
            self.selected = clicked
            self.highlighted = self._moves_for(clicked)
        else:
            self._clear_selection()
        return None

    def is_check(self, color: Color) -> bool:
        return self.board.is_check(color)

    def material(self) -> dict[Color, int]:
        """Points each player has captured (so: the worth of the opponent's bucket)"""
        return {
            color: sum(piece.points for piece in self.captured[color.opponent])
            for color in Color
        }

    # -- PRIVATE HELPERS ---
    def _assert_can_move(self, cell: Cell) -> Piece:
        if self.is_over:
            raise GameStateError(f"The game is over. status: {self.status}")

        if self.pending_promotion is not None:
            raise PendingPromotionError(
                f"Pick a piece for the pawn on {self.pending_promotion.move.to_cell} first."
            )

        piece = self.board.piece(cell)
        if piece is None:
            raise GameStateError(f"There is no piece on {cell}.")

        if piece.color != self.turn:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for {self.turn.name.lower()} to make a move first."
            )
        return piece

    def _moves_for(self, piece: Piece) -> list[Move]:
        if self.filter_self_check:
            return strictly_legal_moves(piece, self.board)
        return valid_moves(piece, self.board)

    def _find_move(self, piece: Piece, to_cell: Cell) -> Move:
        for move in self._moves_for(piece):
            if move.to_cell == to_cell:
                return move
        raise IllegalMoveError(
            f"{piece.color.name} {piece.type.name} on {piece.cell} cannot move to {to_cell}."
        )

    def _commit(self, piece: Piece, move: Move, result: MoveResult) -> None:
        """Book-keeping after the board changed: captured pieces, game status, turn."""
        if result.captured is not None:
            self.captured[result.captured.color].append(result.captured)
            logger.info(
                "%s %s captured on %s",
                result.captured.color.name,
                result.captured.type.name,
                move.to_cell,
            )

        if result.status != Status.ACTIVE:
            self.status = result.status
            logger.info("Game over: %s", self.status)

        logger.info("%s %s moved to %s", piece.color.name, piece.type.name, move.to_cell)
        # NOTE the turn also flips after the king got captured. The status is what tells the game is over.
        self.turn = self.turn.opponent
        self._clear_selection()

    def _clear_selection(self) -> None:
        self.selected = None
        self.highlighted = []
