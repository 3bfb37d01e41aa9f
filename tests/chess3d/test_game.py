"""Unit tests for /src/chess3d/game.py"""

import logging

import pytest

from src.chess3d.board import Board
from src.chess3d.castling import CastlingSide
from src.chess3d.cell import Cell
from src.chess3d.game import Game
from src.chess3d.pieces import Color, PieceType
from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    NotYourTurnError,
    PendingPromotionError,
)
from src.core.shared_types import Status


@pytest.fixture
def game() -> Game:
    return Game.new_game()


@pytest.fixture
def duel_board(empty_board: Board, place) -> Board:
    """Both kings far apart, a white rook that can reach a black knight"""
    place(empty_board, "K", (7, 7, 0))
    place(empty_board, "k", (7, 7, 7))
    place(empty_board, "R", (0, 0, 0))
    place(empty_board, "n", (0, 0, 5))
    return empty_board


@pytest.fixture
def promotion_game(empty_board: Board, place) -> Game:
    place(empty_board, "K", (0, 0, 0))
    place(empty_board, "k", (7, 7, 7))
    place(empty_board, "P", (3, 3, 6))
    place(empty_board, "p", (5, 5, 5))
    return Game(board=empty_board)


# --- NEW GAME ---
def test_new_game(game: Game) -> None:
    assert game.turn == Color.WHITE
    assert game.status == Status.ACTIVE
    assert not game.is_over
    assert game.winner is None
    assert game.pending_promotion is None
    assert game.captured == {Color.WHITE: [], Color.BLACK: []}
    assert game.material() == {Color.WHITE: 0, Color.BLACK: 0}
    assert not game.filter_self_check
    assert len(game.board.pieces()) == 2 * (64 + 64)


def test_new_game_filter_self_check() -> None:
    assert Game.new_game(filter_self_check=True).filter_self_check


# --- GUARDS ---
def test_valid_moves_of_white_pawn(game: Game) -> None:
    moves = game.valid_moves(Cell(3, 3, 1))
    assert {move.to_cell for move in moves} == {Cell(3, 3, 2), Cell(3, 3, 3)}


def test_empty_cell(game: Game) -> None:
    with pytest.raises(GameStateError):
        game.valid_moves(Cell(3, 3, 3))
    with pytest.raises(GameStateError):
        game.make_move(Cell(3, 3, 3), Cell(3, 3, 4))


def test_not_your_turn(game: Game) -> None:
    with pytest.raises(NotYourTurnError):
        game.make_move(Cell(3, 3, 6), Cell(3, 3, 5))
    assert game.turn == Color.WHITE


def test_illegal_move_changes_nothing(game: Game) -> None:
    before = game.board.copy()
    with pytest.raises(IllegalMoveError):
        game.make_move(Cell(3, 3, 1), Cell(3, 3, 4))
    assert game.board == before
    assert game.turn == Color.WHITE


# --- PLAYING ---
def test_turns_alternate(game: Game) -> None:
    result = game.make_move(Cell(3, 3, 1), Cell(3, 3, 3))
    assert result.is_committed
    assert game.turn == Color.BLACK
    assert game.board.piece(Cell(3, 3, 3)).has_moved

    game.make_move(Cell(3, 3, 6), Cell(3, 3, 4))
    assert game.turn == Color.WHITE


def test_capture_is_booked(duel_board: Board) -> None:
    game = Game(board=duel_board)
    result = game.make_move(Cell(0, 0, 0), Cell(0, 0, 5))

    assert result.captured is not None
    assert [piece.type for piece in game.captured[Color.BLACK]] == [PieceType.KNIGHT]
    assert game.captured[Color.WHITE] == []
    assert game.material() == {Color.WHITE: 3, Color.BLACK: 0}
    assert game.status == Status.ACTIVE


def test_capturing_the_king(empty_board: Board, place, caplog) -> None:
    place(empty_board, "R", (0, 0, 0))
    place(empty_board, "k", (0, 0, 5))
    game = Game(board=empty_board)

    with caplog.at_level(logging.INFO, logger="src.chess3d.game"):
        game.make_move(Cell(0, 0, 0), Cell(0, 0, 5))

    assert game.status == Status.WHITE_WINS
    assert game.is_over
    assert game.winner == Color.WHITE
    assert game.turn == Color.BLACK
    assert "Game over" in caplog.text

    with pytest.raises(GameStateError):
        game.make_move(Cell(0, 0, 5), Cell(0, 0, 4))
    assert game.handle_click(Cell(0, 0, 5)) is None


def test_is_check(duel_board: Board, place) -> None:
    game = Game(board=duel_board)
    assert not game.is_check(Color.BLACK)
    place(duel_board, "Q", (7, 0, 7))
    assert game.is_check(Color.BLACK)
    assert not game.is_check(Color.WHITE)


def test_castling(castling_board: Board) -> None:
    game = Game(board=castling_board)
    moves = game.valid_moves(Cell(4, 3, 0))
    assert {move.castle for move in moves if move.castle} == set(CastlingSide)

    game.make_move(Cell(4, 3, 0), Cell(6, 3, 0))

    assert game.board.piece(Cell(6, 3, 0)).type == PieceType.KING
    assert game.board.piece(Cell(5, 3, 0)).type == PieceType.ROOK
    assert game.board.piece(Cell(7, 3, 0)) is None
    assert game.turn == Color.BLACK


# --- PROMOTION ---
def test_promotion_flow(promotion_game: Game) -> None:
    game = promotion_game
    result = game.make_move(Cell(3, 3, 6), Cell(3, 3, 7))

    assert not result.is_committed
    assert game.pending_promotion is not None
    assert game.turn == Color.WHITE
    assert game.board.piece(Cell(3, 3, 6)).type == PieceType.PAWN

    with pytest.raises(PendingPromotionError):
        game.make_move(Cell(0, 0, 0), Cell(0, 0, 1))
    with pytest.raises(PendingPromotionError):
        game.valid_moves(Cell(0, 0, 0))
    assert game.handle_click(Cell(0, 0, 0)) is None

    result = game.complete_promotion(PieceType.QUEEN)

    assert result.is_committed
    queen = game.board.piece(Cell(3, 3, 7))
    assert (queen.type, queen.color, queen.has_moved) == (PieceType.QUEEN, Color.WHITE, True)
    assert game.board.piece(Cell(3, 3, 6)) is None
    assert game.pending_promotion is None
    assert game.turn == Color.BLACK


def test_invalid_promotion_choice_keeps_waiting(promotion_game: Game) -> None:
    promotion_game.make_move(Cell(3, 3, 6), Cell(3, 3, 7))
    with pytest.raises(IllegalMoveError):
        promotion_game.complete_promotion(PieceType.KING)
    assert promotion_game.pending_promotion is not None
    assert promotion_game.turn == Color.WHITE


def test_promotion_dropped_when_pawn_is_gone(promotion_game: Game) -> None:
    """An invalid pending promotion must not block the game forever"""
    game = promotion_game
    game.make_move(Cell(3, 3, 6), Cell(3, 3, 7))
    game.board.remove_piece(Cell(3, 3, 6))

    with pytest.raises(GameStateError):
        game.complete_promotion(PieceType.QUEEN)

    assert game.pending_promotion is None
    assert game.turn == Color.WHITE
    game.make_move(Cell(0, 0, 0), Cell(0, 0, 1))
    assert game.turn == Color.BLACK


def test_nothing_to_promote(game: Game) -> None:
    with pytest.raises(GameStateError):
        game.complete_promotion(PieceType.QUEEN)


# --- CLICKS ---
def test_click_selects_and_moves(game: Game) -> None:
    assert game.handle_click(Cell(3, 3, 1)) is None
    assert game.selected is game.board.piece(Cell(3, 3, 1))
    assert {move.to_cell for move in game.highlighted} == {Cell(3, 3, 2), Cell(3, 3, 3)}

    result = game.handle_click(Cell(3, 3, 3))

    assert result is not None and result.is_committed
    assert game.board.piece(Cell(3, 3, 3)).type == PieceType.PAWN
    assert game.selected is None
    assert game.highlighted == []
    assert game.turn == Color.BLACK


def test_click_switches_selection(game: Game) -> None:
    game.handle_click(Cell(3, 3, 1))
    game.handle_click(Cell(4, 4, 1))
    assert game.selected.cell == Cell(4, 4, 1)
    assert game.turn == Color.WHITE


@pytest.mark.parametrize("second_click", [Cell(3, 3, 6), Cell(3, 3, 5), Cell(3, 3, 4)])
def test_click_elsewhere_clears_selection(game: Game, second_click: Cell) -> None:
    """Opponent pieces and cells that are not highlighted drop the selection"""
    game.handle_click(Cell(3, 3, 1))
    assert game.handle_click(second_click) is None
    assert game.selected is None
    assert game.highlighted == []
    assert game.board.piece(Cell(3, 3, 1)) is not None


# --- SELF CHECK ---
@pytest.fixture
def pinned_board(empty_board: Board, place) -> Board:
    place(empty_board, "K", (4, 3, 0))
    place(empty_board, "R", (4, 3, 2))
    place(empty_board, "r", (4, 3, 6))
    place(empty_board, "k", (0, 7, 7))
    return empty_board


def test_self_check_allowed_by_default(pinned_board: Board) -> None:
    game = Game(board=pinned_board)
    game.make_move(Cell(4, 3, 2), Cell(0, 3, 2))
    assert game.is_check(Color.WHITE)


def test_self_check_filtered(pinned_board: Board) -> None:
    game = Game(board=pinned_board, filter_self_check=True)
    with pytest.raises(IllegalMoveError):
        game.make_move(Cell(4, 3, 2), Cell(0, 3, 2))
    assert Cell(0, 3, 2) not in {move.to_cell for move in game.valid_moves(Cell(4, 3, 2))}
    game.make_move(Cell(4, 3, 2), Cell(4, 3, 6))
    assert game.captured[Color.BLACK][0].type == PieceType.ROOK


def test_castling_from_new_game(game: Game) -> None:
    """Clearing the two cells between the white king and its kingside rook opens the castle"""
    game.board.remove_piece(Cell(5, 3, 0))
    game.board.remove_piece(Cell(6, 3, 0))

    game.make_move(Cell(4, 3, 0), Cell(6, 3, 0))

    assert game.board.piece(Cell(6, 3, 0)).type == PieceType.KING
    rook = game.board.piece(Cell(5, 3, 0))
    assert rook.type == PieceType.ROOK and rook.has_moved
    assert game.turn == Color.BLACK
