"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.chess3d.board import Board
from src.chess3d.cell import Cell
from src.chess3d.pieces import Piece

PlacePieceFn = Callable[[Board, str, tuple[int, int, int]], Piece]


@pytest.fixture
def empty_board() -> Board:
    return Board.empty()


@pytest.fixture
def place() -> PlacePieceFn:
    """Call the inner function with a board, a piece letter ('R' white rook, 'r' black rook, ...) and the coordinates"""

    def _place(board: Board, letter: str, xyz: tuple[int, int, int]) -> Piece:
        piece = Piece.from_letter(letter)
        board.place_piece(piece, Cell(*xyz))
        return piece

    return _place


@pytest.fixture
def castling_board(place: PlacePieceFn) -> Board:
    """Only the Kings and the Rooks of both home rows. Ready to perform any castling move (if allowed)."""
    board = Board.empty()
    place(board, "K", (4, 3, 0))
    place(board, "R", (0, 3, 0))
    place(board, "R", (7, 3, 0))
    place(board, "k", (4, 3, 7))
    place(board, "r", (0, 3, 7))
    place(board, "r", (7, 3, 7))
    return board
