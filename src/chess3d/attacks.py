"""
Attack detection
----

Answers the question: _"Can a piece of the given color reach this cell on its next move?"_

Three checks, from cheap to expensive:
1. pawns (fixed table, one layer behind the target)
2. knights (fixed table of 24 leaps)
3. everything that moves along lines (raycasting along all 26 directions)
"""

import logging
from typing import Callable, Optional, Protocol

from src.chess3d.cell import BOARD_SIZE, Cell
from src.chess3d.directions import (
    ALL_DIRECTIONS,
    KNIGHT_OFFSETS,
    PAWN_CAPTURE_OFFSETS,
    Vector,
    is_orthogonal,
)
from src.chess3d.pieces import Color, Piece, PieceType

logger = logging.getLogger(__name__)


class Board(Protocol):
    """Just the parts the attack detection needs"""

    def piece(self, cell: Cell) -> Optional[Piece]: ...
    def find_king(self, color: Color) -> Optional[Piece]: ...


def _holds(board: Board, cell: Cell, piece_type: PieceType, color: Color) -> bool:
    """Is there a piece of this type and color on the cell? (cells outside the cube hold nothing)"""
    if not cell.is_within_bounds():
        return False
    piece = board.piece(cell)
    return piece is not None and piece.type == piece_type and piece.color == color


def is_attacked_by_pawn(cell: Cell, by_color: Color, board: Board) -> bool:
    """
    Pawns take on all 8 horizontal neighbours, one layer forward.

    NOTE: Pawn moves are not symmetric. To check IF a white pawn could take on this cell, look one layer DOWN:
    "Could a white pawn, that moves UP the cube, take on the specified cell?"
    """
    dz = by_color.pawn_direction
    return any(
        _holds(board, cell.offset(-dx, -dy, -dz), PieceType.PAWN, by_color)
        for dx, dy in PAWN_CAPTURE_OFFSETS
    )


def is_attacked_by_knight(cell: Cell, by_color: Color, board: Board) -> bool:
    """Knight leaps are symmetric, so leaping away from the target finds the knights that can leap onto it"""
    return any(
        _holds(board, cell.offset(-dx, -dy, -dz), PieceType.KNIGHT, by_color)
        for dx, dy, dz in KNIGHT_OFFSETS
    )


RayAttackFn = Callable[[Vector, int], bool]

# -- STRATEGY PATTERN: can the first piece found along a ray (direction, distance) move back along that ray? --
RAY_ATTACK_RULES: dict[PieceType, RayAttackFn] = {
    PieceType.PAWN: lambda direction, distance: False,
    PieceType.KNIGHT: lambda direction, distance: False,
    PieceType.BISHOP: lambda direction, distance: not is_orthogonal(direction),
    PieceType.ROOK: lambda direction, distance: is_orthogonal(direction),
    PieceType.QUEEN: lambda direction, distance: True,
    PieceType.KING: lambda direction, distance: distance == 1,
}


def is_attacked_along_rays(cell: Cell, by_color: Color, board: Board) -> bool:
    """
    Raycasting algorithm for attacks.
    ---

    Walk away from the cell along every direction until the first occupied cell or the edge of the cube.
    Only the first piece on the ray matters: either it is an attacker of the right kind, or it blocks the ray.
    """
    for dx, dy, dz in ALL_DIRECTIONS:
        for distance in range(1, BOARD_SIZE):
            target = cell.offset(dx * distance, dy * distance, dz * distance)
            if not target.is_within_bounds():
                break

            piece_found = board.piece(target)
            if piece_found is None:
                continue

            attack_rule = RAY_ATTACK_RULES[piece_found.type]
            if piece_found.color == by_color and attack_rule((dx, dy, dz), distance):
                return True
            break
    return False


def is_attacked(cell: Cell, by_color: Color, board: Board) -> bool:
    """Does any piece of `by_color` threaten the cell?"""
    return (
        is_attacked_by_pawn(cell, by_color, board)
        or is_attacked_by_knight(cell, by_color, board)
        or is_attacked_along_rays(cell, by_color, board)
    )


def king_in_check(color: Color, board: Board) -> bool:
    """
    The king of the given color is attacked by the opponent.

    NOTE: the engine does not guarantee a king per side. Without a king there is nothing to attack: not in check.
    """
    king = board.find_king(color)
    if king is None:
        logger.debug("No %s king on the board, treating as not in check", color.name)
        return False
    return is_attacked(king.cell, color.opponent, board)
