"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    ACTIVE = "active"
    WHITE_WINS = "white wins"
    BLACK_WINS = "black wins"


# --- NOTE The domain layer keeps its own Color / PieceType enums in src/chess3d/pieces.py.
# --- These string versions are what the API layer speaks. Same names, the imports show which is which.


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"
