"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from src.chess3d.cell import BOARD_SIZE, Cell
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, PieceType, Status


class CellModel(BaseModel):
    """Coordinates of a cell as sent by (and back to) the front end"""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    z: int

    @field_validator(*["x", "y", "z"])
    @classmethod
    def validate_coordinate(cls, value: int) -> int:
        if not 0 <= value < BOARD_SIZE:
            raise InvalidRequestError(
                f"Coordinate {value} lies outside of the board (0 - {BOARD_SIZE - 1})."
            )
        return value

    @classmethod
    def from_cell(cls, cell: Cell) -> "CellModel":
        return cls(x=cell.x, y=cell.y, z=cell.z)

    def to_cell(self) -> Cell:
        return Cell(self.x, self.y, self.z)


# --- REQUEST MODELS ---
class GetGameRequest(BaseModel):
    game_id: UUID


class ValidMovesRequest(BaseModel):
    game_id: UUID
    cell: CellModel


class MoveRequest(BaseModel):
    game_id: UUID
    from_cell: CellModel
    to_cell: CellModel


class ClickRequest(BaseModel):
    game_id: UUID
    cell: CellModel


class PromotionRequest(BaseModel):
    game_id: UUID
    promote_to: PieceType

    @field_validator("promote_to")
    @classmethod
    def validate_promotion_choice(cls, value: PieceType) -> PieceType:
        if value in (PieceType.PAWN, PieceType.KING):
            raise InvalidRequestError(f"A pawn cannot promote to a {value}.")
        return value


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class PieceResponse(BaseModel):
    type: PieceType
    color: Color
    cell: CellModel
    has_moved: bool


class MoveResponse(BaseModel):
    to_cell: CellModel
    capture: bool
    castle: Optional[str] = None


class PendingPromotionResponse(BaseModel):
    piece: PieceResponse
    to_cell: CellModel


class GameResponse(BaseModel):
    game_id: UUID
    turn: Color
    status: Status
    pieces: list[PieceResponse]
    in_check: dict[Color, bool]
    captured: dict[Color, list[PieceType]]
    material: dict[Color, int]
    selected: Optional[CellModel] = None
    highlighted: list[MoveResponse] = []
    pending_promotion: Optional[PendingPromotionResponse] = None


class ValidMovesResponse(BaseModel):
    game_id: UUID
    cell: CellModel
    moves: list[MoveResponse]
