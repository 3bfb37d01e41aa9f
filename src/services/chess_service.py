"""Orchestration of communication from the front end to the game logic and the session registry (and the reverse direction)."""

import logging
from typing import Any, Callable, Optional, TypeVar
from uuid import UUID

from src.api.models import (
    CellModel,
    ClickRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    MoveRequest,
    MoveResponse,
    PendingPromotionResponse,
    PieceResponse,
    PromotionRequest,
    ValidMovesRequest,
    ValidMovesResponse,
)
from src.chess3d.game import Game
from src.chess3d.moves import Move
from src.chess3d.pieces import Color as DomainColor
from src.chess3d.pieces import Piece
from src.chess3d.pieces import PieceType as DomainPieceType
from src.core.config import Settings, get_settings
from src.core.exceptions import GameError, RepositoryError
from src.core.shared_types import Color, PieceType
from src.db.repository import GameRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ChessService:
    """Orchestration of layers for the cube chess game."""

    def __init__(
        self, repository: GameRepository, settings: Optional[Settings] = None
    ) -> None:
        self.repo = repository
        self.settings = settings or get_settings()

    # -- Front end requests ---
    def create_game(self) -> GameResponse:
        """Set up a new game in the starting layout."""
        game = Game.new_game(filter_self_check=self.settings.filter_self_check)
        game_id = self.repo.create_game(game)
        logger.info("Created game %s", game_id)
        return self._create_game_response(game_id, game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Everything a view needs to draw the cube.
        """
        game = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game)

    def valid_moves(self, request: ValidMovesRequest) -> ValidMovesResponse:
        """The moves of the piece on the requested cell (used for highlighting)."""
        game = self._fetch_game(request.game_id)
        moves = self._attempt(request.game_id, game.valid_moves, request.cell.to_cell())
        return ValidMovesResponse(
            game_id=request.game_id,
            cell=request.cell,
            moves=[self._move_response(move) for move in moves],
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt."""
        game = self._fetch_game(request.game_id)
        self._attempt(
            request.game_id,
            game.make_move,
            request.from_cell.to_cell(),
            request.to_cell.to_cell(),
        )
        return self._create_game_response(request.game_id, game)

    def promote(self, request: PromotionRequest) -> GameResponse:
        """Resolve a pending promotion."""
        game = self._fetch_game(request.game_id)
        piece_type = DomainPieceType[request.promote_to.name]
        self._attempt(request.game_id, game.complete_promotion, piece_type)
        return self._create_game_response(request.game_id, game)

    def click(self, request: ClickRequest) -> GameResponse:
        """A click on a cell: select a piece, or move the selected piece there."""
        game = self._fetch_game(request.game_id)
        self._attempt(request.game_id, game.handle_click, request.cell.to_cell())
        return self._create_game_response(request.game_id, game)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a game."""
        if self.repo.delete_game(request.game_id) is None:
            raise RepositoryError(f"Game with {request.game_id=} not found.")
        logger.info("Deleted game %s", request.game_id)

    # -- Internal helpers --
    def _attempt(self, game_id: UUID, operation: Callable[..., T], *args: Any) -> T:
        """Run a game operation. Rejections are logged and passed on to the caller."""
        try:
            return operation(*args)
        except GameError as error:
            logger.warning("Game %s rejected request: %s", game_id, error)
            raise

    def _fetch_game(self, game_id: UUID) -> Game:
        """Attempt to find the game in the repository and raise error if it fails."""
        game = self.repo.get_game(game_id)
        if game is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game

    def _create_game_response(self, game_id: UUID, game: Game) -> GameResponse:
        """Convert the Game into what the front end gets to see."""
        pending = game.pending_promotion
        return GameResponse(
            game_id=game_id,
            turn=_api_color(game.turn),
            status=game.status,
            pieces=[self._piece_response(piece) for piece in game.board.pieces()],
            in_check={_api_color(color): game.is_check(color) for color in DomainColor},
            captured={
                _api_color(color): [_api_piece_type(piece.type) for piece in pieces]
                for color, pieces in game.captured.items()
            },
            material={
                _api_color(color): points for color, points in game.material().items()
            },
            selected=CellModel.from_cell(game.selected.cell) if game.selected else None,
            highlighted=[self._move_response(move) for move in game.highlighted],
            pending_promotion=(
                PendingPromotionResponse(
                    piece=self._piece_response(pending.piece),
                    to_cell=CellModel.from_cell(pending.move.to_cell),
                )
                if pending
                else None
            ),
        )

    def _piece_response(self, piece: Piece) -> PieceResponse:
        return PieceResponse(
            type=_api_piece_type(piece.type),
            color=_api_color(piece.color),
            cell=CellModel.from_cell(piece.cell),
            has_moved=piece.has_moved,
        )

    def _move_response(self, move: Move) -> MoveResponse:
        return MoveResponse(
            to_cell=CellModel.from_cell(move.to_cell),
            capture=move.capture,
            castle=move.castle.value if move.castle else None,
        )


def _api_color(color: DomainColor) -> Color:
    return Color[color.name]


def _api_piece_type(piece_type: DomainPieceType) -> PieceType:
    return PieceType[piece_type.name]
