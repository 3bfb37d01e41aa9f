"""Protocol repository + the in-memory implementation the service runs with.

NOTE: games only live as long as the process. Nothing gets written anywhere.
"""

from typing import Protocol
from uuid import UUID, uuid4

from src.chess3d.game import Game


class GameRepository(Protocol):
    """Session registry orchestration"""

    def get_game(self, game_id: UUID) -> Game | None:
        """Get game by ID, if it exists."""
        ...

    def create_game(self, game: Game) -> UUID:
        """Store new game and return the newly created game ID."""
        ...

    def delete_game(self, game_id: UUID) -> Game | None:
        """Remove a game."""
        ...


class InMemoryGameRepository:
    """Games kept in a dictionary, keyed by their ID"""

    def __init__(self) -> None:
        self._games: dict[UUID, Game] = {}

    def get_game(self, game_id: UUID) -> Game | None:
        return self._games.get(game_id)

    def create_game(self, game: Game) -> UUID:
        game_id = uuid4()
        self._games[game_id] = game
        return game_id

    def delete_game(self, game_id: UUID) -> Game | None:
        return self._games.pop(game_id, None)
