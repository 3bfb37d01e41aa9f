"""Custom exceptions. Every layer raises (a subclass of) GameError so the service can catch them in one go."""


class GameError(Exception):
    """Top-level exception for anything that goes wrong while playing a game."""


class OutOfRangeError(GameError):
    """Coordinates outside of the cube were used to access the board."""


class IllegalMoveError(GameError):
    """The requested destination is not one of the valid moves of the selected piece."""


class PendingPromotionError(GameError):
    """A pawn promotion is waiting for a choice. Nothing else can happen until it is resolved."""


class GameStateError(GameError):
    """Operation not allowed in the current state of the game (game over, nothing selected, ...)."""


class NotYourTurnError(GameError):
    """The selected piece belongs to the side that is not on move."""


class RepositoryError(GameError):
    """Could not find / store a game."""


class InvalidRequestError(GameError):
    """Request data that cannot be interpreted."""
