"""
Custom exceptions shared by all layers.

Every error a caller can recover from derives from GameError, so the service layer can catch a single type and
report it back. BoardCorruptedError sits outside that tree: it signals a broken invariant, not bad input.
"""


class GameError(Exception):
    """Top-level exception for anything that went wrong while handling a game request."""

    code: str = "game_error"


class InvalidSquareError(GameError):
    """Text could not be read as a square in algebraic notation ('a1' - 'h8')."""

    code = "invalid_square"


class InvalidPromotionError(GameError):
    code = "invalid_promotion"


class NotYourTurnError(GameError):
    code = "not_your_turn"


class IllegalMoveError(GameError):
    """The move breaks a rule of chess (shape, ownership, occupancy, or leaves own king in check)."""

    code = "illegal_move"


class GameStateError(GameError):
    """The request does not fit the current status of the game."""

    code = "invalid_game_state"


class GameNotInProgressError(GameStateError):
    code = "game_not_in_progress"


class AlreadyTwoPlayersError(GameStateError):
    code = "already_two_players"


class CannotJoinOwnGameError(GameStateError):
    code = "cannot_join_own_game"


class RepositoryError(GameError):
    code = "repository_error"


class GameNotFoundError(RepositoryError):
    code = "game_not_found"


class InvalidRequestError(GameError):
    code = "invalid_request"


class BoardCorruptedError(RuntimeError):
    """A structural invariant of the board does not hold (e.g. a king went missing)."""
