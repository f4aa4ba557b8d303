"""Requests and Response models"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from src.core.exceptions import InvalidSquareError
from src.core.shared_types import Color, Status

PlayerName = str


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    player_name: str


class JoinGameRequest(BaseModel):
    game_id: int
    player_name: str


class LegalMovesRequest(BaseModel):
    game_id: int
    player_name: str


class MoveRequest(BaseModel):
    game_id: int
    player_name: str
    from_square: str
    to_square: str
    promote_to: Optional[str] = None

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        """
        Only checks the square LOOKS like algebraic notation (a letter followed by a digit).
        Whether it is actually on the board ('i9' is not) is decided by the domain layer.
        """

        def _is_algebraic_notation(value: str) -> bool:
            if len(value) != 2:
                return False

            first_character = value[0]
            second_character = value[1]
            if not (first_character.isalpha() and second_character.isnumeric()):
                return False
            return True

        if not _is_algebraic_notation(value):
            raise InvalidSquareError(
                f"Cannot interpret {value!r} as a valid square name."
            )
        return value


class GetGameRequest(BaseModel):
    game_id: int


class PlayerGamesRequest(BaseModel):
    player_name: str


class DeleteGameRequest(BaseModel):
    game_id: int


# --- COMMANDS ---
# One command per request kind, tagged by `kind` so a single payload can be dispatched by the service.
class CreateGameCommand(CreateGameRequest):
    kind: Literal["create"] = "create"


class JoinGameCommand(JoinGameRequest):
    kind: Literal["join"] = "join"


class MoveCommand(MoveRequest):
    kind: Literal["move"] = "move"


class GetGameCommand(GetGameRequest):
    kind: Literal["query"] = "query"


class PlayerGamesCommand(PlayerGamesRequest):
    kind: Literal["player_games"] = "player_games"


Command = Annotated[
    Union[
        CreateGameCommand,
        JoinGameCommand,
        MoveCommand,
        GetGameCommand,
        PlayerGamesCommand,
    ],
    Field(discriminator="kind"),
]


class CommandEnvelope(BaseModel):
    """Wrapper to parse a raw payload (e.g. a decoded JSON dict) into the right command type."""

    command: Command


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: int
    white_player: Optional[PlayerName]
    black_player: Optional[PlayerName]
    status: Status
    to_move: Color
    fullmove_number: int
    en_passant_square: Optional[str]
    winner: Optional[PlayerName]
    move_history: list[str]
    board: list[str]


class LegalMovesResponse(BaseModel):
    game_id: int
    player_name: str
    color: Color
    legal_moves: list[str]


class PlayerGamesResponse(BaseModel):
    player_name: str
    game_ids: list[int]


class CommandResult(BaseModel):
    """
    Outcome of a dispatched command.

    ok=True: `game` (or `game_ids` for a player_games command) holds the result.
    ok=False: `error` holds the error code (see src/core/exceptions.py) and `message` the details.
    """

    ok: bool
    error: Optional[str] = None
    message: Optional[str] = None
    game: Optional[GameResponse] = None
    game_ids: Optional[list[int]] = None
