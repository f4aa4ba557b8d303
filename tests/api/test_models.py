import pytest
from pydantic import ValidationError

from src.api.models import (
    CommandEnvelope,
    CommandResult,
    CreateGameCommand,
    GameResponse,
    GetGameCommand,
    JoinGameCommand,
    MoveCommand,
    MoveRequest,
    PlayerGamesCommand,
)
from src.core.exceptions import InvalidSquareError
from src.core.shared_types import Color, Status


# -- Validation - MoveRequest --
def test_valid_square_names() -> None:
    """Test that MoveRequest accepts correctly written squares in algebraic notation."""
    request = MoveRequest(game_id=1, player_name="a", from_square="e2", to_square="e4")
    assert request.from_square == "e2"
    assert request.to_square == "e4"
    assert request.promote_to is None


@pytest.mark.parametrize("square", ["", "e", "e22", "22", "ee", "2e"])
def test_invalid_square_names(square: str) -> None:
    """Anything not shaped like a letter followed by a digit is refused before reaching the domain."""
    with pytest.raises(InvalidSquareError):
        _ = MoveRequest(game_id=1, player_name="a", from_square=square, to_square="e4")
    with pytest.raises(InvalidSquareError):
        _ = MoveRequest(game_id=1, player_name="a", from_square="e2", to_square=square)


def test_off_board_square_passes_request_validation() -> None:
    """'i9' looks like a square: the domain layer decides it is not on the board."""
    request = MoveRequest(game_id=1, player_name="a", from_square="i9", to_square="e4")
    assert request.from_square == "i9"


# -- Commands --
@pytest.mark.parametrize(
    "payload, command_type",
    [
        ({"kind": "create", "player_name": "a"}, CreateGameCommand),
        ({"kind": "join", "game_id": 3, "player_name": "b"}, JoinGameCommand),
        (
            {"kind": "move", "game_id": 3, "player_name": "a", "from_square": "e7", "to_square": "e8", "promote_to": "Q"},
            MoveCommand,
        ),
        ({"kind": "query", "game_id": 3}, GetGameCommand),
        ({"kind": "player_games", "player_name": "a"}, PlayerGamesCommand),
    ],
)
def test_command_dispatch_on_kind(payload: dict, command_type: type) -> None:
    command = CommandEnvelope(command=payload).command
    assert isinstance(command, command_type)


def test_unknown_command_kind() -> None:
    with pytest.raises(ValidationError):
        CommandEnvelope(command={"kind": "resign", "game_id": 3})


def test_game_id_must_be_integer() -> None:
    with pytest.raises(ValidationError):
        CommandEnvelope(command={"kind": "query", "game_id": "not-a-number"})


# -- Responses --
def test_game_response_accepts_boundary_spellings() -> None:
    response = GameResponse(
        game_id=1,
        white_player="a",
        black_player=None,
        status="waiting for player",
        to_move="white",
        fullmove_number=1,
        en_passant_square=None,
        winner=None,
        move_history=[],
        board=[],
    )
    assert response.status == Status.WAITING_FOR_PLAYER
    assert response.to_move == Color.WHITE


def test_failed_command_result() -> None:
    result = CommandResult(ok=False, error="illegal_move", message="Move not allowed")
    assert result.game is None
    assert result.model_dump()["error"] == "illegal_move"
