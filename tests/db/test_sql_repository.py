"""Unit tests for src/db/sql_repository.py"""

from sqlalchemy.orm import Session

from src.chess.board import Board
from src.chess.moves import Move
from src.core.shared_types import Status
from src.db.schema import DBGame
from src.db.sql_repository import GameModel, SQLGameRepository


def make_model(
    white: str | None = "player_white",
    black: str | None = "player_black",
    moves: list[str] | None = None,
) -> GameModel:
    return GameModel(
        white_player=white,
        black_player=black,
        status=Status.IN_PROGRESS,
        board=Board.starting_position().to_dict(),
        moves_uci=moves if moves is not None else [],
    )


def test_create_game(db_session_repo: Session) -> None:
    """Conversion from a GameModel to DBGame for a new entry to the database."""
    model = make_model(moves=["e2e4", "e7e5"])

    repo = SQLGameRepository(db_session_repo)
    record_in_db, game_id = repo.create_game(model)
    assert isinstance(record_in_db, GameModel)
    assert record_in_db == model
    assert isinstance(game_id, int)


def test_ids_are_assigned_by_database(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    _, first_id = repo.create_game(make_model())
    _, second_id = repo.create_game(make_model())
    assert second_id > first_id


def test_timestamps_are_set(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    _, game_id = repo.create_game(make_model())
    record = db_session_repo.get(DBGame, game_id)
    assert record is not None
    assert record.created_at is not None
    assert record.updated_at is not None


def test_get_game_by_id(db_session_repo: Session) -> None:
    """Create a game, then fetch it from db."""
    repo = SQLGameRepository(db_session_repo)
    expected_game, game_id = repo.create_game(make_model())
    game_found = repo.get_game(game_id)
    assert isinstance(game_found, GameModel)
    assert game_found == expected_game


def test_get_unknown_game(db_session_repo: Session) -> None:
    """
    Should return None if ID does not match anything in database.

    NOTE with an empty database, any id is a valid test case.
    """
    repo = SQLGameRepository(db_session_repo)
    assert repo.get_game(1) is None

    _, game_id = repo.create_game(make_model())
    assert repo.get_game(game_id + 1) is None


def test_update_game(db_session_repo: Session) -> None:
    """Changes to the JSON columns must be stored, not only the plain ones."""
    repo = SQLGameRepository(db_session_repo)
    _, game_id = repo.create_game(make_model(black=None))

    board = Board.starting_position()
    board.make_move(Move.from_uci("e2e4"))
    updated = make_model(moves=["e2e4"])
    updated.board = board.to_dict()

    stored = repo.update_game(game_id, updated)
    assert stored == updated

    game_found = repo.get_game(game_id)
    assert game_found is not None
    assert game_found.black_player == "player_black"
    assert game_found.moves_uci == ["e2e4"]
    assert game_found.board["to_move"] == "black"
    assert game_found.board["en_passant"] == "e3"


def test_update_unknown_game(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    assert repo.update_game(5, make_model()) is None


def test_delete_game(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    model, game_id = repo.create_game(make_model())

    deleted = repo.delete_game(game_id)
    assert deleted == model
    assert repo.get_game(game_id) is None
    assert repo.delete_game(game_id) is None


def test_list_games(db_session_repo: Session) -> None:
    """A player shows up in games with either color, oldest game first."""
    repo = SQLGameRepository(db_session_repo)
    _, first = repo.create_game(make_model(white="alice", black="bob"))
    _, second = repo.create_game(make_model(white="carol", black=None))
    _, third = repo.create_game(make_model(white="bob", black="alice"))

    assert repo.list_games("alice") == [first, third]
    assert repo.list_games("carol") == [second]
    assert repo.list_games("dave") == []
