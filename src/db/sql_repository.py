"""Implementation of (Game)Repository using SQLAlchemy"""

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from src.core.models import GameModel
from src.db.schema import DBGame


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: int) -> GameModel | None:
        """Get game by ID, if record exists."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> tuple[GameModel, int]:
        """Store new game and return the stored data + newly created game ID (assigned by the database)."""
        game_db = DBGame(
            white_player=game.white_player,
            black_player=game.black_player,
            status=game.status,
            board=dict(game.board),
            moves_uci=list(game.moves_uci),
        )
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db), game_db.id

    def update_game(self, game_id: int, game: GameModel) -> GameModel | None:
        """Add new info to existing record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        # JSON columns only register a change when a new object gets assigned
        game_db.white_player = game.white_player
        game_db.black_player = game.black_player
        game_db.status = game.status
        game_db.board = dict(game.board)
        game_db.moves_uci = list(game.moves_uci)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_game(self, game_id: int) -> GameModel | None:
        """Remove a game's record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self.db.commit()
        return game_model

    def list_games(self, player: str) -> list[int]:
        """IDs of all games the player is registered in, oldest first."""
        query = (
            select(DBGame.id)
            .where(or_(DBGame.white_player == player, DBGame.black_player == player))
            .order_by(DBGame.id)
        )
        return list(self.db.scalars(query))

    def _fetch_game(self, game_id: int) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            white_player=game_db.white_player,
            black_player=game_db.black_player,
            status=game_db.status,
            board=game_db.board,
            moves_uci=game_db.moves_uci,
        )
