"""Protocol repository (can implement later for SQL Alchemy / simple Excel table etc.)"""

from typing import Protocol

from src.core.models import GameModel


class GameRepository(Protocol):
    """Persistence layer orchestration. Games are keyed by an integer ID handed out by the store."""

    def get_game(self, game_id: int) -> GameModel | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, int]:
        """Store new game and return the stored data + newly created game ID."""
        ...

    def update_game(self, game_id: int, game: GameModel) -> GameModel | None:
        """Add new info to existing record."""
        ...

    def delete_game(self, game_id: int) -> GameModel | None:
        """Remove a game's record."""
        ...

    def list_games(self, player: str) -> list[int]:
        """IDs of all games the player is registered in."""
        ...
