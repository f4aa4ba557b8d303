"""Orchestration of communication from the outer command layer to business logic and persistence layers (and the reverse direction)."""

import logging
from typing import Any

from pydantic import ValidationError

from src.api.models import (
    CommandEnvelope,
    CommandResult,
    CreateGameCommand,
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameCommand,
    GetGameRequest,
    JoinGameCommand,
    JoinGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveCommand,
    MoveRequest,
    PlayerGamesCommand,
    PlayerGamesRequest,
    PlayerGamesResponse,
)
from src.chess.game import Game
from src.chess.render import board_lines
from src.core.exceptions import GameError, GameNotFoundError, InvalidRequestError
from src.core.models import GameModel
from src.core.shared_types import Color
from src.db.repository import GameRepository

logger = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for chess game."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- Command dispatch ---
    def execute(self, command: Any) -> CommandResult:
        """
        Single entrypoint for the outer layer.
        ----

        Accepts a command model, or a raw payload (dict with a `kind` field) that gets parsed first.
        Errors are reported in the result instead of raised.
        """
        try:
            if isinstance(command, dict):
                command = self._parse_command(command)

            match command:
                case CreateGameCommand():
                    return CommandResult(ok=True, game=self.create_new_game(command))
                case JoinGameCommand():
                    return CommandResult(ok=True, game=self.join_game(command))
                case MoveCommand():
                    return CommandResult(ok=True, game=self.make_move(command))
                case GetGameCommand():
                    return CommandResult(ok=True, game=self.get_game_state(command))
                case PlayerGamesCommand():
                    response = self.player_games(command)
                    return CommandResult(ok=True, game_ids=response.game_ids)
                case _:
                    raise TypeError(f"Unknown command: {command!r}")
        except GameError as error:
            logger.warning("Command rejected (%s): %s", error.code, error)
            return CommandResult(ok=False, error=error.code, message=str(error))

    # -- Operations ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """First player requested to create a new game."""

        # Create a new Game, and convert into GameModel
        new_game = Game.new_game(creator=request.player_name)
        created_game_data = new_game.to_model()

        # Store the GameModel in the repository
        stored_game, game_id = self.repo.create_game(created_game_data)
        logger.info("Created game %s for player %s", game_id, request.player_name)

        return self._create_game_response(game_id, stored_game)

    def join_game(self, request: JoinGameRequest) -> GameResponse:
        """Second player requested to join a game."""

        game = self._load_game(request.game_id)
        game.join_game(request.player_name)

        with_player_registered = game.to_model()
        self.repo.update_game(request.game_id, with_player_registered)
        logger.info("Player %s joined game %s", request.player_name, request.game_id)

        return self._create_game_response(request.game_id, with_player_registered)

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt."""

        game = self._load_game(request.game_id)

        # Attempt the move (raises if not allowed, before anything gets stored)
        game.make_move(
            player=request.player_name,
            from_square=request.from_square,
            to_square=request.to_square,
            promotion=request.promote_to,
        )

        after_move = game.to_model()
        self.repo.update_game(request.game_id, after_move)

        return self._create_game_response(request.game_id, after_move)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """retrieve set of legal moves."""

        game = self._load_game(request.game_id)
        legal_moves = game.legal_moves(request.player_name)
        return LegalMovesResponse(
            game_id=request.game_id,
            player_name=request.player_name,
            color=Color[game.board.to_move.name],
            legal_moves=legal_moves,
        )

    def player_games(self, request: PlayerGamesRequest) -> PlayerGamesResponse:
        """All games the player takes part in (with either color)."""
        game_ids = self.repo.list_games(request.player_name)
        return PlayerGamesResponse(player_name=request.player_name, game_ids=game_ids)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        if self.repo.delete_game(request.game_id) is None:
            raise GameNotFoundError(f"Game with game_id={request.game_id} not found.")

    # -- Internal helpers --
    def _create_game_response(self, game_id: int, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        game = Game.from_model(model, game_id)
        return GameResponse(
            game_id=game_id,
            white_player=game.white_player,
            black_player=game.black_player,
            status=model.status,
            to_move=Color[game.board.to_move.name],
            fullmove_number=game.board.fullmove_number,
            en_passant_square=(
                game.board.en_passant.to_algebraic() if game.board.en_passant else None
            ),
            winner=game.winner,
            move_history=model.moves_uci,
            board=board_lines(game.board),
        )

    def _fetch_game(self, game_id: int) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        return game_model

    def _parse_command(self, payload: dict[str, Any]) -> Any:
        try:
            return CommandEnvelope(command=payload).command
        except ValidationError as error:
            raise InvalidRequestError(
                f"Malformed command ({error.error_count()} validation error(s))."
            ) from error

    def _load_game(self, game_id: int) -> Game:
        return Game.from_model(self._fetch_game(game_id), game_id)
