"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of the board game -->
passes this information to the service layer, which can then pass it onwards to the API layer.

The rules of chess themselves live in the Board. The Game adds the players, whose turn it is, and the game status.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Self

from src.chess.board import Board
from src.chess.moves import Move
from src.chess.pieces import Color, parse_promotion
from src.chess.square import Square
from src.core import shared_types
from src.core.exceptions import (
    AlreadyTwoPlayersError,
    CannotJoinOwnGameError,
    GameNotInProgressError,
    GameStateError,
    IllegalMoveError,
    NotYourTurnError,
)
from src.core.models import GameModel

logger = logging.getLogger(__name__)


class Status(Enum):
    WAITING_FOR_PLAYER = auto()
    IN_PROGRESS = auto()
    WHITE_WINS = auto()
    BLACK_WINS = auto()
    DRAW = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (Status.WHITE_WINS, Status.BLACK_WINS, Status.DRAW)


WIN_FOR: dict[Color, Status] = {
    Color.WHITE: Status.WHITE_WINS,
    Color.BLACK: Status.BLACK_WINS,
}


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    game_id: Optional[int]
    white_player: Optional[str]
    black_player: Optional[str]
    board: Board
    status: Status
    moves: list[Move] = field(default_factory=list)

    @classmethod
    def new_game(cls, creator: str, game_id: Optional[int] = None) -> Self:
        """The player starting the game plays the white pieces. The game waits for an opponent to join."""
        return cls(
            game_id=game_id,
            white_player=creator,
            black_player=None,
            board=Board.starting_position(),
            status=Status.WAITING_FOR_PLAYER,
        )

    @classmethod
    def from_model(cls, model: GameModel, game_id: Optional[int] = None) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        try:
            status_name = shared_types.Status(model.status).name
        except ValueError:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join(shared_types.Status)}"
            ) from None

        return cls(
            game_id=game_id,
            white_player=model.white_player,
            black_player=model.black_player,
            board=Board.from_dict(model.board),
            status=Status[status_name],
            moves=[Move.from_uci(uci) for uci in model.moves_uci],
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            white_player=self.white_player,
            black_player=self.black_player,
            status=shared_types.Status[self.status.name],
            board=self.board.to_dict(),
            moves_uci=[move.to_uci() for move in self.moves],
        )

    @property
    def players(self) -> dict[Color, str]:
        """The registered players, by the color of their pieces"""
        registered = {Color.WHITE: self.white_player, Color.BLACK: self.black_player}
        return {color: name for color, name in registered.items() if name is not None}

    @property
    def winner(self) -> Optional[str]:
        """The player who won the game (None while playing, and after a draw)"""
        if self.status == Status.WHITE_WINS:
            return self.white_player
        if self.status == Status.BLACK_WINS:
            return self.black_player
        return None

    def join_game(self, player: str) -> None:
        """Registering the 2nd player to an open game. They get the black pieces."""
        if self.black_player is not None:
            raise AlreadyTwoPlayersError("Game already has two players.")

        if player == self.white_player:
            raise CannotJoinOwnGameError("Cannot join your own game.")

        self.black_player = player
        self._change_status(Status.IN_PROGRESS)

    def make_move(
        self,
        player: str,
        from_square: str,
        to_square: str,
        promotion: Optional[str] = None,
    ) -> None:
        """
        Attempt to make a move
        -----

        1. make sure it is your turn
        2. make sure the game is (still) in progress
        3. parse the squares and the promotion choice
        4. let the board make the move (it refuses illegal ones)
        5. update the list of moves
        6. update game status (if needed)
        """
        mover = self.board.to_move
        self._assert_your_turn(player)
        self._assert_in_progress()

        move = Move(
            from_square=Square.from_algebraic(from_square),
            to_square=Square.from_algebraic(to_square),
            promote_to=parse_promotion(promotion),
        )

        if not self.board.make_move(move):
            raise IllegalMoveError(f"Move not allowed: {from_square} -> {to_square}")

        self.moves.append(move)
        logger.info(
            "Game %s: move made by %s: %s -> %s", self.game_id, player, from_square, to_square
        )

        self._update_game_status(mover)

    def legal_moves(self, player: str) -> list[str]:
        """
        Service will request the set of legal moves.
        ----

        These can be used to display to the user (UCI notation, e.g. 'e2e4', 'e7e8q').
        Checks turn and status in the same order as make_move().
        """
        self._assert_your_turn(player)
        self._assert_in_progress()
        return [move.to_uci() for move in self.board.legal_moves(self.board.to_move)]

    # -- PRIVATE HELPERS ---
    def _assert_your_turn(self, player: str) -> None:
        """You must wait for your turn before calculating legal moves / making a move."""
        player_to_move = self.players.get(self.board.to_move)
        if player != player_to_move:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for {self.board.to_move.name.lower()} to make a move first."
            )

    def _assert_in_progress(self) -> None:
        if self.status != Status.IN_PROGRESS:
            raise GameNotInProgressError(
                f"Game is not in progress. status: {self.status.name.lower()}"
            )

    def _update_game_status(self, mover: Color) -> None:
        """
        Performs checks to see if game has ended and changes status accordingly.

        NOTE the board has already passed the turn. At this point the side to move is the opponent of the mover.
        """
        if self.board.is_checkmate():
            self._change_status(WIN_FOR[mover])
        elif self.board.is_stalemate() or self.board.is_insufficient_material():
            self._change_status(Status.DRAW)

        if self.status.is_terminal:
            logger.info("Game %s ended: %s", self.game_id, self.status.name.lower())

    def _change_status(self, new_status: Status) -> None:
        self.status = new_status
