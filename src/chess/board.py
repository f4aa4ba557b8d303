"""
The Game board implements all rules that effect the `position` (in chess: the configuration of pieces on the board)

Besides the pieces, the board tracks everything else a move depends on:
the side to move, castling rights, the en passant square, and the two move counters.
"""

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Self

from src.chess.castling import (
    CASTLING_RULES,
    CastlingRights,
    castling_direction_for,
    castling_direction_of_rook,
)
from src.chess.moves import SHAPE_RULES, Move, is_pawn_push_to_promotion_square
from src.chess.pieces import (
    MINOR_PIECES,
    PROMOTION_OPTIONS,
    Color,
    Piece,
    PieceType,
)
from src.chess.square import ALL_SQUARES, Square
from src.core.exceptions import BoardCorruptedError

BACK_RANK_ORDER: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

# Material that can always still force a mate
MATING_MATERIAL: frozenset[PieceType] = frozenset(
    {PieceType.PAWN, PieceType.ROOK, PieceType.QUEEN}
)


@dataclass
class Board:
    position: dict[Square, Piece] = field(default_factory=dict)
    to_move: Color = Color.WHITE
    castling_rights: CastlingRights = field(default_factory=CastlingRights)
    en_passant: Optional[Square] = None
    halfmove_clock: int = 0
    fullmove_number: int = 1

    # --- CREATION ---
    @classmethod
    def starting_position(cls) -> Self:
        """Standard setup: white on ranks 1-2, black on ranks 7-8, all castling rights available, white to move."""
        board = cls()
        for color in Color:
            pawn_rank = color.pawn_start_rank
            for file, piece_type in enumerate(BACK_RANK_ORDER):
                board.place_piece(Piece(piece_type, color), Square(file, color.home_rank))
                board.place_piece(Piece(PieceType.PAWN, color), Square(file, pawn_rank))
        return board

    @classmethod
    def empty(cls) -> Self:
        """A board without pieces. Nobody can castle on it."""
        return cls(castling_rights=CastlingRights.from_code("-"))

    @classmethod
    def from_pieces(
        cls,
        pieces: dict[str, str],
        to_move: Color = Color.WHITE,
        castling: str = "-",
        en_passant: Optional[str] = None,
    ) -> Self:
        """
        Convenience method to set up a specific position.

        ex) Board.from_pieces({"e1": "K", "a7": "Q", "a8": "k"}, to_move=Color.BLACK)
        (upper case: white pieces, lower case: black pieces)
        """
        board = cls(
            position={
                Square.from_algebraic(square): Piece.from_letter(letter)
                for square, letter in pieces.items()
            },
            to_move=to_move,
            castling_rights=CastlingRights.from_code(castling),
            en_passant=Square.from_algebraic(en_passant) if en_passant else None,
        )
        return board

    # --- SERIALISATION ---
    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible snapshot of the full board state (used for persistence)."""
        return {
            "pieces": {
                square.to_algebraic(): piece.to_letter()
                for square, piece in sorted(
                    self.position.items(), key=lambda item: (item[0].rank, item[0].file)
                )
            },
            "to_move": self.to_move.name.lower(),
            "castling": self.castling_rights.to_code(),
            "en_passant": self.en_passant.to_algebraic() if self.en_passant else None,
            "halfmove_clock": self.halfmove_clock,
            "fullmove_number": self.fullmove_number,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        board = cls.from_pieces(
            data["pieces"],
            to_move=Color[data["to_move"].upper()],
            castling=data["castling"],
            en_passant=data["en_passant"],
        )
        board.halfmove_clock = data["halfmove_clock"]
        board.fullmove_number = data["fullmove_number"]
        return board

    # --- POSITION ACCESS ---
    def piece(self, square: Square) -> Optional[Piece]:
        return self.position.get(square)

    def place_piece(self, piece: Piece, square: Square) -> None:
        self.position[square] = piece

    def remove_piece(self, square: Square) -> Optional[Piece]:
        return self.position.pop(square, None)

    def pieces_of(self, color: Color) -> list[Square]:
        """Squares occupied by the given color, a1 first, h8 last."""
        occupied = {
            square for square, piece in self.position.items() if piece.color == color
        }
        return [square for square in ALL_SQUARES if square in occupied]

    def find_king(self, color: Color) -> Optional[Square]:
        king = Piece(PieceType.KING, color)
        return next(
            (square for square, piece in self.position.items() if piece == king), None
        )

    # --- MOVE LEGALITY ---
    def is_valid_move(self, move: Move) -> bool:
        """
        Full legality check for the side to move
        ----

        1. There must be a piece of the side to move on the starting square.
        2. Castling (a two-file king move from its starting square) follows its own rules.
        3. Otherwise: the target may not hold a piece of your own, and the move must fit the shape rule of the piece.
        4. The move may not leave (or put) your own king in check.
        """
        piece = self.piece(move.from_square)
        if piece is None or piece.color != self.to_move:
            return False

        if self._is_castling_move(move, piece):
            if not self._is_valid_castling(move, piece.color):
                return False
        elif not self._is_valid_move_basic(move, piece.color):
            return False

        return not self._leaves_king_in_check(move)

    def _is_valid_move_basic(self, move: Move, mover: Color) -> bool:
        """
        Non-recursive legality probe: ownership + destination + shape rule.

        Does not look at castling or at the safety of your own king. Check detection is built on top of this one,
        so it can never call back into is_valid_move().
        """
        piece = self.piece(move.from_square)
        if piece is None or piece.color != mover:
            return False

        target = self.piece(move.to_square)
        if target is not None and target.color == mover:
            return False

        shape_rule = SHAPE_RULES[piece.type]
        return shape_rule(move, self)

    def _leaves_king_in_check(self, move: Move) -> bool:
        """
        Return True if the move puts you in check

        plan:
        1. Copy the board
        2. make the candidate move
        3. determine if king is in check on the new board
        """
        mover = self.to_move
        board = deepcopy(self)
        board._apply_move(move)
        return board.is_in_check(mover)

    # -- CASTLING RULE HELPERS ---
    def _is_castling_move(self, move: Move, piece: Piece) -> bool:
        return (
            piece.type == PieceType.KING
            and move.rank_diff == 0
            and abs(move.file_diff) == 2
        )

    def _is_valid_castling(self, move: Move, color: Color) -> bool:
        """
        **you are allowed to castle if**

        * Castling rights in that direction are not yet revoked (and the rook is still on its square).
        * All squares between the king and the rook are empty.
        * You are not currently in check (you cannot castle out of a check).
        * The square the king passes over is not under attack.
        * The square the king lands on is not under attack.
        """
        direction = castling_direction_for(color, king_side=move.file_diff > 0)
        squares = CASTLING_RULES[direction]
        if move.from_square != squares.king_from or move.to_square != squares.king_to:
            return False

        if not self.castling_rights.allows(direction):
            return False

        if self.piece(squares.rook_from) != Piece(PieceType.ROOK, color):
            return False

        if any(self.piece(square) is not None for square in squares.path):
            return False

        if self.is_in_check(color):
            return False

        if self._is_king_attacked_on(squares.king_transit, squares.king_from, color):
            return False

        return not self._is_king_attacked_on(squares.king_to, squares.king_from, color)

    def _is_king_attacked_on(self, square: Square, king_square: Square, color: Color) -> bool:
        """Pretend the king already stands on the given square (on a scratch board) and look for a check there."""
        board = deepcopy(self)
        king = board.remove_piece(king_square)
        assert king is not None
        board.place_piece(king, square)
        return board.is_in_check(color)

    # --- MAKING MOVES ---
    def make_move(self, move: Move) -> bool:
        """
        Attempt to make a move
        -----

        Nothing changes when the move is not valid (returns False).
        Otherwise the full board state is updated (see _apply_move) and True is returned.
        """
        if not self.is_valid_move(move):
            return False
        self._apply_move(move)
        return True

    def _apply_move(self, move: Move) -> None:
        """
        Update the board with a move already known to be valid
        -----

        1. update the half move clock (reset on pawn moves and captures)
        2. en passant: remove the pawn that gets taken
        3. castling: also move the rook
        4. revoke castling rights if needed
        5. move the piece (promoted, if the pawn reaches the final rank)
        6. set the en passant square for the next turn
        7. pass the turn (and count full moves after black moved)
        """
        piece = self.position[move.from_square]
        captured = self.piece(move.to_square)

        if piece.type == PieceType.PAWN or captured is not None:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1

        if piece.type == PieceType.PAWN and move.to_square == self.en_passant:
            # The pawn taken stands right behind the en passant square (seen from the capturing side).
            taken_square = Square(
                self.en_passant.file, self.en_passant.rank - piece.color.pawn_direction
            )
            self.remove_piece(taken_square)
            self.halfmove_clock = 0

        if piece.type == PieceType.KING:
            if abs(move.file_diff) == 2:
                self._move_castling_rook(piece.color, king_side=move.file_diff > 0)
            self.castling_rights.revoke_all(piece.color)

        self._revoke_castling_rights_if_needed(move, piece, captured)

        landing_piece = piece
        if move.promote_to is not None and is_pawn_push_to_promotion_square(move, self):
            landing_piece = piece.promoted_to(move.promote_to)

        del self.position[move.from_square]
        self.position[move.to_square] = landing_piece

        self.en_passant = None
        if piece.type == PieceType.PAWN and abs(move.rank_diff) == 2:
            self.en_passant = Square(
                move.from_square.file, move.from_square.rank + piece.color.pawn_direction
            )

        self.to_move = self.to_move.opposite
        if self.to_move == Color.WHITE:
            self.fullmove_number += 1

    def _move_castling_rook(self, color: Color, king_side: bool) -> None:
        squares = CASTLING_RULES[castling_direction_for(color, king_side)]
        rook = self.remove_piece(squares.rook_from)
        assert rook is not None
        self.place_piece(rook, squares.rook_to)

    def _revoke_castling_rights_if_needed(
        self, move: Move, piece: Piece, captured: Optional[Piece]
    ) -> None:
        """
        1. If you are moving your rook away from its starting square --> revoke that direction
        2. If you are taking your opponent's rook on its starting square --> revoke that direction for your opponent

        (Moving the king revokes both directions, handled together with the castling move itself)
        """
        if piece.type == PieceType.ROOK:
            direction = castling_direction_of_rook(move.from_square)
            if direction is not None and direction.color == piece.color:
                self.castling_rights.revoke(direction)

        if captured is not None and captured.type == PieceType.ROOK:
            direction = castling_direction_of_rook(move.to_square)
            if direction is not None and direction.color == captured.color:
                self.castling_rights.revoke(direction)

    # --- CHECK DETECTION ---
    def is_in_check(self, color: Color) -> bool:
        king_square = self.find_king(color)
        if king_square is None:
            raise BoardCorruptedError(f"No {color.name.lower()} king on the board.")
        return self.is_square_attacked(king_square, color.opposite)

    def is_square_attacked(self, square: Square, by_color: Color) -> bool:
        """
        Could any piece of `by_color` capture on the (occupied) square?

        Uses the basic probe with `by_color` as the moving side.
        NOTE: The probe carries a promotion choice, so a pawn capturing on the final rank counts as an attack too.
        """
        return any(
            self._is_valid_move_basic(
                Move(from_square, square, promote_to=PieceType.QUEEN), by_color
            )
            for from_square in self.pieces_of(by_color)
        )

    # --- CHECKS FOR ENDING THE GAME ---
    def legal_moves(self, color: Color) -> list[Move]:
        """All legal moves for the given color. A pawn move to the final rank shows up once per promotion choice."""
        return list(self._iter_legal_moves(color))

    def has_legal_moves(self, color: Color) -> bool:
        return next(self._iter_legal_moves(color), None) is not None

    def _iter_legal_moves(self, color: Color) -> Iterator[Move]:
        """Try every (from, to) pair for the pieces of this color. Stops as soon as the caller stops asking."""
        board = self if color == self.to_move else self._with_side_to_move(color)
        for from_square in board.pieces_of(color):
            for to_square in ALL_SQUARES:
                move = Move(from_square, to_square)
                if is_pawn_push_to_promotion_square(move, board):
                    candidates = [
                        Move(from_square, to_square, piece_type)
                        for piece_type in PROMOTION_OPTIONS
                    ]
                else:
                    candidates = [move]
                for candidate in candidates:
                    if board.is_valid_move(candidate):
                        yield candidate

    def _with_side_to_move(self, color: Color) -> Self:
        """Scratch copy where it is the given color's turn (the en passant square only ever belongs to the side to move)"""
        board = deepcopy(self)
        board.to_move = color
        board.en_passant = None
        return board

    def is_checkmate(self) -> bool:
        return self.is_in_check(self.to_move) and not self.has_legal_moves(self.to_move)

    def is_stalemate(self) -> bool:
        return not self.is_in_check(self.to_move) and not self.has_legal_moves(
            self.to_move
        )

    def is_insufficient_material(self) -> bool:
        """
        Neither side can force a mate anymore
        ----

        * No pawns, rooks, or queens left on the board.
        * Each side has, next to the king, at most a single minor piece (knight or bishop) or two knights.
        """
        if any(piece.type in MATING_MATERIAL for piece in self.position.values()):
            return False
        return all(self._has_insufficient_material(color) for color in Color)

    def _has_insufficient_material(self, color: Color) -> bool:
        pieces = [
            piece.type
            for piece in self.position.values()
            if piece.color == color and piece.type != PieceType.KING
        ]
        if len(pieces) <= 1:
            return all(piece_type in MINOR_PIECES for piece_type in pieces)
        if len(pieces) == 2:
            return all(piece_type == PieceType.KNIGHT for piece_type in pieces)
        return False

