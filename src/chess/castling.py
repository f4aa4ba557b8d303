"""Helpers for implementing Castling rules. Need to be imported by multiple sources"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Self

from src.chess.pieces import Color
from src.chess.square import Square


class CastlingDirection(Enum):
    """The four castling directions. Values are the usual one-letter codes (also used when storing the rights)."""

    WHITE_KING_SIDE = "K"
    WHITE_QUEEN_SIDE = "Q"
    BLACK_KING_SIDE = "k"
    BLACK_QUEEN_SIDE = "q"

    @property
    def color(self) -> Color:
        return Color.WHITE if self.value.isupper() else Color.BLACK

    @property
    def is_king_side(self) -> bool:
        return self.value.lower() == "k"


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling.
    NOTE: If castling rights have not been revoked, the king is still on its starting square.
    """

    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square

    @classmethod
    def from_algebraic(cls, k_from: str, k_to: str, r_from: str, r_to: str) -> Self:
        """Convenience method: to make mapping shown below (from CastlingDirection) more readable"""
        king_from = Square.from_algebraic(k_from)
        king_to = Square.from_algebraic(k_to)
        rook_from = Square.from_algebraic(r_from)
        rook_to = Square.from_algebraic(r_to)
        return cls(king_from, king_to, rook_from, rook_to)

    @property
    def king_transit(self) -> Square:
        """The square the king passes over on its way (always the square the rook lands on)"""
        return self.rook_to

    @property
    def path(self) -> list[Square]:
        """Squares strictly between king and rook. All of them must be empty to castle."""
        step = 1 if self.rook_from.file > self.king_from.file else -1
        return [
            Square(file, self.king_from.rank)
            for file in range(self.king_from.file + step, self.rook_from.file, step)
        ]


# The moves (in classical chess) made when castling
CASTLING_RULES: dict[CastlingDirection, CastlingSquares] = {
    CastlingDirection.WHITE_KING_SIDE: CastlingSquares.from_algebraic(
        "e1", "g1", "h1", "f1"
    ),
    CastlingDirection.WHITE_QUEEN_SIDE: CastlingSquares.from_algebraic(
        "e1", "c1", "a1", "d1"
    ),
    CastlingDirection.BLACK_KING_SIDE: CastlingSquares.from_algebraic(
        "e8", "g8", "h8", "f8"
    ),
    CastlingDirection.BLACK_QUEEN_SIDE: CastlingSquares.from_algebraic(
        "e8", "c8", "a8", "d8"
    ),
}


def castling_direction_for(color: Color, king_side: bool) -> CastlingDirection:
    return next(
        direction
        for direction in CastlingDirection
        if direction.color == color and direction.is_king_side == king_side
    )


def castling_direction_of_rook(square: Square) -> Optional[CastlingDirection]:
    """Which castling direction depends on a rook standing on this square (None for any other square)"""
    return next(
        (
            direction
            for direction, squares in CASTLING_RULES.items()
            if squares.rook_from == square
        ),
        None,
    )


@dataclass
class CastlingRights:
    """
    Rights will be revoked during the game, never granted back.

    In the starting position all four rights are available.
    """

    white_king_side: bool = True
    white_queen_side: bool = True
    black_king_side: bool = True
    black_queen_side: bool = True

    def allows(self, direction: CastlingDirection) -> bool:
        return getattr(self, direction.name.lower())

    def revoke(self, direction: CastlingDirection) -> None:
        setattr(self, direction.name.lower(), False)

    def revoke_all(self, color: Color) -> None:
        for direction in CastlingDirection:
            if direction.color == color:
                self.revoke(direction)

    def to_code(self) -> str:
        """Compact encoding (e.g. 'KQkq', 'Kq' or '-') used when storing the board."""
        return "".join(d.value for d in CastlingDirection if self.allows(d)) or "-"

    @classmethod
    def from_code(cls, code: str) -> Self:
        rights = cls()
        for direction in CastlingDirection:
            if direction.value not in code:
                rights.revoke(direction)
        return rights
