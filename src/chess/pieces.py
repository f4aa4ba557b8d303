"""Defines the types of chess pieces"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Self

from src.core.exceptions import InvalidPromotionError


class PieceType(Enum):
    PAWN = auto()
    ROOK = auto()
    KNIGHT = auto()
    BISHOP = auto()
    QUEEN = auto()
    KING = auto()


class Color(Enum):
    WHITE = auto()
    BLACK = auto()

    @property
    def opposite(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE

    @property
    def pawn_direction(self) -> int:
        """White moves UP the board, black moves DOWN"""
        return 1 if self == Color.WHITE else -1

    @property
    def pawn_start_rank(self) -> int:
        return 1 if self == Color.WHITE else 6

    @property
    def promotion_rank(self) -> int:
        return 7 if self == Color.WHITE else 0

    @property
    def home_rank(self) -> int:
        """Rank the king and rooks start on"""
        return 0 if self == Color.WHITE else 7


LETTER_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_LETTER: dict[PieceType, str] = {
    value: key for key, value in LETTER_TO_PIECE.items()
}

GLYPHS: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.KING): "♔",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.BLACK, PieceType.KING): "♚",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.PAWN): "♟",
}


# Letters a player can send along with a move to pick the piece a pawn promotes into.
PROMOTION_CODES: dict[str, PieceType] = {
    "Q": PieceType.QUEEN,
    "R": PieceType.ROOK,
    "B": PieceType.BISHOP,
    "N": PieceType.KNIGHT,
}

PROMOTION_OPTIONS: list[PieceType] = list(PROMOTION_CODES.values())

MINOR_PIECES: frozenset[PieceType] = frozenset({PieceType.KNIGHT, PieceType.BISHOP})


def parse_promotion(code: Optional[str]) -> Optional[PieceType]:
    """Translate the promotion letter into a PieceType. No letter means no promotion."""
    if code is None:
        return None
    if code not in PROMOTION_CODES:
        raise InvalidPromotionError(
            f"Invalid promotion piece {code!r}. Pick one from {','.join(PROMOTION_CODES)}"
        )
    return PROMOTION_CODES[code]


@dataclass(frozen=True)
class Piece:
    type: PieceType
    color: Color

    @classmethod
    def from_letter(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = LETTER_TO_PIECE[character.lower()]
        return cls(piece_type, color)

    def to_letter(self) -> str:
        return (
            PIECE_TO_LETTER[self.type].upper()
            if self.color == Color.WHITE
            else PIECE_TO_LETTER[self.type]
        )

    @property
    def glyph(self) -> str:
        return GLYPHS[(self.color, self.type)]

    def promoted_to(self, new_type: PieceType) -> Self:
        """Pieces are immutable values, so promotion hands back a new piece of the same color."""
        return type(self)(new_type, self.color)
