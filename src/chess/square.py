"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from src.core.exceptions import InvalidSquareError

# Chess board is always 8x8.
BOARD_DIMENSIONS = (8, 8)
FILE_NAMES = "abcdefgh"
RANK_NAMES = "12345678"


@dataclass(frozen=True)
class Square:
    """
    Zero-based coordinates: file 0-7 maps to a-h, rank 0-7 maps to 1-8.

    Construction validates the bounds, so a Square that exists is always on the board.
    """

    file: int
    rank: int

    def __post_init__(self) -> None:
        if not (0 <= self.file < BOARD_DIMENSIONS[0] and 0 <= self.rank < BOARD_DIMENSIONS[1]):
            raise InvalidSquareError(
                f"Square out of bounds: file={self.file}, rank={self.rank}"
            )

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7)"""
        if not isinstance(sq, str) or len(sq) != 2:
            raise InvalidSquareError(f"Cannot interpret {sq!r} as a square.")

        file_char, rank_char = sq[0], sq[1]
        if file_char not in FILE_NAMES or rank_char not in RANK_NAMES:
            raise InvalidSquareError(f"Cannot interpret {sq!r} as a square.")
        return cls(FILE_NAMES.index(file_char), RANK_NAMES.index(rank_char))

    def to_algebraic(self) -> str:
        return f"{FILE_NAMES[self.file]}{RANK_NAMES[self.rank]}"

    def offset(self, df: int, dr: int) -> Optional[Square]:
        """The square (df, dr) steps away, or None when that falls off the board."""
        file = self.file + df
        rank = self.rank + dr
        if 0 <= file < BOARD_DIMENSIONS[0] and 0 <= rank < BOARD_DIMENSIONS[1]:
            return Square(file, rank)
        return None

    def __str__(self) -> str:
        return self.to_algebraic()


ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(file, rank)
    for rank in range(BOARD_DIMENSIONS[1])
    for file in range(BOARD_DIMENSIONS[0])
)
