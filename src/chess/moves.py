"""
Geometry/Base movement rules

Key idea: Use strategy pattern to define the shape of a legal move for each piece type.

A shape rule only answers "could this piece travel from A to B on the current board?".
Ownership, castling and the self-check filter are applied later by the Board.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Self

from src.chess.pieces import (
    LETTER_TO_PIECE,
    PIECE_TO_LETTER,
    PROMOTION_OPTIONS,
    Piece,
    PieceType,
)
from src.chess.square import Square


class Board(Protocol):
    """Just the parts the movement strategies need"""

    en_passant: Optional[Square]

    def piece(self, square: Square) -> Optional[Piece]: ...


Vector = tuple[int, int]


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square
    promote_to: Optional[PieceType] = None

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Universal Chess Interface style move string: <from><to>[promotion letter]

        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "e7e8q" : (pawn) moves from e7 to e8 and promotes to a queen (the q)
        """
        from_sq = Square.from_algebraic(uci[:2])
        to_sq = Square.from_algebraic(uci[2:4])
        promote_to = LETTER_TO_PIECE[uci[4].lower()] if len(uci) == 5 else None
        return cls(from_sq, to_sq, promote_to)

    def to_uci(self) -> str:
        """Convert into UCI notation"""
        piece_char = PIECE_TO_LETTER[self.promote_to] if self.promote_to else ""
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}{piece_char}"

    @property
    def file_diff(self) -> int:
        return self.to_square.file - self.from_square.file

    @property
    def rank_diff(self) -> int:
        return self.to_square.rank - self.from_square.rank


# --- PATH HELPERS ---
def unit_step(move: Move) -> Vector:
    """Direction of travel, one square at the time. Only meaningful for straight or diagonal moves."""
    df, dr = move.file_diff, move.rank_diff
    return (df > 0) - (df < 0), (dr > 0) - (dr < 0)


def squares_between(from_square: Square, to_square: Square) -> list[Square]:
    """
    Find the squares strictly in between two squares on the same rank, file or diagonal.

    (empty list when the squares are adjacent)
    """
    df, dr = unit_step(Move(from_square, to_square))
    squares_found: list[Square] = []
    square = from_square.offset(df, dr)
    while square is not None and square != to_square:
        squares_found.append(square)
        square = square.offset(df, dr)
    return squares_found


def is_path_clear(move: Move, board: Board) -> bool:
    """Sliding pieces need every square between start and target to be empty"""
    return all(
        board.piece(square) is None
        for square in squares_between(move.from_square, move.to_square)
    )


def is_straight(move: Move) -> bool:
    return (move.file_diff == 0) != (move.rank_diff == 0)


def is_diagonal(move: Move) -> bool:
    return move.file_diff != 0 and abs(move.file_diff) == abs(move.rank_diff)


# --- SHAPE RULES ---
def is_pawn_shape(move: Move, board: Board) -> bool:
    """
    A pawn:
    - moves by a single square forward onto an empty square.
    - It can move by two in their first move (so when on their starting rank), if both squares are empty
    - takes diagonally (one square forward), or on the en passant square

    Reaching the final rank requires a choice of piece to promote into.
    NOTE: A promotion choice on any other move is accepted here, and ignored when the move is made.
    """
    pawn = board.piece(move.from_square)
    assert pawn is not None
    color = pawn.color
    direction = color.pawn_direction

    if (
        move.to_square.rank == color.promotion_rank
        and move.promote_to not in PROMOTION_OPTIONS
    ):
        return False

    target = board.piece(move.to_square)

    # Pawn pushes
    if move.file_diff == 0:
        if move.rank_diff == direction:
            return target is None
        if move.rank_diff == 2 * direction and move.from_square.rank == color.pawn_start_rank:
            skipped = move.from_square.offset(0, direction)
            return target is None and board.piece(skipped) is None
        return False

    # pawns take diagonally
    if abs(move.file_diff) == 1 and move.rank_diff == direction:
        if target is not None:
            return target.color != color
        return move.to_square == board.en_passant

    return False


def is_knight_shape(move: Move, board: Board) -> bool:
    """Knights always move such that |delta_rank| + |delta_file| = 3 (and neither is zero)"""
    return {abs(move.file_diff), abs(move.rank_diff)} == {1, 2}


def is_bishop_shape(move: Move, board: Board) -> bool:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    return is_diagonal(move) and is_path_clear(move, board)


def is_rook_shape(move: Move, board: Board) -> bool:
    """Rooks move either horizontally or vertically"""
    return is_straight(move) and is_path_clear(move, board)


def is_queen_shape(move: Move, board: Board) -> bool:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return is_rook_shape(move, board) or is_bishop_shape(move, board)


def is_king_shape(move: Move, board: Board) -> bool:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special king move (handled separately by the Board).
    """
    return max(abs(move.file_diff), abs(move.rank_diff)) == 1


# -- STRATEGY PATTERN: SHAPE RULES ---
ShapeRuleFn = Callable[[Move, Board], bool]
SHAPE_RULES: dict[PieceType, ShapeRuleFn] = {
    PieceType.PAWN: is_pawn_shape,
    PieceType.KNIGHT: is_knight_shape,
    PieceType.BISHOP: is_bishop_shape,
    PieceType.ROOK: is_rook_shape,
    PieceType.QUEEN: is_queen_shape,
    PieceType.KING: is_king_shape,
}


# -- PAWN PROMOTION MOVES --
def is_pawn_push_to_promotion_square(move: Move, board: Board) -> bool:
    """check if the move is a pawn move that reaches the final rank for its color"""
    moving_piece = board.piece(move.from_square)
    if moving_piece is None or moving_piece.type != PieceType.PAWN:
        return False
    return move.to_square.rank == moving_piece.color.promotion_rank
