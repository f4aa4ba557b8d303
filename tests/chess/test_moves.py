"""Unit tests for src/chess/moves.py"""

import pytest

from src.chess.board import Board
from src.chess.moves import (
    SHAPE_RULES,
    Move,
    is_bishop_shape,
    is_king_shape,
    is_knight_shape,
    is_pawn_push_to_promotion_square,
    is_pawn_shape,
    is_queen_shape,
    is_rook_shape,
    squares_between,
)
from src.chess.pieces import Color, PieceType
from src.chess.square import Square


def sq(name: str) -> Square:
    return Square.from_algebraic(name)


def mv(uci: str) -> Move:
    return Move.from_uci(uci)


# --- UCI ---
@pytest.mark.parametrize("uci", ["e2e4", "g1f3", "e7e8q", "a2a1n", "h7h8r", "b7b8b"])
def test_uci_roundtrip(uci: str) -> None:
    assert Move.from_uci(uci).to_uci() == uci


def test_uci_promotion_letter() -> None:
    move = Move.from_uci("e7e8q")
    assert move.from_square == sq("e7")
    assert move.to_square == sq("e8")
    assert move.promote_to == PieceType.QUEEN
    assert Move.from_uci("e2e4").promote_to is None


def test_move_differences() -> None:
    move = mv("b1c3")
    assert move.file_diff == 1
    assert move.rank_diff == 2


# --- PATH HELPERS ---
@pytest.mark.parametrize(
    "from_square, to_square, expected",
    [
        ("a1", "d4", ["b2", "c3"]),
        ("a1", "a5", ["a2", "a3", "a4"]),
        ("h8", "e8", ["g8", "f8"]),
        ("e4", "e5", []),
        ("c3", "d4", []),
    ],
)
def test_squares_between(from_square: str, to_square: str, expected: list[str]) -> None:
    between = squares_between(sq(from_square), sq(to_square))
    assert [square.to_algebraic() for square in between] == expected


# --- PAWNS ---
def test_pawn_pushes_from_start(starting_board: Board) -> None:
    assert is_pawn_shape(mv("e2e3"), starting_board)
    assert is_pawn_shape(mv("e2e4"), starting_board)
    assert not is_pawn_shape(mv("e2e5"), starting_board)
    assert not is_pawn_shape(mv("e2e1"), starting_board)  # backwards
    assert is_pawn_shape(mv("d7d5"), starting_board)
    assert not is_pawn_shape(mv("d7d8"), starting_board)


def test_pawn_double_push_only_from_starting_rank() -> None:
    board = Board.from_pieces({"e3": "P"})
    assert is_pawn_shape(mv("e3e4"), board)
    assert not is_pawn_shape(mv("e3e5"), board)


@pytest.mark.parametrize("blocker", ["e3", "e4"])
def test_pawn_push_blocked(blocker: str) -> None:
    """A pawn cannot jump, and never takes by pushing forward"""
    board = Board.from_pieces({"e2": "P", blocker: "n"})
    assert not is_pawn_shape(mv("e2e4"), board)


def test_pawn_captures_diagonally() -> None:
    board = Board.from_pieces({"e4": "P", "d5": "p", "f5": "P"})
    assert is_pawn_shape(mv("e4d5"), board)
    assert not is_pawn_shape(mv("e4e6"), board)
    # no piece there and no en passant square --> no capture
    assert not is_pawn_shape(Move(sq("d5"), sq("e4")), Board.from_pieces({"d5": "p"}))


def test_pawn_captures_en_passant() -> None:
    board = Board.from_pieces({"e5": "P", "d5": "p"}, en_passant="d6")
    assert is_pawn_shape(mv("e5d6"), board)
    assert not is_pawn_shape(mv("e5f6"), board)


def test_pawn_needs_promotion_choice_on_last_rank() -> None:
    board = Board.from_pieces({"e7": "P", "a2": "p"})
    assert not is_pawn_shape(mv("e7e8"), board)
    assert is_pawn_shape(mv("e7e8q"), board)
    assert is_pawn_shape(mv("e7e8n"), board)
    assert not is_pawn_shape(Move(sq("e7"), sq("e8"), PieceType.KING), board)
    assert not is_pawn_shape(Move(sq("e7"), sq("e8"), PieceType.PAWN), board)
    # black promotes on the first rank
    assert is_pawn_shape(mv("a2a1r"), board)
    assert not is_pawn_shape(mv("a2a1"), board)


def test_promotion_square_detection() -> None:
    board = Board.from_pieces({"e7": "P", "b7": "p", "g7": "R"})
    assert is_pawn_push_to_promotion_square(mv("e7e8"), board)
    assert not is_pawn_push_to_promotion_square(mv("b7b5"), board)
    assert not is_pawn_push_to_promotion_square(mv("g7g8"), board)  # not a pawn
    assert not is_pawn_push_to_promotion_square(mv("c3c4"), board)  # empty square


# --- OTHER PIECES ---
@pytest.mark.parametrize("target", ["b3", "c2", "e2", "f3", "f5", "e6", "c6", "b5"])
def test_knight_shape(target: str) -> None:
    board = Board.from_pieces({"d4": "N"})
    assert is_knight_shape(Move(sq("d4"), sq(target)), board)


@pytest.mark.parametrize("target", ["d5", "e5", "d6", "f6", "h8"])
def test_not_knight_shape(target: str) -> None:
    board = Board.from_pieces({"d4": "N"})
    assert not is_knight_shape(Move(sq("d4"), sq(target)), board)


def test_knight_jumps_over_pieces(starting_board: Board) -> None:
    assert is_knight_shape(mv("g1f3"), starting_board)


def test_bishop_shape() -> None:
    board = Board.from_pieces({"c1": "B", "e3": "p"})
    assert is_bishop_shape(mv("c1e3"), board)  # up to the blocking piece
    assert not is_bishop_shape(mv("c1f4"), board)  # beyond it
    assert is_bishop_shape(mv("c1a3"), board)
    assert not is_bishop_shape(mv("c1c3"), board)


def test_rook_shape() -> None:
    board = Board.from_pieces({"a1": "R", "a4": "P"})
    assert is_rook_shape(mv("a1h1"), board)
    assert is_rook_shape(mv("a1a3"), board)
    assert not is_rook_shape(mv("a1a5"), board)
    assert not is_rook_shape(mv("a1b2"), board)


def test_queen_shape() -> None:
    board = Board.from_pieces({"d1": "Q"})
    assert is_queen_shape(mv("d1d8"), board)
    assert is_queen_shape(mv("d1h5"), board)
    assert is_queen_shape(mv("d1a1"), board)
    assert not is_queen_shape(mv("d1e3"), board)


def test_king_shape() -> None:
    board = Board.from_pieces({"e1": "K"})
    assert is_king_shape(mv("e1e2"), board)
    assert is_king_shape(mv("e1f2"), board)
    assert not is_king_shape(mv("e1g1"), board)  # castling is not a shape rule
    assert not is_king_shape(mv("e1e3"), board)


def test_every_piece_type_has_a_shape_rule() -> None:
    assert set(SHAPE_RULES) == set(PieceType)
    assert Color.WHITE.pawn_direction == -Color.BLACK.pawn_direction
