"""
Human-readable rendering of the board.

Purely observational: the board is written line by line into whatever sink the caller supplies
(print, a logger, a list's append method, ...). Nothing here affects the game.
"""

from typing import Callable

from src.chess.board import Board
from src.chess.square import BOARD_DIMENSIONS, FILE_NAMES, Square

EMPTY_SQUARE_GLYPH = "·"
FILE_HEADER = "  " + " ".join(FILE_NAMES)

LineSink = Callable[[str], object]


def board_lines(board: Board) -> list[str]:
    """The 8th rank on top (as seen from white's side), with the file letters as header and an empty line to close."""
    lines = [FILE_HEADER]
    for rank in range(BOARD_DIMENSIONS[1] - 1, -1, -1):
        glyphs = []
        for file in range(BOARD_DIMENSIONS[0]):
            piece = board.piece(Square(file, rank))
            glyphs.append(piece.glyph if piece is not None else EMPTY_SQUARE_GLYPH)
        lines.append(f"{rank + 1} {' '.join(glyphs)}")
    lines.append("")
    return lines


def render_board(board: Board, sink: LineSink) -> None:
    """One call to the sink per line."""
    for line in board_lines(board):
        sink(line)
