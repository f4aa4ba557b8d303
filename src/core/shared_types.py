"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    WAITING_FOR_PLAYER = "waiting for player"
    IN_PROGRESS = "in progress"
    WHITE_WINS = "white wins"
    BLACK_WINS = "black wins"
    DRAW = "draw"


# --- NOTE The domain layer has its own Color / Status enums (src/chess). These are the spellings used at the boundary.


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"
