"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Any, Optional

# Type aliases to make GameModel easier to read
PlayerName = str
BoardSnapshot = dict[str, Any]


@dataclass
class GameModel:
    """Transport-safe representation of a chess game used between API, Service, DB, and Game layers."""

    white_player: Optional[PlayerName]
    black_player: Optional[PlayerName]
    status: str
    board: BoardSnapshot
    moves_uci: list[str] = field(default_factory=list)
