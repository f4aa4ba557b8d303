"""
Settings, read once from the environment.

CHESS_DATABASE_URL: SQLAlchemy URL of the game store
CHESS_SQL_ECHO: set to 1/true/yes to log all SQL statements
"""

import os

DEFAULT_DATABASE_URL = "sqlite:///chess.db"

DATABASE_URL: str = os.environ.get("CHESS_DATABASE_URL", DEFAULT_DATABASE_URL)
SQL_ECHO: bool = os.environ.get("CHESS_SQL_ECHO", "").lower() in {"1", "true", "yes"}
