"""Generate database session"""

from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import DATABASE_URL, SQL_ECHO
from src.db.schema import Base


def create_session_factory(
    url: str = DATABASE_URL, echo: bool = SQL_ECHO
) -> sessionmaker[Session]:
    """Engine + session factory for the given database. Ensures all tables are created."""
    engine = create_engine(url, echo=echo)
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine)


def get_db(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
