"""Library database session management."""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from tagdeck.exceptions import LibraryError
from tagdeck.library.models import LibraryBase

log = logging.getLogger(__name__)


def get_library_engine(db_path: Path | None) -> Engine:
    """Create SQLAlchemy engine for the library database.

    Args:
        db_path: Path to the SQLite file, or None for an in-memory database.

    Returns:
        SQLAlchemy engine for the library database.
    """
    if db_path is None:
        return create_engine("sqlite:///:memory:")
    return create_engine(
        f"sqlite:///{db_path}",
        connect_args={
            "timeout": 30,
            "check_same_thread": False,
        },
    )


@contextmanager
def get_library_session(db_path: Path | None) -> Generator[Session, None, None]:
    """Create a session for the library database.

    Auto-creates the database directory and tables on first use. The session
    is committed on normal exit and rolled back if the block raises.

    Args:
        db_path: Path to the SQLite file, or None for an in-memory database.

    Yields:
        SQLAlchemy Session for the library database.

    Raises:
        LibraryError: If the database cannot be opened.
    """
    try:
        if db_path is not None:
            db_path.parent.mkdir(parents=True, exist_ok=True)
        engine = get_library_engine(db_path)
        LibraryBase.metadata.create_all(engine)

        if db_path is not None:
            with engine.connect() as conn:
                conn.execute(text("PRAGMA journal_mode=WAL"))
                conn.commit()
    except (OSError, SQLAlchemyError) as e:
        raise LibraryError(f"Cannot open library database {db_path}: {e}") from e

    log.debug("Opened library database %s", db_path or ":memory:")
    session_factory = sessionmaker(bind=engine)
    session = session_factory()

    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
