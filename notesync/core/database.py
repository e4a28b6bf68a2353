"""
Database Configuration.

SQLAlchemy engine and session management for the local SQLite store.
Uses lazy initialization so importing the package never touches the disk.
"""

from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from notesync.core.logging import get_logger
from notesync.models import store as _store_models  # noqa: F401  registers tables
from notesync.models.base import Base

logger = get_logger(__name__)

# Module-level state for lazy initialization
_engine: Any = None
_session_factory: sessionmaker[Session] | None = None


def _create_engine() -> Any:
    """Create the SQLAlchemy engine and make sure the tables exist."""
    from notesync.core.config import get_app_config, get_storage_url, resolve_path

    storage = get_app_config().storage
    resolve_path(storage.path).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(get_storage_url(), echo=storage.echo)
    Base.metadata.create_all(engine)
    logger.debug("Database engine created", extra={"path": storage.path})
    return engine


def get_engine() -> Any:
    """
    Get the database engine, creating it on first use.

    Returns:
        SQLAlchemy engine instance
    """
    global _engine
    if _engine is None:
        _engine = _create_engine()
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    """
    Get the session factory, creating it on first use.

    Returns:
        SQLAlchemy session factory
    """
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(
            get_engine(),
            expire_on_commit=False,
        )
    return _session_factory


def close_database() -> None:
    """Dispose of the engine and forget the session factory."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
        logger.debug("Database engine disposed")
    _engine = None
    _session_factory = None
