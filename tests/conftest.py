"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Local Store:
    Tests use an in-memory SQLite database shared through a StaticPool,
    so every session of one test sees the same tables. Each test gets a
    fresh database.
"""

from collections.abc import Generator
from typing import Any

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from notesync.models.base import Base
from notesync.repositories.local_store import LocalStore
from notesync.schemas.note import Note, Notebook


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def db_engine() -> Generator[Engine, None, None]:
    """Create an in-memory SQLite engine with all tables."""
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session_factory(db_engine: Engine) -> sessionmaker[Session]:
    """Create a session factory bound to the test engine."""
    return sessionmaker(db_engine, expire_on_commit=False)


@pytest.fixture
def local_store(db_session_factory: sessionmaker[Session]) -> LocalStore:
    """LocalStore backed by the in-memory database."""
    return LocalStore(db_session_factory)


# =============================================================================
# Note Fixtures
# =============================================================================


@pytest.fixture
def sample_note() -> Note:
    """An existing note in the Home notebook."""
    return Note(
        guid="note-1",
        title="Groceries",
        body="<div>milk</div>",
        md="milk",
        notebook=Notebook(guid="nb-home", name="Home"),
        created=1_600_000_000_000,
        updated=1_600_000_100_000,
    )


@pytest.fixture
def test_settings() -> dict[str, Any]:
    """Provide test-specific settings."""
    return {
        "notestore_token": "test-token",
        "base_url": "http://notes.test/api/v1",
    }
