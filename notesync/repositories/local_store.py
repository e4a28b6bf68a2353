"""
Local Store Repository.

Persists the last search results and the recovery point in the local
SQLite database.
"""

from collections.abc import Callable
from typing import Any, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from notesync.core.exceptions import DatabaseError
from notesync.core.logging import get_logger, log_with_source
from notesync.models.store import RecoveryPoint, SavedSearchEntry
from notesync.schemas.note import Note

logger = get_logger(__name__)

T = TypeVar("T")

_RECOVERY_POINT_ID = 1


class LocalStore:
    """
    Repository for locally persisted notes.

    Usage:
        store = LocalStore(get_session_factory())
        store.save_search(notes)
        third = store.get_search()[2]
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def _run(self, operation: str, work: Callable[[Session], T]) -> T:
        """
        Run work inside a transaction.

        Raises:
            DatabaseError: If SQLAlchemy reports an error
        """
        try:
            with self._session_factory() as session, session.begin():
                return work(session)
        except SQLAlchemyError as e:
            log_with_source(logger, "storage", "error", "Database error", operation=operation, error=str(e))
            raise DatabaseError(f"Database operation failed: {operation}") from e

    def save_search(self, notes: list[Note]) -> None:
        """Replace the saved search with the given notes, keeping their order."""

        def work(session: Session) -> None:
            session.execute(delete(SavedSearchEntry))
            for position, note in enumerate(notes, start=1):
                session.add(SavedSearchEntry(position=position, note=_dump(note)))

        self._run("save_search", work)
        logger.debug("Saved search stored", extra={"count": len(notes)})

    def get_search(self) -> list[Note]:
        """Return the saved search in listing order."""

        def work(session: Session) -> list[Note]:
            rows = session.scalars(
                select(SavedSearchEntry).order_by(SavedSearchEntry.position)
            ).all()
            return [Note.model_validate(row.note) for row in rows]

        return self._run("get_search", work)

    def save_recovery_point(self, note: Note) -> None:
        """Store a note so a later recovery session can reopen it."""

        def work(session: Session) -> None:
            row = session.get(RecoveryPoint, _RECOVERY_POINT_ID)
            if row is None:
                session.add(RecoveryPoint(id=_RECOVERY_POINT_ID, note=_dump(note)))
            else:
                row.note = _dump(note)

        self._run("save_recovery_point", work)
        logger.info("Recovery point stored", extra={"guid": note.guid, "title": note.title})

    def get_recovery_point(self) -> Note | None:
        """Return the recovery point note, or None if there is none."""

        def work(session: Session) -> Note | None:
            row = session.get(RecoveryPoint, _RECOVERY_POINT_ID)
            if row is None:
                return None
            return Note.model_validate(row.note)

        return self._run("get_recovery_point", work)


def _dump(note: Note) -> dict[str, Any]:
    return note.model_dump(mode="json")
