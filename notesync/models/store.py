"""
Local Store Models.

Rows for the saved search and the recovery point. Notes are stored as
their JSON dump so the schema does not follow every Note field.
"""

from typing import Any

from sqlalchemy import JSON
from sqlalchemy.orm import Mapped, mapped_column

from notesync.models.base import Base, TimestampMixin


class SavedSearchEntry(TimestampMixin, Base):
    """
    One result of the last note search.

    position is 1-based, matching the numbers shown in the listing.
    """

    __tablename__ = "saved_search"

    position: Mapped[int] = mapped_column(primary_key=True)
    note: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)

    def __repr__(self) -> str:
        return f"<SavedSearchEntry(position={self.position})>"


class RecoveryPoint(TimestampMixin, Base):
    """The note left behind by the last failed save. Only one row is kept."""

    __tablename__ = "recovery_point"

    id: Mapped[int] = mapped_column(primary_key=True)
    note: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)

    def __repr__(self) -> str:
        return f"<RecoveryPoint(guid={self.note.get('guid')!r})>"
