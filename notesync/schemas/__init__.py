"""
Pydantic schemas.

Domain records shared by the codecs, services and clients.
"""

from notesync.schemas.note import EditMode, Note, Notebook, NoteFilter, NoteOrder

__all__ = [
    "EditMode",
    "Note",
    "Notebook",
    "NoteFilter",
    "NoteOrder",
]
