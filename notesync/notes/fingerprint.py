"""
Change Detection.

A fingerprint is a digest over a note's title and the content field the
edit mode works on. Two fingerprints are only ever compared for equality.
Notebook moves do not show up in the fingerprint, so callers compare the
notebook name separately (see has_changes).
"""

import hashlib

from notesync.schemas.note import Note


def fingerprint(note: Note, raw: bool) -> bytes:
    """Digest of title + body (raw) or title + md."""
    hasher = hashlib.md5(usedforsecurity=False)
    hasher.update(note.title.encode("utf-8"))
    if raw:
        hasher.update(note.body.encode("utf-8"))
    else:
        hasher.update(note.md.encode("utf-8"))
    return hasher.digest()


def changed(before: bytes, after: bytes) -> bool:
    return before != after


def has_changes(before: bytes, note: Note, raw: bool, initial_notebook: str) -> bool:
    """
    Decide whether an edited note needs saving.

    Args:
        before: Fingerprint taken before the edit
        note: The note after the edit
        raw: Whether the session edited the raw body
        initial_notebook: Notebook name before the edit

    Returns:
        True if title, content or notebook name changed
    """
    if changed(before, fingerprint(note, raw)):
        return True
    return note.notebook_name != initial_notebook
