"""
Edit Session.

Drives one round trip of a note through the user's editor:

    fetch -> write cache document -> editor -> parse -> resolve notebook
          -> compare fingerprints -> save (or nothing)

An edit that changes neither title, content nor notebook never reaches
the remote store.
"""

import uuid
from typing import TextIO

from notesync.core.exceptions import NotFoundError, ValidationError
from notesync.core.logging import get_logger
from notesync.editor.cache import CacheDirectory, CacheFile
from notesync.editor.launcher import EditorLauncher
from notesync.notes.document import normalize, parse_note, write_note
from notesync.notes.fingerprint import fingerprint, has_changes
from notesync.schemas.note import EditMode, Note
from notesync.services.note import NoteService
from notesync.services.notebook import NotebookService
from notesync.services.save import SaveCoordinator

logger = get_logger(__name__)

NEW_NOTE_PREFIX = "new_note_"


def cache_filename(note: Note, mode: EditMode) -> str:
    """
    Name of the cache document for a note.

    Existing notes are named after their guid. New notes get a random name
    so two new-note sessions never share a file.
    """
    if note.is_new:
        return f"{NEW_NOTE_PREFIX}{uuid.uuid4()}{mode.extension}"
    return f"{note.guid}{mode.extension}"


class EditSession:
    """
    Orchestrates editing a note in an external editor.

    Usage:
        session = EditSession(notes, notebooks, saver, editor, cache)
        saved = session.edit_note("Groceries", EditMode())
    """

    def __init__(
        self,
        notes: NoteService,
        notebooks: NotebookService,
        saver: SaveCoordinator,
        editor: EditorLauncher,
        cache: CacheDirectory,
        stdin: TextIO | None = None,
    ) -> None:
        self.notes = notes
        self.notebooks = notebooks
        self.saver = saver
        self.editor = editor
        self.cache = cache
        self.stdin = stdin

    def _load(self, title: str, mode: EditMode, notebook: str) -> Note:
        if not mode.recovery_point:
            return self.notes.get_note_with_content(title, notebook)

        note = self.notes.local_store.get_recovery_point()
        if note is None or note.is_new:
            raise NotFoundError("no note found")
        logger.info("Reopening recovery point", extra={"guid": note.guid, "title": note.title})
        return note

    def _resolve_notebook(self, note: Note) -> None:
        if note.notebook is not None and note.notebook.guid:
            note.notebook = self.notebooks.get_notebook(note.notebook.guid)

    def _update_notebook_if_renamed(self, note: Note, initial_notebook: str) -> None:
        if note.notebook is None or note.notebook.name == initial_notebook:
            return
        logger.debug(
            "Notebook changed in header",
            extra={"from": initial_notebook, "to": note.notebook.name},
        )
        note.notebook = self.notebooks.find_notebook(note.notebook.name)

    def _round_trip(self, cache_file: CacheFile, note: Note, mode: EditMode) -> None:
        """Write the note, let the user edit it and read it back."""
        if mode.stdin:
            if self.stdin is None:
                raise ValidationError("No input stream to read the note from")
            content = self.stdin.read()
            note.md = content
            note.body = content

        write_note(cache_file, note, mode)
        # The editor must see a flushed, closed file.
        cache_file.close()

        if not mode.stdin:
            self.editor.edit(cache_file.path)

        cache_file.reopen()
        parse_note(cache_file, note, mode)

    def edit_note(self, title: str, mode: EditMode, notebook: str = "") -> bool:
        """
        Edit an existing note, or the recovery point in recovery mode.

        Args:
            title: Note title or saved search index; ignored in recovery mode
            mode: Edit options
            notebook: Optional notebook name to narrow the lookup

        Returns:
            True if the note was saved, False if nothing changed

        Raises:
            NotFoundError: If the note, a notebook or the recovery point is missing
            EditorError: If the editor fails
            ValidationError: If stdin mode is set without an input stream
            DocumentEncodingError: If the edited document cannot be decoded
            RecoveryPointError: If saving and storing the recovery point both failed
        """
        note = self._load(title, mode, notebook)
        self._resolve_notebook(note)
        normalize(note, mode)
        before = fingerprint(note, mode.raw)
        initial_notebook = note.notebook_name

        with self.cache.new_cache_file(cache_filename(note, mode)) as cache_file:
            self._round_trip(cache_file, note, mode)

        self._update_notebook_if_renamed(note, initial_notebook)

        if not has_changes(before, note, mode.raw, initial_notebook):
            logger.info("Note unchanged, nothing to save", extra={"guid": note.guid})
            return False

        self.saver.save(note, mode)
        return True

    def create_and_edit_new_note(self, note: Note, mode: EditMode) -> Note:
        """
        Open a new note in the editor and create it once the editor exits.

        Returns:
            The created note
        """
        initial_notebook = note.notebook_name

        with self.cache.new_cache_file(cache_filename(note, mode)) as cache_file:
            self._round_trip(cache_file, note, mode)

        self._update_notebook_if_renamed(note, initial_notebook)
        return self.saver.save_new_note(note, mode.raw)
