"""
Note Service.

Lookup and metadata operations for notes: search, fetch with content,
rename, move and delete. Content edits go through EditSession and
SaveCoordinator.
"""

import re

from notesync.clients.notestore import NoteStoreClient
from notesync.core.exceptions import NotFoundError
from notesync.notes.converter import MarkdownConverter
from notesync.notes.envelope import unwrap
from notesync.repositories.local_store import LocalStore
from notesync.schemas.note import Note, NoteFilter
from notesync.services.base import BaseService
from notesync.services.notebook import NotebookService

DEFAULT_SEARCH_COUNT = 20

_INDEX_RE = re.compile(r"[+-]?[0-9]+")


class NoteService(BaseService):
    """
    Service for note lookups and metadata changes.

    A purely numeric positive title refers to an entry of the last saved
    search: "2" is the second note of the last listing.
    """

    def __init__(
        self,
        note_store: NoteStoreClient,
        local_store: LocalStore,
        notebooks: NotebookService,
        converter: MarkdownConverter,
        search_count: int = DEFAULT_SEARCH_COUNT,
    ) -> None:
        super().__init__(note_store, local_store)
        self.notebooks = notebooks
        self.converter = converter
        self.search_count = search_count

    def find_notes(self, note_filter: NoteFilter, offset: int = 0, count: int = DEFAULT_SEARCH_COUNT) -> list[Note]:
        """
        Search the remote store.

        Args:
            note_filter: Words, notebook guid and sort order
            offset: Number of results to skip
            count: Maximum number of results

        Returns:
            Note metadata, without content
        """
        self._log_debug("Searching notes", words=note_filter.words, offset=offset, count=count)
        return self.note_store.find_notes(note_filter, offset, count)

    def search(self, note_filter: NoteFilter, count: int = DEFAULT_SEARCH_COUNT) -> list[Note]:
        """Search and remember the results as the saved search."""
        notes = self.find_notes(note_filter, 0, count)
        self.local_store.save_search(notes)
        return notes

    def _from_saved_search(self, title: str) -> Note | None:
        if not _INDEX_RE.fullmatch(title):
            return None
        index = int(title)
        if index <= 0:
            return None
        notes = self.local_store.get_search()
        if index <= len(notes):
            return notes[index - 1]
        return None

    def get_note(self, title: str, notebook: str = "") -> Note:
        """
        Get note metadata by title.

        Args:
            title: Note title, or the 1-based index into the saved search
            notebook: Optional notebook name to restrict the search to

        Returns:
            The first note whose title matches exactly

        Raises:
            NotFoundError: If no note matches, or the notebook does not exist
        """
        saved = self._from_saved_search(title)
        if saved is not None:
            self._log_debug("Note taken from saved search", index=title, guid=saved.guid)
            return saved

        note_filter = NoteFilter(words=title)
        if notebook:
            note_filter.notebook_guid = self.notebooks.find_notebook(notebook).guid

        for note in self.find_notes(note_filter, 0, self.search_count):
            if note.title == title:
                return note
        raise NotFoundError("no note found")

    def get_note_with_content(self, title: str, notebook: str = "") -> Note:
        """
        Get a note with its body and markdown rendering filled in.

        Raises:
            NotFoundError: If no note matches
        """
        note = self.get_note(title, notebook)
        content = self.note_store.get_note_content(note.guid)
        note.body = unwrap(content)
        note.md = self.converter.to_markdown(note.body)
        return note

    def change_title(self, old: str, new: str) -> Note:
        """Rename a note. Only metadata is sent; the content is untouched."""
        note = self.get_note(old)
        self._log_operation("Changing note title", guid=note.guid, title=new)
        note.title = new
        self.note_store.update_note(note)
        return note

    def move_note(self, title: str, notebook_name: str) -> Note:
        """
        Move a note to another notebook.

        Raises:
            NotFoundError: If the note or the notebook does not exist
        """
        note = self.get_note(title)
        note.notebook = self.notebooks.find_notebook(notebook_name)
        self._log_operation("Moving note", guid=note.guid, notebook=note.notebook.name)
        self.note_store.update_note(note)
        return note

    def delete_note(self, title: str, notebook: str = "") -> None:
        """Move a note to the trash."""
        note = self.get_note(title, notebook)
        self._log_operation("Deleting note", guid=note.guid, title=note.title)
        self.note_store.delete_note(note.guid)
