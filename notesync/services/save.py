"""
Save Coordinator.

Pushes an edited note to the remote store. A note without a guid is
created, every other note is updated.

When an update fails the note, edits included, is written to the local
recovery point so `note edit --recover` can pick it up again. Create
failures are reported without a recovery point.
"""

from notesync.clients.notestore import NoteStoreClient
from notesync.core.exceptions import RecoveryPointError
from notesync.notes.converter import MarkdownConverter
from notesync.notes.envelope import EMPTY_DOCUMENT, wrap
from notesync.repositories.local_store import LocalStore
from notesync.schemas.note import EditMode, Note
from notesync.services.base import BaseService


class SaveCoordinator(BaseService):
    """Service that writes notes to the remote store."""

    def __init__(
        self,
        note_store: NoteStoreClient,
        local_store: LocalStore,
        converter: MarkdownConverter,
    ) -> None:
        super().__init__(note_store, local_store)
        self.converter = converter

    def save(self, note: Note, mode: EditMode) -> None:
        """
        Create or update a note depending on whether it has a guid.

        Raises:
            RecoveryPointError: If an update and the recovery point both failed
        """
        if note.is_new:
            self.save_new_note(note, mode.raw)
        else:
            self.save_changes(note, mode.raw)

    def _wire_content(self, note: Note, raw: bool) -> str:
        if raw:
            return wrap(note.body)
        return wrap(self.converter.to_wire_markup(note.md))

    def save_changes(self, note: Note, raw: bool) -> None:
        """
        Update an existing note.

        On failure the note is stored as the recovery point and the original
        error is re-raised. If the recovery point cannot be written either,
        a RecoveryPointError carrying both messages is raised instead.
        """
        outgoing = note.model_copy(update={"body": self._wire_content(note, raw)})
        self._log_operation("Updating note", guid=note.guid, title=note.title, raw=raw)

        try:
            self.note_store.update_note(outgoing)
        except Exception as save_error:
            self._logger.warning(
                "Note update failed, storing recovery point",
                extra={"guid": note.guid, "error": str(save_error)},
            )
            try:
                self.local_store.save_recovery_point(note)
            except Exception as recovery_error:
                self._logger.error(
                    "Recovery point could not be stored",
                    extra={"guid": note.guid, "error": str(recovery_error)},
                )
                raise RecoveryPointError(save_error, recovery_error) from save_error
            raise

    def save_new_note(self, note: Note, raw: bool) -> Note:
        """
        Create a note on the remote store.

        A note without content is sent as an empty en-note document.

        Returns:
            The note, with the guid assigned by the remote store
        """
        if raw or note.md:
            body = self._wire_content(note, raw)
        else:
            body = EMPTY_DOCUMENT

        self._log_operation("Creating note", title=note.title, raw=raw)
        created = self.note_store.create_note(note.model_copy(update={"body": body}))
        if created.guid:
            note.guid = created.guid
        return note
