"""
Client Wiring.

Builds the note store, local store, converter, editor and services from
configuration and hands them to the CLI commands as one Client bundle.
"""

import sys
from dataclasses import dataclass

from notesync.clients.notestore import HTTPNoteStore
from notesync.core.config import (
    get_app_config,
    get_editor_command,
    get_settings,
    resolve_path,
)
from notesync.core.database import close_database, get_session_factory
from notesync.core.logging import get_logger
from notesync.editor.cache import CacheDirectory
from notesync.editor.launcher import EditorLauncher
from notesync.notes.converter import MarkdownConverter
from notesync.repositories.local_store import LocalStore
from notesync.services.edit import EditSession
from notesync.services.note import NoteService
from notesync.services.notebook import NotebookService
from notesync.services.save import SaveCoordinator

logger = get_logger(__name__)


@dataclass
class Client:
    """Everything a command needs to talk to the note stores."""

    note_store: HTTPNoteStore
    local_store: LocalStore
    notes: NoteService
    notebooks: NotebookService
    saver: SaveCoordinator
    session: EditSession

    def close(self) -> None:
        """Close the HTTP client and the database engine."""
        self.note_store.close()
        close_database()


def build_client() -> Client:
    """Create a Client from config/settings and config/.env."""
    config = get_app_config()
    note_store = HTTPNoteStore(
        base_url=config.notestore.base_url,
        token=get_settings().notestore_token,
        timeout=config.notestore.timeout,
    )
    local_store = LocalStore(get_session_factory())
    converter = MarkdownConverter()

    notebooks = NotebookService(note_store, local_store)
    notes = NoteService(
        note_store,
        local_store,
        notebooks,
        converter,
        search_count=config.notestore.search_count,
    )
    saver = SaveCoordinator(note_store, local_store, converter)
    session = EditSession(
        notes,
        notebooks,
        saver,
        EditorLauncher(get_editor_command()),
        CacheDirectory(resolve_path(config.editor.cache_dir)),
        stdin=sys.stdin,
    )
    logger.debug("Client created", extra={"base_url": note_store.base_url})
    return Client(note_store, local_store, notes, notebooks, saver, session)


# Module-level client instance
_client: Client | None = None


def get_client() -> Client:
    """Get or create the Client singleton."""
    global _client
    if _client is None:
        _client = build_client()
    return _client


def close_client() -> None:
    """Close the Client."""
    global _client
    if _client:
        _client.close()
        _client = None
