"""
Base Service.

Base class for all services providing common patterns for business logic.
Services orchestrate the remote note store and the local store and
implement the note rules.

Usage:
    from notesync.services.base import BaseService

    class NotebookService(BaseService):
        def list(self) -> list[Notebook]:
            self._log_debug("Listing notebooks")
            return self.note_store.list_notebooks()
"""

from typing import Any

from notesync.clients.notestore import NoteStoreClient
from notesync.core.logging import get_logger
from notesync.repositories.local_store import LocalStore


class BaseService:
    """
    Base class for all services.

    Provides:
    - Access to the remote note store and the local store
    - Logging context

    Subclasses should call super().__init__(note_store, local_store).
    """

    def __init__(self, note_store: NoteStoreClient, local_store: LocalStore) -> None:
        """
        Initialize the service.

        Args:
            note_store: Remote note store client
            local_store: Local store for saved searches and recovery points
        """
        self._note_store = note_store
        self._local_store = local_store
        self._logger = get_logger(self.__class__.__module__)

    @property
    def note_store(self) -> NoteStoreClient:
        """Get the remote note store."""
        return self._note_store

    @property
    def local_store(self) -> LocalStore:
        """Get the local store."""
        return self._local_store

    def _log_operation(
        self,
        operation: str,
        **context: Any,
    ) -> None:
        """
        Log a service operation with context.

        Args:
            operation: Description of the operation
            **context: Additional context to include in log
        """
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """
        Log debug information.

        Args:
            message: Debug message
            **context: Additional context to include in log
        """
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
