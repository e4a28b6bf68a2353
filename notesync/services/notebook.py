"""
Notebook Service.

Resolves notebooks against the remote store. Every lookup returns a freshly
fetched Notebook; callers replace a note's placeholder notebook with it
instead of copying fields across.
"""

from notesync.core.exceptions import NotFoundError
from notesync.schemas.note import Notebook
from notesync.services.base import BaseService


class NotebookService(BaseService):
    """Service for notebook lookups."""

    def get_notebooks(self) -> list[Notebook]:
        """Return all notebooks of the user."""
        self._log_debug("Listing notebooks")
        return self.note_store.list_notebooks()

    def get_notebook(self, guid: str) -> Notebook:
        """
        Get a notebook by guid.

        Raises:
            NotFoundError: If the notebook does not exist
        """
        return self.note_store.get_notebook(guid)

    def find_notebook(self, name: str) -> Notebook:
        """
        Find a notebook by name.

        An exact match wins over a case-insensitive one.

        Raises:
            NotFoundError: If no notebook has that name
        """
        notebooks = self.get_notebooks()
        for notebook in notebooks:
            if notebook.name == name:
                return notebook
        folded = name.casefold()
        for notebook in notebooks:
            if notebook.name.casefold() == folded:
                return notebook
        raise NotFoundError(f"no notebook found with the name {name!r}")
