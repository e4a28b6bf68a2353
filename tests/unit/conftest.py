"""
Unit Test Fixtures.

Fixtures for unit tests - the remote note store, the converter and the
editor are mocked. Unit tests never touch the network.
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from notesync.clients.notestore import HTTPNoteStore
from notesync.notes.converter import MarkdownConverter
from notesync.repositories.local_store import LocalStore


# =============================================================================
# Collaborator Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_note_store() -> MagicMock:
    """
    Mock remote note store.

    Usage:
        def test_update(mock_note_store):
            mock_note_store.update_note.side_effect = ExternalServiceError("down")
    """
    store = MagicMock(spec=HTTPNoteStore)
    store.find_notes.return_value = []
    store.list_notebooks.return_value = []
    return store


@pytest.fixture
def mock_local_store() -> MagicMock:
    """Mock local store with an empty saved search and no recovery point."""
    store = MagicMock(spec=LocalStore)
    store.get_search.return_value = []
    store.get_recovery_point.return_value = None
    return store


@pytest.fixture
def mock_converter() -> MagicMock:
    """Mock markdown converter that tags its output."""
    converter = MagicMock(spec=MarkdownConverter)
    converter.to_wire_markup.side_effect = lambda text: f"<p>{text}</p>"
    converter.to_markdown.side_effect = lambda markup: markup
    return converter


# =============================================================================
# Editor Fixtures
# =============================================================================


class FakeEditor:
    """
    Stands in for EditorLauncher.

    Records every path it is asked to edit and the text it found there,
    then applies an optional rewrite function to the file content.
    """

    def __init__(self, rewrite=None) -> None:
        self.rewrite = rewrite
        self.paths: list[Path] = []
        self.seen: list[str] = []

    def edit(self, path: Path) -> None:
        text = path.read_text(encoding="utf-8")
        self.paths.append(path)
        self.seen.append(text)
        if self.rewrite is not None:
            path.write_text(self.rewrite(text), encoding="utf-8")


@pytest.fixture
def fake_editor() -> FakeEditor:
    """Editor that leaves the document untouched."""
    return FakeEditor()


@pytest.fixture
def make_editor():
    """
    Factory for editors that rewrite the document.

    Usage:
        def test_edit(make_editor):
            editor = make_editor(lambda text: text + "more\n")
    """
    return FakeEditor


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Mock logger for testing logging calls.

    Usage:
        def test_logging(mock_logger):
            with patch("module.get_logger", return_value=mock_logger):
                # Test code that logs
                mock_logger.info.assert_called_once()
    """
    logger = MagicMock()
    logger.debug = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.exception = MagicMock()
    return logger
