"""Unit tests for CLI commands."""

from collections.abc import Generator
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from cli import app
from notesync.core.exceptions import (
    DocumentEncodingError,
    ExternalServiceError,
    NotFoundError,
    RecoveryPointError,
)
from notesync.schemas.note import EditMode, Note, Notebook

runner = CliRunner()


@pytest.fixture(autouse=True)
def no_logging_setup() -> Generator[MagicMock, None, None]:
    """Keep CLI tests from configuring handlers or writing log files."""
    with patch("cli.setup_logging") as mock_setup:
        yield mock_setup


@pytest.fixture
def mock_client() -> Generator[MagicMock, None, None]:
    """Patch the client singleton used by the note commands."""
    client = MagicMock()
    with (
        patch("notesync.cli.commands.note.get_client", return_value=client),
        patch("notesync.cli.commands.note.close_client") as mock_close,
    ):
        client.close_mock = mock_close
        yield client


class TestMainApp:
    """Tests for main app options."""

    def test_help(self) -> None:
        """Test main help."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "note" in result.stdout
        assert "notebook" in result.stdout

    def test_note_help(self) -> None:
        """Test note group help lists the commands."""
        result = runner.invoke(app, ["note", "--help"])
        assert result.exit_code == 0
        for command in ("list", "new", "edit", "title", "move", "delete"):
            assert command in result.stdout

    def test_outside_project_root(
        self, mock_client: MagicMock, tmp_path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test commands refuse to run without a .project_root marker."""
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["note", "edit", "2"])

        assert result.exit_code == 1
        assert ".project_root not found" in result.stdout
        mock_client.session.edit_note.assert_not_called()

    def test_debug_flag(self, mock_client: MagicMock, no_logging_setup: MagicMock) -> None:
        """Test debug flag configures DEBUG logging."""
        mock_client.session.edit_note.return_value = False
        result = runner.invoke(app, ["--debug", "note", "edit", "2"])
        assert result.exit_code == 0
        assert "Debug mode enabled" in result.stdout
        no_logging_setup.assert_called_once_with(level="DEBUG", format_type="console")


class TestEditCommand:
    """Tests for note edit."""

    def test_requires_title(self, mock_client: MagicMock) -> None:
        """Test edit without a title or --recover fails."""
        result = runner.invoke(app, ["note", "edit"])
        assert result.exit_code == 1
        assert "Note title has to be given" in result.stdout
        mock_client.session.edit_note.assert_not_called()

    def test_saved(self, mock_client: MagicMock) -> None:
        """Test a saved edit is reported."""
        mock_client.session.edit_note.return_value = True

        result = runner.invoke(app, ["note", "edit", "Groceries", "-b", "Home", "--raw"])

        assert result.exit_code == 0
        assert "Saved" in result.stdout
        mock_client.session.edit_note.assert_called_once_with(
            "Groceries", EditMode(raw=True), "Home"
        )
        mock_client.close_mock.assert_called_once()

    def test_no_changes(self, mock_client: MagicMock) -> None:
        """Test an unchanged edit is reported."""
        mock_client.session.edit_note.return_value = False

        result = runner.invoke(app, ["note", "edit", "2"])

        assert result.exit_code == 0
        assert "No changes" in result.stdout

    def test_recover_without_title(self, mock_client: MagicMock) -> None:
        """Test --recover needs no title."""
        mock_client.session.edit_note.return_value = True

        result = runner.invoke(app, ["note", "edit", "--recover"])

        assert result.exit_code == 0
        mock_client.session.edit_note.assert_called_once_with(
            "", EditMode(recovery_point=True), ""
        )

    def test_error_exits_non_zero(self, mock_client: MagicMock) -> None:
        """Test service errors are printed and exit with 1."""
        mock_client.session.edit_note.side_effect = RecoveryPointError(
            ExternalServiceError("rate limited"), OSError("disk full")
        )

        result = runner.invoke(app, ["note", "edit", "2"])

        assert result.exit_code == 1
        assert "Failed to create recovery point" in result.stdout
        mock_client.close_mock.assert_called_once()


    def test_undecodable_document_exits_non_zero(self, mock_client: MagicMock) -> None:
        """Test an editor save in a foreign encoding is reported, not a traceback."""
        mock_client.session.edit_note.side_effect = DocumentEncodingError(
            "Edited document is not valid utf-8: data/cache/g1.md (invalid continuation byte)"
        )

        result = runner.invoke(app, ["note", "edit", "2"])

        assert result.exit_code == 1
        assert "not valid utf-8" in result.stdout
        assert not isinstance(result.exception, DocumentEncodingError)


class TestNewCommand:
    """Tests for note new."""

    def test_requires_title_without_editor(self, mock_client: MagicMock) -> None:
        """Test a bare new command needs a title."""
        result = runner.invoke(app, ["note", "new"])
        assert result.exit_code == 1
        assert "Note title has to be given" in result.stdout

    def test_creates_empty_note(self, mock_client: MagicMock) -> None:
        """Test new with a title creates the note directly."""
        mock_client.saver.save_new_note.side_effect = lambda note, raw: note

        result = runner.invoke(app, ["note", "new", "-t", "Ideas"])

        assert result.exit_code == 0
        note, raw = mock_client.saver.save_new_note.call_args.args
        assert note.title == "Ideas"
        assert raw is False
        mock_client.session.create_and_edit_new_note.assert_not_called()

    def test_edit_uses_default_title(self, mock_client: MagicMock) -> None:
        """Test an edited new note without title is called Untitled note."""
        mock_client.session.create_and_edit_new_note.side_effect = lambda note, mode: note

        result = runner.invoke(app, ["note", "new", "-e"])

        assert result.exit_code == 0
        note = mock_client.session.create_and_edit_new_note.call_args.args[0]
        assert note.title == "Untitled note"

    def test_notebook_resolved(self, mock_client: MagicMock) -> None:
        """Test -b looks up the notebook before creating."""
        mock_client.notebooks.find_notebook.return_value = Notebook(guid="nb-1", name="Home")
        mock_client.saver.save_new_note.side_effect = lambda note, raw: note

        result = runner.invoke(app, ["note", "new", "-t", "Ideas", "-b", "home"])

        assert result.exit_code == 0
        note = mock_client.saver.save_new_note.call_args.args[0]
        assert note.notebook.guid == "nb-1"


class TestListCommand:
    """Tests for note list."""

    def test_lists_and_numbers_notes(self, mock_client: MagicMock) -> None:
        """Test results are shown with their index."""
        mock_client.notes.search.return_value = [
            Note(guid="g1", title="Groceries", notebook=Notebook(guid="nb-1")),
            Note(guid="g2", title="Ideas"),
        ]
        mock_client.notebooks.get_notebooks.return_value = [Notebook(guid="nb-1", name="Home")]

        result = runner.invoke(app, ["note", "list", "-s", "x", "-c", "5"])

        assert result.exit_code == 0
        assert "Groceries" in result.stdout
        assert "Home" in result.stdout
        note_filter, count = mock_client.notes.search.call_args.args
        assert note_filter.words == "x"
        assert count == 5


class TestMetadataCommands:
    """Tests for title, move and delete."""

    def test_title(self, mock_client: MagicMock) -> None:
        """Test rename."""
        result = runner.invoke(app, ["note", "title", "2", "New name"])
        assert result.exit_code == 0
        mock_client.notes.change_title.assert_called_once_with("2", "New name")

    def test_move_not_found(self, mock_client: MagicMock) -> None:
        """Test an unknown notebook exits with 1."""
        mock_client.notes.move_note.side_effect = NotFoundError("no notebook found with the name 'X'")

        result = runner.invoke(app, ["note", "move", "2", "X"])

        assert result.exit_code == 1
        assert "no notebook found" in result.stdout

    def test_delete(self, mock_client: MagicMock) -> None:
        """Test delete passes the notebook filter."""
        result = runner.invoke(app, ["note", "delete", "Old", "-b", "Archive"])
        assert result.exit_code == 0
        mock_client.notes.delete_note.assert_called_once_with("Old", "Archive")


class TestNotebookCommands:
    """Tests for notebook list."""

    def test_list(self) -> None:
        """Test notebooks are listed by name."""
        client = MagicMock()
        client.notebooks.get_notebooks.return_value = [
            Notebook(guid="nb-2", name="Work"),
            Notebook(guid="nb-1", name="Home", default=True),
        ]
        with (
            patch("notesync.cli.commands.notebook.get_client", return_value=client),
            patch("notesync.cli.commands.notebook.close_client"),
        ):
            result = runner.invoke(app, ["notebook", "list"])

        assert result.exit_code == 0
        assert result.stdout.index("Home") < result.stdout.index("Work")
