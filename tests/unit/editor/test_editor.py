"""Unit tests for cache documents and the editor launcher."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from notesync.core.exceptions import DocumentEncodingError, EditorError
from notesync.editor.cache import CacheDirectory, CacheFile
from notesync.editor.launcher import EditorLauncher


class TestCacheFile:
    """Tests for the cache document lifecycle."""

    def test_write_close_reopen_read(self, tmp_path: Path) -> None:
        """Test content written before close is read after reopen."""
        cache_file = CacheFile(tmp_path / "a.md")
        cache_file.write("line 1\nline 2\n")
        cache_file.close()

        cache_file.reopen()

        assert list(cache_file) == ["line 1\n", "line 2\n"]
        cache_file.close_and_remove()

    def test_close_twice(self, tmp_path: Path) -> None:
        """Test close is safe to repeat."""
        cache_file = CacheFile(tmp_path / "a.md")
        cache_file.close()
        cache_file.close()
        assert cache_file.closed

    def test_write_after_close_fails(self, tmp_path: Path) -> None:
        """Test writing to a closed document raises."""
        cache_file = CacheFile(tmp_path / "a.md")
        cache_file.close()

        with pytest.raises(ValueError, match="closed"):
            cache_file.write("x")

    def test_context_removes_file_on_error(self, tmp_path: Path) -> None:
        """Test leaving the with block on an exception deletes the file."""
        path = tmp_path / "a.md"

        with pytest.raises(RuntimeError):
            with CacheFile(path) as cache_file:
                cache_file.write("x")
                raise RuntimeError("editor crashed")

        assert not path.exists()

    def test_remove_missing_file(self, tmp_path: Path) -> None:
        """Test removal tolerates a file deleted by someone else."""
        path = tmp_path / "a.md"
        cache_file = CacheFile(path)
        cache_file.close()
        path.unlink()

        cache_file.close_and_remove()

        assert cache_file.closed


    def test_undecodable_content(self, tmp_path: Path) -> None:
        """Test bytes that are not valid UTF-8 raise DocumentEncodingError."""
        path = tmp_path / "a.md"
        cache_file = CacheFile(path)
        cache_file.close()
        path.write_bytes("caf\xe9\n".encode("latin-1"))

        cache_file.reopen()

        with pytest.raises(DocumentEncodingError, match="not valid utf-8"):
            list(cache_file)
        cache_file.close_and_remove()


class TestCacheDirectory:
    """Tests for cache document creation."""

    def test_creates_directory(self, tmp_path: Path) -> None:
        """Test the base directory is created on demand."""
        base = tmp_path / "nested" / "cache"

        with CacheDirectory(base).new_cache_file("g1.md") as cache_file:
            assert cache_file.path == base / "g1.md"
            assert cache_file.path.exists()


class TestEditorLauncher:
    """Tests for running the editor."""

    def test_build_command_splits_arguments(self) -> None:
        """Test multi-word editor commands."""
        launcher = EditorLauncher("code --wait")
        assert launcher.build_command(Path("/tmp/x.md")) == ["code", "--wait", "/tmp/x.md"]

    def test_empty_command(self) -> None:
        """Test an empty editor command is rejected."""
        with pytest.raises(EditorError, match="No editor configured"):
            EditorLauncher("").edit(Path("/tmp/x.md"))

    def test_success(self) -> None:
        """Test a zero exit status is accepted."""
        with patch("notesync.editor.launcher.subprocess.run") as mock_run:
            mock_run.return_value = subprocess.CompletedProcess(["vi"], 0)

            EditorLauncher("vi").edit(Path("/tmp/x.md"))

        mock_run.assert_called_once_with(["vi", "/tmp/x.md"], check=False)

    def test_non_zero_exit(self) -> None:
        """Test a failing editor raises EditorError."""
        with patch("notesync.editor.launcher.subprocess.run") as mock_run:
            mock_run.return_value = subprocess.CompletedProcess(["vi"], 1)

            with pytest.raises(EditorError, match="status 1"):
                EditorLauncher("vi").edit(Path("/tmp/x.md"))

    def test_missing_binary(self) -> None:
        """Test an editor that cannot start raises EditorError."""
        with patch(
            "notesync.editor.launcher.subprocess.run",
            MagicMock(side_effect=FileNotFoundError("no such file")),
        ):
            with pytest.raises(EditorError, match="Could not start"):
                EditorLauncher("nonexistent-editor").edit(Path("/tmp/x.md"))
