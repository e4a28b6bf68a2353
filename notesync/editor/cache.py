"""
Cache Documents.

The transient file a note lives in while the user edits it. The handle is
closed before the editor runs and reopened for reading afterwards; leaving
the with block closes and deletes the file whatever happened.

Usage:
    with CacheDirectory(path).new_cache_file("abc.md") as cache_file:
        cache_file.write(text)
        cache_file.close()
        editor.edit(cache_file.path)
        cache_file.reopen()
        parse_note(cache_file, note, mode)
"""

from collections.abc import Iterator
from pathlib import Path
from types import TracebackType
from typing import TextIO

from notesync.core.exceptions import DocumentEncodingError
from notesync.core.logging import get_logger

logger = get_logger(__name__)


class CacheFile:
    """An open cache document."""

    def __init__(self, path: Path, encoding: str = "utf-8") -> None:
        self.path = path
        self.encoding = encoding
        self._handle: TextIO | None = path.open("w", encoding=encoding)

    @property
    def closed(self) -> bool:
        return self._handle is None or self._handle.closed

    def _require_handle(self) -> TextIO:
        if self._handle is None or self._handle.closed:
            raise ValueError(f"Cache file is closed: {self.path}")
        return self._handle

    def write(self, text: str) -> int:
        return self._require_handle().write(text)

    def __iter__(self) -> Iterator[str]:
        handle = self._require_handle()
        try:
            yield from handle
        except UnicodeDecodeError as e:
            raise DocumentEncodingError(
                f"Edited document is not valid {self.encoding}: {self.path} ({e.reason})"
            ) from e

    def close(self) -> None:
        """Flush and release the handle. Safe to call twice."""
        if self._handle is not None and not self._handle.closed:
            self._handle.close()

    def reopen(self) -> None:
        """Reopen the document for reading from the start."""
        self.close()
        self._handle = self.path.open("r", encoding=self.encoding)

    def close_and_remove(self) -> None:
        """Close the handle and delete the document."""
        self.close()
        self._handle = None
        self.path.unlink(missing_ok=True)
        logger.debug("Cache file removed", extra={"path": str(self.path)})

    def __enter__(self) -> "CacheFile":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close_and_remove()


class CacheDirectory:
    """Creates cache documents inside one directory."""

    def __init__(self, base_dir: Path) -> None:
        self.base_dir = base_dir

    def new_cache_file(self, name: str) -> CacheFile:
        self.base_dir.mkdir(parents=True, exist_ok=True)
        path = self.base_dir / name
        logger.debug("Cache file created", extra={"path": str(path)})
        return CacheFile(path)
