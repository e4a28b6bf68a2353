"""
Editor Launcher.

Runs the user's editor on a file and blocks until it exits.
"""

import shlex
import subprocess
from pathlib import Path

from notesync.core.exceptions import EditorError
from notesync.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


class EditorLauncher:
    """
    Runs an editor command line with the document path appended.

    The command is split with shlex, so "code --wait" works.
    """

    def __init__(self, command: str) -> None:
        self.command = command

    def build_command(self, path: Path) -> list[str]:
        return [*shlex.split(self.command), str(path)]

    def edit(self, path: Path) -> None:
        """
        Open path in the editor and wait for it to exit.

        Raises:
            EditorError: If the editor cannot be started or exits non-zero
        """
        args = self.build_command(path)
        if len(args) < 2:
            raise EditorError("No editor configured")

        log_with_source(logger, "editor", "info", "Starting editor", command=args[0], path=str(path))
        try:
            result = subprocess.run(args, check=False)
        except OSError as e:
            raise EditorError(f"Could not start editor {args[0]!r}: {e}") from e

        if result.returncode != 0:
            raise EditorError(f"Editor {args[0]!r} exited with status {result.returncode}")
        log_with_source(logger, "editor", "debug", "Editor exited", path=str(path))
