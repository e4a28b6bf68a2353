"""
CLI Commands.

Organized by domain/feature area.
"""

from notesync.cli.commands.note import app as note_app
from notesync.cli.commands.notebook import app as notebook_app

__all__ = [
    "note_app",
    "notebook_app",
]
