"""notesync - edit cloud notes in your own text editor."""

__version__ = "0.4.0"
