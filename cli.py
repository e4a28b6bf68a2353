#!/usr/bin/env python3
"""
notesync CLI.

Edit cloud notes in your own text editor.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    python cli.py --help                        # Show help

    # Notes
    python cli.py note list -s groceries        # Search and remember results
    python cli.py note edit 2                   # Edit the 2nd note of the last listing
    python cli.py note edit "Groceries" --raw   # Edit the raw markup
    python cli.py note edit --recover           # Reopen a note that failed to save
    python cli.py note new -t "Ideas" -e        # Create a note in the editor
    python cli.py note title 2 "New title"      # Rename
    python cli.py note move 2 Archive           # Move to another notebook
    python cli.py note delete 2                 # Move to trash

    # Notebooks
    python cli.py notebook list

Options:
    --verbose, -v     Enable verbose output
    --debug, -d       Enable debug mode (detailed logging)
    --help            Show help message
"""

import sys
from pathlib import Path

import typer
from rich.console import Console

# Add project root to path for absolute imports
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from notesync.cli.commands import note_app, notebook_app
from notesync.core.config import find_project_root
from notesync.core.logging import setup_logging

# Create main app
app = typer.Typer(
    name="notesync",
    help="notesync - edit cloud notes in your own text editor.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

# Register command groups
app.add_typer(note_app, name="note")
app.add_typer(notebook_app, name="notebook")


def _validate_project_root() -> None:
    """Validate that a .project_root marker can be found."""
    try:
        find_project_root()
    except RuntimeError:
        console.print("[red]Error: .project_root not found. Run from the project directory.[/red]")
        raise typer.Exit(1)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    notesync CLI.

    Search, create and edit notes; edits happen in $EDITOR.
    """
    _validate_project_root()

    # Configure logging based on flags
    if debug:
        setup_logging(level="DEBUG", format_type="console")
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        setup_logging(level="INFO", format_type="console")
    else:
        setup_logging()


if __name__ == "__main__":
    app()
