"""
Note Commands.

List, create, edit, rename, move and delete notes.
"""

from datetime import datetime
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from notesync.cli.client import close_client, get_client
from notesync.core.exceptions import ApplicationError, ValidationError
from notesync.core.logging import get_logger, log_with_source
from notesync.schemas.note import EditMode, Note, Notebook, NoteFilter, NoteOrder

app = typer.Typer(help="Note commands")
console = Console()
logger = get_logger(__name__)

DEFAULT_TITLE = "Untitled note"


def _fail(error: Exception) -> None:
    log_with_source(logger, "cli", "error", "Command failed", error=str(error))
    console.print(f"[red]Error: {error}[/red]")
    raise typer.Exit(1)


def _format_timestamp(ms: int) -> str:
    if not ms:
        return "-"
    return datetime.fromtimestamp(ms / 1000).strftime("%Y-%m-%d %H:%M")


def render_listing(notes: list[Note], notebooks: list[Notebook]) -> Table:
    """Build the note listing table; the # column feeds the numeric shortcut."""
    names = {notebook.guid: notebook.name for notebook in notebooks}
    table = Table(show_header=True)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Title")
    table.add_column("Notebook", style="green")
    table.add_column("Modified", style="dim")

    for index, note in enumerate(notes, start=1):
        notebook = names.get(note.notebook.guid, "") if note.notebook else ""
        table.add_row(str(index), note.title, notebook, _format_timestamp(note.updated))
    return table


@app.command("list")
def list_notes(
    count: int = typer.Option(20, "--count", "-c", help="How many notes to show in the result"),
    search: str = typer.Option("", "--search", "-s", help="Search term"),
    notebook: str = typer.Option("", "--notebook", "-b", help="Restrict search to notebook"),
) -> None:
    """
    List notes matching a search filter.

    The results are remembered, so a note can afterwards be referred to
    by its number, e.g. `note edit 3`.

    Examples:
        cli.py note list
        cli.py note list -s groceries -b Home -c 5
    """
    client = get_client()
    try:
        note_filter = NoteFilter(words=search, order=NoteOrder.UPDATED)
        if notebook:
            note_filter.notebook_guid = client.notebooks.find_notebook(notebook).guid
        notes = client.notes.search(note_filter, count)
        console.print(render_listing(notes, client.notebooks.get_notebooks()))
    except ApplicationError as e:
        _fail(e)
    finally:
        close_client()


@app.command()
def new(
    title: str = typer.Option("", "--title", "-t", help="Note title"),
    notebook: str = typer.Option("", "--notebook", "-b", help="Notebook to save the note to; default notebook if not set"),
    edit: bool = typer.Option(False, "--edit", "-e", help="Open the note in the editor"),
    raw: bool = typer.Option(False, "--raw", help="Edit the content in raw mode"),
    stdin: bool = typer.Option(False, "--stdin", help="Read content from stdin"),
) -> None:
    """
    Create a new note.

    Without --edit (or --stdin) a title is required and an empty note is created.

    Examples:
        cli.py note new -t "Groceries"
        cli.py note new -e -b Home
        echo "milk" | cli.py note new -t Groceries --stdin
    """
    if not title and not edit and not stdin:
        _fail(ValidationError("Note title has to be given"))

    client = get_client()
    try:
        note = Note(title=title or DEFAULT_TITLE)
        if notebook:
            note.notebook = client.notebooks.find_notebook(notebook)
        mode = EditMode(raw=raw, stdin=stdin)

        if edit or stdin:
            note = client.session.create_and_edit_new_note(note, mode)
        else:
            note = client.saver.save_new_note(note, raw)
        console.print(f"[green]Created[/green] {note.title}")
    except (ApplicationError, OSError) as e:
        _fail(e)
    finally:
        close_client()


@app.command()
def edit(
    title: Optional[str] = typer.Argument(None, help="Note title or number from the last listing"),
    notebook: str = typer.Option("", "--notebook", "-b", help="Notebook the note is in"),
    raw: bool = typer.Option(False, "--raw", help="Edit the content in raw mode"),
    recover: bool = typer.Option(False, "--recover", help="Reopen the note that failed to save"),
    stdin: bool = typer.Option(False, "--stdin", help="Read content from stdin"),
) -> None:
    """
    Edit a note in your editor.

    The note is only saved if the title, content or notebook changed.

    Examples:
        cli.py note edit "Groceries"
        cli.py note edit 2 --raw
        cli.py note edit --recover
    """
    if not title and not recover:
        _fail(ValidationError("Note title has to be given"))

    client = get_client()
    try:
        mode = EditMode(raw=raw, recovery_point=recover, stdin=stdin)
        saved = client.session.edit_note(title or "", mode, notebook)
        console.print("[green]Saved[/green]" if saved else "[dim]No changes[/dim]")
    except (ApplicationError, OSError) as e:
        _fail(e)
    finally:
        close_client()


@app.command("title")
def change_title(
    old: str = typer.Argument(..., help="Current title or number from the last listing"),
    new_title: str = typer.Argument(..., help="New title"),
) -> None:
    """Change the title of a note."""
    client = get_client()
    try:
        client.notes.change_title(old, new_title)
        console.print(f"[green]Renamed[/green] to {new_title}")
    except ApplicationError as e:
        _fail(e)
    finally:
        close_client()


@app.command()
def move(
    title: str = typer.Argument(..., help="Note title or number from the last listing"),
    notebook: str = typer.Argument(..., help="Target notebook"),
) -> None:
    """Move a note to another notebook."""
    client = get_client()
    try:
        client.notes.move_note(title, notebook)
        console.print(f"[green]Moved[/green] to {notebook}")
    except ApplicationError as e:
        _fail(e)
    finally:
        close_client()


@app.command()
def delete(
    title: str = typer.Argument(..., help="Note title or number from the last listing"),
    notebook: str = typer.Option("", "--notebook", "-b", help="Notebook the note is in"),
) -> None:
    """Move a note to the trash."""
    client = get_client()
    try:
        client.notes.delete_note(title, notebook)
        console.print(f"[green]Deleted[/green] {title}")
    except ApplicationError as e:
        _fail(e)
    finally:
        close_client()
