"""
Notebook Commands.
"""

import typer
from rich.console import Console
from rich.table import Table

from notesync.cli.client import close_client, get_client
from notesync.core.exceptions import ApplicationError

app = typer.Typer(help="Notebook commands")
console = Console()


@app.command("list")
def list_notebooks() -> None:
    """List all notebooks."""
    client = get_client()
    try:
        notebooks = client.notebooks.get_notebooks()
    except ApplicationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    finally:
        close_client()

    table = Table(show_header=True)
    table.add_column("Name", style="cyan")
    table.add_column("Default")
    for notebook in sorted(notebooks, key=lambda nb: nb.name.casefold()):
        table.add_row(notebook.name, "yes" if notebook.default else "")
    console.print(table)
