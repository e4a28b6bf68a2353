"""
Document Header.

The metadata block at the top of an editable note document:

    ---
    title: Groceries
    notebook: Home
    ---

Parsing is lenient. Text before the first delimiter, unknown keys and a
missing closing delimiter are all accepted; a field that is not present
keeps the value the note already had.
"""

from collections.abc import Iterator

from notesync.schemas.note import Note, Notebook

DELIMITER = "---"
TITLE_FIELD = "title:"
NOTEBOOK_FIELD = "notebook:"
FIELD_SEPARATOR = " "


def header_lines(note: Note) -> list[str]:
    """Return the header block for a note, one entry per line, without newlines."""
    lines = [DELIMITER, TITLE_FIELD + FIELD_SEPARATOR + note.title]
    if note.notebook_name:
        lines.append(NOTEBOOK_FIELD + FIELD_SEPARATOR + note.notebook_name)
    lines.append(DELIMITER)
    return lines


def format_header(note: Note) -> str:
    """Serialize the header block, each line terminated by a newline."""
    return "".join(line + "\n" for line in header_lines(note))


def parse_header(lines: Iterator[str], note: Note) -> None:
    """
    Read the header block from a line iterator into the note.

    Consumes lines up to and including the closing delimiter, leaving the
    iterator positioned at the first body line. If the input has no
    delimiter at all, every line is consumed.

    Args:
        lines: Iterator of lines with line terminators already removed
        note: Note whose title and notebook name are updated in place
    """
    for line in lines:
        if line == DELIMITER:
            break

    for line in lines:
        if line == DELIMITER:
            break

        if line.startswith(TITLE_FIELD):
            note.title = line[len(TITLE_FIELD):].strip()
            continue

        if line.startswith(NOTEBOOK_FIELD):
            if note.notebook is None:
                note.notebook = Notebook()
            note.notebook.name = line[len(NOTEBOOK_FIELD):].strip()
