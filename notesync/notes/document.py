"""
Editable Note Document.

A note is edited as one plain-text document: the header block from
notesync.notes.header followed by the content. In raw mode the content is
the wire markup (note.body), otherwise the markdown rendering (note.md).
"""

import io
from collections.abc import Iterable, Iterator
from typing import TextIO

from notesync.notes.header import format_header, parse_header
from notesync.schemas.note import EditMode, Note


def _content(note: Note, mode: EditMode) -> str:
    return note.body if mode.raw else note.md


def document(note: Note, mode: EditMode) -> str:
    """
    Render a note as an editable document.

    The result always ends with a newline.
    """
    text = format_header(note) + _content(note, mode)
    if not text.endswith("\n"):
        text += "\n"
    return text


def write_note(stream: TextIO, note: Note, mode: EditMode) -> None:
    """Write the editable document for a note to a text stream."""
    stream.write(document(note, mode))


def _strip_terminators(stream: Iterable[str]) -> Iterator[str]:
    for raw_line in stream:
        line = raw_line.removesuffix("\n")
        yield line.removesuffix("\r")


def parse_note(stream: Iterable[str], note: Note, mode: EditMode) -> None:
    """
    Read an edited document back into a note.

    The header updates title and notebook name. Everything after the header
    is stored, with leading and trailing newlines trimmed, in note.body for
    raw mode or note.md otherwise.

    Args:
        stream: Text stream or any iterable of lines
        note: Note updated in place
        mode: Edit mode selecting the content field

    Raises:
        OSError: If reading the stream fails
    """
    lines = _strip_terminators(stream)
    parse_header(lines, note)

    content = "".join(line + "\n" for line in lines).strip("\n")
    if mode.raw:
        note.body = content
    else:
        note.md = content


def parse_document(text: str, note: Note, mode: EditMode) -> None:
    """Parse an in-memory document into a note."""
    parse_note(io.StringIO(text), note, mode)


def normalize(note: Note, mode: EditMode) -> None:
    """
    Put a note into the form an unchanged document parses back to.

    Titles and notebook names lose surrounding whitespace and the content
    loses leading and trailing newlines, exactly as parse_note would do.
    Fingerprints taken afterwards only change when the user edits.
    """
    parse_document(document(note, mode), note, mode)
