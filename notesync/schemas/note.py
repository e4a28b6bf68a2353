"""
Note Schemas.

Pydantic models for notes, notebooks, search filters and edit modes.
Note and Notebook are mutable: the document parser and notebook
resolution update them in place during an edit session.
"""

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field


class NoteOrder(IntEnum):
    """Sort order for note searches."""

    CREATED = 1
    UPDATED = 2
    RELEVANCE = 3
    SEQUENCE_NUMBER = 4
    TITLE = 5


class Notebook(BaseModel):
    """
    A notebook on the remote store.

    A notebook read from a document header only has a name until it is
    resolved against the remote store.
    """

    guid: str = Field(default="", description="Notebook unique identifier")
    name: str = Field(default="", description="Notebook name")
    default: bool = Field(default=False, description="Whether this is the user's default notebook")


class Note(BaseModel):
    """
    A note on the remote store.

    An empty guid means the note has never been created remotely.
    body holds the wire markup inside the envelope root, md the editable
    rendering. Only one of them is authoritative at a time.
    """

    guid: str = Field(default="", description="Note unique identifier")
    title: str = Field(default="", description="Note title")
    body: str = Field(default="", description="Wire markup content")
    md: str = Field(default="", description="Markdown rendering of the body")
    deleted: bool = Field(default=False, description="Soft-delete marker")
    notebook: Notebook | None = Field(default=None, description="Owning notebook")
    created: int = Field(default=0, description="Creation timestamp (ms)")
    updated: int = Field(default=0, description="Last update timestamp (ms)")

    @property
    def is_new(self) -> bool:
        """True until the note has been created remotely."""
        return self.guid == ""

    @property
    def notebook_name(self) -> str:
        """The notebook name, or an empty string when no notebook is set."""
        if self.notebook is None:
            return ""
        return self.notebook.name


class NoteFilter(BaseModel):
    """Search filter for notes."""

    notebook_guid: str = ""
    words: str = ""
    order: NoteOrder = NoteOrder.UPDATED


class EditMode(BaseModel):
    """
    Options for one edit session.

    The flags are independent: raw and stdin can be combined, for example.

    Attributes:
        raw: Edit the wire markup in body instead of the markdown in md.
        recovery_point: Reopen the note a previous failed save left behind.
        stdin: Take the content from a stream instead of running the editor.
    """

    raw: bool = False
    recovery_point: bool = False
    stdin: bool = False

    model_config = ConfigDict(frozen=True)

    @property
    def extension(self) -> str:
        """Cache document extension for this mode."""
        return ".xml" if self.raw else ".md"
