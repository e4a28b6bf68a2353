"""
Note Store Client.

NoteStoreClient is the contract the services depend on. HTTPNoteStore is a
thin synchronous adapter for a REST note service that answers with the
standard {success, data, error} response envelope.
"""

from typing import Any, Protocol

import httpx

from notesync.core.exceptions import ExternalServiceError, NotFoundError
from notesync.core.logging import get_logger, log_with_source
from notesync.schemas.note import Note, Notebook, NoteFilter

logger = get_logger(__name__)


class NoteStoreClient(Protocol):
    """Operations the remote note store must provide."""

    def find_notes(self, note_filter: NoteFilter, offset: int, count: int) -> list[Note]: ...

    def get_note_content(self, guid: str) -> str: ...

    def create_note(self, note: Note) -> Note: ...

    def update_note(self, note: Note) -> None: ...

    def delete_note(self, guid: str) -> None: ...

    def get_notebook(self, guid: str) -> Notebook: ...

    def list_notebooks(self) -> list[Notebook]: ...


def note_from_payload(data: dict[str, Any]) -> Note:
    """Build note metadata from a response payload."""
    notebook_guid = data.get("notebook_guid") or ""
    return Note(
        guid=data.get("guid", ""),
        title=data.get("title", ""),
        deleted=bool(data.get("deleted", False)),
        notebook=Notebook(guid=notebook_guid) if notebook_guid else None,
        created=int(data.get("created") or 0),
        updated=int(data.get("updated") or 0),
    )


def note_to_payload(note: Note) -> dict[str, Any]:
    """
    Build the request payload for a note.

    The content is only sent when the note carries a body, so metadata-only
    updates (rename, move) leave the remote content alone.
    """
    payload: dict[str, Any] = {"title": note.title}
    if note.body:
        payload["content"] = note.body
    if note.notebook is not None and note.notebook.guid:
        payload["notebook_guid"] = note.notebook.guid
    return payload


def notebook_from_payload(data: dict[str, Any]) -> Notebook:
    return Notebook(
        guid=data.get("guid", ""),
        name=data.get("name", ""),
        default=bool(data.get("default", False)),
    )


class HTTPNoteStore:
    """
    HTTP client for the remote note store.

    Features:
    - Bearer token authentication from config/.env
    - X-Frontend-ID header for log routing
    - Structured logging of requests/responses
    - httpx and envelope errors mapped to application exceptions

    Usage:
        store = HTTPNoteStore("https://notes.example.com/api/v1", token="...")
        notes = store.find_notes(NoteFilter(words="groceries"), 0, 20)
    """

    def __init__(
        self,
        base_url: str,
        token: str = "",
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the note store client.

        Args:
            base_url: API base URL, e.g. https://notes.example.com/api/v1
            token: Bearer token; omitted from requests when empty
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._token = token
        self._transport = transport
        self._client: httpx.Client | None = None

    def _get_client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            headers = {"X-Frontend-ID": "cli"}
            if self._token:
                headers["Authorization"] = f"Bearer {self._token}"
            self._client = httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=headers,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            self._client.close()
            self._client = None

    def request(self, method: str, path: str, **kwargs: Any) -> Any:
        """
        Make a request and return the envelope's data field.

        Raises:
            NotFoundError: On 404
            ExternalServiceError: On transport failures, error statuses or
                an unsuccessful envelope
        """
        client = self._get_client()
        log_with_source(logger, "notestore", "debug", "API request", method=method, path=path)

        try:
            response = client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log_with_source(
                logger,
                "notestore",
                "error",
                "API request failed",
                method=method,
                path=path,
                error=str(e),
            )
            raise ExternalServiceError(f"Note store request failed: {e}") from e

        log_with_source(
            logger,
            "notestore",
            "debug",
            "API response",
            method=method,
            path=path,
            status_code=response.status_code,
        )

        if response.status_code == 204:
            return None

        body = _decode(response)
        error = body.get("error") or {}
        if response.status_code == 404:
            raise NotFoundError(error.get("message") or f"Not found: {path}")
        if response.status_code >= 400 or not body.get("success", True):
            message = error.get("message") or f"HTTP {response.status_code}"
            raise ExternalServiceError(f"Note store error: {message}")
        return body.get("data")

    def find_notes(self, note_filter: NoteFilter, offset: int, count: int) -> list[Note]:
        params: dict[str, Any] = {
            "order": int(note_filter.order),
            "offset": offset,
            "limit": count,
        }
        if note_filter.words:
            params["words"] = note_filter.words
        if note_filter.notebook_guid:
            params["notebook_guid"] = note_filter.notebook_guid
        data = self.request("GET", "/notes", params=params) or []
        return [note_from_payload(item) for item in data]

    def get_note_content(self, guid: str) -> str:
        data = self.request("GET", f"/notes/{guid}/content") or {}
        return data.get("content", "")

    def create_note(self, note: Note) -> Note:
        data = self.request("POST", "/notes", json=note_to_payload(note)) or {}
        return note_from_payload(data)

    def update_note(self, note: Note) -> None:
        self.request("PUT", f"/notes/{note.guid}", json=note_to_payload(note))

    def delete_note(self, guid: str) -> None:
        self.request("DELETE", f"/notes/{guid}")

    def get_notebook(self, guid: str) -> Notebook:
        return notebook_from_payload(self.request("GET", f"/notebooks/{guid}") or {})

    def list_notebooks(self) -> list[Notebook]:
        data = self.request("GET", "/notebooks") or []
        return [notebook_from_payload(item) for item in data]


def _decode(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError as e:
        raise ExternalServiceError(
            f"Note store returned invalid JSON (HTTP {response.status_code})"
        ) from e
    if not isinstance(body, dict):
        raise ExternalServiceError("Note store returned an unexpected response")
    return body
