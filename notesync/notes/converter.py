"""
Markdown Converter.

Converts between the markdown a user edits and the XHTML fragment stored
inside the wire envelope. Both directions are pure functions of their
input.
"""

import re
from html.parser import HTMLParser

import markdown as md

_BLOCK_TAGS = frozenset({"p", "div", "blockquote", "table", "tr"})
_HEADINGS = {f"h{level}": level for level in range(1, 7)}
_EXTRA_BLANK_LINES = re.compile(r"\n{3,}")


class _MarkdownWriter(HTMLParser):
    """Walks an XHTML fragment and emits markdown."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self._out: list[str] = []
        self._lists: list[dict] = []
        self._links: list[str] = []
        self._in_pre = False

    def _newline(self, count: int = 1) -> None:
        text = "".join(self._out)
        trailing = len(text) - len(text.rstrip("\n"))
        if text and trailing < count:
            self._out.append("\n" * (count - trailing))

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        attributes = dict(attrs)
        if tag in _HEADINGS:
            self._newline(2)
            self._out.append("#" * _HEADINGS[tag] + " ")
        elif tag in _BLOCK_TAGS:
            self._newline(1 if tag == "div" else 2)
        elif tag == "br":
            self._out.append("\n")
        elif tag in ("strong", "b"):
            self._out.append("**")
        elif tag in ("em", "i"):
            self._out.append("*")
        elif tag == "code" and not self._in_pre:
            self._out.append("`")
        elif tag == "pre":
            self._newline(2)
            self._out.append("```\n")
            self._in_pre = True
        elif tag == "a":
            self._links.append(attributes.get("href") or "")
            self._out.append("[")
        elif tag in ("ul", "ol"):
            self._newline(1 if self._lists else 2)
            self._lists.append({"ordered": tag == "ol", "index": 0})
        elif tag == "li":
            self._newline()
            current = self._lists[-1] if self._lists else {"ordered": False, "index": 0}
            current["index"] += 1
            indent = "    " * max(len(self._lists) - 1, 0)
            marker = f"{current['index']}. " if current["ordered"] else "- "
            self._out.append(indent + marker)
        elif tag == "hr":
            self._newline(2)
            self._out.append("* * *")
            self._newline(2)
        elif tag == "en-todo":
            checked = (attributes.get("checked") or "").lower() == "true"
            self._out.append("[x] " if checked else "[ ] ")

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self.handle_starttag(tag, attrs)

    def handle_endtag(self, tag: str) -> None:
        if tag in _HEADINGS or tag in _BLOCK_TAGS:
            self._newline(1 if tag == "div" else 2)
        elif tag in ("strong", "b"):
            self._out.append("**")
        elif tag in ("em", "i"):
            self._out.append("*")
        elif tag == "code" and not self._in_pre:
            self._out.append("`")
        elif tag == "pre":
            self._newline()
            self._out.append("```")
            self._newline(2)
            self._in_pre = False
        elif tag == "a":
            href = self._links.pop() if self._links else ""
            self._out.append(f"]({href})")
        elif tag in ("ul", "ol"):
            if self._lists:
                self._lists.pop()
            self._newline(1 if self._lists else 2)

    def handle_data(self, data: str) -> None:
        if self._in_pre:
            self._out.append(data)
            return
        text = re.sub(r"\s+", " ", data)
        if not self._out or self._out[-1].endswith("\n"):
            text = text.lstrip()
        if text:
            self._out.append(text)

    def markdown(self) -> str:
        text = "".join(self._out)
        text = "\n".join(line.rstrip(" ") for line in text.split("\n"))
        return _EXTRA_BLANK_LINES.sub("\n\n", text).strip("\n")


class MarkdownConverter:
    """
    Converts note content between markdown and wire markup.

    The wire side is the fragment inside the envelope; wrapping it is the
    caller's job (see notesync.notes.envelope).
    """

    def __init__(self, extensions: list[str] | None = None) -> None:
        self.extensions = extensions if extensions is not None else ["fenced_code"]

    def to_wire_markup(self, markdown_text: str) -> str:
        """Render markdown as an XHTML fragment."""
        return md.markdown(
            markdown_text,
            extensions=self.extensions,
            output_format="xhtml",
        )

    def to_markdown(self, markup: str) -> str:
        """Render an XHTML fragment as markdown."""
        writer = _MarkdownWriter()
        writer.feed(markup)
        writer.close()
        return writer.markdown()
