"""
Wire Envelope.

Note bodies travel as an XML document with a fixed declaration and doctype
and a single en-note root element. Note.body holds only the content
inside the root.
"""

import re

XML_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>'
    '<!DOCTYPE en-note SYSTEM "http://xml.evernote.com/pub/enml2.dtd">'
)
ROOT_OPEN = "<en-note>"
ROOT_CLOSE = "</en-note>"

EMPTY_DOCUMENT = XML_HEADER + ROOT_OPEN + ROOT_CLOSE

_ROOT_RE = re.compile(r"<en-note\b[^>]*>(.*)</en-note>", re.DOTALL)
_EMPTY_ROOT_RE = re.compile(r"<en-note\b[^>]*/>")


def wrap(content: str) -> str:
    """Wrap content in the envelope."""
    return f"{XML_HEADER}{ROOT_OPEN}{content}{ROOT_CLOSE}"


def unwrap(document: str) -> str:
    """
    Return the content inside the en-note root.

    A self-closing root yields an empty string. A document without a root
    element is returned unchanged.
    """
    match = _ROOT_RE.search(document)
    if match:
        return match.group(1)
    if _EMPTY_ROOT_RE.search(document):
        return ""
    return document
