"""Document element model produced by the response parsers.

``DocumentElement`` is a closed union of four frozen dataclasses. Parsers
emit exactly one element per response line; renderers switch on the type.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .address import Address


class LinkKind(Enum):
    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"


class TextStyle(Enum):
    """Presentation hint for informational text."""

    PLAIN = "plain"
    HEADING1 = "heading1"
    HEADING2 = "heading2"
    HEADING3 = "heading3"
    QUOTE = "quote"
    LIST = "list"
    PREFORMATTED = "preformatted"


@dataclass(frozen=True)
class Info:
    text: str
    style: TextStyle = TextStyle.PLAIN
    # Highlight hint: alt text of a preformatted block or a text file's name.
    alt: str = ""


@dataclass(frozen=True)
class Link:
    text: str
    target: Address
    kind: LinkKind = LinkKind.OTHER


@dataclass(frozen=True)
class SearchPrompt:
    text: str
    target: Address


@dataclass(frozen=True)
class ErrorOrUnknown:
    text: str
    raw_kind: str = ""


DocumentElement = Info | Link | SearchPrompt | ErrorOrUnknown

BLANK = Info("")


__all__ = [
    "BLANK",
    "DocumentElement",
    "ErrorOrUnknown",
    "Info",
    "Link",
    "LinkKind",
    "SearchPrompt",
    "TextStyle",
]
