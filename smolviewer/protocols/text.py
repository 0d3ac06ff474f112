"""Plain-text documents: Finger responses and Gopher text files.

The whole body becomes a single ``Info`` block; no per-line classification.
"""

from __future__ import annotations

from ..address import Address
from ..document import DocumentElement, Info
from .common import CRLF, decode, split_lines

GOPHER_EOF_MARKER = "."


def build_finger_request(address: Address) -> str:
    """Finger queries are the bare user name (possibly empty) plus CRLF."""
    return address.selector.lstrip("/") + CRLF


def parse_finger(raw: bytes | str, base: Address | None = None) -> list[DocumentElement]:
    return [Info("\n".join(split_lines(decode(raw))))]


def parse_plaintext(raw: bytes | str, base: Address | None = None) -> list[DocumentElement]:
    """Parse a Gopher text file, dropping the lone ``.`` end marker if present."""
    lines = split_lines(decode(raw))
    if lines and lines[-1] == GOPHER_EOF_MARKER:
        lines.pop()
    name = base.selector.rsplit("/", 1)[-1] if base is not None else ""
    return [Info("\n".join(lines), alt=name)]


__all__ = [
    "build_finger_request",
    "parse_finger",
    "parse_plaintext",
]
