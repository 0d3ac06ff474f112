"""Gopher request framing and Gophermap parsing.

Each Gophermap line is ``<kind><display>\\t<selector>\\t<host>\\t<port>``.
The parser is total: lines with too few fields collapse to a blank ``Info``
and unknown kinds become ``ErrorOrUnknown`` with the display text preserved.
"""

from __future__ import annotations

from ..address import MAX_PORT, MIN_PORT, Address, ProtocolKind
from ..document import BLANK, DocumentElement, ErrorOrUnknown, Info, Link, LinkKind, SearchPrompt
from ..errors import InvalidAddress
from .common import CRLF, decode, split_lines

DEFAULT_PORT = ProtocolKind.GOPHER.default_port
MIN_FIELDS = 4

KIND_FILE = "0"
KIND_DIRECTORY = "1"
KIND_SEARCH = "7"
KIND_INFO = "i"

# Line kind -> (link kind, protocol used to parse the linked document).
_LINK_KINDS: dict[str, tuple[LinkKind, ProtocolKind]] = {
    KIND_FILE: (LinkKind.FILE, ProtocolKind.PLAINTEXT),
    KIND_DIRECTORY: (LinkKind.DIRECTORY, ProtocolKind.GOPHER),
}


def build_request(address: Address) -> str:
    """Return ``selector CRLF`` or ``selector TAB query CRLF`` for searches."""
    if address.query:
        return f"{address.selector}\t{address.query}{CRLF}"
    return address.selector + CRLF


def parse_port(text: str) -> int:
    """Parse a port field, falling back to the Gopher default on junk."""
    try:
        port = int(text.strip())
    except ValueError:
        return DEFAULT_PORT
    if not MIN_PORT <= port <= MAX_PORT:
        return DEFAULT_PORT
    return port


def parse_line(line: str) -> DocumentElement:
    fields = line.split("\t")
    if len(fields) < MIN_FIELDS or not fields[0]:
        return BLANK
    head, selector, host, port_text = fields[:MIN_FIELDS]
    kind_char, text = head[0], head[1:]

    if kind_char == KIND_INFO:
        return Info(text)
    if kind_char != KIND_SEARCH and kind_char not in _LINK_KINDS:
        return ErrorOrUnknown(text, raw_kind=kind_char)

    target_kind = _LINK_KINDS[kind_char][1] if kind_char in _LINK_KINDS else ProtocolKind.GOPHER
    try:
        target = Address(
            host=host.strip(),
            port=parse_port(port_text),
            selector=selector,
            protocol_kind=target_kind,
        )
    except InvalidAddress:
        return ErrorOrUnknown(text, raw_kind=kind_char)

    if kind_char == KIND_SEARCH:
        return SearchPrompt(text, target)
    return Link(text, target, _LINK_KINDS[kind_char][0])


def parse(raw: bytes | str, base: Address | None = None) -> list[DocumentElement]:
    """Parse a Gophermap into one element per line."""
    return [parse_line(line) for line in split_lines(decode(raw))]


__all__ = [
    "DEFAULT_PORT",
    "build_request",
    "parse",
    "parse_line",
    "parse_port",
]
