"""Nex request framing and directory parsing.

Directories (paths ending in ``/``) are line lists where ``=> target
[label]`` lines are links; every other document is plain text.
"""

from __future__ import annotations

from ..address import Address
from ..document import DocumentElement, ErrorOrUnknown, Info, Link, LinkKind
from ..errors import InvalidAddress
from .common import CRLF, absolute_path, decode, is_directory_path, resolve_link, split_lines

LINK_PREFIX = "=> "


def build_request(address: Address) -> str:
    return absolute_path(address.selector) + CRLF


def parse_line(line: str, base: Address | None) -> DocumentElement:
    if not line.startswith(LINK_PREFIX):
        return Info(line)
    parts = line[len(LINK_PREFIX):].strip().split(maxsplit=1)
    if not parts:
        return Info(line)
    target_text = parts[0]
    label = parts[1].strip() if len(parts) > 1 else target_text
    try:
        target = resolve_link(base, target_text)
    except InvalidAddress:
        return ErrorOrUnknown(line, raw_kind="=>")
    kind = LinkKind.DIRECTORY if is_directory_path(target.selector) else LinkKind.FILE
    return Link(label, target, kind)


def parse(raw: bytes | str, base: Address | None = None) -> list[DocumentElement]:
    """Parse a Nex response; non-directory documents are a single text block."""
    lines = split_lines(decode(raw))
    if base is not None and not is_directory_path(base.selector):
        return [Info("\n".join(lines))]
    return [parse_line(line, base) for line in lines]


__all__ = [
    "LINK_PREFIX",
    "build_request",
    "parse",
    "parse_line",
]
