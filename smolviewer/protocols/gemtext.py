"""Gemtext line parser, used for Spartan documents.

Recognizes links (``=>``), Spartan input prompts (``=:``), headings,
quotes, list items and preformatted blocks. Every line yields exactly one
element; preformat toggle lines yield a blank ``Info``.
"""

from __future__ import annotations

from ..address import Address
from ..document import BLANK, DocumentElement, ErrorOrUnknown, Info, Link, LinkKind, SearchPrompt, TextStyle
from ..errors import InvalidAddress
from .common import is_directory_path, resolve_link, split_lines

LINK_PREFIX = "=>"
PROMPT_PREFIX = "=:"
PREFORMAT_TOGGLE = "```"

_HEADINGS: tuple[tuple[str, TextStyle], ...] = (
    ("###", TextStyle.HEADING3),
    ("##", TextStyle.HEADING2),
    ("#", TextStyle.HEADING1),
)


def _split_target(rest: str) -> tuple[str, str] | None:
    parts = rest.strip().split(maxsplit=1)
    if not parts:
        return None
    target = parts[0]
    label = parts[1].strip() if len(parts) > 1 else target
    return target, label


def _link_line(line: str, prefix: str, base: Address | None) -> DocumentElement:
    split = _split_target(line[len(prefix):])
    if split is None:
        return Info(line)
    target_text, label = split
    try:
        target = resolve_link(base, target_text)
    except InvalidAddress:
        return ErrorOrUnknown(line, raw_kind=prefix)
    if prefix == PROMPT_PREFIX:
        return SearchPrompt(label, target)
    kind = LinkKind.DIRECTORY if is_directory_path(target.selector) else LinkKind.FILE
    return Link(label, target, kind)


def parse_line(line: str, base: Address | None) -> DocumentElement:
    if line.startswith(LINK_PREFIX):
        return _link_line(line, LINK_PREFIX, base)
    if line.startswith(PROMPT_PREFIX):
        return _link_line(line, PROMPT_PREFIX, base)
    for marker, style in _HEADINGS:
        if line.startswith(marker):
            return Info(line[len(marker):].strip(), style)
    if line.startswith(">"):
        return Info(line[1:].strip(), TextStyle.QUOTE)
    if line.startswith("* "):
        return Info(line[2:], TextStyle.LIST)
    return Info(line)


def parse(text: str, base: Address | None = None) -> list[DocumentElement]:
    elements: list[DocumentElement] = []
    preformatted = False
    alt = ""
    for line in split_lines(text):
        if line.startswith(PREFORMAT_TOGGLE):
            preformatted = not preformatted
            alt = line[len(PREFORMAT_TOGGLE):].strip() if preformatted else ""
            elements.append(BLANK)
        elif preformatted:
            elements.append(Info(line, TextStyle.PREFORMATTED, alt))
        else:
            elements.append(parse_line(line, base))
    return elements


__all__ = [
    "LINK_PREFIX",
    "PREFORMAT_TOGGLE",
    "PROMPT_PREFIX",
    "parse",
    "parse_line",
]
