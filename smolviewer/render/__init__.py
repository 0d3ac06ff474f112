"""Document renderer: document elements to abstract display instructions.

Rendering is a pure transformation. Each element becomes one
``DisplayInstruction`` row made of typed runs; interactive runs carry the
navigation event they produce instead of a callback.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..document import DocumentElement, ErrorOrUnknown, Info, Link, LinkKind, SearchPrompt, TextStyle
from ..events import LinkActivated, SearchSubmitted
from ..address import Address

ICON_FILE = "file"
ICON_FOLDER = "folder"
ICON_QUESTION = "question"
ICON_SEARCH = "search"

_LINK_ICONS: dict[LinkKind, str] = {
    LinkKind.FILE: ICON_FILE,
    LinkKind.DIRECTORY: ICON_FOLDER,
    LinkKind.OTHER: ICON_QUESTION,
}


@dataclass(frozen=True)
class TextRun:
    text: str
    style: TextStyle = TextStyle.PLAIN
    italic: bool = False
    alt: str = ""


@dataclass(frozen=True)
class IconRun:
    name: str


@dataclass(frozen=True)
class LinkRun:
    text: str
    event: LinkActivated


@dataclass(frozen=True)
class InputRun:
    """Input field plus submit action for a search prompt."""

    target: Address

    def submit(self, query: str) -> SearchSubmitted:
        return SearchSubmitted(self.target, query)


Run = TextRun | IconRun | LinkRun | InputRun
InteractiveRun = LinkRun | InputRun


@dataclass(frozen=True)
class DisplayInstruction:
    """One rendered row."""

    runs: tuple[Run, ...]

    @property
    def plain_text(self) -> str:
        return " ".join(
            run.text for run in self.runs if isinstance(run, (TextRun, LinkRun)) and run.text
        )


def link_icon(kind: LinkKind) -> str:
    return _LINK_ICONS.get(kind, ICON_QUESTION)


def render_element(element: DocumentElement) -> DisplayInstruction:
    if isinstance(element, Info):
        return DisplayInstruction((TextRun(element.text, element.style, alt=element.alt),))
    if isinstance(element, Link):
        return DisplayInstruction(
            (
                IconRun(link_icon(element.kind)),
                LinkRun(element.text, LinkActivated(element.target, element.kind)),
            )
        )
    if isinstance(element, SearchPrompt):
        return DisplayInstruction(
            (
                IconRun(ICON_SEARCH),
                TextRun(element.text),
                InputRun(element.target),
            )
        )
    if isinstance(element, ErrorOrUnknown):
        return DisplayInstruction((IconRun(ICON_QUESTION), TextRun(element.text, italic=True)))
    raise TypeError(f"unsupported document element: {element!r}")


def render(elements: Iterable[DocumentElement]) -> list[DisplayInstruction]:
    """Map each element to exactly one display instruction, in order."""
    return [render_element(element) for element in elements]


def interactive_targets(instructions: Iterable[DisplayInstruction]) -> list[InteractiveRun]:
    """Return link and input runs in display order (presenters number these)."""
    out: list[InteractiveRun] = []
    for instruction in instructions:
        for run in instruction.runs:
            if isinstance(run, (LinkRun, InputRun)):
                out.append(run)
    return out


__all__ = [
    "DisplayInstruction",
    "ICON_FILE",
    "ICON_FOLDER",
    "ICON_QUESTION",
    "ICON_SEARCH",
    "IconRun",
    "InputRun",
    "InteractiveRun",
    "LinkRun",
    "Run",
    "TextRun",
    "interactive_targets",
    "link_icon",
    "render",
    "render_element",
]
