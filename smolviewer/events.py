"""Navigation event messages emitted by rendered documents.

Activating a link or submitting a prompt produces one of these values; the
navigation controller consumes them. Rendering never captures closures.
"""

from __future__ import annotations

from dataclasses import dataclass

from .address import Address
from .document import LinkKind


@dataclass(frozen=True)
class LinkActivated:
    target: Address
    kind: LinkKind = LinkKind.OTHER


@dataclass(frozen=True)
class SearchSubmitted:
    target: Address
    query: str


NavigationEvent = LinkActivated | SearchSubmitted


__all__ = [
    "LinkActivated",
    "NavigationEvent",
    "SearchSubmitted",
]
