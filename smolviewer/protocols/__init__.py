"""Per-protocol capability table.

Each ``ProtocolHandler`` bundles request framing and response parsing for
one ``ProtocolKind``. Navigation code only talks to ``build_request`` and
``parse`` here, so adding a protocol means adding one table row.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..address import Address, ProtocolKind
from ..document import DocumentElement
from . import gopher, nex, spartan, text


@dataclass(frozen=True)
class ProtocolHandler:
    """Request/parse capabilities for one protocol kind."""

    kind: ProtocolKind
    build_request: Callable[[Address], str]
    parse: Callable[[bytes, Address | None], list[DocumentElement]]
    # Kind used to parse the response to a submitted search/prompt.
    results_kind: ProtocolKind


_HANDLERS: dict[ProtocolKind, ProtocolHandler] = {
    ProtocolKind.GOPHER: ProtocolHandler(
        kind=ProtocolKind.GOPHER,
        build_request=gopher.build_request,
        parse=gopher.parse,
        results_kind=ProtocolKind.GOPHER,
    ),
    ProtocolKind.PLAINTEXT: ProtocolHandler(
        kind=ProtocolKind.PLAINTEXT,
        build_request=gopher.build_request,
        parse=text.parse_plaintext,
        results_kind=ProtocolKind.GOPHER,
    ),
    ProtocolKind.FINGER: ProtocolHandler(
        kind=ProtocolKind.FINGER,
        build_request=text.build_finger_request,
        parse=text.parse_finger,
        results_kind=ProtocolKind.FINGER,
    ),
    ProtocolKind.NEX: ProtocolHandler(
        kind=ProtocolKind.NEX,
        build_request=nex.build_request,
        parse=nex.parse,
        results_kind=ProtocolKind.NEX,
    ),
    ProtocolKind.SPARTAN: ProtocolHandler(
        kind=ProtocolKind.SPARTAN,
        build_request=spartan.build_request,
        parse=spartan.parse,
        results_kind=ProtocolKind.SPARTAN,
    ),
}


def handler_for(kind: ProtocolKind) -> ProtocolHandler:
    return _HANDLERS[kind]


def build_request(address: Address) -> str:
    """Frame the request body for ``address`` (terminator included)."""
    return handler_for(address.protocol_kind).build_request(address)


def parse(
    raw: bytes | str,
    protocol_kind: ProtocolKind,
    base: Address | None = None,
) -> list[DocumentElement]:
    """Parse a raw response for ``protocol_kind``.

    ``base`` is the address the response was fetched from; it is only used
    to resolve relative links.
    """
    return handler_for(protocol_kind).parse(raw, base)


def search_address(target: Address, query: str) -> Address:
    """Return the address that submitting ``query`` to ``target`` fetches."""
    results_kind = handler_for(target.protocol_kind).results_kind
    return target.with_query(query).with_kind(results_kind)


__all__ = [
    "ProtocolHandler",
    "build_request",
    "handler_for",
    "parse",
    "search_address",
]
