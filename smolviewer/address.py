"""Address model and the free-text address resolver.

An ``Address`` is the immutable (host, port, selector, protocol) tuple every
fetch is made against. ``resolve`` turns address-bar text into one and
``Address.display_text`` turns one back into address-bar text.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from .errors import InvalidAddress

PRIMARY_SCHEME = "gopher"
# Gopher text files outside this suffix need an explicit scheme to stay text.
TEXT_SCHEME = "text"
PLAINTEXT_SUFFIX = ".txt"
MIN_PORT = 1
MAX_PORT = 65535


class ProtocolKind(Enum):
    """Closed set of supported protocols (and document flavours)."""

    GOPHER = "gopher"
    PLAINTEXT = "plaintext"
    FINGER = "finger"
    NEX = "nex"
    SPARTAN = "spartan"

    @property
    def traits(self) -> ProtocolTraits:
        return _TRAITS[self]

    @property
    def default_port(self) -> int:
        return _TRAITS[self].default_port

    @property
    def scheme(self) -> str:
        return _TRAITS[self].scheme


@dataclass(frozen=True)
class ProtocolTraits:
    """Static addressing facts for one protocol kind."""

    scheme: str
    default_port: int
    # First marker is used for display; all are accepted when resolving.
    query_markers: tuple[str, ...] = ()


_TRAITS: dict[ProtocolKind, ProtocolTraits] = {
    ProtocolKind.GOPHER: ProtocolTraits("gopher", 70, ("%09", "\t")),
    ProtocolKind.PLAINTEXT: ProtocolTraits("gopher", 70, ("%09", "\t")),
    ProtocolKind.FINGER: ProtocolTraits("finger", 79),
    ProtocolKind.NEX: ProtocolTraits("nex", 1900),
    ProtocolKind.SPARTAN: ProtocolTraits("spartan", 300, ("?",)),
}

_SCHEME_KINDS: dict[str, ProtocolKind] = {
    "gopher": ProtocolKind.GOPHER,
    TEXT_SCHEME: ProtocolKind.PLAINTEXT,
    "finger": ProtocolKind.FINGER,
    "nex": ProtocolKind.NEX,
    "spartan": ProtocolKind.SPARTAN,
}


def kind_for_scheme(scheme: str) -> ProtocolKind:
    """Map a URL scheme to its protocol kind, raising ``InvalidAddress`` if unknown."""
    kind = _SCHEME_KINDS.get(scheme.strip().lower())
    if kind is None:
        raise InvalidAddress(f"unsupported scheme: {scheme!r}")
    return kind


def kind_from_name(name: str | None) -> ProtocolKind | None:
    """Return the protocol kind for a CLI/config name, or ``None`` when unknown."""
    if not name:
        return None
    candidate = str(name).strip().lower()
    for kind in ProtocolKind:
        if kind.value == candidate:
            return kind
    return _SCHEME_KINDS.get(candidate)


@dataclass(frozen=True)
class Address:
    """Resolved fetch target.

    ``query`` carries a submitted search string so that replaying an entry
    from history repeats the same search.
    """

    host: str
    port: int
    selector: str = ""
    protocol_kind: ProtocolKind = ProtocolKind.GOPHER
    query: str = ""

    def __post_init__(self) -> None:
        if not self.host:
            raise InvalidAddress("address has no host")
        if isinstance(self.port, bool) or not isinstance(self.port, int):
            raise InvalidAddress(f"port must be an integer: {self.port!r}")
        if not MIN_PORT <= self.port <= MAX_PORT:
            raise InvalidAddress(f"port out of range: {self.port}")

    def with_query(self, query: str) -> Address:
        return replace(self, query=query)

    def with_kind(self, protocol_kind: ProtocolKind) -> Address:
        return replace(self, protocol_kind=protocol_kind)

    def display_text(self) -> str:
        """Return the human-facing address shown in the address bar."""
        traits = self.protocol_kind.traits
        scheme = traits.scheme
        if self.protocol_kind is ProtocolKind.PLAINTEXT and not self.selector.endswith(PLAINTEXT_SUFFIX):
            scheme = TEXT_SCHEME
        prefix = "" if scheme == PRIMARY_SCHEME else f"{scheme}://"
        host = self.host if self.port == traits.default_port else f"{self.host}:{self.port}"
        if self.protocol_kind is ProtocolKind.FINGER:
            return f"{prefix}{self.selector}@{host}" if self.selector else f"{prefix}{host}"

        text = prefix + host
        selector = self.selector[1:] if self.selector.startswith("/") else self.selector
        if selector:
            text += "/" + selector
        if self.query and traits.query_markers:
            text += traits.query_markers[0] + self.query
        return text

    def __str__(self) -> str:
        return self.display_text()


def _split_port(host_part: str, default_port: int) -> tuple[str, int]:
    if ":" not in host_part:
        return host_part, default_port
    host, _, port_text = host_part.rpartition(":")
    if not port_text:
        return host, default_port
    try:
        port = int(port_text)
    except ValueError as exc:
        raise InvalidAddress(f"invalid port: {port_text!r}") from exc
    if not MIN_PORT <= port <= MAX_PORT:
        raise InvalidAddress(f"port out of range: {port}")
    return host, port


def _split_query(selector: str, markers: tuple[str, ...]) -> tuple[str, str]:
    for marker in markers:
        if marker in selector:
            head, _, query = selector.partition(marker)
            return head, query
    return selector, ""


def resolve(raw_input: str, protocol_kind: ProtocolKind = ProtocolKind.GOPHER) -> Address:
    """Parse address-bar text into an ``Address``.

    The first ``/``-separated segment is the host (optionally ``host:port``)
    and the remainder is the selector. A ``scheme://`` prefix overrides
    ``protocol_kind``; ``gopher://`` keeps a ``PLAINTEXT`` hint since both
    share the Gopher transport. ``text://`` forces ``PLAINTEXT`` for any
    selector.
    """
    text = (raw_input or "").strip()
    if not text:
        raise InvalidAddress("empty address")

    kind = protocol_kind
    if "://" in text:
        scheme, text = text.split("://", 1)
        kind = kind_for_scheme(scheme)
        if kind is ProtocolKind.GOPHER and protocol_kind is ProtocolKind.PLAINTEXT:
            kind = ProtocolKind.PLAINTEXT

    host_part, _, selector = text.partition("/")
    if kind is ProtocolKind.FINGER and "@" in host_part:
        user, _, host_part = host_part.rpartition("@")
        selector = f"{user}/{selector}" if selector else user

    host, port = _split_port(host_part, kind.default_port)
    if not host:
        raise InvalidAddress(f"address has no host: {raw_input!r}")
    selector, query = _split_query(selector, kind.traits.query_markers)
    return Address(host=host, port=port, selector=selector, protocol_kind=kind, query=query)


__all__ = [
    "Address",
    "ProtocolKind",
    "ProtocolTraits",
    "PLAINTEXT_SUFFIX",
    "PRIMARY_SCHEME",
    "TEXT_SCHEME",
    "kind_for_scheme",
    "kind_from_name",
    "resolve",
]
