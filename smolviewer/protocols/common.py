"""Helpers shared by the per-protocol parsers and request builders."""

from __future__ import annotations

from urllib.parse import unquote, urljoin, urlsplit

from ..address import Address, resolve
from ..errors import InvalidAddress

CRLF = "\r\n"


def decode(raw: bytes | str) -> str:
    """Decode a response body as UTF-8, replacing undecodable bytes."""
    if isinstance(raw, str):
        return raw
    return bytes(raw).decode("utf-8", errors="replace")


def split_lines(text: str) -> list[str]:
    """Split on CRLF (lone LF accepted).

    A single trailing terminator does not produce an extra empty line.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def absolute_path(selector: str) -> str:
    return selector if selector.startswith("/") else "/" + selector


def is_directory_path(selector: str) -> bool:
    return not selector or selector.endswith("/")


def resolve_link(base: Address | None, target: str) -> Address:
    """Resolve a link target found in a document served from ``base``.

    ``scheme://`` targets resolve on their own; anything else is joined to
    the base selector with URL path semantics (``..`` and ``.`` collapse).
    Raises ``InvalidAddress`` when the target cannot be resolved.
    """
    target = target.strip()
    if not target:
        raise InvalidAddress("empty link target")
    if "://" in target:
        return resolve(target)
    if base is None:
        raise InvalidAddress(f"relative link without base address: {target!r}")
    if target.startswith("//"):
        return resolve(f"{base.protocol_kind.scheme}:{target}")

    joined = urlsplit(urljoin("http://base" + absolute_path(base.selector), target))
    return Address(
        host=base.host,
        port=base.port,
        selector=joined.path or "/",
        protocol_kind=base.protocol_kind,
        query=unquote(joined.query),
    )


__all__ = [
    "CRLF",
    "absolute_path",
    "decode",
    "is_directory_path",
    "resolve_link",
    "split_lines",
]
