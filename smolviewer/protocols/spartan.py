"""Spartan request framing and response handling.

Requests are ``host path content-length CRLF`` followed by the uploaded
data (the prompt input). Responses start with ``<digit> <meta>``: 2 success,
3 redirect, 4 client error, 5 server error.
"""

from __future__ import annotations

from ..address import Address
from ..document import DocumentElement, ErrorOrUnknown, Info, Link, LinkKind
from ..errors import InvalidAddress
from . import gemtext
from .common import CRLF, absolute_path, decode, resolve_link, split_lines

STATUS_SUCCESS = "2"
STATUS_REDIRECT = "3"
STATUS_CLIENT_ERROR = "4"
STATUS_SERVER_ERROR = "5"
GEMTEXT_MIME = "text/gemini"


def build_request(address: Address) -> str:
    data = address.query.encode("utf-8")
    return f"{address.host} {absolute_path(address.selector)} {len(data)}{CRLF}{address.query}"


def _success(meta: str, body: str, base: Address | None) -> list[DocumentElement]:
    mime = meta.split(";", 1)[0].strip().lower()
    if not mime or mime == GEMTEXT_MIME:
        return gemtext.parse(body, base)
    if mime.startswith("text/"):
        return [Info("\n".join(split_lines(body)))]
    return [ErrorOrUnknown(f"unsupported content type: {mime}", raw_kind=STATUS_SUCCESS)]


def _redirect(meta: str, base: Address | None) -> list[DocumentElement]:
    try:
        target = resolve_link(base, meta)
    except InvalidAddress:
        return [ErrorOrUnknown(f"bad redirect: {meta}", raw_kind=STATUS_REDIRECT)]
    return [Link(f"Redirected to {meta.strip()}", target, LinkKind.OTHER)]


def parse(raw: bytes | str, base: Address | None = None) -> list[DocumentElement]:
    text = decode(raw)
    status_line, _, body = text.partition("\n")
    status_line = status_line.rstrip("\r")
    code, _, meta = status_line.partition(" ")

    if code == STATUS_SUCCESS:
        return _success(meta, body, base)
    if code == STATUS_REDIRECT:
        return _redirect(meta, base)
    if code in {STATUS_CLIENT_ERROR, STATUS_SERVER_ERROR}:
        return [ErrorOrUnknown(meta or status_line, raw_kind=code)]
    return [ErrorOrUnknown(status_line, raw_kind=code[:1])]


__all__ = [
    "GEMTEXT_MIME",
    "build_request",
    "parse",
]
