"""Blocking TCP transport used by the navigation controller.

``Transport`` is the only network seam the core depends on; tests swap in
fakes. ``SocketTransport`` sends one request and reads until the server
closes the connection, which is how every supported protocol frames replies.
"""

from __future__ import annotations

import logging
import socket
from typing import Protocol

from .errors import TransportError

DEFAULT_TIMEOUT_SECONDS = 15.0
DEFAULT_MAX_BYTES = 8 * 1024 * 1024
READ_CHUNK_BYTES = 64 * 1024

logger = logging.getLogger(__name__)


class Transport(Protocol):
    def fetch(self, host: str, port: int, request_body: str) -> bytes:
        ...


class SocketTransport:
    """Plain-TCP request/response exchange."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        max_bytes: int = DEFAULT_MAX_BYTES,
    ) -> None:
        self.timeout = timeout
        self.max_bytes = max(1, max_bytes)

    def fetch(self, host: str, port: int, request_body: str) -> bytes:
        logger.debug("connecting to %s:%d", host, port)
        chunks: list[bytes] = []
        received = 0
        try:
            with socket.create_connection((host, port), timeout=self.timeout) as sock:
                sock.sendall(request_body.encode("utf-8"))
                while received < self.max_bytes:
                    chunk = sock.recv(READ_CHUNK_BYTES)
                    if not chunk:
                        break
                    chunks.append(chunk)
                    received += len(chunk)
        except (OSError, ValueError) as exc:
            # IDNA rejects empty or overlong host labels with UnicodeError.
            raise TransportError(f"{host}:{port}: {exc}") from exc

        if received >= self.max_bytes:
            logger.warning("response from %s:%d truncated at %d bytes", host, port, self.max_bytes)
        logger.debug("received %d bytes from %s:%d", received, host, port)
        return b"".join(chunks)[: self.max_bytes]


__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "SocketTransport",
    "Transport",
]
