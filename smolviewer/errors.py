"""Exception taxonomy shared by resolver, transport, parsers and history.

Resolver and transport failures abort a navigation and are reported to the
presenter. Parse anomalies never escape the parsers.
"""

from __future__ import annotations


class SmolviewerError(Exception):
    """Base class for all smolviewer errors."""


class InvalidAddress(SmolviewerError, ValueError):
    """User-entered address could not be turned into an ``Address``."""


class TransportError(SmolviewerError, OSError):
    """Network exchange failed (refused, timed out, reset, ...)."""


class HistoryError(SmolviewerError):
    """Base class for history precondition violations."""


class EmptyHistory(HistoryError):
    """``current()`` was requested before any entry was recorded."""


class NoHistory(HistoryError):
    """A back/forward step was requested where none is possible."""


__all__ = [
    "SmolviewerError",
    "InvalidAddress",
    "TransportError",
    "HistoryError",
    "EmptyHistory",
    "NoHistory",
]
