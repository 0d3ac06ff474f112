"""Background navigation loader with latest-request-wins semantics.

Fetch and parse run on a daemon thread; results are handed back to the
presentation thread through a queue. Only the result of the most recently
scheduled request is ever returned, so a newer navigation supersedes an
in-flight one instead of racing with it.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from queue import Empty, Queue

from .navigation import LoadedPage, PendingNavigation


@dataclass(frozen=True)
class NavigationRequest:
    request_id: int
    pending: PendingNavigation


@dataclass(frozen=True)
class NavigationResult:
    """Completed load: exactly one of ``page`` / ``error`` is set."""

    request: NavigationRequest
    page: LoadedPage | None = None
    error: Exception | None = None


class NavigationWorker:
    """Single-threaded loader; scheduling replaces any not-yet-started request."""

    def __init__(self, load: Callable[[PendingNavigation], LoadedPage]) -> None:
        self._load = load
        self._lock = threading.Lock()
        self._pending: NavigationRequest | None = None
        self._running = False
        self._next_request_id = 1
        self._latest_request_id = 0
        self._results: Queue[NavigationResult] = Queue()

    def _worker(self) -> None:
        while True:
            with self._lock:
                request = self._pending
                self._pending = None
                if request is None:
                    self._running = False
                    return

            try:
                page = self._load(request.pending)
            except Exception as exc:
                self._results.put(NavigationResult(request=request, error=exc))
                continue
            self._results.put(NavigationResult(request=request, page=page))

    @property
    def busy(self) -> bool:
        with self._lock:
            return self._running or self._pending is not None

    def schedule(self, pending: PendingNavigation) -> int:
        """Queue ``pending`` (replacing unstarted work) and return its request id."""
        with self._lock:
            request_id = self._next_request_id
            self._next_request_id += 1
            self._latest_request_id = request_id
            self._pending = NavigationRequest(request_id=request_id, pending=pending)
            if self._running:
                return request_id
            self._running = True

        worker = threading.Thread(
            target=self._worker,
            name="smolviewer-navigation",
            daemon=True,
        )
        worker.start()
        return request_id

    def cancel(self) -> None:
        """Discard pending work and ignore the result of any in-flight load."""
        with self._lock:
            self._pending = None
            self._latest_request_id = self._next_request_id
            self._next_request_id += 1

    def drain(self) -> NavigationResult | None:
        """Return the latest request's result if it has arrived, dropping stale ones."""
        latest: NavigationResult | None = None
        while True:
            try:
                result = self._results.get_nowait()
            except Empty:
                break
            with self._lock:
                current_id = self._latest_request_id
            if result.request.request_id == current_id:
                latest = result
        return latest


__all__ = [
    "NavigationRequest",
    "NavigationResult",
    "NavigationWorker",
]
