"""Navigation controller: resolve, fetch, parse, render, record.

Every navigation is split into three steps so the fetch can run off the
presentation thread:

* ``prepare_*`` decides what to fetch (pure, may raise ``InvalidAddress``),
* ``load`` fetches, parses and renders (no state mutation, may raise
  ``TransportError``),
* ``apply`` updates history, the displayed document and the address bar.

The synchronous ``go``/``dispatch``/``back``/``forward``/``reload`` methods
run all three in order. A failure before ``apply`` leaves state untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from .address import PLAINTEXT_SUFFIX, Address, ProtocolKind, resolve
from .document import DocumentElement
from .errors import InvalidAddress, TransportError
from .events import LinkActivated, NavigationEvent, SearchSubmitted
from .history import HistoryManager
from .network import Transport
from .protocols import build_request, parse, search_address
from .render import DisplayInstruction, render

logger = logging.getLogger(__name__)


class Presenter(Protocol):
    def get_address_bar_text(self) -> str:
        ...

    def set_address_bar_text(self, text: str) -> None:
        ...

    def show(self, instructions: list[DisplayInstruction]) -> None:
        ...

    def show_error(self, message: str) -> None:
        ...


@dataclass(frozen=True)
class PendingNavigation:
    """A navigation that has been decided but not yet fetched."""

    address: Address
    protocol_kind: ProtocolKind
    request_body: str
    record: bool = True
    # Set for back/forward replays: history index to move the cursor to.
    history_index: int | None = None


@dataclass(frozen=True)
class LoadedPage:
    pending: PendingNavigation
    elements: list[DocumentElement]
    instructions: list[DisplayInstruction]


class NavigationController:
    """Single writer of history and displayed-document state."""

    def __init__(
        self,
        transport: Transport,
        presenter: Presenter,
        history: HistoryManager | None = None,
        default_kind: ProtocolKind = ProtocolKind.GOPHER,
    ) -> None:
        self.transport = transport
        self.presenter = presenter
        self.history = history if history is not None else HistoryManager()
        self.default_kind = default_kind
        self.document: list[DocumentElement] = []
        self.instructions: list[DisplayInstruction] = []
        self.current_address: Address | None = None

    # -- prepare -----------------------------------------------------------

    def _pending(self, address: Address, *, record: bool = True, history_index: int | None = None) -> PendingNavigation:
        return PendingNavigation(
            address=address,
            protocol_kind=address.protocol_kind,
            request_body=build_request(address),
            record=record,
            history_index=history_index,
        )

    def prepare_go(self, text: str | None = None) -> PendingNavigation:
        """Resolve address-bar text (or ``text``) into a new navigation."""
        raw = self.presenter.get_address_bar_text() if text is None else text
        address = resolve(raw, self.default_kind)
        if address.protocol_kind is ProtocolKind.GOPHER and address.selector.endswith(PLAINTEXT_SUFFIX):
            address = address.with_kind(ProtocolKind.PLAINTEXT)
        return self._pending(address)

    def prepare_event(self, event: NavigationEvent) -> PendingNavigation:
        if isinstance(event, LinkActivated):
            return self._pending(event.target)
        if isinstance(event, SearchSubmitted):
            return self._pending(search_address(event.target, event.query))
        raise TypeError(f"unsupported navigation event: {event!r}")

    def prepare_history(self, offset: int) -> PendingNavigation | None:
        """Replay the entry ``offset`` steps away, or ``None`` when there is none."""
        index = self.history.cursor + offset
        if offset == 0 or not 0 <= index < len(self.history):
            return None
        entry = self.history.entries[index]
        address = entry.address.with_kind(entry.protocol_kind)
        return self._pending(address, record=False, history_index=index)

    def prepare_reload(self) -> PendingNavigation | None:
        if not len(self.history):
            return None
        entry = self.history.current()
        return self._pending(entry.address.with_kind(entry.protocol_kind), record=False)

    # -- load / apply ------------------------------------------------------

    def load(self, pending: PendingNavigation) -> LoadedPage:
        """Fetch and parse ``pending``; safe to call off the presentation thread."""
        address = pending.address
        body = self.transport.fetch(address.host, address.port, pending.request_body)
        elements = parse(body, pending.protocol_kind, base=address)
        return LoadedPage(pending=pending, elements=elements, instructions=render(elements))

    def apply(self, page: LoadedPage) -> None:
        pending = page.pending
        if pending.history_index is not None:
            self.history.step(pending.history_index - self.history.cursor)
        elif pending.record:
            self.history.add_entry(pending.address, pending.protocol_kind)

        self.document = page.elements
        self.instructions = page.instructions
        self.current_address = pending.address
        self.presenter.show(page.instructions)
        self.presenter.set_address_bar_text(pending.address.display_text())
        logger.info("displayed %s (%d elements)", pending.address.display_text(), len(page.elements))

    def report_error(self, exc: BaseException) -> None:
        logger.warning("navigation failed: %s", exc)
        self.presenter.show_error(str(exc))

    def _run(self, prepare: Callable[[], PendingNavigation | None]) -> bool:
        try:
            pending = prepare()
            if pending is None:
                return False
            page = self.load(pending)
        except (InvalidAddress, TransportError) as exc:
            self.report_error(exc)
            return False
        self.apply(page)
        return True

    # -- triggers ----------------------------------------------------------

    def go(self, text: str | None = None) -> bool:
        """Navigate to address-bar text (or ``text``) and record it in history."""
        return self._run(lambda: self.prepare_go(text))

    def dispatch(self, event: NavigationEvent) -> bool:
        """Follow a link activation or submit a search prompt."""
        return self._run(lambda: self.prepare_event(event))

    def back(self) -> bool:
        """Replay the previous entry; a no-op returning ``False`` at the start."""
        return self._run(lambda: self.prepare_history(-1))

    def forward(self) -> bool:
        """Replay the next entry; a no-op returning ``False`` at the end."""
        return self._run(lambda: self.prepare_history(1))

    def reload(self) -> bool:
        return self._run(self.prepare_reload)


__all__ = [
    "LoadedPage",
    "NavigationController",
    "PendingNavigation",
    "Presenter",
]
