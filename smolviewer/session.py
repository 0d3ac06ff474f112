"""Interactive line-command session.

Reads one command per line, dispatches it through a ``CommandRegistry`` and
runs navigations on a ``NavigationWorker`` so Ctrl-C abandons a slow fetch
without leaving the controller half-updated.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from . import config
from .errors import InvalidAddress, TransportError
from .navigation import NavigationController, PendingNavigation
from .render import InputRun, LinkRun
from .terminal import TerminalPresenter
from .worker import NavigationResult, NavigationWorker

POLL_INTERVAL_SECONDS = 0.05

logger = logging.getLogger(__name__)

CommandHandler = Callable[[str], bool | None]


@dataclass(frozen=True)
class CommandBinding:
    """Mapping from one or more command names to a handler taking the argument text."""

    names: tuple[str, ...]
    handler: CommandHandler


class CommandRegistry:
    """Small command-dispatch table keyed by the first word of a line."""

    def __init__(self, normalize: Callable[[str], str] | None = None) -> None:
        self._normalize = normalize if normalize is not None else self._identity
        self._handlers: dict[str, CommandHandler] = {}

    @staticmethod
    def _identity(name: str) -> str:
        return name

    def register_binding(self, binding: CommandBinding) -> CommandRegistry:
        """Register one binding, overwriting existing handlers for same names."""
        for name in binding.names:
            self._handlers[self._normalize(name)] = binding.handler
        return self

    def register_bindings(self, *bindings: CommandBinding) -> CommandRegistry:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def dispatch(self, line: str) -> bool | None:
        """Invoke the handler for ``line``; ``None`` means no such command."""
        stripped = line.strip()
        if not stripped:
            return None
        name, _, argument = stripped.partition(" ")
        handler = self._handlers.get(self._normalize(name))
        if handler is None:
            return None
        return handler(argument.strip())


class BrowserSession:
    """Owns the read/dispatch loop on the presentation thread."""

    def __init__(
        self,
        controller: NavigationController,
        presenter: TerminalPresenter,
        worker: NavigationWorker | None = None,
        read_line: Callable[[str], str] = input,
        poll_interval: float = POLL_INTERVAL_SECONDS,
    ) -> None:
        self.controller = controller
        self.presenter = presenter
        self.worker = worker if worker is not None else NavigationWorker(controller.load)
        self.read_line = read_line
        self.poll_interval = poll_interval
        self.running = True
        self.registry = CommandRegistry(normalize=str.lower).register_bindings(
            CommandBinding(("s", "search"), self._search),
            CommandBinding(("g", "go"), self._go),
            CommandBinding(("b", "back"), lambda _arg: self.navigate(lambda: controller.prepare_history(-1))),
            CommandBinding(("f", "forward"), lambda _arg: self.navigate(lambda: controller.prepare_history(1))),
            CommandBinding(("r", "reload"), lambda _arg: self.navigate(controller.prepare_reload)),
            CommandBinding(("h", "history"), self._history),
            CommandBinding(("home",), lambda _arg: self.navigate(lambda: controller.prepare_go(config.load_home()))),
            CommandBinding(("sethome",), self._set_home),
            CommandBinding(("?", "help"), self._help),
            CommandBinding(("q", "quit", "exit"), self._quit),
        )

    # -- navigation --------------------------------------------------------

    def navigate(self, prepare: Callable[[], PendingNavigation | None]) -> bool:
        """Run one navigation in the background and apply it if it is still current."""
        try:
            pending = prepare()
        except InvalidAddress as exc:
            self.controller.report_error(exc)
            return False
        if pending is None:
            return False

        self.worker.schedule(pending)
        try:
            result = self._wait()
        except KeyboardInterrupt:
            self.worker.cancel()
            logger.info("cancelled navigation to %s", pending.address.display_text())
            self.presenter.show_message("cancelled")
            return False

        if result.error is not None:
            if isinstance(result.error, (InvalidAddress, TransportError)):
                self.controller.report_error(result.error)
                return False
            raise result.error
        assert result.page is not None
        self.controller.apply(result.page)
        return True

    def _wait(self) -> NavigationResult:
        while True:
            result = self.worker.drain()
            if result is not None:
                return result
            time.sleep(self.poll_interval)

    # -- commands ----------------------------------------------------------

    def _parse_number(self, text: str) -> int | None:
        try:
            return int(text)
        except ValueError:
            self.presenter.show_error(f"not a link number: {text!r}")
            return None

    def _activate(self, number: int, query: str | None) -> bool:
        run = self.presenter.target(number)
        if run is None:
            self.presenter.show_error(f"no link [{number}] on this page")
            return False
        if isinstance(run, LinkRun):
            if query is not None:
                self.presenter.show_error(f"[{number}] is a link, not a search prompt")
                return False
            return self.navigate(lambda: self.controller.prepare_event(run.event))

        assert isinstance(run, InputRun)
        if query is None:
            try:
                query = self.read_line("query: ")
            except EOFError:
                return False
        return self.navigate(lambda: self.controller.prepare_event(run.submit(query)))

    def _search(self, argument: str) -> bool:
        number_text, _, query = argument.partition(" ")
        number = self._parse_number(number_text)
        if number is None:
            return False
        return self._activate(number, query.strip() or None)

    def _go(self, argument: str) -> bool:
        text = argument or None
        return self.navigate(lambda: self.controller.prepare_go(text))

    def _history(self, _argument: str) -> bool:
        history = self.controller.history
        self.presenter.show_history(history.entries, history.cursor)
        return True

    def _set_home(self, _argument: str) -> bool:
        address = self.controller.current_address
        if address is None:
            self.presenter.show_error("nothing loaded yet")
            return False
        config.save_home(address.display_text())
        self.presenter.show_message(f"home set to {address.display_text()}")
        return True

    def _help(self, _argument: str) -> bool:
        self.presenter.show_help()
        return True

    def _quit(self, _argument: str) -> bool:
        self.running = False
        return True

    # -- loop --------------------------------------------------------------

    def handle_line(self, line: str) -> bool | None:
        stripped = line.strip()
        if stripped.isdigit():
            return self._activate(int(stripped), None)
        handled = self.registry.dispatch(stripped)
        if handled is None and stripped:
            self.presenter.show_error(f"unknown command: {stripped.split()[0]!r} (? for help)")
        return handled

    def run(self, start: str | None = None) -> None:
        if start:
            self.navigate(lambda: self.controller.prepare_go(start))
        while self.running:
            try:
                line = self.read_line(self.presenter.prompt_text())
            except EOFError:
                break
            except KeyboardInterrupt:
                self.presenter.show_message("")
                continue
            self.handle_line(line)


def run_session(controller: NavigationController, presenter: TerminalPresenter, start: str | None = None) -> None:
    BrowserSession(controller, presenter).run(start)


__all__ = [
    "BrowserSession",
    "CommandBinding",
    "CommandRegistry",
    "run_session",
]
