"""Command-line front door for smolviewer.

Parses CLI options, merges them with persisted config and wires the
controller, transport and terminal presenter together. Then either renders
one page and exits or starts the interactive session.
"""

from __future__ import annotations

import argparse
import logging
import sys

from . import config
from .address import ProtocolKind, kind_from_name
from .history import HistoryManager
from .navigation import NavigationController
from .network import SocketTransport
from .session import run_session
from .terminal import TerminalPresenter
from .ui_theme import available_theme_names, normalize_theme_name, resolve_theme

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _positive_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be > 0")
    return parsed


def configure_logging(verbosity: int) -> None:
    """WARNING by default, INFO with ``-v``, DEBUG with ``-vv``."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smolviewer",
        description="Browse Gopher, Finger, Nex and Spartan sites in the terminal.",
    )
    parser.add_argument(
        "address",
        nargs="?",
        default=None,
        help="Address to open, e.g. gopher.floodgap.com or spartan://mozz.us. Defaults to the configured home.",
    )
    parser.add_argument(
        "--protocol",
        choices=[kind.value for kind in ProtocolKind],
        default=None,
        help="Protocol for addresses without a scheme:// prefix (default: gopher).",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}). Saved for later sessions.",
    )
    parser.add_argument("--style", default=None, help="Pygments style name for preformatted text.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--render", action="store_true", help="Fetch and print ADDRESS once, then exit.")
    parser.add_argument(
        "--max-cols",
        type=_positive_int,
        default=None,
        help="Column width for output (default: terminal width).",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_float,
        default=None,
        help="Network timeout in seconds.",
    )
    parser.add_argument(
        "--history-mode",
        choices=config.HISTORY_MODES,
        default=None,
        help="Whether visiting a page drops forward history (truncate) or keeps it (append).",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Log more (-v info, -vv debug).")
    return parser


def main() -> None:
    """Parse CLI arguments and open the requested address.

    Output is one-shot when ``--render`` is given or stdin is not a
    terminal; a failed one-shot fetch exits with status 1.
    """
    args = build_parser().parse_args()
    configure_logging(args.verbose)

    default_kind = kind_from_name(args.protocol) if args.protocol else config.load_default_protocol()
    if args.theme is not None:
        theme_name = normalize_theme_name(args.theme)
        config.save_theme_name(theme_name)
    else:
        theme_name = config.load_theme_name()
    no_color = args.no_color or not sys.stdout.isatty()
    history_mode = args.history_mode or config.load_history_mode()

    presenter = TerminalPresenter(
        sys.stdout,
        sys.stderr,
        theme=resolve_theme(theme_name, no_color=no_color),
        style=args.style or config.load_style_name(),
        max_cols=args.max_cols,
        highlight=not no_color,
    )
    controller = NavigationController(
        SocketTransport(timeout=args.timeout or config.load_timeout()),
        presenter,
        HistoryManager(
            config.load_max_history(),
            truncate_forward=history_mode == config.HISTORY_MODE_TRUNCATE,
        ),
        default_kind=default_kind or ProtocolKind.GOPHER,
    )
    address = args.address or config.load_home()

    if args.render or not sys.stdin.isatty():
        if not controller.go(address):
            raise SystemExit(1)
        return

    run_session(controller, presenter, address)


if __name__ == "__main__":
    main()
