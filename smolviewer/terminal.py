"""Line-oriented ANSI presenter for display instructions.

Draws each instruction as one or more terminal rows: icons become short
glyphs, links and search prompts get ``[n]`` numbers the session uses to
activate them, and preformatted blocks and text files are highlighted.
"""

from __future__ import annotations

import shutil
import sys
from collections.abc import Iterable, Sequence
from typing import TextIO

from .ansi import build_screen_lines
from .document import TextStyle
from .highlight import DEFAULT_STYLE, highlight_block, highlight_for_filename, sanitize_terminal_text
from .history import HistoryEntry
from .render import (
    ICON_FILE,
    ICON_FOLDER,
    ICON_QUESTION,
    ICON_SEARCH,
    DisplayInstruction,
    IconRun,
    InputRun,
    InteractiveRun,
    LinkRun,
    TextRun,
    interactive_targets,
)
from .render.help import help_lines
from .ui_theme import DEFAULT_THEME, UITheme

ICON_GLYPHS: dict[str, str] = {
    ICON_FILE: "≡",
    ICON_FOLDER: "▸",
    ICON_QUESTION: "?",
    ICON_SEARCH: "⌕",
}
LIST_BULLET = "•"
QUOTE_BAR = "│"


def _default_width() -> int:
    return max(1, shutil.get_terminal_size((80, 24)).columns)


def _preformatted_alt(instruction: DisplayInstruction) -> str | None:
    """Alt text when ``instruction`` is a single preformatted row, else ``None``."""
    if len(instruction.runs) != 1:
        return None
    run = instruction.runs[0]
    if isinstance(run, TextRun) and run.style is TextStyle.PREFORMATTED:
        return run.alt
    return None


class TerminalPresenter:
    """``Presenter`` that writes themed rows to a text stream."""

    def __init__(
        self,
        out: TextIO | None = None,
        err: TextIO | None = None,
        *,
        theme: UITheme = DEFAULT_THEME,
        style: str = DEFAULT_STYLE,
        max_cols: int | None = None,
        wrap: bool = True,
        highlight: bool = True,
    ) -> None:
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self.theme = theme
        self.style = style
        self.max_cols = max_cols
        self.wrap = wrap
        self.highlight = highlight
        self.address_bar_text = ""
        self.targets: list[InteractiveRun] = []

    # -- Presenter protocol ------------------------------------------------

    def get_address_bar_text(self) -> str:
        return self.address_bar_text

    def set_address_bar_text(self, text: str) -> None:
        self.address_bar_text = text

    def show(self, instructions: list[DisplayInstruction]) -> None:
        self.targets = interactive_targets(instructions)
        self._write_lines(self.format_lines(instructions))

    def show_error(self, message: str) -> None:
        theme = self.theme
        self.err.write(f"{theme.status_error}error:{theme.reset} {sanitize_terminal_text(message)}\n")
        self.err.flush()

    # -- session helpers ---------------------------------------------------

    def target(self, number: int) -> InteractiveRun | None:
        """Interactive run labelled ``[number]`` on the current page."""
        if not 1 <= number <= len(self.targets):
            return None
        return self.targets[number - 1]

    def show_message(self, message: str) -> None:
        self._write_lines([f"{self.theme.help_dim}{message}{self.theme.reset}"])

    def show_help(self) -> None:
        self._write_lines(help_lines(self.theme))

    def show_history(self, entries: Sequence[HistoryEntry], cursor: int) -> None:
        theme = self.theme
        if not entries:
            self.show_message("history is empty")
            return
        lines = []
        for index, entry in enumerate(entries):
            marker = ">" if index == cursor else " "
            lines.append(
                f"{theme.link_index}{marker}{index + 1:>3}{theme.reset} "
                f"{entry.display_text()} {theme.help_dim}({entry.protocol_kind.value}){theme.reset}"
            )
        self._write_lines(lines)

    def prompt_text(self) -> str:
        theme = self.theme
        return f"{theme.address_bar} {self.address_bar_text} {theme.reset} > "

    # -- drawing -----------------------------------------------------------

    @property
    def width(self) -> int:
        return self.max_cols if self.max_cols is not None else _default_width()

    def format_lines(self, instructions: Iterable[DisplayInstruction]) -> list[str]:
        """Turn instructions into screen rows fitted to ``width``."""
        width = self.width
        pending = list(instructions)
        lines: list[str] = []
        number = 0
        i = 0
        while i < len(pending):
            alt = _preformatted_alt(pending[i])
            if alt is not None:
                block: list[str] = []
                while i < len(pending) and _preformatted_alt(pending[i]) == alt:
                    run = pending[i].runs[0]
                    assert isinstance(run, TextRun)
                    block.append(run.text)
                    i += 1
                lines.extend(build_screen_lines(self._preformatted(block, alt), width, wrap=False))
                continue

            row, number = self._format_row(pending[i], number)
            lines.extend(build_screen_lines(row, width, wrap=self.wrap) if row else [""])
            i += 1
        return lines

    def _preformatted(self, block: list[str], alt: str) -> str:
        source = "\n".join(block)
        if not self.highlight:
            return sanitize_terminal_text(source)
        return highlight_block(source, alt, self.style)

    def _format_row(self, instruction: DisplayInstruction, number: int) -> tuple[str, int]:
        theme = self.theme
        parts: list[str] = []
        for run in instruction.runs:
            if isinstance(run, IconRun):
                glyph = ICON_GLYPHS.get(run.name, ICON_GLYPHS[ICON_QUESTION])
                parts.append(f"{theme.icon}{glyph}{theme.reset}")
            elif isinstance(run, LinkRun):
                number += 1
                parts.append(
                    f"{theme.link_index}[{number}]{theme.reset} "
                    f"{theme.link}{sanitize_terminal_text(run.text)}{theme.reset}"
                )
            elif isinstance(run, InputRun):
                number += 1
                parts.append(f"{theme.link_index}[{number}]{theme.reset} {theme.prompt}(query){theme.reset}")
            elif isinstance(run, TextRun):
                text = self._text(run)
                if text:
                    parts.append(text)
        return " ".join(parts), number

    def _text(self, run: TextRun) -> str:
        theme = self.theme
        if run.italic:
            return f"{theme.error_text}{sanitize_terminal_text(run.text)}{theme.reset}"
        if run.style is TextStyle.PLAIN and run.alt and self.highlight and "\n" in run.text:
            return highlight_for_filename(run.text, run.alt, self.style)

        text = sanitize_terminal_text(run.text)
        if not text:
            return ""
        if run.style in (TextStyle.HEADING1, TextStyle.HEADING2, TextStyle.HEADING3):
            return f"{theme.heading}{text}{theme.reset}"
        if run.style is TextStyle.QUOTE:
            return f"{theme.quote}{QUOTE_BAR} {text}{theme.reset}"
        if run.style is TextStyle.LIST:
            return f"{theme.list_bullet}{LIST_BULLET}{theme.reset} {theme.text}{text}{theme.reset}"
        return f"{theme.text}{text}{theme.reset}"

    def _write_lines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.out.write(line)
            if "\033" in line:
                self.out.write("\033[0m")
            self.out.write("\n")
        self.out.flush()


__all__ = [
    "ICON_GLYPHS",
    "TerminalPresenter",
]
