"""Help text for the interactive session commands."""

from __future__ import annotations

from ..ui_theme import UITheme

HELP_SECTIONS: tuple[tuple[str, tuple[tuple[str, str], ...]], ...] = (
    (
        "NAVIGATE",
        (
            ("<n>", "follow link n (prompts ask for a query)"),
            ("s <n> <query>", "submit query to search prompt n"),
            ("g <address>", "go to address (gopher://, finger://, nex://, spartan://)"),
            ("b / f", "back / forward"),
            ("r", "reload current page"),
        ),
    ),
    (
        "SESSION",
        (
            ("h", "show history"),
            ("home", "go to the home address"),
            ("sethome", "save current address as home"),
            ("?", "help"),
            ("q", "quit"),
        ),
    ),
)


def help_lines(theme: UITheme) -> list[str]:
    """Themed help rows, one command per row."""
    key_width = max(len(key) for _, rows in HELP_SECTIONS for key, _ in rows)
    lines: list[str] = []
    for title, rows in HELP_SECTIONS:
        if lines:
            lines.append("")
        lines.append(f"{theme.help_heading}{title}{theme.reset}")
        for key, description in rows:
            padding = " " * (key_width - len(key))
            lines.append(f"  {theme.help_key}{key}{theme.reset}{padding}  {theme.help_dim}{description}{theme.reset}")
    return lines


__all__ = ["HELP_SECTIONS", "help_lines"]
