"""Syntax highlighting for preformatted blocks and fetched text files.

Pygments is imported on first use to keep startup light. Remote text is
sanitized first so control bytes from a server cannot drive the terminal.
"""

from __future__ import annotations

import re
from pathlib import PurePosixPath

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

_PYGMENTS_READY = False
_PYGMENTS_HIGHLIGHT = None
_PYGMENTS_GET_LEXER_BY_NAME = None
_PYGMENTS_GET_LEXER_FOR_FILENAME = None
_PYGMENTS_TERMINAL_FORMATTER = None
_PYGMENTS_GET_STYLE_BY_NAME = None
_PYGMENTS_CLASS_NOT_FOUND: type[Exception] = LookupError
_PYGMENTS_FORMATTERS: dict[str, object] = {}
_PYGMENTS_VALID_STYLES: set[str] = set()
_PYGMENTS_INVALID_STYLES: set[str] = set()


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def _ensure_pygments_loaded() -> None:
    global _PYGMENTS_READY
    global _PYGMENTS_HIGHLIGHT
    global _PYGMENTS_GET_LEXER_BY_NAME
    global _PYGMENTS_GET_LEXER_FOR_FILENAME
    global _PYGMENTS_TERMINAL_FORMATTER
    global _PYGMENTS_GET_STYLE_BY_NAME
    global _PYGMENTS_CLASS_NOT_FOUND

    if _PYGMENTS_READY:
        return

    from pygments import highlight as pygments_highlight
    from pygments.formatters import TerminalFormatter
    from pygments.lexers import get_lexer_by_name, get_lexer_for_filename
    from pygments.styles import get_style_by_name
    from pygments.util import ClassNotFound

    _PYGMENTS_HIGHLIGHT = pygments_highlight
    _PYGMENTS_GET_LEXER_BY_NAME = get_lexer_by_name
    _PYGMENTS_GET_LEXER_FOR_FILENAME = get_lexer_for_filename
    _PYGMENTS_TERMINAL_FORMATTER = TerminalFormatter
    _PYGMENTS_GET_STYLE_BY_NAME = get_style_by_name
    _PYGMENTS_CLASS_NOT_FOUND = ClassNotFound
    _PYGMENTS_READY = True


def _normalize_style(style: str) -> str:
    if style in _PYGMENTS_VALID_STYLES:
        return style
    if style in _PYGMENTS_INVALID_STYLES:
        return DEFAULT_STYLE

    assert _PYGMENTS_GET_STYLE_BY_NAME is not None
    try:
        _PYGMENTS_GET_STYLE_BY_NAME(style)
    except _PYGMENTS_CLASS_NOT_FOUND:
        _PYGMENTS_INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _PYGMENTS_VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str):
    formatter = _PYGMENTS_FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    assert _PYGMENTS_TERMINAL_FORMATTER is not None
    formatter = _PYGMENTS_TERMINAL_FORMATTER(style=style)
    _PYGMENTS_FORMATTERS[style] = formatter
    return formatter


def _highlight_with(source: str, lexer, style: str) -> str:
    assert _PYGMENTS_HIGHLIGHT is not None
    rendered = _PYGMENTS_HIGHLIGHT(source, lexer, _formatter_for_style(_normalize_style(style)))
    # Lexers append a newline the source may not have had.
    if rendered.endswith("\n") and not source.endswith("\n"):
        rendered = rendered[:-1]
    return rendered


def lexer_name_for_alt(alt: str) -> str:
    """First word of a preformatted block's alt text, lowercased."""
    words = alt.strip().split()
    return words[0].lower() if words else ""


def highlight_block(source: str, alt: str, style: str = DEFAULT_STYLE) -> str:
    """Highlight a preformatted block using its alt text as the language name.

    Unknown or missing language names return the sanitized text unchanged.
    """
    source = sanitize_terminal_text(source)
    name = lexer_name_for_alt(alt)
    if not name or not source:
        return source

    _ensure_pygments_loaded()
    assert _PYGMENTS_GET_LEXER_BY_NAME is not None
    try:
        lexer = _PYGMENTS_GET_LEXER_BY_NAME(name)
    except _PYGMENTS_CLASS_NOT_FOUND:
        return source
    return _highlight_with(source, lexer, style)


def highlight_for_filename(source: str, selector: str, style: str = DEFAULT_STYLE) -> str:
    """Highlight a fetched text file by the file name at the end of ``selector``."""
    source = sanitize_terminal_text(source)
    filename = PurePosixPath(selector.strip() or "/").name
    if not filename or not source:
        return source

    _ensure_pygments_loaded()
    assert _PYGMENTS_GET_LEXER_FOR_FILENAME is not None
    try:
        lexer = _PYGMENTS_GET_LEXER_FOR_FILENAME(filename, source)
    except _PYGMENTS_CLASS_NOT_FOUND:
        return source
    return _highlight_with(source, lexer, style)


__all__ = [
    "DEFAULT_STYLE",
    "highlight_block",
    "highlight_for_filename",
    "lexer_name_for_alt",
    "sanitize_terminal_text",
]
