"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes (document rows, address bar, help).
Syntax highlighting style for preformatted text remains a separate setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the terminal presenter."""

    name: str
    divider: str
    reset: str
    italic: str
    text: str
    heading: str
    quote: str
    list_bullet: str
    link: str
    link_index: str
    icon: str
    prompt: str
    error_text: str
    address_bar: str
    status_error: str
    help_heading: str
    help_key: str
    help_dim: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reset="\033[0m",
    italic="\033[3m",
    text="\033[38;5;252m",
    heading="\033[1;38;5;81m",
    quote="\033[2;38;5;250m",
    list_bullet="\033[38;5;44m",
    link="\033[4;38;5;110m",
    link_index="\033[38;5;229m",
    icon="\033[38;5;44m",
    prompt="\033[38;5;214m",
    error_text="\033[3;38;5;250m",
    address_bar="\033[7m",
    status_error="\033[1;38;5;203m",
    help_heading="\033[1;38;5;81m",
    help_key="\033[38;5;229m",
    help_dim="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reset="\033[0m",
    italic="\033[3m",
    text="\033[38;5;252m",
    heading="\033[1;38;5;45m",
    quote="\033[2;38;5;110m",
    list_bullet="\033[38;5;39m",
    link="\033[4;38;5;117m",
    link_index="\033[38;5;153m",
    icon="\033[38;5;39m",
    prompt="\033[38;5;215m",
    error_text="\033[3;38;5;110m",
    address_bar="\033[7;38;5;45m",
    status_error="\033[1;38;5;210m",
    help_heading="\033[1;38;5;45m",
    help_key="\033[38;5;153m",
    help_dim="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reset="",
    italic="",
    text="",
    heading="",
    quote="",
    list_bullet="",
    link="",
    link_index="",
    icon="",
    prompt="",
    error_text="",
    address_bar="",
    status_error="",
    help_heading="",
    help_key="",
    help_dim="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
