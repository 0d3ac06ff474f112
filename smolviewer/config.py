"""Persistent JSON config helpers.

Stores the home address, UI theme, Pygments style, network timeout and
history behavior. Missing or malformed config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from .address import ProtocolKind, kind_from_name
from .highlight import DEFAULT_STYLE
from .history import MAX_HISTORY_ENTRIES
from .network import DEFAULT_TIMEOUT_SECONDS

APP_NAME = "smolviewer"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_HOME = "gopher.floodgap.com"

HISTORY_MODE_TRUNCATE = "truncate"
HISTORY_MODE_APPEND = "append"
HISTORY_MODES = (HISTORY_MODE_TRUNCATE, HISTORY_MODE_APPEND)

logger = logging.getLogger(__name__)


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored so a read-only config
    directory never breaks browsing.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not write config %s: %s", CONFIG_PATH, exc)


def _load_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _save_string(key: str, value: str) -> None:
    stripped = str(value).strip()
    if not stripped:
        return
    config = load_config()
    config[key] = stripped
    save_config(config)


def load_home() -> str:
    """Address loaded at startup when none is given on the command line."""
    return _load_string("home") or DEFAULT_HOME


def save_home(address_text: str) -> None:
    _save_string("home", address_text)


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    return _load_string("theme")


def save_theme_name(theme_name: str) -> None:
    _save_string("theme", theme_name)


def load_style_name() -> str:
    return _load_string("style") or DEFAULT_STYLE


def load_default_protocol() -> ProtocolKind:
    """Protocol assumed for addresses typed without a ``scheme://`` prefix."""
    return kind_from_name(_load_string("default_protocol")) or ProtocolKind.GOPHER


def load_timeout() -> float:
    """Network timeout in seconds; booleans and non-positive values are ignored."""
    value = load_config().get("timeout")
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return DEFAULT_TIMEOUT_SECONDS
    return float(value)


def load_history_mode() -> str:
    value = _load_string("history_mode")
    if value is None or value.lower() not in HISTORY_MODES:
        return HISTORY_MODE_TRUNCATE
    return value.lower()


def load_max_history() -> int:
    value = load_config().get("max_history")
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return MAX_HISTORY_ENTRIES
    return value


__all__ = [
    "CONFIG_PATH",
    "DEFAULT_HOME",
    "DEFAULT_STYLE",
    "HISTORY_MODES",
    "HISTORY_MODE_APPEND",
    "HISTORY_MODE_TRUNCATE",
    "load_config",
    "load_default_protocol",
    "load_history_mode",
    "load_home",
    "load_max_history",
    "load_style_name",
    "load_theme_name",
    "load_timeout",
    "save_config",
    "save_home",
    "save_theme_name",
]
