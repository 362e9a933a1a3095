"""Persistent JSON config helpers.

Stores the default repository, highlighting style, API endpoint and other
preferences. All access is defensive: malformed or missing config falls back
to defaults. Navigation state itself is never persisted.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .errors import InvalidSourceIdentity
from .source.github import DEFAULT_API_URL, DEFAULT_TIMEOUT_SECONDS
from .source.types import SourceIdentity

logger = logging.getLogger(__name__)

APP_NAME = "repoview"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_SOURCE = "denoland/deno"
DEFAULT_STYLE = "monokai"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ExplorerConfig:
    """Component configuration: which repository to show and whether it can change."""

    source_identity: SourceIdentity
    search_enabled: bool = False


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
        logger.warning("Ignoring unreadable config %s: %s", CONFIG_PATH, exc)
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
        logger.warning("Could not write config %s: %s", CONFIG_PATH, exc)


def _load_str(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _load_bool(key: str) -> bool:
    """Only explicit boolean values are accepted; anything else is ``False``."""
    value = load_config().get(key)
    return bool(value) if isinstance(value, bool) else False


def load_default_source() -> SourceIdentity:
    """Return the configured default repository, or ``denoland/deno``."""
    raw = _load_str("default_source")
    if raw is not None:
        try:
            return SourceIdentity.parse(raw)
        except InvalidSourceIdentity:
            logger.warning("Ignoring invalid default_source %r", raw)
    return SourceIdentity.parse(DEFAULT_SOURCE)


def save_default_source(identity: SourceIdentity) -> None:
    config = load_config()
    config["default_source"] = str(identity)
    save_config(config)


def load_style() -> str:
    return _load_str("style") or DEFAULT_STYLE


def load_theme_name() -> str | None:
    return _load_str("theme")


def load_api_url() -> str:
    return _load_str("api_url") or DEFAULT_API_URL


def load_timeout_seconds() -> float:
    """Return a positive request timeout; invalid values fall back to the default."""
    value = load_config().get("timeout_seconds")
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return DEFAULT_TIMEOUT_SECONDS
    return float(value)


def load_search_enabled() -> bool:
    return _load_bool("search_enabled")


def load_show_hidden() -> bool:
    return _load_bool("show_hidden")


def load_log_level() -> str:
    value = (_load_str("log_level") or DEFAULT_LOG_LEVEL).upper()
    return value if value in LOG_LEVELS else DEFAULT_LOG_LEVEL


__all__ = [
    "CONFIG_PATH",
    "DEFAULT_SOURCE",
    "ExplorerConfig",
    "load_config",
    "save_config",
    "load_default_source",
    "save_default_source",
    "load_style",
    "load_theme_name",
    "load_api_url",
    "load_timeout_seconds",
    "load_search_enabled",
    "load_show_hidden",
    "load_log_level",
]
