"""Configuration loading for gostat.

Settings come from ~/.config/gostat/config.toml when it exists, merged over
the defaults. There are no command-line flags.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

MIN_UPDATE_INTERVAL = 0.1

DEFAULT_CONFIG: dict[str, Any] = {
    "update_interval": 1.0,
    "docker_timeout": 5.0,
    "log_level": "WARNING",
}

_DEFAULT_PATH = Path.home() / ".config" / "gostat" / "config.toml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _validated(config: dict[str, Any]) -> dict[str, Any]:
    """Coerce known keys, falling back to defaults for unusable values."""
    result = dict(config)
    for key in ("update_interval", "docker_timeout"):
        try:
            result[key] = float(result[key])
        except (TypeError, ValueError):
            logger.warning("config: ignoring invalid %s = %r", key, result[key])
            result[key] = DEFAULT_CONFIG[key]
    result["update_interval"] = max(MIN_UPDATE_INTERVAL, result["update_interval"])
    level = str(result["log_level"]).upper()
    if level not in _LOG_LEVELS:
        logger.warning("config: ignoring unknown log_level %r", result["log_level"])
        level = DEFAULT_CONFIG["log_level"]
    result["log_level"] = level
    return result


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load configuration, merging user TOML over defaults.

    Args:
        path: Config file to read. Defaults to ~/.config/gostat/config.toml.
              A missing or invalid file leaves the defaults in place.

    Returns:
        Merged configuration dict.
    """
    path = path or _DEFAULT_PATH
    if not path.is_file():
        return dict(DEFAULT_CONFIG)
    try:
        user_config = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("config: ignoring unreadable %s: %s", path, e)
        return dict(DEFAULT_CONFIG)

    unknown = set(user_config) - set(DEFAULT_CONFIG)
    if unknown:
        logger.warning("config: ignoring unknown keys %s", ", ".join(sorted(unknown)))
    merged = {**DEFAULT_CONFIG, **{k: v for k, v in user_config.items() if k in DEFAULT_CONFIG}}
    return _validated(merged)
