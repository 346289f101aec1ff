"""Navigator configuration and JSON settings loading.

Settings live in a JSON file (``~/.gridnav/settings.json`` by default, or the
path in ``$GRIDNAV_CONFIG``) using camelCase keys::

    {
      "cache": true,
      "resetAxis": true,
      "duplicatePolicy": "first-wins",
      "cacheRejectedMoves": true,
      "keybindings": {"back": ["backspace", "h"]}
    }
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from gridnav.registry import DUPLICATE_POLICIES, DuplicatePolicy

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".gridnav"
SETTINGS_FILE_NAME = "settings.json"
CONFIG_ENV_VAR = "GRIDNAV_CONFIG"


@dataclass(frozen=True)
class NavigatorConfig:
    """Options fixed for the lifetime of a navigator."""

    # Remember the column last visited on each row.
    cache: bool = False
    # Force the column to 0 on every row change, before the cache override.
    reset_axis: bool = True
    duplicate_policy: DuplicatePolicy = "first-wins"
    # Keep the column recorded for the row being left even when the move is
    # rejected for lack of an element at the target.
    cache_rejected_moves: bool = True

    def __post_init__(self) -> None:
        if self.duplicate_policy not in DUPLICATE_POLICIES:
            raise ValueError(
                f"unknown duplicate policy {self.duplicate_policy!r}, "
                f"expected one of {DUPLICATE_POLICIES}"
            )


@dataclass
class Settings:
    """Everything read from a settings file."""

    navigator: NavigatorConfig = field(default_factory=NavigatorConfig)
    keybindings: dict[str, str | list[str]] = field(default_factory=dict)


_NAVIGATOR_KEYS: dict[str, str] = {
    "cache": "cache",
    "resetAxis": "reset_axis",
    "duplicatePolicy": "duplicate_policy",
    "cacheRejectedMoves": "cache_rejected_moves",
}


def navigator_config_from_dict(data: dict[str, Any]) -> NavigatorConfig:
    """Build a ``NavigatorConfig`` from camelCase (or snake_case) keys.

    Unknown keys are ignored; ``None`` values keep the default.  Flags must
    be JSON booleans; anything else raises ``ValueError``.
    """
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        attr = _NAVIGATOR_KEYS.get(key)
        if attr is None and key in _NAVIGATOR_KEYS.values():
            attr = key
        if attr is None or value is None:
            continue
        if attr == "duplicate_policy":
            kwargs[attr] = str(value)
        elif isinstance(value, bool):
            kwargs[attr] = value
        else:
            raise ValueError(f"{key!r} must be true or false, got {value!r}")
    return NavigatorConfig(**kwargs)


def navigator_config_to_dict(config: NavigatorConfig) -> dict[str, Any]:
    return {key: getattr(config, attr) for key, attr in _NAVIGATOR_KEYS.items()}


def settings_from_dict(data: dict[str, Any]) -> Settings:
    keybindings = data.get("keybindings") or {}
    if not isinstance(keybindings, dict):
        raise ValueError("'keybindings' must be an object mapping actions to keys")
    return Settings(
        navigator=navigator_config_from_dict(data),
        keybindings=dict(keybindings),
    )


def get_settings_path() -> Path:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / CONFIG_DIR_NAME / SETTINGS_FILE_NAME


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from *path* (or the default location).

    A missing file yields defaults.  An unreadable or malformed file is
    logged and also yields defaults.
    """
    settings_path = Path(path) if path is not None else get_settings_path()
    if not settings_path.exists():
        logger.debug("No settings file at %s; using defaults", settings_path)
        return Settings()
    try:
        data = json.loads(settings_path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("settings file must contain a JSON object")
        return settings_from_dict(data)
    except (OSError, ValueError) as e:
        logger.warning("Error reading settings from %s: %s", settings_path, e)
        return Settings()


def apply_overrides(config: NavigatorConfig, **overrides: Any) -> NavigatorConfig:
    """Return a copy of *config* with non-``None`` overrides applied."""
    changes = {k: v for k, v in overrides.items() if v is not None}
    if not changes:
        return config
    return replace(config, **changes)
