"""
Helper utilities for PowerSearch.

Provides:
- Settings loading from TOML with defaults
- Building the configured store and switch targets from settings
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import toml
from loguru import logger


def _config_home() -> Path:
    return Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")


def _data_home() -> Path:
    return Path(os.environ.get("XDG_DATA_HOME") or Path.home() / ".local" / "share")


def default_settings_path() -> Path:
    """Location of settings.toml (XDG config dir)."""
    return _config_home() / "powersearch" / "settings.toml"


def default_settings() -> Dict[str, Any]:
    return {
        "storage": {
            "path": str(_data_home() / "powersearch" / "engines.json"),
            "key": "customEngines",
        },
        "targets": {
            "engines": [],
        },
    }


def load_settings(settings_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from a TOML file.

    Args:
        settings_path: File to read, defaults to default_settings_path()

    Returns:
        Dictionary containing settings with defaults applied

    Example settings.toml:
        [storage]
        path = "~/.local/share/powersearch/engines.json"

        [[targets.engines]]
        name = "Kagi"
        url = "https://kagi.com/search?q={query}"
        icon = "🔎"
    """
    defaults = default_settings()
    settings_path = Path(settings_path) if settings_path else default_settings_path()

    if not settings_path.exists():
        logger.debug(f"Settings file not found at {settings_path}, using defaults")
        return defaults

    try:
        loaded = toml.load(settings_path)
    except (OSError, toml.TomlDecodeError):
        logger.exception(f"Could not load settings from {settings_path}, using defaults")
        return defaults

    return _deep_merge(defaults, loaded)


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary with defaults
        override: Dictionary with overrides

    Returns:
        Merged dictionary (override takes precedence)
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def store_from_settings(settings: Dict[str, Any]):
    """Build the JSON-file backed custom engine store."""
    from powersearch.services.storage import (
        DEFAULT_KEY,
        CustomEngineStore,
        JsonFileKeyValueStore,
    )

    storage = settings.get("storage", {})
    kv = JsonFileKeyValueStore(storage.get("path") or default_settings()["storage"]["path"])
    return CustomEngineStore(kv, key=storage.get("key") or DEFAULT_KEY)


def targets_from_settings(settings: Dict[str, Any]) -> list:
    """
    Switch targets configured in [[targets.engines]].

    Falls back to DEFAULT_TARGETS when none are configured. Rows without
    a name or url are skipped.
    """
    from powersearch.engines.builtin import DEFAULT_TARGETS
    from powersearch.search.targets import DEFAULT_ICON, SwitchTarget

    rows = settings.get("targets", {}).get("engines") or DEFAULT_TARGETS

    targets = []
    for i, row in enumerate(rows):
        if not isinstance(row, dict) or not row.get("name") or not row.get("url"):
            logger.warning(f"Skipping malformed target #{i}: needs 'name' and 'url'")
            continue
        targets.append(SwitchTarget(
            name=str(row["name"]).strip(),
            url=str(row["url"]).strip(),
            icon=row.get("icon") or DEFAULT_ICON,
        ))
    return targets
