"""User configuration for the editor.

Settings are read from ``config.json`` in the platform's user config
directory. The file is optional; missing, unreadable or invalid entries
fall back to defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

APP_NAME = "modaled"
CONFIG_FILENAME = "config.json"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class EditorConfig:
    """Settings that can be overridden by the user."""
    log_file: Optional[str] = None
    log_level: str = "WARNING"
    filler_marker: str = EditorConstants.FILLER_MARKER


def default_config_path() -> Path:
    """Location of the config file for this platform."""
    return Path(platformdirs.user_config_dir(APP_NAME)) / CONFIG_FILENAME


def validate_setting(key: str, value: Any) -> bool:
    """Check one setting value.

    Args:
        key: Setting key name.
        value: Setting value to validate.

    Returns:
        True if the value can be used for ``key``.
    """
    if key == 'log_file':
        return value is None or (isinstance(value, str) and bool(value))
    if key == 'log_level':
        return isinstance(value, str) and value.upper() in LOG_LEVELS
    if key == 'filler_marker':
        # Must occupy exactly one cell
        return isinstance(value, str) and len(value) == 1 and value.isprintable()
    return False


def _read_raw(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not load config from {path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file has invalid format (not a dict), ignoring")
        return {}
    return data


def load_config(path: Optional[Path] = None) -> EditorConfig:
    """Load settings, ignoring unknown keys and invalid values.

    Args:
        path: Config file to read. Defaults to :func:`default_config_path`.

    Returns:
        An EditorConfig; defaults for anything not set validly.
    """
    if path is None:
        path = default_config_path()
    config = EditorConfig()
    for key, value in _read_raw(path).items():
        if not hasattr(config, key):
            logger.warning(f"Unknown config key {key!r} in {path}, ignoring")
            continue
        if not validate_setting(key, value):
            logger.warning(f"Invalid value {value!r} for {key!r} in {path}, ignoring")
            continue
        if key == 'log_level':
            value = value.upper()
        setattr(config, key, value)
    return config
