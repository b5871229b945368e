"""Configuration loader for diff options.

Reads defaults from a JSON file (default: ``.npm-version-diff.json`` in the
working directory) and merges explicit overrides on top. Every key is
optional:

``mode`` (``"npm"`` or ``"pnpm"``), ``include`` / ``omit`` (lists of
dependency types), ``directOnly`` and ``git`` (booleans), ``gitLockFile``
(string).
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from .errors import VersionDiffError
from .options import DiffOptions

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = ".npm-version-diff.json"
CONFIG_PATH_ENV_VAR = "NPM_VERSION_DIFF_CONFIG"


class ConfigError(VersionDiffError):
    """Raised when the configuration file cannot be loaded or is invalid."""


def _resolve_config_path(path: Path | str | None = None) -> tuple[Path, bool]:
    """Resolve the configuration file path and whether it was asked for explicitly.

    Priority:
    1. Explicit path argument
    2. NPM_VERSION_DIFF_CONFIG environment variable
    3. Default path (.npm-version-diff.json in the working directory)
    """
    if path is not None:
        return Path(path), True

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path), True

    return Path.cwd() / DEFAULT_CONFIG_NAME, False


def _read_types(data: dict[str, Any], key: str) -> tuple[str, ...] | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be an array of strings")
    return tuple(value)


def _read_bool(data: dict[str, Any], key: str) -> bool | None:
    value = data.get(key)
    if value is not None and not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be a boolean")
    return value


def _read_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and (not isinstance(value, str) or not value):
        raise ConfigError(f"'{key}' must be a non-empty string")
    return value


def read_settings(path: Path | str | None = None) -> dict[str, Any]:
    """Load the settings file and return option keyword arguments.

    A missing default file yields an empty mapping; a missing file that was
    named explicitly (argument or environment variable) is an error.

    Raises:
        ConfigError: If the file cannot be read or contains invalid data.
    """
    config_path, explicit = _resolve_config_path(path)

    if not config_path.exists():
        if explicit:
            raise ConfigError(f"Configuration file not found: {config_path}")
        return {}

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object")

    logger.debug("Loaded settings from %s", config_path)

    settings = {
        "mode": _read_str(data, "mode"),
        "include": _read_types(data, "include"),
        "omit": _read_types(data, "omit"),
        "direct_only": _read_bool(data, "directOnly"),
        "git": _read_bool(data, "git"),
        "git_lock_file": _read_str(data, "gitLockFile"),
    }
    return {key: value for key, value in settings.items() if value is not None}


def load_options(path: Path | str | None = None, **overrides: Any) -> DiffOptions:
    """Build DiffOptions from the settings file with ``overrides`` applied.

    Overrides whose value is None are ignored so CLI flags that were not given
    fall through to the file (and then to DiffOptions defaults).
    """
    settings = read_settings(path)
    settings.update({key: value for key, value in overrides.items() if value is not None})
    for key in ("include", "omit"):
        if key in settings:
            settings[key] = tuple(settings[key])
    try:
        return DiffOptions(**settings)
    except (TypeError, ValueError) as exc:
        raise ConfigError(str(exc)) from exc
