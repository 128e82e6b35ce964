"""Settings persistence -- load, validate and save ``settings.yaml``."""

from __future__ import annotations

import os
from pathlib import Path

import yaml

from autogenre.models.config import AppSettings
from autogenre.utils.constants import (
    CONFIG_PATH_ENV_VAR,
    DEFAULT_BACKUP_BEFORE_CHANGES,
    DEFAULT_CONFIG_DIRNAME,
    DEFAULT_CONFIG_FILENAME,
    DEFAULT_FOLDER_PATTERN,
    DEFAULT_LOG_LEVEL,
    DEFAULT_ORGANIZE_FILES,
    DEFAULT_PROVIDER_TIMEOUT_SECONDS,
    DEFAULT_RENAME_FILES,
    PATTERN_PLACEHOLDERS,
)
from autogenre.utils.logger import get_logger

logger = get_logger("config")

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

_BOOL_DEFAULTS = {
    "backup_before_changes": DEFAULT_BACKUP_BEFORE_CHANGES,
    "organize_files": DEFAULT_ORGANIZE_FILES,
    "rename_files": DEFAULT_RENAME_FILES,
}


def default_settings_path() -> Path:
    """Return the settings file location.

    ``$AUTOGENRE_CONFIG`` wins; otherwise ``~/.config/autogenre/settings.yaml``.
    """
    override = os.environ.get(CONFIG_PATH_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / DEFAULT_CONFIG_DIRNAME / DEFAULT_CONFIG_FILENAME


def validate_settings(raw: dict) -> list[str]:
    """Validate raw settings values and return a list of warnings.

    Invalid values are replaced with their defaults in place, so the dict
    can be handed to ``AppSettings.from_dict()`` afterwards.

    Checks:
    - folder_pattern is a string containing at least one placeholder
    - the behaviour toggles are booleans
    - provider_timeout is a positive number
    - log_level is a known logging level

    Args:
        raw: Settings dictionary (e.g. straight from YAML).

    Returns:
        List of human-readable warning strings. Empty if all checks pass.
    """
    warnings: list[str] = []

    pattern = raw.get("folder_pattern", DEFAULT_FOLDER_PATTERN)
    if not isinstance(pattern, str) or not any(p in pattern for p in PATTERN_PLACEHOLDERS):
        warnings.append(
            f"folder_pattern {pattern!r} contains no placeholder "
            f"({', '.join(PATTERN_PLACEHOLDERS)}). "
            f"Using default ({DEFAULT_FOLDER_PATTERN!r})."
        )
        raw["folder_pattern"] = DEFAULT_FOLDER_PATTERN

    for key, default in _BOOL_DEFAULTS.items():
        value = raw.get(key, default)
        if not isinstance(value, bool):
            warnings.append(f"{key} must be true or false, got {value!r}. Using default ({default}).")
            raw[key] = default

    timeout = raw.get("provider_timeout", DEFAULT_PROVIDER_TIMEOUT_SECONDS)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        warnings.append(
            f"provider_timeout must be a positive number, got {timeout!r}. "
            f"Using default ({DEFAULT_PROVIDER_TIMEOUT_SECONDS})."
        )
        raw["provider_timeout"] = DEFAULT_PROVIDER_TIMEOUT_SECONDS

    level = raw.get("log_level", DEFAULT_LOG_LEVEL)
    if not isinstance(level, str) or level.upper() not in _LOG_LEVELS:
        warnings.append(f"log_level {level!r} is not a logging level. Using {DEFAULT_LOG_LEVEL}.")
        raw["log_level"] = DEFAULT_LOG_LEVEL
    else:
        raw["log_level"] = level.upper()

    return warnings


def load_settings(path: Path | str | None = None) -> AppSettings:
    """Load settings from YAML, validating them on the way in.

    A missing file yields the defaults. Validation warnings are logged.

    Raises:
        yaml.YAMLError: If the file is not valid YAML.
        OSError: If the file exists but cannot be read.
    """
    path = Path(path) if path is not None else default_settings_path()

    raw: dict = {}
    if path.exists():
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        if not isinstance(raw, dict):
            logger.warning("Settings file %s is not a mapping; using defaults", path)
            raw = {}
    else:
        logger.debug("No settings file at %s; using defaults", path)

    for warning in validate_settings(raw):
        logger.warning("Config: %s", warning)

    return AppSettings.from_dict(raw)


def save_settings(settings: AppSettings, path: Path | str | None = None) -> Path:
    """Write *settings* as YAML, creating the parent directory if needed.

    Returns:
        The path written.
    """
    path = Path(path) if path is not None else default_settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(settings.to_dict(), f, default_flow_style=False, sort_keys=False)
    logger.info("Saved settings to %s", path)
    return path
