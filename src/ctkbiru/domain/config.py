from __future__ import annotations

"""
Configuration Domain Management.

Loads user settings from 'config.json' in the storage directory, validates
them, and assembles the immutable RuntimeConfig that startup passes to every
collaborator. The storage location is resolved once, here, and never read
from ambient state afterwards.
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from ctkbiru.domain.constants import (
    CONFIG_FILE_NAME,
    CURRENT_CONFIG_VERSION,
    DEFAULT_LOCALE,
    DEFAULT_SNAPSHOT_INDENT,
    LOG_DIR_NAME,
    LOG_FILE_NAME,
    SUPPORTED_LOCALES,
)
from ctkbiru.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# -----------------------------------------------------------------------------
# MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class RuntimeConfig:
    """
    Process-wide settings computed once at startup.

    Attributes:
        storage_dir: Absolute path of the blueprint store.
        console_level: Minimum level for stderr output.
        file_level: Minimum level for the persistent log file.
        log_file: Optional path of the persistent log file.
        snapshot_indent: Spaces per level when snapshotting directories.
        locale: Language of user-facing messages.
    """
    storage_dir: str
    console_level: str = "WARNING"
    file_level: str = "INFO"
    log_file: Optional[str] = None
    snapshot_indent: int = DEFAULT_SNAPSHOT_INDENT
    locale: str = DEFAULT_LOCALE


def get_default_settings() -> Dict[str, Any]:
    """Default user settings as stored in config.json."""
    return {
        "version": CURRENT_CONFIG_VERSION,
        "log_level": "INFO",
        "log_to_file": False,
        "snapshot_indent": DEFAULT_SNAPSHOT_INDENT,
        "locale": DEFAULT_LOCALE,
    }

# -----------------------------------------------------------------------------
# PERSISTENCE
# -----------------------------------------------------------------------------

def get_config_path(storage_dir: str) -> str:
    return os.path.join(storage_dir, CONFIG_FILE_NAME)


def get_default_log_path(storage_dir: str) -> str:
    return os.path.join(storage_dir, LOG_DIR_NAME, LOG_FILE_NAME)


def load_settings(storage_dir: str) -> Dict[str, Any]:
    """
    Load and validate user settings.

    A missing file yields the defaults silently; an unreadable or corrupted
    file yields the defaults with a warning.

    Args:
        storage_dir: Directory that may contain config.json.

    Returns:
        Dict[str, Any]: Validated settings.
    """
    path = get_config_path(storage_dir)
    if not os.path.exists(path):
        logger.debug("Config file not found. Using defaults.")
        return get_default_settings()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to load config '{path}': {e}. Using defaults.")
        return get_default_settings()

    settings, warnings = validate_settings(data)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")
    return settings


def save_settings(storage_dir: str, settings: Dict[str, Any]) -> None:
    """
    Persist settings to config.json.

    Raises:
        OSError: If the file cannot be written.
    """
    os.makedirs(storage_dir, exist_ok=True)
    data = dict(settings)
    data["version"] = CURRENT_CONFIG_VERSION
    with open(get_config_path(storage_dir), "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=4)
    logger.debug(f"Configuration saved to {get_config_path(storage_dir)}")

# -----------------------------------------------------------------------------
# VALIDATION
# -----------------------------------------------------------------------------

def validate_settings(raw: Any, *, strict: bool = False) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a settings dictionary.

    Unknown keys are dropped and invalid values fall back to defaults.

    Args:
        raw: Untrusted settings data (usually parsed JSON).
        strict: If True, raise TypeError/ValueError instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized settings and warnings.
    """
    warnings: List[str] = []
    defaults = get_default_settings()

    if not isinstance(raw, dict):
        msg = f"Invalid config type: expected dict, received {type(raw).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        return defaults, warnings

    out = dict(defaults)

    level = _as_str(raw.get("log_level"), defaults["log_level"], "log_level", warnings, strict)
    if level.upper() not in _LOG_LEVELS:
        msg = f"Invalid field 'log_level': unknown level '{level}'."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        level = defaults["log_level"]
    out["log_level"] = level.upper()

    out["log_to_file"] = _as_bool(
        raw.get("log_to_file"), defaults["log_to_file"], "log_to_file", warnings, strict
    )

    indent = _as_int(
        raw.get("snapshot_indent"), defaults["snapshot_indent"], "snapshot_indent", warnings, strict
    )
    if indent < 1:
        msg = f"Invalid field 'snapshot_indent': must be positive, received {indent}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        indent = defaults["snapshot_indent"]
    out["snapshot_indent"] = indent

    locale = _as_str(raw.get("locale"), defaults["locale"], "locale", warnings, strict).lower()
    if locale not in SUPPORTED_LOCALES:
        msg = f"Invalid field 'locale': unsupported locale '{locale}'."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        locale = defaults["locale"]
    out["locale"] = locale

    return out, warnings


def build_runtime_config(
        storage_dir: Optional[str] = None,
        *,
        debug: bool = False,
        log_file: Optional[str] = None,
) -> RuntimeConfig:
    """
    Resolve the storage location and merge settings with CLI overrides.

    Args:
        storage_dir: Explicit storage directory (resolved when None).
        debug: Force DEBUG logging on every handler.
        log_file: Explicit log file path; overrides 'log_to_file'.

    Returns:
        RuntimeConfig: Immutable configuration for this process.

    Raises:
        StorageLocationError: If the storage directory cannot be resolved.
    """
    storage = storage_dir or get_user_data_dir()
    settings = load_settings(storage)

    resolved_log_file = log_file
    if resolved_log_file is None and settings["log_to_file"]:
        resolved_log_file = get_default_log_path(storage)

    return RuntimeConfig(
        storage_dir=storage,
        console_level="DEBUG" if debug else "WARNING",
        file_level="DEBUG" if debug else settings["log_level"],
        log_file=resolved_log_file,
        snapshot_indent=settings["snapshot_indent"],
        locale=settings["locale"],
    )

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Validate boolean inputs, accepting common string spellings."""
    if value is None:
        return fallback
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "1", "yes", "on"):
        return True
    if isinstance(value, str) and value.strip().lower() in ("false", "0", "no", "off"):
        return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    """Validate integer inputs (booleans are rejected)."""
    if value is None:
        return fallback
    if isinstance(value, int) and not isinstance(value, bool):
        return value

    msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback
