from __future__ import annotations

"""
Logger Configuration Domain.

Holds the mutable per-logger configuration, the build-mode switch that selects
the effective minimum level, and validation of configuration mappings coming
from user settings or legacy key names.
"""

import logging
import os
from dataclasses import dataclass, fields
from typing import Any, Dict, List, Mapping, Optional, Tuple

from xtiloger.domain.levels import Severity

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
BUILD_ENV_VAR = "XTILOGER_BUILD"
DEFAULT_LOGGER_NAME = "default"
DEFAULT_FILE_FORMATTER = "Y-WY"

_DEBUG_BUILD_VALUES = ("debug", "dev", "development", "1", "true")
_RELEASE_BUILD_VALUES = ("release", "prod", "production", "0", "false")

# Legacy camelCase keys accepted by from_mapping
_LEGACY_KEYS: Dict[str, str] = {
    "saveFileLevel": "save_file_level",
    "fileFormatter": "file_formatter",
    "isShowTime": "show_timestamp",
    "isShowLongTime": "show_long_time",
    "isShowLevel": "show_level",
    "isShowThread": "show_thread",
    "isShowFileName": "show_file_name",
    "isShowFunctionName": "show_function_name",
    "isShowLineNumber": "show_line_number",
    "debugLogLevel": "debug_log_level",
    "releaseLogLevel": "release_log_level",
    "logDirectory": "log_directory",
    "rootDir": "root_dir",
}

_LEVEL_FIELDS = ("debug_log_level", "release_log_level", "save_file_level")
_BOOL_FIELDS = (
    "show_timestamp",
    "show_long_time",
    "show_level",
    "show_thread",
    "show_file_name",
    "show_line_number",
    "show_function_name",
)


# -----------------------------------------------------------------------------
# Configuration Model
# -----------------------------------------------------------------------------

@dataclass
class LoggerConfig:
    """
    Mutable configuration read by the logger on every call.

    Attributes:
        debug_log_level: Minimum severity printed in debug builds.
        release_log_level: Minimum severity printed in release builds.
        save_file_level: Minimum severity persisted to disk.
        show_timestamp: Include the timestamp segment.
        show_long_time: Use the date+time form instead of time only.
        show_level: Include the logger name and level tag.
        show_thread: Include the thread marker.
        show_file_name: Include the calling file base name.
        show_line_number: Include the calling line number.
        show_function_name: Include the calling function name.
        file_formatter: Dash separated bucket pattern over Y, M, D, WY.
        log_directory: Optional sub-directory placed under the root.
        root_dir: Override of the platform log root.
    """
    debug_log_level: Severity = Severity.ALL
    release_log_level: Severity = Severity.WARNING
    save_file_level: Severity = Severity.WARNING

    show_timestamp: bool = True
    show_long_time: bool = True
    show_level: bool = True
    show_thread: bool = True
    show_file_name: bool = True
    show_line_number: bool = True
    show_function_name: bool = True

    file_formatter: str = DEFAULT_FILE_FORMATTER
    log_directory: str = ""
    root_dir: Optional[str] = None

    def effective_level(self, debug_build: bool) -> Severity:
        """Threshold for printing, selected by build mode."""
        return self.debug_log_level if debug_build else self.release_log_level

    def hide_all_metadata(self) -> None:
        """Switch off every metadata segment so lines carry the message only."""
        for name in _BOOL_FIELDS:
            setattr(self, name, False)

    @classmethod
    def from_mapping(
            cls,
            mapping: Any,
            *,
            strict: bool = False,
    ) -> Tuple["LoggerConfig", List[str]]:
        """
        Build a configuration from a user mapping.

        Accepts snake_case field names and the legacy camelCase names.
        Unknown keys are ignored with a warning.

        strict=False:
          - invalid values fall back to the default and add a warning.
          - a non-mapping input yields the defaults.

        strict=True:
          - invalid values raise ValueError/TypeError.

        Returns:
            Tuple[LoggerConfig, List[str]]: (config, warnings)
        """
        warnings: List[str] = []
        cfg = cls()

        if not isinstance(mapping, Mapping):
            msg = f"Invalid config: expected mapping, received {type(mapping).__name__}."
            if strict:
                raise TypeError(msg)
            warnings.append(msg + " Using defaults.")
            logger.warning(msg)
            return cfg, warnings

        known = {f.name for f in fields(cls)}
        for raw_key, value in mapping.items():
            key = _LEGACY_KEYS.get(raw_key, raw_key)
            if key not in known:
                _report(f"Unknown config key '{raw_key}' ignored.", warnings, strict=False)
                continue

            default = getattr(cfg, key)
            if key in _LEVEL_FIELDS:
                setattr(cfg, key, _as_level(value, default, key, warnings, strict))
            elif key in _BOOL_FIELDS:
                setattr(cfg, key, _as_bool(value, default, key, warnings, strict))
            elif key == "root_dir":
                setattr(cfg, key, None if value is None else _as_str(value, "", key, warnings, strict) or None)
            else:
                setattr(cfg, key, _as_str(value, default, key, warnings, strict))

        if not cfg.file_formatter.strip():
            _report("Empty 'file_formatter'; using default.", warnings, strict)
            cfg.file_formatter = DEFAULT_FILE_FORMATTER

        return cfg, warnings


# -----------------------------------------------------------------------------
# Build Mode
# -----------------------------------------------------------------------------

def resolve_build_mode(environ: Optional[Mapping[str, str]] = None) -> bool:
    """
    Decide whether this process runs as a debug build.

    Reads XTILOGER_BUILD (debug/release). Without it, falls back to the
    interpreter's __debug__ flag, which is False under ``python -O``.

    Returns:
        bool: True for debug builds.
    """
    env = os.environ if environ is None else environ
    raw = (env.get(BUILD_ENV_VAR) or "").strip().lower()
    if raw in _DEBUG_BUILD_VALUES:
        return True
    if raw in _RELEASE_BUILD_VALUES:
        return False
    if raw:
        logger.warning(f"Unrecognized {BUILD_ENV_VAR}='{raw}'; using interpreter default.")
    return __debug__


# Resolved once per process
DEBUG_BUILD: bool = resolve_build_mode()


def canonical_key(key: str) -> str:
    """Map a legacy camelCase option name to its LoggerConfig field name."""
    return _LEGACY_KEYS.get(key, key)


def config_field_names() -> List[str]:
    return [f.name for f in fields(LoggerConfig)]


# -----------------------------------------------------------------------------
# Internal helpers
# -----------------------------------------------------------------------------

def _report(msg: str, warnings: List[str], strict: bool, exc: type = ValueError) -> None:
    if strict:
        raise exc(msg)
    warnings.append(msg)
    logger.warning(msg)


def _as_level(value: Any, fallback: Severity, field: str, warnings: List[str], strict: bool) -> Severity:
    try:
        return Severity.parse(value, default=fallback)
    except ValueError:
        _report(f"Invalid severity for '{field}': {value!r}. Using {fallback.name}.", warnings, strict)
        return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "yes", "1", "on"):
            return True
        if lowered in ("false", "no", "0", "off"):
            return False
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    _report(f"Invalid boolean for '{field}': {value!r}. Using {fallback}.", warnings, strict, TypeError)
    return fallback


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        return value.strip()
    _report(f"Invalid string for '{field}': {value!r}. Using default.", warnings, strict, TypeError)
    return fallback
