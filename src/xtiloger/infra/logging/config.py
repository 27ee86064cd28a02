from __future__ import annotations

"""
Diagnostics Configuration Models.

Defines the data structures used to initialize the library's own diagnostics
output (the 'xtiloger' standard-library logger) and the severity name map.
"""

import logging
from dataclasses import dataclass
from typing import Dict

DIAGNOSTICS_LOGGER_NAME = "xtiloger"

# Mapping of string identifiers to native logging constants
_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class DiagnosticsConfig:
    """
    Immutable specification for the diagnostics subsystem.

    Attributes:
        level: Minimum severity of internal diagnostics to emit.
        console: Flag to enable stderr stream output.
        fmt: Structural format for diagnostic entries.
        datefmt: Chronological format for timestamp generation.
    """
    level: str = "WARNING"
    console: bool = True

    fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
