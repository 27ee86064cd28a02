from __future__ import annotations

"""
XTILoger: leveled, file-backed logging for client applications.

    import xtiloger

    log = xtiloger.get_logger("network", save_file_level="info")
    log.warning("retrying ", url, " after ", delay, "s")
    xtiloger.error("unrecoverable state")
"""

from .domain.config import LoggerConfig, resolve_build_mode
from .domain.levels import Severity
from .domain.record import CallSite, LogRecord
from .infra.logging import XTILogerHandler, attach_bridge, configure_diagnostics
from .logger import (
    Logger,
    LogResult,
    debug,
    debugf,
    default_logger,
    error,
    errorf,
    get_logger,
    info,
    infof,
    reset_default_logger,
    set_default_logger,
    warning,
    warningf,
)

__version__ = "1.0.0"

__all__ = [
    "CallSite",
    "LogRecord",
    "LogResult",
    "Logger",
    "LoggerConfig",
    "Severity",
    "XTILogerHandler",
    "attach_bridge",
    "configure_diagnostics",
    "debug",
    "debugf",
    "default_logger",
    "error",
    "errorf",
    "get_logger",
    "info",
    "infof",
    "reset_default_logger",
    "resolve_build_mode",
    "set_default_logger",
    "warning",
    "warningf",
]
