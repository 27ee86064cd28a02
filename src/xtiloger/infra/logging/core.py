from __future__ import annotations

"""
Diagnostics Core Orchestrator.

Maintains the idempotent lifecycle of the library's diagnostics output and of
the optional bridge that routes standard-library logging into XTILoger.
"""

import logging
import sys
from typing import TYPE_CHECKING, Optional

from xtiloger.infra.logging.config import _LEVEL_MAP, DIAGNOSTICS_LOGGER_NAME, DiagnosticsConfig
from xtiloger.infra.logging.handlers import XTILogerHandler, _is_our_handler, _tag_handler

if TYPE_CHECKING:
    from xtiloger.logger import Logger

# Internal state flag for idempotency
_CONFIGURED_FLAG_ATTR: str = "_xtiloger_configured"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_diagnostics(cfg: Optional[DiagnosticsConfig] = None, *, force: bool = False) -> logging.Logger:
    """
    Attach a stderr handler to the package diagnostics logger, once.

    Repeated calls are no-ops unless ``force`` is set, in which case only the
    handlers this package installed are replaced.

    Args:
        cfg: Diagnostics configuration; defaults to DiagnosticsConfig().
        force: If True, bypass the idempotency check and re-initialize.

    Returns:
        logging.Logger: The 'xtiloger' diagnostics logger.
    """
    cfg = cfg or DiagnosticsConfig()
    diag = logging.getLogger(DIAGNOSTICS_LOGGER_NAME)

    already_configured = bool(getattr(diag, _CONFIGURED_FLAG_ATTR, False))
    if already_configured and not force:
        return diag

    level_int = _parse_level(cfg.level)
    diag.setLevel(level_int)
    _remove_our_handlers(diag)

    if cfg.console:
        sh = logging.StreamHandler(sys.stderr)
        sh.setLevel(level_int)
        sh.setFormatter(logging.Formatter(cfg.fmt, datefmt=cfg.datefmt))
        _tag_handler(sh)
        diag.addHandler(sh)

    setattr(diag, _CONFIGURED_FLAG_ATTR, True)
    return diag


def attach_bridge(
        target: Optional["Logger"] = None,
        std_logger: Optional[logging.Logger] = None,
        level: int = logging.NOTSET,
) -> XTILogerHandler:
    """
    Route a standard-library logger's records into an XTILoger logger.

    Args:
        target: Receiving XTILoger logger; the default logger when None.
        std_logger: Source stdlib logger; the root logger when None.
        level: Minimum stdlib level forwarded.

    Returns:
        XTILogerHandler: The installed handler (detach with detach_bridges).
    """
    source = std_logger if std_logger is not None else logging.getLogger()
    handler = XTILogerHandler(target, level=level)
    source.addHandler(handler)
    return handler


def detach_bridges(std_logger: Optional[logging.Logger] = None) -> int:
    """
    Remove every bridge handler from a stdlib logger.

    Returns:
        int: Number of handlers removed.
    """
    source = std_logger if std_logger is not None else logging.getLogger()
    removed = 0
    for h in list(source.handlers):
        if isinstance(h, XTILogerHandler):
            source.removeHandler(h)
            h.close()
            removed += 1
    return removed


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    """Convert a string-based logging level to its numeric constant."""
    if not level:
        return logging.WARNING
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.WARNING)


def _remove_our_handlers(target: logging.Logger) -> None:
    """Detach the stream handlers this package installed on a logger."""
    for h in list(target.handlers):
        if _is_our_handler(h) and not isinstance(h, XTILogerHandler):
            target.removeHandler(h)
            try:
                h.close()
            except Exception:
                pass
