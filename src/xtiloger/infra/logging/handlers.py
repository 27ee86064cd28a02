from __future__ import annotations

"""
Logging Handlers and Low-Level Utilities.

Provides the handler tagging used to tell our own handlers apart from those
installed by the host application, and XTILogerHandler, which routes
standard-library log records into an XTILoger logger.
"""

import logging
from typing import TYPE_CHECKING, Optional

from xtiloger.domain.levels import Severity
from xtiloger.domain.record import CallSite
from xtiloger.infra.logging.config import DIAGNOSTICS_LOGGER_NAME

if TYPE_CHECKING:
    from xtiloger.logger import Logger

# Internal attribute used to tag and identify our own handlers
_HANDLER_TAG_ATTR: str = "_xtiloger_handler"


# ==============================================================================
# INTERNAL LOGGING UTILITIES
# ==============================================================================

def _tag_handler(handler: logging.Handler) -> None:
    """
    Mark a handler as an internally-managed handler.

    Args:
        handler: The logging handler instance to tag.
    """
    try:
        setattr(handler, _HANDLER_TAG_ATTR, True)
    except Exception:
        pass


def _is_our_handler(handler: logging.Handler) -> bool:
    """
    Verify if a handler was installed by this package.

    Args:
        handler: The handler to inspect.

    Returns:
        bool: True if the handler carries our internal tag.
    """
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


# ==============================================================================
# BRIDGE HANDLER
# ==============================================================================

class XTILogerHandler(logging.Handler):
    """
    Forward standard-library records into an XTILoger logger.

    The record's own pathname, lineno and funcName become the call site, so
    lines point at the code that called ``logging``. Records emitted by this
    package's diagnostics are dropped to avoid feedback loops when a write
    fails.
    """

    def __init__(self, target: Optional["Logger"] = None, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._target = target
        _tag_handler(self)

    @property
    def target(self) -> "Logger":
        if self._target is None:
            from xtiloger.logger import default_logger
            return default_logger()
        return self._target

    def emit(self, record: logging.LogRecord) -> None:
        if record.name == DIAGNOSTICS_LOGGER_NAME or record.name.startswith(DIAGNOSTICS_LOGGER_NAME + "."):
            return
        try:
            message = record.getMessage()
            if record.exc_info:
                message = f"{message}\n{self._exception_text(record)}"
            site = CallSite(file=record.pathname, line=record.lineno, function=record.funcName or "")
            self.target.emit(Severity.from_python_level(record.levelno), message, call_site=site)
        except Exception:
            self.handleError(record)

    def _exception_text(self, record: logging.LogRecord) -> str:
        formatter = self.formatter or logging.Formatter()
        return formatter.formatException(record.exc_info)
