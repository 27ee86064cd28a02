from __future__ import annotations

"""
Log Record Domain Models.

Defines the ephemeral per-call record consumed by the formatter and the
helpers that capture call-site and thread metadata at call time.
"""

import os
import sys
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from xtiloger.domain.levels import Severity

# Frames belonging to the library itself are skipped during call-site capture
_PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class CallSite:
    """
    Source location of a log call.

    Attributes:
        file: Path of the calling source file.
        line: Line number of the call.
        function: Name of the calling function.
    """
    file: str = ""
    line: int = 0
    function: str = ""

    @property
    def file_name(self) -> str:
        """Base name of the calling file."""
        return os.path.basename(self.file)


@dataclass(frozen=True)
class ThreadInfo:
    """Opaque identity of the calling thread."""
    ident: int
    is_main: bool

    @property
    def handle(self) -> str:
        return f"0x{self.ident:x}"


@dataclass(frozen=True)
class LogRecord:
    """
    Everything the formatter needs to render a single line.

    Attributes:
        timestamp: Local wall-clock time of the call.
        severity: Severity of the call.
        call_site: Source location of the call.
        thread: Calling thread identity.
        logger_name: Name of the emitting logger.
        message: Message payload already reduced to text.
    """
    timestamp: datetime
    severity: Severity
    call_site: CallSite
    thread: ThreadInfo
    logger_name: str
    message: str


# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def current_thread_info() -> ThreadInfo:
    """Snapshot the identity of the thread running this call."""
    current = threading.current_thread()
    ident = current.ident if current.ident is not None else threading.get_ident()
    return ThreadInfo(ident=ident, is_main=current is threading.main_thread())


def capture_call_site(skip: int = 1) -> CallSite:
    """
    Locate the first frame outside this package, starting ``skip`` frames up.

    Args:
        skip: Number of frames to skip before searching (1 = our caller).

    Returns:
        CallSite: Location of the user code that issued the log call.
    """
    try:
        frame = sys._getframe(skip)
    except ValueError:
        return CallSite()

    while frame is not None:
        filename = frame.f_code.co_filename
        if not _is_internal(filename):
            return CallSite(file=filename, line=frame.f_lineno, function=frame.f_code.co_name)
        frame = frame.f_back

    return CallSite()


def build_record(
        severity: Severity,
        message: str,
        logger_name: str,
        call_site: CallSite,
        timestamp: Optional[datetime] = None,
        thread: Optional[ThreadInfo] = None,
) -> LogRecord:
    """Assemble a LogRecord, filling the clock and thread when omitted."""
    return LogRecord(
        timestamp=timestamp or datetime.now(),
        severity=severity,
        call_site=call_site,
        thread=thread or current_thread_info(),
        logger_name=logger_name,
        message=message,
    )


def _is_internal(filename: str) -> bool:
    try:
        return os.path.abspath(filename).startswith(_PACKAGE_DIR + os.sep)
    except (TypeError, ValueError):
        return False
