from __future__ import annotations

"""
Output Sinks.

FileSink persists formatted lines into per-severity rotation files under the
logger's directory. ConsoleSink mirrors lines to a text stream in debug
builds. Both absorb I/O failures: a failed write is reported to the library
diagnostics logger and never propagates to the caller.

Appends are serialized per file path through a process-wide lock table so
that concurrent threads always produce whole lines.
"""

import logging
import os
import sys
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Dict, Iterator, Optional, Set, TextIO

from xtiloger.core.rotation import rotation_file_name
from xtiloger.domain.config import LoggerConfig
from xtiloger.domain.levels import Severity
from xtiloger.infra.fs import build_log_directory, list_files, safe_mkdir, touch_file

logger = logging.getLogger(__name__)

LINE_SEPARATOR = "\n"
ENCODING = "utf-8"
# Lone surrogates (e.g. surrogateescape-decoded file names) are written escaped
ENCODING_ERRORS = "backslashreplace"

_PATH_LOCKS: Dict[str, "_PathLock"] = {}
_PATH_LOCKS_GUARD = threading.Lock()


class _PathLock:
    """A file lock plus the number of threads currently holding or waiting on it."""
    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0


@contextmanager
def path_lock(path: str) -> Iterator[None]:
    """
    Hold the lock shared by every writer of the given file.

    Entries live in the table only while some thread uses them, so the table
    does not grow with each new rotation file.
    """
    key = os.path.normcase(os.path.abspath(path))
    with _PATH_LOCKS_GUARD:
        entry = _PATH_LOCKS.get(key)
        if entry is None:
            entry = _PathLock()
            _PATH_LOCKS[key] = entry
        entry.users += 1
    try:
        with entry.lock:
            yield
    finally:
        with _PATH_LOCKS_GUARD:
            entry.users -= 1
            if entry.users == 0:
                _PATH_LOCKS.pop(key, None)


# -----------------------------------------------------------------------------
# FILE SINK
# -----------------------------------------------------------------------------

class FileSink:
    """
    Appends log lines to the rotation file of their severity.

    The directory and bucket pattern are read from the live configuration on
    every call, so reconfiguring a logger takes effect immediately.
    """

    def __init__(self, config: LoggerConfig, logger_name: str) -> None:
        self._config = config
        self._logger_name = logger_name

    @property
    def directory(self) -> str:
        """Absolute path of this logger's log directory (not created)."""
        return build_log_directory(self._config.root_dir, self._config.log_directory, self._logger_name)

    def ensure_directory(self) -> Optional[str]:
        """
        Create the log directory when absent.

        Returns:
            Optional[str]: The directory path, or None if it cannot be created.
        """
        directory = self.directory
        ok, err = safe_mkdir(directory)
        if not ok:
            logger.warning(f"FileSink: Cannot create log directory '{directory}': {err}")
            return None
        return directory

    def resolve_writable_path(self, severity: Severity, now: Optional[datetime] = None) -> Optional[str]:
        """
        Compute the current rotation file path, creating directory and file.

        Idempotent: an existing file is never truncated.

        Args:
            severity: One of INFO, DEBUG, WARNING, ERROR.
            now: Instant used for the bucket; defaults to the current time.

        Returns:
            Optional[str]: Absolute file path, or None on I/O failure.
        """
        directory = self.ensure_directory()
        if directory is None:
            return None

        path = os.path.join(directory, rotation_file_name(severity, self._config.file_formatter, now))
        ok, err = touch_file(path)
        if not ok:
            logger.warning(f"FileSink: Cannot create log file '{path}': {err}")
            return None
        return path

    def append(
            self,
            severity: Severity,
            line: str,
            threshold: Optional[Severity] = None,
            now: Optional[datetime] = None,
    ) -> bool:
        """
        Persist one line, gated by the persist-to-file threshold.

        A newline separator is written before the line only when the file
        already holds content, which keeps the file newline-delimited without
        a leading blank line.

        Args:
            severity: Severity of the line.
            line: Formatted text without trailing newline.
            threshold: Minimum severity persisted; defaults to save_file_level.
            now: Instant used for the bucket; defaults to the current time.

        Returns:
            bool: True if the line reached the disk.
        """
        minimum = threshold if threshold is not None else self._config.save_file_level
        if minimum > severity or not severity.is_emittable:
            return False

        path = self.resolve_writable_path(severity, now)
        if path is None:
            return False

        data = line.encode(ENCODING, ENCODING_ERRORS)
        try:
            with path_lock(path):
                try:
                    with open(path, "r+b") as fh:
                        fh.seek(0, os.SEEK_END)
                        if fh.tell() > 0:
                            fh.write(LINE_SEPARATOR.encode(ENCODING))
                        fh.write(data)
                except FileNotFoundError:
                    # File removed between resolve and write
                    with open(path, "ab") as fh:
                        fh.write(data)
            return True
        except OSError as e:
            logger.warning(f"FileSink: Write to '{path}' failed: {e}")
            return False

    def list_log_files(self) -> Set[str]:
        """File names currently present in the log directory."""
        directory = self.ensure_directory()
        if directory is None:
            return set()
        return list_files(directory)

    def clear_all_log_files(self) -> bool:
        """
        Delete every file in the log directory, best-effort.

        Not safe to run while other threads are writing to the same directory;
        callers must serialize clears against writes.

        Returns:
            bool: True if no file remains afterwards.
        """
        directory = self.directory
        for name in self.list_log_files():
            path = os.path.join(directory, name)
            try:
                with path_lock(path):
                    os.remove(path)
            except OSError as e:
                logger.debug(f"FileSink: Could not delete '{path}': {e}")

        return not self.list_log_files()


# -----------------------------------------------------------------------------
# CONSOLE SINK
# -----------------------------------------------------------------------------

class ConsoleSink:
    """
    Mirrors lines to a text stream (stdout unless another is given).

    The stream is looked up at write time so that replacing sys.stdout is
    honored.
    """

    def __init__(self, stream: Optional[TextIO] = None, enabled: bool = True) -> None:
        self._stream = stream
        self.enabled = enabled
        self._lock = threading.Lock()

    def write(self, line: str) -> bool:
        if not self.enabled:
            return False
        stream = self._stream if self._stream is not None else sys.stdout
        try:
            with self._lock:
                stream.write(line + LINE_SEPARATOR)
                stream.flush()
            return True
        except (OSError, ValueError) as e:
            logger.debug(f"ConsoleSink: Write failed: {e}")
            return False
