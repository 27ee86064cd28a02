from __future__ import annotations

"""
Logger Facade.

Composes severity filtering, formatting, file persistence and console
mirroring behind the leveled entry points (info/debug/warning/error).

Lifecycle:
- get_logger(name) returns the single Logger registered under that name,
  creating it on first use.
- default_logger() returns the process-wide default Logger. It is created on
  first use (never at import), can be replaced with set_default_logger() and
  dropped with reset_default_logger().

The simple entry points never raise. They return the formatted line with a
trailing newline, or an empty string when the call is filtered out or fails.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Set

from xtiloger.core.formatter import format_line, format_template, reduce_values
from xtiloger.domain.config import (
    DEBUG_BUILD,
    DEFAULT_LOGGER_NAME,
    LoggerConfig,
    canonical_key,
    config_field_names,
)
from xtiloger.domain.levels import Severity
from xtiloger.domain.record import CallSite, build_record, capture_call_site
from xtiloger.infra.sinks import ConsoleSink, FileSink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogResult:
    """
    Outcome of a single log call.

    Attributes:
        text: Formatted line plus trailing newline; empty when filtered.
        persisted: Whether the line reached its rotation file.
        error: Diagnostic message when something failed along the way.
    """
    text: str = ""
    persisted: bool = False
    error: Optional[str] = None

    @property
    def emitted(self) -> bool:
        return bool(self.text)


class Logger:
    """
    Leveled, file-backed logger.

    Args:
        name: Logger name; also the name of its log directory.
        config: Configuration object, shared by reference.
        debug_build: Build mode override; defaults to the process build mode.
        console: Console sink override (mainly for tests).
        **options: LoggerConfig fields (snake_case or legacy camelCase).
    """

    def __init__(
            self,
            name: str = DEFAULT_LOGGER_NAME,
            config: Optional[LoggerConfig] = None,
            *,
            debug_build: Optional[bool] = None,
            console: Optional[ConsoleSink] = None,
            **options: Any,
    ) -> None:
        self.name = name
        self.config = config if config is not None else LoggerConfig()
        self.debug_build = DEBUG_BUILD if debug_build is None else debug_build
        self._file_sink = FileSink(self.config, name)
        self._console = console if console is not None else ConsoleSink()
        if options:
            self.configure(**options)

    def __repr__(self) -> str:
        return f"<Logger {self.name!r} level={self.effective_level.name}>"

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    @property
    def effective_level(self) -> Severity:
        """Print threshold for the current build mode."""
        return self.config.effective_level(self.debug_build)

    def configure(self, **options: Any) -> None:
        """
        Update configuration fields in place.

        Raises:
            TypeError: On an unknown option or a value of the wrong type.
            ValueError: On an unknown severity.
        """
        known = set(config_field_names())
        unknown = [key for key in options if canonical_key(key) not in known]
        if unknown:
            raise TypeError(f"Unknown logger option(s): {', '.join(sorted(unknown))}")

        parsed, _ = LoggerConfig.from_mapping(options, strict=True)
        for key in options:
            field = canonical_key(key)
            setattr(self.config, field, getattr(parsed, field))

    # -------------------------------------------------------------------------
    # Leveled entry points
    # -------------------------------------------------------------------------

    def info(self, *values: Any, file: Optional[str] = None, line: Optional[int] = None,
             function: Optional[str] = None) -> str:
        """
        Log at INFO. ``file``, ``line`` and ``function`` override the captured
        call site.
        """
        site = _site_override(file, line, function)
        return self.emit(Severity.INFO, *values, call_site=site).text

    def debug(self, *values: Any, file: Optional[str] = None, line: Optional[int] = None,
              function: Optional[str] = None) -> str:
        site = _site_override(file, line, function)
        return self.emit(Severity.DEBUG, *values, call_site=site).text

    def warning(self, *values: Any, file: Optional[str] = None, line: Optional[int] = None,
                function: Optional[str] = None) -> str:
        site = _site_override(file, line, function)
        return self.emit(Severity.WARNING, *values, call_site=site).text

    def error(self, *values: Any, file: Optional[str] = None, line: Optional[int] = None,
              function: Optional[str] = None) -> str:
        site = _site_override(file, line, function)
        return self.emit(Severity.ERROR, *values, call_site=site).text

    def infof(self, template: str, *args: Any) -> str:
        return self.emitf(Severity.INFO, template, *args).text

    def debugf(self, template: str, *args: Any) -> str:
        return self.emitf(Severity.DEBUG, template, *args).text

    def warningf(self, template: str, *args: Any) -> str:
        return self.emitf(Severity.WARNING, template, *args).text

    def errorf(self, template: str, *args: Any) -> str:
        return self.emitf(Severity.ERROR, template, *args).text

    def emit(
            self,
            severity: Severity,
            *values: Any,
            call_site: Optional[CallSite] = None,
            now: Optional[datetime] = None,
    ) -> LogResult:
        """
        Log positional values concatenated by their str() form.

        Args:
            severity: One of INFO, DEBUG, WARNING, ERROR.
            *values: Message payload.
            call_site: Explicit source location; captured from the caller when None.
            now: Explicit timestamp; the current time when None.

        Returns:
            LogResult: Text, persistence flag and diagnostic.
        """
        return self._emit(severity, lambda: reduce_values(values), call_site, now)

    def emitf(
            self,
            severity: Severity,
            template: str,
            *args: Any,
            call_site: Optional[CallSite] = None,
            now: Optional[datetime] = None,
    ) -> LogResult:
        """Log a printf-style template rendered with format_template."""
        return self._emit(severity, lambda: format_template(str(template), args), call_site, now)

    # -------------------------------------------------------------------------
    # Files
    # -------------------------------------------------------------------------

    def log_directory(self) -> str:
        """Path of this logger's directory, created when absent."""
        self._file_sink.ensure_directory()
        return self._file_sink.directory

    def current_log_file_path(self, severity: Severity) -> Optional[str]:
        """Current rotation file for a severity, created empty when absent."""
        if not severity.is_emittable:
            return None
        return self._file_sink.resolve_writable_path(severity)

    def list_log_files(self) -> Set[str]:
        return self._file_sink.list_log_files()

    def clear_all_log_files(self) -> bool:
        """
        Delete all files in this logger's directory.

        Callers must make sure no other thread is logging to the same
        directory while this runs.
        """
        return self._file_sink.clear_all_log_files()

    # -------------------------------------------------------------------------
    # Pipeline
    # -------------------------------------------------------------------------

    def _emit(
            self,
            severity: Severity,
            render: Callable[[], str],
            call_site: Optional[CallSite],
            now: Optional[datetime],
    ) -> LogResult:
        try:
            if not severity.is_emittable or self.effective_level > severity:
                return LogResult()

            site = call_site if call_site is not None else capture_call_site()
            record = build_record(severity, render(), self.name, site, timestamp=now)
            line = format_line(record, self.config)

            persisted = self._file_sink.append(severity, line, now=record.timestamp)
            error = None
            if not persisted and self.config.save_file_level <= severity:
                error = "Log line was not persisted."

            if self.debug_build:
                self._console.write(line)

            return LogResult(text=line + "\n", persisted=persisted, error=error)

        except Exception as e:
            logger.warning(f"Logger '{self.name}': log call failed: {e}", exc_info=True)
            return LogResult(error=str(e))


# -----------------------------------------------------------------------------
# REGISTRY & DEFAULT INSTANCE
# -----------------------------------------------------------------------------

_REGISTRY: Dict[str, Logger] = {}
_REGISTRY_LOCK = threading.RLock()
_DEFAULT: Optional[Logger] = None


def get_logger(name: str = DEFAULT_LOGGER_NAME, **options: Any) -> Logger:
    """
    Return the Logger registered under ``name``, creating it on first use.

    Options are applied to the logger's configuration, new or existing.
    """
    with _REGISTRY_LOCK:
        instance = _REGISTRY.get(name)
        if instance is None:
            instance = Logger(name, **options)
            _REGISTRY[name] = instance
        elif options:
            instance.configure(**options)
        return instance


def default_logger() -> Logger:
    """The process-wide default Logger, created on first use."""
    global _DEFAULT
    with _REGISTRY_LOCK:
        if _DEFAULT is None:
            _DEFAULT = get_logger(DEFAULT_LOGGER_NAME)
        return _DEFAULT


def set_default_logger(instance: Logger) -> None:
    """Install an explicitly constructed Logger as the process default."""
    global _DEFAULT
    with _REGISTRY_LOCK:
        _DEFAULT = instance


def reset_default_logger() -> None:
    """Forget the default Logger and every registered logger."""
    global _DEFAULT
    with _REGISTRY_LOCK:
        _DEFAULT = None
        _REGISTRY.clear()


def info(*values: Any, file: Optional[str] = None, line: Optional[int] = None,
         function: Optional[str] = None) -> str:
    return default_logger().info(*values, file=file, line=line, function=function)


def debug(*values: Any, file: Optional[str] = None, line: Optional[int] = None,
          function: Optional[str] = None) -> str:
    return default_logger().debug(*values, file=file, line=line, function=function)


def warning(*values: Any, file: Optional[str] = None, line: Optional[int] = None,
            function: Optional[str] = None) -> str:
    return default_logger().warning(*values, file=file, line=line, function=function)


def error(*values: Any, file: Optional[str] = None, line: Optional[int] = None,
          function: Optional[str] = None) -> str:
    return default_logger().error(*values, file=file, line=line, function=function)


def infof(template: str, *args: Any) -> str:
    return default_logger().infof(template, *args)


def debugf(template: str, *args: Any) -> str:
    return default_logger().debugf(template, *args)


def warningf(template: str, *args: Any) -> str:
    return default_logger().warningf(template, *args)


def errorf(template: str, *args: Any) -> str:
    return default_logger().errorf(template, *args)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _site_override(file: Optional[str], line: Optional[int], function: Optional[str]) -> Optional[CallSite]:
    """
    Build a CallSite from explicit keywords.

    Fields not given are taken from the captured caller frame.
    """
    if file is None and line is None and function is None:
        return None
    captured = capture_call_site()
    try:
        line_no = int(line) if line is not None else captured.line
    except (TypeError, ValueError):
        line_no = captured.line
    return CallSite(
        file=str(file) if file is not None else captured.file,
        line=line_no,
        function=str(function) if function is not None else captured.function,
    )
