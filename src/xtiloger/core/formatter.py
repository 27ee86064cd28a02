from __future__ import annotations

"""
Log Line Formatting.

Pure functions that turn a LogRecord and a configuration snapshot into the
text of a log line, plus the two message reduction forms: positional value
concatenation and printf-style templates.
"""

import re
from typing import Any, Iterable, List, Sequence

from xtiloger.domain.config import LoggerConfig
from xtiloger.domain.record import LogRecord

MESSAGE_SEPARATOR = " => "
LONG_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
SHORT_TIME_FORMAT = "%H:%M:%S"

# %[flags][width][.precision][length]conversion, "%@" object marker, or "%%".
# "% " is never a marker, so "50% off" stays literal.
_PLACEHOLDER_RE = re.compile(
    r"%%|%[-+#0]*(?:\d+|\*)?(?:\.(?:\d+|\*))?(?:hh|h|ll|l|L|q|j|z|t)?[diouxXeEfFgGaAcsSpr@]"
)


# -----------------------------------------------------------------------------
# MESSAGE REDUCTION
# -----------------------------------------------------------------------------

def reduce_values(values: Iterable[Any]) -> str:
    """
    Concatenate the textual form of each value, in order, with no separator.

    Every value is converted with ``str()``.
    """
    return "".join(str(value) for value in values)


def format_template(template: str, args: Sequence[Any]) -> str:
    """
    Substitute printf-style place-markers with the supplied arguments.

    Literal runs of the template are copied as-is. Each marker consumes the
    next unused argument; when the argument does not suit the conversion
    (e.g. '%d' with a string) its ``str()`` form is used instead. Markers left
    without an argument stay in the output untouched.

    Args:
        template: Text containing markers such as '%d', '%.2f', '%s', '%@'.
        args: Values consumed left to right.

    Returns:
        str: The rendered message.
    """
    if not args:
        return template

    parts: List[str] = []
    position = 0
    index = 0

    for match in _PLACEHOLDER_RE.finditer(template):
        parts.append(template[position:match.start()])
        position = match.end()
        marker = match.group(0)

        if marker == "%%":
            parts.append("%")
            continue
        if index >= len(args):
            parts.append(marker)
            continue

        parts.append(_convert(marker, args[index]))
        index += 1

    parts.append(template[position:])
    return "".join(parts)


# -----------------------------------------------------------------------------
# LINE ASSEMBLY
# -----------------------------------------------------------------------------

def format_line(record: LogRecord, config: LoggerConfig) -> str:
    """
    Render a LogRecord into a single line (without trailing newline).

    Segment order: timestamp, [logger] [LEVEL], [file:line], thread marker,
    function name. Disabled segments are dropped entirely. When at least one
    segment remains the message follows ' => ', otherwise the line is the
    bare message.
    """
    segments = [
        format_timestamp(record, config),
        _level_segment(record, config),
        _location_segment(record, config),
        _thread_segment(record, config),
        record.call_site.function if config.show_function_name else "",
    ]
    info = " ".join(s for s in segments if s).strip(" ")
    if not info:
        return record.message
    return f"{info}{MESSAGE_SEPARATOR}{record.message}"


def format_timestamp(record: LogRecord, config: LoggerConfig) -> str:
    """Millisecond precision timestamp, long or short form."""
    if not config.show_timestamp:
        return ""
    fmt = LONG_TIME_FORMAT if config.show_long_time else SHORT_TIME_FORMAT
    millis = record.timestamp.microsecond // 1000
    return f"{record.timestamp.strftime(fmt)}.{millis:03d}"


def _level_segment(record: LogRecord, config: LoggerConfig) -> str:
    if not config.show_level:
        return ""
    return f"[{record.logger_name}] {record.severity.tag}".strip()


def _location_segment(record: LogRecord, config: LoggerConfig) -> str:
    site = record.call_site
    if config.show_file_name:
        if config.show_line_number:
            return f"[{site.file_name}:{site.line}]"
        return f"[{site.file_name}]"
    if config.show_line_number:
        return f"line:{site.line}"
    return ""


def _thread_segment(record: LogRecord, config: LoggerConfig) -> str:
    if not config.show_thread:
        return ""
    if record.thread.is_main:
        return "[Main]"
    return f"[Global]<{record.thread.handle}>"


def _convert(marker: str, arg: Any) -> str:
    """Apply one conversion, degrading to str(arg) when it does not fit."""
    if marker.endswith("@"):
        return str(arg)
    spec = _to_python_spec(marker)
    try:
        return spec % (arg,)
    except (TypeError, ValueError, OverflowError):
        return str(arg)


def _to_python_spec(marker: str) -> str:
    # Length modifiers and star widths have no meaning for a single Python value
    spec = re.sub(r"(hh|h|ll|l|L|q|j|z|t)(?=[a-zA-Z@]$)", "", marker)
    spec = spec.replace("*", "")
    conversion = spec[-1]
    if conversion == "p":
        spec = spec[:-1] + "x"
    elif conversion == "S":
        spec = spec[:-1] + "s"
    elif conversion in ("A", "a"):
        spec = spec[:-1] + ("E" if conversion == "A" else "e")
    return spec
