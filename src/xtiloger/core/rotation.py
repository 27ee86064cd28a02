from __future__ import annotations

"""
Rotation File Naming.

Derives the name of the rotation file for a severity from a dash separated
bucket pattern. Supported tokens:

    Y   year           (2024)
    M   month          (3, no padding)
    D   day of month   (21, no padding)
    WY  ISO week       (12, no padding)

When the pattern holds WY, Y is the ISO week-year: 2024-12-30 falls in
2025 week 1 and is named '-2025-1'.

Using 2018-03-21 as an example, "Y-WY" gives 'info-2018-12.log', "Y-M-D"
gives 'info-2018-3-21.log' and "Y-M" gives 'info-2018-3.log'. Combining
tokens selects whether one file covers a day, a week, a month or a year.
Unknown tokens are skipped so newer pattern strings stay readable by older
code.
"""

from datetime import datetime
from typing import Callable, Dict, Optional, Tuple

from xtiloger.domain.levels import Severity

LOG_FILE_SUFFIX = ".log"
TOKEN_SEPARATOR = "-"

_TOKEN_RESOLVERS: Dict[str, Callable[[datetime], int]] = {
    "Y": lambda dt: dt.year,
    "M": lambda dt: dt.month,
    "D": lambda dt: dt.day,
    "WY": lambda dt: dt.isocalendar()[1],
}


def bucket_key(pattern: str, now: Optional[datetime] = None) -> Tuple[int, ...]:
    """
    Resolve the recognized tokens of a pattern against an instant.

    Two instants share a rotation file exactly when their bucket keys match.

    Args:
        pattern: Bucket pattern such as "Y-WY".
        now: Instant to resolve; defaults to the current local time.

    Returns:
        Tuple[int, ...]: Resolved values in pattern order.
    """
    instant = now or datetime.now()
    tokens = [token.strip() for token in (pattern or "").split(TOKEN_SEPARATOR)]
    # With a week token the year must be the ISO week-year, so that
    # (year, week) always names exactly one ISO week
    iso_year = "WY" in tokens
    values = []
    for token in tokens:
        if token == "Y" and iso_year:
            values.append(instant.isocalendar()[0])
            continue
        resolver = _TOKEN_RESOLVERS.get(token)
        if resolver is not None:
            values.append(resolver(instant))
    return tuple(values)


def rotation_file_name(severity: Severity, pattern: str, now: Optional[datetime] = None) -> str:
    """
    Build the rotation file name for a severity.

    Args:
        severity: One of INFO, DEBUG, WARNING, ERROR.
        pattern: Bucket pattern.
        now: Instant to resolve; defaults to the current local time.

    Returns:
        str: e.g. 'warning-2024-12.log' for pattern "Y-M".

    Raises:
        ValueError: If severity is ALL or OFF, which own no file.
    """
    if not severity.is_emittable:
        raise ValueError(f"Severity {severity.name} has no rotation file.")

    suffix = "".join(f"{TOKEN_SEPARATOR}{value}" for value in bucket_key(pattern, now))
    return f"{severity.label}{suffix}{LOG_FILE_SUFFIX}"
