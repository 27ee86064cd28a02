from __future__ import annotations

"""
Severity Domain Model.

Defines the ordered set of log severities. Ordering follows the declaration
rank: ALL is the most permissive threshold and OFF suppresses everything.
"""

import logging
from enum import Enum
from functools import total_ordering
from typing import Dict, Optional, Union


@total_ordering
class Severity(Enum):
    """
    Ordered log severity.

    Only INFO, DEBUG, WARNING and ERROR are emitted by log calls. ALL and OFF
    exist purely as thresholds.
    """
    ALL = 0
    INFO = 1
    DEBUG = 2
    WARNING = 3
    ERROR = 4
    OFF = 5

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.value < other.value

    @property
    def is_emittable(self) -> bool:
        """True for severities that own a rotation file and a level tag."""
        return self not in (Severity.ALL, Severity.OFF)

    @property
    def label(self) -> str:
        """Lowercase file label, e.g. 'warning'. Empty for ALL/OFF."""
        return self.name.lower() if self.is_emittable else ""

    @property
    def tag(self) -> str:
        """Bracketed console tag, e.g. '[WARNING]'. Empty for ALL/OFF."""
        return f"[{self.name}]" if self.is_emittable else ""

    def to_python_level(self) -> int:
        """Return the closest :mod:`logging` numeric level."""
        return _TO_PYTHON[self]

    @classmethod
    def from_python_level(cls, level: int) -> "Severity":
        """
        Translate a stdlib logging level into a Severity.

        Stdlib DEBUG sits below INFO while here DEBUG ranks above INFO, so the
        mapping goes by name rather than by magnitude.
        """
        if level >= logging.ERROR:
            return cls.ERROR
        if level >= logging.WARNING:
            return cls.WARNING
        if level >= logging.INFO:
            return cls.INFO
        return cls.DEBUG

    @classmethod
    def parse(cls, value: Union["Severity", str, int, None],
              default: Optional["Severity"] = None) -> "Severity":
        """
        Coerce a name, rank or Severity into a Severity.

        Args:
            value: 'warning', 'WARN', 3, Severity.WARNING...
            default: Returned when value is None.

        Raises:
            ValueError: If the value does not name a severity.
        """
        if isinstance(value, Severity):
            return value
        if value is None:
            if default is None:
                raise ValueError("Severity value is required.")
            return default
        if isinstance(value, bool):
            raise ValueError(f"Unknown severity: {value!r}")
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError as exc:
                raise ValueError(f"Unknown severity rank: {value}") from exc
        normalized = str(value).strip().upper()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown severity: {value!r}") from exc


_ALIASES: Dict[str, str] = {
    "WARN": "WARNING",
    "ERR": "ERROR",
    "NONE": "OFF",
}

_TO_PYTHON: Dict[Severity, int] = {
    Severity.ALL: logging.NOTSET,
    Severity.INFO: logging.INFO,
    Severity.DEBUG: logging.DEBUG,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
    Severity.OFF: logging.CRITICAL + 10,
}
