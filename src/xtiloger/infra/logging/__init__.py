from __future__ import annotations

from .config import DiagnosticsConfig
from .core import (
    attach_bridge,
    configure_diagnostics,
    detach_bridges,
)
from .handlers import XTILogerHandler

__all__ = [
    "DiagnosticsConfig",
    "XTILogerHandler",
    "attach_bridge",
    "configure_diagnostics",
    "detach_bridges",
]
