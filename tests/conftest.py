from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. An isolated log root per test so nothing touches ~/Documents.
3. Reset of the logger registry and the process default logger.
"""

import io
import os
import sys
from pathlib import Path
from typing import Any, Callable, Generator

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from xtiloger.infra.sinks import ConsoleSink  # noqa: E402
from xtiloger.logger import Logger, reset_default_logger  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def log_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """
    Point XTILOGER_HOME at a temporary directory and reset the registry.

    Yields:
        Path: The temporary log root.
    """
    root = tmp_path / "logs"
    monkeypatch.setenv("XTILOGER_HOME", str(root))
    reset_default_logger()
    yield root
    reset_default_logger()


@pytest.fixture
def console_stream() -> io.StringIO:
    """In-memory stream standing in for stdout."""
    return io.StringIO()


@pytest.fixture
def make_logger(console_stream: io.StringIO) -> Callable[..., Logger]:
    """
    Factory for loggers writing to the temporary root.

    Defaults to a debug build with the console mirrored into console_stream.
    """
    def _factory(name: str = "test", debug_build: bool = True, **options: Any) -> Logger:
        return Logger(name, debug_build=debug_build, console=ConsoleSink(console_stream), **options)

    return _factory
