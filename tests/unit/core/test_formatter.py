from __future__ import annotations

"""
Unit tests for the line formatter.

Verifies:
1. Segment order and content with every toggle on.
2. Independent omission of each segment without leftover separators.
3. Positional value reduction and printf-style templates.
"""

from datetime import datetime

import pytest

from xtiloger.core.formatter import format_line, format_template, reduce_values
from xtiloger.domain.config import LoggerConfig
from xtiloger.domain.levels import Severity
from xtiloger.domain.record import CallSite, LogRecord, ThreadInfo

_NOW = datetime(2024, 12, 5, 14, 3, 9, 42000)


def _record(message: str = "payload", main: bool = True, severity: Severity = Severity.WARNING) -> LogRecord:
    return LogRecord(
        timestamp=_NOW,
        severity=severity,
        call_site=CallSite("/src/app/network.py", 42, "fetch"),
        thread=ThreadInfo(ident=0xBEEF, is_main=main),
        logger_name="net",
        message=message,
    )


# -----------------------------------------------------------------------------
# LINE ASSEMBLY
# -----------------------------------------------------------------------------

def test_full_line() -> None:
    line = format_line(_record(), LoggerConfig())
    assert line == "2024-12-05 14:03:09.042 [net] [WARNING] [network.py:42] [Main] fetch => payload"


def test_short_time_and_worker_thread() -> None:
    cfg = LoggerConfig(show_long_time=False)
    line = format_line(_record(main=False), cfg)
    assert line.startswith("14:03:09.042 [net] [WARNING]")
    assert "[Global]<0xbeef>" in line


def test_all_toggles_off_yields_bare_message() -> None:
    cfg = LoggerConfig()
    cfg.hide_all_metadata()
    assert format_line(_record("just this"), cfg) == "just this"


def test_line_number_fallback_without_file_name() -> None:
    cfg = LoggerConfig(show_file_name=False)
    assert "line:42" in format_line(_record(), cfg)
    assert "[network.py" not in format_line(_record(), cfg)


def test_file_name_without_line_number() -> None:
    cfg = LoggerConfig(show_line_number=False)
    assert "[network.py]" in format_line(_record(), cfg)


@pytest.mark.parametrize("toggle", [
    "show_timestamp", "show_level", "show_file_name", "show_thread", "show_function_name",
])
def test_omitted_segments_leave_no_double_spaces(toggle) -> None:
    cfg = LoggerConfig(**{toggle: False})
    line = format_line(_record(), cfg)
    info, _, message = line.partition(" => ")
    assert "  " not in info
    assert info == info.strip()
    assert message == "payload"


def test_only_function_name() -> None:
    cfg = LoggerConfig()
    cfg.hide_all_metadata()
    cfg.show_function_name = True
    assert format_line(_record(), cfg) == "fetch => payload"


# -----------------------------------------------------------------------------
# MESSAGE REDUCTION
# -----------------------------------------------------------------------------

def test_reduce_values_concatenates_without_separator() -> None:
    assert reduce_values(["retry ", 3, " of ", 5.5, None, [1]]) == "retry 3 of 5.5None[1]"
    assert reduce_values([]) == ""


def test_template_substitutes_in_order() -> None:
    assert format_template("%d files in %.2f s (%s)", [3, 1.5, "ok"]) == "3 files in 1.50 s (ok)"


def test_template_keeps_literal_prefix_and_suffix() -> None:
    assert format_template("user=%@ done", ["bob"]) == "user=bob done"


def test_template_falls_back_to_str_on_mismatch() -> None:
    assert format_template("count=%d", ["many"]) == "count=many"


def test_template_percent_literal_and_missing_args() -> None:
    assert format_template("100%% of %d and %d", [7]) == "100% of 7 and %d"


def test_template_without_args_is_unchanged() -> None:
    assert format_template("50%% %d", []) == "50%% %d"


def test_template_length_modifiers() -> None:
    assert format_template("%ld-%lld-%5.1Lf", [1, 2, 3.14]) == "1-2-  3.1"


def test_template_percent_followed_by_space_is_literal() -> None:
    assert format_template("50% off for %s", ["bob"]) == "50% off for bob"
