from __future__ import annotations

"""
Unit tests for rotation file naming.

Verifies:
1. Name format per pattern and severity.
2. Determinism inside a bucket window and divergence across windows.
3. Unknown tokens are skipped silently.
4. ALL/OFF are refused.
"""

from datetime import datetime

import pytest

from xtiloger.core.rotation import bucket_key, rotation_file_name
from xtiloger.domain.levels import Severity


def test_year_month_pattern() -> None:
    assert rotation_file_name(Severity.ERROR, "Y-M", datetime(2024, 12, 5)) == "error-2024-12.log"


def test_year_week_pattern_uses_iso_week() -> None:
    assert rotation_file_name(Severity.ERROR, "Y-WY", datetime(2024, 12, 18)) == "error-2024-51.log"


def test_day_pattern_has_no_padding() -> None:
    assert rotation_file_name(Severity.INFO, "Y-M-D", datetime(2018, 3, 1)) == "info-2018-3-1.log"


def test_tokens_follow_pattern_order() -> None:
    assert rotation_file_name(Severity.DEBUG, "M-Y", datetime(2024, 7, 1)) == "debug-7-2024.log"


def test_unknown_tokens_are_skipped() -> None:
    now = datetime(2024, 12, 5)
    assert rotation_file_name(Severity.WARNING, "Y-H-M-", now) == "warning-2024-12.log"
    assert rotation_file_name(Severity.WARNING, "", now) == "warning.log"


def test_same_week_shares_a_file() -> None:
    monday = datetime(2024, 6, 10, 0, 0, 1)
    sunday = datetime(2024, 6, 16, 23, 59, 59)
    assert rotation_file_name(Severity.INFO, "Y-WY", monday) == rotation_file_name(Severity.INFO, "Y-WY", sunday)
    assert bucket_key("Y-WY", monday) == bucket_key("Y-WY", sunday) == (2024, 24)


def test_next_week_gets_a_new_file() -> None:
    sunday = datetime(2024, 6, 16, 23, 59, 59)
    next_monday = datetime(2024, 6, 17)
    assert rotation_file_name(Severity.INFO, "Y-WY", sunday) != rotation_file_name(Severity.INFO, "Y-WY", next_monday)


def test_severities_get_distinct_files() -> None:
    now = datetime(2024, 1, 15)
    names = {rotation_file_name(s, "Y-M", now) for s in (Severity.INFO, Severity.DEBUG, Severity.WARNING, Severity.ERROR)}
    assert len(names) == 4


@pytest.mark.parametrize("severity", [Severity.ALL, Severity.OFF])
def test_threshold_severities_have_no_file(severity) -> None:
    with pytest.raises(ValueError):
        rotation_file_name(severity, "Y-M", datetime(2024, 1, 1))


def test_week_pattern_uses_iso_week_year_at_new_year() -> None:
    # 2024-12-30 is ISO 2025-W01, 2024-01-02 is ISO 2024-W01
    late_december = datetime(2024, 12, 30)
    early_january = datetime(2024, 1, 2)

    assert rotation_file_name(Severity.ERROR, "Y-WY", late_december) == "error-2025-1.log"
    assert rotation_file_name(Severity.ERROR, "Y-WY", early_january) == "error-2024-1.log"


def test_iso_week_spanning_new_year_shares_a_file() -> None:
    tuesday = datetime(2024, 12, 31)
    friday = datetime(2025, 1, 3)
    previous_sunday = datetime(2024, 12, 29)

    assert bucket_key("Y-WY", tuesday) == bucket_key("Y-WY", friday) == (2025, 1)
    assert bucket_key("Y-WY", previous_sunday) == (2024, 52)


def test_calendar_year_kept_without_week_token() -> None:
    assert rotation_file_name(Severity.ERROR, "Y-M", datetime(2024, 12, 30)) == "error-2024-12.log"
