from __future__ import annotations

"""
Unit tests for the Severity domain model.

Verifies:
1. Total ordering by declaration rank.
2. Labels and tags of emittable severities.
3. Parsing from names, aliases and ranks.
4. Mapping to and from standard-library levels.
"""

import logging

import pytest

from xtiloger.domain.levels import Severity


def test_declaration_order_is_total_order() -> None:
    ordered = [Severity.ALL, Severity.INFO, Severity.DEBUG, Severity.WARNING, Severity.ERROR, Severity.OFF]
    assert sorted(reversed(ordered)) == ordered
    for lower, higher in zip(ordered, ordered[1:]):
        assert lower < higher
        assert lower <= higher
        assert higher > lower
        assert higher >= lower
    assert Severity.WARNING <= Severity.WARNING
    assert Severity.WARNING >= Severity.WARNING


def test_comparison_with_other_types_is_rejected() -> None:
    with pytest.raises(TypeError):
        _ = Severity.INFO < 3  # type: ignore[operator]


def test_labels_and_tags() -> None:
    assert Severity.WARNING.label == "warning"
    assert Severity.ERROR.tag == "[ERROR]"
    assert Severity.ALL.label == ""
    assert Severity.OFF.tag == ""
    assert not Severity.ALL.is_emittable
    assert not Severity.OFF.is_emittable


@pytest.mark.parametrize("raw, expected", [
    ("warning", Severity.WARNING),
    (" Warn ", Severity.WARNING),
    ("ERROR", Severity.ERROR),
    (0, Severity.ALL),
    (5, Severity.OFF),
    (Severity.DEBUG, Severity.DEBUG),
])
def test_parse_accepts_names_aliases_and_ranks(raw, expected) -> None:
    assert Severity.parse(raw) is expected


@pytest.mark.parametrize("raw", ["verbose", 9, True])
def test_parse_rejects_unknown_values(raw) -> None:
    with pytest.raises(ValueError):
        Severity.parse(raw)


def test_parse_none_uses_default() -> None:
    assert Severity.parse(None, default=Severity.INFO) is Severity.INFO
    with pytest.raises(ValueError):
        Severity.parse(None)


def test_python_level_mapping() -> None:
    assert Severity.from_python_level(logging.DEBUG) is Severity.DEBUG
    assert Severity.from_python_level(logging.INFO) is Severity.INFO
    assert Severity.from_python_level(logging.WARNING) is Severity.WARNING
    assert Severity.from_python_level(logging.CRITICAL) is Severity.ERROR
    assert Severity.WARNING.to_python_level() == logging.WARNING
