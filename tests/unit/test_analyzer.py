from __future__ import annotations

import math

import numpy as np
import pytest

from ramah.analysis.analyzer import (
    analyze,
    normalize_key,
    recalculate_percentages,
    stringify_value,
)
from ramah.models.frequency import FrequencyItem


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("  Red ", "red"),
        ("RED", "red"),
        (5, "5"),
        (5.0, "5"),
        ("5", "5"),
        (2.5, "2.5"),
        (True, "true"),
        (None, ""),
        (float("nan"), ""),
        ("   ", ""),
        (np.int64(7), "7"),
        (np.float64(3.0), "3"),
    ],
)
def test_normalize_key(raw, expected):
    assert normalize_key(raw) == expected


def test_stringify_keeps_case_and_inner_spaces():
    assert stringify_value(" New  York ") == " New  York "


def test_analyze_groups_case_and_whitespace_variants(colour_rows):
    result = analyze(colour_rows, "Colour")

    assert result.total_rows == 6
    assert result.unique_categories == 3
    names = [i.display_name for i in result.items]
    assert names == ["Red", "Blue", "Green"]
    red = result.items[0]
    assert red.normalized_key == "red"
    assert red.count == 3
    assert red.percentage == pytest.approx(50.0)


def test_analyze_display_name_is_first_seen_trimmed():
    rows = [{"c": "  mIxEd  "}, {"c": "MIXED"}, {"c": "mixed"}]
    result = analyze(rows, "c")
    assert result.items[0].display_name == "mIxEd"


def test_analyze_skips_missing_and_blank_values():
    rows = [{"c": None}, {"c": ""}, {"c": "  "}, {"other": "x"}, {"c": float("nan")}]
    result = analyze(rows, "c")
    assert (result.total_rows, result.unique_categories, result.items) == (0, 0, ())


def test_analyze_numeric_and_string_share_a_key():
    rows = [{"n": 5}, {"n": "5"}, {"n": 5.0}, {"n": " 5 "}]
    result = analyze(rows, "n")
    assert result.unique_categories == 1
    assert result.items[0].count == 4
    assert result.items[0].display_name == "5"


def test_analyze_ignores_non_mapping_rows():
    rows = [None, 42, {"c": "a"}]
    result = analyze(rows, "c")  # type: ignore[arg-type]
    assert result.total_rows == 1


def test_analyze_tie_break_is_case_insensitive_then_exact():
    rows = [{"c": v} for v in ["b", "B2", "a", "A2"]]
    names = [i.display_name for i in analyze(rows, "c").items]
    assert names == ["a", "A2", "b", "B2"]


def test_analyze_accepts_generator():
    rows = ({"c": v} for v in ["x", "y", "x"])
    result = analyze(rows, "c")
    assert [(i.display_name, i.count) for i in result.items] == [("x", 2), ("y", 1)]


def test_analyze_does_not_mutate_rows(colour_rows):
    before = [dict(r) for r in colour_rows]
    analyze(colour_rows, "Colour")
    assert colour_rows == before


def test_recalculate_percentages_preserves_order():
    items = [
        FrequencyItem("b", "B", 1, 10.0),
        FrequencyItem("a", "A", 3, 30.0),
    ]
    result = recalculate_percentages(items)
    assert [i.display_name for i in result] == ["B", "A"]
    assert result[0].percentage == pytest.approx(25.0)
    assert result[1].percentage == pytest.approx(75.0)
    # originals untouched
    assert items[0].percentage == 10.0


def test_recalculate_percentages_empty():
    assert recalculate_percentages([]) == ()


def test_percentages_sum_to_hundred_for_odd_totals():
    rows = [{"c": v} for v in ["a", "b", "c", "a", "b", "a", "d"]]
    total = math.fsum(i.percentage for i in analyze(rows, "c").items)
    assert total == pytest.approx(100.0)
