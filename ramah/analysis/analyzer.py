from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace
from typing import Any

import pandas as pd

from ..models.frequency import AnalysisResult, FrequencyItem, Row

"""Frequency analysis of a single column.

analyze() turns a rowset into a normalized, deterministically ordered
frequency table:

1. Rows lacking the column, or whose value normalizes to "", are skipped.
2. Values are grouped by normalize_key() (stringify, trim, lowercase).
3. The display name of a group is the trimmed first raw value seen.
4. Percentages are computed against the number of rows that were counted.
5. Items are ordered by count desc, then display name asc.

Malformed cells never raise; they are skipped.
"""

__all__ = [
    "stringify_value",
    "normalize_key",
    "analyze",
    "recalculate_percentages",
    "sort_key",
]

logger = logging.getLogger(__name__)


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    # pd.isna on list-likes returns an array; only scalars can be "missing"
    if pd.api.types.is_scalar(value):
        try:
            return bool(pd.isna(value))
        except (TypeError, ValueError):  # pragma: no cover
            return False
    return False


def stringify_value(value: Any) -> str:
    """String form of a raw cell value, before trimming.

    Missing cells (None, NaN, NaT) become "". Integral floats lose their
    fractional part so that 5, 5.0 and "5" group together; booleans render
    lowercase.
    """
    if _is_missing(value):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if hasattr(value, "item") and pd.api.types.is_number(value):
        # numpy scalar -> python scalar
        return stringify_value(value.item())
    return str(value)


def normalize_key(value: Any) -> str:
    return stringify_value(value).strip().lower()


def sort_key(item: FrequencyItem) -> tuple[int, str, str]:
    # casefold first for a natural order, raw name second so the order is total
    return (-item.count, item.display_name.casefold(), item.display_name)


def recalculate_percentages(items: Iterable[FrequencyItem]) -> tuple[FrequencyItem, ...]:
    """Return new items whose percentages are relative to their own total.

    Order is preserved. An empty or zero total yields 0.0 percentages.
    """
    snapshot = tuple(items)
    total = sum(item.count for item in snapshot)
    return tuple(
        replace(item, percentage=(item.count / total) * 100 if total > 0 else 0.0)
        for item in snapshot
    )


def analyze(rows: Sequence[Row] | Iterable[Row], column: str) -> AnalysisResult:
    """Build the frequency table of ``column`` over ``rows``."""
    counts: dict[str, int] = {}
    display: dict[str, str] = {}
    total_rows = 0

    for row in rows:
        try:
            if column not in row:
                continue
            raw = row[column]
        except TypeError:
            # not a mapping
            continue
        key = normalize_key(raw)
        if key == "":
            continue

        total_rows += 1
        if key in counts:
            counts[key] += 1
        else:
            counts[key] = 1
            display[key] = stringify_value(raw).strip()

    if total_rows == 0:
        logger.debug(f"analyze: no values in column '{column}'")
        return AnalysisResult.empty()

    items = [
        FrequencyItem(
            normalized_key=key,
            display_name=display[key],
            count=count,
            percentage=(count / total_rows) * 100,
        )
        for key, count in counts.items()
    ]
    items.sort(key=sort_key)

    logger.debug(f"analyze: column='{column}' rows={total_rows} categories={len(items)}")
    return AnalysisResult(total_rows=total_rows, unique_categories=len(items), items=tuple(items))
