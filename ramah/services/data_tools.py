from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from ..models.frequency import Row

"""Row-level data tools.

Small helpers an assistant (or a user script) can combine into transforms
and queries run through Workspace.apply_transform / Workspace.evaluate.
None of them mutates the rows they are given.
"""

__all__ = [
    "levenshtein",
    "split_column",
    "detect_anomalies",
    "find_fuzzy_matches",
    "pivot_data",
]


_NUMBER_RE = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|Infinity)"
    r"|0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+"
)


def _text(value: Any, default: str = "") -> str:
    # falsy cells (None, "", 0) fall back to default
    return str(value) if value else default


def levenshtein(a: str, b: str) -> int:
    """Edit distance between ``a`` and ``b``."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


def split_column(
    rows: Sequence[Row], column: str, delimiter: str, new_names: Sequence[str]
) -> list[dict[str, Any]]:
    """Append ``new_names`` columns holding the trimmed parts of ``column``.

    The source column is kept. Missing parts become "".
    """
    result = []
    for row in rows:
        parts = _text(row.get(column)).split(delimiter)
        new_row = dict(row)
        for idx, name in enumerate(new_names):
            new_row[name] = parts[idx].strip() if idx < len(parts) else ""
        result.append(new_row)
    return result


def _is_numeric(value: Any) -> bool:
    """Whether ``value`` reads as a number.

    Text must be a plain decimal literal (optionally signed, with exponent),
    a 0x/0o/0b literal or "Infinity". Blank text counts as numeric (zero);
    "nan", "inf" and digit separators like "1_000" do not.
    """
    if isinstance(value, bool):
        return True
    if isinstance(value, (int, float)):
        return value == value  # NaN is not numeric
    if value is None:
        return False
    text = str(value).strip()
    return not text or bool(_NUMBER_RE.fullmatch(text))


def detect_anomalies(rows: Sequence[Row], column: str) -> list[dict[str, Any]]:
    """Flag suspicious rows of ``column``.

    A column whose values are more than 80% numeric flags its non-numeric
    cells. Otherwise rows whose value length deviates from the mean length
    by more than twice the mean are flagged.
    """
    if not rows:
        return []
    values = [row.get(column) for row in rows]
    numeric = [v for v in values if v != "" and _is_numeric(v)]
    if len(numeric) > len(values) * 0.8:
        return [
            {"row": row, "reason": "Non-numeric value in numeric column"}
            for row in rows
            if row.get(column) not in (None, "") and not _is_numeric(row.get(column))
        ]

    lengths = [len(str(v)) for v in values]
    avg_len = sum(lengths) / len(lengths)
    return [
        {"row": row, "reason": "Unusual length"}
        for row in rows
        if abs(len(_text(row.get(column))) - avg_len) > avg_len * 2
    ]


def find_fuzzy_matches(rows: Sequence[Row], column: str) -> list[dict[str, Any]]:
    """Pairs of distinct values within edit distance 1-2 (values longer than 3 chars)."""
    unique: list[str] = []
    seen: set[str] = set()
    for row in rows:
        value = _text(row.get(column))
        if value and value not in seen:
            seen.add(value)
            unique.append(value)

    matches = []
    for i, a in enumerate(unique):
        for b in unique[i + 1:]:
            dist = levenshtein(a.lower(), b.lower())
            if 0 < dist < 3 and max(len(a), len(b)) > 3:
                matches.append({"value": a, "potential_match": b, "distance": dist})
    return matches


def pivot_data(rows: Sequence[Row], row_key: str, col_key: str) -> dict[str, dict[str, int]]:
    """Count rows per (row_key value, col_key value); blanks become "Unknown"."""
    pivot: dict[str, dict[str, int]] = {}
    for row in rows:
        r_val = _text(row.get(row_key), "Unknown")
        c_val = _text(row.get(col_key), "Unknown")
        bucket = pivot.setdefault(r_val, {})
        bucket[c_val] = bucket.get(c_val, 0) + 1
    return pivot
