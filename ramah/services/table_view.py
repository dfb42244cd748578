from __future__ import annotations

from collections.abc import Iterable
from typing import Literal

from ..models.frequency import FrequencyItem

"""Detailed breakdown table: filter by name and re-sort.

This only reorders/filters for display and export; percentages are never
recomputed here, so exported values stay exactly those of the history.
"""

__all__ = [
    "SortKey",
    "SortDirection",
    "filter_items",
    "sort_items",
    "table_view",
]

SortKey = Literal["count", "display_name"]
SortDirection = Literal["asc", "desc"]


def filter_items(items: Iterable[FrequencyItem], term: str = "") -> list[FrequencyItem]:
    """Items whose display name contains ``term`` (case-insensitive)."""
    needle = term.lower()
    return [item for item in items if needle in item.display_name.lower()]


def sort_items(
    items: Iterable[FrequencyItem], key: SortKey = "count", direction: SortDirection = "desc"
) -> list[FrequencyItem]:
    if key not in ("count", "display_name"):
        raise ValueError(f"invalid sort key: {key!r}")
    if direction not in ("asc", "desc"):
        raise ValueError(f"invalid sort direction: {direction!r}")
    reverse = direction == "desc"
    if key == "display_name":
        return sorted(items, key=lambda i: (i.display_name.casefold(), i.display_name), reverse=reverse)
    # stable: equal counts keep the analyzer's order
    return sorted(items, key=lambda i: i.count, reverse=reverse)


def table_view(
    items: Iterable[FrequencyItem],
    term: str = "",
    key: SortKey = "count",
    direction: SortDirection = "desc",
) -> list[FrequencyItem]:
    return sort_items(filter_items(items, term), key, direction)
