from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

"""Frequency table domain models.

FrequencyItem is one category of a frequency table, AnalysisResult is the
public shape handed to the dashboard, the exporter and the CLI.

A history snapshot is simply a tuple of FrequencyItem. Items are frozen so
snapshots can never share mutable state.
"""

__all__ = [
    "Row",
    "FrequencyItem",
    "AnalysisResult",
    "Snapshot",
]

# Column id -> raw cell value. Supplied by the reader or a transform; never mutated.
Row = Mapping[str, Any]


@dataclass(frozen=True)
class FrequencyItem:
    """A single category of the frequency table.

    normalized_key is the grouping identity (trimmed, lowercased) and is never
    displayed. display_name is the trimmed form of the first raw value seen
    for that key.
    """
    normalized_key: str
    display_name: str
    count: int  # >= 1
    percentage: float  # 0..100, relative to the table total it was computed against


Snapshot = tuple[FrequencyItem, ...]


@dataclass(frozen=True)
class AnalysisResult:
    """Public result shape. Totals are always derived from items."""
    total_rows: int
    unique_categories: int
    items: Snapshot = ()

    @classmethod
    def from_items(cls, items: Iterable[FrequencyItem]) -> AnalysisResult:
        snapshot = tuple(items)
        return cls(
            total_rows=sum(item.count for item in snapshot),
            unique_categories=len(snapshot),
            items=snapshot,
        )

    @classmethod
    def empty(cls) -> AnalysisResult:
        return cls(total_rows=0, unique_categories=0, items=())

    @property
    def is_empty(self) -> bool:
        return not self.items

    def find(self, display_name: str) -> FrequencyItem | None:
        for item in self.items:
            if item.display_name == display_name:
                return item
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalRows": self.total_rows,
            "uniqueCategories": self.unique_categories,
            "items": [
                {
                    "name": item.normalized_key,
                    "displayName": item.display_name,
                    "count": item.count,
                    "percentage": item.percentage,
                }
                for item in self.items
            ],
        }
