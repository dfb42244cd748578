from __future__ import annotations

from collections.abc import Sequence

from ..models.frequency import FrequencyItem

"""Series feeding the dashboard charts (rendering is done elsewhere)."""

__all__ = [
    "OTHER_KEY",
    "OTHER_LABEL",
    "top_items",
    "distribution",
]

OTHER_KEY = "other"
OTHER_LABEL = "Other Categories"


def top_items(items: Sequence[FrequencyItem], n: int = 10) -> list[FrequencyItem]:
    return list(items[:n])


def distribution(items: Sequence[FrequencyItem], slices: int = 11) -> list[FrequencyItem]:
    """Pie slices: everything if it fits, else the top ``slices - 1`` plus an "other" bucket.

    The bucket's percentage is relative to the total of all items.
    """
    if len(items) <= slices:
        return list(items)

    head = list(items[: slices - 1])
    rest = items[slices - 1:]
    other_count = sum(item.count for item in rest)
    total = sum(item.count for item in items)
    head.append(
        FrequencyItem(
            normalized_key=OTHER_KEY,
            display_name=OTHER_LABEL,
            count=other_count,
            percentage=(other_count / total) * 100 if total > 0 else 0.0,
        )
    )
    return head
