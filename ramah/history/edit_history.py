from __future__ import annotations

import logging
from collections.abc import Iterable

from ..analysis.analyzer import recalculate_percentages
from ..models.frequency import AnalysisResult, FrequencyItem, Snapshot

"""Edit history over frequency table snapshots.

The history is an arena of immutable snapshots plus a cursor:

    snapshots = [S0, S1, S2]   cursor = 1   -> current table is S1

- delete_category() drops everything after the cursor, appends a new
  snapshot and moves the cursor onto it (linear history, no branches).
- undo()/redo() only move the cursor; at the boundaries they do nothing.
- reset_to_origin() keeps S0 only. Nothing can be redone afterwards.

S0 is kept verbatim, including percentages computed against the original
total. No operation raises.
"""

__all__ = [
    "EditHistory",
]

logger = logging.getLogger(__name__)


class EditHistory:
    """Undo/redo state machine for category deletions.

    One instance belongs to a single (sheet, column) analysis and is
    re-seeded with init() whenever a new analysis replaces it. Not thread
    safe; the owning workspace is the only writer.
    """

    def __init__(self, initial: Iterable[FrequencyItem] = ()) -> None:
        self._snapshots: list[Snapshot] = []
        self._cursor = 0
        self.init(initial)

    def init(self, initial: Iterable[FrequencyItem]) -> AnalysisResult:
        """Seed the history with an origin snapshot, discarding any previous state."""
        self._snapshots = [tuple(initial)]
        self._cursor = 0
        return self.current()

    # --- introspection -------------------------------------------------

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._snapshots) - 1

    def current(self) -> AnalysisResult:
        return AnalysisResult.from_items(self._snapshots[self._cursor])

    def origin(self) -> AnalysisResult:
        return AnalysisResult.from_items(self._snapshots[0])

    # --- mutations -----------------------------------------------------

    def delete_category(self, display_name: str) -> AnalysisResult:
        """Remove the category named ``display_name`` from the current table.

        Remaining percentages are recomputed against the new total. Deleting
        a name that is not in the current table leaves the history untouched.
        """
        current = self._snapshots[self._cursor]
        filtered = [item for item in current if item.display_name != display_name]
        if len(filtered) == len(current):
            logger.debug(f"delete: '{display_name}' not in current table, ignored")
            return self.current()

        snapshot = recalculate_percentages(filtered)
        del self._snapshots[self._cursor + 1:]
        self._snapshots.append(snapshot)
        self._cursor = len(self._snapshots) - 1
        logger.debug(f"delete: '{display_name}' removed (cursor={self._cursor} history={len(self)})")
        return self.current()

    def undo(self) -> AnalysisResult:
        if self.can_undo:
            self._cursor -= 1
            logger.debug(f"undo: cursor={self._cursor}")
        return self.current()

    def redo(self) -> AnalysisResult:
        if self.can_redo:
            self._cursor += 1
            logger.debug(f"redo: cursor={self._cursor}")
        return self.current()

    def reset_to_origin(self) -> AnalysisResult:
        del self._snapshots[1:]
        self._cursor = 0
        logger.debug("reset: history truncated to origin")
        return self.current()
