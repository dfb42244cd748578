from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Literal

from ..analysis.analyzer import analyze
from ..history.edit_history import EditHistory
from ..models.frequency import AnalysisResult, Row
from ..models.transform_outcome import TransformOutcome

"""Workspace controller.

The workspace is the single owner of the loaded dataset (all sheets of one
file), the active sheet, the selected column and the EditHistory of that
column. Callers hold a Workspace and pass it explicitly; there is no
process-wide dataset.

Transforms (e.g. code produced by an assistant) are opaque callables
``rows -> rows``. The workspace runs them against a copy of the active rows
and only replaces the dataset when they return a list. Any new dataset or
column triggers a fresh analysis and re-seeds the history.
"""

__all__ = [
    "Transform",
    "Query",
    "QueryContext",
    "WorkspaceError",
    "Workspace",
]

logger = logging.getLogger(__name__)

Transform = Callable[[list[dict[str, Any]]], Any]
Query = Callable[[Any], Any]
QueryContext = Literal["active", "all"]


class WorkspaceError(Exception):
    """Raised for invalid workspace operations (unknown sheet/column, nothing loaded)."""


def _extract_headers(rows: Sequence[Row]) -> list[str]:
    if not rows:
        return []
    first = rows[0]
    if not isinstance(first, Mapping):
        return []
    return [str(k) for k in first.keys()]


class Workspace:
    """Single-writer owner of the dataset, selection and edit history."""

    def __init__(self, default_sheet: str | None = None) -> None:
        self.default_sheet = default_sheet
        self.file_name: str = ""
        self._sheets: dict[str, list[dict[str, Any]]] = {}
        self.active_sheet: str = ""
        self.headers: list[str] = []
        self.selected_column: str = ""
        self.history: EditHistory | None = None

    # --- dataset -------------------------------------------------------

    @property
    def is_loaded(self) -> bool:
        return bool(self._sheets)

    @property
    def sheet_names(self) -> list[str]:
        return list(self._sheets)

    @property
    def rows(self) -> list[dict[str, Any]]:
        """Rows of the active sheet (empty when nothing is loaded)."""
        return self._sheets.get(self.active_sheet, [])

    def load(self, sheets: Mapping[str, Sequence[Row]], file_name: str) -> None:
        """Replace the dataset with ``sheets`` and activate the first (or default) sheet."""
        if not sheets:
            raise WorkspaceError(f"no sheets to load from {file_name!r}")
        self._sheets = {str(name): [dict(r) for r in rows] for name, rows in sheets.items()}
        self.file_name = file_name
        first = next(iter(self._sheets))
        if self.default_sheet and self.default_sheet in self._sheets:
            first = self.default_sheet
        self._activate(first)
        logger.info(f"workspace: loaded '{file_name}' active_sheet='{first}' rows={len(self.rows)}")

    def switch_sheet(self, name: str) -> None:
        if name not in self._sheets:
            raise WorkspaceError(f"unknown sheet: {name!r}")
        self._activate(name)
        logger.debug(f"workspace: switched to sheet '{name}'")

    def _activate(self, name: str) -> None:
        self.active_sheet = name
        self.headers = _extract_headers(self._sheets[name])
        self.clear_selection()

    # --- analysis ------------------------------------------------------

    def select_column(self, column: str) -> AnalysisResult:
        """Analyze ``column`` of the active sheet and seed a new edit history."""
        if not self.is_loaded:
            raise WorkspaceError("no dataset loaded")
        if column not in self.headers:
            raise WorkspaceError(f"unknown column {column!r} in sheet '{self.active_sheet}'")
        result = analyze(self.rows, column)
        self.selected_column = column
        self.history = EditHistory(result.items)
        logger.debug(f"workspace: column '{column}' rows={result.total_rows} categories={result.unique_categories}")
        return result

    def current(self) -> AnalysisResult | None:
        if self.history is None:
            return None
        return self.history.current()

    def clear_selection(self) -> None:
        self.selected_column = ""
        self.history = None

    # --- collaborator capabilities -------------------------------------

    def evaluate(self, query: Query, context: QueryContext = "active") -> TransformOutcome:
        """Run a read-only query against a copy of the data.

        ``context="active"`` passes the active sheet's rows, ``context="all"``
        passes ``{sheet_name: rows}`` for every loaded sheet.
        """
        if context == "all":
            if not self._sheets:
                return TransformOutcome.failed("Sheets not loaded.")
            data: Any = copy.deepcopy(self._sheets)
        elif context == "active":
            if not self.is_loaded:
                return TransformOutcome.failed("Dataset not loaded.")
            data = copy.deepcopy(self.rows)
        else:
            raise ValueError(f"invalid query context: {context!r}")
        try:
            result = query(data)
        except Exception as e:  # opaque collaborator code: report, never propagate
            logger.warning(f"query failed: {e}")
            return TransformOutcome.failed(str(e))
        return TransformOutcome(success=True, result=result)

    def apply_transform(self, transform: Transform) -> TransformOutcome:
        """Replace the active sheet's rows with ``transform(rows)``.

        Exceptions and non-list results leave the dataset untouched. When a
        column is selected it is re-analyzed and its history re-seeded; if
        the column no longer exists the selection is cleared.
        """
        outcome = self.evaluate(transform)
        if not outcome.success:
            return outcome
        new_rows = outcome.result
        if not isinstance(new_rows, list):
            logger.warning("transform result was not a list; dataset unchanged")
            return TransformOutcome.failed("Result was not an array.", result=new_rows)
        if not all(isinstance(r, Mapping) for r in new_rows):
            logger.warning("transform result contains non-row items; dataset unchanged")
            return TransformOutcome.failed("Result rows must be objects.", result=new_rows)

        self._sheets[self.active_sheet] = [dict(r) for r in new_rows]
        self.headers = _extract_headers(self._sheets[self.active_sheet])
        logger.info(f"workspace: transform applied sheet='{self.active_sheet}' rows={len(new_rows)}")

        analysis = None
        if self.selected_column:
            if self.selected_column in self.headers:
                analysis = self.select_column(self.selected_column)
            else:
                logger.info(f"workspace: column '{self.selected_column}' no longer present, selection cleared")
                self.clear_selection()
        return TransformOutcome(success=True, result=new_rows, analysis=analysis)

    def reset(self) -> None:
        """Drop the dataset, the selection and the history."""
        self._sheets = {}
        self.file_name = ""
        self.active_sheet = ""
        self.headers = []
        self.clear_selection()
        logger.debug("workspace: reset")
