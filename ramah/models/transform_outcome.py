from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .frequency import AnalysisResult

"""Outcome of running a collaborator-supplied transform or query.

Transforms are opaque callables; the workspace only reports whether running
them succeeded and what they produced.
"""

__all__ = [
    "TransformOutcome",
]


@dataclass(frozen=True)
class TransformOutcome:
    success: bool
    result: Any = None  # raw return value of the callable
    error: str | None = None  # failure reason (exception message or shape error)
    analysis: AnalysisResult | None = None  # re-derived table when a column is selected

    @staticmethod
    def failed(error: str, result: Any = None) -> TransformOutcome:
        return TransformOutcome(success=False, result=result, error=error)
