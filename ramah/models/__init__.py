"""Domain models for the ramah frequency analysis tool.

This package contains the value types shared by the analyzer, the edit
history, the workspace controller and the export/CLI collaborators.
"""

from .frequency import AnalysisResult, FrequencyItem, Row, Snapshot
from .transform_outcome import TransformOutcome

__all__ = [
    # Frequency table
    "AnalysisResult",
    "FrequencyItem",
    "Row",
    "Snapshot",
    # Collaborator results
    "TransformOutcome",
]
