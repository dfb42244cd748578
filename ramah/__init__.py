"""ramah: frequency breakdown of a spreadsheet column with undoable edits."""

from .analysis.analyzer import analyze
from .history.edit_history import EditHistory
from .models.frequency import AnalysisResult, FrequencyItem
from .services.workspace import Workspace

__all__ = [
    "AnalysisResult",
    "EditHistory",
    "FrequencyItem",
    "Workspace",
    "analyze",
]

__version__ = "0.1.0"
