from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from datetime import date
from pathlib import Path

from ..models.frequency import FrequencyItem

"""CSV export of the current frequency table.

Format:

    Value,Count,Percentage
    "Red",3,75.00%
    "Blue",1,25.00%

The value is always quoted (embedded quotes doubled), the count is written
as is and the percentage with two decimals. Column names are made safe for
use in a file name (path separators and control characters become "_").
"""

__all__ = [
    "CSV_HEADER",
    "render_csv",
    "export_filename",
    "export_csv",
]

logger = logging.getLogger(__name__)

CSV_HEADER = "Value,Count,Percentage"

# path separators and other characters not allowed in file names
_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def render_csv(items: Iterable[FrequencyItem]) -> str:
    lines = [CSV_HEADER]
    for item in items:
        lines.append(f"{_quote(item.display_name)},{item.count},{item.percentage:.2f}%")
    return "\n".join(lines)


def export_filename(column: str, today: date | None = None) -> str:
    day = (today or date.today()).isoformat()
    safe_column = _UNSAFE_FILENAME_CHARS.sub("_", column).strip() or "column"
    return f"ramah_analysis_{safe_column}_{day}.csv"


def export_csv(
    items: Iterable[FrequencyItem], column: str, directory: Path, today: date | None = None
) -> Path:
    """Write the table to ``directory`` and return the file path."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(column, today)
    path.write_text(render_csv(items), encoding="utf-8")
    logger.info(f"exported {path}")
    return path
