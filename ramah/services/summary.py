from __future__ import annotations

from ..models.frequency import AnalysisResult

"""Summary line rendering.

Format:
SUMMARY column={column} rows={total_rows} categories={unique} top={name|-} top_pct={pct}
"""

__all__ = [
    "render_summary_line",
]


def render_summary_line(column: str, result: AnalysisResult) -> str:
    """Render a SUMMARY line for the current table of ``column``.

    Examples:
        >>> from ramah.models.frequency import FrequencyItem
        >>> result = AnalysisResult.from_items([FrequencyItem("red", "Red", 3, 75.0),
        ...                                     FrequencyItem("blue", "Blue", 1, 25.0)])
        >>> render_summary_line("Colour", result)
        'SUMMARY column=Colour rows=4 categories=2 top=Red top_pct=75.00'
    """
    if not result.is_empty:
        top = result.items[0]
        top_name = top.display_name
        top_pct = f"{top.percentage:.2f}"
    else:
        top_name = "-"
        top_pct = "0"

    return (
        f"SUMMARY column={column} "
        f"rows={result.total_rows} "
        f"categories={result.unique_categories} "
        f"top={top_name} "
        f"top_pct={top_pct}"
    )
