from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from ramah.models.frequency import FrequencyItem
from ramah.services.export import CSV_HEADER, export_csv, export_filename, render_csv


def test_render_csv_quotes_values_and_formats_percentages():
    items = [
        FrequencyItem("red", "Red", 2, 200 / 3),
        FrequencyItem('say "hi"', 'Say "hi"', 1, 100 / 3),
    ]
    assert render_csv(items) == "\n".join(
        [
            CSV_HEADER,
            '"Red",2,66.67%',
            '"Say ""hi""",1,33.33%',
        ]
    )


def test_render_csv_empty_table():
    assert render_csv([]) == "Value,Count,Percentage"


def test_render_csv_values_with_commas():
    line = render_csv([FrequencyItem("a, b", "a, b", 1, 100.0)]).splitlines()[1]
    assert line == '"a, b",1,100.00%'


def test_export_filename():
    assert export_filename("Colour", date(2024, 3, 9)) == "ramah_analysis_Colour_2024-03-09.csv"


def test_export_csv_writes_file(temp_workdir: Path):
    items = [FrequencyItem("x", "X", 1, 100.0)]
    path = export_csv(items, "c", temp_workdir / "out" / "nested", today=date(2024, 1, 2))
    assert path == temp_workdir / "out" / "nested" / "ramah_analysis_c_2024-01-02.csv"
    assert path.read_text(encoding="utf-8") == 'Value,Count,Percentage\n"X",1,100.00%'


@pytest.mark.parametrize(
    "column, expected",
    [
        ("Age/Gender", "ramah_analysis_Age_Gender_2024-03-09.csv"),
        ("a\\b", "ramah_analysis_a_b_2024-03-09.csv"),
        ("x\x00y", "ramah_analysis_x_y_2024-03-09.csv"),
        ('Q1: "why?"', "ramah_analysis_Q1_ _why__2024-03-09.csv"),
    ],
)
def test_export_filename_replaces_unsafe_characters(column: str, expected: str):
    assert export_filename(column, date(2024, 3, 9)) == expected


def test_export_csv_column_with_path_separator(temp_workdir: Path):
    items = [FrequencyItem("x", "X", 1, 100.0)]
    path = export_csv(items, "Age / Gender", temp_workdir / "out", today=date(2024, 1, 2))
    assert path.parent == temp_workdir / "out"
    assert path.name == "ramah_analysis_Age _ Gender_2024-01-02.csv"
    assert path.exists()
