# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path

import pandas as pd
import pytest

from ramah.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        # setenv first so teardown also undoes values loaded from .env files
        monkeypatch.setenv("RAMAH_CONFIG", "")
        monkeypatch.delenv("RAMAH_CONFIG")
        yield p


@pytest.fixture(autouse=True)
def clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def colour_rows() -> list[dict[str, object]]:
    return [
        {"id": 1, "Colour": "Red"},
        {"id": 2, "Colour": " red "},
        {"id": 3, "Colour": "Blue"},
        {"id": 4, "Colour": "RED"},
        {"id": 5, "Colour": ""},
        {"id": 6, "Colour": "Green"},
        {"id": 7},
        {"id": 8, "Colour": None},
        {"id": 9, "Colour": "blue"},
    ]


@pytest.fixture()
def sample_config_yaml() -> str:
    return """export_directory: ./exports
keep_na_strings: [NA]
header_scan_depth: 50
top_n: 5
distribution_slices: 4
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "ramah.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


def make_excel(directory: Path, name: str, sheets: dict[str, list[list[object]]]) -> Path:
    """Write raw rows (no header handling) to an .xlsx file, one sheet per key."""
    p = directory / name
    with pd.ExcelWriter(p) as writer:
        for sheet, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
    return p


@pytest.fixture()
def excel_factory():
    return make_excel


@pytest.fixture()
def survey_xlsx(temp_workdir: Path) -> Path:
    return make_excel(
        temp_workdir / "data", "survey.xlsx",
        {
            "Responses": [
                ["Colour survey 2024", None, None],
                [None, None, None],
                ["id", "Colour", "Size"],
                [1, "Red", "S"],
                [2, " red", "M"],
                [3, "Blue", "M"],
                [4, "Green", "L"],
                [5, "RED ", "S"],
                [6, None, "S"],
                [7, "Blue", "M"],
            ],
            "Notes": [
                ["free text only"],
            ],
        },
    )
