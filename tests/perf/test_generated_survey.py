from __future__ import annotations

import importlib.util
import time
from pathlib import Path

from ramah.excel.reader import read_workbook
from ramah.services.workspace import Workspace

"""Round trip of the survey generator script through reader, analyzer and history."""

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "gen_survey_dataset.py"


def _load_generator():
    spec = importlib.util.spec_from_file_location("gen_survey_dataset", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    assert spec.loader is not None
    spec.loader.exec_module(module)
    return module


def test_generated_survey_analyzes_within_budget(temp_workdir: Path):
    gen = _load_generator()
    output = temp_workdir / "data" / "survey.xlsx"
    gen.write_workbook(gen.generate_survey(5_000, seed=1, blank_ratio=0.1), output)

    start = time.perf_counter()
    sheets = read_workbook(output)
    ws = Workspace()
    ws.load({name: s.rows for name, s in sheets.items()}, output.name)
    result = ws.select_column("Colour")
    elapsed = time.perf_counter() - start

    assert ws.headers == ["id", "Colour", "Size", "Store"]
    # noisy casing/whitespace collapses back onto the canonical colours
    assert result.unique_categories <= len(gen.COLOURS)
    assert {i.normalized_key for i in result.items} <= {c.lower() for c in gen.COLOURS}
    assert 4_000 < result.total_rows < 5_000
    assert elapsed < 30.0, f"read+analyze too slow: {elapsed:.3f}s"
