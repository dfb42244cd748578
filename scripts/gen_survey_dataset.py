#!/usr/bin/env python3
"""Generate a messy survey workbook for manual and performance testing.

The generated sheet looks like what users actually upload:
- A title row and a blank row above the header
- Category values with inconsistent casing and stray whitespace
- Blank cells and a few numeric codes stored as text

Example:
    python scripts/gen_survey_dataset.py --rows 50000 --output data/survey.xlsx
    ramah data/survey.xlsx --column Colour --chart
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

COLOURS = ["Red", "Blue", "Green", "Yellow", "Purple", "Orange", "Black", "White", "Pink", "Grey",
           "Brown", "Teal", "Navy"]
SIZES = ["S", "M", "L", "XL"]


def _noisy(value: str, rng: np.random.Generator) -> str:
    roll = rng.random()
    if roll < 0.1:
        return value.upper()
    if roll < 0.2:
        return value.lower()
    if roll < 0.3:
        return f"  {value} "
    return value


def generate_survey(rows: int, seed: int = 42, blank_ratio: float = 0.05) -> pd.DataFrame:
    """Raw sheet rows (title, blank, header, data) as a header-less DataFrame."""
    rng = np.random.default_rng(seed)
    # skewed popularity so the distribution chart has a long tail
    weights = 1 / np.arange(1, len(COLOURS) + 1)
    weights = weights / weights.sum()

    data: list[list[object]] = [
        ["Customer colour survey", None, None, None],
        [None, None, None, None],
        ["id", "Colour", "Size", "Store"],
    ]
    for i in range(rows):
        colour = None if rng.random() < blank_ratio else _noisy(str(rng.choice(COLOURS, p=weights)), rng)
        store = str(rng.integers(100, 110))
        data.append([i + 1, colour, str(rng.choice(SIZES)), store])
    return pd.DataFrame(data)


def write_workbook(df: pd.DataFrame, output: Path, sheet_name: str = "Responses") -> None:
    output.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(output) as writer:
        df.to_excel(writer, sheet_name=sheet_name, header=False, index=False)


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a messy survey workbook")
    parser.add_argument("--rows", type=int, default=1000, help="Number of data rows")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--blank-ratio", type=float, default=0.05, help="Share of blank Colour cells")
    parser.add_argument("--output", type=Path, default=Path("data/survey.xlsx"), help="Output .xlsx path")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if not 0 <= args.blank_ratio < 1:
        print("Error: --blank-ratio must be in [0, 1)", file=sys.stderr)
        return 1

    df = generate_survey(args.rows, args.seed, args.blank_ratio)
    write_workbook(df, args.output)
    print(f"Generated {args.output} rows={args.rows}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
