from __future__ import annotations

import csv
import logging
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd

from ..services.progress import SheetProgress

"""Workbook reader with header inference.

Spreadsheets handed in by users rarely start with the header on the first
row (titles, blank lines, notes). Each sheet is therefore read without a
header and the header row is inferred:

1. Among the first ``scan_depth`` rows, the first row with the most
   non-blank cells is the header.
2. Header cells are trimmed; columns with a blank header are dropped.
3. Rows below the header become ``{header: value}`` dicts. Blank cells are
   "" and rows without any non-blank value are dropped.
4. Sheets without a header or without data rows are omitted.

.xlsx/.xls are read through pandas (openpyxl/xlrd engines); .csv is read
as a single sheet named after the file stem.
"""

__all__ = [
    "WorkbookReadError",
    "NoUsableSheetsError",
    "SheetData",
    "SUPPORTED_SUFFIXES",
    "read_raw_sheets",
    "infer_header_index",
    "normalize_sheet",
    "read_workbook",
]

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".xlsx", ".xls", ".csv")


class WorkbookReadError(Exception):
    """Raised when a file cannot be decoded as a spreadsheet."""


class NoUsableSheetsError(WorkbookReadError):
    """Raised when no sheet of a workbook yields a header and data rows."""


@dataclass
class SheetData:
    sheet_name: str
    columns: list[str]
    rows: list[dict[str, Any]] = field(default_factory=list)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return True
    return str(value).strip() == ""


def _na_options(keep_na_strings: list[str] | None) -> dict[str, Any]:
    # pandas._libs.parsers.STR_NA_VALUES holds the default NA string set
    if not keep_na_strings:
        return {"keep_default_na": True, "na_values": None}
    import pandas._libs.parsers as parsers

    custom_na = parsers.STR_NA_VALUES.copy() - set(keep_na_strings)
    return {"keep_default_na": False, "na_values": list(custom_na)}


def _csv_width(path: Path) -> int:
    with path.open(newline="", encoding="utf-8-sig") as f:
        return max((len(row) for row in csv.reader(f)), default=0)


def read_raw_sheets(path: Path, keep_na_strings: list[str] | None = None) -> dict[str, pd.DataFrame]:
    """Read every sheet of ``path`` without a header row.

    Raises:
        WorkbookReadError: missing file, unsupported suffix, undecodable content
    """
    if not path.exists():
        raise WorkbookReadError(f"file not found: {path}")
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise WorkbookReadError(f"unsupported file type '{suffix}': {path.name}")

    na = _na_options(keep_na_strings)
    try:
        if suffix == ".csv":
            # ragged CSVs (title lines above the table): size columns to the widest line
            width = _csv_width(path)
            if width == 0:
                return {path.stem: pd.DataFrame()}
            df = pd.read_csv(
                path, header=None, names=list(range(width)), dtype=object, skip_blank_lines=False, **na
            )
            return {path.stem: df}
        dfs: dict[str, pd.DataFrame] = {}
        with pd.ExcelFile(path) as xls:
            for name in xls.sheet_names:
                dfs[str(name)] = xls.parse(name, header=None, **na)
        return dfs
    except pd.errors.EmptyDataError:
        return {path.stem: pd.DataFrame()}
    except (OSError, ValueError, zipfile.BadZipFile) as e:
        raise WorkbookReadError(f"cannot read {path.name}: {e}") from e


def infer_header_index(df: pd.DataFrame, scan_depth: int = 100) -> int | None:
    """Index of the first row with the most non-blank cells, or None."""
    header_index: int | None = None
    max_filled = 0
    for i in range(min(len(df), scan_depth)):
        filled = sum(1 for v in df.iloc[i].tolist() if not _is_blank(v))
        if filled > max_filled:
            max_filled = filled
            header_index = i
    return header_index


def normalize_sheet(df: pd.DataFrame, sheet_name: str, scan_depth: int = 100) -> SheetData | None:
    """Turn a raw header-less DataFrame into header-keyed rows.

    Returns None when the sheet has no usable header or no data rows.
    """
    if df.empty:
        return None
    header_index = infer_header_index(df, scan_depth)
    if header_index is None:
        return None

    header_map: dict[int, str] = {}
    for idx, cell in enumerate(df.iloc[header_index].tolist()):
        name = "" if _is_blank(cell) else str(cell).strip()
        if name:
            header_map[idx] = name
    if not header_map:
        return None

    rows: list[dict[str, Any]] = []
    for i in range(header_index + 1, len(df)):
        raw = df.iloc[i].tolist()
        row: dict[str, Any] = {}
        has_data = False
        for idx, name in header_map.items():
            val = raw[idx] if idx < len(raw) else None
            if _is_blank(val):
                row[name] = ""
            else:
                row[name] = val
                has_data = True
        if has_data:
            rows.append(row)

    if not rows:
        return None
    return SheetData(sheet_name=sheet_name, columns=list(header_map.values()), rows=rows)


def read_workbook(
    path: Path, keep_na_strings: list[str] | None = None, scan_depth: int = 100
) -> dict[str, SheetData]:
    """Read and normalize every usable sheet of ``path``, in workbook order.

    Raises:
        WorkbookReadError: the file cannot be read
        NoUsableSheetsError: no sheet contains a header and data rows
    """
    raw = read_raw_sheets(path, keep_na_strings)
    sheets: dict[str, SheetData] = {}
    with SheetProgress(len(raw)) as progress:
        for name, df in raw.items():
            progress.start_sheet(name)
            sheet = normalize_sheet(df, name, scan_depth)
            if sheet is None:
                logger.debug(f"sheet '{name}' skipped: no header or data rows")
                progress.finish_sheet()
                continue
            sheets[name] = sheet
            progress.finish_sheet(rows=len(sheet.rows))

    if not sheets:
        raise NoUsableSheetsError(f"no readable data found in {path.name}")
    logger.info(f"loaded '{path.name}' sheets={list(sheets)}")
    return sheets
