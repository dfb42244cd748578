from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import AppConfig, ConfigError, load_config, resolve_config_path
from ..excel.reader import WorkbookReadError, read_workbook
from ..logging.init import log_summary, set_debug, setup_logging
from ..models.frequency import FrequencyItem
from ..services.charts import distribution, top_items
from ..services.export import export_csv
from ..services.summary import render_summary_line
from ..services.table_view import table_view
from ..services.workspace import Workspace, WorkspaceError

"""CLI entrypoint.

Flow:
- Load .env (may set RAMAH_CONFIG) and the YAML config
- Read the workbook and load it into a Workspace
- Analyze the selected column, replay --delete/--undo/--redo/--reset edits
- Print the (filtered/sorted) table, optionally export CSV, then a SUMMARY line
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv; existing environment wins by default."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="ramah", description="Frequency breakdown of a spreadsheet column")
    p.add_argument("file", type=Path, help="Spreadsheet to analyze (.xlsx, .xls, .csv)")
    p.add_argument("--column", "-c", help="Column to analyze")
    p.add_argument("--sheet", "-s", help="Sheet to use (default: first usable sheet)")
    p.add_argument("--delete", "-d", action="append", default=[], metavar="NAME",
                   help="Delete a category from the analysis (repeatable, applied in order)")
    p.add_argument("--undo", type=int, default=0, metavar="N", help="Undo the last N edits")
    p.add_argument("--redo", type=int, default=0, metavar="N", help="Redo N edits after undoing")
    p.add_argument("--reset", action="store_true", help="Reset to the original analysis after edits")
    p.add_argument("--filter", default="", metavar="TERM", help="Only show categories containing TERM")
    p.add_argument("--sort", choices=["count", "name"], default="count", help="Sort key of the table")
    p.add_argument("--asc", action="store_true", help="Sort ascending")
    p.add_argument("--chart", action="store_true", help="Print the top and distribution chart series")
    p.add_argument("--export", action="store_true", help="Write the table as CSV to the export directory")
    p.add_argument("--json", action="store_true", help="Print the current analysis as JSON")
    p.add_argument("--config", type=Path, help="Config file (default: $RAMAH_CONFIG or config/ramah.yml)")
    p.add_argument("--inspect-data", action="store_true", help="Print sheet headers & first rows then exit")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _inspect_data(workspace: Workspace) -> int:
    for name in workspace.sheet_names:
        workspace.switch_sheet(name)
        print(f"SHEET: {name} cols={workspace.headers} rows={len(workspace.rows)}")
        safe_rows = []
        for r in workspace.rows[:3]:
            safe_rows.append({k: (v.isoformat() if hasattr(v, "isoformat") else v) for k, v in r.items()})
        print("    sample_rows=", safe_rows)
    return EXIT_SUCCESS


def _format_item(item: FrequencyItem) -> str:
    return f"{item.display_name}\t{item.count}\t{item.percentage:.2f}%"


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # only read sys.argv when argv is None; an explicit [] must not pick up pytest flags
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        set_debug()
        logger.debug("debug mode enabled")

    config_path, required = resolve_config_path(args.config)
    try:
        cfg: AppConfig = load_config(config_path, required=required)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    try:
        sheets = read_workbook(args.file, cfg.keep_na_strings or None, cfg.header_scan_depth)
    except WorkbookReadError as e:
        logger.error(f"read: {e}")
        return EXIT_FATAL

    workspace = Workspace(default_sheet=cfg.default_sheet)
    workspace.load({name: s.rows for name, s in sheets.items()}, args.file.name)

    if args.inspect_data:
        return _inspect_data(workspace)

    try:
        if args.sheet:
            workspace.switch_sheet(args.sheet)
        if not args.column:
            logger.error(f"no column given; available in '{workspace.active_sheet}': {workspace.headers}")
            return EXIT_FATAL
        workspace.select_column(args.column)
    except WorkspaceError as e:
        logger.error(f"workspace: {e}")
        return EXIT_FATAL

    history = workspace.history
    if history is None:
        logger.error(f"workspace: no history for column '{args.column}'")
        return EXIT_FATAL
    if history.current().is_empty:
        logger.warning(f"column '{args.column}' has no values in sheet '{workspace.active_sheet}'")
    for name in args.delete:
        if history.current().find(name) is None:
            logger.warning(f"delete: '{name}' not in current table")
        history.delete_category(name)
    for _ in range(max(args.undo, 0)):
        history.undo()
    for _ in range(max(args.redo, 0)):
        history.redo()
    if args.reset:
        history.reset_to_origin()

    result = history.current()
    key = "display_name" if args.sort == "name" else "count"
    direction = "asc" if args.asc else "desc"
    view = table_view(result.items, args.filter, key, direction)

    logger.info(f"sheet='{workspace.active_sheet}' column='{args.column}' edits={len(history) - 1}")
    for item in view:
        logger.info(_format_item(item))

    if args.chart:
        for item in top_items(result.items, cfg.top_n):
            logger.info(f"top: {_format_item(item)}")
        for item in distribution(result.items, cfg.distribution_slices):
            logger.info(f"distribution: {_format_item(item)}")

    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False))

    if args.export:
        try:
            export_csv(view, args.column, Path(cfg.export_directory))
        except OSError as e:
            logger.error(f"export: {e}")
            return EXIT_FATAL

    summary_line = render_summary_line(args.column, result)
    # log_summary adds the "SUMMARY " prefix itself
    log_summary(summary_line[len("SUMMARY "):])
    return EXIT_SUCCESS
