#!/usr/bin/env python3
"""
TimeFlow.

A personal time-tracking tool that logs activities in 15-minute slots and
turns them into productivity statistics for a day, a week or a month.
This module provides the CLI entry point for the application.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import yaml

from timeflow.backup import BackupError, export_backup, import_backup
from timeflow.period import compute_period_metrics
from timeflow.processor import compute_daily_metrics
from timeflow.reporter import ConsolePrinter, ReportGenerator
from timeflow.slots import CATEGORY_IDS, normalize_day
from timeflow.store import (
    EntryStore,
    StoreError,
    get_custom_range,
    get_today,
    month_range,
    parse_date,
    week_range,
)


def load_config(config_path: str = "config/config.yaml") -> dict[str, Any]:
    """
    Load configuration from a YAML file.

    Sections missing from the file fall back to the defaults.

    Args:
        config_path: Path to the configuration file.

    Returns:
        Configuration dictionary. Returns default config if file not found.
    """
    config = get_default_config()

    path = Path(config_path)
    if not path.exists():
        ConsolePrinter.print_warning(f"Config file not found: {config_path}, using defaults")
        return config

    with open(path, encoding="utf-8") as f:
        loaded = yaml.safe_load(f) or {}

    for section, values in loaded.items():
        if isinstance(values, dict) and isinstance(config.get(section), dict):
            config[section].update(values)
        else:
            config[section] = values
    return config


def get_default_config() -> dict[str, Any]:
    """
    Get the default configuration.

    Returns:
        Default configuration dictionary with all required settings.
    """
    return {
        "storage": {"data_file": "./data/timeflow_data.json"},
        "output": {"reports_dir": "./reports", "save_reports": True},
    }


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Args:
        argv: Argument list. Defaults to ``sys.argv[1:]``.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        description="TimeFlow - 15-minute slot time tracker and productivity report"
    )
    parser.add_argument(
        "--period",
        choices=["day", "week", "month"],
        default="day",
        help="Report period: day, week (Monday-Sunday) or month. Default: day",
    )
    parser.add_argument(
        "--date",
        type=str,
        help="Reference date (format: YYYY-MM-DD). Default: today",
    )
    parser.add_argument(
        "--start",
        type=str,
        help="Start date (format: YYYY-MM-DD) for custom period",
    )
    parser.add_argument(
        "--end",
        type=str,
        help="End date (format: YYYY-MM-DD) for custom period",
    )
    parser.add_argument(
        "--log",
        nargs=2,
        metavar=("SLOT", "ACTIVITY"),
        help="Log an activity in a slot (e.g. --log 09:15 'Write report')",
    )
    parser.add_argument(
        "--category",
        choices=CATEGORY_IDS,
        default="",
        help="Category for --log",
    )
    parser.add_argument(
        "--clear",
        metavar="SLOT",
        help="Clear the entry of a slot",
    )
    parser.add_argument(
        "--export",
        metavar="PATH",
        help="Export all data to a backup file (or directory) and exit",
    )
    parser.add_argument(
        "--import",
        dest="import_path",
        metavar="PATH",
        help="Replace all data with a backup file and exit",
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Print the report without saving it",
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config/config.yaml",
        help="Config file path. Default: config/config.yaml",
    )
    return parser.parse_args(argv)


def resolve_range(args: argparse.Namespace, today: str) -> tuple[str, str, str]:
    """
    Determine the report range from the arguments.

    Args:
        args: Parsed arguments.
        today: Reference date used when --date is not given.

    Returns:
        A tuple of (period_name, start, end).

    Raises:
        ValueError: If only one of --start and --end is given.
    """
    if bool(args.start) != bool(args.end):
        raise ValueError("--start and --end must be given together")

    if args.start and args.end:
        start, end = get_custom_range(args.start, args.end)
        return "custom", start, end

    if args.period == "week":
        start, end = week_range(today)
    elif args.period == "month":
        start, end = month_range(today)
    else:
        start, end = today, today
    return args.period, start, end


def run(args: argparse.Namespace, config: dict[str, Any]) -> int:
    """
    Execute the requested command.

    Args:
        args: Parsed arguments.
        config: Loaded configuration.

    Returns:
        Process exit status.
    """
    printer = ConsolePrinter()
    store = EntryStore(config["storage"]["data_file"])

    # Backup commands
    if args.export:
        printer.print_exported(export_backup(store, args.export))
        return 0
    if args.import_path:
        printer.print_imported(import_backup(store, args.import_path))
        return 0

    today = args.date or get_today()
    parse_date(today)

    # Slot edits
    if args.log:
        slot_id, activity = args.log
        store.set_entry(today, slot_id, activity, args.category)
        printer.print_logged(today, slot_id, activity, args.category)
    if args.clear:
        store.set_entry(today, args.clear, "")
        printer.print_cleared(today, args.clear)

    # Report
    period_name, start, end = resolve_range(args, today)
    printer.print_period(period_name, start, end)

    if start == end:
        metrics = compute_daily_metrics(normalize_day(store.read_day(start)))
    else:
        day_entries = store.read_range(start, end)
        metrics = compute_period_metrics(
            {d: normalize_day(entries) for d, entries in day_entries.items()}
        )

    printer.print_stats_summary(metrics)
    printer.print_insights(metrics["insights"])

    if config["output"].get("save_reports", True) and not args.no_save:
        reporter = ReportGenerator(config["output"]["reports_dir"])
        printer.print_saved(reporter.save(metrics, start, end, period_name))

    return 0


def main(argv: list[str] | None = None) -> None:
    """
    Main entry point for TimeFlow.

    This function orchestrates the full workflow:
    1. Load configuration
    2. Run backup export/import, or apply slot edits
    3. Read entries for the selected period
    4. Compute metrics and print them
    5. Save the Markdown report (optional)
    """
    args = parse_args(argv)
    config = load_config(args.config)

    ConsolePrinter.print_header()

    try:
        status = run(args, config)
    except (BackupError, StoreError, ValueError) as e:
        ConsolePrinter.print_error(str(e))
        status = 1

    sys.exit(status)


if __name__ == "__main__":
    main()
