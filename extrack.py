#!/usr/bin/env python3
"""
extrack.py

Periodic summary of a transaction export (one row per transaction):
per time bucket (Year / Month / Week) the net of every category, as a
rectangular CSV table (Date + one column per category).

- input: first worksheet of an .xlsx/.xlsm workbook, or a .csv file
- output: CSV on stdout by default, or -o <file>
    *.xlsx -> Excel (Summary + Totals sheets)
    *.pdf  -> PDF (totals + category table)
    other  -> CSV
- rows with a zero / non-numeric amount are skipped with a warning on stderr
- a malformed date (not YYYY-MM-DD) aborts the whole run, nothing is written

Column layout (0-based indexes), from the environment or flags:
  EXTRACK_DATE_COLUMN (0)  EXTRACK_DESCRIPTION_COLUMN (1)
  EXTRACK_AMOUNT_COLUMN (2)  EXTRACK_CATEGORY_COLUMN (3)
  EXTRACK_FIRST_ROW_INDEX (0)  rows to skip at the top, e.g. a header

Install:
  pip3 install -e .

Examples:
  python3 extrack.py expenses.xlsx
  python3 extrack.py expenses.xlsx -t Year -o yearly.csv
  python3 extrack.py expenses.csv -t Week --first-row-index 1
  EXTRACK_AMOUNT_COLUMN=4 python3 extrack.py bank.xlsx -o summary.pdf
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Mapping, Optional

from extrack_core.buckets import TimeRange
from extrack_core.config import (
    ColumnConfig,
    Config,
    DEFAULT_TIME_RANGE,
    columns_from_env,
    first_row_index_from_env,
)
from extrack_core.errors import ExtrackError
from extrack_core.pipeline import run

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


# -----------------------------
# Logging
# -----------------------------
def setup_logging(log_dir: Optional[Path] = None, verbose: bool = False) -> Optional[Path]:
    """
    Warnings and progress go to stderr so they never mix with a table on stdout.
    With `log_dir`, a timestamped log file per run is written as well.
    """
    level = logging.DEBUG if verbose else logging.INFO
    root = logging.getLogger()
    root.setLevel(level)

    # replace handlers from an earlier main() in the same process, keep foreign ones
    for h in [h for h in root.handlers if getattr(h, "extrack_handler", False)]:
        root.removeHandler(h)
        h.close()

    fmt = logging.Formatter(LOG_FORMAT)

    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level)
    sh.setFormatter(fmt)
    sh.extrack_handler = True
    root.addHandler(sh)

    log_path = None
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_path = log_dir / f"extrack_{stamp}.log"
        fh = logging.FileHandler(str(log_path), encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(fmt)
        fh.extrack_handler = True
        root.addHandler(fh)
        logging.info("Logging started: %s", log_path)

    return log_path


# -----------------------------
# CLI
# -----------------------------
def time_range_arg(text: str) -> TimeRange:
    try:
        return TimeRange.parse(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def column_index_arg(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a column index: {text!r}")
    if value < 0:
        raise argparse.ArgumentTypeError(f"column index must be >= 0, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="extrack",
        description="Extract income / expenses / per-category totals per year, month or week.",
    )
    p.add_argument("input", help="Input workbook (.xlsx/.xlsm) or .csv file")
    p.add_argument("-o", "--output", default=None,
                   help="Output file (.csv, .xlsx or .pdf). Default: CSV on stdout")
    p.add_argument("-t", "--timerange", type=time_range_arg, default=DEFAULT_TIME_RANGE,
                   metavar="{Year,Month,Week}", help="Bucket size (default: Month)")

    cols = p.add_argument_group("columns", "0-based column indexes (override EXTRACK_* environment variables)")
    cols.add_argument("--date-column", type=column_index_arg, default=None)
    cols.add_argument("--description-column", type=column_index_arg, default=None)
    cols.add_argument("--amount-column", type=column_index_arg, default=None)
    cols.add_argument("--category-column", type=column_index_arg, default=None)
    cols.add_argument("--first-row-index", type=column_index_arg, default=None,
                      help="Number of leading rows to skip (e.g. 1 for a header row)")

    p.add_argument("--log-dir", default=None, help="Also write a timestamped log file into this folder")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def build_config(args: argparse.Namespace, environ: Optional[Mapping[str, str]] = None) -> Config:
    env = os.environ if environ is None else environ
    from_env = columns_from_env(env)

    def pick(flag_value: Optional[int], env_value: int) -> int:
        return env_value if flag_value is None else flag_value

    columns = ColumnConfig(
        date_column=pick(args.date_column, from_env.date_column),
        description_column=pick(args.description_column, from_env.description_column),
        amount_column=pick(args.amount_column, from_env.amount_column),
        category_column=pick(args.category_column, from_env.category_column),
    )
    return Config(
        input_path=Path(args.input).expanduser(),
        time_range=args.timerange,
        output_path=Path(args.output).expanduser() if args.output else None,
        columns=columns,
        first_row_index=pick(args.first_row_index, first_row_index_from_env(env)),
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(Path(args.log_dir) if args.log_dir else None, verbose=args.verbose)

    config = build_config(args)
    logging.debug("Config: %s", config)

    try:
        result = run(config)
    except ExtrackError as e:
        logging.debug("Run aborted (%s)", e.kind.value, exc_info=True)
        print(f"Application error: {e}", file=sys.stderr)
        return 1

    if result.skipped:
        logging.warning("Skipped %d row(s) with a zero or non-numeric amount", len(result.skipped))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
