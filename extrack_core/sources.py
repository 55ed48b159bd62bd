"""
extrack_core.sources
Workbook/CSV reading -> rows of typed cells.
"""
from __future__ import annotations
import csv
import logging
import re
from pathlib import Path
from typing import Any, List, Tuple

from .config import CSV_SUFFIXES, WORKBOOK_SUFFIXES
from .errors import SourceUnavailable

log = logging.getLogger(__name__)

Row = Tuple[Any, ...]

_NUMBER = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def require_openpyxl():
    try:
        from openpyxl import load_workbook  # noqa
        return load_workbook
    except Exception:
        raise SystemExit("Missing dependency: openpyxl\nInstall with: pip3 install openpyxl\n")


def typed_cell(value: str) -> Any:
    s = (value or "").strip()
    if not s:
        return None
    if _NUMBER.match(s):
        return float(s)
    return value


def is_blank_row(row: Row) -> bool:
    return all(v is None or (isinstance(v, str) and not v.strip()) for v in row)


def load_csv_rows(csv_path: Path) -> List[Row]:
    try:
        with open(csv_path, newline="", encoding="utf-8-sig") as f:
            rows = [tuple(typed_cell(v) for v in r) for r in csv.reader(f)]
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise SourceUnavailable(csv_path, str(e)) from e
    return rows


def load_workbook_rows(xlsx_path: Path) -> List[Row]:
    """Rows of the first worksheet, cell values as stored (formulas resolved)."""
    load_workbook = require_openpyxl()
    try:
        wb = load_workbook(str(xlsx_path), read_only=True, data_only=True)
    except Exception as e:
        raise SourceUnavailable(xlsx_path, f"not a readable workbook ({e})") from e

    try:
        if not wb.worksheets:
            raise SourceUnavailable(xlsx_path, "could not find a sheet in given workbook")
        ws = wb.worksheets[0]
        log.debug("Reading worksheet %r from %s", ws.title, xlsx_path)
        # read-only sheets are parsed lazily, so damage shows up here
        try:
            rows = [tuple(r) for r in ws.iter_rows(values_only=True)]
        except Exception as e:
            raise SourceUnavailable(xlsx_path, f"worksheet {ws.title!r} is not readable ({e})") from e
    finally:
        wb.close()
    return rows


def strip_trailing_blank_rows(rows: List[Row]) -> List[Row]:
    end = len(rows)
    while end > 0 and is_blank_row(rows[end - 1]):
        end -= 1
    return rows[:end]


def read_rows(path: Path) -> List[Row]:
    """
    Rows from a workbook (.xlsx/.xlsm) or CSV file.
    Blank rows after the last record (sheet dimension padding) are dropped;
    blank rows inside the table are kept and left to the row parser.
    """
    p = Path(path)
    if not p.exists():
        raise SourceUnavailable(p, "file not found")
    if not p.is_file():
        raise SourceUnavailable(p, "not a file")

    suffix = p.suffix.lower()
    if suffix in WORKBOOK_SUFFIXES:
        rows = load_workbook_rows(p)
    elif suffix in CSV_SUFFIXES:
        rows = load_csv_rows(p)
    else:
        supported = ", ".join(WORKBOOK_SUFFIXES + CSV_SUFFIXES)
        raise SourceUnavailable(p, f"unsupported file type {suffix or '(none)'} (expected {supported})")

    kept = strip_trailing_blank_rows(rows)
    if len(kept) != len(rows):
        log.debug("Dropped %d trailing blank rows from %s", len(rows) - len(kept), p)
    log.info("Read %d rows from %s", len(kept), p)
    return kept
