"""Shared fixtures: the three-transaction sample used across the suite."""

from __future__ import annotations

import csv
import logging
import zipfile
from datetime import date
from pathlib import Path

import pytest

from extrack_core.models import Transaction

SCENARIO_ROWS = [
    ("2023-01-05", "Coffee", -4.5, "Food"),
    ("2023-01-20", "Salary", 2000.0, "Income"),
    ("2023-02-01", "Rent", -800.0, "Housing"),
]

SCENARIO_MONTH_CSV = (
    "Date,Food,Housing,Income\n"
    "2023-01,-4.5,0,2000\n"
    "2023-02,0,-800,0\n"
)


def truncate_first_sheet(src, dst):
    """Copy a workbook with xl/worksheets/sheet1.xml cut in half."""
    with zipfile.ZipFile(src) as zin, zipfile.ZipFile(dst, "w") as zout:
        for item in zin.infolist():
            data = zin.read(item.filename)
            if item.filename == "xl/worksheets/sheet1.xml":
                data = data[: len(data) // 2]
            zout.writestr(item, data)
    return dst


@pytest.fixture
def scenario_transactions():
    return [Transaction(d, desc, amt, cat) for d, desc, amt, cat in SCENARIO_ROWS]


@pytest.fixture
def write_csv(tmp_path: Path):
    """Write rows to a CSV file under tmp_path and return its path."""
    def _write(rows, name="transactions.csv", header=None):
        path = tmp_path / name
        with open(path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            if header:
                w.writerow(header)
            w.writerows(rows)
        return path
    return _write


@pytest.fixture
def write_xlsx(tmp_path: Path):
    """Write rows to the first sheet of a new workbook and return its path."""
    from openpyxl import Workbook

    def _write(rows, name="transactions.xlsx", header=None):
        wb = Workbook()
        ws = wb.active
        ws.title = "Transactions"
        if header:
            ws.append(list(header))
        for r in rows:
            ws.append(list(r))
        path = tmp_path / name
        wb.save(path)
        return path
    return _write


@pytest.fixture
def scenario_xlsx_rows():
    """Scenario rows with real date cells, as a bank export would have them."""
    return [
        (date(2023, 1, 5), "Coffee", -4.5, "Food"),
        (date(2023, 1, 20), "Salary", 2000, "Income"),
        (date(2023, 2, 1), "Rent", -800, "Housing"),
    ]


@pytest.fixture(autouse=True)
def _drop_cli_log_handlers():
    """main() binds a stderr handler to the test's captured stream; detach it afterwards."""
    yield
    root = logging.getLogger()
    for h in [h for h in root.handlers if getattr(h, "extrack_handler", False)]:
        root.removeHandler(h)
        h.close()
