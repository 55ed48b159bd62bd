"""
extrack_core.excel_reports
Excel creation (openpyxl).
"""
from __future__ import annotations
from pathlib import Path
from typing import Sequence

from .errors import SinkFailure
from .models import Summary
from .render import summary_header, summary_rows
from .summaries import grand_totals
from .utils import timestamp_line

MONEY_FORMAT = '"$"#,##0.00'


def require_openpyxl():
    try:
        from openpyxl import Workbook  # noqa
        from openpyxl.styles import Font  # noqa
        from openpyxl.utils import get_column_letter  # noqa
        return Workbook, Font, get_column_letter
    except Exception:
        raise SystemExit("Missing dependency: openpyxl\nInstall with: pip3 install openpyxl\n")


def write_excel_summary(summaries: Sequence[Summary], xlsx_path: Path) -> None:
    """
    Sheet "Summary": the same rectangular table as the CSV output, as numbers.
    Sheet "Totals": income / expenses / total per bucket + GRAND TOTAL.
    """
    Workbook, Font, get_column_letter = require_openpyxl()
    BOLD = Font(bold=True)

    header = summary_header(summaries)

    wb = Workbook()
    ws = wb.active
    ws.title = "Summary"

    ws.append([timestamp_line("Generated")])
    ws.append(header)
    ws["A1"].font = BOLD
    for c in range(1, len(header) + 1):
        ws.cell(row=2, column=c).font = BOLD

    for row in summary_rows(summaries, header):
        ws.append(row)

    for r in range(3, ws.max_row + 1):
        for c in range(2, len(header) + 1):
            ws.cell(row=r, column=c).number_format = MONEY_FORMAT

    ws.column_dimensions["A"].width = 12
    for c in range(2, len(header) + 1):
        ws.column_dimensions[get_column_letter(c)].width = max(14, len(header[c - 1]) + 2)

    wt = wb.create_sheet("Totals")
    wt.append([timestamp_line("Generated")])
    wt.append(["Date", "Income", "Expenses", "Total"])
    for cell in ("A1", "A2", "B2", "C2", "D2"):
        wt[cell].font = BOLD

    for s in summaries:
        wt.append([s.bucket, s.income, s.expenses, s.total])

    grand = grand_totals(summaries)
    wt.append(["GRAND TOTAL", grand["income"], grand["expenses"], grand["total"]])
    last = wt.max_row
    for c in (1, 2, 3, 4):
        wt.cell(row=last, column=c).font = BOLD

    for r in range(3, wt.max_row + 1):
        for c in (2, 3, 4):
            wt.cell(row=r, column=c).number_format = MONEY_FORMAT

    wt.column_dimensions["A"].width = 16
    for col in ("B", "C", "D"):
        wt.column_dimensions[col].width = 16

    try:
        wb.save(xlsx_path)
    except OSError as e:
        raise SinkFailure(str(xlsx_path), e.strerror or str(e)) from e
