"""
extrack_core.pdf_reports
PDF creation (reportlab).
"""
from __future__ import annotations
from pathlib import Path
from typing import Sequence

from .errors import SinkFailure
from .models import Summary
from .render import summary_header, summary_rows
from .summaries import grand_totals
from .utils import fmt_money, timestamp_line


def require_reportlab():
    try:
        from reportlab.lib.pagesizes import letter, landscape  # noqa
        from reportlab.lib.units import inch  # noqa
        from reportlab.lib import colors  # noqa
        from reportlab.lib.styles import getSampleStyleSheet  # noqa
        from reportlab.platypus import (  # noqa
            SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
        )
        return (letter, landscape, inch, colors, getSampleStyleSheet,
                SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle)
    except Exception:
        raise SystemExit("Missing dependency: reportlab\nInstall with: pip3 install reportlab\n")


def _style_summary_table(TableStyle, colors):
    return TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
        ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.whitesmoke, colors.white]),
    ])


def write_pdf_summary(summaries: Sequence[Summary], pdf_path: Path, title: str = "Expense Summary") -> None:
    (letter, landscape, inch, colors, getSampleStyleSheet,
     SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle) = require_reportlab()

    header = summary_header(summaries)
    # wide category sets need the long edge
    pagesize = landscape(letter) if len(header) > 6 else letter

    doc = SimpleDocTemplate(
        str(pdf_path),
        pagesize=pagesize,
        leftMargin=0.6 * inch,
        rightMargin=0.6 * inch,
        topMargin=0.6 * inch,
        bottomMargin=0.6 * inch,
    )
    styles = getSampleStyleSheet()

    story = []
    story.append(Paragraph(title, styles["Title"]))
    story.append(Spacer(1, 0.08 * inch))
    story.append(Paragraph(timestamp_line("Generated"), styles["Normal"]))
    story.append(Spacer(1, 0.18 * inch))

    story.append(Paragraph("Totals", styles["Heading2"]))
    story.append(Spacer(1, 0.08 * inch))
    totals_data = [["Date", "Income", "Expenses", "Total"]]
    for s in summaries:
        totals_data.append([s.bucket, fmt_money(s.income), fmt_money(s.expenses), fmt_money(s.total)])
    grand = grand_totals(summaries)
    totals_data.append(["GRAND TOTAL", fmt_money(grand["income"]), fmt_money(grand["expenses"]), fmt_money(grand["total"])])

    totals = Table(totals_data, colWidths=[1.4 * inch, 1.4 * inch, 1.4 * inch, 1.4 * inch], repeatRows=1)
    st = _style_summary_table(TableStyle, colors)
    st.add("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold")
    st.add("BACKGROUND", (0, -1), (-1, -1), colors.whitesmoke)
    totals.setStyle(st)
    story.append(totals)
    story.append(Spacer(1, 0.25 * inch))

    story.append(Paragraph("By Category", styles["Heading2"]))
    story.append(Spacer(1, 0.08 * inch))
    breakdown_data = [list(header)]
    for row in summary_rows(summaries, header):
        breakdown_data.append([row[0]] + [fmt_money(v) for v in row[1:]])

    usable = pagesize[0] - 1.2 * inch
    col_width = usable / max(1, len(header))
    breakdown = Table(breakdown_data, colWidths=[col_width] * len(header), repeatRows=1)
    breakdown.setStyle(_style_summary_table(TableStyle, colors))
    story.append(breakdown)

    try:
        doc.build(story)
    except OSError as e:
        raise SinkFailure(str(pdf_path), e.strerror or str(e)) from e
