"""
extrack_core.render
Rectangular table from summaries: dynamic category header, zero-filled rows.
"""
from __future__ import annotations
from typing import List, Sequence, Tuple

from .models import Summary
from .utils import format_amount

DATE_HEADER = "Date"


def summary_categories(summaries: Sequence[Summary]) -> List[str]:
    seen = set()
    for s in summaries:
        seen.update(s.category_breakdown.keys())
    return sorted(seen)


def summary_header(summaries: Sequence[Summary]) -> List[str]:
    return [DATE_HEADER] + summary_categories(summaries)


def summary_rows(summaries: Sequence[Summary], header: Sequence[str]) -> List[List[object]]:
    """One row per summary: bucket key, then each header category (0.0 when absent)."""
    categories = header[1:]
    rows: List[List[object]] = []
    for s in summaries:
        rows.append([s.bucket] + [s.amount_for(c) for c in categories])
    return rows


def render_table(summaries: Sequence[Summary]) -> Tuple[List[str], List[List[str]]]:
    header = summary_header(summaries)
    rows = [
        [row[0]] + [format_amount(v) for v in row[1:]]
        for row in summary_rows(summaries, header)
    ]
    return header, rows
