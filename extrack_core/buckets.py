"""
extrack_core.buckets
Time-range bucket keys + grouping.

Keys are zero-padded so sorting them as strings sorts them by time.
Week keys use Monday as the first day of the week; days before the
year's first Monday fall in week 00 (same numbering as strftime %W,
computed here without going through the C locale).
"""
from __future__ import annotations
import re
from datetime import date, datetime
from enum import Enum
from typing import Dict, Iterable, List

from .errors import DateParseFailure
from .models import Transaction

DATE_FORMAT = "%Y-%m-%d"
_DATE_SHAPE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class TimeRange(Enum):
    YEAR = "Year"
    MONTH = "Month"
    WEEK = "Week"

    @classmethod
    def parse(cls, text: str) -> "TimeRange":
        wanted = (text or "").strip().lower()
        for tr in cls:
            if tr.value.lower() == wanted:
                return tr
        choices = ", ".join(tr.value for tr in cls)
        raise ValueError(f"invalid time range {text!r} (choose from {choices})")

    def __str__(self) -> str:
        return self.value


def parse_transaction_date(text: str) -> date:
    s = "" if text is None else str(text)
    if not _DATE_SHAPE.match(s):
        raise DateParseFailure(s)
    try:
        return datetime.strptime(s, DATE_FORMAT).date()
    except ValueError as e:
        raise DateParseFailure(s) from e


def week_number(day: date) -> int:
    yday0 = day.timetuple().tm_yday - 1
    return (yday0 + 7 - day.weekday()) // 7


def bucket_key(day: date, time_range: TimeRange) -> str:
    if time_range is TimeRange.YEAR:
        return f"{day.year:04d}"
    if time_range is TimeRange.MONTH:
        return f"{day.year:04d}-{day.month:02d}"
    if time_range is TimeRange.WEEK:
        return f"{day.year:04d}-{week_number(day):02d}"
    raise ValueError(f"Unknown time range: {time_range}")


def transaction_bucket(txn: Transaction, time_range: TimeRange) -> str:
    return bucket_key(parse_transaction_date(txn.date), time_range)


def group_transactions(transactions: Iterable[Transaction], time_range: TimeRange) -> Dict[str, List[Transaction]]:
    """
    Bucket key -> transactions, each list in input order.
    The first malformed date raises DateParseFailure and aborts grouping.
    """
    grouped: Dict[str, List[Transaction]] = {}
    for txn in transactions:
        grouped.setdefault(transaction_bucket(txn, time_range), []).append(txn)
    return grouped
