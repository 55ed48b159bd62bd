"""
extrack_core.utils
Small reusable helpers.
"""
from __future__ import annotations
from datetime import datetime
from decimal import Decimal


def format_amount(n: float) -> str:
    """
    Plain decimal text for an amount: shortest round-trip digits, never an
    exponent, no trailing ".0" on whole numbers (2000.0 -> "2000").
    """
    s = repr(float(n))
    if "e" in s or "E" in s:
        s = format(Decimal(s), "f")
    if s.endswith(".0"):
        s = s[:-2]
    return s


def fmt_money(n: float) -> str:
    if n < 0:
        return f"-${-n:,.2f}"
    return f"${n:,.2f}"


def timestamp_line(prefix: str = "Generated") -> str:
    dt = datetime.now().astimezone()
    return f"{prefix}: {dt.strftime('%Y-%m-%d %H:%M:%S %Z')}".rstrip()
