"""
extrack_core.summaries
Per-bucket aggregation + chronological ordering.
"""
from __future__ import annotations
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

from .models import Summary, Transaction


def category_totals(transactions: Iterable[Transaction]) -> Tuple[float, Dict[str, float]]:
    total = 0.0
    by_category: Dict[str, float] = {}
    for txn in transactions:
        by_category[txn.category] = by_category.get(txn.category, 0.0) + txn.amount
        total += txn.amount
    return total, by_category


def split_income_expenses(by_category: Mapping[str, float]) -> Tuple[float, float]:
    """
    income = categories netting above zero, expenses = the rest.
    A category with mixed signs lands entirely on the side of its net.
    """
    income = 0.0
    expenses = 0.0
    for amount in by_category.values():
        if amount > 0.0:
            income += amount
        else:
            expenses += amount
    return income, expenses


def summarize_bucket(bucket: str, transactions: Sequence[Transaction]) -> Summary:
    total, by_category = category_totals(transactions)
    income, expenses = split_income_expenses(by_category)
    return Summary(
        bucket=bucket,
        income=income,
        expenses=expenses,
        total=total,
        category_breakdown=by_category,
    )


def build_summaries(grouped: Mapping[str, Sequence[Transaction]]) -> List[Summary]:
    summaries = [summarize_bucket(bucket, txns) for bucket, txns in grouped.items()]
    summaries.sort(key=lambda s: s.bucket)
    return summaries


def grand_totals(summaries: Iterable[Summary]) -> Dict[str, float]:
    out = {"income": 0.0, "expenses": 0.0, "total": 0.0}
    for s in summaries:
        out["income"] += s.income
        out["expenses"] += s.expenses
        out["total"] += s.total
    return out
