"""
extrack_core.models
Transaction + Summary records.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

UNSPECIFIED_CATEGORY = "Unspecified"


@dataclass(frozen=True)
class Transaction:
    date: str
    description: str
    amount: float
    category: str = UNSPECIFIED_CATEGORY


@dataclass(frozen=True)
class Summary:
    """
    Aggregate for one bucket.

    income/expenses split on the sign of each category's net amount,
    not on the sign of individual transactions.
    """
    bucket: str
    income: float
    expenses: float
    total: float
    category_breakdown: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self):
        # read-only view over a private copy
        object.__setattr__(self, "category_breakdown", MappingProxyType(dict(self.category_breakdown)))

    def amount_for(self, category: str) -> float:
        return self.category_breakdown.get(category, 0.0)
