"""
extrack_core.parsing
Raw row -> Transaction (cell coercion + zero-amount rejection).
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Iterable, List, Optional, Sequence

from .config import ColumnConfig, DEFAULT_FIRST_ROW_INDEX
from .errors import RowSkipped
from .models import Transaction, UNSPECIFIED_CATEGORY
from .utils import format_amount

log = logging.getLogger(__name__)


@dataclass
class ParseResult:
    transactions: List[Transaction] = field(default_factory=list)
    skipped: List[RowSkipped] = field(default_factory=list)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def cell_at(row: Sequence[Any], index: int) -> Any:
    # short rows read as empty cells
    if 0 <= index < len(row):
        return row[index]
    return None


def coerce_amount(value: Any) -> float:
    if _is_number(value):
        return float(value)
    return 0.0


def coerce_category(value: Any) -> str:
    if isinstance(value, str):
        return value
    return UNSPECIFIED_CATEGORY


def cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, datetime):
        if value.time() == datetime.min.time():
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, date):
        return value.isoformat()
    if _is_number(value):
        return format_amount(value)
    return str(value)


def parse_row(row: Sequence[Any], columns: ColumnConfig, row_number: Optional[int] = None) -> Transaction:
    """Raises RowSkipped when the amount cell coerces to exactly 0.0."""
    txn_date = cell_text(cell_at(row, columns.date_column))
    description = cell_text(cell_at(row, columns.description_column))
    amount = coerce_amount(cell_at(row, columns.amount_column))
    category = coerce_category(cell_at(row, columns.category_column))

    if amount == 0.0:
        raise RowSkipped(txn_date, description, amount, category, row_number=row_number)

    return Transaction(date=txn_date, description=description, amount=amount, category=category)


def parse_rows(
    rows: Iterable[Sequence[Any]],
    columns: ColumnConfig,
    first_row_index: int = DEFAULT_FIRST_ROW_INDEX,
) -> ParseResult:
    result = ParseResult()
    for i, row in enumerate(rows):
        if i < first_row_index:
            continue
        try:
            result.transactions.append(parse_row(row, columns, row_number=i))
        except RowSkipped as skip:
            log.warning("%s", skip)
            result.skipped.append(skip)

    log.debug("Parsed %d transactions, skipped %d rows", len(result.transactions), len(result.skipped))
    return result
