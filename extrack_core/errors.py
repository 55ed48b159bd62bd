"""
extrack_core.errors
Error kinds raised by the summary pipeline.
"""
from __future__ import annotations
from enum import Enum
from pathlib import Path
from typing import Optional, Union


class ErrorKind(Enum):
    ROW_SKIPPED = "RowSkipped"
    DATE_PARSE_FAILURE = "DateParseFailure"
    SOURCE_UNAVAILABLE = "SourceUnavailable"
    SINK_FAILURE = "SinkFailure"


class ExtrackError(Exception):
    """Base error. `kind` tells callers which case they are handling."""
    kind: ErrorKind
    recoverable = False


class RowSkipped(ExtrackError):
    """A row whose amount coerced to exactly 0.0. The run continues."""
    kind = ErrorKind.ROW_SKIPPED
    recoverable = True

    def __init__(self, date: str, description: str, amount: float, category: str, row_number: Optional[int] = None):
        self.date = date
        self.description = description
        self.amount = amount
        self.category = category
        self.row_number = row_number
        super().__init__(
            f"Error parsing row: date: {date}, description: {description}, "
            f"amount: {amount}, category: {category}"
        )


class DateParseFailure(ExtrackError):
    kind = ErrorKind.DATE_PARSE_FAILURE

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"could not parse date {text!r} (expected YYYY-MM-DD)")


class SourceUnavailable(ExtrackError):
    kind = ErrorKind.SOURCE_UNAVAILABLE

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"cannot read {self.path}: {reason}")


class SinkFailure(ExtrackError):
    kind = ErrorKind.SINK_FAILURE

    def __init__(self, destination: str, reason: str):
        self.destination = destination
        self.reason = reason
        super().__init__(f"cannot write {destination}: {reason}")
