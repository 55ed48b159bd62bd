"""
extrack_core.sinks
Table sinks: CSV to stdout or to a file.
"""
from __future__ import annotations
import csv
import logging
import sys
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Sequence, TextIO

from .errors import SinkFailure
from .models import Summary
from .render import render_table

log = logging.getLogger(__name__)

STDOUT_NAME = "<stdout>"


class TableSink(ABC):
    """Anything that can take a header row, data rows and a final flush."""

    @abstractmethod
    def write_header(self, header: Sequence[str]) -> None:
        ...

    @abstractmethod
    def write_row(self, row: Sequence[str]) -> None:
        ...

    @abstractmethod
    def flush(self) -> None:
        ...


class CsvSink(TableSink):
    def __init__(self, stream: TextIO, name: str = STDOUT_NAME):
        self.stream = stream
        self.name = name
        self._writer = csv.writer(stream, lineterminator="\n")

    def write_header(self, header: Sequence[str]) -> None:
        self.write_row(header)

    def write_row(self, row: Sequence[str]) -> None:
        try:
            self._writer.writerow(row)
        except OSError as e:
            raise SinkFailure(self.name, str(e)) from e

    def flush(self) -> None:
        try:
            self.stream.flush()
        except OSError as e:
            raise SinkFailure(self.name, str(e)) from e


@contextmanager
def open_sink(output_path: Optional[Path] = None, stdout: Optional[TextIO] = None) -> Iterator[CsvSink]:
    """CSV sink bound to `output_path`, or to standard output when no path is given."""
    if output_path is None:
        yield CsvSink(stdout if stdout is not None else sys.stdout)
        return

    try:
        f = open(output_path, "w", newline="", encoding="utf-8")
    except OSError as e:
        raise SinkFailure(str(output_path), e.strerror or str(e)) from e
    with f:
        yield CsvSink(f, name=str(output_path))


def write_summaries(summaries: Sequence[Summary], sink: TableSink) -> int:
    """Writes the full table; returns the number of data rows."""
    header, rows = render_table(summaries)
    sink.write_header(header)
    for row in rows:
        sink.write_row(row)
    sink.flush()
    log.debug("Wrote %d rows x %d columns", len(rows), len(header))
    return len(rows)
