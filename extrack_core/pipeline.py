"""
extrack_core.pipeline
read -> parse -> bucket -> aggregate -> write, one pass.

Everything up to the summaries is computed before the output is opened,
so a fatal error leaves no partial table behind.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, TextIO

from .buckets import group_transactions
from .config import Config, EXCEL_OUTPUT_SUFFIX, PDF_OUTPUT_SUFFIX
from .errors import RowSkipped
from .excel_reports import write_excel_summary
from .models import Summary
from .parsing import parse_rows
from .pdf_reports import write_pdf_summary
from .sinks import STDOUT_NAME, open_sink, write_summaries
from .sources import read_rows
from .summaries import build_summaries

log = logging.getLogger(__name__)


@dataclass
class RunResult:
    summaries: List[Summary] = field(default_factory=list)
    skipped: List[RowSkipped] = field(default_factory=list)
    output: str = ""


def output_kind(output_path: Optional[Path]) -> str:
    if output_path is None:
        return "csv"
    suffix = Path(output_path).suffix.lower()
    if suffix == EXCEL_OUTPUT_SUFFIX:
        return "xlsx"
    if suffix == PDF_OUTPUT_SUFFIX:
        return "pdf"
    return "csv"


def summarize(config: Config) -> RunResult:
    rows = read_rows(config.input_path)
    parsed = parse_rows(rows, config.columns, config.first_row_index)
    grouped = group_transactions(parsed.transactions, config.time_range)
    summaries = build_summaries(grouped)
    log.info(
        "%d transactions in %d %s buckets (%d rows skipped)",
        len(parsed.transactions), len(summaries), config.time_range.value.lower(), len(parsed.skipped),
    )
    return RunResult(summaries=summaries, skipped=parsed.skipped)


def write_output(summaries: List[Summary], output_path: Optional[Path] = None, stdout: Optional[TextIO] = None) -> str:
    kind = output_kind(output_path)
    if kind == "xlsx":
        write_excel_summary(summaries, output_path)
    elif kind == "pdf":
        write_pdf_summary(summaries, output_path)
    else:
        with open_sink(output_path, stdout=stdout) as sink:
            write_summaries(summaries, sink)
    return str(output_path) if output_path is not None else STDOUT_NAME


def run(config: Config, stdout: Optional[TextIO] = None) -> RunResult:
    result = summarize(config)
    result.output = write_output(result.summaries, config.output_path, stdout=stdout)
    if config.output_path is not None:
        log.info("Wrote %s", result.output)
    return result
