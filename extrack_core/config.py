"""
extrack_core.config
Central configuration/constants.
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from .buckets import TimeRange

log = logging.getLogger(__name__)

DEFAULT_TIME_RANGE = TimeRange.MONTH
DEFAULT_FIRST_ROW_INDEX = 0

DEFAULT_DATE_COLUMN = 0
DEFAULT_DESCRIPTION_COLUMN = 1
DEFAULT_AMOUNT_COLUMN = 2
DEFAULT_CATEGORY_COLUMN = 3

# environment overrides for the column layout
ENV_DATE_COLUMN = "EXTRACK_DATE_COLUMN"
ENV_DESCRIPTION_COLUMN = "EXTRACK_DESCRIPTION_COLUMN"
ENV_AMOUNT_COLUMN = "EXTRACK_AMOUNT_COLUMN"
ENV_CATEGORY_COLUMN = "EXTRACK_CATEGORY_COLUMN"
ENV_FIRST_ROW_INDEX = "EXTRACK_FIRST_ROW_INDEX"

WORKBOOK_SUFFIXES = (".xlsx", ".xlsm")
CSV_SUFFIXES = (".csv",)

EXCEL_OUTPUT_SUFFIX = ".xlsx"
PDF_OUTPUT_SUFFIX = ".pdf"


@dataclass(frozen=True)
class ColumnConfig:
    date_column: int = DEFAULT_DATE_COLUMN
    description_column: int = DEFAULT_DESCRIPTION_COLUMN
    amount_column: int = DEFAULT_AMOUNT_COLUMN
    category_column: int = DEFAULT_CATEGORY_COLUMN


@dataclass(frozen=True)
class Config:
    input_path: Path
    time_range: TimeRange = DEFAULT_TIME_RANGE
    output_path: Optional[Path] = None
    columns: ColumnConfig = field(default_factory=ColumnConfig)
    first_row_index: int = DEFAULT_FIRST_ROW_INDEX


def env_index(environ: Mapping[str, str], name: str, default: int) -> int:
    """Non-negative integer from the environment, or `default` when unset/invalid."""
    raw = environ.get(name)
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        log.debug("Ignoring %s=%r (not an integer), using %d", name, raw, default)
        return default
    if value < 0:
        log.debug("Ignoring %s=%r (negative), using %d", name, raw, default)
        return default
    return value


def columns_from_env(environ: Optional[Mapping[str, str]] = None) -> ColumnConfig:
    env = os.environ if environ is None else environ
    return ColumnConfig(
        date_column=env_index(env, ENV_DATE_COLUMN, DEFAULT_DATE_COLUMN),
        description_column=env_index(env, ENV_DESCRIPTION_COLUMN, DEFAULT_DESCRIPTION_COLUMN),
        amount_column=env_index(env, ENV_AMOUNT_COLUMN, DEFAULT_AMOUNT_COLUMN),
        category_column=env_index(env, ENV_CATEGORY_COLUMN, DEFAULT_CATEGORY_COLUMN),
    )


def first_row_index_from_env(environ: Optional[Mapping[str, str]] = None) -> int:
    env = os.environ if environ is None else environ
    return env_index(env, ENV_FIRST_ROW_INDEX, DEFAULT_FIRST_ROW_INDEX)
