from __future__ import annotations

import logging
import re
from datetime import date
from typing import Any, Dict, List

import pandas as pd

from .config import PipelineConfig
from .errors import ParseFailure
from .schema import ColumnSchema, Role
from .table import MISSING, UnifiedTable, is_missing

logger = logging.getLogger(__name__)

INSTANT_FORMAT = '%Y%m%d%H%M%S%z'
DATE_FORMAT = '%Y-%m-%d'

_OFFSET_RE = re.compile(r'\s*(Z|[+-]\d{2}:?\d{2})$')
_SEPARATOR_RE = re.compile(r'[-:\sT]')


def compact_instant(text: str) -> str:
    """'2023-01-01 12:00:00 -0500' -> '20230101120000-0500'; 'Z' becomes '+0000'."""
    text = text.strip()
    offset = ''
    match = _OFFSET_RE.search(text)
    if match:
        offset = '+0000' if match.group(1) == 'Z' else match.group(1).replace(':', '')
        text = text[:match.start()]
    return _SEPARATOR_RE.sub('', text) + offset


def parse_instant(value: Any) -> pd.Timestamp:
    """Parse 'YYYYMMDDHHMMSS' followed by a UTC offset (separators allowed).

    Date, time and offset are all required. Raises ParseFailure for anything
    else, including MISSING and ''.
    """
    if is_missing(value) or not isinstance(value, str):
        raise ParseFailure('date-time', value)
    moment = pd.to_datetime(compact_instant(value), format=INSTANT_FORMAT, errors='coerce')
    if pd.isna(moment):
        raise ParseFailure('date-time', value)
    return moment


def parse_date(value: Any) -> date:
    """Calendar date in 'YYYY-MM-DD' layout, no time or offset (date of birth)."""
    if is_missing(value) or not isinstance(value, str):
        raise ParseFailure('date', value)
    moment = pd.to_datetime(value.strip(), format=DATE_FORMAT, errors='coerce')
    if pd.isna(moment):
        raise ParseFailure('date', value)
    return moment.date()


def parse_date_or_missing(value: Any):
    try:
        return parse_date(value)
    except ParseFailure:
        return MISSING


def parse_instant_cells(values: List[Any]) -> List[Any]:
    """Timestamp or MISSING per cell. Each distinct text is parsed once, on its
    own, so cells with different offsets keep their own offset."""
    parsed: Dict[str, Any] = {}
    result: List[Any] = []
    for value in values:
        if not isinstance(value, str):
            result.append(MISSING)
            continue
        if value not in parsed:
            try:
                parsed[value] = parse_instant(value)
            except ParseFailure:
                parsed[value] = MISSING
        result.append(parsed[value])
    return result


def _stem(column: str) -> str:
    stem = column[:-4] if column.endswith('Date') and len(column) > 4 else column
    return stem.lower()


def _put_column(table: UnifiedTable, name: str, values: List[Any], after: str, source: str) -> str:
    if name in table:
        logger.warning("Column %r already exists and is replaced by the split of %r", name, source)
    table.set_column(name, values, after=after)
    return name


def split_temporal_columns(table: UnifiedTable, schema: ColumnSchema, config: PipelineConfig) -> UnifiedTable:
    """Replace each temporal column by '<stem>date' and '<stem>time' columns, in place.

    One `timezone` column is kept, taken from `config.timezone_source`; the
    other temporal columns are assumed to share that zone. The end column only
    gets a time unless `config.include_end_date` is set. Unparseable cells give
    MISSING in every derived column. The combined source columns are dropped.
    """
    for column in schema.columns_with_role(Role.TEMPORAL, table.columns):
        source = table.column(column)
        moments = parse_instant_cells(source)
        failures = sum(1 for old, new in zip(source, moments) if is_missing(new) and not is_missing(old))
        if failures:
            logger.debug("%d cells of %r could not be parsed as date-time", failures, column)

        stem = _stem(column)
        last = column
        if column != config.end_column or config.include_end_date:
            dates = [MISSING if is_missing(m) else m.date() for m in moments]
            last = _put_column(table, f"{stem}date", dates, last, column)
        times = [MISSING if is_missing(m) else m.time() for m in moments]
        last = _put_column(table, f"{stem}time", times, last, column)
        if column == config.timezone_source:
            labels = [MISSING if is_missing(m) else m.strftime('%z') for m in moments]
            _put_column(table, config.timezone_column, labels, last, column)
        table.drop_column(column)

    return table
