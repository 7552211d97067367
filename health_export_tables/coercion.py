from __future__ import annotations

import logging
import math
from typing import Any, List

import pandas as pd

from .schema import ColumnSchema, Role
from .table import MISSING, UnifiedTable, is_missing

logger = logging.getLogger(__name__)


def coerce_cells(values: List[Any]) -> List[Any]:
    """Vectorized coercion of one column: finite floats, everything else MISSING."""
    series = pd.Series([None if is_missing(v) else v for v in values], dtype=object)
    numbers = pd.to_numeric(series, errors='coerce')
    return [float(n) if pd.notna(n) and math.isfinite(n) else MISSING for n in numbers]


def coerce_numeric_columns(table: UnifiedTable, schema: ColumnSchema) -> UnifiedTable:
    """Convert every numeric-role column to floats in place.

    Cells that do not parse (including free text such as category labels that
    share the column name) become MISSING; this never raises.
    """
    for name in schema.columns_with_role(Role.NUMERIC, table.columns):
        before = table.column(name)
        after = coerce_cells(before)
        lost = sum(1 for old, new in zip(before, after) if is_missing(new) and not is_missing(old))
        if lost:
            logger.debug("%d cells of %r are not numeric, stored as missing", lost, name)
        table.set_column(name, after)
    return table
