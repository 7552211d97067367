from __future__ import annotations

import logging
from typing import Dict, List

from .table import UnifiedTable, is_missing

logger = logging.getLogger(__name__)


def group_row_indices(table: UnifiedTable, discriminator: str, unknown: str = '(unknown)') -> Dict[str, List[int]]:
    """Row indices per discriminator value, groups in order of first appearance.

    Rows with a missing discriminator (or a table without that column) go to
    `unknown` so every row lands in exactly one group.
    """
    groups: Dict[str, List[int]] = {}
    if discriminator in table:
        keys = [unknown if is_missing(v) else str(v) for v in table.column(discriminator)]
    else:
        keys = [unknown] * len(table)
    for index, key in enumerate(keys):
        groups.setdefault(key, []).append(index)
    return groups


def partition_by_category(table: UnifiedTable, discriminator: str, unknown: str = '(unknown)') -> Dict[str, UnifiedTable]:
    """One table per category with its all-missing columns pruned."""
    result: Dict[str, UnifiedTable] = {}
    for key, indices in group_row_indices(table, discriminator, unknown).items():
        part = table.take(indices)
        dropped = part.drop_empty_columns()
        logger.debug("Category %r: %d rows, dropped %d empty columns", key, len(part), len(dropped))
        result[key] = part
    return result
