from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import pandas as pd

from .coercion import coerce_numeric_columns
from .config import DEFAULT_CONFIG, PipelineConfig
from .flattening import flatten_record
from .identifiers import normalize_identifiers
from .partition import partition_by_category
from .records import resolve_profile_node, resolve_record_nodes, unify_records
from .schema import Role
from .table import UnifiedTable, is_missing
from .temporal import parse_date_or_missing, split_temporal_columns
from .tree import TreeNode

logger = logging.getLogger(__name__)

DATE_COLUMNS_FOR_SUMMARY = ('startdate', 'creationdate')


@dataclass
class ExportTables:
    profile: Dict[str, Any]
    tables: Dict[str, UnifiedTable] = field(default_factory=dict)

    @property
    def categories(self):
        return list(self.tables)

    @property
    def total_rows(self) -> int:
        return sum(len(t) for t in self.tables.values())

    def frames(self) -> Dict[str, pd.DataFrame]:
        return {name: table.to_dataframe() for name, table in self.tables.items()}


def build_profile(root: TreeNode, config: PipelineConfig = DEFAULT_CONFIG) -> Dict[str, Any]:
    """Normalized profile fields; date columns parsed to a calendar date, no timezone."""
    node = resolve_profile_node(root, config.profile_tag)
    table = unify_records([flatten_record(node, fold_children=False)])
    normalize_identifiers(table, config.profile_schema)
    for name in config.profile_schema.columns_with_role(Role.TEMPORAL, table.columns):
        table.set_column(name, [parse_date_or_missing(v) for v in table.column(name)])
    return table.row(0)


def build_unified_table(root: TreeNode, config: PipelineConfig = DEFAULT_CONFIG) -> UnifiedTable:
    nodes = resolve_record_nodes(root, config.record_tags)
    table = unify_records(flatten_record(node, index=i) for i, node in enumerate(nodes))
    logger.info("Unified %d records into %d columns", len(table), len(table.columns))
    return table


def build_category_tables(table: UnifiedTable, config: PipelineConfig = DEFAULT_CONFIG) -> Dict[str, UnifiedTable]:
    """Normalize, split, coerce (all in place) and partition the unified table."""
    schema = config.record_schema
    normalize_identifiers(table, schema)
    split_temporal_columns(table, schema, config)
    coerce_numeric_columns(table, schema)
    tables = partition_by_category(table, config.discriminator, config.unknown_category)
    logger.info("Partitioned %d rows into %d categories", len(table), len(tables))
    return tables


def run_pipeline(root: TreeNode, config: Optional[PipelineConfig] = None) -> ExportTables:
    """Parsed export tree -> profile record and per-category tables.

    Raises MalformedDocumentError / MalformedRecordError for structural
    problems; value-level problems only ever produce MISSING cells.
    """
    config = config or DEFAULT_CONFIG
    profile = build_profile(root, config)
    tables = build_category_tables(build_unified_table(root, config), config)
    return ExportTables(profile=profile, tables=tables)


def _date_range(table: UnifiedTable):
    for name in DATE_COLUMNS_FOR_SUMMARY:
        if name in table:
            dates = [v for v in table.column(name) if not is_missing(v)]
            if dates:
                return min(dates), max(dates)
    return None, None


def describe_tables(tables: Dict[str, UnifiedTable]) -> pd.DataFrame:
    rows = []
    for name, table in tables.items():
        first, last = _date_range(table)
        rows.append({
            'category': name,
            'rows': len(table),
            'columns': len(table.columns),
            'first_date': first,
            'last_date': last,
        })
    return pd.DataFrame(rows, columns=['category', 'rows', 'columns', 'first_date', 'last_date'])
