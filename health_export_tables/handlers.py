from __future__ import annotations

import csv
import dataclasses
import logging
import os
import re
import tempfile
from datetime import date, time
from typing import Any, Dict, List, Optional

import gradio as gr

from .config import DEFAULT_CONFIG
from .errors import ExportTablesError
from .io_utils import read_export_tree
from .pipeline import ExportTables, describe_tables, run_pipeline
from .table import is_missing

logger = logging.getLogger(__name__)


def cell_text(value: Any) -> str:
    if is_missing(value) or value is None:
        return ''
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value)


def profile_for_display(profile: Dict[str, Any]) -> Dict[str, Optional[str]]:
    return {name: (None if is_missing(v) else cell_text(v)) for name, v in profile.items()}


def compute_row_count_text(result: Optional[ExportTables]) -> str:
    if result is None:
        return ""
    return f"Records: {result.total_rows} (categories: {len(result.tables)})"


def load_export_with_preview(file_obj, include_end_date: bool = False):
    """Run the pipeline on an upload.

    Returns (result, category dropdown, status, profile, summary frame, count text).
    """
    if file_obj is None:
        return None, gr.update(choices=[], value=None), "No file uploaded.", None, None, ""

    config = dataclasses.replace(DEFAULT_CONFIG, include_end_date=bool(include_end_date))
    try:
        result = run_pipeline(read_export_tree(file_obj), config)
    except ExportTablesError as e:
        logger.warning("Export rejected: %s", e)
        return None, gr.update(choices=[], value=None), f"Error reading export: {str(e)}", None, None, ""

    categories = result.categories
    default = categories[0] if categories else None
    message = f"Successfully loaded. Found {len(categories)} categories."
    return (
        result,
        gr.update(choices=categories, value=default),
        message,
        profile_for_display(result.profile),
        describe_tables(result.tables),
        compute_row_count_text(result),
    )


def preview_category_handler(result: Optional[ExportTables], category: Optional[str], limit: int = 20):
    if result is None or not category or category not in result.tables:
        return None
    frame = result.tables[category].to_dataframe()
    return frame.head(max(1, int(limit)))


def _safe_file_stem(text: str) -> str:
    stem = re.sub(r'[^A-Za-z0-9_.-]+', '_', text).strip('._')
    return stem or 'table'


def write_table_csv(result: ExportTables, category: str, path: str) -> str:
    table = result.tables[category]
    with open(path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(f, fieldnames=table.columns)
        writer.writeheader()
        for row in table.rows():
            writer.writerow({name: cell_text(v) for name, v in row.items()})
    return path


def export_tables_handler(result: Optional[ExportTables], categories, file_prefix: Optional[str] = None):
    """Write one CSV per selected category into the temp dir."""
    if result is None:
        return None, "No data loaded."

    categories = categories or []
    if isinstance(categories, str):
        categories = [categories]
    categories = [c for c in categories if c in result.tables]
    if not categories:
        return None, "No categories selected."

    prefix = _safe_file_stem(file_prefix.strip()) if file_prefix and file_prefix.strip() else 'export'
    temp_dir = tempfile.gettempdir()

    paths: List[str] = []
    try:
        for category in categories:
            path = os.path.join(temp_dir, f"{prefix}_{_safe_file_stem(category)}.csv")
            paths.append(write_table_csv(result, category, path))
    except OSError as e:
        return None, f"Error during export: {str(e)}"

    return paths, f"Export successful! Wrote {len(paths)} file(s) to {temp_dir}"


def export_choices_update(result: Optional[ExportTables]):
    choices = result.categories if result is not None else []
    return gr.update(choices=choices, value=[])
