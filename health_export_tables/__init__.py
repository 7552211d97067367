"""Core logic for the Health Export Tables tool.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- flatten export records into flat rows
- union-align rows into one rectangular table
- normalize vendor identifiers
- split date-time-timezone fields and coerce numeric fields
- partition the table into per-category tables
"""

from .config import DEFAULT_CONFIG, PipelineConfig
from .errors import ExportTablesError, MalformedDocumentError, MalformedRecordError, ParseFailure
from .pipeline import ExportTables, run_pipeline
from .table import MISSING, UnifiedTable, is_missing

__all__ = [
    'DEFAULT_CONFIG',
    'ExportTables',
    'ExportTablesError',
    'MISSING',
    'MalformedDocumentError',
    'MalformedRecordError',
    'ParseFailure',
    'PipelineConfig',
    'UnifiedTable',
    'is_missing',
    'run_pipeline',
]
