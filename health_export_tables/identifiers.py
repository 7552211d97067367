from __future__ import annotations

import logging
import re
from typing import Any, Sequence

from .paths import join_field_name, split_field_name
from .schema import ColumnSchema, Role
from .table import UnifiedTable, is_missing

logger = logging.getLogger(__name__)

VENDOR_PREFIXES: Sequence[str] = ('HK',)

# Namespace ending in 'Identifier', e.g. 'QuantityTypeIdentifier'. Must be
# followed by the actual name so a bare 'Identifier' is left alone.
_NAMESPACE_RE = re.compile(r'^(?:[A-Z][a-z]*)*?Identifier(?=[A-Z0-9])')


def _strip_once(text: str, prefixes: Sequence[str]) -> str:
    for prefix in prefixes:
        rest = text[len(prefix):]
        if text.startswith(prefix) and rest[:1].isupper():
            text = rest
            break
    return _NAMESPACE_RE.sub('', text, count=1)


def normalize_identifier(text: str, prefixes: Sequence[str] = VENDOR_PREFIXES) -> str:
    """Strip vendor prefix and '...Identifier' namespace from one identifier.

    'HKQuantityTypeIdentifierHeartRate' -> 'HeartRate'
    'HKBloodTypeNotSet' -> 'BloodTypeNotSet'

    Repeated until nothing changes, so normalizing twice equals normalizing once.
    """
    if not isinstance(text, str):
        return text
    while True:
        stripped = _strip_once(text, prefixes)
        if stripped == text:
            return text
        text = stripped


def normalize_field_name(name: str, prefixes: Sequence[str] = VENDOR_PREFIXES) -> str:
    """Normalize each dotted segment of a field name ('MetadataEntry.HKTimeZone')."""
    segments = split_field_name(name)
    if len(segments) <= 1:
        return normalize_identifier(name, prefixes)
    return join_field_name(normalize_identifier(s, prefixes) for s in segments)


def _normalize_cell(value: Any, prefixes: Sequence[str]) -> Any:
    if is_missing(value) or not isinstance(value, str):
        return value
    return normalize_identifier(value, prefixes)


def normalize_identifiers(
    table: UnifiedTable,
    schema: ColumnSchema,
    prefixes: Sequence[str] = VENDOR_PREFIXES,
) -> UnifiedTable:
    """Rename every column and rewrite cells of identifier columns, in place.

    Roles are looked up by the normalized column name, so a raw vendor name and
    its stripped form resolve to the same role. Other columns keep their cells.
    """
    for name in table.columns:
        new_name = normalize_field_name(name, prefixes)
        if new_name != name:
            logger.debug("Renaming column %r -> %r", name, new_name)
            table.rename_column(name, new_name)

    for name in schema.columns_with_role(Role.IDENTIFIER, table.columns):
        cells = table.column(name)
        table.set_column(name, [_normalize_cell(v, prefixes) for v in cells])

    return table
