from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Sequence

from .errors import MalformedDocumentError
from .table import MISSING, UnifiedTable
from .tree import TreeNode

logger = logging.getLogger(__name__)


def resolve_profile_node(root: TreeNode, profile_tag: str = 'Me') -> TreeNode:
    if not isinstance(root, TreeNode):
        raise MalformedDocumentError("Export root is not a parsed tree.")
    profiles = list(root.iter_children(profile_tag))
    if not profiles:
        raise MalformedDocumentError(f"Export root <{root.tag}> has no <{profile_tag}> profile node.")
    if len(profiles) > 1:
        logger.warning("Found %d <%s> nodes, using the first", len(profiles), profile_tag)
    return profiles[0]


def resolve_record_nodes(root: TreeNode, record_tags: Sequence[str] = ('Record',)) -> List[TreeNode]:
    """Record nodes directly under the root, in document order."""
    if not isinstance(root, TreeNode):
        raise MalformedDocumentError("Export root is not a parsed tree.")
    wanted = set(record_tags)
    return [child for child in root.children if child.tag in wanted]


def union_keys(records: Iterable[Mapping[str, Any]]) -> List[str]:
    """All keys across records, in first-seen order."""
    seen: Dict[str, None] = {}
    for record in records:
        for key in record:
            seen.setdefault(key, None)
    return list(seen)


def unify_records(records: Iterable[Mapping[str, Any]]) -> UnifiedTable:
    """Row-bind flat records of any shape into one rectangular table.

    Fields a record does not have are filled with MISSING; None counts as
    missing too. Differing shapes are the normal case, never an error.
    """
    records = list(records)
    columns = {
        key: [MISSING if record.get(key) is None else record[key] for record in records]
        for key in union_keys(records)
    }
    return UnifiedTable(columns, n_rows=len(records))
