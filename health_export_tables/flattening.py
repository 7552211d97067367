from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from .errors import MalformedRecordError
from .paths import join_field_name
from .tree import TreeNode

logger = logging.getLogger(__name__)

# Children shaped <MetadataEntry key=".." value=".."/> hold one field each.
KEY_VALUE_ATTRS = ('key', 'value')


def _check_attributes(attributes: Any, index: Optional[int], tag: Optional[str]) -> Mapping[str, str]:
    if not isinstance(attributes, Mapping):
        raise MalformedRecordError("attributes are not a mapping", index=index, tag=tag)
    for name, value in attributes.items():
        if not isinstance(name, str) or not name:
            raise MalformedRecordError(f"invalid attribute name {name!r}", index=index, tag=tag)
        if not isinstance(value, str):
            raise MalformedRecordError(f"attribute {name!r} is not text", index=index, tag=tag)
    return attributes


def _is_key_value_child(attributes: Mapping[str, str]) -> bool:
    return set(attributes) == set(KEY_VALUE_ATTRS)


def flatten_record(node: TreeNode, index: Optional[int] = None, fold_children: bool = True) -> Dict[str, str]:
    """Flatten one record node into field name -> text.

    The node's own attributes become fields directly. Attributed children are
    folded under a dotted name: key/value children as '<tag>.<key>', any other
    child as '<tag>.<attribute>'. Children without attributes are collections
    (e.g. beat-to-beat lists) that are not modelled and are skipped.

    A folded name that repeats overwrites the earlier value.
    """
    tag = getattr(node, 'tag', None)
    if not isinstance(node, TreeNode):
        raise MalformedRecordError("not a tree node", index=index, tag=tag)

    row: Dict[str, str] = dict(_check_attributes(node.attributes, index, tag))
    if not fold_children:
        return row

    for child in node.children:
        if not isinstance(child, TreeNode):
            raise MalformedRecordError(f"child {child!r} is not a tree node", index=index, tag=tag)
        attributes = _check_attributes(child.attributes, index, f"{tag}/{child.tag}")
        if not attributes:
            continue
        if _is_key_value_child(attributes):
            pairs = [(join_field_name([child.tag, attributes['key']]), attributes['value'])]
        else:
            pairs = [(join_field_name([child.tag, name]), value) for name, value in attributes.items()]
        for name, value in pairs:
            if name in row:
                logger.warning("Record %s (%s): field %r repeated, keeping the later value", index, tag, name)
            row[name] = value

    return row
