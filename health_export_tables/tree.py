from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional
from xml.etree.ElementTree import Element


@dataclass
class TreeNode:
    """One element of the parsed export: tag, attributes and ordered children."""

    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List['TreeNode'] = field(default_factory=list)

    @classmethod
    def from_element(cls, element: Element) -> 'TreeNode':
        return cls(
            tag=element.tag,
            attributes=dict(element.attrib),
            children=[cls.from_element(child) for child in element],
        )

    def iter_children(self, tag: Optional[str] = None) -> Iterator['TreeNode']:
        for child in self.children:
            if tag is None or child.tag == tag:
                yield child
