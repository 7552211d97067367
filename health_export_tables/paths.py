from __future__ import annotations

import re
from typing import Iterable, List

_SEGMENT_RE = re.compile(r'((?:\\.|[^.\\])*)(?:\.|$)')
_ESCAPE_RE = re.compile(r'\\(.)')


def escape_segment(segment: str) -> str:
    """Escape one part of a dotted field name.

    - Dots become '\\.' so a metadata key such as 'HKMetadataKeySyncVersion.1'
      stays a single segment.
    - Backslashes become '\\\\' so splitting gives the original text back.
    """
    if not isinstance(segment, str):
        segment = str(segment)
    return segment.replace('\\', '\\\\').replace('.', '\\.')


def join_field_name(segments: Iterable[str]) -> str:
    return '.'.join(escape_segment(s) for s in segments)


def split_field_name(name: str) -> List[str]:
    """Split a dotted field name on unescaped '.' and unescape each part."""
    if not name:
        return []
    if name.endswith('\\') and not name.endswith('\\\\'):
        # Trailing lone backslash is literal.
        name = name + '\\'
    parts = [m.group(1) for m in _SEGMENT_RE.finditer(name)]
    # finditer yields one trailing empty match at end of string.
    if parts and parts[-1] == '' and not name.endswith('.'):
        parts.pop()
    return [_ESCAPE_RE.sub(r'\1', p) for p in parts]
