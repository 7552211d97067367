from __future__ import annotations

import io
import xml.etree.ElementTree as ET
import zipfile

from .errors import MalformedDocumentError
from .tree import TreeNode

EXPORT_MEMBER_NAME = 'export.xml'


def _open_source(file_obj):
    if isinstance(file_obj, (bytes, bytearray)):
        return io.BytesIO(file_obj)
    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read()
        if isinstance(content, str):
            content = content.encode('utf-8')
        return io.BytesIO(content)

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    with open(path, 'rb') as f:
        return io.BytesIO(f.read())


def _unwrap_zip(buffer: io.BytesIO) -> io.BytesIO:
    if not zipfile.is_zipfile(buffer):
        buffer.seek(0)
        return buffer
    with zipfile.ZipFile(buffer) as archive:
        members = [n for n in archive.namelist() if n.rsplit('/', 1)[-1] == EXPORT_MEMBER_NAME]
        if not members:
            raise MalformedDocumentError(f"Archive has no {EXPORT_MEMBER_NAME}.")
        return io.BytesIO(archive.read(members[0]))


def read_export_tree(file_obj) -> TreeNode:
    """Parse an uploaded export (XML, or a zip holding export.xml) into a TreeNode."""
    if file_obj is None:
        raise MalformedDocumentError("No file uploaded.")

    buffer = _unwrap_zip(_open_source(file_obj))
    try:
        root = ET.parse(buffer).getroot()
    except ET.ParseError as exc:
        raise MalformedDocumentError(f"Export is not well-formed XML: {exc}")
    return TreeNode.from_element(root)
