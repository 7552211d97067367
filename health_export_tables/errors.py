from __future__ import annotations

from typing import Optional


class ExportTablesError(Exception):
    """Base class for errors surfaced by the table pipeline."""


class MalformedDocumentError(ExportTablesError):
    """The export document as a whole cannot be read or lacks required nodes."""


class MalformedRecordError(ExportTablesError):
    """A record node cannot be flattened at all.

    `index` is the position of the record among the collected record nodes
    (None for the profile node) and `tag` is its element name.
    """

    def __init__(self, reason: str, index: Optional[int] = None, tag: Optional[str] = None):
        self.reason = reason
        self.index = index
        self.tag = tag
        where = tag or 'node'
        if index is not None:
            where = f"{where} #{index}"
        super().__init__(f"Malformed {where}: {reason}")


class ParseFailure(ExportTablesError, ValueError):
    """A single cell value could not be parsed.

    Stages catch this and store MISSING instead; it never leaves the pipeline.
    """

    def __init__(self, kind: str, value):
        self.kind = kind
        self.value = value
        super().__init__(f"Cannot parse {value!r} as {kind}")
