from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .schema import PROFILE_SCHEMA, RECORD_SCHEMA, ColumnSchema


@dataclass(frozen=True)
class PipelineConfig:
    """Settings passed explicitly into every pipeline stage.

    include_end_date: emit a calendar date for the end column as well as its
        time of day. Off by default; consumers usually only need the time.
    timezone_source: the one temporal column whose offset fills `timezone`.
    unknown_category: table name for records without a discriminator value.
    """

    profile_tag: str = 'Me'
    record_tags: Tuple[str, ...] = ('Record',)
    discriminator: str = 'type'
    record_schema: ColumnSchema = RECORD_SCHEMA
    profile_schema: ColumnSchema = PROFILE_SCHEMA
    timezone_source: str = 'creationDate'
    timezone_column: str = 'timezone'
    end_column: str = 'endDate'
    include_end_date: bool = False
    unknown_category: str = '(unknown)'


DEFAULT_CONFIG = PipelineConfig()
