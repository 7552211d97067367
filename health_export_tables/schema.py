from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from fnmatch import fnmatchcase
from typing import Iterable, List, Mapping, Tuple


class Role(str, Enum):
    IDENTIFIER = 'identifier'
    TEMPORAL = 'temporal'
    NUMERIC = 'numeric'
    CATEGORICAL = 'categorical'


@dataclass(frozen=True)
class ColumnSchema:
    """Declares which role each (normalized) column name plays.

    Exact names win over glob patterns; patterns are tried in order;
    anything undeclared gets `default`.
    """

    roles: Mapping[str, Role] = field(default_factory=dict)
    patterns: Tuple[Tuple[str, Role], ...] = ()
    default: Role = Role.CATEGORICAL

    def role_of(self, name: str) -> Role:
        if name in self.roles:
            return self.roles[name]
        for pattern, role in self.patterns:
            if fnmatchcase(name, pattern):
                return role
        return self.default

    def columns_with_role(self, role: Role, columns: Iterable[str]) -> List[str]:
        return [c for c in columns if self.role_of(c) is role]


RECORD_SCHEMA = ColumnSchema(
    roles={
        'type': Role.IDENTIFIER,
        'creationDate': Role.TEMPORAL,
        'startDate': Role.TEMPORAL,
        'endDate': Role.TEMPORAL,
        'value': Role.NUMERIC,
        'min': Role.NUMERIC,
        'max': Role.NUMERIC,
        'average': Role.NUMERIC,
    },
)

PROFILE_SCHEMA = ColumnSchema(
    roles={
        'DateOfBirth': Role.TEMPORAL,
        'BiologicalSex': Role.IDENTIFIER,
        'BloodType': Role.IDENTIFIER,
        'FitzpatrickSkinType': Role.IDENTIFIER,
        'CardioFitnessMedicationsUse': Role.IDENTIFIER,
    },
)
