from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence

import pandas as pd


class _Missing:
    """Marker for an absent or unparseable cell.

    Distinct from an empty string, which is a valid value.
    """

    _instance: Optional['_Missing'] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'MISSING'

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_Missing, ())


MISSING = _Missing()


def is_missing(value: Any) -> bool:
    return value is MISSING


class UnifiedTable:
    """Ordered map of column name -> cells, every column holding one cell per row."""

    def __init__(self, columns: Optional[Mapping[str, Sequence[Any]]] = None, n_rows: Optional[int] = None):
        columns = columns or {}
        lengths = {len(values) for values in columns.values()}
        if n_rows is None:
            n_rows = lengths.pop() if len(lengths) == 1 else 0
            if lengths:
                raise ValueError("Columns have different lengths.")
        elif lengths - {n_rows}:
            raise ValueError(f"Every column must hold {n_rows} cells.")
        self._n_rows = n_rows
        self._columns: Dict[str, List[Any]] = {name: list(values) for name, values in columns.items()}

    def __len__(self) -> int:
        return self._n_rows

    def __contains__(self, name: object) -> bool:
        return name in self._columns

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnifiedTable):
            return NotImplemented
        return self._n_rows == other._n_rows and list(self._columns.items()) == list(other._columns.items())

    def __repr__(self) -> str:
        return f"UnifiedTable(rows={self._n_rows}, columns={self.columns!r})"

    @property
    def columns(self) -> List[str]:
        return list(self._columns)

    def column(self, name: str) -> List[Any]:
        """Cells of one column. The list is the table's own storage; do not resize it."""
        return self._columns[name]

    def row(self, index: int) -> Dict[str, Any]:
        return {name: values[index] for name, values in self._columns.items()}

    def rows(self) -> Iterator[Dict[str, Any]]:
        for i in range(self._n_rows):
            yield self.row(i)

    def set_column(self, name: str, values: Sequence[Any], after: Optional[str] = None) -> None:
        """Replace a column in place, or add it (after `after` when given, else at the end)."""
        values = list(values)
        if len(values) != self._n_rows:
            raise ValueError(f"Column {name!r} has {len(values)} cells, table has {self._n_rows} rows.")
        if name in self._columns or after is None or after not in self._columns:
            self._columns[name] = values
            return
        reordered: Dict[str, List[Any]] = {}
        for key, cells in self._columns.items():
            reordered[key] = cells
            if key == after:
                reordered[name] = values
        self._columns = reordered

    def drop_column(self, name: str) -> None:
        self._columns.pop(name, None)

    def rename_column(self, old: str, new: str) -> None:
        """Rename keeping position. If `new` already exists the two are coalesced:
        the surviving column keeps the first non-missing cell of each row."""
        if old == new or old not in self._columns:
            return
        moved = self._columns[old]
        if new in self._columns:
            kept = self._columns[new]
            self._columns[new] = [b if is_missing(a) else a for a, b in zip(kept, moved)]
            del self._columns[old]
            return
        self._columns = {(new if key == old else key): cells for key, cells in self._columns.items()}

    def take(self, indices: Iterable[int]) -> 'UnifiedTable':
        indices = list(indices)
        return UnifiedTable(
            {name: [values[i] for i in indices] for name, values in self._columns.items()},
            n_rows=len(indices),
        )

    def drop_empty_columns(self) -> List[str]:
        """Remove every column whose cells are all missing; return the removed names."""
        empty = [name for name, values in self._columns.items() if all(is_missing(v) for v in values)]
        for name in empty:
            del self._columns[name]
        return empty

    def to_dataframe(self) -> pd.DataFrame:
        """Materialize as a pandas DataFrame; MISSING cells become None/NaN."""
        data = {
            name: [None if is_missing(v) else v for v in values]
            for name, values in self._columns.items()
        }
        return pd.DataFrame(data, columns=self.columns, index=pd.RangeIndex(self._n_rows))
