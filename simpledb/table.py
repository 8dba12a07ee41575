"""
In-memory table: an ordered column schema plus append-only rows.
"""

import operator
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from .errors import DuplicateColumn, MalformedQuery, SchemaMismatch
from .types import Column, DataType, Value

Row = Tuple[Value, ...]

OPERATORS: Dict[str, Callable[[Value, Value], bool]] = {
    "=": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    ">": operator.gt,
    "<=": operator.le,
    ">=": operator.ge,
}


@dataclass(frozen=True)
class Predicate:
    """A single `column operator literal` filter."""
    column: str
    operator: str
    literal: str

    @classmethod
    def from_text(cls, clause: str) -> Optional["Predicate"]:
        """Split a WHERE clause into its three parts, or None if it can't be."""
        parts = clause.split()
        if len(parts) != 3:
            return None
        return cls(*parts)


class Table:
    """A named table whose schema is fixed once rows start arriving."""

    def __init__(self, name: str):
        self.name = name
        self._columns: List[Column] = []
        self._column_index: Dict[str, int] = {}
        self._rows: List[Row] = []

    @property
    def columns(self) -> Tuple[Column, ...]:
        return tuple(self._columns)

    def add_column(self, name: str, dtype: Union[DataType, str]) -> Column:
        """Append a column to the schema."""
        if name in self._column_index:
            raise DuplicateColumn(self.name, name)
        if self._rows:
            raise MalformedQuery(f"Cannot add column '{name}' to table '{self.name}' after rows were inserted")

        if not isinstance(dtype, DataType):
            try:
                dtype = DataType.from_name(dtype)
            except ValueError:
                raise MalformedQuery(f"Unknown column type '{dtype}' for column '{name}'") from None
        column = Column(name, dtype)
        self._columns.append(column)
        self._column_index[name] = len(self._columns) - 1
        return column

    def has_column(self, name: str) -> bool:
        return name in self._column_index

    def column_index(self, name: str) -> int:
        """Position of a column in the schema; raises KeyError if absent."""
        return self._column_index[name]

    def insert_row(self, raw_values: Sequence[str]) -> int:
        """
        Parse and append one row of literal values.

        The whole row is parsed before anything is stored, so a failing value
        leaves the table untouched.

        Returns:
            Index of the new row
        """
        if len(raw_values) != len(self._columns):
            raise SchemaMismatch(len(self._columns), len(raw_values))

        row = tuple(
            Value.parse(raw, column.dtype, column.name)
            for raw, column in zip(raw_values, self._columns)
        )
        self._rows.append(row)
        return len(self._rows) - 1

    def select_rows(self, predicate: Union[Predicate, str, None] = None) -> List[int]:
        """
        Return indices of matching rows in insertion order.

        A clause that can't be split into column, operator and literal filters
        nothing; a clause naming an unknown column matches nothing.
        An empty table matches nothing without looking at the literal.
        """
        if isinstance(predicate, str):
            predicate = Predicate.from_text(predicate) if predicate.strip() else None
        if predicate is None:
            return list(range(len(self._rows)))

        if not self.has_column(predicate.column) or not self._rows:
            return []

        position = self._column_index[predicate.column]
        column = self._columns[position]
        literal = Value.parse(predicate.literal, column.dtype, column.name)

        compare = OPERATORS.get(predicate.operator)
        if compare is None:
            return []

        return [i for i, row in enumerate(self._rows) if compare(row[position], literal)]

    def rows(self, indices: Optional[Sequence[int]] = None) -> List[Row]:
        """Return stored rows, optionally restricted to the given indices."""
        if indices is None:
            return list(self._rows)
        return [self._rows[i] for i in indices if 0 <= i < len(self._rows)]

    def project(self, indices: Sequence[int],
                columns: Optional[Sequence[str]] = None) -> Tuple[List[str], List[Row]]:
        """
        Pick the given rows and columns.

        Columns missing from the schema are skipped; None selects every column.

        Returns:
            (headers, rows) with each row restricted to the headers
        """
        if columns is None:
            positions = list(range(len(self._columns)))
        else:
            positions = [self._column_index[name] for name in columns if name in self._column_index]
        headers = [self._columns[p].name for p in positions]
        rows = [tuple(row[p] for p in positions) for row in self.rows(indices)]
        return headers, rows

    def describe(self) -> List[Column]:
        return list(self._columns)

    def size(self) -> int:
        return len(self._rows)

    def is_empty(self) -> bool:
        return not self._rows

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return f"Table({self.name!r}, columns={len(self._columns)}, rows={len(self._rows)})"
