"""
In-memory catalog mapping table names to tables.
"""

from typing import Dict, Iterator, List

from .errors import TableAlreadyExists, TableNotFound
from .table import Table


class Catalog:
    """Owns every table for the lifetime of the engine."""

    def __init__(self):
        self._tables: Dict[str, Table] = {}

    def add(self, table: Table) -> Table:
        """Register a fully built table under its name."""
        if table.name in self._tables:
            raise TableAlreadyExists(table.name)
        self._tables[table.name] = table
        return table

    def get(self, table_name: str) -> Table:
        """Look up a table by name."""
        try:
            return self._tables[table_name]
        except KeyError:
            raise TableNotFound(table_name) from None

    def remove(self, table_name: str) -> Table:
        """Remove a table and hand it back to the caller."""
        if table_name not in self._tables:
            raise TableNotFound(table_name)
        return self._tables.pop(table_name)

    def has(self, table_name: str) -> bool:
        return table_name in self._tables

    def names(self) -> List[str]:
        """Table names in lexicographic order."""
        return sorted(self._tables)

    def total_rows(self) -> int:
        return sum(table.size() for table in self._tables.values())

    def __contains__(self, table_name: str) -> bool:
        return table_name in self._tables

    def __iter__(self) -> Iterator[Table]:
        for name in self.names():
            yield self._tables[name]

    def __len__(self) -> int:
        return len(self._tables)
