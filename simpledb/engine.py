"""
Main database engine class.
"""

from typing import Any, Dict, List, Optional, Sequence, Union

from .catalog import Catalog
from .config import Settings, get_settings
from .errors import DatabaseError
from .executor import ColumnSpec, QueryExecutor, QueryResult
from .logging import get_logger
from .parser import QueryParser
from .table import Predicate, Table
from .types import Column

logger = get_logger(__name__)


class DatabaseEngine:
    """
    Main database engine interface.

    Every call runs to completion synchronously. The engine is not
    thread-safe; concurrent hosts must serialize access.
    """

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.catalog = Catalog()
        self.parser = QueryParser()
        self.executor = QueryExecutor(self.catalog, settings.display.min_column_width)

    def execute(self, query: str) -> QueryResult:
        """
        Execute a command string.

        Args:
            query: SimpleDB command text

        Returns:
            QueryResult with status "OK", or status "ERROR" and the error kind.
            Engine errors never propagate; the catalog is unchanged after a
            failed statement.
        """
        try:
            command = self.parser.parse(query)
            logger.debug("statement", kind=command.type.value, query=query)
            return self.executor.execute(command)
        except DatabaseError as e:
            logger.warning("statement_failed", error=e.kind.value, detail=e.message, query=query)
            return QueryResult(status="ERROR", message=e.message, error=e.kind)

    def create_table(self, table_name: str, columns: Sequence[ColumnSpec] = ()) -> Table:
        """Create a table; raises TableAlreadyExists or DuplicateColumn."""
        return self.executor.create_table(table_name, columns)

    def drop_table(self, table_name: str) -> None:
        """Drop a table; raises TableNotFound."""
        self.executor.drop_table(table_name)

    def get_table(self, table_name: str) -> Table:
        """Look up a table; raises TableNotFound."""
        return self.catalog.get(table_name)

    def has_table(self, table_name: str) -> bool:
        return self.catalog.has(table_name)

    def list_tables(self) -> List[str]:
        """List all tables in the database, sorted by name."""
        return self.catalog.names()

    def insert_into(self, table_name: str, values: Sequence[str]) -> int:
        return self.executor.insert_into(table_name, values)

    def select(self, table_name: str, columns: Optional[Sequence[str]] = None,
               where: Union[Predicate, str, None] = None) -> QueryResult:
        return self.executor.select(table_name, columns, where)

    def describe_table(self, table_name: str) -> List[Column]:
        return self.executor.describe_table(table_name)

    def show_tables(self) -> str:
        return self.executor.show_tables()

    def table_count(self) -> int:
        return len(self.catalog)

    def database_info(self) -> Dict[str, Any]:
        """Summary counts across the whole catalog."""
        return {'tables': len(self.catalog), 'rows': self.catalog.total_rows()}

    def get_table_info(self, table_name: str) -> Dict[str, Any]:
        """Get information about a table."""
        table = self.catalog.get(table_name)
        return {
            'name': table.name,
            'schema': [
                {'name': column.name, 'type': column.dtype.value}
                for column in table.describe()
            ],
            'row_count': table.size()
        }
