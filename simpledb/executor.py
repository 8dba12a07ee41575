"""
Query executor that applies parsed commands to the catalog.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .catalog import Catalog
from .errors import ErrorKind, TableAlreadyExists
from .formatter import MIN_COLUMN_WIDTH, render_description, render_rows, render_tables
from .logging import get_logger
from .parser import (
    Command,
    CreateTableCommand,
    DescribeCommand,
    DropTableCommand,
    InsertCommand,
    QueryType,
    SelectCommand,
)
from .table import Predicate, Row, Table
from .types import Column, DataType, Value

ColumnSpec = Union[Column, Tuple[str, Union[DataType, str]]]

logger = get_logger(__name__)

ROW_RESULTS = (QueryType.SELECT, QueryType.SHOW_TABLES, QueryType.DESCRIBE)


@dataclass
class QueryResult:
    """Outcome of one statement: either OK with output, or an error kind."""
    status: str = "OK"
    query_type: Optional[QueryType] = None
    message: str = ""
    columns: List[str] = field(default_factory=list)
    rows: List[Row] = field(default_factory=list)
    text: str = ""
    error: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.status == "OK"

    @property
    def empty(self) -> bool:
        """True for a successful selection that matched nothing."""
        return self.ok and self.query_type == QueryType.SELECT and not self.rows

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form, suitable for JSON."""
        result: Dict[str, Any] = {'status': self.status, 'message': self.message}
        if self.query_type is not None:
            result['type'] = self.query_type.value
        if self.error is not None:
            result['error'] = self.error.value
        if self.query_type in ROW_RESULTS:
            result['columns'] = list(self.columns)
            result['rows'] = [[value.data for value in row] for row in self.rows]
        if self.text:
            result['text'] = self.text
        return result


class QueryExecutor:
    """Executes catalog operations and parsed commands."""

    def __init__(self, catalog: Optional[Catalog] = None, min_width: int = MIN_COLUMN_WIDTH):
        self.catalog = catalog if catalog is not None else Catalog()
        self.min_width = min_width

    def execute(self, command: Command) -> QueryResult:
        """Execute a parsed command."""
        query_type = command.type

        if query_type == QueryType.CREATE_TABLE:
            return self._execute_create_table(command)
        elif query_type == QueryType.INSERT:
            return self._execute_insert(command)
        elif query_type == QueryType.SELECT:
            return self._execute_select(command)
        elif query_type == QueryType.DROP_TABLE:
            return self._execute_drop_table(command)
        elif query_type == QueryType.SHOW_TABLES:
            return self._execute_show_tables()
        elif query_type == QueryType.DESCRIBE:
            return self._execute_describe(command)
        else:
            raise ValueError(f"Unsupported query type: {query_type}")

    # Catalog operations

    def create_table(self, table_name: str, columns: Sequence[ColumnSpec] = ()) -> Table:
        """
        Create a table with the given schema.

        The table is fully built before it is registered, so a duplicate
        column leaves the catalog unchanged.
        """
        if self.catalog.has(table_name):
            raise TableAlreadyExists(table_name)

        table = Table(table_name)
        for spec in columns:
            if isinstance(spec, Column):
                table.add_column(spec.name, spec.dtype)
            else:
                table.add_column(*spec)

        self.catalog.add(table)
        logger.info("table_created", table=table_name, columns=len(table.columns))
        return table

    def drop_table(self, table_name: str) -> None:
        self.catalog.remove(table_name)
        logger.info("table_dropped", table=table_name)

    def insert_into(self, table_name: str, values: Sequence[str]) -> int:
        """Insert one row of literal values; returns the new row's index."""
        table = self.catalog.get(table_name)
        row_index = table.insert_row(values)
        logger.info("row_inserted", table=table_name, row=row_index)
        return row_index

    def select(self, table_name: str, columns: Optional[Sequence[str]] = None,
               where: Union[Predicate, str, None] = None) -> QueryResult:
        """Filter and project a table."""
        table = self.catalog.get(table_name)
        indices = table.select_rows(where)
        headers, rows = table.project(indices, columns)
        return QueryResult(
            query_type=QueryType.SELECT,
            message=f"{len(rows)} row(s) returned",
            columns=headers,
            rows=rows,
            text=render_rows(headers, rows, self.min_width),
        )

    def describe_table(self, table_name: str) -> List[Column]:
        return self.catalog.get(table_name).describe()

    def show_tables(self) -> str:
        return render_tables(self.catalog, self.min_width)

    # Command handlers

    def _execute_create_table(self, command: CreateTableCommand) -> QueryResult:
        self.create_table(command.table_name, command.columns)
        message = f"Table '{command.table_name}' created successfully."
        return QueryResult(query_type=QueryType.CREATE_TABLE, message=message, text=message)

    def _execute_insert(self, command: InsertCommand) -> QueryResult:
        self.insert_into(command.table_name, command.values)
        message = "1 row inserted."
        return QueryResult(query_type=QueryType.INSERT, message=message, text=message)

    def _execute_select(self, command: SelectCommand) -> QueryResult:
        return self.select(command.table_name, command.columns, command.where)

    def _execute_drop_table(self, command: DropTableCommand) -> QueryResult:
        self.drop_table(command.table_name)
        message = f"Table '{command.table_name}' dropped successfully."
        return QueryResult(query_type=QueryType.DROP_TABLE, message=message, text=message)

    def _execute_show_tables(self) -> QueryResult:
        return QueryResult(
            query_type=QueryType.SHOW_TABLES,
            message=f"{len(self.catalog)} table(s)",
            columns=["name", "rows"],
            rows=[(Value(DataType.STRING, t.name), Value(DataType.INT, t.size())) for t in self.catalog],
            text=self.show_tables(),
        )

    def _execute_describe(self, command: DescribeCommand) -> QueryResult:
        table = self.catalog.get(command.table_name)
        return QueryResult(
            query_type=QueryType.DESCRIBE,
            message=f"Table '{table.name}'",
            columns=["name", "type"],
            rows=[
                (Value(DataType.STRING, column.name), Value(DataType.STRING, column.dtype.value))
                for column in table.describe()
            ],
            text=render_description(table, self.min_width),
        )
