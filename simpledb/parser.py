"""
Tokenizer and parser for the SimpleDB command language.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional, Union

from .errors import MalformedQuery
from .table import Predicate
from .types import Column, DataType

TRAILING_PUNCTUATION = ",;)"
QUOTES = ("'", '"')


class QueryType(Enum):
    """Types of statements we support."""
    CREATE_TABLE = "CREATE_TABLE"
    INSERT = "INSERT"
    SELECT = "SELECT"
    DROP_TABLE = "DROP_TABLE"
    SHOW_TABLES = "SHOW_TABLES"
    DESCRIBE = "DESCRIBE"


@dataclass
class CreateTableCommand:
    type: ClassVar[QueryType] = QueryType.CREATE_TABLE
    table_name: str
    columns: List[Column] = field(default_factory=list)


@dataclass
class InsertCommand:
    type: ClassVar[QueryType] = QueryType.INSERT
    table_name: str
    values: List[str] = field(default_factory=list)


@dataclass
class SelectCommand:
    """SELECT; `columns` is None for `*`."""
    type: ClassVar[QueryType] = QueryType.SELECT
    table_name: str
    columns: Optional[List[str]] = None
    where: Optional[Predicate] = None


@dataclass
class DropTableCommand:
    type: ClassVar[QueryType] = QueryType.DROP_TABLE
    table_name: str


@dataclass
class ShowTablesCommand:
    type: ClassVar[QueryType] = QueryType.SHOW_TABLES


@dataclass
class DescribeCommand:
    type: ClassVar[QueryType] = QueryType.DESCRIBE
    table_name: str


Command = Union[
    CreateTableCommand,
    InsertCommand,
    SelectCommand,
    DropTableCommand,
    ShowTablesCommand,
    DescribeCommand,
]


def tokenize(query: str) -> List[str]:
    """
    Split a command on whitespace, then peel punctuation off each word.

    A leading `(` and any trailing `,` or `)` become tokens of their own;
    trailing `;` is dropped.
    """
    tokens = []
    for word in query.split():
        if word.startswith("("):
            tokens.append("(")
            word = word[1:]

        trailing = []
        while word and word[-1] in TRAILING_PUNCTUATION:
            if word[-1] != ";":
                trailing.append(word[-1])
            word = word[:-1]

        if word:
            tokens.append(word)
        tokens.extend(reversed(trailing))
    return tokens


def strip_quotes(value: str) -> str:
    """Remove one pair of matching single or double quotes."""
    if len(value) >= 2 and value[0] in QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


class QueryParser:
    """Parses command strings into typed command objects."""

    def parse(self, query: str) -> Command:
        """Parse a command string. Parsing never touches the catalog."""
        tokens = tokenize(query)
        if not tokens:
            raise MalformedQuery("Empty query")

        first = tokens[0].lower()
        second = tokens[1].lower() if len(tokens) > 1 else ""

        if first == "create" and second == "table":
            return self._parse_create_table(tokens)
        elif first == "insert":
            return self._parse_insert(tokens)
        elif first == "select":
            return self._parse_select(tokens)
        elif first == "drop" and second == "table":
            return self._parse_drop_table(tokens)
        elif first == "show" and second == "tables":
            return ShowTablesCommand()
        elif first in ("describe", "desc"):
            return self._parse_describe(tokens)
        else:
            raise MalformedQuery(f"Unsupported query: {query.strip()}")

    def _parse_create_table(self, tokens: List[str]) -> CreateTableCommand:
        """Parse CREATE TABLE name (col type, ...)."""
        if len(tokens) < 4:
            raise MalformedQuery("Invalid CREATE TABLE syntax")

        table_name = tokens[2]
        body = self._parenthesized(tokens, 3, "Missing column definitions in CREATE TABLE")
        if not body:
            raise MalformedQuery("CREATE TABLE requires at least one column")

        columns = []
        for definition in self._split_by_commas(body):
            if len(definition) != 2:
                raise MalformedQuery(f"Invalid column definition: {' '.join(definition) or '<empty>'}")
            col_name, col_type = definition
            try:
                dtype = DataType.from_name(col_type)
            except ValueError:
                raise MalformedQuery(f"Unknown column type '{col_type}' for column '{col_name}'") from None
            columns.append(Column(col_name, dtype))

        return CreateTableCommand(table_name, columns)

    def _parse_insert(self, tokens: List[str]) -> InsertCommand:
        """Parse INSERT INTO name VALUES (v1, v2, ...)."""
        if len(tokens) < 5:
            raise MalformedQuery("Invalid INSERT syntax")
        if tokens[1].lower() != "into":
            raise MalformedQuery("Expected 'INTO' after 'INSERT'")
        if tokens[3].lower() != "values":
            raise MalformedQuery("Expected 'VALUES' in INSERT statement")

        body = self._parenthesized(tokens, 4, "Missing values in INSERT statement")
        values = [strip_quotes(token) for token in body if token != ","]
        return InsertCommand(tokens[2], values)

    def _parse_select(self, tokens: List[str]) -> SelectCommand:
        """Parse SELECT {* | cols} FROM name [WHERE col op value]."""
        if len(tokens) < 4:
            raise MalformedQuery("Invalid SELECT syntax")

        from_pos = next((i for i in range(1, len(tokens)) if tokens[i].lower() == "from"), None)
        if from_pos is None:
            raise MalformedQuery("Missing 'FROM' in SELECT statement")
        if from_pos + 1 >= len(tokens):
            raise MalformedQuery("Missing table name after 'FROM'")

        selected = [token for token in tokens[1:from_pos] if token != ","]
        if not selected:
            raise MalformedQuery("No columns selected")
        columns = None if "*" in selected else selected

        where = None
        where_pos = next(
            (i for i in range(from_pos + 2, len(tokens)) if tokens[i].lower() == "where"), None
        )
        # WHERE with fewer than three following tokens filters nothing
        if where_pos is not None and where_pos + 3 < len(tokens):
            column, op, literal = tokens[where_pos + 1:where_pos + 4]
            where = Predicate(column, op, strip_quotes(literal))

        return SelectCommand(tokens[from_pos + 1], columns, where)

    def _parse_drop_table(self, tokens: List[str]) -> DropTableCommand:
        if len(tokens) < 3:
            raise MalformedQuery("Invalid DROP TABLE syntax")
        return DropTableCommand(tokens[2])

    def _parse_describe(self, tokens: List[str]) -> DescribeCommand:
        if len(tokens) < 2:
            raise MalformedQuery("Invalid DESCRIBE syntax")
        return DescribeCommand(tokens[1])

    def _parenthesized(self, tokens: List[str], start: int, missing: str) -> List[str]:
        """Return the tokens between the first `(` at or after start and its `)`."""
        try:
            open_pos = tokens.index("(", start)
        except ValueError:
            raise MalformedQuery(missing) from None
        try:
            close_pos = tokens.index(")", open_pos + 1)
        except ValueError:
            raise MalformedQuery("Missing closing parenthesis") from None
        return tokens[open_pos + 1:close_pos]

    def _split_by_commas(self, tokens: List[str]) -> List[List[str]]:
        """Group tokens into comma-separated runs."""
        groups = [[]]
        for token in tokens:
            if token == ",":
                groups.append([])
            else:
                groups[-1].append(token)
        return groups
