"""
Error kinds raised by the table store, catalog and query parser.
"""

from enum import Enum


class ErrorKind(Enum):
    """Categories of failure a statement can produce."""
    TABLE_NOT_FOUND = "TableNotFound"
    TABLE_ALREADY_EXISTS = "TableAlreadyExists"
    DUPLICATE_COLUMN = "DuplicateColumn"
    SCHEMA_MISMATCH = "SchemaMismatch"
    INVALID_VALUE = "InvalidValue"
    MALFORMED_QUERY = "MalformedQuery"


class DatabaseError(Exception):
    """Base class for every deterministic, input-driven engine failure."""
    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TableNotFound(DatabaseError):
    kind = ErrorKind.TABLE_NOT_FOUND

    def __init__(self, table_name: str):
        super().__init__(f"Table '{table_name}' not found")
        self.table_name = table_name


class TableAlreadyExists(DatabaseError):
    kind = ErrorKind.TABLE_ALREADY_EXISTS

    def __init__(self, table_name: str):
        super().__init__(f"Table '{table_name}' already exists")
        self.table_name = table_name


class DuplicateColumn(DatabaseError):
    kind = ErrorKind.DUPLICATE_COLUMN

    def __init__(self, table_name: str, column: str):
        super().__init__(f"Column '{column}' already exists in table '{table_name}'")
        self.table_name = table_name
        self.column = column


class SchemaMismatch(DatabaseError):
    kind = ErrorKind.SCHEMA_MISMATCH

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Number of values ({actual}) doesn't match number of columns ({expected})")
        self.expected = expected
        self.actual = actual


class InvalidValue(DatabaseError):
    kind = ErrorKind.INVALID_VALUE

    def __init__(self, column: str, value: str):
        target = f" for column '{column}'" if column else ""
        super().__init__(f"Invalid value '{value}'{target}")
        self.column = column
        self.value = value


class MalformedQuery(DatabaseError):
    kind = ErrorKind.MALFORMED_QUERY

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail
