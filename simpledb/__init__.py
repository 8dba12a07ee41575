"""
SimpleDB: an embeddable in-memory table store with a tiny SQL-like language.
"""

from .engine import DatabaseEngine
from .errors import (
    DatabaseError,
    DuplicateColumn,
    ErrorKind,
    InvalidValue,
    MalformedQuery,
    SchemaMismatch,
    TableAlreadyExists,
    TableNotFound,
)
from .executor import QueryResult
from .parser import QueryParser
from .repl import DatabaseREPL
from .table import Predicate, Table
from .types import Column, DataType, Value

__all__ = [
    'DatabaseEngine', 'DatabaseREPL', 'QueryParser', 'QueryResult',
    'Table', 'Predicate', 'Column', 'DataType', 'Value',
    'ErrorKind', 'DatabaseError', 'TableNotFound', 'TableAlreadyExists',
    'DuplicateColumn', 'SchemaMismatch', 'InvalidValue', 'MalformedQuery',
]
