"""
Core data types for the SimpleDB table store.
"""

import re
from enum import Enum
from dataclasses import dataclass
from typing import Union

from .errors import InvalidValue

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

TRUE_LITERALS = ("true", "1")

INT_PATTERN = re.compile(r"[+-]?[0-9]+")
DOUBLE_PATTERN = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


class DataType(Enum):
    """Supported column types, spelled the way CREATE TABLE declares them."""
    INT = "int"
    DOUBLE = "double"
    STRING = "string"
    BOOL = "bool"

    @classmethod
    def from_name(cls, name: str) -> "DataType":
        """Look up a type by its declared name, case-insensitively."""
        return cls(name.lower())


@dataclass(frozen=True)
class Column:
    """Represents a table column definition."""
    name: str
    dtype: DataType


@dataclass(frozen=True)
class Value:
    """
    A single cell value: exactly one of integer, real, text or boolean.

    Values of different types never compare; the schema guarantees that a
    row cell and a predicate literal always share the column's type.
    Ordering goes straight to the underlying data, so a NaN real satisfies
    no ordering comparison.
    """
    dtype: DataType
    data: Union[int, float, str, bool]

    @classmethod
    def parse(cls, raw: str, dtype: DataType, column: str = "") -> "Value":
        """Convert a literal string to a value of the declared type."""
        if dtype == DataType.INT:
            if not INT_PATTERN.fullmatch(raw):
                raise InvalidValue(column, raw)
            number = int(raw)
            if not INT64_MIN <= number <= INT64_MAX:
                raise InvalidValue(column, raw)
            return cls(dtype, number)
        elif dtype == DataType.DOUBLE:
            if not DOUBLE_PATTERN.fullmatch(raw):
                raise InvalidValue(column, raw)
            return cls(dtype, float(raw))
        elif dtype == DataType.BOOL:
            return cls(dtype, raw.lower() in TRUE_LITERALS)
        return cls(dtype, raw)

    def to_text(self) -> str:
        """Render the value the way it is displayed in result grids."""
        if self.dtype == DataType.BOOL:
            return "true" if self.data else "false"
        return str(self.data)

    def compare(self, other: "Value") -> int:
        """Three-way comparison: negative, zero or positive."""
        self._check_comparable(other)
        if self.data < other.data:
            return -1
        if self.data > other.data:
            return 1
        return 0

    def __lt__(self, other: "Value") -> bool:
        self._check_comparable(other)
        return self.data < other.data

    def __le__(self, other: "Value") -> bool:
        self._check_comparable(other)
        return self.data <= other.data

    def __gt__(self, other: "Value") -> bool:
        self._check_comparable(other)
        return self.data > other.data

    def __ge__(self, other: "Value") -> bool:
        self._check_comparable(other)
        return self.data >= other.data

    def _check_comparable(self, other: "Value"):
        if not isinstance(other, Value) or other.dtype != self.dtype:
            raise TypeError(f"Cannot compare {self.dtype.value} value with {other!r}")

    def __str__(self) -> str:
        return self.to_text()
