"""Pytest configuration and fixtures for SimpleDB tests."""

from __future__ import annotations

import pytest

from simpledb.config import Settings
from simpledb.engine import DatabaseEngine
from simpledb.logging import setup_logging
from simpledb.parser import QueryParser
from simpledb.table import Table


@pytest.fixture
def settings() -> Settings:
    """Provide default settings, independent of the cached global instance."""
    return Settings()


@pytest.fixture
def engine(settings: Settings) -> DatabaseEngine:
    """Provide a fresh, empty engine."""
    return DatabaseEngine(settings)


@pytest.fixture
def parser() -> QueryParser:
    return QueryParser()


@pytest.fixture
def users_table() -> Table:
    """A users table with three rows."""
    table = Table("users")
    table.add_column("id", "int")
    table.add_column("name", "string")
    table.add_column("age", "int")
    table.insert_row(["1", "Alice", "25"])
    table.insert_row(["2", "Bob", "30"])
    table.insert_row(["3", "Charlie", "22"])
    return table


def pytest_configure(config: pytest.Config) -> None:
    """Configure logging and custom pytest markers."""
    setup_logging("WARNING", "console")
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
