"""Integration tests for DatabaseEngine."""

from __future__ import annotations

import pytest

from simpledb.engine import DatabaseEngine
from simpledb.errors import (
    DuplicateColumn,
    ErrorKind,
    InvalidValue,
    MalformedQuery,
    SchemaMismatch,
    TableAlreadyExists,
    TableNotFound,
)
from simpledb.parser import QueryType
from simpledb.types import Column, DataType, Value


@pytest.fixture
def users_engine(engine: DatabaseEngine) -> DatabaseEngine:
    """Engine with a users table holding one row."""
    assert engine.execute("CREATE TABLE users (id int, name string, age int)").ok
    assert engine.execute("INSERT INTO users VALUES (1, Alice, 25)").ok
    return engine


def cell_texts(grid: str) -> list[list[str]]:
    """Extract body cells from a rendered grid."""
    lines = grid.splitlines()
    borders = [i for i, line in enumerate(lines) if line.startswith("+")]
    body = lines[borders[1] + 1:borders[2]]
    return [[cell.strip() for cell in line.strip("|").split("|")] for line in body]


@pytest.mark.integration
class TestScenarios:
    """End-to-end command sequences."""

    def test_create_table(self, engine: DatabaseEngine) -> None:
        result = engine.execute("CREATE TABLE users (id int, name string, age int)")

        assert result.ok
        assert result.query_type is QueryType.CREATE_TABLE
        assert result.text == "Table 'users' created successfully."
        table = engine.get_table("users")
        assert table.size() == 0
        assert len(table.describe()) == 3

    def test_insert(self, users_engine: DatabaseEngine) -> None:
        assert users_engine.get_table("users").size() == 1

        result = users_engine.execute("INSERT INTO users VALUES (2, Bob, 30)")

        assert result.ok
        assert result.text == "1 row inserted."
        assert users_engine.get_table("users").size() == 2

    def test_select_where(self, users_engine: DatabaseEngine) -> None:
        result = users_engine.execute("SELECT * FROM users WHERE age > 20")

        assert result.ok
        assert result.columns == ["id", "name", "age"]
        assert [[v.data for v in row] for row in result.rows] == [[1, "Alice", 25]]
        assert result.text.endswith("(1 rows)")

    def test_insert_wrong_arity(self, users_engine: DatabaseEngine) -> None:
        result = users_engine.execute("INSERT INTO users VALUES (1, Alice)")

        assert not result.ok
        assert result.error is ErrorKind.SCHEMA_MISMATCH
        assert users_engine.get_table("users").size() == 1

    def test_select_unknown_column(self, users_engine: DatabaseEngine) -> None:
        """Filtering on an unknown column is an empty result, not an error."""
        result = users_engine.execute("SELECT * FROM users WHERE bogus = 5")

        assert result.ok
        assert result.error is None
        assert result.rows == []
        assert result.empty
        assert result.text.endswith("(0 rows)")

    def test_describe(self, users_engine: DatabaseEngine) -> None:
        columns = users_engine.describe_table("users")
        assert [(column.name, column.dtype.value) for column in columns] == [("id", "int"), ("name", "string"), ("age", "int")]

        result = users_engine.execute("DESCRIBE users")
        assert result.ok
        assert [[v.data for v in row] for row in result.rows] == [["id", "int"], ["name", "string"], ["age", "int"]]
        assert result.text.startswith("Table: users")

    def test_drop_and_recreate(self, users_engine: DatabaseEngine) -> None:
        assert users_engine.execute("DROP TABLE users").text == "Table 'users' dropped successfully."

        result = users_engine.execute("CREATE TABLE users (id int)")

        assert result.ok
        table = users_engine.get_table("users")
        assert table.size() == 0
        assert table.describe() == [Column("id", DataType.INT)]


@pytest.mark.integration
class TestExecuteErrors:
    """execute() reports failures as results and leaves the catalog unchanged."""

    @pytest.mark.parametrize(
        "query, kind",
        [
            ("SELECT * FROM ghosts", ErrorKind.TABLE_NOT_FOUND),
            ("INSERT INTO ghosts VALUES (1)", ErrorKind.TABLE_NOT_FOUND),
            ("DROP TABLE ghosts", ErrorKind.TABLE_NOT_FOUND),
            ("DESC ghosts", ErrorKind.TABLE_NOT_FOUND),
            ("CREATE TABLE users (x int)", ErrorKind.TABLE_ALREADY_EXISTS),
            ("CREATE TABLE other (x int, x string)", ErrorKind.DUPLICATE_COLUMN),
            ("INSERT INTO users VALUES (2, Bob, old)", ErrorKind.INVALID_VALUE),
            ("SELECT * FROM users WHERE age > old", ErrorKind.INVALID_VALUE),
            ("INSERT INTO users VALUES (1, Alice)", ErrorKind.SCHEMA_MISMATCH),
            ("UPSERT INTO users VALUES (1)", ErrorKind.MALFORMED_QUERY),
            ("", ErrorKind.MALFORMED_QUERY),
        ],
    )
    def test_error_kinds(self, users_engine: DatabaseEngine, query: str, kind: ErrorKind) -> None:
        result = users_engine.execute(query)

        assert result.status == "ERROR"
        assert result.error is kind
        assert result.message
        assert users_engine.list_tables() == ["users"]
        assert users_engine.get_table("users").size() == 1

    def test_duplicate_column_does_not_create_table(self, engine: DatabaseEngine) -> None:
        engine.execute("CREATE TABLE t (a int, a int)")
        assert not engine.has_table("t")
        assert engine.table_count() == 0

    def test_invalid_literal_on_empty_table(self, engine: DatabaseEngine) -> None:
        """An empty table is an empty selection, whatever the literal."""
        engine.execute("CREATE TABLE users (id int, age int)")

        result = engine.execute("SELECT * FROM users WHERE age > twenty")

        assert result.ok
        assert result.empty
        assert result.text.endswith("(0 rows)")

    def test_engine_usable_after_error(self, users_engine: DatabaseEngine) -> None:
        users_engine.execute("SELECT * FROM nowhere")
        assert users_engine.execute("INSERT INTO users VALUES (2, Bob, 30)").ok
        assert users_engine.get_table("users").size() == 2


@pytest.mark.integration
class TestCommandApi:
    """Direct catalog operations raise typed errors."""

    def test_create_table_with_columns(self, engine: DatabaseEngine) -> None:
        table = engine.create_table("products", [("id", "int"), Column("price", DataType.DOUBLE)])

        assert engine.has_table("products")
        assert table.describe()[1] == Column("price", DataType.DOUBLE)

    def test_create_existing(self, engine: DatabaseEngine) -> None:
        engine.create_table("t")
        with pytest.raises(TableAlreadyExists):
            engine.create_table("t")

    def test_create_unknown_type(self, engine: DatabaseEngine) -> None:
        with pytest.raises(MalformedQuery):
            engine.create_table("t", [("id", "int"), ("a", "float")])
        assert not engine.has_table("t")

    def test_create_duplicate_column(self, engine: DatabaseEngine) -> None:
        with pytest.raises(DuplicateColumn):
            engine.create_table("t", [("a", "int"), ("a", "bool")])
        assert not engine.has_table("t")

    def test_missing_table(self, engine: DatabaseEngine) -> None:
        for call in (
            lambda: engine.get_table("x"),
            lambda: engine.drop_table("x"),
            lambda: engine.insert_into("x", ["1"]),
            lambda: engine.select("x"),
            lambda: engine.describe_table("x"),
        ):
            with pytest.raises(TableNotFound):
                call()

    def test_insert_errors(self, engine: DatabaseEngine) -> None:
        engine.create_table("t", [("a", "int")])
        with pytest.raises(SchemaMismatch):
            engine.insert_into("t", ["1", "2"])
        with pytest.raises(InvalidValue):
            engine.insert_into("t", ["x"])
        assert engine.get_table("t").is_empty()

    def test_list_tables_sorted(self, engine: DatabaseEngine) -> None:
        for name in ["zeta", "alpha", "mid"]:
            engine.create_table(name, [("id", "int")])

        assert engine.list_tables() == ["alpha", "mid", "zeta"]
        assert engine.table_count() == 3

    def test_select_with_clause_text(self, users_engine: DatabaseEngine) -> None:
        users_engine.insert_into("users", ["2", "Bob", "30"])
        users_engine.insert_into("users", ["3", "Cy", "19"])

        result = users_engine.select("users", ["name"], "age >= 25")

        assert result.columns == ["name"]
        assert [row[0].data for row in result.rows] == ["Alice", "Bob"]

    def test_select_malformed_clause_returns_everything(self, users_engine: DatabaseEngine) -> None:
        users_engine.insert_into("users", ["2", "Bob", "30"])
        assert len(users_engine.select("users", where="age>100").rows) == 2

    def test_show_tables(self, users_engine: DatabaseEngine) -> None:
        text = users_engine.show_tables()
        assert "| users      | 1        |" in text
        assert text.endswith("(1 tables)")

        result = users_engine.execute("SHOW TABLES")
        assert result.text == text
        assert result.rows == [(Value(DataType.STRING, "users"), Value(DataType.INT, 1))]

    def test_database_info(self, users_engine: DatabaseEngine) -> None:
        users_engine.create_table("empty", [("id", "int")])
        assert users_engine.database_info() == {"tables": 2, "rows": 1}

    def test_get_table_info(self, users_engine: DatabaseEngine) -> None:
        info = users_engine.get_table_info("users")
        assert info["row_count"] == 1
        assert info["schema"][2] == {"name": "age", "type": "int"}


@pytest.mark.integration
class TestRoundTrip:
    """Rendered cells parse back to the stored values."""

    def test_render_then_parse(self, engine: DatabaseEngine) -> None:
        engine.execute("CREATE TABLE products (id int, name string, price double, in_stock bool)")
        rows = [
            ["1", "Laptop", "999.99", "true"],
            ["2", "Mouse", "25.5", "false"],
            ["-3", "Cable", "0.1", "1"],
        ]
        for row in rows:
            assert engine.execute(f"INSERT INTO products VALUES ({', '.join(row)})").ok

        result = engine.execute("SELECT * FROM products")
        columns = engine.describe_table("products")

        for cells, stored in zip(cell_texts(result.text), result.rows):
            for text, column, value in zip(cells, columns, stored):
                if column.dtype is not DataType.STRING:
                    assert Value.parse(text, column.dtype) == value

    def test_result_to_dict(self, users_engine: DatabaseEngine) -> None:
        data = users_engine.execute("SELECT name, age FROM users").to_dict()

        assert data["status"] == "OK"
        assert data["type"] == "SELECT"
        assert data["columns"] == ["name", "age"]
        assert data["rows"] == [["Alice", 25]]
