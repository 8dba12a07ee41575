"""
Text rendering of query results as bordered grids.
"""

from typing import Iterable, List, Sequence

from .table import Row, Table

MIN_COLUMN_WIDTH = 8


def render_grid(headers: Sequence[str], rows: Sequence[Sequence[str]], footer: str,
                min_width: int = MIN_COLUMN_WIDTH) -> str:
    """
    Render a header line, cell rows and a footer inside a `+`/`-`/`|` border.

    Each column is as wide as its header, its longest cell, or min_width,
    whichever is largest.
    """
    widths = []
    for i, header in enumerate(headers):
        longest = max((len(row[i]) for row in rows), default=0)
        widths.append(max(len(header), longest, min_width))

    separator = "+" + "".join("-" * (width + 2) + "+" for width in widths)

    def line(cells: Sequence[str]) -> str:
        return "|" + "".join(f" {cell:<{width}} |" for cell, width in zip(cells, widths))

    lines = [separator, line(headers), separator]
    lines.extend(line(row) for row in rows)
    lines.append(separator)
    lines.append(footer)
    return "\n".join(lines)


def render_rows(headers: Sequence[str], rows: Sequence[Row],
                min_width: int = MIN_COLUMN_WIDTH) -> str:
    """Render projected rows with a `(<n> rows)` footer."""
    cells = [[value.to_text() for value in row] for row in rows]
    return render_grid(headers, cells, f"({len(rows)} rows)", min_width)


def render_tables(tables: Iterable[Table], min_width: int = MIN_COLUMN_WIDTH) -> str:
    """Render the SHOW TABLES listing."""
    cells: List[List[str]] = [[table.name, str(table.size())] for table in tables]
    return render_grid(["Table Name", "Rows"], cells, f"({len(cells)} tables)", min_width)


def render_description(table: Table, min_width: int = MIN_COLUMN_WIDTH) -> str:
    """Render the DESCRIBE view of a table's schema."""
    columns = table.describe()
    cells = [[column.name, column.dtype.value] for column in columns]
    footer = f"({len(columns)} columns, {table.size()} rows)"
    return f"Table: {table.name}\n" + render_grid(["Column Name", "Type"], cells, footer, min_width)
