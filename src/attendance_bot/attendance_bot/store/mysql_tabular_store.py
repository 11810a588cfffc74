from __future__ import annotations

from typing import Mapping, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, quote_identifier
from .schema import columns_for
from .tabular import TableRow, TableSnapshot, TabularStore

ROW_KEY = "row_key"


class MySQLTabularStore(TabularStore):
    """Each logical table is a MySQL table of text cells plus an auto-increment row key."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _column(self, table: str, column: str) -> str:
        if column not in columns_for(table):
            raise KeyError(f"Unknown column {column!r} for table {table!r}")
        return quote_identifier(column)

    def get_all(self, table: str) -> TableSnapshot:
        header = columns_for(table)
        select = ", ".join(quote_identifier(c) for c in (ROW_KEY, *header))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {select} FROM {quote_identifier(table)} ORDER BY {ROW_KEY}")
            rows = fetchall(cur)
        return TableSnapshot(
            header=header,
            rows=[
                TableRow(key=int(r[ROW_KEY]), values={c: r.get(c) for c in header})
                for r in rows
            ],
        )

    def append(self, table: str, values: Mapping[str, Optional[str]]) -> int:
        columns = [c for c in values if c in columns_for(table)]
        if len(columns) != len(values):
            unknown = sorted(set(values) - set(columns))
            raise KeyError(f"Unknown columns {unknown!r} for table {table!r}")

        names = ", ".join(quote_identifier(c) for c in columns)
        placeholders = ", ".join(["%s"] * len(columns))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO {quote_identifier(table)} ({names}) VALUES ({placeholders})",
                tuple(values[c] for c in columns),
            )
            return int(cur.lastrowid)

    def update_cell(self, table: str, row_key: int, column: str, value: Optional[str]) -> bool:
        col = self._column(table, column)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE {quote_identifier(table)} SET {col}=%s WHERE {ROW_KEY}=%s",
                (value, int(row_key)),
            )
            return cur.rowcount > 0
