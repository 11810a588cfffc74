from __future__ import annotations

from typing import Iterable

import mysql.connector

from ..store.schema import TABLES
from .connection import DBConfig
from .mysql_base import quote_identifier


def _create_table_sql(table: str, columns: Iterable[str]) -> str:
    cols = ",\n    ".join(f"{quote_identifier(c)} TEXT NULL" for c in columns)
    return (
        f"CREATE TABLE IF NOT EXISTS {quote_identifier(table)} (\n"
        "    `row_key` INT AUTO_INCREMENT PRIMARY KEY,\n"
        f"    {cols}\n"
        ") CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
    )


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = mysql.connector.connect(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS {quote_identifier(target.database)} "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict) -> None:
    """Create every logical table (idempotent: CREATE IF NOT EXISTS)."""
    target = DBConfig.from_dict(db_config)
    ensure_database_exists(db_config)

    conn = mysql.connector.connect(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        database=target.database,
        use_pure=True,
    )
    try:
        cur = conn.cursor()
        for table, columns in TABLES.items():
            cur.execute(_create_table_sql(table, columns))
        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    target = DBConfig.from_dict(db_config)
    conn = mysql.connector.connect(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        database=target.database,
        use_pure=True,
    )
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
