"""Database connection management."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Self

import duckdb

from .schema import FILE_EXTENSIONS_TABLE, FILE_INFO_TABLE, create_schema

logger = logging.getLogger(__name__)


class Database:
    """DuckDB database connection wrapper with context manager support."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self._conn: duckdb.DuckDBPyConnection | None = None

    def connect(self) -> duckdb.DuckDBPyConnection:
        if self._conn is None:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = duckdb.connect(str(self.db_path))
            create_schema(self._conn)
        return self._conn

    @property
    def conn(self) -> duckdb.DuckDBPyConnection:
        return self.connect()

    @contextmanager
    def transaction(self) -> Iterator[duckdb.DuckDBPyConnection]:
        """Run the enclosed block in one transaction.

        Commits on normal exit; rolls back and re-raises on any exception.
        """
        conn = self.conn
        conn.begin()
        try:
            yield conn
        except BaseException:
            logger.warning("Rolling back transaction on %s", self.db_path)
            conn.rollback()
            raise
        conn.commit()

    def count_rows(self, table: str) -> int:
        if table not in (FILE_INFO_TABLE, FILE_EXTENSIONS_TABLE):
            raise ValueError(f"unknown table {table!r}")
        row = self.conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()
        return row[0] if row else 0

    def close(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> Self:
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
