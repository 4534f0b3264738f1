"""Base repository class with shared database query helpers."""

from __future__ import annotations

import sqlite3
from typing import Any


class BaseRepository:
    """Base class for repository implementations.

    Provides shared helper methods for executing queries and converting
    results to dictionaries.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        """Initialize repository with a database connection.

        Args:
            conn: SQLite database connection
        """
        self.conn = conn

    def _fetch_all_as_dicts(
        self, query: str, params: tuple[Any, ...] | None = None
    ) -> list[dict[str, Any]]:
        """Execute query and return all rows as dictionaries.

        Args:
            query: SQL query string
            params: Query parameters (optional)

        Returns:
            List of dictionaries with column names as keys
        """
        cur = self.conn.execute(query, params or ())
        columns = [c[0] for c in cur.description]
        return [dict(zip(columns, row)) for row in cur.fetchall()]

    def _fetch_one_as_dict(
        self, query: str, params: tuple[Any, ...] | None = None
    ) -> dict[str, Any] | None:
        """Execute query and return first row as dictionary, or None if no rows."""
        cur = self.conn.execute(query, params or ())
        row = cur.fetchone()
        if not row:
            return None
        columns = [c[0] for c in cur.description]
        return dict(zip(columns, row))

    def _fetch_column(
        self, query: str, params: tuple[Any, ...] | None = None
    ) -> list[Any]:
        """Execute query and return the first column of every row."""
        cur = self.conn.execute(query, params or ())
        return [row[0] for row in cur.fetchall()]

    def _execute(
        self, query: str, params: tuple[Any, ...] | None = None
    ) -> sqlite3.Cursor:
        """Execute query and return cursor for custom processing.

        Example:
            >>> cur = self._execute("UPDATE harmony_config SET config = ? WHERE title = ?", ("", "old"))
            >>> cur.rowcount
            1
        """
        return self.conn.execute(query, params or ())
