from __future__ import annotations

import sqlite3

from ..connection import DatabaseError
from .tables import SCHEMA_HARMONY_CONFIG_SQL


def ensure_schema(conn: sqlite3.Connection) -> None:
    """Create the ``harmony_config`` table if it does not exist."""

    try:
        conn.executescript(SCHEMA_HARMONY_CONFIG_SQL)
    except sqlite3.Error as exc:
        raise DatabaseError(f"Failed to apply schema: {exc}") from exc
