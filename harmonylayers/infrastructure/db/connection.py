from __future__ import annotations
from .config import get_default_timeout, get_enable_wal, get_path_config
from pathlib import Path
from contextlib import contextmanager
from collections.abc import Iterator
import sqlite3


class DatabaseError(Exception):
    """Custom exception for database connection errors."""


def apply_pragmas(
    conn: sqlite3.Connection,
    *,
    enable_wal: bool = True,
    busy_timeout_ms: int | None = None,
) -> None:
    """Apply SQLite PRAGMAs required by the layer store."""

    try:
        if enable_wal:
            conn.execute("PRAGMA journal_mode=WAL;")
        if busy_timeout_ms is not None:
            conn.execute(f"PRAGMA busy_timeout={int(busy_timeout_ms)};")
    except sqlite3.Error as exc:
        raise DatabaseError(f"Failed to apply PRAGMAs: {exc}") from exc


@contextmanager
def get_connection(
    db_path: str | Path | None = None,
    *,
    timeout: float | None = None,
    enable_wal: bool | None = None,
) -> Iterator[sqlite3.Connection]:
    """Yield a configured SQLite connection."""

    resolved_db_path = (
        Path(db_path) if db_path is not None else get_path_config()["db_path"]
    )
    timeout_value = timeout if timeout is not None else get_default_timeout()
    try:
        resolved_db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(resolved_db_path, timeout=timeout_value)
    except (OSError, sqlite3.Error) as exc:
        raise DatabaseError(f"Failed to connect to database: {exc}") from exc
    try:
        apply_pragmas(
            conn,
            enable_wal=enable_wal if enable_wal is not None else get_enable_wal(),
            busy_timeout_ms=int(timeout_value * 1000),
        )
        yield conn
    finally:
        conn.close()
