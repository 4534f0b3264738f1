from __future__ import annotations

import sqlite3

from harmonylayers.domain.errors import LayerNotFoundError
from harmonylayers.domain.models import Layer

from ..schema import ensure_schema
from .base import BaseRepository


class DuplicateLayerTitleError(ValueError):
    """Raised when inserting a layer whose title already has a row."""

    def __init__(self, title: str) -> None:
        self.title = title
        super().__init__(f"Layer title '{title}' already exists")


class LayerRepository(BaseRepository):
    def __init__(self, conn: sqlite3.Connection) -> None:
        super().__init__(conn)
        ensure_schema(self.conn)

    def list_titles(self, *, non_empty_only: bool = True) -> list[str]:
        if non_empty_only:
            return self._fetch_column(
                "SELECT title FROM harmony_config WHERE LENGTH(config) > 0 ORDER BY id"
            )
        return self._fetch_column("SELECT title FROM harmony_config ORDER BY id")

    def list(self) -> list[Layer]:
        rows = self._fetch_all_as_dicts(
            "SELECT title, config FROM harmony_config WHERE LENGTH(config) > 0 ORDER BY id"
        )
        return [Layer(title=row["title"], config=row["config"]) for row in rows]

    def get(self, title: str) -> Layer | None:
        row = self._fetch_one_as_dict(
            "SELECT title, config FROM harmony_config WHERE title = ?", (title,)
        )
        if row is None:
            return None
        return Layer(title=row["title"], config=row["config"])

    def add(self, title: str, config: str) -> None:
        try:
            self._execute(
                "INSERT INTO harmony_config (title, config) VALUES (?, ?)",
                (title, config),
            )
        except sqlite3.IntegrityError as exc:
            self.conn.rollback()
            raise DuplicateLayerTitleError(title) from exc
        self.conn.commit()

    def replace(self, title: str, config: str) -> None:
        cursor = self._execute(
            "UPDATE harmony_config SET config = ? WHERE title = ?", (config, title)
        )
        self.conn.commit()
        if cursor.rowcount == 0:
            raise LayerNotFoundError(f"Layer '{title}' does not exist")
