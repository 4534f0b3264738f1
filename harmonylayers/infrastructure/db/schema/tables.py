from __future__ import annotations

SCHEMA_HARMONY_CONFIG_SQL = """
CREATE TABLE IF NOT EXISTS harmony_config (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL UNIQUE,
    config TEXT NOT NULL
);
"""
