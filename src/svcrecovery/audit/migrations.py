"""SQLite CREATE TABLE statements."""

from __future__ import annotations

TABLES: list[str] = [
    """
    CREATE TABLE IF NOT EXISTS attribute_changes (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        service TEXT NOT NULL,
        attribute TEXT NOT NULL,
        old_value TEXT,
        new_value TEXT,
        dry_run INTEGER DEFAULT 0,
        recorded_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS mutations (
        id TEXT PRIMARY KEY,
        service TEXT NOT NULL,
        applied INTEGER NOT NULL,
        dry_run INTEGER DEFAULT 0,
        arguments TEXT DEFAULT '[]',
        output TEXT DEFAULT '',
        executed_at TEXT NOT NULL
    )
    """,
]
