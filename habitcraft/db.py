"""
SQLite layer for HabitCraft.

A single key/value table on disk so the habit snapshot survives restarts.
"""

from __future__ import annotations

import os
import sqlite3
from contextlib import contextmanager
from typing import Optional

DB_PATH_DEFAULT = os.path.join("data", "habits.db")


def _ensure_parent_dir(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


@contextmanager
def connect(db_path: str = DB_PATH_DEFAULT):
    _ensure_parent_dir(db_path)
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()


def init_db(db_path: str = DB_PATH_DEFAULT) -> None:
    """
    Create the storage table if it doesn't exist yet.
    """
    with connect(db_path) as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS storage (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
            """
        )


def read_slot(key: str, db_path: str = DB_PATH_DEFAULT) -> Optional[str]:
    with connect(db_path) as conn:
        row = conn.execute("SELECT value FROM storage WHERE key = ?", (key,)).fetchone()
    return str(row["value"]) if row else None


def write_slot(key: str, value: str, db_path: str = DB_PATH_DEFAULT) -> None:
    """
    Overwrite the slot wholesale (insert on first write).
    """
    with connect(db_path) as conn:
        conn.execute(
            """
            INSERT INTO storage (key, value) VALUES (?, ?)
            ON CONFLICT(key) DO UPDATE SET value=excluded.value
            """,
            (key, value),
        )

