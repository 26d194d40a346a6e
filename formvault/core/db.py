"""
SQLite helpers for the persistent key/value backend.
"""

import sqlite3
from contextlib import contextmanager
from typing import Generator

from .config import DB_PATH, ensure_db_directory

STORAGE_TABLE = "storage"


@contextmanager
def get_db(db_path: str = None) -> Generator[sqlite3.Connection, None, None]:
    """Get a SQLite database connection."""
    conn = sqlite3.connect(db_path or DB_PATH)
    try:
        yield conn
    finally:
        conn.close()


def init_db(db_path: str = None):
    """Initialize the database with the storage table."""
    ensure_db_directory(db_path)

    with get_db(db_path) as conn:
        cursor = conn.cursor()

        # Plain string-keyed, string-valued table; rowid keeps insertion order
        cursor.execute(f'''
            CREATE TABLE IF NOT EXISTS {STORAGE_TABLE} (
                key TEXT PRIMARY KEY NOT NULL,
                value TEXT NOT NULL
            )
        ''')

        conn.commit()


def health_check(db_path: str = None):
    """Check database health."""
    try:
        with get_db(db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT name FROM sqlite_master WHERE type='table';")
            table_names = [table[0] for table in cursor.fetchall()]
            return STORAGE_TABLE in table_names
    except sqlite3.Error:
        return False
