"""
Backing stores for ScopedStore.
A backing store is a flat, string-keyed, string-valued map with no
transactional guarantees across keys.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from .db import STORAGE_TABLE, get_db, init_db


class IKeyValueStore(ABC):
    """Abstract interface for the opaque key/value store."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None."""
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete key. Missing keys are ignored."""
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        """Return every key currently held by the store."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove all keys from the store."""
        pass


class InMemoryKeyValueStore(IKeyValueStore):
    """Dict-backed store, useful for tests and short-lived processes."""

    def __init__(self, initial: Dict[str, str] = None):
        self._items = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()


class SQLiteKeyValueStore(IKeyValueStore):
    """SQLite-backed store persisting every key as one row."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        init_db(db_path)

    def get_item(self, key: str) -> Optional[str]:
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(f"SELECT value FROM {STORAGE_TABLE} WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row[0] if row else None

    def set_item(self, key: str, value: str) -> None:
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            # Upsert keeps the original rowid, so enumeration order is stable
            cursor.execute(
                f"INSERT INTO {STORAGE_TABLE} (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value)
            )
            conn.commit()

    def remove_item(self, key: str) -> None:
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(f"DELETE FROM {STORAGE_TABLE} WHERE key = ?", (key,))
            conn.commit()

    def keys(self) -> List[str]:
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(f"SELECT key FROM {STORAGE_TABLE} ORDER BY rowid")
            return [row[0] for row in cursor.fetchall()]

    def clear(self) -> None:
        with get_db(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(f"DELETE FROM {STORAGE_TABLE}")
            conn.commit()
