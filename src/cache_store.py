"""
Cache backends for the Restify Documentation MCP Server
"""

import logging
import pickle
import sqlite3
import time
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

from config import config_value

logger = logging.getLogger(__name__)

_MISSING = object()


class CacheStore:
    """Key-value store with per-entry TTL"""

    def get(self, key: str, default: Any = None) -> Any:
        raise NotImplementedError

    def put(self, key: str, value: Any, ttl: int) -> bool:
        raise NotImplementedError

    def forget(self, key: str) -> bool:
        raise NotImplementedError

    def remember(self, key: str, ttl: int, producer: Callable[[], Any]) -> Any:
        """Return the stored value, or compute, store and return it"""
        value = self.get(key, _MISSING)
        if value is not _MISSING:
            return value

        value = producer()
        if value is not None:
            self.put(key, value, ttl)
        return value


class ArrayStore(CacheStore):
    """In-process store, lives as long as the server process"""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._entries: Dict[str, Tuple[Any, float]] = {}
        self._clock = clock

    def get(self, key: str, default: Any = None) -> Any:
        entry = self._entries.get(key)
        if entry is None:
            return default

        value, expires_at = entry
        if expires_at <= self._clock():
            del self._entries[key]
            return default
        return value

    def put(self, key: str, value: Any, ttl: int) -> bool:
        self._entries[key] = (value, self._clock() + ttl)
        return True

    def forget(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None


class SQLiteStore(CacheStore):
    """File-backed store so parsed documents survive server restarts"""

    def __init__(self, db_path: Path, clock: Callable[[], float] = time.time):
        self.db_path = db_path
        self._clock = clock
        self._init_database()
        self.purge_expired()

    def _init_database(self):
        """Initialize SQLite database with the cache table"""
        logger.info(f"Initializing cache database at {self.db_path}")
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS cache_entries
                (
                    key TEXT PRIMARY KEY,
                    value BLOB,
                    expires_at REAL
                )
            """)
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_cache_expires ON cache_entries(expires_at)"
            )

    def get(self, key: str, default: Any = None) -> Any:
        with sqlite3.connect(self.db_path) as conn:
            row = conn.execute(
                "SELECT value, expires_at FROM cache_entries WHERE key = ?", (key,)
            ).fetchone()

            if row is None:
                return default

            if row[1] <= self._clock():
                conn.execute("DELETE FROM cache_entries WHERE key = ?", (key,))
                return default

        try:
            return pickle.loads(row[0])
        except (pickle.UnpicklingError, AttributeError, EOFError, ImportError) as e:
            logger.error(f"Discarding unreadable cache entry {key}: {e}")
            self.forget(key)
            return default

    def put(self, key: str, value: Any, ttl: int) -> bool:
        payload = pickle.dumps(value, protocol=pickle.HIGHEST_PROTOCOL)
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("DELETE FROM cache_entries WHERE expires_at <= ?", (self._clock(),))
            conn.execute(
                """
                INSERT OR REPLACE INTO cache_entries (key, value, expires_at)
                VALUES (?, ?, ?)
            """,
                (key, sqlite3.Binary(payload), self._clock() + ttl),
            )
        return True

    def forget(self, key: str) -> bool:
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute("DELETE FROM cache_entries WHERE key = ?", (key,))
            return cursor.rowcount > 0

    def purge_expired(self) -> int:
        """Delete every expired row, returns the number removed"""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(
                "DELETE FROM cache_entries WHERE expires_at <= ?", (self._clock(),)
            )
            return cursor.rowcount


def create_store(config: Dict[str, Any], project_root: Optional[Path] = None) -> CacheStore:
    """Build the store named by ``cache.store``"""
    store_name = config_value(config, "cache.store", "array")

    if store_name == "sqlite":
        db_path = Path(config_value(config, "cache.path", ".restify_docs_cache.db"))
        if not db_path.is_absolute():
            db_path = (project_root or Path.cwd()) / db_path
        return SQLiteStore(db_path)

    if store_name != "array":
        logger.warning(f"Unknown cache store '{store_name}', using in-memory store")
    return ArrayStore()
