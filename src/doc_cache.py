"""
Namespaced memoization layer over a cache store
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from cache_store import CacheStore
from config import config_value

logger = logging.getLogger(__name__)

KEYS_ENTRY = "_keys"


class DocCache:
    """Prefixes every key and tracks them so flush() only touches our entries"""

    def __init__(self, store: CacheStore, config: Dict[str, Any]):
        self.store = store
        self.key_prefix = config_value(config, "cache.key_prefix", "restify_mcp")
        self.ttl = int(config_value(config, "cache.ttl", 3600))
        self.enabled = bool(config_value(config, "cache.enabled", True))

    def remember(self, key: str, producer: Callable[[], Any]) -> Any:
        if not self.enabled:
            return producer()

        return self.store.remember(self._build_key(key), self.ttl, producer)

    def get(self, key: str, default: Any = None) -> Any:
        if not self.enabled:
            return default

        return self.store.get(self._build_key(key), default)

    def put(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        if not self.enabled:
            return False

        return self.store.put(self._build_key(key), value, self.ttl if ttl is None else ttl)

    def forget(self, key: str) -> bool:
        if not self.enabled:
            return False

        return self.store.forget(self._build_key(key))

    def flush(self) -> bool:
        if not self.enabled:
            return False

        keys_key = self._full_key(KEYS_ENTRY)
        tracked = self.store.get(keys_key, [])
        for full_key in tracked:
            self.store.forget(full_key)

        logger.info(f"Flushed {len(tracked)} cache entries under '{self.key_prefix}'")
        return self.store.forget(keys_key)

    def tracked_keys(self) -> List[str]:
        if not self.enabled:
            return []
        return list(self.store.get(self._full_key(KEYS_ENTRY), []))

    def _full_key(self, key: str) -> str:
        return f"{self.key_prefix}.{key}"

    def _build_key(self, key: str) -> str:
        full_key = self._full_key(key)

        # The side-index is written straight to the store, never through here
        if key != KEYS_ENTRY:
            keys_key = self._full_key(KEYS_ENTRY)
            tracked = self.store.get(keys_key, [])
            if full_key not in tracked:
                self.store.put(keys_key, list(tracked) + [full_key], self.ttl)

        return full_key
