"""Key-value local cache persisted in a SQL table.

Each entity type lives under one namespaced key holding a JSON array or
object. The cache is the offline fallback and the write-through copy of the
remote document store.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from sqlalchemy import delete
from sqlalchemy.orm import Session, sessionmaker

from storefront.core.config import settings
from storefront.models.cache_entry import CacheEntry

logger = logging.getLogger(__name__)

MENU_KEY: str = "amma_menu_local"
ORDERS_KEY: str = "amma_orders_local"
SETTINGS_KEY: str = "amma_settings_local"
ANNOUNCEMENTS_KEY: str = "amma_announcements_local"
VIDEOS_KEY: str = "amma_video_local"

ENTITY_KEYS: tuple[str, ...] = (MENU_KEY, ORDERS_KEY, SETTINGS_KEY, ANNOUNCEMENTS_KEY, VIDEOS_KEY)


class StorageQuotaExceededError(Exception):
    """Raised when a cached value is larger than the configured quota."""

    def __init__(self, key: str, size: int, limit: int) -> None:
        super().__init__(f"Local storage full: {key} needs {size} bytes, limit is {limit}")
        self.key = key
        self.size = size
        self.limit = limit


class LocalCacheStore:
    """JSON values under string keys, one row per key."""

    def __init__(self, session_factory: sessionmaker[Session], *, max_bytes: int | None = None) -> None:
        self._session_factory = session_factory
        self._max_bytes = settings.local_cache_max_bytes if max_bytes is None else max_bytes

    def read(self, key: str) -> Any | None:
        """Return the decoded value for key, or None when absent."""
        with self._session_factory() as db:
            entry: CacheEntry | None = db.get(CacheEntry, key)
            if entry is None:
                return None
            raw = entry.value
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Discarding unreadable cache entry %s", key)
            return None

    def write(self, key: str, value: Any) -> None:
        """Replace the value stored under key.

        Raises:
            StorageQuotaExceededError: when the serialized value exceeds the quota.
        """
        payload = json.dumps(value, ensure_ascii=False)
        size = len(payload.encode("utf-8"))
        if size > self._max_bytes:
            logger.warning("Failed to save to %s: %s bytes exceeds quota of %s", key, size, self._max_bytes)
            raise StorageQuotaExceededError(key, size, self._max_bytes)

        with self._session_factory() as db:
            entry: CacheEntry | None = db.get(CacheEntry, key)
            if entry is None:
                db.add(CacheEntry(key=key, value=payload))
            else:
                entry.value = payload
            db.commit()

    def remove(self, key: str) -> None:
        with self._session_factory() as db:
            db.execute(delete(CacheEntry).where(CacheEntry.key == key))
            db.commit()

    def clear(self) -> None:
        """Remove every entity key."""
        with self._session_factory() as db:
            db.execute(delete(CacheEntry).where(CacheEntry.key.in_(ENTITY_KEYS)))
            db.commit()
        logger.info("Local cache cleared")
