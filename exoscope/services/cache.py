import logging
import threading
import time
from collections import OrderedDict
from typing import Any, Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

_MISSING = object()


class ResultCache:
    """In-memory cache of computed results keyed by a fingerprint string.

    ``capacity=None`` keeps every entry (no eviction); otherwise the least recently
    used entry is dropped once the capacity is exceeded. ``ttl_seconds=None`` disables
    expiry. ``get_or_compute`` is single-flight: concurrent callers with the same key
    wait for the first computation and reuse its result.
    """

    def __init__(self, capacity: Optional[int] = None, ttl_seconds: Optional[float] = None,
                 clock: Callable[[], float] = time.monotonic):
        if capacity is not None and capacity < 1:
            raise ValueError("capacity must be a positive integer or None")
        if ttl_seconds is not None and ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive or None")
        self.capacity = capacity
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: "OrderedDict[str, Tuple[float, Any]]" = OrderedDict()
        self._lock = threading.Lock()
        self._key_locks: Dict[str, threading.Lock] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self._lookup(key) is not _MISSING

    def _lookup(self, key: str) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return _MISSING
            stored_at, value = entry
            if self.ttl_seconds is not None and self._clock() - stored_at > self.ttl_seconds:
                del self._entries[key]
                logger.debug(f"Expired cache entry for key: {key}")
                return _MISSING
            self._entries.move_to_end(key)
            return value

    def get(self, key: str, default: Any = None) -> Any:
        value = self._lookup(key)
        return default if value is _MISSING else value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = (self._clock(), value)
            self._entries.move_to_end(key)
            if self.capacity is not None:
                while len(self._entries) > self.capacity:
                    evicted, _ = self._entries.popitem(last=False)
                    logger.debug(f"Evicted cache entry for key: {evicted}")

    def get_or_compute(self, key: str, compute: Callable[[], Any]) -> Any:
        """Return the cached value for ``key`` or compute, store and return it"""
        value = self._lookup(key)
        if value is not _MISSING:
            with self._lock:
                self.hits += 1
            logger.debug(f"Cache hit for key: {key}")
            return value

        with self._lock:
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        with key_lock:
            # another caller may have finished while we waited
            value = self._lookup(key)
            with self._lock:
                if value is not _MISSING:
                    self.hits += 1
                else:
                    self.misses += 1
            if value is not _MISSING:
                return value

            logger.debug(f"Cache miss for key: {key}")
            try:
                value = compute()
                try:
                    self.set(key, value)
                except Exception as e:
                    logger.warning(f"Error caching result for key {key}: {e}")
                return value
            finally:
                with self._lock:
                    self._key_locks.pop(key, None)

    def clear(self) -> int:
        """Drop every entry, returning how many were removed"""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.info(f"Cleared {count} cached results")
        return count
