"""
In-memory TTL cache for API client reads.

Entries expire after a fixed TTL and the whole cache is dropped on any
write; there is no per-entity invalidation.
"""
from typing import Optional, Callable, Any
import logging
import time

logger = logging.getLogger(__name__)


class ResponseCache:
    """In-memory cache with TTL support and wholesale invalidation."""

    def __init__(self, ttl_seconds: float = 30, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._cache: dict = {}
        self._stored_at: dict = {}

    def get(self, key: str) -> Optional[Any]:
        """Get value from cache if not expired."""
        if key in self._cache:
            if self._clock() - self._stored_at[key] < self.ttl_seconds:
                logger.debug(f"Cache hit: {key}")
                return self._cache[key]
            # Expired
            del self._cache[key]
            del self._stored_at[key]
        logger.debug(f"Cache miss: {key}")
        return None

    def set(self, key: str, value: Any):
        """Store value with the current timestamp."""
        self._cache[key] = value
        self._stored_at[key] = self._clock()

    def clear(self):
        """Clear entire cache."""
        if self._cache:
            logger.debug(f"Cache cleared ({len(self._cache)} entries)")
        self._cache.clear()
        self._stored_at.clear()

    def stats(self) -> dict:
        """Get cache statistics."""
        now = self._clock()
        valid = sum(1 for ts in self._stored_at.values() if now - ts < self.ttl_seconds)
        return {
            "total_keys": len(self._cache),
            "valid_keys": valid,
            "expired_keys": len(self._cache) - valid,
        }
