# eduassist_analytics/core/locks.py
"""Per-class serialization so two rollups never race on the same snapshot row."""
import asyncio
import contextlib
import logging
from typing import AsyncIterator, Dict, Optional
from uuid import UUID

import redis.asyncio as redis

from .config import Settings, settings
from .exceptions import ClassLockTimeout

logger = logging.getLogger(__name__)

LOCK_PREFIX = "class_analytics:lock"
# Extra lifetime on top of the class deadline before a Redis lock expires
LOCK_TTL_MARGIN_SECONDS = 30.0


class ClassLockManager:
    """Hands out one lock per class id.

    Without a Redis URL the locks are process-local ``asyncio.Lock`` objects,
    which serializes overlapping HTTP-triggered runs inside one server. With
    Redis configured the lock is shared by every worker talking to it.

    ``timeout`` bounds the wait to acquire; ``ttl`` is how long a Redis lock
    lives if its holder dies and defaults to ``timeout``.
    """

    def __init__(self, redis_url: Optional[str] = None, timeout: float = 120.0, ttl: Optional[float] = None):
        self.redis_url = redis_url
        self.timeout = timeout
        self.ttl = ttl or timeout
        self.redis: Optional[redis.Redis] = None
        self._local_locks: Dict[str, asyncio.Lock] = {}

    @classmethod
    def from_settings(cls, config: Settings) -> "ClassLockManager":
        ttl = max(config.rollup_lock_timeout_seconds, config.rollup_class_timeout_seconds)
        return cls(
            config.redis_url,
            timeout=config.rollup_lock_timeout_seconds,
            ttl=ttl + LOCK_TTL_MARGIN_SECONDS,
        )

    async def connect(self):
        """Initialize Redis connection."""
        if self.redis_url and not self.redis:
            self.redis = redis.from_url(self.redis_url, encoding="utf-8")
            logger.info("Class rollup locks backed by Redis")

    async def disconnect(self):
        """Close Redis connection."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None

    @staticmethod
    def key_for(class_id: UUID) -> str:
        return f"{LOCK_PREFIX}:{class_id}"

    @contextlib.asynccontextmanager
    async def hold(self, class_id: UUID) -> AsyncIterator[None]:
        key = self.key_for(class_id)
        if self.redis_url:
            await self.connect()
            lock = self.redis.lock(key, timeout=self.ttl, blocking_timeout=self.timeout)
            if not await lock.acquire():
                raise ClassLockTimeout(class_id, self.timeout)
            try:
                yield
            finally:
                await lock.release()
            return

        lock = self._local_locks.setdefault(key, asyncio.Lock())
        try:
            await asyncio.wait_for(lock.acquire(), timeout=self.timeout)
        except asyncio.TimeoutError:
            raise ClassLockTimeout(class_id, self.timeout) from None
        try:
            yield
        finally:
            lock.release()


# Global lock manager shared by every rollup started in this process
lock_manager = ClassLockManager.from_settings(settings)
