# backend/storefront/locks.py
"""
Named locks guarding read-modify-write cycles.

Keys:
  doc:{name}              : one persisted document
  slot:{date}:{start_time}: capacity check + order append for one slot

LocalLockManager is enough for a single worker process. RedisLockManager
shares the same keys across workers. Locks are not reentrant: never hold
a key while acquiring the same key again.
"""

import logging
import threading
from contextlib import contextmanager
from typing import ContextManager, Iterator, Protocol

from redis import Redis
from redis.exceptions import LockError, RedisError

from .errors import StorageError

logger = logging.getLogger(__name__)


class LockManager(Protocol):
    def hold(self, key: str) -> ContextManager[None]: ...


class LocalLockManager:
    def __init__(self, timeout: float = 10.0):
        self.timeout = timeout
        self._locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def _lock_for(self, key: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        lock = self._lock_for(key)
        if not lock.acquire(timeout=self.timeout):
            raise StorageError(f"Timed out waiting for lock {key}")
        try:
            yield
        finally:
            lock.release()


class RedisLockManager:
    KEY_PREFIX = "storefront:lock"

    def __init__(self, redis: Redis, timeout: float = 10.0, lease: float = 60.0):
        # timeout bounds the wait; lease is how long Redis keeps the lock
        self.redis = redis
        self.timeout = timeout
        self.lease = max(lease, timeout)

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        lock = self.redis.lock(
            f"{self.KEY_PREFIX}:{key}",
            timeout=self.lease,
            blocking_timeout=self.timeout,
        )
        try:
            acquired = lock.acquire()
        except RedisError as e:
            raise StorageError(f"Lock backend unavailable: {e}") from e
        if not acquired:
            raise StorageError(f"Timed out waiting for lock {key}")
        try:
            yield
        finally:
            try:
                lock.release()
            except LockError:
                # Expired while held; the next holder may already own it
                logger.warning("Lock %s expired before release", key)


def slot_lock_key(date: str, start_time: str) -> str:
    return f"slot:{date}:{start_time}"


def document_lock_key(name: str) -> str:
    return f"doc:{name}"
