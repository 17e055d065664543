"""
Per-session exchange serialization.

Holds one asyncio.Lock per session id so that two submissions to the same
session cannot interleave their load and commit. Locks are process-local and
dropped once no exchange holds or waits on them.

Dependencies: asyncio
System role: Single-writer guard around the session load/commit pair
"""

import asyncio
from collections.abc import Hashable


class SessionLockRegistry:
    """Registry of per-session locks with reference counting."""

    def __init__(self) -> None:
        self._locks: dict[Hashable, asyncio.Lock] = {}
        self._holders: dict[Hashable, int] = {}

    async def acquire(self, key: Hashable) -> None:
        """Wait until the lock for ``key`` is held by the caller."""
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._holders[key] = self._holders.get(key, 0) + 1
        try:
            await lock.acquire()
        except BaseException:
            self._forget(key)
            raise

    def release(self, key: Hashable) -> None:
        """Release the lock for ``key``; no-op if it is not held."""
        lock = self._locks.get(key)
        if lock is None or not lock.locked():
            return
        lock.release()
        self._forget(key)

    def is_locked(self, key: Hashable) -> bool:
        lock = self._locks.get(key)
        return lock is not None and lock.locked()

    def __len__(self) -> int:
        return len(self._locks)

    def _forget(self, key: Hashable) -> None:
        remaining = self._holders.get(key, 1) - 1
        if remaining <= 0:
            self._holders.pop(key, None)
            self._locks.pop(key, None)
        else:
            self._holders[key] = remaining
