import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Hashable


class TenantLocks:
    """
    Process-local advisory locks keyed by tenant id or invitation token.

    Owner-count checks, pending-invitation lookups and the writes that
    follow them must not interleave for the same key. On PostgreSQL the
    row lock taken inside the unit of work covers other processes too.
    SQLite ignores ``FOR UPDATE``, so there these locks are the only
    serialization: run a single API worker and do not mutate memberships
    from a second process at the same time.
    """

    def __init__(self):
        self._locks: Dict[Hashable, asyncio.Lock] = {}
        self._holders: Dict[Hashable, int] = {}

    @asynccontextmanager
    async def hold(self, key: Hashable) -> AsyncIterator[None]:
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._holders[key] = self._holders.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._holders[key] -= 1
            if self._holders[key] == 0:
                del self._holders[key]
                del self._locks[key]

    def is_locked(self, key: Hashable) -> bool:
        lock = self._locks.get(key)
        return lock is not None and lock.locked()
