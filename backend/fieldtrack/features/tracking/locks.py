"""
Per-session serialization.

Recording a fix is read total -> add increment -> write total. Two fixes
for the same session processed in parallel would lose an update, so every
write to a session's distance goes through `session_locks.hold(session_id)`.

Scope is one process. Across processes the guarded UPDATE in
DutySessionRepository is what rejects a stale write.
"""

import asyncio
from contextlib import asynccontextmanager


class SessionLockRegistry:
    """
    asyncio.Lock per duty session, created on demand.

    A lock is dropped again once nobody holds or waits for it, so the
    registry does not grow with the number of sessions ever seen.
    """

    def __init__(self):
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, session_id: str):
        """Hold the session's lock for the duration of the block."""
        lock = self._locks.setdefault(session_id, asyncio.Lock())
        self._users[session_id] = self._users.get(session_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[session_id] -= 1
            if self._users[session_id] == 0:
                del self._users[session_id]
                del self._locks[session_id]

    def is_locked(self, session_id: str) -> bool:
        lock = self._locks.get(session_id)
        return lock is not None and lock.locked()

    def holders(self, session_id: str) -> int:
        """Number of callers holding or waiting for the session's lock."""
        return self._users.get(session_id, 0)

    @property
    def active_count(self) -> int:
        return len(self._locks)


# Global registry instance
session_locks = SessionLockRegistry()
