"""
Tests for SessionLockRegistry.
"""

import asyncio

import pytest

from fieldtrack.features.tracking import SessionLockRegistry


class TestSessionLockRegistry:
    """Per-session serialization."""

    @pytest.mark.asyncio
    async def test_same_session_serialized(self):
        """Read-modify-write under the lock never loses an update."""
        registry = SessionLockRegistry()
        state = {"total": 0}

        async def add_one():
            async with registry.hold("session-1"):
                current = state["total"]
                await asyncio.sleep(0)
                state["total"] = current + 1

        await asyncio.gather(*(add_one() for _ in range(20)))

        assert state["total"] == 20

    @pytest.mark.asyncio
    async def test_different_sessions_independent(self):
        """Holding one session's lock does not block another session."""
        registry = SessionLockRegistry()

        async with registry.hold("session-1"):
            assert registry.is_locked("session-1")
            assert not registry.is_locked("session-2")
            async with registry.hold("session-2"):
                assert registry.is_locked("session-2")

    @pytest.mark.asyncio
    async def test_locks_released_and_dropped(self):
        registry = SessionLockRegistry()

        async with registry.hold("session-1"):
            assert registry.active_count == 1

        assert registry.active_count == 0
        assert not registry.is_locked("session-1")

    @pytest.mark.asyncio
    async def test_lock_kept_while_waiters_remain(self):
        registry = SessionLockRegistry()
        entered = asyncio.Event()
        release = asyncio.Event()

        async def holder():
            async with registry.hold("session-1"):
                entered.set()
                await release.wait()

        async def waiter():
            async with registry.hold("session-1"):
                pass

        holder_task = asyncio.create_task(holder())
        await entered.wait()
        waiter_task = asyncio.create_task(waiter())
        await asyncio.sleep(0)

        assert registry.active_count == 1
        assert registry.holders("session-1") == 2
        release.set()
        await asyncio.gather(holder_task, waiter_task)

        assert registry.active_count == 0
        assert registry.holders("session-1") == 0

    @pytest.mark.asyncio
    async def test_released_on_error(self):
        registry = SessionLockRegistry()

        with pytest.raises(RuntimeError):
            async with registry.hold("session-1"):
                raise RuntimeError("boom")

        assert registry.active_count == 0
