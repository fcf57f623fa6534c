from __future__ import annotations

from asyncio import Lock
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any


class KeyedLocks:
    """Per-key asyncio locks so work on one key never interleaves.

    Locks are created on demand and dropped once nobody holds or waits on
    them. The bookkeeping never awaits, so it needs no lock of its own.
    """

    def __init__(self) -> None:
        self._locks: dict[Any, tuple[Lock, int]] = {}

    @asynccontextmanager
    async def hold(self, key: Any) -> AsyncIterator[None]:
        lock, users = self._locks.get(key) or (Lock(), 0)
        self._locks[key] = (lock, users + 1)
        try:
            async with lock:
                yield
        finally:
            lock, users = self._locks[key]
            if users <= 1:
                self._locks.pop(key, None)
            else:
                self._locks[key] = (lock, users - 1)

    def __contains__(self, key: Any) -> bool:
        return key in self._locks

    def __len__(self) -> int:
        return len(self._locks)


player_roll_locks = KeyedLocks()
