"""In-memory TTL cache of upstream snapshots, guarded by an asyncio lock."""

from __future__ import annotations

import asyncio
import time
from typing import Any


class SnapshotCache:
    def __init__(self, ttl: float) -> None:
        self._ttl = ttl
        self._store: dict[str, tuple[Any, float]] = {}  # chain -> (snapshot, expiry_ts)
        self._lock = asyncio.Lock()

    @property
    def enabled(self) -> bool:
        return self._ttl > 0

    async def get(self, chain: str) -> Any | None:
        async with self._lock:
            entry = self._store.get(chain)
            if entry is None:
                return None
            value, expiry = entry
            if time.monotonic() > expiry:
                del self._store[chain]
                return None
            return value

    async def set(self, chain: str, value: Any) -> None:
        if not self.enabled:
            return
        async with self._lock:
            self._store[chain] = (value, time.monotonic() + self._ttl)
