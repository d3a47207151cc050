"""In-memory storage backend for Matchday."""

from __future__ import annotations

import asyncio
import weakref
from collections import defaultdict, deque
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, DefaultDict, Deque, Sequence

from .base import AuditStore, LedgerTransaction, PlayerLedger, PlayerRecord, TransactionRecord


class _InMemoryLedgerTransaction(LedgerTransaction):
    def __init__(self, ledger: "InMemoryPlayerLedger", player_id: str) -> None:
        self._ledger = ledger
        self._player_id = player_id
        self.staged: PlayerRecord | None = None
        self.appended: list[TransactionRecord] = []

    async def get_player(self) -> PlayerRecord | None:
        if self.staged is not None:
            return self.staged.copy()
        record = self._ledger._records.get(self._player_id)
        return record.copy() if record else None

    async def save_player(self, record: PlayerRecord) -> None:
        if record.player_id != self._player_id:
            raise ValueError("Transaction is scoped to a different player")
        self.staged = record.copy()

    async def append_transaction(self, record: TransactionRecord) -> None:
        if record.player_id != self._player_id:
            raise ValueError("Transaction is scoped to a different player")
        self.appended.append(record)


class InMemoryPlayerLedger(PlayerLedger):
    def __init__(self) -> None:
        self._records: dict[str, PlayerRecord] = {}
        self._history: DefaultDict[str, list[TransactionRecord]] = defaultdict(list)
        # Entries disappear once no coroutine holds or waits on the lock.
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()

    def _lock_for(self, player_id: str) -> asyncio.Lock:
        lock = self._locks.get(player_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[player_id] = lock
        return lock

    @asynccontextmanager
    async def transaction(self, player_id: str) -> AsyncIterator[LedgerTransaction]:
        async with self._lock_for(player_id):
            tx = _InMemoryLedgerTransaction(self, player_id)
            yield tx
            # Only reached when the block exits cleanly.
            if tx.staged is not None:
                tx.staged.version += 1
                self._records[player_id] = tx.staged
            if tx.appended:
                self._history[player_id].extend(tx.appended)

    async def get(self, player_id: str) -> PlayerRecord | None:
        record = self._records.get(player_id)
        return record.copy() if record else None

    async def create(self, record: PlayerRecord) -> PlayerRecord:
        async with self._lock_for(record.player_id):
            existing = self._records.get(record.player_id)
            if existing is None:
                existing = record.copy()
                self._records[record.player_id] = existing
            return existing.copy()

    async def transactions_for(self, player_id: str, limit: int = 20) -> Sequence[TransactionRecord]:
        history = self._history.get(player_id, [])
        return history[::-1][:limit]


class InMemoryAuditStore(AuditStore):
    def __init__(self, *, maxlen: int = 1000) -> None:
        self._entries: Deque[tuple[datetime, str, dict]] = deque(maxlen=maxlen)

    async def add_entry(self, action: str, payload: dict) -> None:
        self._entries.append((datetime.now(timezone.utc), action, payload))

    def dump(self) -> list[tuple[datetime, str, dict]]:
        return list(self._entries)
