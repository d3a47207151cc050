"""Storage abstractions used by the Matchday services."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import AsyncContextManager, Protocol, Sequence
from uuid import uuid4

from ..domain.attributes import PlayerStat
from ..domain.catalog import Currency


@dataclass(slots=True)
class PlayerRecord:
    player_id: str
    username: str | None = None
    balances: dict[Currency, int] = field(default_factory=dict)
    owned_skills: set[str] = field(default_factory=set)
    owned_styles: set[str] = field(default_factory=set)
    owned_items: dict[str, int] = field(default_factory=dict)
    stats: dict[PlayerStat, int] = field(default_factory=dict)
    version: int = 0

    def copy(self) -> "PlayerRecord":
        return PlayerRecord(
            player_id=self.player_id,
            username=self.username,
            balances=dict(self.balances),
            owned_skills=set(self.owned_skills),
            owned_styles=set(self.owned_styles),
            owned_items=dict(self.owned_items),
            stats=dict(self.stats),
            version=self.version,
        )


@dataclass(frozen=True, slots=True)
class TransactionRecord:
    player_id: str
    kind: str
    currency: Currency
    amount: int
    description: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    transaction_id: str = field(default_factory=lambda: uuid4().hex)

    def to_dict(self) -> dict:
        return {
            "id": self.transaction_id,
            "playerId": self.player_id,
            "type": self.kind,
            "currency": self.currency.value,
            "amount": self.amount,
            "description": self.description,
            "createdAt": self.timestamp.isoformat(),
        }


class LedgerTransaction(Protocol):
    """Unit of work scoped to a single player.

    Reads return a private copy; writes become visible only when the
    enclosing ``PlayerLedger.transaction`` block exits without an exception.
    """

    async def get_player(self) -> PlayerRecord | None:
        ...

    async def save_player(self, record: PlayerRecord) -> None:
        ...

    async def append_transaction(self, record: TransactionRecord) -> None:
        ...


class PlayerLedger(Protocol):
    def transaction(self, player_id: str) -> AsyncContextManager[LedgerTransaction]:
        ...

    async def get(self, player_id: str) -> PlayerRecord | None:
        ...

    async def create(self, record: PlayerRecord) -> PlayerRecord:
        ...

    async def transactions_for(self, player_id: str, limit: int = 20) -> Sequence[TransactionRecord]:
        ...


class AuditStore(Protocol):
    async def add_entry(self, action: str, payload: dict) -> None:
        ...
