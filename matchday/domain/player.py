"""Player-centric utilities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from .attributes import PlayerStat, default_stats
from .catalog import Currency
from .exceptions import PlayerNotFound
from ..config import EconomyConfig, StatConfig
from ..storage.base import PlayerLedger, PlayerRecord, TransactionRecord


@dataclass(slots=True)
class PlayerProfile:
    player_id: str
    username: str | None
    balances: Mapping[Currency, int]
    skills: frozenset[str]
    styles: frozenset[str]
    items: Mapping[str, int]
    stats: Mapping[PlayerStat, int]

    def to_dict(self) -> dict:
        return {
            "id": self.player_id,
            "username": self.username,
            "gp": self.balances.get(Currency.GP, 0),
            "fc": self.balances.get(Currency.FC, 0),
            "skills": sorted(self.skills),
            "comStyles": sorted(self.styles),
            "items": dict(self.items),
            "stats": {stat.value: value for stat, value in self.stats.items()},
        }


class PlayerService:
    """Expose registration and read operations for player state."""

    def __init__(
        self,
        ledger: PlayerLedger,
        *,
        economy: EconomyConfig | None = None,
        stats: StatConfig | None = None,
    ) -> None:
        self._ledger = ledger
        self._economy = economy or EconomyConfig()
        self._stats = stats or StatConfig()

    async def register(self, player_id: str, username: str | None = None) -> PlayerProfile:
        """Create the player with starting balances; returns the existing one if present."""
        record = await self._ledger.create(
            PlayerRecord(
                player_id=player_id,
                username=username,
                balances={
                    Currency.GP: self._economy.starting_gp,
                    Currency.FC: self._economy.starting_fc,
                },
                stats=default_stats(self._stats.default_value),
            )
        )
        return self._to_profile(record)

    async def fetch(self, player_id: str) -> PlayerProfile:
        record = await self._ledger.get(player_id)
        if record is None:
            raise PlayerNotFound(player_id)
        return self._to_profile(record)

    async def transactions(self, player_id: str, limit: int = 20) -> Sequence[TransactionRecord]:
        if limit <= 0:
            raise ValueError("Limit must be positive")
        return await self._ledger.transactions_for(player_id, limit)

    def _to_profile(self, record: PlayerRecord) -> PlayerProfile:
        return PlayerProfile(
            player_id=record.player_id,
            username=record.username,
            balances=dict(record.balances),
            skills=frozenset(record.owned_skills),
            styles=frozenset(record.owned_styles),
            items=dict(record.owned_items),
            stats=dict(record.stats),
        )
