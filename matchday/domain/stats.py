"""Attribute write path guarded by the stat range check."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from .attributes import PlayerStat, validate_stat_value
from .events import EventBus
from .exceptions import PlayerNotFound
from ..config import StatConfig
from ..storage.base import PlayerLedger

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class StatUpdate:
    player_id: str
    stat: PlayerStat
    previous: int
    value: int
    stats: Mapping[PlayerStat, int]


class StatService:
    """Write path for a single player attribute."""

    def __init__(
        self,
        ledger: PlayerLedger,
        config: StatConfig,
        event_bus: EventBus,
    ) -> None:
        self._ledger = ledger
        self._config = config
        self._event_bus = event_bus

    async def update_stat(self, player_id: str, stat: "str | PlayerStat", value: object) -> StatUpdate:
        parsed = PlayerStat.parse(stat)
        async with self._ledger.transaction(player_id) as tx:
            record = await tx.get_player()
            if record is None:
                raise PlayerNotFound(player_id)
            checked = validate_stat_value(
                value, minimum=self._config.min_value, maximum=self._config.max_value
            )
            previous = record.stats.get(parsed, self._config.default_value)
            record.stats[parsed] = checked
            await tx.save_player(record)

        logger.info("Player %s set %s %s -> %s", player_id, parsed.value, previous, checked)
        await self._event_bus.publish(
            "player.stat.updated",
            {"player_id": player_id, "stat": parsed.value, "previous": previous, "value": checked},
        )
        return StatUpdate(
            player_id=player_id,
            stat=parsed,
            previous=previous,
            value=checked,
            stats=dict(record.stats),
        )
