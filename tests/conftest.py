from contextlib import asynccontextmanager

import pytest

from matchday.app import StoreApp
from matchday.config import EconomyConfig, MatchdayConfig
from matchday.domain.catalog import Currency, ItemType
from matchday.domain.exceptions import StorageFailure
from matchday.storage.memory import InMemoryPlayerLedger


def stock_catalog(app: StoreApp) -> StoreApp:
    (
        app.catalog.skill("rabona", "Rabona", 400)
        .skill("heel-trick", "Heel Trick", 250)
        .style("mazing-run", "Mazing Run", 500)
        .item("energy-drink", "Energy Drink", 50, Currency.GP)
        .item("training-boost", "Training Boost", 10, Currency.FC)
        .item("golden-boots", "Golden Boots", 75, Currency.FC, item_type=ItemType.SPECIAL)
    )
    return app


@pytest.fixture()
def app() -> StoreApp:
    return stock_catalog(StoreApp(MatchdayConfig()))


@pytest.fixture()
def poor_app() -> StoreApp:
    config = MatchdayConfig(economy=EconomyConfig(starting_gp=100, starting_fc=5))
    return stock_catalog(StoreApp(config))


class _FailOnAppend:
    def __init__(self, inner) -> None:
        self._inner = inner

    async def get_player(self):
        return await self._inner.get_player()

    async def save_player(self, record):
        await self._inner.save_player(record)

    async def append_transaction(self, record):
        raise StorageFailure("transaction log unavailable")


class FailingLedger(InMemoryPlayerLedger):
    """Ledger whose transaction log write fails after the player was saved."""

    @asynccontextmanager
    async def transaction(self, player_id):
        async with super().transaction(player_id) as tx:
            yield _FailOnAppend(tx)


@pytest.fixture()
def failing_app() -> StoreApp:
    return stock_catalog(StoreApp(MatchdayConfig(), ledger=FailingLedger()))
