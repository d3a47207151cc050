import gc

import pytest

from matchday.domain.catalog import Currency
from matchday.domain.exceptions import PlayerNotFound


@pytest.mark.asyncio()
async def test_history_survives_heavy_activity_of_other_players(app):
    await app.player_service.register("p1")
    await app.player_service.register("p2")
    first = await app.settlement_service.settle_purchase("p1", "item", "energy-drink")

    for _ in range(5001):
        await app.admin_service.grant_currency("p2", Currency.GP, 1)

    history = await app.player_service.transactions("p1")
    assert [t.transaction_id for t in history] == [first.transaction_id]
    assert len(await app.ledger.transactions_for("p2", limit=10_000)) == 5001


@pytest.mark.asyncio()
async def test_history_is_newest_first_per_player(app):
    await app.player_service.register("p1")
    await app.admin_service.grant_currency("p1", Currency.FC, 5, reason="first")
    await app.admin_service.grant_currency("p1", Currency.FC, 5, reason="second")
    await app.admin_service.grant_currency("p1", Currency.FC, 5, reason="third")

    history = await app.ledger.transactions_for("p1", limit=2)
    assert [t.description for t in history] == ["third", "second"]
    assert await app.ledger.transactions_for("ghost") == []


@pytest.mark.asyncio()
async def test_player_locks_are_released_when_idle(app):
    await app.player_service.register("p1")
    await app.settlement_service.settle_purchase("p1", "skill", "rabona")
    with pytest.raises(PlayerNotFound):
        await app.settlement_service.settle_purchase("ghost", "skill", "rabona")

    gc.collect()
    assert "ghost" not in app.ledger._locks
    assert "p1" not in app.ledger._locks
