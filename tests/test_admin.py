import pytest

from matchday.domain.catalog import Currency
from matchday.domain.exceptions import InvalidCurrency, MatchdayError, PlayerNotFound


@pytest.mark.asyncio()
async def test_grant_currency_records_reward(app):
    await app.player_service.register("p1")
    record = await app.admin_service.grant_currency("p1", "fc", 50, reason="Match bonus")

    assert record.kind == "reward"
    assert record.amount == 50
    profile = await app.player_service.fetch("p1")
    assert profile.balances[Currency.FC] == 150

    transactions = await app.player_service.transactions("p1")
    assert [t.description for t in transactions] == ["Match bonus"]

    entries = app.audit_store.dump()
    assert entries[-1][1] == "grant_currency"
    assert entries[-1][2]["amount"] == 50


@pytest.mark.asyncio()
async def test_granted_currency_can_be_spent(poor_app):
    await poor_app.player_service.register("p1")
    await poor_app.admin_service.grant_currency("p1", Currency.GP, 300)
    result = await poor_app.settlement_service.settle_purchase("p1", "skill", "rabona")
    assert result.remaining_balance == 0


@pytest.mark.asyncio()
async def test_grant_currency_validates_input(app):
    await app.player_service.register("p1")
    with pytest.raises(ValueError):
        await app.admin_service.grant_currency("p1", "gp", 0)
    with pytest.raises(InvalidCurrency) as exc_info:
        await app.admin_service.grant_currency("p1", "coins", 10)
    assert isinstance(exc_info.value, MatchdayError)
    assert exc_info.value.status_code == 400
    with pytest.raises(InvalidCurrency):
        await app.admin_service.grant_currency("p1", "GP", 10)
    with pytest.raises(PlayerNotFound):
        await app.admin_service.grant_currency("ghost", "gp", 10)
    assert app.audit_store.dump() == []
