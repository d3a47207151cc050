import pytest

from matchday.app import StoreApp
from matchday.config import MatchdayConfig, StatConfig
from matchday.domain.attributes import PlayerStat, validate_stat_value
from matchday.domain.exceptions import OutOfRange, PlayerNotFound, UnknownStat


@pytest.mark.parametrize("value", [40, 99, 70, 55.0])
def test_validate_accepts_inclusive_range(value):
    assert validate_stat_value(value) == int(value)


@pytest.mark.parametrize("value", [39, 100, -1, 55.5, True, "60", None])
def test_validate_rejects_out_of_range(value):
    with pytest.raises(OutOfRange):
        validate_stat_value(value)


@pytest.mark.asyncio()
async def test_update_stat_accepts_boundaries(app):
    await app.player_service.register("p1")

    update = await app.stat_service.update_stat("p1", "speed", 99)
    assert update.previous == 40
    assert update.value == 99

    update = await app.stat_service.update_stat("p1", PlayerStat.SPEED, 40)
    assert update.previous == 99

    profile = await app.player_service.fetch("p1")
    assert profile.stats[PlayerStat.SPEED] == 40


@pytest.mark.asyncio()
@pytest.mark.parametrize("value", [39, 100])
async def test_out_of_range_write_leaves_stat_unchanged(app, value):
    await app.player_service.register("p1")
    await app.stat_service.update_stat("p1", "finishing", 75)

    with pytest.raises(OutOfRange) as exc_info:
        await app.stat_service.update_stat("p1", "finishing", value)
    assert exc_info.value.message == "Stat value must be between 40 and 99"

    profile = await app.player_service.fetch("p1")
    assert profile.stats[PlayerStat.FINISHING] == 75


@pytest.mark.asyncio()
async def test_unknown_stat_is_rejected(app):
    await app.player_service.register("p1")
    with pytest.raises(UnknownStat):
        await app.stat_service.update_stat("p1", "shooting", 60)


@pytest.mark.asyncio()
async def test_update_stat_requires_player(app):
    with pytest.raises(PlayerNotFound):
        await app.stat_service.update_stat("ghost", "speed", 60)


@pytest.mark.asyncio()
async def test_stat_bounds_are_configurable():
    app = StoreApp(MatchdayConfig(stats=StatConfig(min_value=1, max_value=20, default_value=10)))
    profile = await app.player_service.register("p1")
    assert profile.stats[PlayerStat.STAMINA] == 10

    await app.stat_service.update_stat("p1", "stamina", 1)
    with pytest.raises(OutOfRange):
        await app.stat_service.update_stat("p1", "stamina", 21)


@pytest.mark.asyncio()
async def test_stat_update_publishes_event(app):
    received = []

    async def listener(payload):
        received.append(payload)

    app.event_bus.subscribe("player.stat.updated", listener)
    await app.player_service.register("p1")
    await app.stat_service.update_stat("p1", "curl", 88)
    assert received == [{"player_id": "p1", "stat": "curl", "previous": 40, "value": 88}]
