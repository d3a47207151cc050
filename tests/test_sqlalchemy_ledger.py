import asyncio
from pathlib import Path

import pytest

from matchday.app import StoreApp
from matchday.config import EconomyConfig, MatchdayConfig, StorageConfig
from matchday.domain.attributes import PlayerStat
from matchday.domain.catalog import Currency
from matchday.domain.exceptions import InsufficientGP, StorageFailure
from matchday.domain.settlement import SettlementResult
from matchday.storage.sqlalchemy import AsyncSQLAlchemyStorage

from .conftest import stock_catalog


def _sqlite_config(tmp_path: Path, **kwargs) -> MatchdayConfig:
    dsn = f"sqlite+aiosqlite:///{(tmp_path / 'matchday.db').as_posix()}"
    return MatchdayConfig(storage=StorageConfig(backend="sqlalchemy", dsn=dsn), **kwargs)


@pytest.mark.asyncio()
async def test_settlement_persists_through_sqlalchemy(tmp_path):
    app = stock_catalog(StoreApp(_sqlite_config(tmp_path)))
    await app.init_backend()
    try:
        await app.player_service.register("p1", "winger")
        await app.settlement_service.settle_purchase("p1", "skill", "rabona")
        await app.settlement_service.settle_purchase("p1", "style", "mazing-run")
        await app.settlement_service.settle_purchase("p1", "item", "training-boost")
        await app.settlement_service.settle_purchase("p1", "item", "training-boost")
        await app.stat_service.update_stat("p1", "heading", 81)

        profile = await app.player_service.fetch("p1")
        assert profile.username == "winger"
        assert profile.balances == {Currency.GP: 100, Currency.FC: 80}
        assert profile.skills == frozenset({"rabona"})
        assert profile.styles == frozenset({"mazing-run"})
        assert profile.items == {"training-boost": 2}
        assert profile.stats[PlayerStat.HEADING] == 81
        assert profile.stats[PlayerStat.SPEED] == 40

        transactions = await app.player_service.transactions("p1")
        assert sorted(t.amount for t in transactions) == [-500, -400, -10, -10]
        assert any(t.description == "Purchased Rabona" for t in transactions)
    finally:
        await app.close()


@pytest.mark.asyncio()
async def test_business_failure_rolls_back(tmp_path):
    app = stock_catalog(StoreApp(_sqlite_config(tmp_path, economy=EconomyConfig(starting_gp=100))))
    await app.init_backend()
    try:
        await app.player_service.register("p1")
        with pytest.raises(InsufficientGP):
            await app.settlement_service.settle_purchase("p1", "skill", "rabona")

        profile = await app.player_service.fetch("p1")
        assert profile.balances[Currency.GP] == 100
        assert not profile.skills
        assert await app.player_service.transactions("p1") == []
    finally:
        await app.close()


@pytest.mark.asyncio()
async def test_concurrent_purchases_cannot_double_spend(tmp_path):
    app = stock_catalog(StoreApp(_sqlite_config(tmp_path, economy=EconomyConfig(starting_gp=100))))
    app.catalog.item("scout-report", "Scout Report", 80, Currency.GP)
    await app.init_backend()
    try:
        await app.player_service.register("p1")
        outcomes = await asyncio.gather(
            app.settlement_service.settle_purchase("p1", "item", "scout-report"),
            app.settlement_service.settle_purchase("p1", "item", "scout-report"),
            return_exceptions=True,
        )
        assert sum(isinstance(o, SettlementResult) for o in outcomes) == 1
        assert sum(isinstance(o, InsufficientGP) for o in outcomes) == 1

        profile = await app.player_service.fetch("p1")
        assert profile.balances[Currency.GP] == 20
    finally:
        await app.close()


@pytest.mark.asyncio()
async def test_stale_write_is_rejected(tmp_path):
    storage = AsyncSQLAlchemyStorage(_sqlite_config(tmp_path).storage.resolve_dsn())
    await storage.init_models()
    # Separate ledgers do not share in-process locks, like two server processes.
    first = storage.player_ledger()
    second = storage.player_ledger()
    app = StoreApp(MatchdayConfig(), ledger=first)
    try:
        await app.player_service.register("p1")

        with pytest.raises(StorageFailure):
            async with first.transaction("p1") as tx:
                record = await tx.get_player()

                async with second.transaction("p1") as other:
                    competing = await other.get_player()
                    competing.balances[Currency.GP] -= 300
                    await other.save_player(competing)

                record.balances[Currency.GP] -= 900
                await tx.save_player(record)

        stored = await first.get("p1")
        assert stored.balances[Currency.GP] == 700
        assert stored.version == 1
    finally:
        await storage.dispose()


@pytest.mark.asyncio()
async def test_database_errors_surface_as_storage_failure(tmp_path):
    # Tables are never created, so every statement fails.
    storage = AsyncSQLAlchemyStorage(_sqlite_config(tmp_path).storage.resolve_dsn())
    ledger = storage.player_ledger()
    audit_store = storage.audit_store()
    try:
        with pytest.raises(StorageFailure):
            await ledger.transactions_for("p1")
        with pytest.raises(StorageFailure):
            await audit_store.add_entry("grant_currency", {"player_id": "p1"})
        with pytest.raises(StorageFailure):
            await ledger.get("p1")
    finally:
        await storage.dispose()
