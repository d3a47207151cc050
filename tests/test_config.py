import pytest

from matchday.app import StoreApp
from matchday.config import MatchdayConfig, StorageConfig
from matchday.storage.memory import InMemoryPlayerLedger
from matchday.storage.sqlalchemy import AsyncSQLAlchemyPlayerLedger


def test_from_env_reads_prefixed_variables(monkeypatch):
    monkeypatch.setenv("MATCHDAY_STORAGE_BACKEND", "sqlalchemy")
    monkeypatch.setenv("MATCHDAY_STARTING_GP", "250")
    monkeypatch.setenv("MATCHDAY_STAT_MAX", "90")
    monkeypatch.setenv("MATCHDAY_SECRET_KEY", "abc")
    monkeypatch.setenv("MATCHDAY_LOG_LEVEL", "debug")

    config = MatchdayConfig.from_env()
    assert config.storage.backend == "sqlalchemy"
    assert config.storage.resolve_dsn() == "sqlite+aiosqlite:///./matchday.db"
    assert config.economy.starting_gp == 250
    assert config.economy.starting_fc == 100
    assert config.stats.max_value == 90
    assert config.auth.secret_key == "abc"
    assert config.log_level == "DEBUG"


def test_from_env_rejects_unknown_backend(monkeypatch):
    monkeypatch.setenv("MATCHDAY_STORAGE_BACKEND", "redis")
    with pytest.raises(ValueError):
        MatchdayConfig.from_env()


def test_app_wires_backend():
    assert isinstance(StoreApp(MatchdayConfig()).ledger, InMemoryPlayerLedger)
    config = MatchdayConfig(storage=StorageConfig(backend="sqlalchemy", dsn="sqlite+aiosqlite://"))
    assert isinstance(StoreApp(config).ledger, AsyncSQLAlchemyPlayerLedger)
