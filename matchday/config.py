"""Configuration models for Matchday."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Literal


StorageBackend = Literal["memory", "sqlalchemy"]

_TRUTHY = {"1", "true", "yes"}


@dataclass(slots=True)
class StorageConfig:
    """Configure how player ledgers are persisted."""

    backend: StorageBackend = "memory"
    dsn: str | None = None
    echo_sql: bool = False

    def resolve_dsn(self) -> str | None:
        if self.dsn:
            return self.dsn
        if self.backend == "sqlalchemy":
            return "sqlite+aiosqlite:///./matchday.db"
        return None


@dataclass(slots=True)
class AuthConfig:
    """Bearer token settings."""

    secret_key: str = "change-me"
    algorithm: str = "HS256"
    access_token_minutes: int = 60 * 24


@dataclass(slots=True)
class EconomyConfig:
    """Starting balances for newly registered players."""

    starting_gp: int = 1000
    starting_fc: int = 100


@dataclass(slots=True)
class StatConfig:
    """Inclusive bounds enforced on player attribute writes."""

    min_value: int = 40
    max_value: int = 99
    default_value: int = 40


@dataclass(slots=True)
class HttpConfig:
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False


@dataclass(slots=True)
class MatchdayConfig:
    """Top-level configuration container."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    economy: EconomyConfig = field(default_factory=EconomyConfig)
    stats: StatConfig = field(default_factory=StatConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    catalog_path: str | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "MatchdayConfig":
        """Create config from environment variables prefixed with MATCHDAY_."""
        prefix = "MATCHDAY_"
        storage_backend = os.getenv(f"{prefix}STORAGE_BACKEND", "memory")
        if storage_backend not in ("memory", "sqlalchemy"):
            raise ValueError(f"Unsupported storage backend {storage_backend}")

        storage = StorageConfig(
            backend=storage_backend,  # type: ignore[arg-type]
            dsn=os.getenv(f"{prefix}STORAGE_DSN"),
            echo_sql=os.getenv(f"{prefix}STORAGE_ECHO_SQL", "false").lower() in _TRUTHY,
        )

        auth = AuthConfig(
            secret_key=os.getenv(f"{prefix}SECRET_KEY", "change-me"),
            algorithm=os.getenv(f"{prefix}JWT_ALGORITHM", "HS256"),
            access_token_minutes=int(os.getenv(f"{prefix}ACCESS_TOKEN_MINUTES", str(60 * 24))),
        )

        economy = EconomyConfig(
            starting_gp=int(os.getenv(f"{prefix}STARTING_GP", "1000")),
            starting_fc=int(os.getenv(f"{prefix}STARTING_FC", "100")),
        )

        stats = StatConfig(
            min_value=int(os.getenv(f"{prefix}STAT_MIN", "40")),
            max_value=int(os.getenv(f"{prefix}STAT_MAX", "99")),
            default_value=int(os.getenv(f"{prefix}STAT_DEFAULT", "40")),
        )
        if stats.min_value > stats.max_value:
            raise ValueError("MATCHDAY_STAT_MIN cannot exceed MATCHDAY_STAT_MAX")

        http = HttpConfig(
            host=os.getenv(f"{prefix}HTTP_HOST", "127.0.0.1"),
            port=int(os.getenv(f"{prefix}HTTP_PORT", "8000")),
            debug=os.getenv(f"{prefix}DEBUG", "false").lower() in _TRUTHY,
        )

        return cls(
            storage=storage,
            auth=auth,
            economy=economy,
            stats=stats,
            http=http,
            catalog_path=os.getenv(f"{prefix}CATALOG_PATH") or None,
            log_level=os.getenv(f"{prefix}LOG_LEVEL", "INFO").upper(),
        )
