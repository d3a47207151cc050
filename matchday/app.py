"""Top level application object for the Matchday store."""

from __future__ import annotations

from typing import Any

from .admin.service import AdminService
from .auth import TokenIdentityProvider
from .config import MatchdayConfig
from .domain.catalog import ItemKind
from .domain.events import EventBus
from .domain.player import PlayerService
from .domain.settlement import PurchaseSettlementService
from .domain.stats import StatService
from .registry import CatalogRegistry
from .storage.base import AuditStore, PlayerLedger
from .storage.memory import InMemoryAuditStore, InMemoryPlayerLedger
from .storage.sqlalchemy import AsyncSQLAlchemyStorage


class StoreApp:
    """Central dependency container used by the HTTP layer and tooling."""

    def __init__(
        self,
        config: MatchdayConfig,
        *,
        ledger: PlayerLedger | None = None,
        audit_store: AuditStore | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.config = config
        self.event_bus = event_bus or EventBus()
        self.catalog = CatalogRegistry()

        self._sqlalchemy_storage: AsyncSQLAlchemyStorage | None = None
        self.ledger, self.audit_store = self._wire_storage(ledger, audit_store)

        self.identity = TokenIdentityProvider(config.auth)
        self.settlement_service = PurchaseSettlementService(
            catalog=self.catalog.catalog,
            ledger=self.ledger,
            event_bus=self.event_bus,
        )
        self.stat_service = StatService(self.ledger, config.stats, self.event_bus)
        self.player_service = PlayerService(
            self.ledger, economy=config.economy, stats=config.stats
        )
        self.admin_service = AdminService(self.ledger, self.audit_store, self.event_bus)

    def _wire_storage(
        self,
        ledger: PlayerLedger | None,
        audit_store: AuditStore | None,
    ) -> tuple[PlayerLedger, AuditStore]:
        if ledger and audit_store:
            return ledger, audit_store

        backend = self.config.storage.backend
        if backend == "memory":
            return ledger or InMemoryPlayerLedger(), audit_store or InMemoryAuditStore()
        if backend == "sqlalchemy":
            dsn = self.config.storage.resolve_dsn()
            if not dsn:
                raise ValueError("SQLAlchemy backend requires a DSN")
            storage = AsyncSQLAlchemyStorage(dsn, echo=self.config.storage.echo_sql)
            self._sqlalchemy_storage = storage
            return ledger or storage.player_ledger(), audit_store or storage.audit_store()
        raise ValueError(f"Unsupported storage backend {backend}")

    def snapshot(self) -> dict[str, Any]:
        """Export current configuration for debugging."""
        return {
            "storage": self.config.storage.backend,
            "skills": [entry.entry_id for entry in self.catalog.catalog.iter_kind(ItemKind.SKILL)],
            "styles": [entry.entry_id for entry in self.catalog.catalog.iter_kind(ItemKind.STYLE)],
            "items": [entry.entry_id for entry in self.catalog.catalog.iter_kind(ItemKind.ITEM)],
        }

    async def init_backend(self) -> None:
        """Initialize storage backend resources (e.g., database tables)."""
        if self._sqlalchemy_storage:
            await self._sqlalchemy_storage.init_models()

    async def close(self) -> None:
        if self._sqlalchemy_storage:
            await self._sqlalchemy_storage.dispose()
