"""Storage backends for Matchday."""

from .base import AuditStore, LedgerTransaction, PlayerLedger, PlayerRecord, TransactionRecord
from .memory import InMemoryAuditStore, InMemoryPlayerLedger
from .sqlalchemy import AsyncSQLAlchemyStorage

__all__ = [
    "AuditStore",
    "LedgerTransaction",
    "PlayerLedger",
    "PlayerRecord",
    "TransactionRecord",
    "InMemoryAuditStore",
    "InMemoryPlayerLedger",
    "AsyncSQLAlchemyStorage",
]
