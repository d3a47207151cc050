"""Matchday store public API."""

from .app import StoreApp
from .config import MatchdayConfig
from .domain.player import PlayerService
from .domain.settlement import PurchaseSettlementService, SettlementResult
from .domain.stats import StatService
from .registry import CatalogRegistry

__all__ = [
    "StoreApp",
    "MatchdayConfig",
    "CatalogRegistry",
    "PlayerService",
    "PurchaseSettlementService",
    "SettlementResult",
    "StatService",
]
