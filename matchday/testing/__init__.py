"""Testing utilities for Matchday."""

from .factory import CatalogEntryFactory, PlayerFactory
from .fixtures import app_fixture

__all__ = [
    "CatalogEntryFactory",
    "PlayerFactory",
    "app_fixture",
]
