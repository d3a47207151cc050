"""Helpers for building stores in tests."""

from __future__ import annotations

from ..app import StoreApp
from ..config import MatchdayConfig


def app_fixture(**kwargs) -> StoreApp:
    """Build an in-memory store; keyword arguments go to ``MatchdayConfig``."""
    return StoreApp(MatchdayConfig(**kwargs))
