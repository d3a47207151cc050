"""HTTP layer for the Matchday store."""

from .app import create_app

__all__ = ["create_app"]
