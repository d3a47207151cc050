"""Domain models and primitives."""

from .attributes import PlayerStat, default_stats, validate_stat_value
from .catalog import Catalog, CatalogEntry, Currency, ItemKind, ItemType
from .economy import Wallet
from .events import EventBus
from .exceptions import (
    InsufficientFC,
    InsufficientFunds,
    InsufficientGP,
    InvalidCurrency,
    InvalidItemKind,
    ItemNotFound,
    MatchdayError,
    OutOfRange,
    PlayerNotFound,
    StorageFailure,
    UnknownStat,
)

__all__ = [
    "PlayerStat",
    "default_stats",
    "validate_stat_value",
    "Catalog",
    "CatalogEntry",
    "Currency",
    "ItemKind",
    "ItemType",
    "Wallet",
    "EventBus",
    "InsufficientFC",
    "InsufficientFunds",
    "InsufficientGP",
    "InvalidCurrency",
    "InvalidItemKind",
    "ItemNotFound",
    "MatchdayError",
    "OutOfRange",
    "PlayerNotFound",
    "StorageFailure",
    "UnknownStat",
]
