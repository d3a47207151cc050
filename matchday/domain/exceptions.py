"""Exceptions raised by Matchday domain services."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .catalog import Currency, ItemKind


class MatchdayError(RuntimeError):
    """Base class for domain exceptions."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class PlayerNotFound(MatchdayError):
    status_code = 404

    def __init__(self, player_id: str) -> None:
        super().__init__("Player not found")
        self.player_id = player_id


class ItemNotFound(MatchdayError):
    status_code = 404

    def __init__(self, kind: "ItemKind", entry_id: str) -> None:
        super().__init__("Item not found")
        self.kind = kind
        self.entry_id = entry_id


class InvalidItemKind(MatchdayError):
    status_code = 400

    def __init__(self, value: object) -> None:
        super().__init__("Invalid item type")
        self.value = value


class InvalidCurrency(MatchdayError):
    status_code = 400

    def __init__(self, value: object) -> None:
        super().__init__("Invalid currency")
        self.value = value


class InsufficientFunds(MatchdayError):
    """Raised when a balance cannot cover a purchase."""

    status_code = 400

    def __init__(self, currency: "Currency", required: int, available: int) -> None:
        super().__init__(f"Insufficient {currency.label}")
        self.currency = currency
        self.required = required
        self.available = available

    @classmethod
    def for_currency(
        cls, currency: "Currency", required: int, available: int
    ) -> "InsufficientFunds":
        subclass = _INSUFFICIENT_BY_CURRENCY.get(currency.value, cls)
        return subclass(currency, required, available)


class InsufficientGP(InsufficientFunds):
    pass


class InsufficientFC(InsufficientFunds):
    pass


_INSUFFICIENT_BY_CURRENCY: dict[str, type[InsufficientFunds]] = {
    "gp": InsufficientGP,
    "fc": InsufficientFC,
}


class StorageFailure(MatchdayError):
    """Raised when the ledger could not commit; nothing was written."""

    status_code = 500

    def __init__(self, message: str = "Storage failure") -> None:
        super().__init__(message)


class OutOfRange(MatchdayError):
    status_code = 400

    def __init__(self, value: object, minimum: int, maximum: int) -> None:
        super().__init__(f"Stat value must be between {minimum} and {maximum}")
        self.value = value
        self.minimum = minimum
        self.maximum = maximum


class UnknownStat(MatchdayError):
    status_code = 400

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown stat '{name}'")
        self.name = name
