"""Economy primitives."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping

from .catalog import Currency
from .exceptions import InsufficientFunds


@dataclass(slots=True)
class Wallet:
    """Mutable wallet representation used by services."""

    balances: Dict[Currency, int] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, balances: Mapping[Currency, int]) -> "Wallet":
        wallet = cls()
        for currency in Currency:
            wallet.balances[currency] = int(balances.get(currency, 0))
        return wallet

    def balance(self, currency: Currency) -> int:
        return self.balances.get(currency, 0)

    def can_afford(self, currency: Currency, amount: int) -> bool:
        return self.balance(currency) >= amount

    def credit(self, currency: Currency, amount: int) -> None:
        if amount < 0:
            raise ValueError("Cannot credit negative amount")
        self.balances[currency] = self.balance(currency) + amount

    def debit(self, currency: Currency, amount: int) -> None:
        if amount < 0:
            raise ValueError("Cannot debit negative amount")
        current = self.balance(currency)
        if current < amount:
            raise InsufficientFunds.for_currency(currency, amount, current)
        self.balances[currency] = current - amount
