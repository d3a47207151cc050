"""Store purchase settlement.

A settlement validates and applies one purchase as a single unit of work on
the player's ledger: the debit, the grant and the transaction record are
committed together or not at all. Per-player mutual exclusion is provided by
``PlayerLedger.transaction``; the service itself keeps no state between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .catalog import Catalog, CatalogEntry, Currency, ItemKind
from .economy import Wallet
from .events import EventBus
from .exceptions import PlayerNotFound
from ..storage.base import PlayerLedger, PlayerRecord, TransactionRecord

logger = logging.getLogger(__name__)

PURCHASE = "purchase"


@dataclass(frozen=True, slots=True)
class SettlementResult:
    player_id: str
    entry: CatalogEntry
    currency: Currency
    amount: int
    remaining_balance: int
    transaction_id: str
    already_owned: bool = False
    message: str = "Purchase successful"


class PurchaseSettlementService:
    """Apply store purchases against a player ledger."""

    def __init__(self, catalog: Catalog, ledger: PlayerLedger, event_bus: EventBus) -> None:
        self._catalog = catalog
        self._ledger = ledger
        self._event_bus = event_bus

    async def settle_purchase(
        self, player_id: str, item_kind: "str | ItemKind", item_id: str
    ) -> SettlementResult:
        kind = ItemKind.parse(item_kind)

        async with self._ledger.transaction(player_id) as tx:
            record = await tx.get_player()
            if record is None:
                raise PlayerNotFound(player_id)

            entry = self._catalog.get(kind, item_id)
            currency = entry.currency

            wallet = Wallet.from_mapping(record.balances)
            wallet.debit(currency, entry.cost)
            record.balances = dict(wallet.balances)

            already_owned = self._grant(record, entry)
            await tx.save_player(record)

            transaction = TransactionRecord(
                player_id=player_id,
                kind=PURCHASE,
                currency=currency,
                amount=-entry.cost,
                description=f"Purchased {entry.name}",
            )
            await tx.append_transaction(transaction)

        logger.info(
            "Player %s bought %s %s for %s %s",
            player_id,
            kind.value,
            item_id,
            entry.cost,
            currency.label,
        )
        await self._event_bus.publish(
            "store.purchase.completed",
            {
                "player_id": player_id,
                "item_type": kind.value,
                "item_id": item_id,
                "currency": currency.value,
                "amount": -entry.cost,
                "already_owned": already_owned,
                "transaction_id": transaction.transaction_id,
            },
        )
        return SettlementResult(
            player_id=player_id,
            entry=entry,
            currency=currency,
            amount=-entry.cost,
            remaining_balance=wallet.balance(currency),
            transaction_id=transaction.transaction_id,
            already_owned=already_owned,
        )

    def _grant(self, record: PlayerRecord, entry: CatalogEntry) -> bool:
        """Add ``entry`` to the player's possessions; return True if it was already owned."""
        if entry.kind is ItemKind.SKILL:
            owned = entry.entry_id in record.owned_skills
            # Re-buying an owned skill still debits; blocking it is a product decision.
            record.owned_skills.add(entry.entry_id)
            return owned
        if entry.kind is ItemKind.STYLE:
            owned = entry.entry_id in record.owned_styles
            record.owned_styles.add(entry.entry_id)
            return owned
        quantity = record.owned_items.get(entry.entry_id, 0)
        record.owned_items[entry.entry_id] = quantity + 1
        return quantity > 0
