"""Administrative operations for the Matchday store."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from ..domain.catalog import Currency
from ..domain.economy import Wallet
from ..domain.events import EventBus
from ..domain.exceptions import PlayerNotFound
from ..storage.base import AuditStore, PlayerLedger, TransactionRecord

logger = logging.getLogger(__name__)

REWARD = "reward"


class AdminService:
    def __init__(
        self,
        ledger: PlayerLedger,
        audit_store: AuditStore,
        event_bus: EventBus,
    ) -> None:
        self._ledger = ledger
        self._audit_store = audit_store
        self._events = event_bus

    async def grant_currency(
        self,
        player_id: str,
        currency: "Currency | str",
        amount: int,
        *,
        reason: str | None = None,
    ) -> TransactionRecord:
        if amount <= 0:
            raise ValueError("Amount must be positive")
        currency = Currency.parse(currency)

        async with self._ledger.transaction(player_id) as tx:
            record = await tx.get_player()
            if record is None:
                raise PlayerNotFound(player_id)
            wallet = Wallet.from_mapping(record.balances)
            wallet.credit(currency, amount)
            record.balances = dict(wallet.balances)
            await tx.save_player(record)
            transaction = TransactionRecord(
                player_id=player_id,
                kind=REWARD,
                currency=currency,
                amount=amount,
                description=reason or f"Granted {amount} {currency.label}",
            )
            await tx.append_transaction(transaction)

        logger.info("Granted %s %s to player %s", amount, currency.label, player_id)
        await self._audit(
            "grant_currency",
            {"player_id": player_id, "currency": currency.value, "amount": amount, "reason": reason},
        )
        await self._events.publish(
            "admin.currency.granted",
            {"player_id": player_id, "currency": currency.value, "amount": amount},
        )
        return transaction

    async def _audit(self, action: str, payload: dict) -> None:
        await self._audit_store.add_entry(
            action,
            {
                "timestamp": datetime.now(timezone.utc).isoformat(),
                **payload,
            },
        )
