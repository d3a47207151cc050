"""SQLAlchemy storage backend for Matchday."""

from __future__ import annotations

import asyncio
import logging
import weakref
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Sequence

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    JSON,
    String,
    delete,
    insert,
    select,
    update,
)
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from .base import AuditStore, LedgerTransaction, PlayerLedger, PlayerRecord, TransactionRecord
from ..domain.attributes import PlayerStat
from ..domain.catalog import Currency
from ..domain.exceptions import StorageFailure

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class PlayerTable(Base):
    __tablename__ = "matchday_players"
    __table_args__ = (
        CheckConstraint("gp >= 0", name="ck_players_gp_non_negative"),
        CheckConstraint("fc >= 0", name="ck_players_fc_non_negative"),
    )

    player_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    username: Mapped[str | None] = mapped_column(String(255), nullable=True)
    gp: Mapped[int] = mapped_column(Integer, default=0)
    fc: Mapped[int] = mapped_column(Integer, default=0)
    stats: Mapped[dict] = mapped_column(JSON, default=dict)
    version: Mapped[int] = mapped_column(Integer, default=0)


class PlayerSkillTable(Base):
    __tablename__ = "matchday_player_skills"

    player_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("matchday_players.player_id", ondelete="CASCADE"), primary_key=True
    )
    skill_id: Mapped[str] = mapped_column(String(64), primary_key=True)


class PlayerStyleTable(Base):
    __tablename__ = "matchday_player_styles"

    player_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("matchday_players.player_id", ondelete="CASCADE"), primary_key=True
    )
    style_id: Mapped[str] = mapped_column(String(64), primary_key=True)


class PlayerItemTable(Base):
    __tablename__ = "matchday_player_items"
    __table_args__ = (CheckConstraint("quantity >= 1", name="ck_player_items_quantity"),)

    player_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("matchday_players.player_id", ondelete="CASCADE"), primary_key=True
    )
    item_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    quantity: Mapped[int] = mapped_column(Integer, default=1)


class TransactionTable(Base):
    __tablename__ = "matchday_transactions"

    transaction_id: Mapped[str] = mapped_column(String(32), primary_key=True)
    player_id: Mapped[str] = mapped_column(String(64), index=True)
    kind: Mapped[str] = mapped_column(String(16))
    currency: Mapped[str] = mapped_column(String(8))
    amount: Mapped[int] = mapped_column(Integer)
    description: Mapped[str] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)


class AuditTable(Base):
    __tablename__ = "matchday_audit_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    action: Mapped[str] = mapped_column(String(128))
    payload: Mapped[dict] = mapped_column(JSON)


class AsyncSQLAlchemyStorage:
    """Bundle of async stores backed by SQLAlchemy."""

    def __init__(self, dsn: str, *, echo: bool = False) -> None:
        self._engine = create_async_engine(dsn, echo=echo)
        self._session_factory = async_sessionmaker(self._engine, expire_on_commit=False)

    async def init_models(self) -> None:
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self._engine.dispose()

    def player_ledger(self) -> "AsyncSQLAlchemyPlayerLedger":
        return AsyncSQLAlchemyPlayerLedger(self._session_factory)

    def audit_store(self) -> "AsyncSQLAlchemyAuditStore":
        return AsyncSQLAlchemyAuditStore(self._session_factory)


async def _load_player(
    session: AsyncSession, player_id: str, *, for_update: bool = False
) -> PlayerRecord | None:
    stmt = select(PlayerTable).where(PlayerTable.player_id == player_id)
    if for_update:
        # Rendered as SELECT ... FOR UPDATE on databases with row locks; a no-op on SQLite.
        stmt = stmt.with_for_update()
    row = (await session.execute(stmt)).scalar_one_or_none()
    if row is None:
        return None

    skills = await session.execute(
        select(PlayerSkillTable.skill_id).where(PlayerSkillTable.player_id == player_id)
    )
    styles = await session.execute(
        select(PlayerStyleTable.style_id).where(PlayerStyleTable.player_id == player_id)
    )
    items = await session.execute(
        select(PlayerItemTable.item_id, PlayerItemTable.quantity).where(
            PlayerItemTable.player_id == player_id
        )
    )
    stats: dict[PlayerStat, int] = {}
    for name, value in (row.stats or {}).items():
        try:
            stats[PlayerStat(name)] = int(value)
        except ValueError:
            logger.warning("Ignoring unknown stat %r stored for player %s", name, player_id)

    return PlayerRecord(
        player_id=row.player_id,
        username=row.username,
        balances={Currency.GP: row.gp, Currency.FC: row.fc},
        owned_skills=set(skills.scalars().all()),
        owned_styles=set(styles.scalars().all()),
        owned_items={item_id: quantity for item_id, quantity in items.all()},
        stats=stats,
        version=row.version,
    )


def _stats_payload(record: PlayerRecord) -> dict[str, int]:
    return {stat.value: value for stat, value in record.stats.items()}


class _SQLAlchemyLedgerTransaction(LedgerTransaction):
    def __init__(self, session: AsyncSession, player_id: str) -> None:
        self._session = session
        self._player_id = player_id
        self._loaded: PlayerRecord | None = None

    async def get_player(self) -> PlayerRecord | None:
        if self._loaded is None:
            self._loaded = await _load_player(self._session, self._player_id, for_update=True)
        return self._loaded.copy() if self._loaded else None

    async def save_player(self, record: PlayerRecord) -> None:
        if record.player_id != self._player_id:
            raise ValueError("Transaction is scoped to a different player")
        if self._loaded is None:
            await self.get_player()
        if self._loaded is None:
            raise StorageFailure(f"Player {self._player_id} vanished during transaction")

        read_version = self._loaded.version
        stmt = (
            update(PlayerTable)
            .where(PlayerTable.player_id == self._player_id, PlayerTable.version == read_version)
            .values(
                username=record.username,
                gp=record.balances.get(Currency.GP, 0),
                fc=record.balances.get(Currency.FC, 0),
                stats=_stats_payload(record),
                version=read_version + 1,
            )
        )
        result = await self._session.execute(stmt)
        if result.rowcount != 1:
            raise StorageFailure(f"Player {self._player_id} was modified concurrently")

        await self._sync_owned(record)
        self._loaded = record.copy()
        self._loaded.version = read_version + 1

    async def _sync_owned(self, record: PlayerRecord) -> None:
        assert self._loaded is not None
        before = self._loaded

        for skill_id in record.owned_skills - before.owned_skills:
            await self._session.execute(
                insert(PlayerSkillTable).values(player_id=self._player_id, skill_id=skill_id)
            )
        removed_skills = before.owned_skills - record.owned_skills
        if removed_skills:
            await self._session.execute(
                delete(PlayerSkillTable).where(
                    PlayerSkillTable.player_id == self._player_id,
                    PlayerSkillTable.skill_id.in_(removed_skills),
                )
            )

        for style_id in record.owned_styles - before.owned_styles:
            await self._session.execute(
                insert(PlayerStyleTable).values(player_id=self._player_id, style_id=style_id)
            )
        removed_styles = before.owned_styles - record.owned_styles
        if removed_styles:
            await self._session.execute(
                delete(PlayerStyleTable).where(
                    PlayerStyleTable.player_id == self._player_id,
                    PlayerStyleTable.style_id.in_(removed_styles),
                )
            )

        for item_id, quantity in record.owned_items.items():
            previous = before.owned_items.get(item_id)
            if previous is None:
                await self._session.execute(
                    insert(PlayerItemTable).values(
                        player_id=self._player_id, item_id=item_id, quantity=quantity
                    )
                )
            elif previous != quantity:
                await self._session.execute(
                    update(PlayerItemTable)
                    .where(
                        PlayerItemTable.player_id == self._player_id,
                        PlayerItemTable.item_id == item_id,
                    )
                    .values(quantity=quantity)
                )
        removed_items = set(before.owned_items) - set(record.owned_items)
        if removed_items:
            await self._session.execute(
                delete(PlayerItemTable).where(
                    PlayerItemTable.player_id == self._player_id,
                    PlayerItemTable.item_id.in_(removed_items),
                )
            )

    async def append_transaction(self, record: TransactionRecord) -> None:
        if record.player_id != self._player_id:
            raise ValueError("Transaction is scoped to a different player")
        await self._session.execute(
            insert(TransactionTable).values(
                transaction_id=record.transaction_id,
                player_id=record.player_id,
                kind=record.kind,
                currency=record.currency.value,
                amount=record.amount,
                description=record.description,
                created_at=record.timestamp,
            )
        )


class AsyncSQLAlchemyPlayerLedger(PlayerLedger):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()

    def _lock_for(self, player_id: str) -> asyncio.Lock:
        lock = self._locks.get(player_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[player_id] = lock
        return lock

    @asynccontextmanager
    async def transaction(self, player_id: str) -> AsyncIterator[LedgerTransaction]:
        async with self._lock_for(player_id):
            try:
                async with self._session_factory() as session:
                    async with session.begin():
                        yield _SQLAlchemyLedgerTransaction(session, player_id)
            except SQLAlchemyError as exc:
                logger.exception("Ledger transaction for player %s rolled back", player_id)
                raise StorageFailure() from exc

    async def get(self, player_id: str) -> PlayerRecord | None:
        try:
            async with self._session_factory() as session:
                return await _load_player(session, player_id)
        except SQLAlchemyError as exc:
            raise StorageFailure() from exc

    async def create(self, record: PlayerRecord) -> PlayerRecord:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    existing = await session.get(PlayerTable, record.player_id)
                    if existing is None:
                        session.add(
                            PlayerTable(
                                player_id=record.player_id,
                                username=record.username,
                                gp=record.balances.get(Currency.GP, 0),
                                fc=record.balances.get(Currency.FC, 0),
                                stats=_stats_payload(record),
                                version=0,
                            )
                        )
        except IntegrityError:
            # Registered concurrently by another request.
            logger.info("Player %s already registered", record.player_id)
        except SQLAlchemyError as exc:
            raise StorageFailure() from exc

        created = await self.get(record.player_id)
        if created is None:
            raise StorageFailure(f"Player {record.player_id} could not be created")
        return created

    async def transactions_for(self, player_id: str, limit: int = 20) -> Sequence[TransactionRecord]:
        stmt = (
            select(TransactionTable)
            .where(TransactionTable.player_id == player_id)
            .order_by(TransactionTable.created_at.desc())
            .limit(limit)
        )
        try:
            async with self._session_factory() as session:
                rows = (await session.execute(stmt)).scalars().all()
        except SQLAlchemyError as exc:
            raise StorageFailure() from exc
        return [
            TransactionRecord(
                transaction_id=row.transaction_id,
                player_id=row.player_id,
                kind=row.kind,
                currency=Currency(row.currency),
                amount=row.amount,
                description=row.description,
                timestamp=row.created_at,
            )
            for row in rows
        ]


class AsyncSQLAlchemyAuditStore(AuditStore):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def add_entry(self, action: str, payload: dict) -> None:
        try:
            async with self._session_factory() as session:
                session.add(
                    AuditTable(
                        created_at=datetime.now(timezone.utc),
                        action=action,
                        payload=dict(payload),
                    )
                )
                await session.commit()
        except SQLAlchemyError as exc:
            logger.exception("Audit entry %s could not be written", action)
            raise StorageFailure() from exc
