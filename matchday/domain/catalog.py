"""Store catalog models and lookup."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from .exceptions import InvalidCurrency, InvalidItemKind, ItemNotFound


class Currency(str, Enum):
    GP = "gp"
    FC = "fc"

    @property
    def label(self) -> str:
        return self.value.upper()

    @classmethod
    def parse(cls, value: "str | Currency") -> "Currency":
        if isinstance(value, Currency):
            return value
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidCurrency(value) from exc


class ItemKind(str, Enum):
    SKILL = "skill"
    STYLE = "style"
    ITEM = "item"

    @classmethod
    def parse(cls, value: "str | ItemKind") -> "ItemKind":
        if isinstance(value, ItemKind):
            return value
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidItemKind(value) from exc


class ItemType(str, Enum):
    CONSUMABLE = "consumable"
    SPECIAL = "special"


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """Purchasable skill, style or item."""

    entry_id: str
    kind: ItemKind
    name: str
    cost: int
    currency: Currency = Currency.GP
    description: str = ""
    item_type: ItemType | None = None

    def __post_init__(self) -> None:
        if self.cost <= 0:
            raise ValueError(f"Catalog entry {self.entry_id} must have a positive cost")
        if self.kind is not ItemKind.ITEM and self.currency is not Currency.GP:
            raise ValueError(f"{self.kind.value.title()} {self.entry_id} must be priced in GP")

    def to_dict(self) -> dict:
        data = {
            "id": self.entry_id,
            "name": self.name,
            "description": self.description,
            "cost": self.cost,
            "currency": self.currency.value,
        }
        if self.item_type is not None:
            data["type"] = self.item_type.value
        return data


class Catalog:
    """Read-only registry of purchasable entries, keyed by kind and id."""

    def __init__(self) -> None:
        self._entries: dict[ItemKind, dict[str, CatalogEntry]] = {kind: {} for kind in ItemKind}

    def register(self, entry: CatalogEntry) -> None:
        bucket = self._entries[entry.kind]
        if entry.entry_id in bucket:
            raise ValueError(f"{entry.kind.value.title()} {entry.entry_id} already registered")
        bucket[entry.entry_id] = entry

    def register_many(self, entries: Iterable[CatalogEntry]) -> None:
        for entry in entries:
            self.register(entry)

    def get(self, kind: ItemKind, entry_id: str) -> CatalogEntry:
        try:
            return self._entries[kind][entry_id]
        except KeyError as exc:
            raise ItemNotFound(kind, entry_id) from exc

    def iter_kind(self, kind: ItemKind) -> Iterable[CatalogEntry]:
        return self._entries[kind].values()

    def iter_entries(self) -> Iterable[CatalogEntry]:
        for kind in ItemKind:
            yield from self._entries[kind].values()

