"""Runtime registry for store catalog entries."""

from __future__ import annotations

from .domain.catalog import Catalog, CatalogEntry, Currency, ItemKind, ItemType


class CatalogRegistry:
    """Facade around Catalog with chainable API."""

    def __init__(self) -> None:
        self.catalog = Catalog()

    def entry(self, entry: CatalogEntry) -> "CatalogRegistry":
        self.catalog.register(entry)
        return self

    def skill(self, skill_id: str, name: str, cost: int, *, description: str = "") -> "CatalogRegistry":
        return self.entry(
            CatalogEntry(entry_id=skill_id, kind=ItemKind.SKILL, name=name, cost=cost, description=description)
        )

    def style(self, style_id: str, name: str, cost: int, *, description: str = "") -> "CatalogRegistry":
        return self.entry(
            CatalogEntry(entry_id=style_id, kind=ItemKind.STYLE, name=name, cost=cost, description=description)
        )

    def item(
        self,
        item_id: str,
        name: str,
        cost: int,
        currency: Currency,
        *,
        item_type: ItemType = ItemType.CONSUMABLE,
        description: str = "",
    ) -> "CatalogRegistry":
        return self.entry(
            CatalogEntry(
                entry_id=item_id,
                kind=ItemKind.ITEM,
                name=name,
                cost=cost,
                currency=currency,
                description=description,
                item_type=item_type,
            )
        )


__all__ = ["CatalogRegistry"]
