"""Example store setup: JSON catalog plus a few hand-registered entries."""

from __future__ import annotations

import asyncio
from pathlib import Path

from matchday import MatchdayConfig, StoreApp
from matchday.domain.catalog import Currency, ItemType
from matchday.loaders import load_catalog_from_json


def register(app: StoreApp) -> None:
    catalog_path = Path(__file__).with_name("catalog") / "store.json"
    load_catalog_from_json(app, catalog_path)

    app.catalog.skill("chip-shot", "Chip Shot Control", 350).item(
        "recovery-kit", "Recovery Kit", 120, Currency.GP, item_type=ItemType.CONSUMABLE
    )


async def demo() -> None:
    app = StoreApp(MatchdayConfig.from_env())
    register(app)
    await app.init_backend()

    await app.player_service.register("demo-player", "demo")
    result = await app.settlement_service.settle_purchase("demo-player", "skill", "rabona")
    print(f"{result.message}: {result.entry.name}, {result.remaining_balance} {result.currency.label} left")

    profile = await app.player_service.fetch("demo-player")
    print(profile.to_dict())
    await app.close()


if __name__ == "__main__":
    asyncio.run(demo())
