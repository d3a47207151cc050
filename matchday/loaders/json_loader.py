"""Load store catalogs (skills, styles, items) from JSON definitions."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Sequence, TYPE_CHECKING

from ..domain.catalog import CatalogEntry, Currency, ItemKind, ItemType

if TYPE_CHECKING:
    from ..app import StoreApp

# JSON section name for each kind, matching the store listing payload.
SECTIONS: dict[ItemKind, str] = {
    ItemKind.SKILL: "skills",
    ItemKind.STYLE: "comStyles",
    ItemKind.ITEM: "items",
}


@dataclass(slots=True)
class CatalogDefinition:
    skills: Sequence[CatalogEntry]
    styles: Sequence[CatalogEntry]
    items: Sequence[CatalogEntry]

    def entries(self) -> Iterable[CatalogEntry]:
        yield from self.skills
        yield from self.styles
        yield from self.items


def load_catalog_from_json(app: "StoreApp", path: str | Path) -> CatalogDefinition:
    """Load skills/styles/items from a JSON file and register them on the app."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    definition = parse_catalog_dict(data)
    for entry in definition.entries():
        app.catalog.entry(entry)
    return definition


def parse_catalog_dict(data: dict[str, Any]) -> CatalogDefinition:
    """Parse a JSON dict (already decoded) into catalog entries."""
    errors = validate_catalog_dict(data)
    if errors:
        raise ValueError(_format_errors("Catalog validation failed", errors))
    return CatalogDefinition(
        skills=tuple(parse_entry(ItemKind.SKILL, raw) for raw in data.get("skills", [])),
        styles=tuple(parse_entry(ItemKind.STYLE, raw) for raw in data.get("comStyles", [])),
        items=tuple(parse_entry(ItemKind.ITEM, raw) for raw in data.get("items", [])),
    )


def parse_entry(kind: ItemKind, entry: dict[str, Any]) -> CatalogEntry:
    if kind is ItemKind.ITEM:
        return CatalogEntry(
            entry_id=entry["id"],
            kind=kind,
            name=entry["name"],
            cost=int(entry["cost"]),
            currency=Currency(entry["currency"]),
            description=entry.get("description", ""),
            item_type=ItemType(entry.get("type", ItemType.CONSUMABLE.value)),
        )
    return CatalogEntry(
        entry_id=entry["id"],
        kind=kind,
        name=entry["name"],
        cost=int(entry["cost"]),
        description=entry.get("description", ""),
    )


def validate_catalog_file(path: str | Path) -> list[str]:
    """Validate catalog JSON file and return a list of errors."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return validate_catalog_dict(data)


def validate_catalog_dict(data: dict[str, Any]) -> list[str]:
    errors: list[str] = []
    if not isinstance(data, dict):
        return ["Catalog must be a JSON object."]

    if not any(data.get(section) for section in SECTIONS.values()):
        errors.append("Catalog must define at least one of 'skills', 'comStyles' or 'items'.")

    names: set[str] = set()
    for kind, section in SECTIONS.items():
        raw = data.get(section, [])
        if not isinstance(raw, list):
            errors.append(f"'{section}' must be an array.")
            continue
        label = kind.value.title()
        ids: set[str] = set()
        for idx, entry in enumerate(raw, start=1):
            if not isinstance(entry, dict):
                errors.append(f"{label} #{idx} must be an object.")
                continue
            entry_id = entry.get("id")
            if not isinstance(entry_id, str) or not entry_id.strip():
                errors.append(f"{label} #{idx} must define non-empty 'id'.")
                continue
            if entry_id in ids:
                errors.append(f"{label} id '{entry_id}' defined multiple times.")
            ids.add(entry_id)

            name = entry.get("name")
            if not isinstance(name, str) or not name.strip():
                errors.append(f"{label} '{entry_id}' must define non-empty 'name'.")
            elif name in names:
                errors.append(f"Name '{name}' is used by more than one catalog entry.")
            else:
                names.add(name)

            cost = entry.get("cost")
            if isinstance(cost, bool) or not isinstance(cost, int) or cost <= 0:
                errors.append(f"{label} '{entry_id}' has invalid 'cost' value '{cost}'.")

            currency = entry.get("currency")
            if kind is ItemKind.ITEM:
                try:
                    Currency(currency)
                except ValueError:
                    errors.append(f"Item '{entry_id}' has invalid currency '{currency}'.")
                item_type = entry.get("type", ItemType.CONSUMABLE.value)
                try:
                    ItemType(item_type)
                except ValueError:
                    errors.append(f"Item '{entry_id}' has invalid type '{item_type}'.")
            elif currency is not None and currency != Currency.GP.value:
                errors.append(f"{label} '{entry_id}' must be priced in 'gp'.")

    return errors


def _format_errors(prefix: str, errors: Iterable[str]) -> str:
    formatted = "\n".join(f"- {err}" for err in errors)
    return f"{prefix}:\n{formatted}"
