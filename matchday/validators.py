"""Validation utilities for Matchday applications."""

from __future__ import annotations

from .app import StoreApp
from .domain.catalog import Currency, ItemKind


def validate_app(app: StoreApp) -> list[str]:
    """Return list of validation errors discovered in configured app."""
    errors: list[str] = []

    entries = list(app.catalog.catalog.iter_entries())
    if not entries:
        errors.append("No catalog entries registered in application.")

    names: dict[str, str] = {}
    for entry in entries:
        if entry.cost <= 0:
            errors.append(f"{entry.kind.value.title()} '{entry.entry_id}' has non-positive cost '{entry.cost}'.")
        if entry.kind is not ItemKind.ITEM and entry.currency is not Currency.GP:
            errors.append(f"{entry.kind.value.title()} '{entry.entry_id}' must be priced in GP.")
        if entry.kind is ItemKind.ITEM and entry.item_type is None:
            errors.append(f"Item '{entry.entry_id}' does not declare a type.")
        if not entry.name.strip():
            errors.append(f"{entry.kind.value.title()} '{entry.entry_id}' has an empty name.")
        elif entry.name in names:
            errors.append(f"Name '{entry.name}' is shared by '{names[entry.name]}' and '{entry.entry_id}'.")
        else:
            names[entry.name] = entry.entry_id

    economy = app.config.economy
    if economy.starting_gp < 0 or economy.starting_fc < 0:
        errors.append("Economy configuration starting balances cannot be negative.")

    stats = app.config.stats
    if stats.min_value > stats.max_value:
        errors.append("Stat configuration 'min_value' cannot exceed 'max_value'.")
    if not stats.min_value <= stats.default_value <= stats.max_value:
        errors.append("Stat configuration 'default_value' must lie within the allowed range.")

    if app.config.auth.secret_key == "change-me":
        errors.append("Auth secret key is still the default value.")

    return errors


__all__ = ["validate_app"]
