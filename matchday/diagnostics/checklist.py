"""Automated checks to highlight store pricing issues."""

from __future__ import annotations

from dataclasses import dataclass
from statistics import median

from ..app import StoreApp
from ..domain.catalog import Currency, ItemKind


@dataclass(slots=True)
class ChecklistIssue:
    severity: str
    message: str


def run_checklist(app: StoreApp) -> list[ChecklistIssue]:
    issues: list[ChecklistIssue] = []
    catalog = app.catalog.catalog
    starting = {
        Currency.GP: app.config.economy.starting_gp,
        Currency.FC: app.config.economy.starting_fc,
    }

    for kind in ItemKind:
        if not list(catalog.iter_kind(kind)):
            issues.append(ChecklistIssue("warning", f"No {kind.value} entries are for sale."))

    for entry in catalog.iter_entries():
        if entry.cost > starting[entry.currency]:
            issues.append(
                ChecklistIssue(
                    "info",
                    f"{entry.name} costs {entry.cost} {entry.currency.label}, "
                    f"more than a new player's {starting[entry.currency]}.",
                )
            )

    for currency in Currency:
        costs = [entry.cost for entry in catalog.iter_entries() if entry.currency is currency]
        if len(costs) < 3:
            continue
        typical = median(costs)
        for entry in catalog.iter_entries():
            if entry.currency is currency and entry.cost > typical * 10:
                issues.append(
                    ChecklistIssue(
                        "warning",
                        f"{entry.name} is priced far above the median {currency.label} price ({typical}).",
                    )
                )

    return issues
