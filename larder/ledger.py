"""Consumption ledger and its per-category summary."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .models import CategorizedItem, InventoryItem

if TYPE_CHECKING:
    from .gateway import AIGateway


@dataclass
class ConsumptionSummary:
    """Category counts of consumed items, in first-seen order."""

    counts: dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    @property
    def is_empty(self) -> bool:
        return self.total == 0

    def proportions(self) -> dict[str, float]:
        total = self.total
        if total == 0:
            return {}
        return {category: count / total for category, count in self.counts.items()}

    def percentages(self) -> dict[str, int]:
        """Whole-number percentages per category, as shown in a legend."""
        return {
            category: round(share * 100)
            for category, share in self.proportions().items()
        }


def summarize(categorized: Iterable[CategorizedItem]) -> ConsumptionSummary:
    counts: dict[str, int] = {}
    for item in categorized:
        counts[item.category] = counts.get(item.category, 0) + 1
    return ConsumptionSummary(counts=counts)


class ConsumptionLedger:
    """Append-only record of items used up by cooking a recipe."""

    def __init__(self) -> None:
        self._items: list[InventoryItem] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[InventoryItem]:
        return iter(list(self._items))

    @property
    def items(self) -> tuple[InventoryItem, ...]:
        return tuple(self._items)

    def record(self, items: Iterable[InventoryItem]) -> None:
        self._items.extend(items)

    def names(self) -> list[str]:
        return [item.name for item in self._items]

    async def summarize(self, gateway: AIGateway) -> ConsumptionSummary:
        """Categorize consumed items through the gateway and count them.

        Raises:
            CategorizationError: If the gateway request fails.
        """
        if not self._items:
            return ConsumptionSummary()
        categorized = await gateway.categorize_items(self.names())
        return summarize(categorized)
