"""In-memory inventory store kept in expiry order."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Iterator
from datetime import date

from .dates import offset_date, parse_date
from .errors import ValidationError
from .models import InventoryItem, NewItem

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS_MESSAGE = "Please fill in at least the item name and expiry date."

# Starter inventory: (name, quantity, days until expiry)
_DEMO_ITEMS: list[tuple[str, str, int]] = [
    ("Chicken Breasts", "2 lbs", 3),
    ("Broccoli", "1 head", 5),
    ("Bell Peppers", "2", 7),
    ("Yogurt", "500g", 1),
]


def sort_by_expiry(items: Iterable[InventoryItem]) -> list[InventoryItem]:
    """Return items ordered by expiry date; ties keep their order."""
    return sorted(items, key=lambda item: item.expiry_date)


def is_used_in(item: InventoryItem, ingredients: Iterable[str]) -> bool:
    """True if the item's name appears inside any ingredient line.

    Case-insensitive substring match, so "Broccoli" matches "2 cups broccoli"
    but "Bell Peppers" does not match "1 pepper". A blank name matches nothing.
    """
    needle = item.name.strip().lower()
    if not needle:
        return False
    return any(needle in ingredient.lower() for ingredient in ingredients)


def split_used(
    items: Iterable[InventoryItem], ingredients: Iterable[str]
) -> tuple[list[InventoryItem], list[InventoryItem]]:
    """Partition items into (remaining, used) for a recipe's ingredients."""
    ingredients = list(ingredients)
    remaining: list[InventoryItem] = []
    used: list[InventoryItem] = []
    for item in items:
        (used if is_used_in(item, ingredients) else remaining).append(item)
    return remaining, used


def validate_new_item(
    name: str | None, quantity: str | None, expiry_date: str | date | None
) -> NewItem:
    """Build a NewItem from raw form input.

    Raises:
        ValidationError: If the name or expiry date is missing.
    """
    name = (name or "").strip()
    if not name or not expiry_date or (
        isinstance(expiry_date, str) and not expiry_date.strip()
    ):
        raise ValidationError(_REQUIRED_FIELDS_MESSAGE)
    return NewItem(
        name=name,
        quantity=(quantity or "").strip(),
        expiry_date=parse_date(expiry_date),
    )


def demo_items(today: date | None = None) -> list[NewItem]:
    """A small starter inventory relative to today."""
    return [
        NewItem(name=name, quantity=qty, expiry_date=offset_date(days, today))
        for name, qty, days in _DEMO_ITEMS
    ]


class InventoryStore:
    """Ordered collection of inventory items.

    The list is re-sorted ascending by expiry date after every insertion.
    """

    def __init__(self, items: Iterable[NewItem] = ()) -> None:
        self._items: list[InventoryItem] = []
        self.add_many(items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[InventoryItem]:
        return iter(list(self._items))

    def __contains__(self, item_id: object) -> bool:
        return any(item.id == item_id for item in self._items)

    @property
    def items(self) -> tuple[InventoryItem, ...]:
        return tuple(self._items)

    def get(self, item_id: str) -> InventoryItem | None:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def add(self, item: NewItem) -> InventoryItem:
        """Insert an item under a fresh id and keep the store sorted."""
        stored = self._assign_id(item)
        self._items = sort_by_expiry([*self._items, stored])
        logger.debug("Added %s (%s)", stored.name, stored.id)
        return stored

    def add_many(self, items: Iterable[NewItem]) -> list[InventoryItem]:
        stored = [self._assign_id(item) for item in items]
        if stored:
            self._items = sort_by_expiry([*self._items, *stored])
            logger.debug("Added %d items", len(stored))
        return stored

    def remove(self, item_id: str) -> InventoryItem | None:
        """Delete an item by id. Unknown ids are ignored."""
        for index, item in enumerate(self._items):
            if item.id == item_id:
                del self._items[index]
                logger.debug("Removed %s (%s)", item.name, item.id)
                return item
        return None

    def remove_used(self, ingredients: Iterable[str]) -> list[InventoryItem]:
        """Remove and return every item used by the given ingredient lines."""
        remaining, used = split_used(self._items, ingredients)
        self._items = remaining
        return used

    def _assign_id(self, item: NewItem) -> InventoryItem:
        return InventoryItem(
            id=uuid.uuid4().hex,
            name=item.name,
            quantity=item.quantity,
            expiry_date=parse_date(item.expiry_date),
        )
