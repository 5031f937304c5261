"""Expiry threshold filtering and the dismissible reminder alert."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from .dates import days_until_expiry
from .models import InventoryItem

THRESHOLD_OPTIONS: tuple[int, ...] = (1, 3, 7)
DEFAULT_THRESHOLD = 3


@dataclass(frozen=True)
class ExpiryAlert:
    items: tuple[InventoryItem, ...]

    @property
    def message(self) -> str:
        names = ", ".join(item.name for item in self.items)
        return f"Heads up! These items are expiring soon: {names}"


def _check_threshold(threshold: int) -> int:
    if isinstance(threshold, bool) or not isinstance(threshold, int):
        raise ValueError(f"Threshold must be an integer, got {threshold!r}")
    if threshold < 0:
        raise ValueError(f"Threshold must be >= 0, got {threshold}")
    return threshold


def expiring_items(
    items: Iterable[InventoryItem], threshold: int, today: date | None = None
) -> list[InventoryItem]:
    """Items expiring within ``threshold`` days, today included.

    Already expired items are left out.
    """
    _check_threshold(threshold)
    return [
        item
        for item in items
        if 0 <= days_until_expiry(item.expiry_date, today) <= threshold
    ]


def _set_key(items: Iterable[InventoryItem]) -> str:
    return ",".join(sorted(item.id for item in items))


class ExpiryNotifier:
    """Tracks whether the expiry alert should be shown.

    The alert becomes visible again whenever the set of expiring items
    changes, and stays hidden after ``dismiss()`` until then.
    """

    def __init__(self, threshold: int = DEFAULT_THRESHOLD) -> None:
        self._threshold = _check_threshold(threshold)
        self._visible = True
        self._last_key: str | None = None

    @property
    def threshold(self) -> int:
        return self._threshold

    @threshold.setter
    def threshold(self, value: int) -> None:
        self._threshold = _check_threshold(value)

    @property
    def visible(self) -> bool:
        return self._visible

    def refresh(
        self, items: Iterable[InventoryItem], today: date | None = None
    ) -> list[InventoryItem]:
        expiring = expiring_items(items, self._threshold, today)
        key = _set_key(expiring)
        if key != self._last_key:
            self._last_key = key
            if expiring:
                self._visible = True
        return expiring

    def dismiss(self) -> None:
        self._visible = False

    def alert(
        self, items: Iterable[InventoryItem], today: date | None = None
    ) -> ExpiryAlert | None:
        """Refresh and return the alert if it should currently be shown."""
        expiring = self.refresh(items, today)
        if self._visible and expiring:
            return ExpiryAlert(items=tuple(expiring))
        return None
