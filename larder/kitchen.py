"""Kitchen session: the explicit state container for one user session."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date
from typing import TYPE_CHECKING

from .dates import offset_date
from .errors import GatewayError
from .inventory import InventoryStore, demo_items, validate_new_item
from .ledger import ConsumptionLedger, ConsumptionSummary
from .models import InventoryItem, NewItem, Recipe, ScannedItem
from .notifier import DEFAULT_THRESHOLD, ExpiryAlert, ExpiryNotifier

if TYPE_CHECKING:
    from .config import LarderConfig
    from .gateway import AIGateway

logger = logging.getLogger(__name__)

EMPTY_INVENTORY_MESSAGE = "Please add some items to your inventory first."
NOTHING_FOUND_MESSAGE = (
    "The AI couldn't find any food items on the receipt. "
    "Please try another image."
)


class Kitchen:
    """Inventory, consumption ledger, expiry alert and AI results.

    AI operations catch GatewayError, store its message in ``error`` and
    leave the rest of the state untouched.
    """

    def __init__(
        self,
        gateway: AIGateway,
        *,
        threshold: int = DEFAULT_THRESHOLD,
        receipt_expiry_days: int = 7,
        items: Iterable[NewItem] = (),
    ) -> None:
        self.gateway = gateway
        self.inventory = InventoryStore(items)
        self.ledger = ConsumptionLedger()
        self.notifier = ExpiryNotifier(threshold)
        self.receipt_expiry_days = receipt_expiry_days

        self.recipes: list[Recipe] = []
        self.pending_scan: list[ScannedItem] = []
        self.error: str | None = None
        self.notice: str | None = None

        self.suggesting = False
        self.scanning = False
        self.categorizing = False

    @classmethod
    def from_config(cls, config: LarderConfig) -> Kitchen:
        """Build a session from configuration.

        Raises:
            MissingCredentialError: If no API key is configured.
        """
        from .gateway import create_gateway

        gateway = create_gateway(config)
        items = demo_items() if config.inventory.seed_demo else []
        return cls(
            gateway,
            threshold=config.reminders.threshold_days,
            receipt_expiry_days=config.inventory.receipt_expiry_days,
            items=items,
        )

    # -- inventory -------------------------------------------------------

    def add_item(
        self, name: str, quantity: str, expiry_date: str | date
    ) -> InventoryItem:
        """Add a manually entered item.

        Raises:
            ValidationError: If the name or expiry date is missing.
        """
        item = self.inventory.add(validate_new_item(name, quantity, expiry_date))
        logger.info("Added %s, expires %s", item.name, item.expiry_date)
        return item

    def delete_item(self, item_id: str) -> InventoryItem | None:
        return self.inventory.remove(item_id)

    def mark_cooked(self, recipe: Recipe) -> list[InventoryItem]:
        """Move the items a recipe uses from the inventory to the ledger."""
        used = self.inventory.remove_used(recipe.ingredients)
        self.ledger.record(used)
        logger.info(
            "Cooked %s: used %s",
            recipe.name,
            ", ".join(i.name for i in used) or "nothing from the inventory",
        )
        return used

    # -- reminders -------------------------------------------------------

    @property
    def threshold(self) -> int:
        return self.notifier.threshold

    def set_threshold(self, days: int) -> None:
        self.notifier.threshold = days

    def expiring_items(self, today: date | None = None) -> list[InventoryItem]:
        return self.notifier.refresh(self.inventory, today)

    def alert(self, today: date | None = None) -> ExpiryAlert | None:
        return self.notifier.alert(self.inventory, today)

    def dismiss_alert(self) -> None:
        self.notifier.dismiss()

    # -- AI operations ---------------------------------------------------

    async def suggest_recipes(self, today: date | None = None) -> list[Recipe]:
        if len(self.inventory) == 0:
            self.error = EMPTY_INVENTORY_MESSAGE
            return []

        self.suggesting = True
        self.error = None
        try:
            self.recipes = await self.gateway.suggest_recipes(
                self.inventory.items, today
            )
        except GatewayError as e:
            logger.warning("Recipe suggestion failed: %s", e)
            self.error = str(e)
            return []
        finally:
            self.suggesting = False
        return self.recipes

    async def scan_receipt(self, image: bytes, media_type: str) -> list[ScannedItem]:
        """Parse a receipt photo into items awaiting confirmation."""
        self.scanning = True
        self.error = None
        self.notice = None
        try:
            items = await self.gateway.parse_receipt(image, media_type)
        except GatewayError as e:
            logger.warning("Receipt scan failed: %s", e)
            self.error = str(e)
            return []
        finally:
            self.scanning = False

        if not items:
            self.notice = NOTHING_FOUND_MESSAGE
            return []
        self.pending_scan = items
        return items

    def review_scan(self, today: date | None = None) -> list[NewItem]:
        """Pending scanned items with a default expiry date filled in."""
        expiry = offset_date(self.receipt_expiry_days, today)
        return [
            NewItem(name=item.name, quantity=item.quantity, expiry_date=expiry)
            for item in self.pending_scan
        ]

    def confirm_scan(self, items: Iterable[NewItem]) -> list[InventoryItem]:
        """Add reviewed receipt items to the inventory.

        Raises:
            ValidationError: If any reviewed item lost its name or expiry date.
                Nothing is added in that case.
        """
        checked = [
            validate_new_item(item.name, item.quantity, item.expiry_date)
            for item in items
        ]
        added = self.inventory.add_many(checked)
        self.pending_scan = []
        logger.info("Added %d items from receipt", len(added))
        return added

    def reject_scan(self) -> None:
        self.pending_scan = []

    async def consumption_summary(self) -> ConsumptionSummary | None:
        self.categorizing = True
        self.error = None
        try:
            return await self.ledger.summarize(self.gateway)
        except GatewayError as e:
            logger.warning("Consumption summary failed: %s", e)
            self.error = str(e)
            return None
        finally:
            self.categorizing = False
