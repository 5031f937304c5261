"""Expiry-aware kitchen inventory with AI recipe and receipt support."""

from .config import (
    ClaudeGatewayConfig,
    GatewayConfig,
    GeminiGatewayConfig,
    InventoryConfig,
    LarderConfig,
    ReminderConfig,
    load_config,
)
from .dates import ExpiryStatus, days_until_expiry, expiry_status
from .errors import (
    CategorizationError,
    GatewayError,
    LarderError,
    MissingCredentialError,
    ReceiptParseError,
    SuggestionError,
    ValidationError,
)
from .gateway import AIGateway, create_gateway
from .inventory import InventoryStore
from .kitchen import Kitchen
from .ledger import ConsumptionLedger, ConsumptionSummary
from .models import (
    CATEGORIES,
    CategorizedItem,
    InventoryItem,
    NewItem,
    Recipe,
    ScannedItem,
)
from .notifier import THRESHOLD_OPTIONS, ExpiryAlert, ExpiryNotifier, expiring_items

__all__ = [
    "Kitchen",
    "InventoryStore",
    "ConsumptionLedger",
    "ConsumptionSummary",
    "ExpiryNotifier",
    "ExpiryAlert",
    "expiring_items",
    "THRESHOLD_OPTIONS",
    "days_until_expiry",
    "expiry_status",
    "ExpiryStatus",
    "AIGateway",
    "create_gateway",
    "InventoryItem",
    "NewItem",
    "Recipe",
    "ScannedItem",
    "CategorizedItem",
    "CATEGORIES",
    "LarderError",
    "ValidationError",
    "MissingCredentialError",
    "GatewayError",
    "SuggestionError",
    "ReceiptParseError",
    "CategorizationError",
    "LarderConfig",
    "ReminderConfig",
    "InventoryConfig",
    "GatewayConfig",
    "GeminiGatewayConfig",
    "ClaudeGatewayConfig",
    "load_config",
]
