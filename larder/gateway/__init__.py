"""AI gateway base class, prompt construction, response parsing and factory."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import date
from typing import TYPE_CHECKING, Any

from ..dates import days_until_expiry
from ..errors import CategorizationError, ReceiptParseError, SuggestionError
from ..inventory import sort_by_expiry
from ..models import (
    CATEGORIES,
    DEFAULT_CATEGORY,
    CategorizedItem,
    InventoryItem,
    Recipe,
    ScannedItem,
    normalize_category,
)

if TYPE_CHECKING:
    from ..config import LarderConfig

logger = logging.getLogger(__name__)

_RECIPE_PROMPT = """\
You are a creative chef's assistant specialized in reducing food waste. \
I have the following ingredients in my kitchen. Please suggest three distinct \
recipes that primarily use these ingredients, prioritizing those closest to \
their expiration date. Also consider common pantry staples I might have \
(like oil, salt, pepper, flour, sugar, spices).

My ingredients:
{ingredients}

For each recipe, provide a name, a short, enticing description (1-2 sentences), \
a list of all ingredients needed, and clear, step-by-step instructions. \
Return only a JSON array of objects with the keys "recipeName", "description", \
"ingredients" (array of strings) and "instructions" (array of strings).
"""

_RECEIPT_PROMPT = """\
You are an intelligent receipt scanner for a kitchen inventory app. Analyze \
this image of a grocery receipt and extract only the food items.

For each item, provide its name and quantity. Ignore all non-food items, taxes, \
totals, store information, discounts, and other irrelevant details.

Return only a JSON array of objects, where each object has "name" and \
"quantity" keys. If no food items are found, return an empty array.
"""

_CATEGORIZE_PROMPT = """\
You are a food categorization expert for a kitchen inventory app. For each item \
in the list below, classify it into ONE of the following categories: \
{categories}.

Analyze this list: {names}

Return only a JSON array of objects, where each object has a "name" and \
"category" key. The "name" must exactly match the item name provided.
"""


def format_inventory_line(item: InventoryItem, today: date | None = None) -> str:
    days = days_until_expiry(item.expiry_date, today)
    if days < 0:
        expiry_info = f"(expired {-days} days ago)"
    else:
        expiry_info = f"(expires in {days} days)"
    return f"- {item.name} ({item.quantity}) {expiry_info}"


def build_recipe_prompt(
    inventory: Iterable[InventoryItem], today: date | None = None
) -> str:
    """Prompt listing the inventory soonest-expiring first."""
    lines = [format_inventory_line(i, today) for i in sort_by_expiry(inventory)]
    return _RECIPE_PROMPT.format(ingredients="\n".join(lines))


def build_categorize_prompt(names: list[str]) -> str:
    categories = ", ".join(f"'{c}'" for c in CATEGORIES)
    return _CATEGORIZE_PROMPT.format(
        categories=categories, names=json.dumps(names, ensure_ascii=False)
    )


def _load_json_array(text: str) -> list[Any]:
    """Parse a JSON array from model output, tolerating Markdown fences."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        lines = [line for line in lines[1:] if not line.strip().startswith("```")]
        cleaned = "\n".join(lines)

    data = json.loads(cleaned)
    # Some models wrap the array in a single-key object
    if isinstance(data, dict) and len(data) == 1:
        data = next(iter(data.values()))
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array, got {type(data).__name__}")
    return data


def _string_list(value: Any, field_name: str) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise ValueError(f"{field_name!r} must be a list")
    return tuple(str(v) for v in value)


def parse_recipes(text: str) -> list[Recipe]:
    recipes: list[Recipe] = []
    for entry in _load_json_array(text):
        if not isinstance(entry, dict):
            raise ValueError("Recipe entries must be objects")
        name = entry.get("recipeName") or entry.get("name")
        if not name:
            raise ValueError("Recipe is missing a name")
        recipes.append(
            Recipe(
                name=str(name),
                description=str(entry.get("description", "")),
                ingredients=_string_list(entry.get("ingredients"), "ingredients"),
                instructions=_string_list(entry.get("instructions"), "instructions"),
            )
        )
    if not recipes:
        raise ValueError("Reply contained no recipes")
    return recipes


def parse_scanned_items(text: str) -> list[ScannedItem]:
    items: list[ScannedItem] = []
    for entry in _load_json_array(text):
        if not isinstance(entry, dict):
            raise ValueError("Receipt entries must be objects")
        name = str(entry.get("name") or "").strip()
        if not name:
            continue
        quantity = entry.get("quantity")
        items.append(
            ScannedItem(name=name, quantity="" if quantity is None else str(quantity))
        )
    return items


def parse_categories(text: str, names: list[str]) -> list[CategorizedItem]:
    """Match the model's labels back onto the requested names.

    Every requested name gets exactly one entry, in request order; names the
    model skipped fall back to the default category. A reply that labels none
    of the requested names is rejected.
    """
    labels: dict[str, str] = {}
    for entry in _load_json_array(text):
        if not isinstance(entry, dict) or "name" not in entry:
            raise ValueError("Category entries must be objects with a name")
        labels.setdefault(
            str(entry["name"]).strip().lower(),
            normalize_category(str(entry.get("category", ""))),
        )
    keys = [name.strip().lower() for name in names]
    if keys and not any(key in labels for key in keys):
        raise ValueError("Reply labelled none of the requested items")
    return [
        CategorizedItem(
            name=name, category=labels.get(name.strip().lower(), DEFAULT_CATEGORY)
        )
        for name in names
    ]


class AIGateway(ABC):
    """Recipe, receipt and categorization requests to a generative model.

    Backends implement ``_generate``; every failure of a request, transport
    or parsing, surfaces as the operation's GatewayError subclass.
    """

    @abstractmethod
    async def _generate(
        self, prompt: str, image: tuple[bytes, str] | None = None
    ) -> str:
        """Send one prompt (with an optional ``(data, media_type)`` image)
        and return the raw text of the model's reply."""
        ...

    async def suggest_recipes(
        self, inventory: Iterable[InventoryItem], today: date | None = None
    ) -> list[Recipe]:
        prompt = build_recipe_prompt(inventory, today)
        try:
            text = await self._generate(prompt)
            return parse_recipes(text)
        except Exception as e:
            logger.exception("Error fetching recipe suggestions")
            raise SuggestionError() from e

    async def parse_receipt(self, image: bytes, media_type: str) -> list[ScannedItem]:
        """Extract food items from a receipt photo. May return an empty list."""
        try:
            text = await self._generate(_RECEIPT_PROMPT, image=(image, media_type))
            return parse_scanned_items(text)
        except Exception as e:
            logger.exception("Error parsing receipt")
            raise ReceiptParseError() from e

    async def categorize_items(self, names: list[str]) -> list[CategorizedItem]:
        names = list(names)
        try:
            text = await self._generate(build_categorize_prompt(names))
            return parse_categories(text, names)
        except Exception as e:
            logger.exception("Error categorizing items")
            raise CategorizationError() from e


def create_gateway(config: LarderConfig) -> AIGateway:
    """Create an AI gateway based on configuration.

    Raises:
        MissingCredentialError: If the selected backend has no API key.
        ValueError: If the backend name is unknown.
    """
    backend_name = config.gateway.backend

    match backend_name:
        case "gemini":
            from .gemini import GeminiGateway

            return GeminiGateway(
                api_key=config.gateway.gemini.api_key,
                model=config.gateway.gemini.model,
            )
        case "claude":
            from .claude import ClaudeGateway

            return ClaudeGateway(
                api_key=config.gateway.claude.api_key,
                model=config.gateway.claude.model,
            )
        case _:
            raise ValueError(
                f"Unknown AI gateway backend: {backend_name!r} "
                f"(choose gemini or claude)"
            )


__all__ = [
    "AIGateway",
    "build_categorize_prompt",
    "build_recipe_prompt",
    "create_gateway",
    "format_inventory_line",
    "parse_categories",
    "parse_recipes",
    "parse_scanned_items",
]
