"""Data models for inventory items, recipes and AI gateway results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

CATEGORIES: tuple[str, ...] = (
    "Meat & Fish",
    "Vegetable",
    "Fruit",
    "Dairy & Eggs",
    "Grains & Carbs",
    "Pantry Staples",
    "Beverages",
    "Other",
)

DEFAULT_CATEGORY = "Other"


@dataclass(frozen=True)
class NewItem:
    """An item as entered by the user, before the store assigns an id."""

    name: str
    quantity: str
    expiry_date: date


@dataclass(frozen=True)
class InventoryItem:
    id: str
    name: str
    quantity: str
    expiry_date: date


@dataclass(frozen=True)
class Recipe:
    name: str
    description: str
    ingredients: tuple[str, ...] = field(default_factory=tuple)
    instructions: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ScannedItem:
    """A food line read off a receipt, pending user review."""

    name: str
    quantity: str = ""


@dataclass(frozen=True)
class CategorizedItem:
    name: str
    category: str  # one of CATEGORIES


def normalize_category(category: str) -> str:
    """Map a model-supplied label onto the closed category set."""
    cleaned = category.strip()
    for known in CATEGORIES:
        if cleaned.lower() == known.lower():
            return known
    return DEFAULT_CATEGORY
