from __future__ import annotations

from enum import Enum

"""Category definitions for the spreadsheet export.

Each category aggregates a fixed, ordered set of spreadsheet tabs into one
output file. The tab lists here are the built-in defaults; config/export.yml
may override them per category.
"""

__all__ = [
    "Category",
    "DEFAULT_CATEGORY_SHEETS",
    "IGNORED_SHEETS",
]


class Category(Enum):
    """Top-level data grouping. Member order is the processing order."""
    ITEMS = "items"
    CREATURES = "creatures"
    NOOK_MILES = "nookMiles"
    RECIPES = "recipes"

    @classmethod
    def from_name(cls, name: str) -> Category:
        for member in cls:
            if member.value == name:
                return member
        raise ValueError(f"unknown category: {name!r}")


ITEM_SHEETS = (
    "Housewares",
    "Miscellaneous",
    "Wall-mounted",
    "Wallpapers",
    "Floors",
    "Rugs",
    "Fencing",
    "Photos",
    "Posters",
    "Tools",
    "Tops",
    "Bottoms",
    "Dresses",
    "Headwear",
    "Accessories",
    "Socks",
    "Shoes",
    "Bags",
    "Umbrellas",
    "Music",
    "Fossils",
    "Other",
)

CREATURE_SHEETS = (
    "Bugs - North",
    "Bugs - South",
    "Fish - North",
    "Fish - South",
)

DEFAULT_CATEGORY_SHEETS: dict[Category, tuple[str, ...]] = {
    Category.ITEMS: ITEM_SHEETS,
    Category.CREATURES: CREATURE_SHEETS,
    Category.NOOK_MILES: ("Nook Miles",),
    Category.RECIPES: ("Recipes",),
}

# 全カテゴリから除外するタブ
IGNORED_SHEETS: frozenset[str] = frozenset({"Construction", "Achievements", "Villagers"})
