from dataclasses import dataclass
from enum import Enum


class CategoryKey(str, Enum):
    FOOD = "food"
    TRANSPORT = "transport"
    HOME = "home"
    LEISURE = "leisure"
    SHOPPING = "shopping"
    SALARY = "salary"
    OTHER = "other"


@dataclass(frozen=True)
class Category:
    key: CategoryKey
    label: str
    color_hex: str = "#64748b"


CATEGORIES: dict[CategoryKey, Category] = {
    CategoryKey.FOOD:      Category(CategoryKey.FOOD,      "Alimentação", "#f59e0b"),
    CategoryKey.TRANSPORT: Category(CategoryKey.TRANSPORT, "Transporte",  "#3b82f6"),
    CategoryKey.HOME:      Category(CategoryKey.HOME,      "Casa",        "#8b5cf6"),
    CategoryKey.LEISURE:   Category(CategoryKey.LEISURE,   "Lazer",       "#ec4899"),
    CategoryKey.SHOPPING:  Category(CategoryKey.SHOPPING,  "Compras",     "#14b8a6"),
    CategoryKey.SALARY:    Category(CategoryKey.SALARY,    "Salário",     "#22c55e"),
    CategoryKey.OTHER:     Category(CategoryKey.OTHER,     "Outros",      "#64748b"),
}


_CATEGORY_KEYS = {k.value for k in CategoryKey}


def is_known_category(key: str) -> bool:
    return key in _CATEGORY_KEYS


def get_category(key: str) -> Category:
    """Look up a category by its key; unknown keys fall back to 'other'."""
    if is_known_category(key):
        return CATEGORIES[CategoryKey(key)]
    return CATEGORIES[CategoryKey.OTHER]


def category_by_label(label: str) -> Category | None:
    return next((c for c in CATEGORIES.values() if c.label == label), None)
