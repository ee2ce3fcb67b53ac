"""Canonical taxonomy definitions for wardrobe garments.

This module centralises the canonical labels for categories, style tags,
formality levels and occasions together with the color vocabulary used by
the scoring heuristics. Helper functions keep validation logic consistent
across models, filters and the HTTP schemas.
"""

from typing import Dict, FrozenSet, Iterable, List


def _normalize_key(value: str) -> str:
    """Normalise a free-form string into a taxonomy key."""

    return value.strip().lower().replace(" ", "_")


CATEGORIES: List[str] = ["top", "bottom", "shoes", "outerwear", "accessory"]
REQUIRED_CATEGORIES = ("top", "bottom", "shoes")
OPTIONAL_CATEGORIES = ("outerwear", "accessory")

STYLE_TAGS = ["casual", "formal", "streetwear", "athletic", "preppy"]
EXTREME_STYLES: FrozenSet[str] = frozenset({"athletic", "streetwear"})

# Ordered from least to most formal.
FORMALITY_LEVELS = ["casual", "business-casual", "formal"]

OCCASIONS = ["work", "class", "gym", "casual", "social", "formal", "date", "interview"]

COLOR_ALIASES: Dict[str, str] = {
    "grey": "gray",
    "navy blue": "navy",
    "off white": "white",
    "off-white": "white",
    "charcoal grey": "charcoal",
    "charcoal gray": "charcoal",
}

NEUTRAL_COLORS: FrozenSet[str] = frozenset(
    {"black", "white", "gray", "beige", "navy", "tan", "khaki", "cream", "ivory", "charcoal", "brown", "camel"}
)

LIGHT_COLORS: FrozenSet[str] = frozenset(
    {"white", "cream", "ivory", "beige", "khaki", "pink", "yellow", "lavender", "mint", "peach", "sky blue"}
)

DARK_COLORS: FrozenSet[str] = frozenset(
    {"black", "navy", "charcoal", "brown", "burgundy", "maroon", "olive", "forest green", "plum"}
)


def validate_category(value: str) -> str:
    """Validate and normalise a category value.

    Raises a :class:`ValueError` if the category is not part of the canonical
    taxonomy.
    """

    key = _normalize_key(value)
    if key not in CATEGORIES:
        raise ValueError(f"Unsupported category '{value}'. Allowed: {sorted(CATEGORIES)}")
    return key


def normalize_formality(value: str | None) -> str | None:
    """Return a canonical formality level or ``None`` when unknown."""

    if not value:
        return None
    key = value.strip().lower().replace("_", "-").replace(" ", "-")
    return key if key in FORMALITY_LEVELS else None


def formality_rank(value: str | None) -> int:
    """Position of a formality level on the casual-to-formal scale, -1 if unknown."""

    return FORMALITY_LEVELS.index(value) if value in FORMALITY_LEVELS else -1


def normalize_color_name(raw_string: str) -> str:
    """Map a raw color string to a canonical, case-insensitive color name."""

    key = " ".join(raw_string.strip().lower().split())
    return COLOR_ALIASES.get(key, key)


def is_neutral(color: str) -> bool:
    return normalize_color_name(color) in NEUTRAL_COLORS


def is_light(color: str) -> bool:
    key = normalize_color_name(color)
    return key in LIGHT_COLORS or key.startswith(("light ", "pale ", "pastel "))


def is_dark(color: str) -> bool:
    key = normalize_color_name(color)
    return key in DARK_COLORS or key.startswith(("dark ", "deep "))


def normalise_tags(values: Iterable[str], allowed: List[str]) -> List[str]:
    """Normalise and deduplicate tags against an allowed set."""

    normalised = []
    seen = set()
    for value in values:
        key = _normalize_key(value)
        if key in allowed and key not in seen:
            normalised.append(key)
            seen.add(key)
    return normalised


__all__ = [
    "CATEGORIES",
    "REQUIRED_CATEGORIES",
    "OPTIONAL_CATEGORIES",
    "STYLE_TAGS",
    "EXTREME_STYLES",
    "FORMALITY_LEVELS",
    "OCCASIONS",
    "NEUTRAL_COLORS",
    "LIGHT_COLORS",
    "DARK_COLORS",
    "validate_category",
    "normalize_formality",
    "formality_rank",
    "normalize_color_name",
    "is_neutral",
    "is_light",
    "is_dark",
    "normalise_tags",
]
