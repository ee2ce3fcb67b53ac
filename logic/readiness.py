"""Wardrobe readiness gate and category statistics."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Sequence

from models.garment import Garment
from models.taxonomy import CATEGORIES


@dataclass(frozen=True)
class WardrobeRequirements:
    """Minimum wardrobe needed before recommendations are meaningful."""

    min_tops: int
    min_bottoms: int
    min_shoes: int
    min_total: int


MINIMUM_WARDROBE = WardrobeRequirements(min_tops=5, min_bottoms=3, min_shoes=2, min_total=10)


def wardrobe_stats(wardrobe: Sequence[Garment]) -> Dict[str, int]:
    """Count garments per category plus the overall total."""

    counts = Counter(item.category for item in wardrobe)
    stats = {category: counts.get(category, 0) for category in CATEGORIES}
    stats["total"] = len(wardrobe)
    return stats


def missing_for_readiness(
    wardrobe: Sequence[Garment], requirements: WardrobeRequirements = MINIMUM_WARDROBE
) -> Dict[str, int]:
    """Return how many more garments each requirement still needs (empty when ready)."""

    stats = wardrobe_stats(wardrobe)
    shortfalls = {
        "top": requirements.min_tops - stats["top"],
        "bottom": requirements.min_bottoms - stats["bottom"],
        "shoes": requirements.min_shoes - stats["shoes"],
        "total": requirements.min_total - stats["total"],
    }
    return {key: value for key, value in shortfalls.items() if value > 0}


def is_ready(wardrobe: Sequence[Garment], requirements: WardrobeRequirements = MINIMUM_WARDROBE) -> bool:
    """True iff the wardrobe meets every minimum; the generator does not enforce this."""

    return not missing_for_readiness(wardrobe, requirements)


__all__ = ["WardrobeRequirements", "MINIMUM_WARDROBE", "wardrobe_stats", "missing_for_readiness", "is_ready"]
