"""Color harmony heuristics used to score garment combinations."""
from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Iterable, List, Sequence, Tuple

from models.garment import Garment
from models.taxonomy import is_dark, is_light, is_neutral, normalize_color_name
from models.weather import COLD_THRESHOLD_F, RAIN_THRESHOLD

logger = logging.getLogger(__name__)

_EVERYTHING = (
    "black", "white", "gray", "beige", "brown", "navy", "red", "blue",
    "green", "purple", "pink", "yellow", "orange",
)

COLOR_COMPATIBILITY: Dict[str, FrozenSet[str]] = {
    "black": frozenset(_EVERYTHING),
    "white": frozenset(_EVERYTHING),
    "gray": frozenset(_EVERYTHING),
    "beige": frozenset({"black", "white", "gray", "beige", "brown", "navy", "blue", "green", "pink", "red"}),
    "brown": frozenset({"black", "white", "gray", "beige", "brown", "navy", "green", "orange", "yellow", "red"}),
    "navy": frozenset(
        {"black", "white", "gray", "beige", "brown", "navy", "red", "pink", "yellow", "orange", "green"}
    ),
    "red": frozenset({"black", "white", "gray", "navy", "beige", "blue", "pink"}),
    "blue": frozenset(
        {"black", "white", "gray", "beige", "brown", "navy", "red", "yellow", "orange", "pink", "green"}
    ),
    "yellow": frozenset({"black", "white", "gray", "navy", "brown", "blue", "purple", "green"}),
    "green": frozenset({"black", "white", "gray", "beige", "brown", "navy", "yellow", "orange", "blue"}),
    "purple": frozenset({"black", "white", "gray", "yellow", "pink", "navy"}),
    "orange": frozenset({"black", "white", "gray", "navy", "brown", "blue", "green"}),
    "pink": frozenset({"black", "white", "gray", "beige", "navy", "blue", "purple", "red"}),
}

CLASH_SETS: Tuple[FrozenSet[str], ...] = (
    frozenset({"red", "orange", "yellow"}),
    frozenset({"red", "green"}),
    frozenset({"orange", "pink"}),
    frozenset({"purple", "orange", "green"}),
)

TEAM_COLORS: FrozenSet[str] = frozenset({"maroon", "burgundy", "crimson", "gold", "royal blue", "forest green"})
PRACTICAL_OCCASIONS: FrozenSet[str] = frozenset({"casual", "class", "work"})

SAME_COLOR = 1.0
TABLE_MATCH = 0.8
NEUTRAL_FALLBACK = 0.6
LIGHT_DARK_CONTRAST = 0.5
UNKNOWN_COMBINATION = 0.3
NO_COLOR_DATA = 0.5

MAJOR_CLASH_PENALTY = -0.5
SAFE_MONOCHROME_PENALTY = -0.1
SINGLE_COLOR_PENALTY = -0.3
WHITE_RAIN_PENALTY = -0.3
WHITE_PRACTICAL_PENALTY = -0.2
WHITE_COLD_PENALTY = -0.2
WHITE_BASELINE_PENALTY = -0.05

MAX_NEUTRAL_BONUS = 0.2


def _all_colors(items: Iterable[Garment]) -> List[str]:
    return [normalize_color_name(color) for item in items for color in item.colors]


def color_pair_score(color1: str, color2: str) -> float:
    """Score two individual colors against the compatibility table."""

    c1, c2 = normalize_color_name(color1), normalize_color_name(color2)
    if c1 == c2:
        return SAME_COLOR
    if c2 in COLOR_COMPATIBILITY.get(c1, ()) or c1 in COLOR_COMPATIBILITY.get(c2, ()):
        return TABLE_MATCH
    if is_neutral(c1) or is_neutral(c2):
        return NEUTRAL_FALLBACK
    if (is_light(c1) and is_dark(c2)) or (is_dark(c1) and is_light(c2)):
        return LIGHT_DARK_CONTRAST
    return UNKNOWN_COMBINATION


def color_compatibility(item1: Garment, item2: Garment) -> float:
    """Return the mean compatibility over every color pairing of two garments.

    Garments without recorded colors score a neutral 0.5 rather than failing.
    """

    if not item1.colors or not item2.colors:
        return NO_COLOR_DATA
    scores = [color_pair_score(c1, c2) for c1 in item1.colors for c2 in item2.colors]
    return sum(scores) / len(scores)


def monochrome(color_list: Iterable[str]) -> bool:
    """Return True when all provided colors collapse to a single tone."""

    unique_colors = {normalize_color_name(color) for color in color_list if color}
    result = len(unique_colors) == 1
    logger.debug("monochrome check %s -> %s", unique_colors, result)
    return result


def find_clash(colors: Iterable[str]) -> FrozenSet[str] | None:
    """Return the first listed clash set fully contained in ``colors``."""

    palette = {normalize_color_name(color) for color in colors}
    for clash in CLASH_SETS:
        if clash <= palette:
            return clash
    return None


def _white_monochrome_penalty(temperature: float | None, precipitation: float | None, occasion: str | None) -> float:
    penalty = 0.0
    if precipitation is not None and precipitation > RAIN_THRESHOLD:
        penalty += WHITE_RAIN_PENALTY
    if occasion in PRACTICAL_OCCASIONS:
        penalty += WHITE_PRACTICAL_PENALTY
    if temperature is not None and temperature < COLD_THRESHOLD_F:
        penalty += WHITE_COLD_PENALTY
    if penalty == 0.0:
        return WHITE_BASELINE_PENALTY
    return max(MAJOR_CLASH_PENALTY, penalty)


def clash_penalty(
    items: Sequence[Garment],
    temperature: float | None = None,
    precipitation: float | None = None,
    occasion: str | None = None,
) -> float:
    """Return a penalty in [-0.5, 0] for clashing or monotonous palettes.

    The clash list is checked first; the monochrome rules only apply when no
    listed clash is present.
    """

    colors = _all_colors(items)
    clash = find_clash(colors)
    if clash:
        logger.debug("clash detected %s", sorted(clash))
        return MAJOR_CLASH_PENALTY
    if not monochrome(colors):
        return 0.0

    color = colors[0]
    if color == "black" or color in TEAM_COLORS:
        return 0.0
    if color in {"navy", "gray"}:
        return SAFE_MONOCHROME_PENALTY
    if color == "white":
        return _white_monochrome_penalty(temperature, precipitation, occasion)
    return SINGLE_COLOR_PENALTY


def neutral_anchor_bonus(items: Sequence[Garment]) -> float:
    """Reward neutral footwear and a mostly neutral palette, capped at 0.2."""

    bonus = 0.0
    shoes = next((item for item in items if item.category == "shoes"), None)
    if shoes is not None:
        shoe_colors = {normalize_color_name(color) for color in shoes.colors}
        if shoe_colors & {"black", "white"}:
            bonus += 0.15
        elif any(is_neutral(color) for color in shoe_colors):
            bonus += 0.10

    colors = _all_colors(items)
    if colors and sum(1 for color in colors if is_neutral(color)) / len(colors) >= 0.7:
        bonus += 0.05
    return min(bonus, MAX_NEUTRAL_BONUS)


__all__ = [
    "COLOR_COMPATIBILITY",
    "CLASH_SETS",
    "TEAM_COLORS",
    "color_pair_score",
    "color_compatibility",
    "monochrome",
    "find_clash",
    "clash_penalty",
    "neutral_anchor_bonus",
]
