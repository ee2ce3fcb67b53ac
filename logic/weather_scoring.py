"""Temperature-band and precipitation adjustments for candidate outfits."""

from __future__ import annotations

import logging
import re
from typing import Sequence

from models.garment import Garment
from models.taxonomy import is_dark, normalize_color_name
from models.weather import COLD_THRESHOLD_F, WeatherContext

logger = logging.getLogger(__name__)

MIN_ADJUSTMENT = -0.5
MAX_ADJUSTMENT = 0.3

EXTREME_COLD_F = 20
COLD_F = COLD_THRESHOLD_F
MILD_MAX_F = 70
WARM_MAX_F = 85

_LONG_SLEEVE_PATTERN = re.compile(r"long[\s-]?sleeve|sweater|hoodie|sweatshirt|cardigan|turtleneck")
_SHORT_SLEEVE_PATTERN = re.compile(r"short[\s-]?sleeve|sleeveless|t-shirt|\btee\b|tank top")
_SHORTS_PATTERN = re.compile(r"\bshorts\b")


def _clamp(value: float) -> float:
    return max(MIN_ADJUSTMENT, min(MAX_ADJUSTMENT, value))


def temperature_band(temperature: float) -> str:
    """Classify a Fahrenheit temperature into a named band."""

    if temperature < EXTREME_COLD_F:
        return "extreme_cold"
    if temperature < COLD_F:
        return "cold"
    if temperature <= MILD_MAX_F:
        return "mild"
    if temperature <= WARM_MAX_F:
        return "warm"
    return "extreme_heat"


def is_long_sleeved(item: Garment) -> bool:
    if item.sleeve_length is not None:
        return item.sleeve_length == "long"
    return bool(_LONG_SLEEVE_PATTERN.search(item.description))


def is_short_sleeved(item: Garment) -> bool:
    if item.sleeve_length is not None:
        return item.sleeve_length == "short"
    return bool(_SHORT_SLEEVE_PATTERN.search(item.description))


def is_shorts(item: Garment) -> bool:
    if item.leg_length is not None:
        return item.leg_length == "shorts"
    return bool(_SHORTS_PATTERN.search(item.description))


def score_weather(items: Sequence[Garment], weather: WeatherContext | None) -> float:
    """Return a signed adjustment in [-0.5, 0.3] for the given conditions.

    Without a weather context the adjustment is zero.
    """

    if weather is None:
        return 0.0

    tops = [item for item in items if item.category == "top"]
    bottoms = [item for item in items if item.category == "bottom"]
    has_outerwear = any(item.category == "outerwear" for item in items)
    long_sleeves = any(is_long_sleeved(top) for top in tops)
    short_sleeves = any(is_short_sleeved(top) for top in tops)
    shorts = any(is_shorts(bottom) for bottom in bottoms)

    band = temperature_band(weather.temperature)
    adjustment = 0.0
    if band == "extreme_cold":
        if has_outerwear:
            adjustment += 0.3
        elif long_sleeves:
            adjustment += 0.1
        else:
            adjustment -= 0.4
        if shorts:
            adjustment -= 0.5
    elif band == "cold":
        if has_outerwear:
            adjustment += 0.2
        if long_sleeves:
            adjustment += 0.15
        if shorts:
            adjustment -= 0.3
    elif band == "mild":
        adjustment += 0.05
    elif band == "warm":
        if shorts:
            adjustment += 0.15
        if short_sleeves:
            adjustment += 0.1
        if has_outerwear:
            adjustment -= 0.15
    else:
        if shorts:
            adjustment += 0.2
        if short_sleeves:
            adjustment += 0.15
        if has_outerwear:
            adjustment -= 0.3
        if any(is_dark(color) for item in items for color in item.colors):
            adjustment -= 0.15

    if weather.is_rainy and any(
        normalize_color_name(color) == "white" for bottom in bottoms for color in bottom.colors
    ):
        adjustment -= 0.2

    result = _clamp(adjustment)
    logger.debug("weather band=%s raw=%.3f clamped=%.3f", band, adjustment, result)
    return result


__all__ = [
    "score_weather",
    "temperature_band",
    "is_long_sleeved",
    "is_short_sleeved",
    "is_shorts",
]
