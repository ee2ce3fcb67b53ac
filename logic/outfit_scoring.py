"""Deterministic scoring for candidate outfits."""

from __future__ import annotations

from itertools import combinations
from typing import Dict, Optional, Sequence

from logic.occasion_filtering import score_occasion
from logic.weather_scoring import score_weather, temperature_band
from models.color_theory import clash_penalty, color_compatibility, neutral_anchor_bonus
from models.garment import Garment
from models.profile import UserProfile
from models.taxonomy import normalize_color_name
from models.weather import WeatherContext

ADMISSION_THRESHOLD = 0.3

WEIGHTS = {
    "color": 0.5,
    "style": 0.2,
    "consistency": 0.1,
    "occasion": 0.1,
    "favorites": 0.1,
}
WEIGHTS_WITHOUT_OCCASION = {
    "color": 0.5,
    "style": 0.3,
    "consistency": 0.1,
    "favorites": 0.1,
}

OPPOSED_STYLES = (
    frozenset({"formal", "athletic"}),
    frozenset({"formal", "streetwear"}),
    frozenset({"preppy", "athletic"}),
)


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def average_color_compatibility(outfit_items: Sequence[Garment]) -> float:
    """Mean pairwise compatibility over every unordered garment pair."""

    pairs = list(combinations(outfit_items, 2))
    if not pairs:
        return 0.5
    return sum(color_compatibility(a, b) for a, b in pairs) / len(pairs)


def style_preference_score(outfit_items: Sequence[Garment], profile: UserProfile) -> float:
    """Normalised mean of the user's 0-10 preference over every style tag worn."""

    tags = [tag for item in outfit_items for tag in item.style_tags]
    if not tags:
        return 0.5
    return sum(profile.preference_for(tag) for tag in tags) / (10.0 * len(tags))


def favorite_color_bonus(outfit_items: Sequence[Garment], favorite_colors: Sequence[str]) -> float:
    """Fraction of favorite colors present in the outfit, scaled to 0.2."""

    if not favorite_colors:
        return 0.0
    outfit_colors = {normalize_color_name(color) for item in outfit_items for color in item.colors}
    matches = [fav for fav in favorite_colors if normalize_color_name(fav) in outfit_colors]
    return min(len(matches) / len(favorite_colors), 1.0) * 0.2


def style_consistency_score(outfit_items: Sequence[Garment]) -> float:
    """1.0 for a coherent outfit, minus 0.5 per strongly opposed style pair."""

    styles = {tag for item in outfit_items for tag in item.style_tags}
    conflicts = sum(1 for pair in OPPOSED_STYLES if pair <= styles)
    return _clamp(1.0 - 0.5 * conflicts)


def score_breakdown(
    outfit_items: Sequence[Garment],
    profile: UserProfile,
    weather: WeatherContext | None = None,
    occasion: str | None = None,
) -> Dict[str, object]:
    """Calculate the composite score and its sub scores for an outfit."""

    color_val = average_color_compatibility(outfit_items)
    style_val = style_preference_score(outfit_items, profile)
    favorites_val = favorite_color_bonus(outfit_items, profile.favorite_colors)
    consistency_val = style_consistency_score(outfit_items)
    weather_val = score_weather(outfit_items, weather)
    clash_val = clash_penalty(
        outfit_items,
        temperature=weather.temperature if weather else None,
        precipitation=weather.precipitation if weather else None,
        occasion=occasion,
    )
    neutral_val = neutral_anchor_bonus(outfit_items)
    occasion_val: Optional[float] = score_occasion(outfit_items, occasion)

    if occasion_val is not None:
        base = (
            color_val * WEIGHTS["color"]
            + style_val * WEIGHTS["style"]
            + consistency_val * WEIGHTS["consistency"]
            + occasion_val * WEIGHTS["occasion"]
            + favorites_val * WEIGHTS["favorites"]
        )
    else:
        base = (
            color_val * WEIGHTS_WITHOUT_OCCASION["color"]
            + style_val * WEIGHTS_WITHOUT_OCCASION["style"]
            + consistency_val * WEIGHTS_WITHOUT_OCCASION["consistency"]
            + favorites_val * WEIGHTS_WITHOUT_OCCASION["favorites"]
        )
    composite = _clamp(base + weather_val + clash_val + neutral_val)

    explanation = {
        "color": f"mean pairwise compatibility {color_val:.2f}",
        "style": f"preference fit {style_val:.2f}, consistency {consistency_val:.2f}",
        "weather": (
            f"{temperature_band(weather.temperature)} band adjustment {weather_val:+.2f}"
            if weather
            else "no weather context"
        ),
        "occasion": (
            f"{occasion} suitability {occasion_val:.2f}"
            if occasion_val is not None
            else "occasion weighting unavailable"
        ),
        "palette": f"clash {clash_val:+.2f}, neutral anchor {neutral_val:+.2f}",
    }

    return {
        "composite_score": composite,
        "admissible": composite >= ADMISSION_THRESHOLD,
        "occasion_weighting": occasion_val is not None,
        "sub_scores": {
            "color": color_val,
            "style": style_val,
            "consistency": consistency_val,
            "occasion": occasion_val,
            "favorites": favorites_val,
            "weather": weather_val,
            "clash": clash_val,
            "neutral_anchor": neutral_val,
        },
        "explanation": explanation,
    }


def score_outfit(
    outfit_items: Sequence[Garment],
    profile: UserProfile,
    weather: WeatherContext | None = None,
    occasion: str | None = None,
) -> float:
    """Return the clamped composite score for an outfit."""

    return float(score_breakdown(outfit_items, profile, weather, occasion)["composite_score"])


def is_admissible(score: float) -> bool:
    return score >= ADMISSION_THRESHOLD


__all__ = [
    "ADMISSION_THRESHOLD",
    "WEIGHTS",
    "WEIGHTS_WITHOUT_OCCASION",
    "average_color_compatibility",
    "style_preference_score",
    "favorite_color_bonus",
    "style_consistency_score",
    "score_breakdown",
    "score_outfit",
    "is_admissible",
]
