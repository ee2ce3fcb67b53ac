"""Evaluation scenarios exercising weather, occasions and pinned garments."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from models.profile import UserProfile
from models.weather import WeatherContext


@dataclass
class EvaluationScenario:
    name: str
    description: str
    wardrobe_items: List[Dict[str, object]]
    expectations: Dict[str, object]
    profile: UserProfile = field(default_factory=UserProfile)
    weather: Optional[WeatherContext] = None
    occasion: Optional[str] = None
    required_item_id: Optional[str] = None
    count: int = 5


def _wardrobe_fixtures() -> List[Dict[str, object]]:
    return [
        {
            "item_id": "top_oxford",
            "category": "top",
            "colors": ["white"],
            "style_tags": ["preppy"],
            "analysis": {"description": "Long sleeve oxford shirt", "formality": "business-casual"},
        },
        {
            "item_id": "top_tee",
            "category": "top",
            "colors": ["gray"],
            "style_tags": ["casual"],
            "analysis": {"description": "Short sleeve cotton t-shirt", "formality": "casual"},
        },
        {
            "item_id": "top_sweater",
            "category": "top",
            "colors": ["navy"],
            "style_tags": ["casual", "preppy"],
            "analysis": {"description": "Cable knit sweater", "formality": "casual"},
        },
        {
            "item_id": "top_hoodie",
            "category": "top",
            "colors": ["red"],
            "style_tags": ["streetwear"],
            "analysis": {"description": "Oversized hoodie", "formality": "casual"},
        },
        {
            "item_id": "bottom_chinos",
            "category": "bottom",
            "colors": ["khaki"],
            "style_tags": ["preppy"],
            "analysis": {"description": "Slim chinos", "formality": "business-casual"},
        },
        {
            "item_id": "bottom_jeans",
            "category": "bottom",
            "colors": ["blue"],
            "style_tags": ["casual"],
            "analysis": {"description": "Straight leg jeans", "formality": "casual"},
        },
        {
            "item_id": "bottom_shorts",
            "category": "bottom",
            "colors": ["beige"],
            "style_tags": ["casual"],
            "analysis": {"description": "Linen shorts", "formality": "casual"},
        },
        {
            "item_id": "shoes_sneakers",
            "category": "shoes",
            "colors": ["white"],
            "style_tags": ["casual"],
            "analysis": {"description": "Canvas sneakers", "formality": "casual"},
        },
        {
            "item_id": "shoes_boots",
            "category": "shoes",
            "colors": ["brown"],
            "style_tags": ["casual"],
            "analysis": {"description": "Leather chelsea boots", "formality": "business-casual"},
        },
        {
            "item_id": "outer_parka",
            "category": "outerwear",
            "colors": ["black"],
            "style_tags": ["casual"],
            "analysis": {"description": "Insulated parka", "formality": "casual"},
        },
        {
            "item_id": "acc_scarf",
            "category": "accessory",
            "colors": ["gray"],
            "style_tags": ["casual"],
            "analysis": {"description": "Wool scarf", "formality": "casual"},
        },
    ]


SCENARIOS: List[EvaluationScenario] = [
    EvaluationScenario(
        name="cold_commute",
        description="Sub-freezing morning; every outfit should be layered.",
        wardrobe_items=_wardrobe_fixtures(),
        weather=WeatherContext(temperature=12, precipitation=10, condition="Snowy"),
        profile=UserProfile(style_preferences={"casual": 8, "preppy": 6}, favorite_colors=["navy"]),
        expectations={"min_outfits": 1, "requires_outerwear": True, "avoids_shorts": True},
    ),
    EvaluationScenario(
        name="heat_wave",
        description="Very hot afternoon; shorts should reach the best score.",
        wardrobe_items=[item for item in _wardrobe_fixtures() if item["category"] != "outerwear"],
        weather=WeatherContext(temperature=95, precipitation=0, condition="Clear"),
        profile=UserProfile(style_preferences={"casual": 7}),
        expectations={"min_outfits": 1, "best_score_includes_shorts": True},
    ),
    EvaluationScenario(
        name="interview_without_formal_wear",
        description="No formal garments; the fallback ladder must still produce outfits.",
        wardrobe_items=_wardrobe_fixtures(),
        occasion="interview",
        expectations={"min_outfits": 1},
    ),
    EvaluationScenario(
        name="pinned_sweater",
        description="User wants outfits built around one sweater.",
        wardrobe_items=_wardrobe_fixtures(),
        weather=WeatherContext(temperature=58, precipitation=40, condition="Light Rain"),
        required_item_id="top_sweater",
        expectations={"min_outfits": 1, "pinned_item": "top_sweater"},
    ),
]


__all__ = ["EvaluationScenario", "SCENARIOS"]
