"""User profile model consumed by the scoring heuristics."""

from dataclasses import dataclass, field
from typing import Dict, List

from models.taxonomy import STYLE_TAGS, normalize_color_name

DEFAULT_STYLE_PREFERENCE = 5.0


@dataclass
class UserProfile:
    """Style preferences (0-10 per style tag) and favorite colors."""

    style_preferences: Dict[str, float] = field(default_factory=dict)
    favorite_colors: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.style_preferences = {
            str(style).strip().lower(): max(0.0, min(10.0, float(score)))
            for style, score in self.style_preferences.items()
            if str(style).strip().lower() in STYLE_TAGS
        }
        self.favorite_colors = [normalize_color_name(color) for color in self.favorite_colors if str(color).strip()]

    def preference_for(self, style: str) -> float:
        return self.style_preferences.get(style, DEFAULT_STYLE_PREFERENCE)
