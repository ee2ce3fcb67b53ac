"""Garment data model and helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional

from models.taxonomy import (
    OCCASIONS,
    STYLE_TAGS,
    normalize_color_name,
    normalize_formality,
    normalise_tags,
    validate_category,
)

SLEEVE_LENGTHS = ("long", "short")
LEG_LENGTHS = ("full", "shorts")


def _ensure_list(value: Any) -> List[Any]:
    """Coerce a scalar or iterable into a list."""

    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


def _normalise_colors(values: Iterable[str]) -> List[str]:
    """Normalise color names using the canonical taxonomy mapping."""

    normalised = []
    seen = set()
    for value in values:
        key = normalize_color_name(str(value))
        if key and key not in seen:
            normalised.append(key)
            seen.add(key)
    return normalised


def _normalise_occasion_scores(raw: Mapping[str, Any] | None) -> Optional[Dict[str, float]]:
    if not raw:
        return None
    scores: Dict[str, float] = {}
    for key, value in raw.items():
        occasion = str(key).strip().lower()
        if occasion not in OCCASIONS or value is None:
            continue
        scores[occasion] = max(0.0, min(10.0, float(value)))
    return scores or None


@dataclass(frozen=True)
class GarmentAnalysis:
    """AI-derived annotation bundle attached to a garment."""

    description: str = ""
    formality: Optional[str] = None
    occasion_scores: Optional[Dict[str, float]] = None
    season: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "description", (self.description or "").strip())
        object.__setattr__(self, "formality", normalize_formality(self.formality))
        object.__setattr__(self, "occasion_scores", _normalise_occasion_scores(self.occasion_scores))

    def occasion_score(self, occasion: str) -> Optional[float]:
        """Return the 0-10 suitability score for ``occasion`` if annotated."""

        if self.occasion_scores is None:
            return None
        return self.occasion_scores.get(occasion)


@dataclass
class Garment:
    """Represents a single garment in the user's wardrobe."""

    item_id: str
    category: str
    colors: List[str] = field(default_factory=list)
    style_tags: List[str] = field(default_factory=list)
    analysis: Optional[GarmentAnalysis] = None
    image: Optional[str] = None
    uploaded_at: Optional[datetime] = None
    sleeve_length: Optional[str] = None
    leg_length: Optional[str] = None

    def __post_init__(self) -> None:
        self.category = validate_category(self.category)
        self.colors = _normalise_colors(_ensure_list(self.colors))
        self.style_tags = normalise_tags(_ensure_list(self.style_tags), STYLE_TAGS)
        self.sleeve_length = self.sleeve_length if self.sleeve_length in SLEEVE_LENGTHS else None
        self.leg_length = self.leg_length if self.leg_length in LEG_LENGTHS else None

    @property
    def description(self) -> str:
        return self.analysis.description.lower() if self.analysis else ""

    @property
    def formality(self) -> Optional[str]:
        return self.analysis.formality if self.analysis else None

    def occasion_score(self, occasion: str) -> Optional[float]:
        return self.analysis.occasion_score(occasion) if self.analysis else None


def analysis_from_raw(raw: Mapping[str, Any] | None) -> Optional[GarmentAnalysis]:
    """Build a :class:`GarmentAnalysis` from a loose mapping, if any."""

    if not raw:
        return None
    occasion_scores = raw.get("occasion_scores") or raw.get("occasionScores")
    return GarmentAnalysis(
        description=str(raw.get("description") or ""),
        formality=raw.get("formality"),
        occasion_scores=dict(occasion_scores) if isinstance(occasion_scores, Mapping) else None,
        season=raw.get("season"),
    )


def from_raw_metadata(metadata: Dict[str, Any]) -> Garment:
    """Factory to build a :class:`Garment` from loose wardrobe metadata."""

    required_fields = ["item_id", "category"]
    missing = [field for field in required_fields if not metadata.get(field)]
    if missing:
        raise ValueError(f"Missing required fields for Garment: {missing}")

    return Garment(
        item_id=str(metadata["item_id"]),
        category=str(metadata["category"]),
        colors=_ensure_list(metadata.get("colors")),
        style_tags=_ensure_list(metadata.get("style_tags")),
        analysis=analysis_from_raw(metadata.get("analysis")),
        image=metadata.get("image"),
        uploaded_at=metadata.get("uploaded_at"),
        sleeve_length=metadata.get("sleeve_length"),
        leg_length=metadata.get("leg_length"),
    )


__all__ = ["Garment", "GarmentAnalysis", "analysis_from_raw", "from_raw_metadata"]
