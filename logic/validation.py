"""Pydantic schemas for validating requests at the HTTP boundary."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from fitted_app.config import MAX_OUTFIT_COUNT
from models.garment import Garment, GarmentAnalysis
from models.outfit import Outfit
from models.profile import UserProfile
from models.taxonomy import CATEGORIES, OCCASIONS
from models.weather import WeatherContext


class GarmentAnalysisPayload(BaseModel):
    """AI annotation bundle as received from the client."""

    description: str = ""
    formality: Optional[Literal["casual", "business-casual", "formal"]] = None
    occasion_scores: Optional[Dict[str, float]] = None
    season: Optional[str] = None

    def to_domain(self) -> GarmentAnalysis:
        return GarmentAnalysis(
            description=self.description,
            formality=self.formality,
            occasion_scores=self.occasion_scores,
            season=self.season,
        )


class GarmentPayload(BaseModel):
    """Input contract for a wardrobe garment."""

    item_id: str = Field(min_length=1)
    category: str
    colors: List[str] = []
    style_tags: List[str] = []
    analysis: Optional[GarmentAnalysisPayload] = None
    uploaded_at: Optional[datetime] = None
    sleeve_length: Optional[Literal["long", "short"]] = None
    leg_length: Optional[Literal["full", "shorts"]] = None

    @field_validator("category")
    @classmethod
    def _validate_category(cls, value: str) -> str:
        key = value.strip().lower()
        if key not in CATEGORIES:
            raise ValueError(f"category must be one of {CATEGORIES}")
        return key

    def to_domain(self) -> Garment:
        return Garment(
            item_id=self.item_id,
            category=self.category,
            colors=list(self.colors),
            style_tags=list(self.style_tags),
            analysis=self.analysis.to_domain() if self.analysis else None,
            uploaded_at=self.uploaded_at,
            sleeve_length=self.sleeve_length,
            leg_length=self.leg_length,
        )


class ProfilePayload(BaseModel):
    """Input contract for the user's style profile."""

    style_preferences: Dict[str, float] = {}
    favorite_colors: List[str] = []

    @field_validator("style_preferences")
    @classmethod
    def _validate_scores(cls, value: Dict[str, float]) -> Dict[str, float]:
        for style, score in value.items():
            if not 0 <= score <= 10:
                raise ValueError(f"preference for '{style}' must be between 0 and 10")
        return value

    def to_domain(self) -> UserProfile:
        return UserProfile(style_preferences=dict(self.style_preferences), favorite_colors=list(self.favorite_colors))


class WeatherPayload(BaseModel):
    """Input contract for current weather, imperial units."""

    temperature: float
    precipitation: float = Field(0.0, ge=0, le=100)
    humidity: float = 0.0
    wind_speed: float = 0.0
    feels_like: Optional[float] = None
    condition: str = "Unknown"

    def to_domain(self) -> WeatherContext:
        return WeatherContext(**self.model_dump())


class GenerateOutfitsRequest(BaseModel):
    """Envelope for a deterministic outfit generation request."""

    wardrobe: List[GarmentPayload]
    profile: ProfilePayload = ProfilePayload()
    count: int = Field(10, ge=1, le=MAX_OUTFIT_COUNT)
    weather: Optional[WeatherPayload] = None
    required_item_id: Optional[str] = None
    occasion: Optional[str] = None
    seed: Optional[int] = None

    @field_validator("occasion")
    @classmethod
    def _validate_occasion(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        key = value.strip().lower()
        if key not in OCCASIONS:
            raise ValueError(f"occasion must be one of {OCCASIONS}")
        return key


class ReadinessRequest(BaseModel):
    wardrobe: List[GarmentPayload]


class OutfitItemView(BaseModel):
    item_id: str
    category: str
    colors: List[str]
    style_tags: List[str]


class OutfitView(BaseModel):
    """Response shape for a single ranked outfit."""

    outfit_id: str
    score: float
    created_at: datetime
    items: List[OutfitItemView]

    @classmethod
    def from_domain(cls, outfit: Outfit) -> "OutfitView":
        return cls(
            outfit_id=outfit.outfit_id,
            score=round(outfit.score, 4),
            created_at=outfit.created_at,
            items=[
                OutfitItemView(
                    item_id=item.item_id,
                    category=item.category,
                    colors=list(item.colors),
                    style_tags=list(item.style_tags),
                )
                for item in outfit.items
            ],
        )


class GenerateOutfitsResponse(BaseModel):
    status: Literal["ok"] = "ok"
    outfits: List[OutfitView] = []
    diagnostics: Dict[str, Any] = {}


class ValidationResult(BaseModel):
    """Wrapper returned to callers when validation fails."""

    status: Literal["needs_review"] = "needs_review"
    message: str
    details: List[Dict[str, Any]]


def validation_failure(message: str, exc: ValidationError) -> Dict[str, Any]:
    """Translate Pydantic errors into a consistent review payload."""

    return ValidationResult(message=message, details=exc.errors(include_url=False)).model_dump()


__all__ = [
    "GarmentAnalysisPayload",
    "GarmentPayload",
    "ProfilePayload",
    "WeatherPayload",
    "GenerateOutfitsRequest",
    "ReadinessRequest",
    "OutfitView",
    "GenerateOutfitsResponse",
    "ValidationResult",
    "validation_failure",
]
