"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.garment import Garment, GarmentAnalysis, from_raw_metadata
from models.outfit import CandidateOutfit, Outfit
from models.profile import UserProfile
from models.weather import WeatherContext

__all__ = [
    "Garment",
    "GarmentAnalysis",
    "from_raw_metadata",
    "CandidateOutfit",
    "Outfit",
    "UserProfile",
    "WeatherContext",
]
