"""Outfit records produced by the combination generator."""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

from models.garment import Garment


@dataclass(frozen=True)
class CandidateOutfit:
    """A provisional combination under evaluation; scored exactly once."""

    items: Tuple[Garment, ...]
    score: float


@dataclass(frozen=True)
class Outfit:
    """A ranked outfit returned to callers."""

    outfit_id: str
    items: List[Garment]
    score: float
    created_at: datetime
    liked: Optional[bool] = None

    def item_of(self, category: str) -> Optional[Garment]:
        for item in self.items:
            if item.category == category:
                return item
        return None
