"""Candidate outfit generation with transparent diagnostics."""
from __future__ import annotations

import copy
import logging
import random
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Set, Tuple

from fitted_app.logging_config import log_event
from logic.occasion_filtering import filter_by_occasion
from logic.outfit_scoring import is_admissible, score_outfit
from logic.weather_scoring import COLD_F, EXTREME_COLD_F
from models.garment import Garment
from models.outfit import CandidateOutfit, Outfit
from models.profile import UserProfile
from models.taxonomy import CATEGORIES, OPTIONAL_CATEGORIES, REQUIRED_CATEGORIES
from models.weather import WeatherContext
from tools.observability import instrument_operation

logger = logging.getLogger(__name__)

DEFAULT_COUNT = 10
SAMPLING_FACTOR = 20
ATTEMPTS_FACTOR = 10
EXHAUSTIVE_POOL_CAP = 20
ACCESSORY_PROBABILITY = 0.3
COLD_OUTERWEAR_PROBABILITY = 0.7
LAYERING_OUTERWEAR_PROBABILITY = 0.2


class RandomSource(Protocol):
    """The subset of :class:`random.Random` the generator relies on."""

    def random(self) -> float: ...

    def choice(self, seq: Sequence[Garment]) -> Garment: ...


@dataclass(frozen=True)
class OutfitGenerationResult:
    outfits: List[Outfit]
    diagnostics: Dict[str, object]


def partition_wardrobe(wardrobe: Iterable[Garment]) -> Dict[str, List[Garment]]:
    """Group garments into one pool per category, preserving wardrobe order."""

    grouped: Dict[str, List[Garment]] = {category: [] for category in CATEGORIES}
    for item in wardrobe:
        grouped[item.category].append(item)
    return grouped


def outerwear_probability(weather: WeatherContext | None) -> float:
    """Chance of layering outerwear onto a candidate given the conditions."""

    if weather is None:
        return LAYERING_OUTERWEAR_PROBABILITY
    if weather.temperature < EXTREME_COLD_F:
        return 1.0
    if weather.temperature < COLD_F:
        return COLD_OUTERWEAR_PROBABILITY
    return LAYERING_OUTERWEAR_PROBABILITY


def _filter_pools(
    grouped: Dict[str, List[Garment]], occasion: str | None
) -> Tuple[Dict[str, List[Garment]], Dict[str, str]]:
    pools: Dict[str, List[Garment]] = {}
    phases: Dict[str, str] = {}
    for category, items in grouped.items():
        result = filter_by_occasion(items, occasion)
        pools[category] = result.items
        phases[category] = result.phase
    return pools, phases


def _add_optional_layers(
    base: List[Garment],
    pools: Dict[str, List[Garment]],
    weather: WeatherContext | None,
    rng: RandomSource,
    pinned_category: str | None,
) -> Tuple[Garment, ...]:
    items = list(base)
    probabilities = {"outerwear": outerwear_probability(weather), "accessory": ACCESSORY_PROBABILITY}
    for category in OPTIONAL_CATEGORIES:
        pool = pools[category]
        if not pool:
            continue
        if category == pinned_category or rng.random() < probabilities[category]:
            items.append(rng.choice(pool))
    return tuple(items)


def _score_candidate(
    items: Tuple[Garment, ...],
    profile: UserProfile,
    weather: WeatherContext | None,
    occasion: str | None,
) -> CandidateOutfit:
    score = score_outfit(items, profile, weather, occasion)
    logger.debug("scored candidate %s -> %.3f", [item.item_id for item in items], score)
    return CandidateOutfit(items=items, score=score)


def _sample_candidates(
    pools: Dict[str, List[Garment]],
    count: int,
    profile: UserProfile,
    weather: WeatherContext | None,
    occasion: str | None,
    rng: RandomSource,
    pinned_category: str | None,
    diagnostics: Dict[str, object],
) -> List[CandidateOutfit]:
    admitted: List[CandidateOutfit] = []
    seen: Set[Tuple[str, str, str]] = set()
    attempts = count * ATTEMPTS_FACTOR
    duplicates = 0
    for _ in range(attempts):
        if len(admitted) >= count * 2:
            break
        base = [rng.choice(pools[category]) for category in REQUIRED_CATEGORIES]
        key = (base[0].item_id, base[1].item_id, base[2].item_id)
        if key in seen:
            duplicates += 1
            continue
        seen.add(key)
        items = _add_optional_layers(base, pools, weather, rng, pinned_category)
        candidate = _score_candidate(items, profile, weather, occasion)
        diagnostics["combinations_scored"] = int(diagnostics["combinations_scored"]) + 1
        if is_admissible(candidate.score):
            admitted.append(candidate)
    diagnostics["duplicates_rejected"] = duplicates
    return admitted


def _enumerate_candidates(
    pools: Dict[str, List[Garment]],
    profile: UserProfile,
    weather: WeatherContext | None,
    occasion: str | None,
    rng: RandomSource,
    pinned_category: str | None,
    diagnostics: Dict[str, object],
) -> List[CandidateOutfit]:
    admitted: List[CandidateOutfit] = []
    tops, bottoms, shoes = (pools[category][:EXHAUSTIVE_POOL_CAP] for category in REQUIRED_CATEGORIES)
    for top in tops:
        for bottom in bottoms:
            for shoe in shoes:
                items = _add_optional_layers([top, bottom, shoe], pools, weather, rng, pinned_category)
                candidate = _score_candidate(items, profile, weather, occasion)
                diagnostics["combinations_scored"] = int(diagnostics["combinations_scored"]) + 1
                if is_admissible(candidate.score):
                    admitted.append(candidate)
    return admitted


def promote_candidates(candidates: Sequence[CandidateOutfit], count: int) -> List[Outfit]:
    """Rank candidates best-first and turn the top ``count`` into outfits.

    Garments are shallow-copied so the outfits stay stable if the wardrobe
    records are later edited.
    """

    ranked = sorted(candidates, key=lambda candidate: candidate.score, reverse=True)
    created_at = datetime.now(timezone.utc)
    return [
        Outfit(
            outfit_id=uuid.uuid4().hex,
            items=[copy.copy(item) for item in candidate.items],
            score=candidate.score,
            created_at=created_at,
        )
        for candidate in ranked[:count]
    ]


def run_generation(
    wardrobe: Sequence[Garment],
    profile: UserProfile,
    count: int = DEFAULT_COUNT,
    weather: WeatherContext | None = None,
    required_item: Garment | None = None,
    occasion: str | None = None,
    rng: RandomSource | None = None,
) -> OutfitGenerationResult:
    """Generate up to ``count`` ranked outfits together with diagnostics.

    A missing top, bottom or shoes pool short-circuits to an empty result;
    that is the "cannot compose an outfit" signal, not an error.
    """

    rng = rng or random.Random()
    occasion = occasion.strip().lower() if occasion else None
    grouped = partition_wardrobe(wardrobe)
    pools, phases = _filter_pools(grouped, occasion)

    pinned_category: Optional[str] = None
    if required_item is not None:
        pinned_category = required_item.category
        pools[pinned_category] = [required_item]

    diagnostics: Dict[str, object] = {
        "mode": "short_circuit",
        "requested": count,
        "combinations_scored": 0,
        "admitted": 0,
        "pool_sizes": {category: len(items) for category, items in pools.items()},
        "occasion": occasion,
        "occasion_phases": phases,
        "pinned_item": required_item.item_id if required_item is not None else None,
    }

    if count < 1:
        diagnostics["reason"] = "non_positive_count"
        return OutfitGenerationResult(outfits=[], diagnostics=diagnostics)
    missing = [category for category in REQUIRED_CATEGORIES if not pools[category]]
    if missing:
        logger.info("Cannot compose outfits, empty mandatory pools: %s", missing)
        diagnostics["reason"] = "missing_required_categories"
        diagnostics["missing_categories"] = missing
        return OutfitGenerationResult(outfits=[], diagnostics=diagnostics)

    combination_space = len(pools["top"]) * len(pools["bottom"]) * len(pools["shoes"])
    diagnostics["combination_space"] = combination_space
    if combination_space > count * SAMPLING_FACTOR:
        diagnostics["mode"] = "sampled"
        candidates = _sample_candidates(
            pools, count, profile, weather, occasion, rng, pinned_category, diagnostics
        )
    else:
        diagnostics["mode"] = "exhaustive"
        candidates = _enumerate_candidates(pools, profile, weather, occasion, rng, pinned_category, diagnostics)

    outfits = promote_candidates(candidates, count)
    diagnostics["admitted"] = len(candidates)
    diagnostics["returned"] = len(outfits)
    diagnostics["best_score"] = outfits[0].score if outfits else None
    log_event(
        logger,
        logging.INFO,
        "outfits_generated",
        mode=diagnostics["mode"],
        combinations_scored=diagnostics["combinations_scored"],
        admitted=len(candidates),
        returned=len(outfits),
        occasion=occasion,
    )
    return OutfitGenerationResult(outfits=outfits, diagnostics=diagnostics)


@instrument_operation("generate_outfits")
def generate_outfits(
    wardrobe: Sequence[Garment],
    profile: UserProfile,
    count: int = DEFAULT_COUNT,
    weather: WeatherContext | None = None,
    required_item: Garment | None = None,
    occasion: str | None = None,
    rng: RandomSource | None = None,
) -> List[Outfit]:
    """Return up to ``count`` ranked outfits, best first."""

    return run_generation(
        wardrobe,
        profile,
        count=count,
        weather=weather,
        required_item=required_item,
        occasion=occasion,
        rng=rng,
    ).outfits


def dedupe_outfits(outfits: Iterable[Outfit]) -> List[Outfit]:
    """Drop outfits whose set of garments repeats an earlier outfit."""

    seen: Set[frozenset] = set()
    unique: List[Outfit] = []
    for outfit in outfits:
        key = frozenset(item.item_id for item in outfit.items)
        if key in seen:
            continue
        seen.add(key)
        unique.append(outfit)
    return unique


__all__ = [
    "OutfitGenerationResult",
    "RandomSource",
    "partition_wardrobe",
    "outerwear_probability",
    "promote_candidates",
    "run_generation",
    "generate_outfits",
    "dedupe_outfits",
]
