"""Occasion-aware filtering of category pools and occasion scoring."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, List, Optional, Sequence, Tuple

from models.garment import Garment
from models.taxonomy import EXTREME_STYLES, formality_rank, is_neutral

logger = logging.getLogger(__name__)

GOOD_OCCASION_SCORE = 7.0


@dataclass(frozen=True)
class OccasionRule:
    """Style and formality constraints for an occasion."""

    banned_styles: FrozenSet[str] = frozenset()
    required_styles: FrozenSet[str] = frozenset()
    min_formality: Optional[str] = None


OCCASION_RULES: Dict[str, OccasionRule] = {
    "work": OccasionRule(banned_styles=frozenset({"athletic", "streetwear"}), min_formality="business-casual"),
    "interview": OccasionRule(required_styles=frozenset({"formal"}), min_formality="formal"),
    "formal": OccasionRule(required_styles=frozenset({"formal"}), min_formality="formal"),
    "gym": OccasionRule(banned_styles=frozenset({"formal", "preppy"}), required_styles=frozenset({"athletic"})),
    "class": OccasionRule(banned_styles=frozenset({"formal"})),
    "casual": OccasionRule(banned_styles=frozenset({"formal"})),
    "social": OccasionRule(banned_styles=frozenset({"athletic"})),
    "date": OccasionRule(banned_styles=frozenset({"athletic"})),
}


@dataclass(frozen=True)
class FilteringResult:
    """Captures the outcome of filtering a single category pool."""

    items: List[Garment]
    phase: str
    removed: Dict[str, str] = field(default_factory=dict)
    debug: Dict[str, object] = field(default_factory=dict)


def passes_occasion_rule(item: Garment, occasion: str) -> bool:
    """Return True when the garment satisfies the occasion's rule table entry."""

    rule = OCCASION_RULES.get(occasion)
    if rule is None:
        return True
    styles = set(item.style_tags)
    if styles & rule.banned_styles:
        return False
    if rule.required_styles and not styles & rule.required_styles:
        return False
    if rule.min_formality and formality_rank(item.formality) < formality_rank(rule.min_formality):
        return False
    return True


def is_strict_match(item: Garment, occasion: str) -> bool:
    """Annotated garments are judged by their score, the rest by the rule table."""

    score = item.occasion_score(occasion)
    if score is not None:
        return score >= GOOD_OCCASION_SCORE
    return passes_occasion_rule(item, occasion)


def is_versatile(item: Garment) -> bool:
    """At least one neutral color and no extreme style tag."""

    return any(is_neutral(color) for color in item.colors) and not set(item.style_tags) & EXTREME_STYLES


def _filter_phases(occasion: str) -> Sequence[Tuple[str, Callable[[Garment], bool]]]:
    return (
        ("strict", lambda item: is_strict_match(item, occasion)),
        ("versatile", is_versatile),
        ("universal", lambda item: True),
    )


def filter_by_occasion(items: List[Garment], occasion: str | None) -> FilteringResult:
    """Filter a category pool for an occasion, falling back phase by phase.

    The first phase that keeps at least one garment wins; the last phase keeps
    the whole pool so a non-empty pool never filters down to nothing.
    """

    if not occasion:
        return FilteringResult(items=list(items), phase="none", debug={"input_count": len(items)})

    phase_counts: Dict[str, int] = {}
    kept: List[Garment] = []
    chosen_phase = "universal"
    for phase, predicate in _filter_phases(occasion):
        kept = [item for item in items if predicate(item)]
        phase_counts[phase] = len(kept)
        if kept:
            chosen_phase = phase
            break

    kept_ids = {item.item_id for item in kept}
    removed = {item.item_id: f"not selected in {chosen_phase} phase" for item in items if item.item_id not in kept_ids}
    debug = {
        "input_count": len(items),
        "kept_count": len(kept),
        "removed_count": len(removed),
        "occasion": occasion,
        "phase_counts": phase_counts,
    }
    if chosen_phase != "strict" and items:
        logger.info("Occasion '%s' fell back to %s phase for %s items", occasion, chosen_phase, len(items))
    return FilteringResult(items=kept, phase=chosen_phase, removed=removed, debug=debug)


def score_occasion(items: Sequence[Garment], occasion: str | None) -> Optional[float]:
    """Return the mean normalised occasion score, or None when unavailable.

    ``None`` signals the aggregator to use the color/style-only weighting; it
    is returned whenever any garment lacks an annotation for the occasion.
    """

    if not occasion or not items:
        return None
    scores = []
    for item in items:
        score = item.occasion_score(occasion)
        if score is None:
            return None
        scores.append(score)
    return max(0.0, min(1.0, sum(scores) / len(scores) / 10.0))


__all__ = [
    "OCCASION_RULES",
    "OccasionRule",
    "FilteringResult",
    "GOOD_OCCASION_SCORE",
    "passes_occasion_rule",
    "is_strict_match",
    "is_versatile",
    "filter_by_occasion",
    "score_occasion",
]
