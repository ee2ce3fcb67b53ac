import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.readiness import WardrobeRequirements, is_ready, missing_for_readiness, wardrobe_stats
from models.garment import Garment


def _wardrobe(tops, bottoms, shoes, accessories=0):
    counts = {"top": tops, "bottom": bottoms, "shoes": shoes, "accessory": accessories}
    return [
        Garment(item_id=f"{category}_{index}", category=category, colors=["black"])
        for category, count in counts.items()
        for index in range(count)
    ]


def test_minimum_wardrobe_is_ready():
    assert is_ready(_wardrobe(5, 3, 2)) is True


def test_each_category_boundary():
    assert is_ready(_wardrobe(4, 3, 2, accessories=1)) is False
    assert is_ready(_wardrobe(5, 2, 2, accessories=1)) is False
    assert is_ready(_wardrobe(5, 3, 1, accessories=1)) is False


def test_missing_reports_shortfalls():
    assert missing_for_readiness(_wardrobe(3, 3, 0)) == {"top": 2, "shoes": 2, "total": 4}
    assert missing_for_readiness(_wardrobe(6, 4, 2)) == {}


def test_total_requirement_with_custom_minimum():
    requirements = WardrobeRequirements(min_tops=1, min_bottoms=1, min_shoes=1, min_total=4)

    assert missing_for_readiness(_wardrobe(1, 1, 1), requirements) == {"total": 1}
    assert is_ready(_wardrobe(1, 1, 1, accessories=1), requirements) is True


def test_wardrobe_stats_counts_every_category():
    stats = wardrobe_stats(_wardrobe(2, 1, 1, accessories=3))

    assert stats == {"top": 2, "bottom": 1, "shoes": 1, "outerwear": 0, "accessory": 3, "total": 7}
