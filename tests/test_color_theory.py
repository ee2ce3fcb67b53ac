"""Tests for color compatibility, clash detection and neutral anchors."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from models.color_theory import (
    clash_penalty,
    color_compatibility,
    color_pair_score,
    find_clash,
    monochrome,
    neutral_anchor_bonus,
)
from models.garment import Garment
from models.weather import COLD_THRESHOLD_F, RAIN_THRESHOLD, WeatherContext


def _item(item_id: str, category: str, colors: List[str]) -> Garment:
    return Garment(item_id=item_id, category=category, colors=colors)


def _outfit(top: str, bottom: str, shoes: str, *extra: str) -> List[Garment]:
    items = [_item("t", "top", [top]), _item("b", "bottom", [bottom]), _item("s", "shoes", [shoes])]
    for index, color in enumerate(extra):
        items.append(_item(f"a{index}", "accessory", [color]))
    return items


def test_pair_scores_follow_table_and_fallbacks():
    assert color_pair_score("black", "Black") == 1.0
    assert color_pair_score("red", "blue") == 0.8
    assert color_pair_score("khaki", "purple") == 0.6
    assert color_pair_score("pink", "maroon") == 0.5
    assert color_pair_score("teal", "orange") == 0.3


def test_grey_alias_is_identical_to_gray():
    assert color_pair_score("grey", "gray") == 1.0


def test_garment_compatibility_is_mean_over_color_pairs():
    first = _item("a", "top", ["black", "red"])
    second = _item("b", "bottom", ["green"])
    assert color_compatibility(first, second) == pytest.approx((0.8 + 0.3) / 2)


def test_missing_colors_score_neutral_default():
    assert color_compatibility(_item("a", "top", []), _item("b", "bottom", ["red"])) == 0.5


def test_monochrome_detection():
    assert monochrome(["navy", "Navy"]) is True
    assert monochrome(["navy", "white"]) is False
    assert monochrome([]) is False


def test_clash_sets_trigger_major_penalty():
    assert find_clash(["red", "orange", "yellow", "black"]) == frozenset({"red", "orange", "yellow"})
    assert clash_penalty(_outfit("red", "orange", "black", "yellow")) == -0.5
    assert clash_penalty(_outfit("red", "green", "white")) == -0.5
    assert clash_penalty(_outfit("red", "black", "white")) == 0.0


@pytest.mark.parametrize(
    "color, expected",
    [("black", 0.0), ("maroon", 0.0), ("navy", -0.1), ("gray", -0.1), ("purple", -0.3)],
)
def test_monochrome_penalties(color: str, expected: float):
    assert clash_penalty(_outfit(color, color, color)) == pytest.approx(expected)


def test_all_white_penalty_depends_on_context():
    outfit = _outfit("white", "white", "white")
    assert clash_penalty(outfit) == pytest.approx(-0.05)
    assert clash_penalty(outfit, temperature=65, precipitation=60) == pytest.approx(-0.3)
    assert clash_penalty(outfit, temperature=40, occasion="work") == pytest.approx(-0.4)
    assert clash_penalty(outfit, temperature=40, precipitation=80, occasion="class") == pytest.approx(-0.5)
    assert clash_penalty(outfit, temperature=65, precipitation=10, occasion="date") == pytest.approx(-0.05)


def test_white_penalty_thresholds_match_weather_context():
    outfit = _outfit("white", "white", "white")

    assert clash_penalty(outfit, temperature=COLD_THRESHOLD_F, precipitation=RAIN_THRESHOLD) == pytest.approx(-0.05)
    assert clash_penalty(outfit, temperature=COLD_THRESHOLD_F - 1) == pytest.approx(-0.2)
    assert clash_penalty(outfit, precipitation=RAIN_THRESHOLD + 1) == pytest.approx(-0.3)
    assert WeatherContext(temperature=60, precipitation=RAIN_THRESHOLD).is_rainy is False
    assert WeatherContext(temperature=60, precipitation=RAIN_THRESHOLD + 1).is_rainy is True


def test_neutral_anchor_bonus():
    assert neutral_anchor_bonus(_outfit("red", "blue", "black")) == pytest.approx(0.15)
    assert neutral_anchor_bonus(_outfit("navy", "khaki", "brown")) == pytest.approx(0.15)
    assert neutral_anchor_bonus(_outfit("gray", "black", "white")) == pytest.approx(0.2)
    assert neutral_anchor_bonus(_outfit("red", "blue", "green")) == 0.0
    assert neutral_anchor_bonus(_outfit("black", "black", "red", "black")) == pytest.approx(0.05)
