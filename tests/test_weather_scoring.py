"""Tests for temperature banding and weather adjustments."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.weather_scoring import is_long_sleeved, score_weather, temperature_band
from models.garment import Garment, GarmentAnalysis
from models.weather import WeatherContext


def _item(item_id: str, category: str, colors: List[str], description: str = "", **kwargs) -> Garment:
    analysis: Optional[GarmentAnalysis] = GarmentAnalysis(description=description) if description else None
    return Garment(item_id=item_id, category=category, colors=colors, analysis=analysis, **kwargs)


def _outfit(top_desc: str = "", bottom_desc: str = "", outerwear: bool = False, bottom_color: str = "beige") -> List[Garment]:
    items = [
        _item("top", "top", ["white"], top_desc),
        _item("bottom", "bottom", [bottom_color], bottom_desc),
        _item("shoes", "shoes", ["white"]),
    ]
    if outerwear:
        items.append(_item("coat", "outerwear", ["beige"], "trench coat"))
    return items


@pytest.mark.parametrize(
    "temperature, band",
    [
        (-5, "extreme_cold"),
        (19.9, "extreme_cold"),
        (20, "cold"),
        (49, "cold"),
        (50, "mild"),
        (70, "mild"),
        (70.5, "warm"),
        (85, "warm"),
        (86, "extreme_heat"),
    ],
)
def test_temperature_bands(temperature: float, band: str):
    assert temperature_band(temperature) == band


def test_no_weather_means_no_adjustment():
    assert score_weather(_outfit(), None) == 0.0


def test_extreme_cold_adjustments():
    weather = WeatherContext(temperature=10)
    assert score_weather(_outfit(outerwear=True), weather) == pytest.approx(0.3)
    assert score_weather(_outfit(top_desc="Long-sleeve henley"), weather) == pytest.approx(0.1)
    assert score_weather(_outfit(), weather) == pytest.approx(-0.4)
    assert score_weather(_outfit(bottom_desc="denim shorts"), weather) == pytest.approx(-0.5)


def test_cold_adjustments_are_cumulative_and_clamped():
    weather = WeatherContext(temperature=35)
    assert score_weather(_outfit(outerwear=True), weather) == pytest.approx(0.2)
    assert score_weather(_outfit(top_desc="long sleeve tee", outerwear=True), weather) == pytest.approx(0.3)
    assert score_weather(_outfit(bottom_desc="cargo shorts"), weather) == pytest.approx(-0.3)


def test_mild_band_is_flat():
    assert score_weather(_outfit(bottom_desc="shorts", outerwear=True), WeatherContext(temperature=60)) == pytest.approx(0.05)


def test_warm_and_heat_adjustments():
    warm = WeatherContext(temperature=78)
    assert score_weather(_outfit(top_desc="short sleeve polo", bottom_desc="chino shorts"), warm) == pytest.approx(0.25)
    assert score_weather(_outfit(outerwear=True), warm) == pytest.approx(-0.15)

    heat = WeatherContext(temperature=95)
    assert score_weather(_outfit(top_desc="short sleeve polo", bottom_desc="chino shorts"), heat) == pytest.approx(0.3)
    assert score_weather(_outfit(bottom_desc="shorts", bottom_color="navy"), heat) == pytest.approx(0.05)
    assert score_weather(_outfit(outerwear=True, bottom_color="black"), heat) == pytest.approx(-0.45)


def test_rain_penalises_white_bottoms():
    rainy = WeatherContext(temperature=60, precipitation=45)
    assert score_weather(_outfit(bottom_color="white"), rainy) == pytest.approx(-0.15)
    assert score_weather(_outfit(bottom_color="white"), WeatherContext(temperature=60, precipitation=30)) == pytest.approx(0.05)


def test_structured_sleeve_length_wins_over_description():
    shirt = _item("top", "top", ["white"], "long sleeve shirt", sleeve_length="short")
    assert is_long_sleeved(shirt) is False
    assert is_long_sleeved(_item("top2", "top", ["white"], "Long sleeve shirt")) is True
