import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.append(str(Path(__file__).resolve().parents[1]))

from fitted_app.app import FittedApp
from fitted_app.config import EngineConfig
from server import api
from tools.weather_provider import MockWeatherProvider


def _wardrobe_payload(include_shoes=True):
    items = [
        {"item_id": "top_white", "category": "top", "colors": ["white"], "style_tags": ["casual"]},
        {"item_id": "top_navy", "category": "top", "colors": ["navy"], "style_tags": ["preppy"]},
        {"item_id": "top_gray", "category": "top", "colors": ["grey"]},
        {"item_id": "bottom_khaki", "category": "bottom", "colors": ["khaki"]},
        {"item_id": "bottom_black", "category": "bottom", "colors": ["black"]},
    ]
    if include_shoes:
        items.append({"item_id": "shoes_white", "category": "shoes", "colors": ["white"]})
        items.append({"item_id": "shoes_brown", "category": "shoes", "colors": ["brown"]})
    return items


@pytest.fixture()
def client(monkeypatch):
    monkeypatch.setattr(api.fitted_app, "weather_provider", MockWeatherProvider())
    return TestClient(api.app)


@pytest.fixture()
def fitted():
    return FittedApp(config=EngineConfig(), weather_provider=MockWeatherProvider())


def test_healthcheck(client):
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_generate_endpoint_returns_ranked_outfits(client):
    response = client.post("/outfits/generate", json={"wardrobe": _wardrobe_payload(), "count": 3, "seed": 1})

    assert response.status_code == 200
    body = response.json()
    scores = [outfit["score"] for outfit in body["outfits"]]
    assert len(scores) == 3
    assert scores == sorted(scores, reverse=True)
    assert all(score >= 0.3 for score in scores)
    assert body["diagnostics"]["mode"] == "exhaustive"


def test_generate_without_shoes_is_an_empty_result(client):
    response = client.post("/outfits/generate", json={"wardrobe": _wardrobe_payload(include_shoes=False)})

    assert response.status_code == 200
    assert response.json()["outfits"] == []
    assert response.json()["diagnostics"]["missing_categories"] == ["shoes"]


def test_generate_rejects_unknown_occasion(client):
    response = client.post("/outfits/generate", json={"wardrobe": _wardrobe_payload(), "occasion": "brunch"})

    assert response.status_code == 422


def test_generate_rejects_unknown_required_item(client):
    response = client.post(
        "/outfits/generate", json={"wardrobe": _wardrobe_payload(), "required_item_id": "missing"}
    )

    assert response.status_code == 400


def test_readiness_endpoint_reports_missing(client):
    response = client.post("/wardrobe/readiness", json={"wardrobe": _wardrobe_payload()})

    body = response.json()
    assert response.status_code == 200
    assert body["ready"] is False
    assert body["stats"]["top"] == 3
    assert body["missing"] == {"top": 2, "bottom": 1, "total": 3}


def test_weather_endpoint_uses_provider(client):
    response = client.get("/weather", params={"lat": 40.7, "lon": -74.0})

    assert response.status_code == 200
    assert response.json()["weather"]["temperature"] == 62.0


def test_weather_endpoint_rejects_bad_coordinates(client):
    response = client.get("/weather", params={"lat": 140.0, "lon": 0.0})

    assert response.status_code == 400


def test_app_returns_review_payload_for_invalid_requests(fitted):
    result = fitted.generate({"wardrobe": [{"item_id": "x", "category": "hat"}]})

    assert result["status"] == "needs_review"
    assert result["details"]


def test_app_seed_makes_results_reproducible(fitted):
    payload = {
        "wardrobe": _wardrobe_payload(),
        "weather": {"temperature": 40, "precipitation": 50},
        "count": 4,
        "seed": 99,
    }

    first = fitted.generate(payload)
    second = fitted.generate(payload)

    def summary(result):
        return [([item["item_id"] for item in outfit["items"]], outfit["score"]) for outfit in result["outfits"]]

    assert first["status"] == "ok"
    assert summary(first) == summary(second)


def test_app_pins_required_item(fitted):
    result = fitted.generate({"wardrobe": _wardrobe_payload(), "required_item_id": "bottom_khaki"})

    assert result["outfits"]
    for outfit in result["outfits"]:
        assert "bottom_khaki" in [item["item_id"] for item in outfit["items"]]


def test_app_uses_configured_default_count(fitted):
    fitted.config.default_outfit_count = 2

    result = fitted.generate({"wardrobe": _wardrobe_payload(), "seed": 3})
    assert len(result["outfits"]) == 2


def test_generate_endpoint_uses_configured_default_count(client, monkeypatch):
    monkeypatch.setattr(api.fitted_app.config, "default_outfit_count", 2)

    response = client.post("/outfits/generate", json={"wardrobe": _wardrobe_payload(), "seed": 3})

    body = response.json()
    assert response.status_code == 200
    assert len(body["outfits"]) == 2
    assert body["diagnostics"]["requested"] == 2


def test_generate_endpoint_explicit_count_beats_configured_default(client, monkeypatch):
    monkeypatch.setattr(api.fitted_app.config, "default_outfit_count", 2)

    response = client.post("/outfits/generate", json={"wardrobe": _wardrobe_payload(), "count": 5, "seed": 3})

    assert len(response.json()["outfits"]) == 5
