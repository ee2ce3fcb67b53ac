import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from fitted_app.config import DEFAULT_WEATHER_API_URL, MAX_OUTFIT_COUNT, EngineConfig
from fitted_app.logging_config import redact_for_log
from models import Garment, GarmentAnalysis, UserProfile, from_raw_metadata

_ENV_KEYS = [
    "APP_ENV",
    "APP_CONFIG_PATH",
    "FITTED_CONFIG_DIR",
    "DEFAULT_OUTFIT_COUNT",
    "WEATHER_API_URL",
    "WEATHER_TIMEOUT_SECONDS",
    "LOG_LEVEL",
]


@pytest.fixture()
def clean_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_config_defaults(clean_env):
    config = EngineConfig.from_env()

    assert config.default_outfit_count == 10
    assert config.weather_api_url == DEFAULT_WEATHER_API_URL
    assert config.log_level == "INFO"
    assert config.environment is None


def test_config_reads_yaml_and_env_overrides(clean_env, tmp_path):
    config_dir = tmp_path / "environments"
    config_dir.mkdir()
    (config_dir / "staging.yaml").write_text(
        "# staging\n"
        "default_outfit_count: 4\n"
        'weather_api_url: "http://weather.internal/forecast"\n'
        "weather_timeout_seconds: 1.5\n"
    )
    clean_env.setenv("APP_ENV", "staging")
    clean_env.setenv("FITTED_CONFIG_DIR", str(config_dir))
    clean_env.setenv("DEFAULT_OUTFIT_COUNT", "6")
    clean_env.setenv("LOG_LEVEL", "debug")

    config = EngineConfig.from_env()

    assert config.default_outfit_count == 6
    assert config.weather_api_url == "http://weather.internal/forecast"
    assert config.weather_timeout_seconds == 1.5
    assert config.log_level == "DEBUG"
    assert config.environment == "staging"


def test_config_rejects_non_numeric_values(clean_env):
    clean_env.setenv("DEFAULT_OUTFIT_COUNT", "plenty")

    with pytest.raises(ValueError):
        EngineConfig.from_env()


def test_garment_normalises_colors_and_tags():
    garment = Garment(
        item_id="g1",
        category="Top",
        colors=["Grey", "gray", " Navy Blue "],
        style_tags=["Casual", "boho", "casual"],
        sleeve_length="elbow",
    )

    assert garment.category == "top"
    assert garment.colors == ["gray", "navy"]
    assert garment.style_tags == ["casual"]
    assert garment.sleeve_length is None


def test_garment_rejects_unknown_category():
    with pytest.raises(ValueError):
        Garment(item_id="g1", category="hat")


def test_analysis_clamps_and_filters_occasion_scores():
    analysis = GarmentAnalysis(formality="Business Casual", occasion_scores={"Work": 12, "brunch": 5, "gym": -1})

    assert analysis.formality == "business-casual"
    assert analysis.occasion_scores == {"work": 10.0, "gym": 0.0}
    assert analysis.occasion_score("date") is None


def test_from_raw_metadata_requires_identity_fields():
    with pytest.raises(ValueError):
        from_raw_metadata({"category": "top"})

    garment = from_raw_metadata(
        {
            "item_id": "g2",
            "category": "bottom",
            "colors": "black",
            "analysis": {"description": "Running Shorts", "occasionScores": {"gym": 9}},
        }
    )
    assert garment.colors == ["black"]
    assert garment.description == "running shorts"
    assert garment.occasion_score("gym") == 9.0


def test_profile_clamps_preferences_and_keeps_zero():
    profile = UserProfile(style_preferences={"Formal": 14, "athletic": 0, "goth": 9}, favorite_colors=["Grey", " "])

    assert profile.style_preferences == {"formal": 10.0, "athletic": 0.0}
    assert profile.preference_for("athletic") == 0.0
    assert profile.preference_for("casual") == 5.0
    assert profile.favorite_colors == ["gray"]


def test_log_redaction_masks_images_and_coordinates():
    payload = {
        "image": "data:image/png;base64,AAAA",
        "preview": "data:image/jpeg;base64,BBBB",
        "nested": [{"latitude": 40.7, "item_id": "g1"}],
        "notes": "x" * 600,
    }

    scrubbed = redact_for_log(payload)

    assert scrubbed["image"] == "[redacted]"
    assert scrubbed["preview"] == "[redacted-image]"
    assert scrubbed["nested"] == [{"latitude": "[redacted]", "item_id": "g1"}]
    assert scrubbed["notes"].endswith("...[truncated]")


def test_instrumented_call_returns_result_and_reraises():
    from tools.observability import instrument_operation, summarise_arguments

    @instrument_operation("double")
    def double(values):
        return [value * 2 for value in values]

    @instrument_operation("explode")
    def explode():
        raise RuntimeError("boom")

    assert double(values=[1, 2]) == [2, 4]
    with pytest.raises(RuntimeError):
        explode()
    assert summarise_arguments({"wardrobe": [1, 2, 3], "profile": UserProfile(), "count": 3}) == {
        "wardrobe": "<3 items>",
        "profile": "UserProfile",
        "count": 3,
    }


def test_json_formatter_emits_extra_fields():
    import json
    import logging

    from fitted_app.logging_config import JsonFormatter

    record = logging.LogRecord("fitted.test", logging.INFO, __file__, 1, "outfits_generated", None, None)
    record.event = "outfits_generated"
    record.correlation_id = "abc123"
    record.returned = 3

    payload = json.loads(JsonFormatter().format(record))

    assert payload["event"] == "outfits_generated"
    assert payload["correlation_id"] == "abc123"
    assert payload["returned"] == 3
    assert payload["level"] == "INFO"


def test_config_caps_default_count_at_request_limit(clean_env):
    clean_env.setenv("DEFAULT_OUTFIT_COUNT", "500")

    assert EngineConfig.from_env().default_outfit_count == MAX_OUTFIT_COUNT
