"""Application facade wiring configuration, logging and engine entry points."""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, List, Sequence

from pydantic import ValidationError

from fitted_app.config import EngineConfig
from fitted_app.logging_config import configure_logging, get_logger, log_event, operation_context
from logic.outfit_builder import run_generation
from logic.readiness import is_ready, missing_for_readiness, wardrobe_stats
from logic.validation import (
    GenerateOutfitsRequest,
    GenerateOutfitsResponse,
    OutfitView,
    ReadinessRequest,
    validation_failure,
)
from models.garment import Garment
from models.weather import WeatherContext
from tools.weather_provider import OpenMeteoWeatherProvider, WeatherProvider


LOGGER = get_logger(__name__)


class FittedApp:
    """Wires together configuration, the weather collaborator and the engine."""

    def __init__(self, config: EngineConfig | None = None, weather_provider: WeatherProvider | None = None) -> None:
        self.config = config or EngineConfig.from_env()
        configure_logging(self.config.log_level)
        self.weather_provider = weather_provider or OpenMeteoWeatherProvider(
            base_url=self.config.weather_api_url,
            timeout_seconds=self.config.weather_timeout_seconds,
        )

    def generate(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Validate a raw request payload and return ranked outfits.

        Invalid payloads come back as a ``needs_review`` result instead of
        raising, so callers can surface the validation details.
        """

        payload = {"count": self.config.default_outfit_count, **payload}
        with operation_context("app:generate") as correlation_id:
            try:
                request = GenerateOutfitsRequest.model_validate(payload)
            except ValidationError as exc:
                log_event(
                    LOGGER,
                    level=logging.WARNING,
                    event="app_request_invalid",
                    method="generate",
                    details=str(exc),
                    correlation_id=correlation_id,
                )
                return validation_failure("Invalid outfit generation payload", exc)

            wardrobe = [garment.to_domain() for garment in request.wardrobe]
            required_item = self._resolve_required_item(wardrobe, request.required_item_id)
            if request.required_item_id and required_item is None:
                return {
                    "status": "needs_review",
                    "message": f"required item '{request.required_item_id}' is not in the wardrobe",
                    "details": [],
                }

            result = run_generation(
                wardrobe,
                request.profile.to_domain(),
                count=request.count,
                weather=request.weather.to_domain() if request.weather else None,
                required_item=required_item,
                occasion=request.occasion,
                rng=random.Random(request.seed) if request.seed is not None else None,
            )
            response = GenerateOutfitsResponse(
                outfits=[OutfitView.from_domain(outfit) for outfit in result.outfits],
                diagnostics=result.diagnostics,
            )
            log_event(
                LOGGER,
                level=logging.INFO,
                event="app_call_completed",
                method="generate",
                correlation_id=correlation_id,
                outfit_count=len(response.outfits),
            )
            return response.model_dump(mode="json")

    def readiness(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Report whether a wardrobe is large enough to recommend from."""

        try:
            request = ReadinessRequest.model_validate(payload)
        except ValidationError as exc:
            return validation_failure("Invalid wardrobe payload", exc)
        wardrobe = [garment.to_domain() for garment in request.wardrobe]
        return {
            "status": "ok",
            "ready": is_ready(wardrobe),
            "stats": wardrobe_stats(wardrobe),
            "missing": missing_for_readiness(wardrobe),
        }

    def current_weather(self, latitude: float, longitude: float) -> WeatherContext:
        return self.weather_provider.get_weather(latitude, longitude)

    @staticmethod
    def _resolve_required_item(wardrobe: Sequence[Garment], item_id: str | None) -> Garment | None:
        if not item_id:
            return None
        matches: List[Garment] = [item for item in wardrobe if item.item_id == item_id]
        return matches[0] if matches else None


__all__ = ["FittedApp"]
