"""Weather provider abstractions and implementations."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict

import requests
from pydantic import BaseModel, ValidationError

from fitted_app.config import DEFAULT_WEATHER_API_URL
from models.weather import WeatherContext
from tools.observability import instrument_operation


LOGGER = logging.getLogger(__name__)

WEATHER_CODES: Dict[int, str] = {
    0: "Clear",
    1: "Mostly Clear",
    2: "Partly Cloudy",
    3: "Overcast",
    45: "Foggy",
    48: "Foggy",
    51: "Light Drizzle",
    53: "Drizzle",
    55: "Heavy Drizzle",
    56: "Freezing Drizzle",
    57: "Freezing Drizzle",
    61: "Light Rain",
    63: "Rainy",
    65: "Heavy Rain",
    66: "Freezing Rain",
    67: "Freezing Rain",
    71: "Light Snow",
    73: "Snowy",
    75: "Heavy Snow",
    77: "Snow Grains",
    80: "Light Rain Showers",
    81: "Rain Showers",
    82: "Heavy Rain Showers",
    85: "Snow Showers",
    86: "Heavy Snow Showers",
    95: "Thunderstorm",
    96: "Thunderstorm with Hail",
    99: "Thunderstorm with Hail",
}


class _Current(BaseModel):
    temperature_2m: float
    relative_humidity_2m: float = 0.0
    apparent_temperature: float | None = None
    precipitation: float = 0.0
    weathercode: int = 0
    windspeed_10m: float = 0.0


class _ForecastResponse(BaseModel):
    current: _Current


def validate_coordinates(latitude: float, longitude: float) -> None:
    if not -90 <= latitude <= 90 or not -180 <= longitude <= 180:
        raise ValueError("Latitude must be between -90 and 90, longitude between -180 and 180")


class WeatherProvider(ABC):
    """Abstract weather provider interface."""

    @abstractmethod
    def get_weather(self, latitude: float, longitude: float) -> WeatherContext:
        """Return current conditions for a coordinate pair."""


class OpenMeteoWeatherProvider(WeatherProvider):
    """Open-Meteo provider with schema validation and graceful fallbacks."""

    def __init__(self, base_url: str = DEFAULT_WEATHER_API_URL, timeout_seconds: float = 5.0) -> None:
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds

    def _fallback_context(self, reason: str) -> WeatherContext:
        LOGGER.warning("Using fallback weather context", extra={"reason": reason})
        return WeatherContext(temperature=60.0, precipitation=0.0, condition="Unknown")

    @staticmethod
    def _to_context(current: _Current) -> WeatherContext:
        # Open-Meteo reports an amount, not a probability; any rain counts as certain.
        precipitation_probability = 100.0 if current.precipitation > 0 else 0.0
        return WeatherContext(
            temperature=float(round(current.temperature_2m)),
            precipitation=precipitation_probability,
            humidity=float(round(current.relative_humidity_2m)),
            wind_speed=float(round(current.windspeed_10m)),
            feels_like=float(round(current.apparent_temperature)) if current.apparent_temperature is not None else None,
            condition=WEATHER_CODES.get(current.weathercode, "Unknown"),
        )

    @instrument_operation("get_weather")
    def get_weather(self, latitude: float, longitude: float) -> WeatherContext:
        validate_coordinates(latitude, longitude)
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "current": "temperature_2m,relative_humidity_2m,apparent_temperature,precipitation,weathercode,windspeed_10m",
            "temperature_unit": "fahrenheit",
            "windspeed_unit": "mph",
            "precipitation_unit": "inch",
            "timezone": "auto",
        }

        try:
            response = requests.get(self.base_url, params=params, timeout=self.timeout_seconds)
            response.raise_for_status()
            parsed = _ForecastResponse.model_validate(response.json())
            return self._to_context(parsed.current)
        except (requests.Timeout, requests.RequestException) as exc:
            LOGGER.error("Weather API unreachable", exc_info=exc)
            return self._fallback_context("request_error")
        except (ValidationError, ValueError) as exc:
            LOGGER.error("Weather payload schema validation failed", exc_info=exc)
            return self._fallback_context("schema_validation")


class MockWeatherProvider(WeatherProvider):
    """Offline deterministic weather provider for tests."""

    def __init__(self, context: WeatherContext | None = None) -> None:
        self.context = context or WeatherContext(temperature=62.0, precipitation=10.0, condition="Clear")

    def get_weather(self, latitude: float, longitude: float) -> WeatherContext:
        validate_coordinates(latitude, longitude)
        LOGGER.info("Returning mock weather", extra={"latitude": latitude, "longitude": longitude})
        return self.context


__all__ = [
    "WEATHER_CODES",
    "WeatherProvider",
    "OpenMeteoWeatherProvider",
    "MockWeatherProvider",
    "validate_coordinates",
]
