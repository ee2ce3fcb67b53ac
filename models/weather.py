"""Weather context handed to the engine by its caller."""

from dataclasses import dataclass

# Precipitation probability above which conditions count as rainy.
RAIN_THRESHOLD = 30
# Fahrenheit temperature below which conditions count as cold.
COLD_THRESHOLD_F = 50


@dataclass(frozen=True)
class WeatherContext:
    """Current conditions in imperial units.

    Only ``temperature`` (°F) and ``precipitation`` (probability 0-100) feed
    the scoring; the remaining fields are carried for display.
    """

    temperature: float
    precipitation: float = 0.0
    humidity: float = 0.0
    wind_speed: float = 0.0
    feels_like: float | None = None
    condition: str = "Unknown"

    @property
    def is_rainy(self) -> bool:
        return self.precipitation > RAIN_THRESHOLD
