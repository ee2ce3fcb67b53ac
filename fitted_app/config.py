"""Configuration helpers for the Fitted outfit engine."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Callable, Dict, Optional, TypeVar

DEFAULT_WEATHER_API_URL = "https://api.open-meteo.com/v1/forecast"
DEFAULT_CONFIG_DIR = "config/environments"
# Upper bound accepted for a single generation request.
MAX_OUTFIT_COUNT = 50

T = TypeVar("T")


def _resolve_config_path(env_name: Optional[str]) -> Optional[Path]:
    explicit = os.getenv("APP_CONFIG_PATH")
    if explicit:
        return Path(explicit)
    if env_name:
        return Path(os.getenv("FITTED_CONFIG_DIR", DEFAULT_CONFIG_DIR)) / f"{env_name}.yaml"
    return None


def _read_key_values(path: Path) -> Dict[str, str]:
    """Read flat ``key: value`` lines; nesting and lists are not supported."""

    values: Dict[str, str] = {}
    for line in path.read_text().splitlines():
        key, sep, raw = line.partition(":")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue
        value = raw.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        values[key] = value
    return values


def _parse(name: str, raw: str, cast: Callable[[str], T]) -> T:
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"{name} must be a {cast.__name__}, got {raw!r}") from None


@dataclass
class EngineConfig:
    """Settings for the engine's surrounding services.

    Scoring weights and the admission threshold are engine constants and are
    not configurable; this covers the HTTP surface, the weather collaborator
    and logging only.
    """

    default_outfit_count: int = 10
    weather_api_url: str = DEFAULT_WEATHER_API_URL
    weather_timeout_seconds: float = 5.0
    log_level: str = "INFO"
    environment: Optional[str] = None

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Build a config from an environment YAML file overlaid with env vars.

        The file is ``$APP_CONFIG_PATH`` or ``<FITTED_CONFIG_DIR>/<APP_ENV>.yaml``;
        an upper-cased environment variable wins over the same key in the file.
        """

        env_name = os.getenv("APP_ENV")
        path = _resolve_config_path(env_name)
        file_values = _read_key_values(path) if path and path.exists() else {}

        def lookup(key: str, default: str) -> str:
            return os.getenv(key.upper()) or file_values.get(key) or default

        return cls(
            default_outfit_count=min(
                MAX_OUTFIT_COUNT,
                max(1, _parse("default_outfit_count", lookup("default_outfit_count", "10"), int)),
            ),
            weather_api_url=lookup("weather_api_url", DEFAULT_WEATHER_API_URL),
            weather_timeout_seconds=_parse(
                "weather_timeout_seconds", lookup("weather_timeout_seconds", "5.0"), float
            ),
            log_level=lookup("log_level", "INFO").upper(),
            environment=env_name,
        )


__all__ = ["DEFAULT_WEATHER_API_URL", "MAX_OUTFIT_COUNT", "EngineConfig"]
