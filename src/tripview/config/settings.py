# src/tripview/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/tripview/config/defaults.yaml`, then optionally overridden by:
- an external YAML file via `TRIPVIEW_CONFIG_PATH`
- environment variables (`TRIPVIEW_LOG_LEVEL`, `TRIPVIEW_ITINERARY_PATH`)

Design rule:
- Tuning knobs (timeouts, walking pace, forecast endpoint) live in YAML, not in business logic.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from tripview.core.env import load_dotenv_if_present


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `tripview.config`."""
    text = resources.files("tripview.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "TripView"
    timezone: str = "Asia/Tokyo"
    log_level: str = "INFO"


class LocationSettings(BaseModel):
    high_accuracy: bool = True
    timeout_seconds: float = Field(10, gt=0)
    maximum_age_seconds: float = Field(60, ge=0)


class WalkingSettings(BaseModel):
    meters_per_minute: float = Field(83, gt=0)


class WeatherSettings(BaseModel):
    base_url: str = "https://api.open-meteo.com/v1/forecast"
    timezone: str = "Asia/Tokyo"
    daily_fields: list[str] = Field(
        default_factory=lambda: [
            "weather_code",
            "temperature_2m_max",
            "temperature_2m_min",
            "precipitation_probability_max",
        ]
    )
    timeout_seconds: float = Field(10, gt=0)


class ItinerarySettings(BaseModel):
    path: str = "data/itinerary.yaml"


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    location: LocationSettings = Field(default_factory=LocationSettings)
    walking: WalkingSettings = Field(default_factory=WalkingSettings)
    weather: WeatherSettings = Field(default_factory=WeatherSettings)
    itinerary: ItinerarySettings = Field(default_factory=ItinerarySettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: We intentionally keep this whitelist small.
    """
    data = dict(data)

    log_level = os.getenv("TRIPVIEW_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    itinerary_path = os.getenv("TRIPVIEW_ITINERARY_PATH")
    if itinerary_path:
        data.setdefault("itinerary", {})["path"] = itinerary_path

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("TRIPVIEW_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
