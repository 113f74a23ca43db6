"""
Daily forecast client (Open-Meteo).

Fetches the single-day summary for an itinerary day (weather code, min/max
temperature, max precipitation probability) at the day's hotel and turns it into a
`ForecastFetchState`.

A forecast is decoration, not content: every failure (network, HTTP status,
timeout, bad JSON, missing `daily` block) degrades to `unavailable` and is logged,
never raised to the caller.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Literal

import httpx

from tripview.config.settings import Settings
from tripview.core.geo import Coordinate, round_half_up
from tripview.core.http import get_json
from tripview.weather.codes import ConditionCategory, classify_condition

logger = logging.getLogger(__name__)

ForecastStatus = Literal["loading", "unavailable", "resolved"]


@dataclass(frozen=True)
class DailyForecast:
    """One day's forecast summary."""

    condition_code: int
    temp_min_c: int
    temp_max_c: int
    precipitation_probability: int | None = None

    @property
    def category(self) -> ConditionCategory:
        return classify_condition(self.condition_code)


@dataclass(frozen=True)
class ForecastFetchState:
    status: ForecastStatus
    forecast: DailyForecast | None = None

    @classmethod
    def loading(cls) -> "ForecastFetchState":
        return cls(status="loading")

    @classmethod
    def unavailable(cls) -> "ForecastFetchState":
        return cls(status="unavailable")

    @classmethod
    def resolved(cls, forecast: DailyForecast) -> "ForecastFetchState":
        return cls(status="resolved", forecast=forecast)


def _first_number(daily: dict[str, Any], key: str) -> float | None:
    values = daily.get(key)
    if not isinstance(values, list) or not values:
        return None
    value = values[0]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    # Python's JSON decoder accepts NaN and Infinity literals.
    if not math.isfinite(number):
        return None
    return number


def parse_daily_forecast(payload: Any) -> DailyForecast | None:
    """Extract day 0 from an Open-Meteo `daily` response; `None` if required fields are missing."""
    if not isinstance(payload, dict):
        return None
    daily = payload.get("daily")
    if not isinstance(daily, dict):
        return None

    code = _first_number(daily, "weather_code")
    t_max = _first_number(daily, "temperature_2m_max")
    t_min = _first_number(daily, "temperature_2m_min")
    if code is None or t_max is None or t_min is None:
        return None

    rain = _first_number(daily, "precipitation_probability_max")
    return DailyForecast(
        condition_code=int(code),
        temp_min_c=round_half_up(t_min),
        temp_max_c=round_half_up(t_max),
        precipitation_probability=None if rain is None else max(0, min(100, round_half_up(rain))),
    )


class WeatherClient:
    """Fetches daily forecasts and keeps successful results in memory for its lifetime."""

    def __init__(self, settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None):
        self._settings = settings
        self._transport = transport
        self._memo: dict[tuple[str, str, str], DailyForecast] = {}

    async def _fetch_open_meteo(self, lat: float, lon: float, day: date) -> Any:
        """Call Open-Meteo for one calendar day and return the decoded JSON."""
        cfg = self._settings.weather
        params = {
            "latitude": lat,
            "longitude": lon,
            "daily": ",".join(cfg.daily_fields),
            "timezone": cfg.timezone,
            "start_date": day.isoformat(),
            "end_date": day.isoformat(),
        }
        return await get_json(
            cfg.base_url,
            params=params,
            timeout_seconds=cfg.timeout_seconds,
            transport=self._transport,
        )

    async def fetch_daily_forecast(self, coords: Coordinate | None, day: date) -> ForecastFetchState:
        """Return the forecast for `day` at `coords`; `unavailable` on any failure."""
        if coords is None:
            # Travel days have no fixed reference point; nothing to look up.
            return ForecastFetchState.unavailable()

        key = (day.isoformat(), f"{coords.latitude:.4f}", f"{coords.longitude:.4f}")
        memo = self._memo.get(key)
        if memo is not None:
            return ForecastFetchState.resolved(memo)

        logger.info("Fetching forecast for %s at lat=%.4f lon=%.4f", day, coords.latitude, coords.longitude)
        try:
            payload = await self._fetch_open_meteo(coords.latitude, coords.longitude, day)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Forecast fetch failed for %s: %s", day, exc)
            return ForecastFetchState.unavailable()

        forecast = parse_daily_forecast(payload)
        if forecast is None:
            logger.warning("Forecast response for %s is missing daily fields", day)
            return ForecastFetchState.unavailable()

        self._memo[key] = forecast
        return ForecastFetchState.resolved(forecast)
