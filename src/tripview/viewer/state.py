"""
Viewer state.

The page state is a small immutable value (`ViewState`). Changing it is a plain
function returning a new value, so renderers only ever see a consistent snapshot.

Forecasts are applied latest-request-wins: every day switch bumps `forecast_seq`,
and a forecast that arrives for an older sequence number is dropped. This keeps a
slow day-2 response from overwriting day 4 after the user has moved on.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass

from tripview.core.time import target_date
from tripview.domain.models import Trip
from tripview.location.service import LocationService
from tripview.weather.client import ForecastFetchState, WeatherClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewState:
    active_day: int = 1
    forecast_seq: int = 0
    forecast_day: int | None = None
    forecast: ForecastFetchState = ForecastFetchState.loading()


def select_day(view: ViewState, day: int) -> ViewState:
    """Switch the active day; the forecast goes back to loading under a new sequence number."""
    return dataclasses.replace(
        view,
        active_day=day,
        forecast_seq=view.forecast_seq + 1,
        forecast_day=day,
        forecast=ForecastFetchState.loading(),
    )


def apply_forecast(view: ViewState, seq: int, state: ForecastFetchState) -> ViewState:
    """Apply a finished forecast fetch, unless a newer day switch has happened since."""
    if seq != view.forecast_seq:
        return view
    return dataclasses.replace(view, forecast=state)


class TripViewer:
    """Drives the view state for one trip: day switches and their forecast fetches."""

    def __init__(self, trip: Trip, weather_client: WeatherClient, location: LocationService):
        self._trip = trip
        self._weather = weather_client
        self._location = location
        self._view = ViewState()

    @property
    def location(self) -> LocationService:
        return self._location

    @property
    def view(self) -> ViewState:
        return self._view

    async def show_day(self, day: int) -> ViewState:
        """Select `day` and resolve its forecast; returns the view as of completion."""
        itinerary_day = self._trip.get_day(day)
        self._view = select_day(self._view, day)
        seq = self._view.forecast_seq

        hotel = itinerary_day.hotel.location
        state = await self._weather.fetch_daily_forecast(
            hotel.as_coordinate() if hotel else None,
            target_date(self._trip.start_date, day, self._trip.timezone),
        )

        if seq != self._view.forecast_seq:
            logger.debug("Dropping stale forecast for day %d (seq %d)", day, seq)
        self._view = apply_forecast(self._view, seq, state)
        return self._view
