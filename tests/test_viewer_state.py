import asyncio
from datetime import date

import pytest

from tripview.config.settings import get_settings
from tripview.location.service import LocationService
from tripview.viewer.state import TripViewer, ViewState, apply_forecast, select_day
from tripview.weather.client import DailyForecast, ForecastFetchState, WeatherClient


class GatedWeatherClient:
    """Holds each forecast until its date's gate is opened; code encodes the date."""

    def __init__(self):
        self.gates: dict[date, asyncio.Event] = {}
        self.calls: list[tuple[object, date]] = []

    def gate(self, day: date) -> asyncio.Event:
        return self.gates.setdefault(day, asyncio.Event())

    async def fetch_daily_forecast(self, coords, day: date) -> ForecastFetchState:
        self.calls.append((coords, day))
        await self.gate(day).wait()
        return ForecastFetchState.resolved(
            DailyForecast(condition_code=day.day, temp_min_c=1, temp_max_c=9, precipitation_probability=10)
        )


def test_select_day_bumps_sequence_and_resets_forecast():
    view = apply_forecast(ViewState(), 0, ForecastFetchState.unavailable())
    nxt = select_day(view, 3)

    assert nxt.active_day == 3
    assert nxt.forecast_day == 3
    assert nxt.forecast_seq == view.forecast_seq + 1
    assert nxt.forecast == ForecastFetchState.loading()
    assert view.active_day == 1


def test_apply_forecast_ignores_stale_sequence_numbers():
    view = select_day(select_day(ViewState(), 2), 4)
    stale = apply_forecast(view, view.forecast_seq - 1, ForecastFetchState.unavailable())
    assert stale is view

    fresh = apply_forecast(view, view.forecast_seq, ForecastFetchState.unavailable())
    assert fresh.forecast.status == "unavailable"
    assert fresh.active_day == 4


@pytest.mark.parametrize("release_order", [("day4", "day2"), ("day2", "day4")])
def test_latest_selected_day_wins_regardless_of_arrival_order(trip, release_order):
    async def scenario():
        client = GatedWeatherClient()
        viewer = TripViewer(trip, client, LocationService(None))
        dates = {"day2": date(2025, 12, 10), "day4": date(2025, 12, 12)}

        t2 = asyncio.create_task(viewer.show_day(2))
        await asyncio.sleep(0)
        t4 = asyncio.create_task(viewer.show_day(4))
        await asyncio.sleep(0)

        tasks = {"day2": t2, "day4": t4}
        for name in release_order:
            client.gate(dates[name]).set()
            await tasks[name]
        return viewer.view, client.calls

    view, calls = asyncio.run(scenario())

    assert [d for _, d in calls] == [date(2025, 12, 10), date(2025, 12, 12)]
    assert view.active_day == 4
    assert view.forecast.status == "resolved"
    assert view.forecast.forecast.condition_code == 12


def test_show_day_uses_hotel_coordinates(trip):
    async def scenario():
        client = GatedWeatherClient()
        viewer = TripViewer(trip, client, LocationService(None))
        task = asyncio.create_task(viewer.show_day(2))
        await asyncio.sleep(0)
        client.gate(date(2025, 12, 10)).set()
        await task
        return client.calls

    calls = asyncio.run(scenario())

    coords, _ = calls[0]
    hotel = trip.get_day(2).hotel.location
    assert (coords.latitude, coords.longitude) == (hotel.lat, hotel.lon)


def test_travel_day_without_hotel_has_no_forecast(trip, monkeypatch):
    async def explode(*_args, **_kwargs):
        raise AssertionError("network must not be used")

    monkeypatch.setattr("tripview.weather.client.get_json", explode)
    viewer = TripViewer(trip, WeatherClient(get_settings()), LocationService(None))

    view = asyncio.run(viewer.show_day(5))

    assert view.active_day == 5
    assert view.forecast == ForecastFetchState.unavailable()


def test_show_day_rejects_unknown_day(trip):
    viewer = TripViewer(trip, GatedWeatherClient(), LocationService(None))
    with pytest.raises(ValueError, match="Unknown day 9"):
        asyncio.run(viewer.show_day(9))
    assert viewer.view == ViewState()
