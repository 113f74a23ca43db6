"""
TripView CLI entrypoint.

Prints the itinerary for a day with the same badges the page shows: a forecast for
the day's hotel and distance/walking time to each venue when a position is given.
`--lat/--lon` stands in for the device fix.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from dataclasses import asdict
from typing import Any

from tripview.catalog.loader import load_trip
from tripview.config.settings import Settings, get_settings
from tripview.core.geo import Coordinate, measure
from tripview.core.logging import configure_logging
from tripview.core.time import target_date
from tripview.domain.models import Trip
from tripview.location.providers import FixedPositionProvider, PositionOptions
from tripview.location.service import LocationService
from tripview.presentation.render import render_day, render_day_list, weather_badge
from tripview.viewer.state import TripViewer, select_day
from tripview.weather.client import WeatherClient


def _load(args: argparse.Namespace) -> tuple[Settings, Trip]:
    settings = get_settings()
    trip = load_trip(args.itinerary or settings.itinerary.path)
    return settings, trip


def build_location_service(settings: Settings, coordinate: Coordinate | None) -> LocationService:
    cfg = settings.location
    options = PositionOptions(
        high_accuracy=cfg.high_accuracy,
        timeout_seconds=cfg.timeout_seconds,
        maximum_age_seconds=cfg.maximum_age_seconds,
    )
    provider = FixedPositionProvider(coordinate) if coordinate is not None else None
    return LocationService(provider, options=options)


def _device_fix(args: argparse.Namespace) -> Coordinate | None:
    if args.lat is None and args.lon is None:
        return None
    if args.lat is None or args.lon is None:
        raise ValueError("--lat and --lon must be given together")
    return Coordinate(latitude=args.lat, longitude=args.lon, accuracy=args.accuracy)


def _cmd_days(args: argparse.Namespace) -> int:
    _, trip = _load(args)
    print(trip.title)
    print(render_day_list(trip))
    return 0


async def _show(args: argparse.Namespace, settings: Settings, trip: Trip) -> str:
    fix = _device_fix(args)
    viewer = TripViewer(trip, WeatherClient(settings), build_location_service(settings, fix))
    if fix is not None:
        await viewer.location.request_location()

    if args.no_weather:
        trip.get_day(args.day)
        view = select_day(viewer.view, args.day)
    else:
        view = await viewer.show_day(args.day)

    return render_day(
        trip,
        view,
        viewer.location.state,
        meters_per_minute=settings.walking.meters_per_minute,
        show_weather=not args.no_weather,
    )


def _cmd_show(args: argparse.Namespace) -> int:
    settings, trip = _load(args)
    print(asyncio.run(_show(args, settings, trip)))
    return 0


def _cmd_forecast(args: argparse.Namespace) -> int:
    settings, trip = _load(args)
    day = trip.get_day(args.day)
    on = target_date(trip.start_date, day.day, trip.timezone)
    hotel = day.hotel.location.as_coordinate() if day.hotel.location else None

    state = asyncio.run(WeatherClient(settings).fetch_daily_forecast(hotel, on))

    if args.json:
        payload: dict[str, Any] = {"day": day.day, "date": on.isoformat(), "status": state.status}
        if state.forecast is not None:
            payload["forecast"] = {**asdict(state.forecast), "category": state.forecast.category.value}
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return 0

    print(f"Day {day.day} ({on.isoformat()}) @ {day.hotel.name}: {weather_badge(state)}")
    return 0


def _cmd_distance(args: argparse.Namespace) -> int:
    settings = get_settings()
    origin = Coordinate(latitude=args.origin[0], longitude=args.origin[1])
    target = Coordinate(latitude=args.target[0], longitude=args.target[1])
    result = measure(origin, target, meters_per_minute=settings.walking.meters_per_minute)
    assert result is not None
    print(f"{result.display} ({result.meters:.0f} m), walking {result.walking_time_display}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the TripView CLI."""
    parser = argparse.ArgumentParser(prog="tripview")
    parser.add_argument("--itinerary", default=None, help="Itinerary YAML (defaults to settings.itinerary.path)")
    parser.add_argument("--log-level", default=None)
    sub = parser.add_subparsers(dest="command", required=True)

    days = sub.add_parser("days", help="List itinerary days.")
    days.set_defaults(func=_cmd_days)

    show = sub.add_parser("show", help="Show one day with forecast and distance badges.")
    show.add_argument("--day", type=int, default=1)
    show.add_argument("--lat", type=float, default=None, help="Current latitude (stands in for the device fix)")
    show.add_argument("--lon", type=float, default=None, help="Current longitude")
    show.add_argument("--accuracy", type=float, default=None, help="Fix accuracy in meters")
    show.add_argument("--no-weather", action="store_true", help="Skip the forecast lookup")
    show.set_defaults(func=_cmd_show)

    fc = sub.add_parser("forecast", help="Daily forecast at the day's hotel.")
    fc.add_argument("--day", type=int, required=True)
    fc.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    fc.set_defaults(func=_cmd_forecast)

    dist = sub.add_parser("distance", help="Great-circle distance and walking time between two points.")
    dist.add_argument("--from", dest="origin", nargs=2, type=float, required=True, metavar=("LAT", "LON"))
    dist.add_argument("--to", dest="target", nargs=2, type=float, required=True, metavar=("LAT", "LON"))
    dist.set_defaults(func=_cmd_distance)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m tripview.cli`."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    func: Any = getattr(args, "func")
    try:
        return int(func(args))
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
