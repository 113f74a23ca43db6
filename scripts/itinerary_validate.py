from __future__ import annotations

import argparse

from tripview.catalog.loader import load_trip
from tripview.core.env import resolve_project_path
from tripview.core.geo import distance_m

# Venues further than this from the day's hotel are most likely a coordinate typo.
SUSPICIOUS_DISTANCE_M = 60_000


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Validate the TripView itinerary file (offline).")
    p.add_argument("--itinerary", type=str, default="data/itinerary.yaml")
    args = p.parse_args(argv)

    path = resolve_project_path(args.itinerary)
    if not path.exists():
        print("Itinerary file not found:", path)
        return 2

    try:
        trip = load_trip(path)
    except ValueError as exc:
        print("Invalid itinerary:", exc)
        return 2

    venues = [(d, v) for d in trip.days for s in d.spots for v in s.venues]
    missing_coords = [v.name for _, v in venues if v.location is None]
    no_forecast_days = [d.day for d in trip.days if d.hotel.location is None]

    far: list[str] = []
    for day, venue in venues:
        if venue.location is None or day.hotel.location is None:
            continue
        meters = distance_m(day.hotel.location.as_coordinate(), venue.location.as_coordinate())
        if meters is not None and meters > SUSPICIOUS_DISTANCE_M:
            far.append(f"day{day.day}:{venue.name} ({meters / 1000:.0f}km)")

    print("Itinerary:", path)
    print("Trip:", trip.title, "from", trip.start_date.isoformat(), f"({trip.timezone})")
    print("Days:", len(trip.days))
    print("Venues:", len(venues))
    print("Venues without coordinates (no distance badge):", len(missing_coords))
    if no_forecast_days:
        print("Days without hotel coordinates (no forecast):", ", ".join(str(d) for d in no_forecast_days))
    if far:
        print("Venues far from the day's hotel:", len(far), "example:", ", ".join(far[:8]))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
