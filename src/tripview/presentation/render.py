"""
Text rendering for the itinerary.

Pure functions from (trip, view state, location state) to strings. Nothing here
performs I/O: copying share text or opening a map link is left to whoever prints
the result.
"""

from __future__ import annotations

from urllib.parse import quote

from tripview.core.geo import DEFAULT_WALKING_M_PER_MIN, DistanceResult, measure
from tripview.domain.models import Day, Trip, Venue
from tripview.location.service import LocationState, user_message
from tripview.viewer.state import ViewState
from tripview.weather.client import ForecastFetchState
from tripview.weather.codes import condition_label

GOOGLE_MAPS_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query="

_TYPE_TAGS = {
    "food": "food",
    "snack": "snack",
    "dessert": "sweet",
    "coffee": "cafe",
    "shopping": "shop",
    "drug": "drug",
    "coupon": "COUPON",
}


def format_reviews(count: int) -> str:
    """Compact review count: `(9w+)` above 10k, `(3.8k)` above 1k, else `(500)`."""
    if count > 10000:
        return f"({count // 10000}w+)"
    if count > 1000:
        return f"({count / 1000:g}k)"
    return f"({count})"


def star_bar(rating: float) -> str:
    full = max(0, min(5, int(rating)))
    return "★" * full + "☆" * (5 - full)


def map_url(venue: Venue) -> str:
    return GOOGLE_MAPS_SEARCH_URL + quote(venue.map_query, safe="")


def open_target(venue: Venue) -> str:
    """The link the navigation button opens: external link if present, else map search."""
    return venue.external_link or map_url(venue)


def share_text(venue: Venue) -> str:
    if venue.external_link:
        return f"{venue.name} - {venue.description}\n優惠券連結: {venue.external_link}"
    return f"{venue.name} - {venue.description}\n{map_url(venue)}"


def venue_distance(
    location: LocationState, venue: Venue, *, meters_per_minute: float = DEFAULT_WALKING_M_PER_MIN
) -> DistanceResult | None:
    if venue.location is None:
        return None
    return measure(location.coordinate, venue.location.as_coordinate(), meters_per_minute=meters_per_minute)


def distance_badge(
    location: LocationState, venue: Venue, *, meters_per_minute: float = DEFAULT_WALKING_M_PER_MIN
) -> str | None:
    """`1.2km · 15 min` when both positions are known, else `None` (no badge)."""
    result = venue_distance(location, venue, meters_per_minute=meters_per_minute)
    if result is None:
        return None
    return f"{result.display} · {result.walking_time_display}"


def weather_badge(state: ForecastFetchState) -> str:
    if state.status == "loading":
        return "Loading forecast..."
    if state.forecast is None:
        return "Forecast unavailable"
    fc = state.forecast
    text = f"{condition_label(fc.category)} {fc.temp_min_c}-{fc.temp_max_c}°C"
    if fc.precipitation_probability is not None:
        text += f", rain {fc.precipitation_probability}%"
    return text


def location_line(location: LocationState) -> str:
    if location.status == "idle":
        return "Location: not requested"
    if location.status == "loading":
        return "Location: locating..."
    if location.status == "failed" and location.error is not None:
        return f"Location: {user_message(location.error)}"
    coord = location.coordinate
    assert coord is not None
    accuracy = f" (±{coord.accuracy:.0f}m)" if coord.accuracy is not None else ""
    return f"Location: {coord.latitude:.4f}, {coord.longitude:.4f}{accuracy}"


def render_venue(
    venue: Venue, location: LocationState, *, meters_per_minute: float = DEFAULT_WALKING_M_PER_MIN
) -> list[str]:
    tag = _TYPE_TAGS.get(venue.type, "spot")
    header = f"  [{tag}] {venue.name}  {venue.rating:.1f} {star_bar(venue.rating)} {format_reviews(venue.review_count)}"
    if venue.price_level:
        header += f" · {venue.price_level}"
    badge = distance_badge(location, venue, meters_per_minute=meters_per_minute)
    if badge:
        header += f"  [{badge}]"
    lines = [header]
    if venue.description:
        lines.append(f"      {venue.description}")
    lines.append(f"      {open_target(venue)}")
    return lines


def render_day(
    trip: Trip,
    view: ViewState,
    location: LocationState,
    *,
    meters_per_minute: float = DEFAULT_WALKING_M_PER_MIN,
    show_weather: bool = True,
) -> str:
    """Render the active day: header, hotel, forecast, then every spot and venue."""
    day: Day = trip.get_day(view.active_day)
    lines = [
        trip.title,
        f"Day {day.day}  {day.date_label}  {day.location}",
        f"Hotel: {day.hotel.name}",
    ]
    if show_weather:
        lines.append(f"Weather: {weather_badge(view.forecast)}")
    lines.append(location_line(location))

    for spot in day.spots:
        lines.append("")
        lines.append(f"● {spot.name}" + (f" - {spot.description}" if spot.description else ""))
        for venue in spot.venues:
            lines.extend(render_venue(venue, location, meters_per_minute=meters_per_minute))
    return "\n".join(lines)


def render_day_list(trip: Trip, *, active_day: int | None = None) -> str:
    lines = []
    for d in trip.days:
        marker = "*" if d.day == active_day else " "
        lines.append(f"{marker} Day {d.day}  {d.date_label}  {d.location}")
    return "\n".join(lines)
