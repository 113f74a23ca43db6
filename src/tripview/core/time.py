"""
Trip-date helpers.

Itinerary days are anchored to the trip's local calendar (Asia/Tokyo), not to the
device viewing the itinerary. A traveler checking day 3 from Taipei or Los Angeles
must get the same forecast date as someone standing in Osaka.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo


def ensure_tz(dt: datetime, timezone: str) -> datetime:
    """Ensure `dt` has tzinfo; attach `timezone` if naive."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=ZoneInfo(timezone))
    return dt


def to_trip_date(value: date | datetime, timezone: str) -> date:
    """Return the calendar date of `value` as seen in `timezone`."""
    if isinstance(value, datetime):
        return ensure_tz(value, timezone).astimezone(ZoneInfo(timezone)).date()
    return value


def target_date(trip_start: date | datetime, day_offset: int, timezone: str) -> date:
    """Return the calendar date of a 1-based itinerary day (day 1 = start date)."""
    if day_offset < 1:
        raise ValueError(f"day_offset is 1-based, got {day_offset}")
    return to_trip_date(trip_start, timezone) + timedelta(days=day_offset - 1)
