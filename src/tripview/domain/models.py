"""
Domain models (Pydantic).

These types describe the static itinerary the viewer renders: trip, days, spots
(areas visited on a day) and venues (places recommended inside a spot). They are
read-only reference data; the viewer never mutates them.

Coordinates are optional everywhere: a venue without one simply gets no distance
badge, and a day without a hotel position (the flight home) gets no forecast.
"""

from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from tripview.core.geo import Coordinate

VenueType = Literal["food", "snack", "dessert", "coffee", "shopping", "drug", "coupon", "sight"]


class GeoPoint(BaseModel):
    """A geographic point in decimal degrees."""

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)

    def as_coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.lat, longitude=self.lon)


class Venue(BaseModel):
    """A recommended place (restaurant, shop, coupon, ...)."""

    type: VenueType = "sight"
    name: str
    description: str = ""
    rating: float = Field(0, ge=0, le=5)
    review_count: int = Field(0, ge=0)
    price_level: str = ""
    map_query: str
    external_link: str | None = None
    location: GeoPoint | None = None

    @property
    def is_coupon(self) -> bool:
        return self.type == "coupon"


class Spot(BaseModel):
    """An area visited on a given day, with its venue recommendations."""

    name: str
    description: str = ""
    venues: list[Venue] = Field(default_factory=list)


class Hotel(BaseModel):
    name: str
    location: GeoPoint | None = None


class Day(BaseModel):
    day: int = Field(..., ge=1)
    date_label: str
    location: str
    hotel: Hotel
    color: str = ""
    spots: list[Spot] = Field(default_factory=list)


class Trip(BaseModel):
    title: str
    start_date: date
    timezone: str = "Asia/Tokyo"
    days: list[Day]

    @field_validator("days")
    @classmethod
    def _sort_days(cls, days: list[Day]) -> list[Day]:
        return sorted(days, key=lambda d: d.day)

    @model_validator(mode="after")
    def _validate_day_numbers(self) -> "Trip":
        numbers = [d.day for d in self.days]
        if not numbers:
            raise ValueError("trip must contain at least one day")
        if numbers != list(range(1, len(numbers) + 1)):
            raise ValueError(f"day numbers must be 1..{len(numbers)} without gaps, got {numbers}")
        return self

    def get_day(self, day: int) -> Day:
        for d in self.days:
            if d.day == day:
                return d
        raise ValueError(f"Unknown day {day}; trip has days 1..{len(self.days)}")
