"""
Weather condition classification.

Open-Meteo reports WMO weather interpretation codes (0..99, sparse). The badge only
needs a handful of display categories, so codes are bucketed by ascending ranges.
Any code outside the table (negative, gaps, > 99) maps to `UNSETTLED`.
"""

from __future__ import annotations

from enum import Enum


class ConditionCategory(str, Enum):
    CLEAR = "clear"
    PARTLY_CLOUDY = "partly_cloudy"
    OVERCAST = "overcast"
    RAIN = "rain"
    SNOW = "snow"
    THUNDERSTORM = "thunderstorm"
    UNSETTLED = "unsettled"


# (first code, last code, category), ascending and non-overlapping.
_CODE_RANGES: tuple[tuple[int, int, ConditionCategory], ...] = (
    (0, 0, ConditionCategory.CLEAR),
    (1, 2, ConditionCategory.PARTLY_CLOUDY),
    (3, 3, ConditionCategory.OVERCAST),
    (45, 48, ConditionCategory.OVERCAST),  # fog, depositing rime fog
    (51, 67, ConditionCategory.RAIN),  # drizzle, rain, freezing rain
    (71, 77, ConditionCategory.SNOW),  # snowfall, snow grains
    (80, 82, ConditionCategory.RAIN),  # rain showers
    (85, 86, ConditionCategory.SNOW),  # snow showers
    (95, 99, ConditionCategory.THUNDERSTORM),
)

_LABELS: dict[ConditionCategory, str] = {
    ConditionCategory.CLEAR: "Sunny",
    ConditionCategory.PARTLY_CLOUDY: "Partly cloudy",
    ConditionCategory.OVERCAST: "Cloudy",
    ConditionCategory.RAIN: "Rain",
    ConditionCategory.SNOW: "Snow",
    ConditionCategory.THUNDERSTORM: "Thunderstorm",
    ConditionCategory.UNSETTLED: "Unsettled",
}


def classify_condition(code: int) -> ConditionCategory:
    """Map a WMO weather code to a display category (total over all ints)."""
    for first, last, category in _CODE_RANGES:
        if first <= code <= last:
            return category
    return ConditionCategory.UNSETTLED


def condition_label(category: ConditionCategory) -> str:
    return _LABELS[category]
