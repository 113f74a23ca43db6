import math

import pytest

from tripview.core.geo import (
    EARTH_RADIUS_M,
    Coordinate,
    distance_m,
    estimate_walking_time,
    format_distance,
    measure,
    round_half_up,
)

OSAKA = Coordinate(latitude=34.6687, longitude=135.5013)
KYOTO = Coordinate(latitude=34.9833, longitude=135.7594)


def test_distance_osaka_to_kyoto_matches_reference_haversine():
    meters = distance_m(OSAKA, KYOTO)
    # Dotonbori -> Kyoto station area, straight line.
    assert meters == pytest.approx(42_175, abs=500)


def test_distance_is_symmetric_and_zero_for_identical_points():
    assert distance_m(OSAKA, KYOTO) == pytest.approx(distance_m(KYOTO, OSAKA), rel=1e-12)
    assert distance_m(OSAKA, OSAKA) == 0.0
    assert distance_m(KYOTO, Coordinate(latitude=34.9833, longitude=135.7594)) == 0.0


def test_distance_antipodal_points_do_not_raise():
    meters = distance_m(Coordinate(latitude=0, longitude=0), Coordinate(latitude=0, longitude=180))
    assert meters == pytest.approx(math.pi * EARTH_RADIUS_M, rel=1e-9)

    poles = distance_m(Coordinate(latitude=90, longitude=0), Coordinate(latitude=-90, longitude=0))
    assert math.isfinite(poles)
    assert poles == pytest.approx(math.pi * EARTH_RADIUS_M, rel=1e-9)


@pytest.mark.parametrize(
    "a, b",
    [
        (None, OSAKA),
        (OSAKA, None),
        (None, None),
    ],
)
def test_distance_returns_none_when_a_side_is_unknown(a, b):
    assert distance_m(a, b) is None
    assert measure(a, b) is None


def test_distance_is_non_negative_and_finite_for_assorted_points():
    points = [
        Coordinate(latitude=lat, longitude=lon)
        for lat in (-89.9, -45.0, 0.0, 34.7, 89.9)
        for lon in (-179.9, -90.0, 0.0, 135.5, 180.0)
    ]
    for a in points:
        for b in points:
            d = distance_m(a, b)
            assert d is not None
            assert math.isfinite(d)
            assert d >= 0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"latitude": float("nan"), "longitude": 0.0},
        {"latitude": 0.0, "longitude": float("inf")},
        {"latitude": 90.5, "longitude": 0.0},
        {"latitude": 0.0, "longitude": -180.1},
        {"latitude": 0.0, "longitude": 0.0, "accuracy": -1.0},
    ],
)
def test_coordinate_rejects_invalid_values(kwargs):
    with pytest.raises(ValueError):
        Coordinate(**kwargs)


def test_format_distance_thresholds():
    assert format_distance(None) is None
    assert format_distance(0) == "0m"
    assert format_distance(350.4) == "350m"
    assert format_distance(999) == "999m"
    assert format_distance(1000) == "1.0km"
    assert format_distance(1549) == "1.5km"
    assert format_distance(12_345) == "12.3km"


def test_round_half_up_matches_math_round_semantics():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4999) == 2


def test_estimate_walking_time_labels():
    assert estimate_walking_time(None) is None
    assert estimate_walking_time(0) == "< 1 min"
    assert estimate_walking_time(41) == "< 1 min"
    assert estimate_walking_time(42) == "1 min"
    assert estimate_walking_time(83 * 30) == "30 min"
    assert estimate_walking_time(83 * 59) == "59 min"
    assert estimate_walking_time(83 * 60) == "1h 0m"
    assert estimate_walking_time(83 * 65) == "1h 5m"


def test_estimate_walking_time_respects_custom_pace():
    assert estimate_walking_time(1000, meters_per_minute=100) == "10 min"


def test_measure_combines_display_strings():
    result = measure(OSAKA, KYOTO)
    assert result is not None
    assert result.display == format_distance(result.meters)
    assert result.display.startswith("42.")
    assert result.walking_time_display == estimate_walking_time(result.meters)
    assert result.walking_time_display.endswith("m")
