from pathlib import Path

import pytest

from tripview.catalog.loader import load_trip
from tripview.domain.models import Trip

ITINERARY_PATH = Path(__file__).resolve().parents[1] / "data" / "itinerary.yaml"


@pytest.fixture
def itinerary_path() -> Path:
    return ITINERARY_PATH


@pytest.fixture
def trip() -> Trip:
    return load_trip(ITINERARY_PATH)
