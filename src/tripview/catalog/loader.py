"""
Itinerary loader.

The itinerary is a local YAML file (default: `data/itinerary.yaml`) holding the
days, spots and venues of the trip. We validate it into typed Pydantic models so
the viewer and renderers can assume a consistent shape.
"""

from __future__ import annotations

from pathlib import Path

import yaml

from tripview.core.env import resolve_project_path
from tripview.domain.models import Trip


def load_trip(path: str | Path) -> Trip:
    """Load and validate an itinerary YAML file."""
    resolved = resolve_project_path(path)
    payload = yaml.safe_load(resolved.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"Invalid itinerary root object in {resolved}; expected a mapping.")
    return Trip.model_validate(payload)
