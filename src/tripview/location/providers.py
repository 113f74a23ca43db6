"""
Positioning capability.

The device's "get current position" call is an external collaborator. This module
defines the seam the location service talks to, plus a fixed-fix provider used by
the CLI (where `--lat/--lon` stands in for the device) and by tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from tripview.core.geo import Coordinate


class LocationErrorReason(str, Enum):
    CAPABILITY_UNAVAILABLE = "capability_unavailable"
    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class PositionOptions:
    """Options passed to the platform for a single position request."""

    high_accuracy: bool = True
    timeout_seconds: float = 10
    maximum_age_seconds: float = 60


class PositionError(Exception):
    """A categorized failure reported by the positioning capability."""

    def __init__(self, reason: LocationErrorReason, message: str = ""):
        super().__init__(message or reason.value)
        self.reason = reason


class PositionProvider(Protocol):
    async def get_current_position(self, options: PositionOptions) -> Coordinate: ...


class FixedPositionProvider:
    """Always reports the same fix (or the same failure)."""

    def __init__(self, coordinate: Coordinate | None = None, *, error: LocationErrorReason | None = None):
        if coordinate is None and error is None:
            raise ValueError("FixedPositionProvider needs a coordinate or an error")
        self._coordinate = coordinate
        self._error = error
        self.calls = 0

    async def get_current_position(self, options: PositionOptions) -> Coordinate:
        self.calls += 1
        if self._error is not None:
            raise PositionError(self._error)
        assert self._coordinate is not None
        return self._coordinate
