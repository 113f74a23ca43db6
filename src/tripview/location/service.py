"""
Device location lifecycle.

One `LocationService` is built per session and handed to everything that needs the
user's position (every distance badge reads the same state). Acquisition only ever
happens on an explicit request: there is no polling and no automatic retry.

State machine:

    idle -> loading -> resolved | failed
    resolved | failed -> loading -> ...

Failures from the positioning capability never escape as exceptions; they become a
`failed` state carrying a `LocationErrorReason`.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable, Literal

from tripview.core.geo import Coordinate
from tripview.location.providers import (
    LocationErrorReason,
    PositionError,
    PositionOptions,
    PositionProvider,
)

logger = logging.getLogger(__name__)

LocationStatus = Literal["idle", "loading", "resolved", "failed"]
Listener = Callable[["LocationState"], None]

_USER_MESSAGES: dict[LocationErrorReason, str] = {
    LocationErrorReason.CAPABILITY_UNAVAILABLE: "Location is not supported on this device",
    LocationErrorReason.PERMISSION_DENIED: "Location permission denied",
    LocationErrorReason.POSITION_UNAVAILABLE: "Current position unavailable",
    LocationErrorReason.TIMEOUT: "Locating timed out, try again",
    LocationErrorReason.UNKNOWN: "Could not get your location",
}


def user_message(reason: LocationErrorReason) -> str:
    """Short message shown next to the locate button after a failure."""
    return _USER_MESSAGES.get(reason, _USER_MESSAGES[LocationErrorReason.UNKNOWN])


@dataclass(frozen=True)
class LocationState:
    """Snapshot of the location lifecycle. Replaced as a whole on every transition."""

    status: LocationStatus
    coordinate: Coordinate | None = None
    error: LocationErrorReason | None = None

    @classmethod
    def idle(cls) -> "LocationState":
        return cls(status="idle")

    @classmethod
    def loading(cls) -> "LocationState":
        return cls(status="loading")

    @classmethod
    def resolved(cls, coordinate: Coordinate) -> "LocationState":
        return cls(status="resolved", coordinate=coordinate)

    @classmethod
    def failed(cls, reason: LocationErrorReason) -> "LocationState":
        return cls(status="failed", error=reason)


class LocationService:
    """Owns the single in-flight location request and broadcasts state changes."""

    def __init__(
        self,
        provider: PositionProvider | None,
        *,
        options: PositionOptions | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._provider = provider
        self._options = options or PositionOptions()
        self._clock = clock
        self._state = LocationState.idle()
        self._listeners: list[Listener] = []
        self._pending: asyncio.Task[LocationState] | None = None
        self._last_fix: tuple[float, Coordinate] | None = None
        self._closed = False

    @property
    def state(self) -> LocationState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return self._state.status == "loading"

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener` for every future transition; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        """Detach all consumers. A request still in flight finishes quietly and is discarded."""
        self._closed = True
        self._listeners.clear()

    def _transition(self, state: LocationState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Location listener failed on %s", state.status)

    async def request_location(self) -> LocationState:
        """Acquire one fix. Concurrent callers share the request already in flight."""
        if self._closed:
            return self._state

        if self._pending is not None and not self._pending.done():
            return await asyncio.shield(self._pending)

        if self._provider is None:
            self._transition(LocationState.failed(LocationErrorReason.CAPABILITY_UNAVAILABLE))
            return self._state

        self._transition(LocationState.loading())

        cached = self._fresh_fix()
        if cached is not None:
            logger.debug("Reusing location fix younger than %.0fs", self._options.maximum_age_seconds)
            self._transition(LocationState.resolved(cached))
            return self._state

        self._pending = asyncio.ensure_future(self._acquire(self._provider))
        return await asyncio.shield(self._pending)

    def _fresh_fix(self) -> Coordinate | None:
        if self._last_fix is None:
            return None
        obtained_at, coordinate = self._last_fix
        if self._clock() - obtained_at <= self._options.maximum_age_seconds:
            return coordinate
        return None

    async def _acquire(self, provider: PositionProvider) -> LocationState:
        try:
            coordinate = await asyncio.wait_for(
                provider.get_current_position(self._options),
                timeout=self._options.timeout_seconds,
            )
        except asyncio.TimeoutError:
            result = LocationState.failed(LocationErrorReason.TIMEOUT)
        except PositionError as exc:
            result = LocationState.failed(exc.reason)
        except Exception:
            logger.exception("Positioning capability raised unexpectedly")
            result = LocationState.failed(LocationErrorReason.UNKNOWN)
        else:
            self._last_fix = (self._clock(), coordinate)
            result = LocationState.resolved(coordinate)

        if self._closed:
            logger.debug("Discarding location result after close: %s", result.status)
            return result

        if result.error is not None:
            logger.info("Location request failed: %s", result.error.value)
        self._transition(result)
        return result
