"""One-shot device location tracking.

:class:`LocationTracker` wraps a platform :class:`LocationService`. It asks
for both "always" and "when in use" authorization, starts updates, and
yields the first fix only before stopping the service again: the map
needs a starting point, not continuous tracking.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator
from enum import StrEnum
from typing import Protocol

from reliefmap._constants import ACCURACY_NEAREST_TEN_METERS
from reliefmap.exceptions import (
    LocationError,
    LocationPermissionDeniedError,
    LocationServicesDisabledError,
)
from reliefmap.models.geo import Coordinate

_logger = logging.getLogger(__name__)


class AuthorizationStatus(StrEnum):
    NOT_DETERMINED = "not_determined"
    DENIED = "denied"
    RESTRICTED = "restricted"
    AUTHORIZED_ALWAYS = "authorized_always"
    AUTHORIZED_WHEN_IN_USE = "authorized_when_in_use"

    @property
    def is_denied(self) -> bool:
        return self in (AuthorizationStatus.DENIED, AuthorizationStatus.RESTRICTED)


class LocationDelegate(Protocol):
    """Receives fixes and failures. May be called from any thread."""

    def location_updated(self, coordinate: Coordinate) -> None: ...

    def location_failed(self, error: LocationError) -> None: ...


class LocationService(Protocol):
    """Structural interface of a platform location service."""

    def services_enabled(self) -> bool: ...

    def request_always_authorization(self) -> None: ...

    def request_when_in_use_authorization(self) -> None: ...

    def authorization_status(self) -> AuthorizationStatus: ...

    def start_updating(self, delegate: LocationDelegate, desired_accuracy: float) -> None: ...

    def stop_updating(self) -> None: ...


class _FirstFix:
    """Delegate that resolves a future with the first fix or failure."""

    def __init__(self, loop: asyncio.AbstractEventLoop, future: asyncio.Future[Coordinate]) -> None:
        self._loop = loop
        self._future = future

    def _resolve(self, coordinate: Coordinate) -> None:
        if not self._future.done():
            self._future.set_result(coordinate)

    def _fail(self, error: LocationError) -> None:
        if not self._future.done():
            self._future.set_exception(error)

    def location_updated(self, coordinate: Coordinate) -> None:
        if self._loop.is_closed():
            return
        self._loop.call_soon_threadsafe(self._resolve, coordinate)

    def location_failed(self, error: LocationError) -> None:
        if self._loop.is_closed():
            return
        self._loop.call_soon_threadsafe(self._fail, error)


class LocationTracker:
    """Produces at most one current-position fix per activation."""

    def __init__(
        self,
        service: LocationService,
        *,
        desired_accuracy: float = ACCURACY_NEAREST_TEN_METERS,
    ) -> None:
        self._service = service
        self._desired_accuracy = desired_accuracy

    async def activate(self) -> AsyncIterator[Coordinate]:
        """Yield the first fix, then stop.

        Raises
        ------
        LocationServicesDisabledError
            Location services are off; the service is never started.
        LocationPermissionDeniedError
            Neither authorization was granted. No retry is attempted.
        """
        self._service.request_always_authorization()
        self._service.request_when_in_use_authorization()

        if not self._service.services_enabled():
            _logger.debug("Location services disabled; not starting updates")
            raise LocationServicesDisabledError("Location services are disabled")
        if self._service.authorization_status().is_denied:
            raise LocationPermissionDeniedError("Location permission denied")

        loop = asyncio.get_running_loop()
        future: asyncio.Future[Coordinate] = loop.create_future()
        # start_updating and stop_updating may block on network I/O; both run in the default executor.
        try:
            await loop.run_in_executor(None, self._service.start_updating, _FirstFix(loop, future), self._desired_accuracy)
            _logger.debug("Location updates started accuracy=%.1fm", self._desired_accuracy)
            coordinate = await future
        finally:
            await loop.run_in_executor(None, self._service.stop_updating)
            _logger.debug("Location updates stopped")
        yield coordinate

    async def first_fix(self) -> Coordinate:
        """Convenience wrapper around :meth:`activate`."""
        async with contextlib.aclosing(self.activate()) as fixes:
            async for coordinate in fixes:
                return coordinate
        raise LocationError("Location service produced no fix")
