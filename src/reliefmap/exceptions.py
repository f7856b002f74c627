"""Custom exception hierarchy for reliefmap."""

from __future__ import annotations


class ReliefMapError(Exception):
    """Base exception for all reliefmap errors."""


class ReliefMapConfigError(ReliefMapError):
    """Invalid or missing configuration."""


class LocationError(ReliefMapError):
    """Location lookup could not produce a fix."""


class LocationServicesDisabledError(LocationError):
    """Location services are switched off at the platform level."""


class LocationPermissionDeniedError(LocationError):
    """The platform (or broker) refused access to the device location."""


class FetchError(ReliefMapError):
    """Resource request listing could not be fetched."""

    def __init__(self, message: str, *, url: str = "") -> None:
        self.url = url
        super().__init__(message)


class FetchNetworkError(FetchError):
    """Network-level failure (connection refused, timeout, DNS)."""


class FetchServerError(FetchError):
    """Server answered with a non-200 status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        super().__init__(message, url=url)


class FetchDecodeError(FetchError):
    """Response body was not the JSON shape we expect."""


class RouteError(ReliefMapError):
    """Directions lookup failed."""


class NoRouteFoundError(RouteError):
    """The directions provider returned no route candidates."""


class RouteProviderError(RouteError):
    """The directions provider failed (network, quota, bad response)."""


class UiThreadError(ReliefMapError):
    """Map surface or store touched outside the UI execution context."""
