"""Driving-route planning for the map's route overlay."""

from __future__ import annotations

import logging
from typing import Protocol

from reliefmap.exceptions import NoRouteFoundError, ReliefMapError, RouteError, RouteProviderError
from reliefmap.models.geo import Coordinate, MapRegion
from reliefmap.models.route import RouteCandidate, RoutePlan, TransportMode

_logger = logging.getLogger(__name__)


class DirectionsProvider(Protocol):
    """Structural interface of a directions service."""

    async def route(
        self,
        source: Coordinate,
        destination: Coordinate,
        mode: TransportMode,
    ) -> list[RouteCandidate]: ...


class RouteOverlayPlanner:
    """Turns a source/destination pair into a drawable :class:`RoutePlan`.

    Always asks for a driving route and takes the provider's first
    candidate; there is no comparison between alternatives. Keeps no state
    between calls.
    """

    MODE = TransportMode.AUTOMOBILE

    def __init__(self, provider: DirectionsProvider, *, edge_padding: float = 0.1) -> None:
        self._provider = provider
        self._edge_padding = edge_padding

    async def plan_route(self, source: Coordinate, destination: Coordinate) -> RoutePlan:
        """Plan a driving route.

        Raises
        ------
        NoRouteFoundError
            The provider found no route between the two points.
        RouteProviderError
            The provider failed.
        """
        try:
            candidates = await self._provider.route(source, destination, self.MODE)
        except RouteError:
            raise
        except ReliefMapError as exc:
            raise RouteProviderError(str(exc)) from exc

        if not candidates:
            raise NoRouteFoundError(
                f"No route found from {source.latitude:.5f},{source.longitude:.5f} "
                f"to {destination.latitude:.5f},{destination.longitude:.5f}"
            )

        first = candidates[0]
        if len(candidates) > 1:
            _logger.debug("Ignoring %d alternative route(s)", len(candidates) - 1)
        return RoutePlan(
            source=source,
            destination=destination,
            mode=self.MODE,
            polyline=first.polyline,
            region=MapRegion.fitting(first.polyline, padding=self._edge_padding),
            distance_m=first.distance_m,
            duration_s=first.duration_s,
        )
