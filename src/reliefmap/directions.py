"""OSRM-backed directions provider."""

from __future__ import annotations

import logging

from reliefmap._api.directions import fetch_routes
from reliefmap._transport import Transport
from reliefmap.exceptions import FetchError, RouteProviderError
from reliefmap.models.geo import Coordinate
from reliefmap.models.route import RouteCandidate, TransportMode

_logger = logging.getLogger(__name__)


class OsrmDirectionsProvider:
    """Implements ``DirectionsProvider`` against an OSRM ``route`` service."""

    def __init__(self, transport: Transport, base_url: str) -> None:
        self._transport = transport
        self._base_url = base_url

    async def route(
        self,
        source: Coordinate,
        destination: Coordinate,
        mode: TransportMode,
    ) -> list[RouteCandidate]:
        try:
            candidates = await fetch_routes(self._transport, self._base_url, source, destination, mode)
        except FetchError as exc:
            raise RouteProviderError(str(exc)) from exc
        _logger.debug("OSRM returned %d route candidate(s)", len(candidates))
        return candidates
