"""OSRM ``route/v1`` endpoint.

Query building and response parsing for an OSRM-compatible server.
Coordinates go into the path as ``lon,lat;lon,lat``; geometry comes back
as GeoJSON ``[lon, lat]`` pairs.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from reliefmap._constants import OSRM_PROFILES
from reliefmap._transport import Transport
from reliefmap.exceptions import RouteProviderError
from reliefmap.models.geo import Coordinate
from reliefmap.models.route import RouteCandidate, TransportMode

_logger = logging.getLogger(__name__)

# OSRM codes meaning "the query was fine, there is just no way there".
_NO_ROUTE_CODES = frozenset({"NoRoute", "NoSegment"})


def build_route_url(base_url: str, source: Coordinate, destination: Coordinate, mode: TransportMode) -> str:
    profile = OSRM_PROFILES.get(mode.value)
    if profile is None:
        raise RouteProviderError(f"Transport mode {mode.value!r} is not supported by OSRM")
    return f"{base_url.rstrip('/')}/route/v1/{profile}/{source.as_lon_lat()};{destination.as_lon_lat()}"


ROUTE_QUERY: dict[str, str] = {
    "overview": "full",
    "geometries": "geojson",
    "alternatives": "false",
    "steps": "false",
}


def _parse_geometry(geometry: Any) -> tuple[Coordinate, ...]:
    if not isinstance(geometry, dict):
        raise RouteProviderError("Route geometry missing from directions response")
    points = geometry.get("coordinates")
    if not isinstance(points, list):
        raise RouteProviderError("Route geometry has no coordinates")
    try:
        return tuple(Coordinate(latitude=float(p[1]), longitude=float(p[0])) for p in points)
    except (TypeError, ValueError, IndexError, ValidationError) as exc:
        raise RouteProviderError(f"Malformed route geometry: {exc}") from exc


def parse_route_response(payload: Any) -> list[RouteCandidate]:
    """Parse an OSRM response into candidates (empty when there is no route)."""
    if not isinstance(payload, dict):
        raise RouteProviderError("Directions response is not a JSON object")

    code = payload.get("code")
    if code in _NO_ROUTE_CODES:
        return []
    if code != "Ok":
        message = payload.get("message") or "unknown error"
        raise RouteProviderError(f"Directions provider returned {code}: {message}")

    candidates: list[RouteCandidate] = []
    for route in payload.get("routes") or []:
        if not isinstance(route, dict):
            continue
        polyline = _parse_geometry(route.get("geometry"))
        if len(polyline) < 2:
            _logger.debug("Dropping degenerate route with %d points", len(polyline))
            continue
        legs = route.get("legs") or []
        summary = next(
            (leg.get("summary") for leg in legs if isinstance(leg, dict) and leg.get("summary")),
            None,
        )
        try:
            candidate = RouteCandidate(
                polyline=polyline,
                distance_m=route.get("distance"),
                duration_s=route.get("duration"),
                summary=summary,
            )
        except ValidationError as exc:
            raise RouteProviderError(f"Malformed route in directions response: {exc}") from exc
        candidates.append(candidate)
    return candidates


async def fetch_routes(
    transport: Transport,
    base_url: str,
    source: Coordinate,
    destination: Coordinate,
    mode: TransportMode,
) -> list[RouteCandidate]:
    url = build_route_url(base_url, source, destination, mode)
    payload = await transport.get_json(url, ROUTE_QUERY, json_errors=True)
    return parse_route_response(payload)
