"""Geographic value types: coordinates, spans and map regions."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from reliefmap._constants import DEFAULT_SPAN_DELTA


class Coordinate(BaseModel):
    """A WGS84 latitude/longitude pair in degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)

    def as_lon_lat(self) -> str:
        """``"lon,lat"`` as used in OSRM URLs."""
        return f"{self.longitude:.6f},{self.latitude:.6f}"


class CoordinateSpan(BaseModel):
    """Visible extent of a region, in degrees."""

    model_config = ConfigDict(frozen=True)

    latitude_delta: float = Field(..., ge=0.0)
    longitude_delta: float = Field(..., ge=0.0)


class MapRegion(BaseModel):
    """A viewport: a centre coordinate plus a span."""

    model_config = ConfigDict(frozen=True)

    center: Coordinate
    span: CoordinateSpan

    @classmethod
    def around(cls, latitude: float, longitude: float, delta: float = DEFAULT_SPAN_DELTA) -> MapRegion:
        """Square region centred at ``(latitude, longitude)`` with ``delta`` on both axes."""
        return cls(
            center=Coordinate(latitude=latitude, longitude=longitude),
            span=CoordinateSpan(latitude_delta=delta, longitude_delta=delta),
        )

    @classmethod
    def fitting(cls, coordinates: Iterable[Coordinate], *, padding: float = 0.0) -> MapRegion:
        """Smallest region containing every coordinate.

        ``padding`` widens the span by that fraction on each side. Raises
        :class:`ValueError` when ``coordinates`` is empty.
        """
        points = list(coordinates)
        if not points:
            raise ValueError("cannot fit a region to zero coordinates")
        min_lat = min(p.latitude for p in points)
        max_lat = max(p.latitude for p in points)
        min_lon = min(p.longitude for p in points)
        max_lon = max(p.longitude for p in points)
        scale = 1.0 + 2.0 * padding
        return cls(
            center=Coordinate(latitude=(min_lat + max_lat) / 2.0, longitude=(min_lon + max_lon) / 2.0),
            span=CoordinateSpan(
                latitude_delta=min((max_lat - min_lat) * scale, 180.0),
                longitude_delta=min((max_lon - min_lon) * scale, 360.0),
            ),
        )

    def contains(self, coordinate: Coordinate) -> bool:
        half_lat = self.span.latitude_delta / 2.0
        half_lon = self.span.longitude_delta / 2.0
        return (
            abs(coordinate.latitude - self.center.latitude) <= half_lat + 1e-9
            and abs(coordinate.longitude - self.center.longitude) <= half_lon + 1e-9
        )
