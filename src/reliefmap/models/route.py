"""Directions models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from reliefmap.models.geo import Coordinate, MapRegion


class TransportMode(StrEnum):
    AUTOMOBILE = "automobile"
    WALKING = "walking"
    CYCLING = "cycling"


class RouteCandidate(BaseModel):
    """One route returned by a directions provider.

    Parameters
    ----------
    polyline : tuple of Coordinate
        Line geometry from source to destination.
    distance_m : float or None
        Route length in metres.
    duration_s : float or None
        Expected travel time in seconds.
    summary : str or None
        Provider's short description (e.g. main road names).
    """

    model_config = ConfigDict(frozen=True)

    polyline: tuple[Coordinate, ...] = Field(..., min_length=2)
    distance_m: float | None = None
    duration_s: float | None = None
    summary: str | None = None


class RoutePlan(BaseModel):
    """A planned route ready to be drawn as the map's route overlay."""

    model_config = ConfigDict(frozen=True)

    source: Coordinate
    destination: Coordinate
    mode: TransportMode
    polyline: tuple[Coordinate, ...]
    region: MapRegion
    distance_m: float | None = None
    duration_s: float | None = None
