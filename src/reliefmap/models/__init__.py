"""Data models for relief requests, map annotations and routes."""

from reliefmap.models._base import ReliefBaseModel
from reliefmap.models.annotation import AnnotationKind, MapAnnotation, Placemark
from reliefmap.models.geo import Coordinate, CoordinateSpan, MapRegion
from reliefmap.models.request import AnnotationKey, RequestRecord
from reliefmap.models.route import RouteCandidate, RoutePlan, TransportMode

__all__ = [
    "AnnotationKey",
    "AnnotationKind",
    "Coordinate",
    "CoordinateSpan",
    "MapAnnotation",
    "MapRegion",
    "Placemark",
    "ReliefBaseModel",
    "RequestRecord",
    "RouteCandidate",
    "RoutePlan",
    "TransportMode",
]
