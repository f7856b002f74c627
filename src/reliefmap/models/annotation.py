"""Map annotation variants.

Annotations carry an explicit :class:`AnnotationKind` discriminant so
callers never need ``isinstance`` checks to tell a request pin from the
location marker.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from reliefmap.models.geo import Coordinate
from reliefmap.models.request import AnnotationKey, RequestRecord


class AnnotationKind(StrEnum):
    REQUEST = "request"
    CURRENT_LOCATION = "current_location"
    SEARCH_RESULT = "search_result"


class Placemark(BaseModel):
    """An address picked from the type-ahead search."""

    model_config = ConfigDict(frozen=True)

    coordinate: Coordinate
    title: str | None = None
    sub_locality: str | None = None


class MapAnnotation(BaseModel):
    """A marker on the map surface. Hashable by value."""

    model_config = ConfigDict(frozen=True)

    kind: AnnotationKind
    coordinate: Coordinate
    title: str | None = None
    subtitle: str | None = None

    @classmethod
    def for_request(cls, record: RequestRecord) -> MapAnnotation:
        return cls(
            kind=AnnotationKind.REQUEST,
            coordinate=record.coordinate,
            title=record.title,
            subtitle=record.subtitle,
        )

    @classmethod
    def current_location(cls, coordinate: Coordinate) -> MapAnnotation:
        return cls(kind=AnnotationKind.CURRENT_LOCATION, coordinate=coordinate)

    @classmethod
    def search_result(cls, placemark: Placemark) -> MapAnnotation:
        return cls(
            kind=AnnotationKind.SEARCH_RESULT,
            coordinate=placemark.coordinate,
            title=placemark.title,
            subtitle=placemark.sub_locality,
        )

    @property
    def key(self) -> AnnotationKey:
        return AnnotationKey(self.coordinate.latitude, self.coordinate.longitude, self.title, self.subtitle)
