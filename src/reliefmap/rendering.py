"""Rendering descriptors for annotations and route overlays.

The host map widget turns these into native views. Request pins share
one reusable view per identifier; every other kind gets the widget's
default view.
"""

from __future__ import annotations

from dataclasses import dataclass

from reliefmap._constants import (
    ANNOTATION_REUSE_IDENTIFIER,
    REQUEST_ANNOTATION_IMAGE,
    ROUTE_LINE_WIDTH,
    ROUTE_STROKE_COLOR,
)
from reliefmap.models.annotation import AnnotationKind, MapAnnotation


@dataclass(slots=True)
class AnnotationViewSpec:
    """How to draw one annotation. Mutable so pooled views can be re-bound."""

    reuse_identifier: str
    annotation: MapAnnotation
    image: str = REQUEST_ANNOTATION_IMAGE
    can_show_callout: bool = True
    callout_accessory: str = "info"


@dataclass(frozen=True, slots=True)
class PolylineStyle:
    stroke_color: str = ROUTE_STROKE_COLOR
    line_width: float = ROUTE_LINE_WIDTH
    level: str = "above_roads"


class AnnotationViewPool:
    """Dequeue-or-create cache of annotation views keyed by reuse identifier."""

    def __init__(self) -> None:
        self._free: dict[str, list[AnnotationViewSpec]] = {}
        self.created = 0

    def dequeue(self, reuse_identifier: str) -> AnnotationViewSpec | None:
        views = self._free.get(reuse_identifier)
        if not views:
            return None
        return views.pop()

    def enqueue(self, view: AnnotationViewSpec) -> None:
        """Return a view that scrolled off screen to the pool."""
        self._free.setdefault(view.reuse_identifier, []).append(view)

    def view_for(self, annotation: MapAnnotation) -> AnnotationViewSpec | None:
        if annotation.kind != AnnotationKind.REQUEST:
            return None
        view = self.dequeue(ANNOTATION_REUSE_IDENTIFIER)
        if view is not None:
            view.annotation = annotation
            return view
        self.created += 1
        return AnnotationViewSpec(reuse_identifier=ANNOTATION_REUSE_IDENTIFIER, annotation=annotation)


ROUTE_STYLE = PolylineStyle()
