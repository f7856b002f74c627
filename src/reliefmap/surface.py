"""Interfaces to the map widget and screen chrome.

The map widget, alert presenter, progress overlay and navigation stack
are supplied by the host application. :class:`HeadlessMapSurface` is an
in-memory map surface for scripts and tests.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Protocol

from reliefmap.models.annotation import MapAnnotation
from reliefmap.models.geo import MapRegion
from reliefmap.models.route import RoutePlan

_logger = logging.getLogger(__name__)


class MapSurface(Protocol):
    """Structural interface of a map widget."""

    @property
    def annotations(self) -> frozenset[MapAnnotation]: ...

    @property
    def overlays(self) -> tuple[RoutePlan, ...]: ...

    def add_annotations(self, annotations: Iterable[MapAnnotation]) -> None: ...

    def remove_annotations(self, annotations: Iterable[MapAnnotation]) -> None: ...

    def set_region(self, region: MapRegion, animated: bool) -> None: ...

    def add_overlay(self, route: RoutePlan) -> None: ...

    def remove_overlay(self, route: RoutePlan) -> None: ...


class Notifier(Protocol):
    """Shows a non-blocking alert."""

    def show_error(self, title: str, message: str) -> None: ...


class ProgressIndicator(Protocol):
    """Blocking-looking overlay shown while a fetch runs (input is not blocked)."""

    def show(self) -> None: ...

    def hide(self) -> None: ...


class Navigator(Protocol):
    """Pushes other screens; only the request list is reachable from the map."""

    def push_request_list(self) -> None: ...


class HeadlessMapSurface:
    """Map surface that only keeps state.

    Records the last region and counts mutating calls so callers can
    assert on the operations issued.
    """

    def __init__(self) -> None:
        self._annotations: set[MapAnnotation] = set()
        self._overlays: list[RoutePlan] = []
        self.region: MapRegion | None = None
        self.title: str | None = None
        self.operations: list[tuple[str, int]] = []

    @property
    def annotations(self) -> frozenset[MapAnnotation]:
        return frozenset(self._annotations)

    @property
    def overlays(self) -> tuple[RoutePlan, ...]:
        return tuple(self._overlays)

    def add_annotations(self, annotations: Iterable[MapAnnotation]) -> None:
        items = list(annotations)
        self._annotations.update(items)
        self.operations.append(("add_annotations", len(items)))

    def remove_annotations(self, annotations: Iterable[MapAnnotation]) -> None:
        items = list(annotations)
        self._annotations.difference_update(items)
        self.operations.append(("remove_annotations", len(items)))

    def set_region(self, region: MapRegion, animated: bool) -> None:
        _logger.debug("Region set center=%s span=%s animated=%s", region.center, region.span, animated)
        self.region = region
        self.operations.append(("set_region", 1))

    def add_overlay(self, route: RoutePlan) -> None:
        self._overlays.append(route)
        self.operations.append(("add_overlay", 1))

    def remove_overlay(self, route: RoutePlan) -> None:
        if route in self._overlays:
            self._overlays.remove(route)
        self.operations.append(("remove_overlay", 1))
