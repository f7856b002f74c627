"""Map screen controller.

Composes the request store, reconciler, location tracker and route
planner around a host-supplied map surface. Everything that touches the
surface or the store goes through :class:`~reliefmap.ui.UiContext`.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Iterable
from enum import StrEnum

from reliefmap.client import ResourceFetchClient
from reliefmap.config import ReliefMapConfig
from reliefmap.exceptions import FetchError, LocationError, ReliefMapError, RouteError
from reliefmap.location import LocationTracker
from reliefmap.models.annotation import AnnotationKind, MapAnnotation, Placemark
from reliefmap.models.geo import Coordinate, MapRegion
from reliefmap.models.request import RequestRecord
from reliefmap.models.route import RoutePlan
from reliefmap.reconcile import AnnotationDiff, AnnotationReconciler
from reliefmap.rendering import ROUTE_STYLE, AnnotationViewPool, AnnotationViewSpec, PolylineStyle
from reliefmap.routing import RouteOverlayPlanner
from reliefmap.state.store import RequestStore
from reliefmap.surface import MapSurface, Navigator, Notifier, ProgressIndicator
from reliefmap.ui import UiContext

_logger = logging.getLogger(__name__)

_ERROR_TITLE = "Error"


class ScreenState(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"


class ScreenController:
    """Drives one map screen.

    Parameters
    ----------
    surface : MapSurface
        The map widget.
    fetch_client : ResourceFetchClient
        Source of relief requests.
    notifier : Notifier
        Non-blocking alert presenter.
    progress : ProgressIndicator
        Overlay shown while a fetch runs.
    location_tracker : LocationTracker or None
        One-shot location source; ``None`` skips location entirely.
    route_planner : RouteOverlayPlanner or None
        Needed only for :meth:`show_directions`.
    navigator : Navigator or None
        Needed only for :meth:`show_request_list`.
    config : ReliefMapConfig or None
        Title and span settings.
    ui : UiContext or None
        UI context; defaults to the loop running :meth:`activate`.
    """

    def __init__(
        self,
        *,
        surface: MapSurface,
        fetch_client: ResourceFetchClient,
        notifier: Notifier,
        progress: ProgressIndicator,
        location_tracker: LocationTracker | None = None,
        route_planner: RouteOverlayPlanner | None = None,
        navigator: Navigator | None = None,
        config: ReliefMapConfig | None = None,
        reconciler: AnnotationReconciler | None = None,
        store: RequestStore | None = None,
        ui: UiContext | None = None,
    ) -> None:
        self._surface = surface
        self._fetch_client = fetch_client
        self._notifier = notifier
        self._progress = progress
        self._location_tracker = location_tracker
        self._route_planner = route_planner
        self._navigator = navigator
        self._config = config or ReliefMapConfig()
        self._reconciler = reconciler or AnnotationReconciler()
        self._store = store or RequestStore()
        self._ui = ui
        self._views = AnnotationViewPool()

        self._state = ScreenState.IDLE
        self._title: str | None = None
        self._location_marker: MapAnnotation | None = None
        self._route_overlay: RoutePlan | None = None
        self._location_task: asyncio.Task[None] | None = None
        self._route_task: asyncio.Task[RoutePlan] | None = None

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def state(self) -> ScreenState:
        return self._state

    @property
    def title(self) -> str | None:
        return self._title

    @property
    def store(self) -> RequestStore:
        return self._store

    @property
    def location_marker(self) -> MapAnnotation | None:
        return self._location_marker

    @property
    def route_overlay(self) -> RoutePlan | None:
        return self._route_overlay

    @property
    def visible_requests(self) -> frozenset[MapAnnotation]:
        return frozenset(a for a in self._surface.annotations if a.kind == AnnotationKind.REQUEST)

    def _require_ui(self) -> UiContext:
        if self._ui is None:
            self._ui = UiContext.current()
        return self._ui

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def activate(self) -> None:
        """Screen appeared: start location tracking and the first fetch.

        Returns once the fetch has been applied; the location fix lands
        whenever the service produces one.
        """
        ui = self._require_ui()
        self._title = self._config.screen_title
        if self._location_tracker is not None and self._location_task is None:
            self._location_task = ui.loop.create_task(self._track_location(self._location_tracker))
        await self._load()

    async def refresh(self) -> None:
        """Manual refresh: re-fetch requests. Location is not re-requested."""
        if self._state == ScreenState.LOADING:
            _logger.debug("Refresh ignored; a fetch is already in flight")
            return
        await self._load()

    async def wait_idle(self) -> None:
        """Wait for pending location and route work to finish."""
        pending = [t for t in (self._location_task, self._route_task) if t is not None and not t.done()]
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    async def close(self) -> None:
        """Cancel pending work. Location updates stop with the tracker task."""
        tasks = [t for t in (self._location_task, self._route_task) if t is not None and not t.done()]
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._location_task = None
        self._route_task = None

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def _load(self) -> None:
        ui = self._require_ui()
        ui.call(self._begin_loading)
        records: list[RequestRecord] | None = None
        try:
            records = await self._fetch_client.fetch_resource_requests()
        except FetchError as exc:
            _logger.warning("Resource fetch failed, keeping %d cached requests: %s", len(self._store), exc)
            ui.call(self._notify_error, exc)
        except BaseException:
            ui.call(self._abort_loading)
            raise
        finally:
            ui.call(self._progress.hide)
        ui.call(self._finish_loading, records)

    def _abort_loading(self) -> None:
        self._state = ScreenState.IDLE if len(self._store) == 0 else ScreenState.READY

    def _begin_loading(self) -> None:
        self._state = ScreenState.LOADING
        self._progress.show()

    def _finish_loading(self, records: list[RequestRecord] | None) -> None:
        self._require_ui().ensure_ui_thread()
        if records is not None:
            snapshot = self._store.replace(records)
            _logger.debug("Request store replaced generation=%d count=%d", snapshot.generation, len(records))
        self._apply_diff(self._reconciler.reconcile(self._surface.annotations, self._store.records))
        self._state = ScreenState.READY

    def _apply_diff(self, diff: AnnotationDiff) -> None:
        if diff.to_remove:
            self._surface.remove_annotations(diff.to_remove)
        if diff.to_add:
            self._surface.add_annotations(diff.to_add)

    # ------------------------------------------------------------------
    # Location
    # ------------------------------------------------------------------

    async def _track_location(self, tracker: LocationTracker) -> None:
        ui = self._require_ui()
        try:
            async with contextlib.aclosing(tracker.activate()) as fixes:
                async for coordinate in fixes:
                    ui.call(self._on_location_fix, coordinate)
        except LocationError as exc:
            _logger.warning("Location unavailable: %s", exc)
            ui.call(self._notify_error, exc)

    def handle_location_fix(self, coordinate: Coordinate) -> None:
        """Feed a fix from any thread. Only the first fix of a session counts."""
        self._require_ui().call(self._on_location_fix, coordinate)

    def _on_location_fix(self, coordinate: Coordinate) -> None:
        self._require_ui().ensure_ui_thread()
        if self._location_marker is not None:
            _logger.debug("Ignoring later location fix %s", coordinate)
            return
        marker = MapAnnotation.current_location(coordinate)
        self._location_marker = marker
        self._surface.add_annotations([marker])
        self._surface.set_region(
            MapRegion.around(coordinate.latitude, coordinate.longitude, self._config.span_delta),
            True,
        )

    # ------------------------------------------------------------------
    # Directions
    # ------------------------------------------------------------------

    async def show_directions(self, source: Coordinate, destination: Coordinate) -> RoutePlan | None:
        """Plan a driving route and draw it, replacing any previous route.

        A newer call cancels an older in-flight request, so a slow earlier
        lookup can never overwrite a later route. Returns ``None`` when the
        lookup failed or was superseded.
        """
        if self._route_planner is None:
            raise ReliefMapError("No route planner configured")
        ui = self._require_ui()

        previous = self._route_task
        if previous is not None and not previous.done():
            _logger.debug("Cancelling superseded route request")
            previous.cancel()

        task = ui.loop.create_task(self._route_planner.plan_route(source, destination))
        self._route_task = task
        try:
            plan = await task
        except asyncio.CancelledError:
            # Superseded or closed: only the lookup was cancelled, not this caller.
            current = asyncio.current_task()
            if task.cancelled() and (current is None or not current.cancelling()):
                return None
            raise
        except RouteError as exc:
            _logger.warning("Directions failed: %s", exc)
            ui.call(self._notify_error, exc)
            return None

        if self._route_task is not task:
            return None
        ui.call(self._apply_route, plan)
        return plan

    def _apply_route(self, plan: RoutePlan) -> None:
        self._require_ui().ensure_ui_thread()
        previous = self._route_overlay
        if previous is not None:
            self._surface.remove_overlay(previous)
        self._surface.add_overlay(plan)
        self._route_overlay = plan
        self._surface.set_region(plan.region, True)

    # ------------------------------------------------------------------
    # Viewport, search and taps
    # ------------------------------------------------------------------

    def set_region(self, latitude: float, longitude: float, delta: float | None = None) -> MapRegion:
        """Centre the map with ``delta`` degrees of span on both axes."""
        region = MapRegion.around(latitude, longitude, self._config.span_delta if delta is None else delta)
        self._require_ui().call(self._surface.set_region, region, True)
        return region

    def did_select_address(self, placemark: Placemark) -> None:
        """Pin an address chosen in the search type-ahead and centre on it."""
        self._require_ui().call(self._add_search_pin, placemark)

    def _add_search_pin(self, placemark: Placemark) -> None:
        self._surface.add_annotations([MapAnnotation.search_result(placemark)])
        self.set_region(placemark.coordinate.latitude, placemark.coordinate.longitude)

    def on_annotation_tapped(self, annotation: MapAnnotation) -> None:
        # Hook for routing to a tapped request; nothing happens yet.
        _logger.debug("Annotation tapped kind=%s", annotation.kind)

    def show_request_list(self) -> None:
        if self._navigator is None:
            _logger.warning("No navigator configured; cannot show request list")
            return
        self._navigator.push_request_list()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def view_for_annotation(self, annotation: MapAnnotation) -> AnnotationViewSpec | None:
        return self._views.view_for(annotation)

    def recycle_views(self, views: Iterable[AnnotationViewSpec]) -> None:
        for view in views:
            self._views.enqueue(view)

    def renderer_for_overlay(self, _route: RoutePlan) -> PolylineStyle:
        return ROUTE_STYLE

    def _notify_error(self, exc: Exception) -> None:
        self._notifier.show_error(_ERROR_TITLE, str(exc))
