"""reliefmap - Async map-screen core for disaster-relief resource requests."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("reliefmap")
except PackageNotFoundError:
    __version__ = "0+local"
from reliefmap.client import ReliefApiClient, ResourceFetchClient
from reliefmap.config import MqttLocationProfile, ReliefMapConfig
from reliefmap.controller import ScreenController, ScreenState
from reliefmap.directions import OsrmDirectionsProvider
from reliefmap.exceptions import (
    FetchDecodeError,
    FetchError,
    FetchNetworkError,
    FetchServerError,
    LocationError,
    LocationPermissionDeniedError,
    LocationServicesDisabledError,
    NoRouteFoundError,
    ReliefMapConfigError,
    ReliefMapError,
    RouteError,
    RouteProviderError,
    UiThreadError,
)
from reliefmap.location import AuthorizationStatus, LocationTracker
from reliefmap.models import (
    AnnotationKind,
    Coordinate,
    CoordinateSpan,
    MapAnnotation,
    MapRegion,
    Placemark,
    RequestRecord,
    RouteCandidate,
    RoutePlan,
    TransportMode,
)
from reliefmap.reconcile import AnnotationDiff, AnnotationReconciler, reconcile
from reliefmap.routing import RouteOverlayPlanner
from reliefmap.state.store import RequestStore
from reliefmap.surface import HeadlessMapSurface
from reliefmap.ui import UiContext

__all__ = [
    "__version__",
    "AnnotationDiff",
    "AnnotationKind",
    "AnnotationReconciler",
    "AuthorizationStatus",
    "Coordinate",
    "CoordinateSpan",
    "FetchDecodeError",
    "FetchError",
    "FetchNetworkError",
    "FetchServerError",
    "HeadlessMapSurface",
    "LocationError",
    "LocationPermissionDeniedError",
    "LocationServicesDisabledError",
    "LocationTracker",
    "MapAnnotation",
    "MapRegion",
    "MqttLocationProfile",
    "NoRouteFoundError",
    "OsrmDirectionsProvider",
    "Placemark",
    "ReliefApiClient",
    "ReliefMapConfig",
    "ReliefMapConfigError",
    "ReliefMapError",
    "RequestRecord",
    "RequestStore",
    "ResourceFetchClient",
    "RouteCandidate",
    "RouteError",
    "RouteOverlayPlanner",
    "RoutePlan",
    "RouteProviderError",
    "ScreenController",
    "ScreenState",
    "TransportMode",
    "UiContext",
    "UiThreadError",
    "reconcile",
]
