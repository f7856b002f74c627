"""Internal constants shared across the library."""

USER_AGENT = "reliefmap/1 (+aiohttp)"

DEFAULT_RESOURCES_URL = "https://keralarescue.in/data/?format=json"
DEFAULT_DIRECTIONS_URL = "https://router.project-osrm.org"
DEFAULT_SCREEN_TITLE = "Help Kerala"

#: Latitude/longitude delta used when centring the map on a single point.
DEFAULT_SPAN_DELTA = 0.02

#: Desired accuracy handed to location services, in metres.
ACCURACY_NEAREST_TEN_METERS = 10.0

# ------------------------------------------------------------------
# Map rendering
# ------------------------------------------------------------------

ANNOTATION_REUSE_IDENTIFIER = "MapAnnotationIdentifier"
REQUEST_ANNOTATION_IMAGE = "myLocation"
ROUTE_STROKE_COLOR = "blue"
ROUTE_LINE_WIDTH = 4.0

# OSRM profile names by transport mode.
OSRM_PROFILES: dict[str, str] = {
    "automobile": "driving",
    "walking": "foot",
    "cycling": "bike",
}

# MQTT v5 / v3.1.1 CONNACK reason codes that mean "credentials refused".
MQTT_NOT_AUTHORIZED_CODES: frozenset[int] = frozenset({4, 5, 134, 135})
