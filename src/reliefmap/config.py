"""Client configuration for reliefmap."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from reliefmap._constants import (
    DEFAULT_DIRECTIONS_URL,
    DEFAULT_RESOURCES_URL,
    DEFAULT_SCREEN_TITLE,
    DEFAULT_SPAN_DELTA,
)
from reliefmap.exceptions import ReliefMapConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_number(env_key: str, value: str, cast: type[int] | type[float]) -> int | float:
    try:
        return cast(value)
    except ValueError as exc:
        raise ReliefMapConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class MqttLocationProfile:
    """Broker settings for the MQTT (OwnTracks-style) location service.

    An empty ``host`` means the service is not configured, which the
    location tracker reports as "location services disabled".
    """

    host: str = ""
    port: int = 8883
    topic: str = "owntracks/+/+"
    username: str | None = None
    password: str | None = None
    tls: bool = True
    keepalive: int = 60
    client_id: str = "reliefmap"


@dataclasses.dataclass(frozen=True)
class ReliefMapConfig:
    """Library configuration.

    Parameters
    ----------
    resources_url : str
        URL of the JSON listing of relief resource requests.
    directions_url : str
        Base URL of an OSRM-compatible directions service.
    request_timeout : float
        Total timeout for a single HTTP request, in seconds.
    screen_title : str
        Title set on the map screen when it activates.
    span_delta : float
        Latitude/longitude delta used when centring on a single point.
    route_edge_padding : float
        Fraction of the route's extent added around it when fitting
        the viewport to a route (``0.1`` = 10% on each side).
    location : MqttLocationProfile
        Broker settings for :class:`~reliefmap.mqtt_location.MqttLocationService`.
    """

    resources_url: str = DEFAULT_RESOURCES_URL
    directions_url: str = DEFAULT_DIRECTIONS_URL
    request_timeout: float = 20.0
    screen_title: str = DEFAULT_SCREEN_TITLE
    span_delta: float = DEFAULT_SPAN_DELTA
    route_edge_padding: float = 0.1
    location: MqttLocationProfile = dataclasses.field(default_factory=MqttLocationProfile)

    def __post_init__(self) -> None:
        if self.request_timeout <= 0:
            raise ReliefMapConfigError("request_timeout must be positive")
        if self.span_delta <= 0:
            raise ReliefMapConfigError("span_delta must be positive")
        if self.route_edge_padding < 0:
            raise ReliefMapConfigError("route_edge_padding must not be negative")

    @classmethod
    def from_env(cls, **overrides: Any) -> ReliefMapConfig:
        """Create configuration from ``RELIEFMAP_*`` environment variables.

        Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        ReliefMapConfig
            Populated configuration.
        """
        env = os.environ

        location_kwargs: dict[str, Any] = {}
        _ENV_LOCATION_MAP = {
            "RELIEFMAP_MQTT_HOST": "host",
            "RELIEFMAP_MQTT_TOPIC": "topic",
            "RELIEFMAP_MQTT_USERNAME": "username",
            "RELIEFMAP_MQTT_PASSWORD": "password",
            "RELIEFMAP_MQTT_CLIENT_ID": "client_id",
        }
        for env_key, field_name in _ENV_LOCATION_MAP.items():
            val = env.get(env_key)
            if val is not None:
                location_kwargs[field_name] = val

        for env_key, field_name in (
            ("RELIEFMAP_MQTT_PORT", "port"),
            ("RELIEFMAP_MQTT_KEEPALIVE", "keepalive"),
        ):
            val = env.get(env_key)
            if val is not None:
                location_kwargs[field_name] = _env_number(env_key, val, int)

        tls_env = env.get("RELIEFMAP_MQTT_TLS")
        if tls_env is not None:
            location_kwargs["tls"] = _env_bool(tls_env, True)

        # Allow overriding location fields via a nested dict
        location_overrides = overrides.pop("location", None)
        if isinstance(location_overrides, dict):
            location_kwargs.update(location_overrides)
        elif isinstance(location_overrides, MqttLocationProfile):
            location_kwargs = dataclasses.asdict(location_overrides)

        config_kwargs: dict[str, Any] = {"location": MqttLocationProfile(**location_kwargs)}

        _ENV_CONFIG_MAP = {
            "RELIEFMAP_RESOURCES_URL": "resources_url",
            "RELIEFMAP_DIRECTIONS_URL": "directions_url",
            "RELIEFMAP_SCREEN_TITLE": "screen_title",
        }
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        for env_key, field_name in (
            ("RELIEFMAP_REQUEST_TIMEOUT", "request_timeout"),
            ("RELIEFMAP_SPAN_DELTA", "span_delta"),
            ("RELIEFMAP_ROUTE_EDGE_PADDING", "route_edge_padding"),
        ):
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_number(env_key, val, float)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
