"""Location service fed by OwnTracks-style MQTT publishes.

A phone running OwnTracks (or anything speaking the same JSON) publishes
``{"_type": "location", "lat": .., "lon": ..}`` to a broker. This service
subscribes to that topic with paho-mqtt; paho delivers messages on its own
network thread, and the delegate is called from there.
"""

from __future__ import annotations

import json
import logging
from typing import Any, cast

import paho.mqtt.client as mqtt

from reliefmap._constants import MQTT_NOT_AUTHORIZED_CODES
from reliefmap.config import MqttLocationProfile
from reliefmap.exceptions import LocationError, LocationPermissionDeniedError
from reliefmap.location import AuthorizationStatus, LocationDelegate
from reliefmap.models.geo import Coordinate


def parse_location_payload(payload: bytes | str) -> Coordinate | None:
    """Extract a coordinate from an OwnTracks ``location`` message.

    Returns ``None`` for other message types, malformed JSON, or
    out-of-range coordinates.
    """
    if isinstance(payload, bytes):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError:
            return None
    try:
        parsed = json.loads(payload)
    except json.JSONDecodeError:
        return None
    if not isinstance(parsed, dict) or parsed.get("_type") != "location":
        return None
    lat = parsed.get("lat")
    lon = parsed.get("lon")
    if not isinstance(lat, (int, float)) or not isinstance(lon, (int, float)):
        return None
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        return None
    return Coordinate(latitude=float(lat), longitude=float(lon))


class MqttLocationService:
    """Threaded paho-mqtt location source implementing ``LocationService``."""

    def __init__(
        self,
        profile: MqttLocationProfile,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._profile = profile
        self._logger = logger or logging.getLogger(__name__)
        self._client: mqtt.Client | None = None
        self._running = False
        self._status = AuthorizationStatus.NOT_DETERMINED

    @property
    def is_running(self) -> bool:
        return self._running

    def services_enabled(self) -> bool:
        return bool(self._profile.host)

    def request_always_authorization(self) -> None:
        # Broker credentials are the only grant there is; the broker decides on connect.
        if self._status == AuthorizationStatus.NOT_DETERMINED:
            self._status = AuthorizationStatus.AUTHORIZED_ALWAYS

    def request_when_in_use_authorization(self) -> None:
        if self._status == AuthorizationStatus.NOT_DETERMINED:
            self._status = AuthorizationStatus.AUTHORIZED_WHEN_IN_USE

    def authorization_status(self) -> AuthorizationStatus:
        return self._status

    def _build_client(self) -> mqtt.Client:
        client = mqtt.Client(
            callback_api_version=cast(Any, mqtt).CallbackAPIVersion.VERSION2,
            client_id=self._profile.client_id,
            protocol=mqtt.MQTTv5,
        )
        client.enable_logger(self._logger)
        if self._profile.username:
            client.username_pw_set(self._profile.username, self._profile.password)
        if self._profile.tls:
            client.tls_set()
        return client

    def start_updating(self, delegate: LocationDelegate, desired_accuracy: float) -> None:
        """Connect and subscribe. ``desired_accuracy`` is up to the publishing device."""
        self.stop_updating()
        profile = self._profile
        self._logger.debug(
            "MQTT location start host=%s port=%s topic=%s accuracy=%.1fm",
            profile.host,
            profile.port,
            profile.topic,
            desired_accuracy,
        )
        client = self._build_client()

        def on_connect(
            c: mqtt.Client,
            _userdata: Any,
            _flags: Any,
            reason_code: Any,
            _properties: Any,
        ) -> None:
            code = int(getattr(reason_code, "value", reason_code))
            if code in MQTT_NOT_AUTHORIZED_CODES:
                self._status = AuthorizationStatus.DENIED
                self._logger.warning("MQTT location broker refused credentials: %s", reason_code)
                delegate.location_failed(LocationPermissionDeniedError(f"Broker refused access: {reason_code}"))
                return
            if code != 0:
                self._logger.warning("MQTT location connect failed: %s", reason_code)
                delegate.location_failed(LocationError(f"Location broker connect failed: {reason_code}"))
                return
            self._logger.debug("MQTT location connected, subscribing topic=%s", profile.topic)
            c.subscribe(profile.topic, qos=0)

        def on_message(_c: mqtt.Client, _userdata: Any, msg: mqtt.MQTTMessage) -> None:
            try:
                coordinate = parse_location_payload(msg.payload)
                if coordinate is None:
                    self._logger.debug("Ignoring non-location MQTT payload topic=%s", msg.topic)
                    return
                delegate.location_updated(coordinate)
            except Exception:
                self._logger.debug("MQTT location payload handling failed", exc_info=True)

        client.on_connect = on_connect
        client.on_message = on_message

        try:
            client.connect(profile.host, profile.port, keepalive=profile.keepalive)
        except OSError as exc:
            raise LocationError(f"Cannot reach location broker {profile.host}:{profile.port}: {exc}") from exc
        client.loop_start()

        self._client = client
        self._running = True

    def stop_updating(self) -> None:
        """Stop and disconnect the current client if running."""
        client = self._client
        self._client = None
        was_running = self._running
        self._running = False

        if client is None:
            return
        try:
            if was_running:
                client.disconnect()
        finally:
            client.loop_stop()
            self._logger.debug("MQTT location network loop stopped")
