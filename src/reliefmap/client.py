"""High-level async client for the relief data and directions APIs."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import aiohttp

from reliefmap._api.resources import fetch_resource_requests
from reliefmap._transport import JsonTransport
from reliefmap.config import ReliefMapConfig
from reliefmap.directions import OsrmDirectionsProvider
from reliefmap.exceptions import ReliefMapError
from reliefmap.models.request import RequestRecord

_logger = logging.getLogger(__name__)


class ResourceFetchClient(Protocol):
    """Anything that can fetch the current list of relief requests."""

    async def fetch_resource_requests(self) -> list[RequestRecord]: ...


class ReliefApiClient:
    """Async client for the relief request listing.

    Usage::

        async with ReliefApiClient(config) as client:
            requests = await client.fetch_resource_requests()
    """

    def __init__(
        self,
        config: ReliefMapConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config or ReliefMapConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport: JsonTransport | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> ReliefApiClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = JsonTransport(self._http_session, timeout=self._config.request_timeout)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    def _require_transport(self) -> JsonTransport:
        if self._transport is None:
            raise ReliefMapError("Client not initialized. Use 'async with ReliefApiClient(...) as client:'")
        return self._transport

    @property
    def config(self) -> ReliefMapConfig:
        return self._config

    async def fetch_resource_requests(self) -> list[RequestRecord]:
        """Fetch and parse the full resource-needs listing.

        Raises
        ------
        FetchNetworkError, FetchServerError, FetchDecodeError
            The listing could not be retrieved or understood.
        """
        transport = self._require_transport()
        records = await fetch_resource_requests(transport, self._config.resources_url)
        _logger.debug("Fetched %d resource requests", len(records))
        return records

    def directions_provider(self) -> OsrmDirectionsProvider:
        """OSRM provider sharing this client's HTTP session."""
        return OsrmDirectionsProvider(self._require_transport(), self._config.directions_url)
