"""HTTP transport for JSON endpoints."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from reliefmap._constants import USER_AGENT
from reliefmap.exceptions import FetchDecodeError, FetchNetworkError, FetchServerError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the endpoint modules.

    Tests pass doubles implementing this; production uses `JsonTransport`.
    """

    async def get_json(
        self,
        url: str,
        params: Mapping[str, str] | None = None,
        *,
        json_errors: bool = False,
    ) -> Any:
        ...


class JsonTransport:
    """GET-and-decode JSON over a shared ``aiohttp.ClientSession``."""

    def __init__(self, http_session: aiohttp.ClientSession, *, timeout: float = 20.0) -> None:
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def get_json(
        self,
        url: str,
        params: Mapping[str, str] | None = None,
        *,
        json_errors: bool = False,
    ) -> Any:
        """GET ``url`` and decode the JSON body.

        With ``json_errors`` a non-200 response whose body is JSON is
        returned like a success; APIs such as OSRM report "no route" that way.
        """
        headers = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }

        _logger.debug("GET %s params=%s", url, dict(params or {}))

        try:
            async with self._http.get(url, params=params, headers=headers, timeout=self._timeout) as resp:
                status = resp.status
                text = await resp.text()
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise FetchNetworkError(f"Request to {url} failed: {exc!r}", url=url) from exc

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            if status != 200:
                raise FetchServerError(
                    f"HTTP {status} from {url}: {text[:200]}",
                    status_code=status,
                    url=url,
                ) from exc
            raise FetchDecodeError(f"Invalid JSON from {url}: {text[:200]}", url=url) from exc

        if status != 200 and not json_errors:
            raise FetchServerError(
                f"HTTP {status} from {url}: {text[:200]}",
                status_code=status,
                url=url,
            )
        return body
