"""Resource-needs listing endpoint.

The public listing is either a bare JSON array of request objects or a
paginated envelope with the array under ``results`` (or ``data``).
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from reliefmap._redact import redact_request_item
from reliefmap._transport import Transport
from reliefmap.exceptions import FetchDecodeError
from reliefmap.models.request import RequestRecord

_logger = logging.getLogger(__name__)

_ENVELOPE_KEYS = ("results", "data", "requests")


def _unwrap_listing(payload: Any, url: str) -> list[Any]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in _ENVELOPE_KEYS:
            items = payload.get(key)
            if isinstance(items, list):
                return items
    raise FetchDecodeError(f"Unexpected resource listing shape from {url}: {type(payload).__name__}", url=url)


def parse_resource_requests(payload: Any, url: str = "") -> list[RequestRecord]:
    """Parse a listing into records, skipping entries without a usable coordinate."""
    records: list[RequestRecord] = []
    skipped = 0
    for item in _unwrap_listing(payload, url):
        if not isinstance(item, dict):
            skipped += 1
            continue
        try:
            records.append(RequestRecord.model_validate(item))
        except ValidationError:
            skipped += 1
            _logger.debug("Skipping unparseable request %s", redact_request_item(item))
    if skipped:
        _logger.debug("Skipped %d of %d listing entries", skipped, skipped + len(records))
    return records


async def fetch_resource_requests(transport: Transport, url: str) -> list[RequestRecord]:
    payload = await transport.get_json(url)
    return parse_resource_requests(payload, url)
