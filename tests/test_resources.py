from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from reliefmap._api.resources import parse_resource_requests
from reliefmap.client import ReliefApiClient
from reliefmap.config import ReliefMapConfig
from reliefmap.exceptions import FetchDecodeError, FetchServerError, ReliefMapError

LISTING = [
    {"location": "Aluva", "district": "ekm", "latlng": "10.1076,76.3516", "is_request_for_others": False},
    {"location": "Ranni", "district": "pta", "latlng": "9.3846,76.7870", "is_request_for_others": True},
    {"location": "No GPS", "district": "idk", "latlng": ""},
    "not-a-dict",
]


def test_parse_bare_list_skips_unusable_entries() -> None:
    records = parse_resource_requests(LISTING)

    assert [r.title for r in records] == ["Aluva", "Ranni"]


@pytest.mark.parametrize("key", ["results", "data", "requests"])
def test_parse_envelope(key: str) -> None:
    records = parse_resource_requests({"count": 2, key: LISTING[:2]})

    assert len(records) == 2


def test_parse_unexpected_shape_raises_decode_error() -> None:
    with pytest.raises(FetchDecodeError):
        parse_resource_requests({"detail": "not found"}, "https://example/data")


@pytest.mark.asyncio
async def test_client_fetches_configured_url(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[str] = []

    async def fake_get_json(_self: Any, url: str, params: Mapping[str, str] | None = None, **_kw: Any) -> Any:
        seen.append(url)
        return {"results": LISTING}

    monkeypatch.setattr("reliefmap._transport.JsonTransport.get_json", fake_get_json)
    config = ReliefMapConfig(resources_url="https://relief.example/data/?format=json")

    async with ReliefApiClient(config) as client:
        records = await client.fetch_resource_requests()

    assert seen == ["https://relief.example/data/?format=json"]
    assert {r.subtitle for r in records} == {"ekm", "pta"}


@pytest.mark.asyncio
async def test_client_propagates_server_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    async def fake_get_json(_self: Any, url: str, params: Mapping[str, str] | None = None, **_kw: Any) -> Any:
        raise FetchServerError("HTTP 502", status_code=502, url=url)

    monkeypatch.setattr("reliefmap._transport.JsonTransport.get_json", fake_get_json)

    async with ReliefApiClient(ReliefMapConfig()) as client:
        with pytest.raises(FetchServerError) as excinfo:
            await client.fetch_resource_requests()

    assert excinfo.value.status_code == 502


@pytest.mark.asyncio
async def test_client_requires_context_manager() -> None:
    client = ReliefApiClient()

    with pytest.raises(ReliefMapError, match="not initialized"):
        await client.fetch_resource_requests()
