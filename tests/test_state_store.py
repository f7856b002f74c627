from __future__ import annotations

from datetime import UTC, datetime

from reliefmap.models.request import RequestRecord
from reliefmap.state.policy import is_displayable
from reliefmap.state.store import RequestStore


def _dt() -> datetime:
    return datetime(2026, 1, 1, tzinfo=UTC)


def _record(title: str, *, for_others: bool = False) -> RequestRecord:
    return RequestRecord(latitude=9.5, longitude=76.3, title=title, is_request_for_others=for_others)


def test_new_store_is_empty() -> None:
    store = RequestStore(clock=_dt)

    assert store.records == ()
    assert store.generation == 0
    assert store.refreshed_at is None
    assert len(store) == 0


def test_replace_swaps_whole_list_and_bumps_generation() -> None:
    store = RequestStore(clock=_dt)

    store.replace([_record("A"), _record("B")])
    snapshot = store.replace([_record("C")])

    assert [r.title for r in store.records] == ["C"]
    assert snapshot.generation == 2
    assert snapshot.refreshed_at == _dt()


def test_replace_with_empty_list_clears_store() -> None:
    store = RequestStore(clock=_dt)
    store.replace([_record("A")])

    store.replace([])

    assert store.records == ()
    assert store.generation == 2


def test_snapshot_is_not_affected_by_later_replace() -> None:
    store = RequestStore(clock=_dt)
    store.replace([_record("A")])
    before = store.snapshot()

    store.replace([_record("B")])

    assert [r.title for r in before.records] == ["A"]


def test_display_policy_hides_requests_for_others() -> None:
    assert is_displayable(_record("mine")) is True
    assert is_displayable(_record("theirs", for_others=True)) is False
