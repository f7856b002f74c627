"""In-memory store for the latest relief request listing.

The list is replaced atomically on every successful refresh; partial
updates are not supported.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict

from reliefmap.models.request import RequestRecord


def _utcnow() -> datetime:
    return datetime.now(UTC)


class RequestSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    records: tuple[RequestRecord, ...] = ()
    generation: int = 0
    refreshed_at: datetime | None = None


class RequestStore:
    """Holds the most recent request list.

    The store has a single writer (the screen controller, on the UI
    context), so it does no locking of its own.
    """

    def __init__(self, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._snapshot = RequestSnapshot()

    @property
    def records(self) -> tuple[RequestRecord, ...]:
        return self._snapshot.records

    @property
    def generation(self) -> int:
        """Number of successful replacements so far."""
        return self._snapshot.generation

    @property
    def refreshed_at(self) -> datetime | None:
        return self._snapshot.refreshed_at

    def snapshot(self) -> RequestSnapshot:
        return self._snapshot

    def replace(self, records: Iterable[RequestRecord]) -> RequestSnapshot:
        """Swap in a freshly fetched list."""
        self._snapshot = RequestSnapshot(
            records=tuple(records),
            generation=self._snapshot.generation + 1,
            refreshed_at=self._clock(),
        )
        return self._snapshot

    def __len__(self) -> int:
        return len(self._snapshot.records)
