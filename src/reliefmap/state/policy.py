"""Display policy for relief requests."""

from __future__ import annotations

from collections.abc import Callable

from reliefmap.models.request import RequestRecord

DisplayPredicate = Callable[[RequestRecord], bool]


def is_displayable(record: RequestRecord) -> bool:
    """Requests filed on behalf of others are not pinned on the map."""
    return not record.is_request_for_others
