"""Annotation reconciliation.

Computes the minimal set of add/remove operations that moves the
request annotations on a map surface to the annotations the current
request list calls for. Unchanged annotations are never removed and
re-added, so a refresh with identical data issues no map operations.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from reliefmap.models.annotation import AnnotationKind, MapAnnotation
from reliefmap.models.request import RequestRecord
from reliefmap.state.policy import DisplayPredicate, is_displayable

_logger = logging.getLogger(__name__)


def _ordered(annotations: Iterable[MapAnnotation]) -> tuple[MapAnnotation, ...]:
    # Keys may hold None for title/subtitle, so sort on a None-safe tuple.
    return tuple(
        sorted(
            annotations,
            key=lambda a: (a.coordinate.latitude, a.coordinate.longitude, a.title or "", a.subtitle or ""),
        )
    )


@dataclass(frozen=True, slots=True)
class AnnotationDiff:
    """Operations to apply to the map surface: ``to_remove`` first, then ``to_add``."""

    to_add: tuple[MapAnnotation, ...] = ()
    to_remove: tuple[MapAnnotation, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.to_add and not self.to_remove

    def apply_to(self, current: Iterable[MapAnnotation]) -> frozenset[MapAnnotation]:
        """Return ``current`` with this diff applied."""
        return (frozenset(current) - frozenset(self.to_remove)) | frozenset(self.to_add)


class AnnotationReconciler:
    """Stateless transform from (visible annotations, request list) to a diff.

    Only :attr:`AnnotationKind.REQUEST` annotations take part; the location
    marker and search pins on the same surface are left alone.
    """

    def __init__(self, predicate: DisplayPredicate = is_displayable) -> None:
        self._predicate = predicate

    def desired_annotations(self, records: Iterable[RequestRecord]) -> frozenset[MapAnnotation]:
        """Annotations for every record the display predicate accepts."""
        return frozenset(MapAnnotation.for_request(r) for r in records if self._predicate(r))

    def reconcile(
        self,
        current: Iterable[MapAnnotation],
        desired_records: Iterable[RequestRecord],
    ) -> AnnotationDiff:
        current_requests = frozenset(a for a in current if a.kind == AnnotationKind.REQUEST)
        desired = self.desired_annotations(desired_records)
        diff = AnnotationDiff(
            to_add=_ordered(desired - current_requests),
            to_remove=_ordered(current_requests - desired),
        )
        _logger.debug(
            "Reconciled annotations visible=%d desired=%d add=%d remove=%d",
            len(current_requests),
            len(desired),
            len(diff.to_add),
            len(diff.to_remove),
        )
        return diff


def reconcile(
    current: Iterable[MapAnnotation],
    desired_records: Iterable[RequestRecord],
    predicate: DisplayPredicate = is_displayable,
) -> AnnotationDiff:
    """Functional shortcut for :meth:`AnnotationReconciler.reconcile`."""
    return AnnotationReconciler(predicate).reconcile(current, desired_records)
