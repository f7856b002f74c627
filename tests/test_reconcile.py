from __future__ import annotations

from reliefmap.models.annotation import AnnotationKind, MapAnnotation
from reliefmap.models.geo import Coordinate
from reliefmap.models.request import RequestRecord
from reliefmap.reconcile import AnnotationDiff, AnnotationReconciler, reconcile


def _record(title: str, lat: float = 10.0, lon: float = 76.0, *, for_others: bool = False) -> RequestRecord:
    return RequestRecord(latitude=lat, longitude=lon, title=title, subtitle="ekm", is_request_for_others=for_others)


A = _record("A", 10.01, 76.01)
B = _record("B", 10.02, 76.02, for_others=True)
C = _record("C", 10.03, 76.03)
D = _record("D", 10.04, 76.04)


def _titles(annotations: tuple[MapAnnotation, ...] | frozenset[MapAnnotation]) -> set[str | None]:
    return {a.title for a in annotations}


class TestDesiredAnnotations:
    def test_filters_requests_for_others(self) -> None:
        desired = AnnotationReconciler().desired_annotations([A, B, C])

        assert _titles(desired) == {"A", "C"}
        assert all(a.kind == AnnotationKind.REQUEST for a in desired)

    def test_value_duplicates_collapse(self) -> None:
        duplicate = _record("A", 10.01, 76.01)

        desired = AnnotationReconciler().desired_annotations([A, duplicate])

        assert len(desired) == 1

    def test_custom_predicate(self) -> None:
        reconciler = AnnotationReconciler(predicate=lambda r: r.title == "C")

        assert _titles(reconciler.desired_annotations([A, B, C])) == {"C"}


class TestReconcile:
    def test_empty_surface_adds_everything_desired(self) -> None:
        diff = reconcile(frozenset(), [A, B, C])

        assert _titles(diff.to_add) == {"A", "C"}
        assert diff.to_remove == ()

    def test_second_pass_is_idempotent(self) -> None:
        first = reconcile(frozenset(), [A, B, C])
        visible = first.apply_to(frozenset())

        second = reconcile(visible, [A, B, C])

        assert second.is_empty
        assert second == AnnotationDiff()

    def test_minimal_diff_keeps_unchanged_entries(self) -> None:
        visible = reconcile(frozenset(), [A, C]).apply_to(frozenset())

        diff = reconcile(visible, [A, D])

        assert _titles(diff.to_remove) == {"C"}
        assert _titles(diff.to_add) == {"D"}
        assert _titles(diff.apply_to(visible)) == {"A", "D"}

    def test_changed_metadata_replaces_annotation(self) -> None:
        visible = reconcile(frozenset(), [A]).apply_to(frozenset())
        renamed = RequestRecord(latitude=A.latitude, longitude=A.longitude, title="A", subtitle="alp")

        diff = reconcile(visible, [renamed])

        assert len(diff.to_remove) == 1
        assert diff.to_add[0].subtitle == "alp"

    def test_record_flipped_to_for_others_is_removed(self) -> None:
        visible = reconcile(frozenset(), [A, C]).apply_to(frozenset())
        flipped = _record("C", 10.03, 76.03, for_others=True)

        diff = reconcile(visible, [A, flipped])

        assert _titles(diff.to_remove) == {"C"}
        assert diff.to_add == ()

    def test_non_request_annotations_are_left_alone(self) -> None:
        marker = MapAnnotation.current_location(Coordinate(latitude=9.9, longitude=76.2))
        visible = reconcile(frozenset(), [A]).apply_to({marker})

        diff = reconcile(visible, [])

        assert marker not in diff.to_remove
        assert diff.apply_to(visible) == frozenset({marker})

    def test_output_order_is_deterministic(self) -> None:
        diff_one = reconcile(frozenset(), [D, C, A])
        diff_two = reconcile(frozenset(), [A, C, D])

        assert diff_one.to_add == diff_two.to_add
        assert [a.title for a in diff_one.to_add] == ["A", "C", "D"]

    def test_result_equals_desired_after_arbitrary_history(self) -> None:
        visible: frozenset[MapAnnotation] = frozenset()
        for batch in ([A, B], [C, D], [A, C, D], [B], [D, A]):
            visible = reconcile(visible, batch).apply_to(visible)
            assert visible == AnnotationReconciler().desired_annotations(batch)
