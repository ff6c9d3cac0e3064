import logging
import math

import pytest
from shapely.errors import GEOSException
from shapely.geometry import Polygon as ShapelyPolygon

from clipping import (
    OPERATION_ORDER,
    ClippingError,
    Operation,
    construct,
    fold_operation,
    run_operations,
)
from clipping import ops, pipeline
from shapes import Shape, circle_contour, contour_bounds, rectangle_contour


def area(polygon):
    # even-odd: nested contours (holes) cancel the area they cover
    geom = ShapelyPolygon()
    for contour in polygon:
        geom = geom.symmetric_difference(ShapelyPolygon(contour))
    return geom.area


def square(x, y, size=2.0):
    return rectangle_contour(x, x + size, y, y + size)


class TestConstruct:

    def test_union_of_disjoint_shapes_keeps_both(self):
        a, b = (square(0, 0),), (square(10, 0),)
        result = construct(a, Operation.UNION, b)
        assert len(result) == 2
        assert area(result) == pytest.approx(8.0)

    def test_difference_of_disjoint_shapes_is_first_operand(self):
        a, b = (square(0, 0),), (square(10, 0),)
        result = construct(a, Operation.DIFFERENCE, b)
        assert len(result) == 1
        assert area(result) == pytest.approx(area(a))
        assert contour_bounds(result) == contour_bounds(a)

    def test_difference_is_order_sensitive(self):
        a, b = (square(0, 0),), (square(1, 0),)
        ab = construct(a, Operation.DIFFERENCE, b)
        ba = construct(b, Operation.DIFFERENCE, a)
        assert contour_bounds(ab) == (0.0, 0.0, 1.0, 2.0)
        assert contour_bounds(ba) == (2.0, 0.0, 3.0, 2.0)

    def test_xor_with_itself_is_empty(self):
        a = (circle_contour(3.0, 3.0, 2.0, 4),)
        assert construct(a, Operation.XOR, a) == ()

    def test_intersection_of_far_circles_is_empty(self):
        a = (circle_contour(0.0, 0.0, 2.0, 3),)
        b = (circle_contour(4.5, 0.0, 2.0, 3),)
        assert construct(a, Operation.INTERSECTION, b) == ()

    def test_overlap(self):
        a, b = (square(0, 0),), (square(1, 1),)
        assert area(construct(a, Operation.INTERSECTION, b)) == pytest.approx(1.0)
        assert area(construct(a, Operation.UNION, b)) == pytest.approx(7.0)
        assert area(construct(a, Operation.XOR, b)) == pytest.approx(6.0)

    def test_nested_contour_is_hole(self):
        holed = (square(0, 0, 10.0), square(3, 3, 4.0))
        result = construct(holed, Operation.UNION, (square(20, 0),))
        assert len(result) == 3
        assert area(result) == pytest.approx(100.0 - 16.0 + 4.0)

    def test_result_contours_are_open_rings(self):
        result = construct((square(0, 0),), Operation.UNION, (square(1, 0),))
        assert len(result) == 1
        contour = result[0]
        assert contour[0] != contour[-1]
        assert len(contour) >= 4

    def test_inputs_are_untouched(self):
        a = (square(0, 0),)
        b = (square(1, 1),)
        before = (a, b)
        construct(a, Operation.UNION, b)
        assert (a, b) == before

    def test_too_few_points_is_engine_failure(self):
        with pytest.raises(ClippingError):
            construct((((0.0, 0.0), (1.0, 1.0)),), Operation.UNION, (square(0, 0),))

    def test_self_intersecting_contour_is_engine_failure(self):
        bowtie = ((0.0, 0.0), (2.0, 2.0), (2.0, 0.0), (0.0, 2.0))
        with pytest.raises(ClippingError):
            construct((square(0, 0),), Operation.DIFFERENCE, (bowtie,))

    def test_geos_error_is_wrapped(self, monkeypatch):
        class Exploding:
            def union(self, other):
                raise GEOSException("TopologyException: side location conflict")

        monkeypatch.setattr(ops, "_to_geometry", lambda polygon: Exploding())
        with pytest.raises(ClippingError, match="Union failed"):
            construct((square(0, 0),), Operation.UNION, (square(1, 1),))


class TestPipeline:

    def test_operation_order(self):
        assert [op.label for op in OPERATION_ORDER] == ["Union", "Intersection", "Difference", "XOR"]

    def test_fold_goes_left_to_right(self, two_circle_slot, monkeypatch):
        calls = []
        real = pipeline.construct

        def spy(subject, op, clip):
            calls.append((op, clip))
            return real(subject, op, clip)

        monkeypatch.setattr(pipeline, "construct", spy)
        fold_operation(Operation.DIFFERENCE, two_circle_slot.ordered())
        assert [clip[0] for _, clip in calls] == [
            two_circle_slot.left_circle.contour,
            two_circle_slot.right_circle.contour,
        ]

    def test_fold_without_right_circle_makes_one_call(self, default_slot, monkeypatch):
        calls = []
        real = pipeline.construct

        def spy(subject, op, clip):
            calls.append(clip)
            assert clip, "no empty operand may reach the engine"
            return real(subject, op, clip)

        monkeypatch.setattr(pipeline, "construct", spy)
        fold_operation(Operation.XOR, default_slot.ordered())
        assert len(calls) == 1

    def test_fold_needs_two_shapes(self, default_slot):
        with pytest.raises(ValueError):
            fold_operation(Operation.UNION, default_slot.ordered()[:1])

    def test_difference_fold_order_matters(self):
        big = Shape("big", square(0, 0, 4.0))
        small = Shape("small", square(1, 1, 1.0))
        assert area(fold_operation(Operation.DIFFERENCE, [big, small])) == pytest.approx(15.0)
        assert fold_operation(Operation.DIFFERENCE, [small, big]) == ()

    def test_engine_failure_propagates(self, default_slot):
        broken = Shape("broken", ((0.0, 0.0), (1.0, 1.0)))
        with pytest.raises(ClippingError):
            run_operations(default_slot.ordered() + (broken,))

    def test_default_slot_scenario(self, default_slot):
        results = run_operations(default_slot.ordered())
        assert [r.operation for r in results] == list(OPERATION_ORDER)
        by_op = {r.operation: r for r in results}

        union = by_op[Operation.UNION]
        assert len(union.polygon) == 1
        # 12 x 16 rectangle plus the outer half of the 8-radius diamond
        assert area(union.polygon) == pytest.approx(192.0 + 64.0, rel=1e-6)
        assert area(by_op[Operation.INTERSECTION].polygon) == pytest.approx(64.0, rel=1e-6)
        assert area(by_op[Operation.DIFFERENCE].polygon) == pytest.approx(128.0, rel=1e-6)
        assert area(by_op[Operation.XOR].polygon) == pytest.approx(192.0, rel=1e-6)
        assert not any(r.is_empty for r in results)

    def test_two_circle_scenario(self, two_circle_slot):
        results = {r.operation: r for r in run_operations(two_circle_slot.ordered())}
        rect = two_circle_slot.rectangle.contour
        rminx, rminy, rmaxx, rmaxy = contour_bounds([rect])

        diff = results[Operation.DIFFERENCE]
        assert not diff.is_empty
        circle_area = 0.5 * 16 * 25.0 * math.sin(2 * math.pi / 16)
        # each circle bites half of itself out of the 15 x 10 rectangle
        assert area(diff.polygon) == pytest.approx(150.0 - circle_area, rel=1e-6)
        minx, miny, maxx, maxy = contour_bounds(diff.polygon)
        eps = 1e-9
        assert rminx - eps <= minx and maxx <= rmaxx + eps
        assert rminy - eps <= miny and maxy <= rmaxy + eps
        assert area(diff.polygon) < area((rect,))

        # the two end caps never overlap each other
        assert results[Operation.INTERSECTION].is_empty
        assert not results[Operation.UNION].is_empty


def test_run_logs_result_extent(default_slot, caplog):
    with caplog.at_level(logging.DEBUG, logger="polyclip.clipping"):
        run_operations(default_slot.ordered())
    assert "Union result spans" in caplog.text
