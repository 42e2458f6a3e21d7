"""Unit tests for arrow outline generation."""

import math
from collections.abc import Sequence

import pytest

from curvedarrow.config import OutlineConfig
from curvedarrow.core.densify import densify_centerline
from curvedarrow.core.flatten import build_centerline
from curvedarrow.core.outline import outline_from_centerline, outline_from_polyline
from curvedarrow.domain import EMPTY_CENTERLINE, Anchor, Point, ShapeParameters

SCENARIO_PARAMS = ShapeParameters(rear_width=10.0, neck_width=10.0, head_width=20.0, head_length=20.0)


def straight_anchors() -> list[Anchor]:
    return [Anchor(Point(0, 0)), Anchor(Point(100, 0))]


def uniform_anchors() -> list[Anchor]:
    """Straight line whose handles sit at the thirds, so x(t) = 100 * t."""
    return [
        Anchor(Point(0, 0), handle2=Point(100 / 3, 0)),
        Anchor(Point(100, 0), handle1=Point(200 / 3, 0)),
    ]


def arch_anchors() -> list[Anchor]:
    return [
        Anchor(Point(0, 0), handle2=Point(30, 20)),
        Anchor(Point(100, 0), handle1=Point(70, 20)),
    ]


def assert_points_close(actual: Sequence[Point], expected: Sequence[Point], tol: float = 1e-6) -> None:
    assert len(actual) == len(expected)
    for a, e in zip(actual, expected):
        assert a.x == pytest.approx(e.x, abs=tol)
        assert a.y == pytest.approx(e.y, abs=tol)


def _orientation(a: Point, b: Point, c: Point) -> float:
    return (b.x - a.x) * (c.y - a.y) - (b.y - a.y) * (c.x - a.x)


def _edges_cross(p1: Point, p2: Point, q1: Point, q2: Point) -> bool:
    d1 = _orientation(q1, q2, p1)
    d2 = _orientation(q1, q2, p2)
    d3 = _orientation(p1, p2, q1)
    d4 = _orientation(p1, p2, q2)
    return d1 * d2 < 0 and d3 * d4 < 0


def is_simple_ring(ring: Sequence[Point]) -> bool:
    """Check that no two non-adjacent edges of a closed ring cross."""
    edges = list(zip(ring, ring[1:]))
    count = len(edges)
    for i in range(count):
        for j in range(i + 2, count):
            if i == 0 and j == count - 1:
                continue
            if _edges_cross(*edges[i], *edges[j]):
                return False
    return True


def distance_to_polyline(point: Point, polyline: Sequence[Point]) -> float:
    best = math.inf
    for a, b in zip(polyline, polyline[1:]):
        ab = b - a
        length_sq = ab.length_sq()
        if length_sq == 0:
            best = min(best, point.distance_to(a))
            continue
        t = max(0.0, min(1.0, (point - a).dot(ab) / length_sq))
        best = min(best, point.distance_to(a + ab * t))
    return best


class TestScenarios:
    """Reference arrows with known outlines."""

    def test_straight_arrow(self) -> None:
        """Test a straight arrow along the x-axis."""
        outline = outline_from_centerline(build_centerline(uniform_anchors()), SCENARIO_PARAMS)
        assert outline is not None
        assert_points_close(
            outline,
            [
                Point(0, 5),
                Point(80, 5),
                Point(80, 10),
                Point(100, 0),
                Point(80, -10),
                Point(80, -5),
                Point(0, -5),
                Point(0, 5),
            ],
        )

    def test_straight_arrow_with_collapsed_handles(self) -> None:
        """Test that the neck follows the eased parameterization of handle-less anchors."""
        outline = outline_from_centerline(build_centerline(straight_anchors()), SCENARIO_PARAMS)
        assert outline is not None
        # Neck query at s=80 gives t=0.8, and x(0.8) = 100 * (3 * 0.64 - 2 * 0.512)
        assert_points_close(
            outline,
            [
                Point(0, 5),
                Point(89.6, 5),
                Point(89.6, 10),
                Point(100, 0),
                Point(89.6, -10),
                Point(89.6, -5),
                Point(0, -5),
                Point(0, 5),
            ],
        )

    def test_zero_head_length_gives_rectangle(self) -> None:
        """Test that a headless arrow is a plain rectangle."""
        params = ShapeParameters(rear_width=10.0, neck_width=10.0, head_width=20.0, head_length=0.0)
        outline = outline_from_centerline(build_centerline(straight_anchors()), params)
        assert outline is not None
        assert_points_close(
            outline,
            [Point(0, 5), Point(100, 5), Point(100, -5), Point(0, -5), Point(0, 5)],
        )

    def test_zero_length_curve_has_no_outline(self) -> None:
        """Test that coincident anchors produce no outline."""
        line = build_centerline([Anchor(Point(10, 10)), Anchor(Point(10, 10))])
        assert outline_from_centerline(line, SCENARIO_PARAMS) is None

    def test_right_angle_bend(self) -> None:
        """Test a sharp bend made of straight sub-segments."""
        anchors = [
            Anchor(Point(0, 0), handle1=Point(0, 0), handle2=Point(0, 0)),
            Anchor(Point(100, 0), handle1=Point(100, 0), handle2=Point(100, 0)),
            Anchor(Point(100, 100), handle1=Point(100, 100), handle2=Point(100, 100)),
        ]
        line = build_centerline(anchors)
        for prev, curr in zip(line.samples, line.samples[1:]):
            assert prev.normal.dot(curr.normal) >= 0.0

        params = ShapeParameters(rear_width=4.0, neck_width=4.0, head_width=8.0, head_length=10.0)
        outline = outline_from_centerline(line, params)
        assert outline is not None
        assert outline[0] == outline[-1]
        assert is_simple_ring(outline)
        assert Point(100, 100) in outline
        # The first leg keeps its side: left edge above, right edge below the x-axis
        assert Point(100, 2) in outline
        assert Point(100, -2) in outline


class TestOutlineProperties:
    """General properties of generated outlines."""

    def test_ring_is_closed(self) -> None:
        """Test that the first point is repeated last."""
        outline = outline_from_centerline(build_centerline(arch_anchors()), SCENARIO_PARAMS)
        assert outline is not None
        assert len(outline) >= 4
        assert outline[0] == outline[-1]

    def test_no_consecutive_duplicates(self) -> None:
        """Test that coincident consecutive points are removed."""
        outline = outline_from_centerline(build_centerline(arch_anchors()), SCENARIO_PARAMS)
        assert outline is not None
        for a, b in zip(outline, outline[1:]):
            assert (b - a).length_sq() > 1e-12

    def test_all_points_finite(self) -> None:
        """Test that every ring point is finite."""
        outline = outline_from_centerline(build_centerline(arch_anchors()), SCENARIO_PARAMS)
        assert outline is not None
        assert all(p.is_finite() for p in outline)

    def test_tip_is_curve_end(self) -> None:
        """Test that the arrow tip is the last anchor."""
        outline = outline_from_centerline(build_centerline(arch_anchors()), SCENARIO_PARAMS)
        assert outline is not None
        assert Point(100, 0) in outline

    def test_deterministic(self) -> None:
        """Test identical inputs give identical outlines."""
        first = outline_from_centerline(build_centerline(arch_anchors()), SCENARIO_PARAMS)
        second = outline_from_centerline(build_centerline(arch_anchors()), SCENARIO_PARAMS)
        assert first == second

    def test_taper(self) -> None:
        """Test that the shaft narrows linearly from rear to neck."""
        params = ShapeParameters(rear_width=20.0, neck_width=4.0, head_width=30.0, head_length=20.0)
        outline = outline_from_polyline([Point(0, 0), Point(40, 0), Point(100, 0)], params)
        assert outline is not None
        assert outline[0].y == pytest.approx(10.0)
        # Halfway to the neck at x=80 the width is halfway between 20 and 4
        assert outline[1].x == pytest.approx(40.0)
        assert outline[1].y == pytest.approx(6.0)
        assert outline[2].x == pytest.approx(80.0)
        assert outline[2].y == pytest.approx(2.0)

    def test_negative_parameters_are_clamped(self) -> None:
        """Test that negative widths behave like zero widths."""
        params = ShapeParameters(rear_width=-10.0, neck_width=-10.0, head_width=20.0, head_length=20.0)
        outline = outline_from_centerline(build_centerline(straight_anchors()), params)
        assert outline is not None
        assert all(p.is_finite() for p in outline)
        assert Point(100, 0) in outline

    def test_head_longer_than_curve(self) -> None:
        """Test that the head is clamped to the curve length."""
        params = ShapeParameters(rear_width=10.0, neck_width=10.0, head_width=20.0, head_length=500.0)
        outline = outline_from_centerline(build_centerline(straight_anchors()), params)
        assert outline is not None
        assert outline[0] == outline[-1]
        xs = [p.x for p in outline]
        assert min(xs) == pytest.approx(0.0, abs=1e-9)
        assert max(xs) == pytest.approx(100.0, abs=1e-9)

    def test_fully_collapsed_ring(self) -> None:
        """Test that an all-zero shape has no outline."""
        params = ShapeParameters(rear_width=0.0, neck_width=0.0, head_width=0.0, head_length=0.0)
        assert outline_from_centerline(build_centerline(straight_anchors()), params) is None

    def test_empty_centerline(self) -> None:
        """Test that an empty centerline has no outline."""
        assert outline_from_centerline(EMPTY_CENTERLINE, SCENARIO_PARAMS) is None

    def test_min_head_length_config(self) -> None:
        """Test that the head threshold is independent of the length threshold."""
        line = build_centerline(uniform_anchors())
        params = ShapeParameters(rear_width=10.0, neck_width=10.0, head_width=20.0, head_length=2.0)

        with_head = outline_from_centerline(line, params, OutlineConfig(min_total_length=50.0))
        assert with_head is not None
        assert len(with_head) == 8

        headless = outline_from_centerline(line, params, OutlineConfig(min_head_length=5.0))
        assert headless is not None
        assert_points_close(
            headless,
            [Point(0, 5), Point(98, 5), Point(98, -5), Point(0, -5), Point(0, 5)],
        )

    def test_min_total_length_config(self) -> None:
        """Test that the minimum length threshold is configurable."""
        line = build_centerline(straight_anchors())
        assert outline_from_centerline(line, SCENARIO_PARAMS, OutlineConfig(min_total_length=200.0)) is None


class TestOutlineFromPolyline:
    """Tests for the raw polyline entry point."""

    def test_straight_polyline(self) -> None:
        """Test that a straight polyline matches the straight arrow."""
        outline = outline_from_polyline([Point(0, 0), Point(50, 0), Point(100, 0)], SCENARIO_PARAMS)
        assert outline is not None
        assert_points_close(
            outline,
            [
                Point(0, 5),
                Point(50, 5),
                Point(80, 5),
                Point(80, 10),
                Point(100, 0),
                Point(80, -10),
                Point(80, -5),
                Point(50, -5),
                Point(0, -5),
                Point(0, 5),
            ],
        )

    def test_degenerate_polyline(self) -> None:
        """Test that a single point has no outline."""
        assert outline_from_polyline([Point(1, 1)], SCENARIO_PARAMS) is None
        assert outline_from_polyline([Point(1, 1), Point(1, 1)], SCENARIO_PARAMS) is None


class TestDensifiedRoundTrip:
    """Outlines from densified centerlines match the coarse ones."""

    def test_straight_round_trip(self) -> None:
        """Test that densifying a straight arrow keeps the same shape."""
        coarse_line = build_centerline(straight_anchors())
        coarse = outline_from_centerline(coarse_line, SCENARIO_PARAMS)
        dense = outline_from_centerline(densify_centerline(coarse_line, 0.5), SCENARIO_PARAMS)
        assert coarse is not None and dense is not None
        for point in dense:
            assert distance_to_polyline(point, coarse) == pytest.approx(0.0, abs=1e-6)

    def test_curved_round_trip(self) -> None:
        """Test that a densified arch stays within the flattening tolerance."""
        coarse_line = build_centerline(arch_anchors())
        coarse = outline_from_centerline(coarse_line, SCENARIO_PARAMS)
        dense = outline_from_centerline(densify_centerline(coarse_line, 0.25), SCENARIO_PARAMS)
        assert coarse is not None and dense is not None

        assert dense[0].distance_to(coarse[0]) == pytest.approx(0.0, abs=1e-9)
        assert Point(100, 0) in dense
        for point in dense:
            assert distance_to_polyline(point, coarse) < 1.5
