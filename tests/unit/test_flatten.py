"""Unit tests for segment building and adaptive flattening.

Tests for the Bezier helpers, build_segments, frame computation and the
centerline builders.
"""

import math

import pytest

from curvedarrow.config import FlattenConfig
from curvedarrow.core._bezier import adaptive_t_values, cubic_flatness, split_cubic
from curvedarrow.core.flatten import build_centerline, centerline_from_polyline, centerline_from_segments
from curvedarrow.core.frames import (
    FrameState,
    advance_frame,
    chord_tangent,
    resolve_frame,
    stable_normal,
    tangent_with_fallback,
)
from curvedarrow.core.segments import build_segments
from curvedarrow.domain import DEFAULT_NORMAL, DEFAULT_TANGENT, Anchor, Point, Segment


def s_curve_anchors() -> list[Anchor]:
    """Three anchors with handles forming an S-shaped curve."""
    return [
        Anchor(Point(0, 0), handle2=Point(40, 60)),
        Anchor(Point(100, 0), handle1=Point(60, -60), handle2=Point(140, 60)),
        Anchor(Point(200, 0), handle1=Point(160, -60)),
    ]


class TestBezierHelpers:
    """Tests for cubic flatness and subdivision."""

    def test_flatness_of_collinear_cubic(self) -> None:
        """Test that a straight cubic has zero flatness."""
        assert cubic_flatness(Point(0, 0), Point(10, 0), Point(20, 0), Point(30, 0)) == 0.0

    def test_flatness_of_arch(self) -> None:
        """Test flatness is the control point distance from the chord."""
        assert cubic_flatness(Point(0, 0), Point(0, 10), Point(10, 10), Point(10, 0)) == pytest.approx(10.0)

    def test_flatness_of_closed_cubic_is_finite(self) -> None:
        """Test that coincident end points do not divide by zero."""
        value = cubic_flatness(Point(0, 0), Point(5, 5), Point(-5, 5), Point(0, 0))
        assert math.isfinite(value)

    def test_split_midpoint_lies_on_curve(self) -> None:
        """Test that both halves meet at the curve point for t=0.5."""
        seg = Segment(0, Point(0, 0), Point(10, 30), Point(40, 30), Point(50, 0))
        left, right = split_cubic(*seg.control_points())
        mid = seg.point_at(0.5)
        assert left[3] == right[0]
        assert left[3].x == pytest.approx(mid.x)
        assert left[3].y == pytest.approx(mid.y)

    def test_straight_segment_needs_no_subdivision(self) -> None:
        """Test that a flat segment yields only its end parameters."""
        seg = Segment(0, Point(0, 0), Point(0, 0), Point(100, 0), Point(100, 0))
        assert adaptive_t_values(seg) == [0.0, 1.0]

    def test_curved_segment_is_subdivided(self) -> None:
        """Test that a curved segment gets sorted interior parameters."""
        seg = Segment(0, Point(0, 0), Point(0, 100), Point(100, 100), Point(100, 0))
        ts = adaptive_t_values(seg)
        assert ts[0] == 0.0
        assert ts[-1] == 1.0
        assert len(ts) > 2
        assert ts == sorted(set(ts))

    def test_max_depth_bounds_sample_count(self) -> None:
        """Test that recursion depth limits the number of parameters."""
        seg = Segment(0, Point(0, 0), Point(0, 1000), Point(1000, 1000), Point(1000, 0))
        assert adaptive_t_values(seg, tolerance=0.001, max_depth=0) == [0.0, 1.0]
        assert len(adaptive_t_values(seg, tolerance=0.001, max_depth=3)) == 2**3 + 1

    def test_tighter_tolerance_adds_samples(self) -> None:
        """Test that lowering the tolerance refines the flattening."""
        seg = Segment(0, Point(0, 0), Point(0, 100), Point(100, 100), Point(100, 0))
        coarse = adaptive_t_values(seg, tolerance=10.0)
        fine = adaptive_t_values(seg, tolerance=0.1)
        assert len(fine) > len(coarse)


class TestBuildSegments:
    """Tests for build_segments."""

    def test_fewer_than_two_anchors(self) -> None:
        """Test that a single anchor produces no segments."""
        assert build_segments([]) == []
        assert build_segments([Anchor(Point(0, 0))]) == []

    def test_missing_handles_fall_back_to_positions(self) -> None:
        """Test control points default to the anchor positions."""
        segments = build_segments([Anchor(Point(0, 0)), Anchor(Point(100, 0))])
        assert len(segments) == 1
        seg = segments[0]
        assert seg.cp1 == Point(0, 0)
        assert seg.cp2 == Point(100, 0)

    def test_handles_are_used_per_direction(self) -> None:
        """Test that handle2 leaves an anchor and handle1 arrives at one."""
        segments = build_segments(s_curve_anchors())
        assert [seg.index for seg in segments] == [0, 1]
        assert segments[0].cp1 == Point(40, 60)
        assert segments[0].cp2 == Point(60, -60)
        assert segments[1].cp1 == Point(140, 60)
        assert segments[1].cp2 == Point(160, -60)
        assert segments[0].p3 == segments[1].p0


class TestFrames:
    """Tests for tangent fallbacks and normal continuity."""

    def test_analytic_tangent(self) -> None:
        """Test that a regular segment uses its derivative."""
        seg = Segment(0, Point(0, 0), Point(10, 0), Point(20, 0), Point(30, 0))
        tangent = tangent_with_fallback(seg, 0.5, None, None, FlattenConfig())
        assert tangent == Point(1.0, 0.0)

    def test_finite_difference_fallback(self) -> None:
        """Test that a vanishing derivative falls back to a finite difference."""
        seg = Segment(0, Point(0, 0), Point(0, 0), Point(0, 50), Point(0, 50))
        tangent = tangent_with_fallback(seg, 0.0, None, None, FlattenConfig())
        assert tangent is not None
        assert tangent.x == pytest.approx(0.0)
        assert tangent.y == pytest.approx(1.0)

    def test_no_usable_tangent(self) -> None:
        """Test that a point-like segment with no neighbours has no tangent."""
        p = Point(5, 5)
        seg = Segment(0, p, p, p, p)
        assert tangent_with_fallback(seg, 0.5, None, None, FlattenConfig()) is None
        assert tangent_with_fallback(seg, 0.5, p, p, FlattenConfig()) is None

    def test_neighbour_chord_fallback(self) -> None:
        """Test that a point-like segment uses the neighbouring chord."""
        p = Point(5, 5)
        seg = Segment(0, p, p, p, p)
        tangent = tangent_with_fallback(seg, 0.5, Point(5, 0), Point(5, 10), FlattenConfig())
        assert tangent == Point(0.0, 1.0)

    def test_chord_tangent(self) -> None:
        """Test chord direction and its degenerate cases."""
        assert chord_tangent(Point(0, 0), Point(0, 2), 1e-6) == Point(0.0, 1.0)
        assert chord_tangent(Point(0, 0), Point(0, 0), 1e-6) is None
        assert chord_tangent(None, Point(0, 1), 1e-6) is None

    def test_stable_normal_flips_to_reference(self) -> None:
        """Test that the normal keeps the sign of the reference."""
        assert stable_normal(Point(1, 0), None) == Point(-0.0, 1.0)
        flipped = stable_normal(Point(1, 0), Point(0, -1))
        assert flipped.x == pytest.approx(0.0)
        assert flipped.y == -1.0

    def test_resolve_frame_reuses_reference(self) -> None:
        """Test that a missing tangent is derived from the previous normal."""
        tangent, normal = resolve_frame(None, Point(0, 1))
        assert normal == Point(0, 1)
        assert tangent == Point(1, -0.0)
        assert tangent.perpendicular() == normal

    def test_resolve_frame_defaults(self) -> None:
        """Test default axes when nothing is known."""
        assert resolve_frame(None, None) == (DEFAULT_TANGENT, DEFAULT_NORMAL)

    def test_advance_frame_threads_state(self) -> None:
        """Test that the running normal is passed along explicitly."""
        state = FrameState()
        _, first, state = advance_frame(state, Point(1, 0))
        assert state.normal == first
        _, second, state = advance_frame(state, Point(-1, 0))
        # Reversing direction keeps the normal on the same side
        assert second.dot(first) > 0
        assert state.normal == second


class TestBuildCenterline:
    """Tests for the centerline builders."""

    def test_fewer_than_two_anchors(self) -> None:
        """Test that no curve yields an empty centerline."""
        assert build_centerline([]).is_empty()
        assert build_centerline([Anchor(Point(1, 1))]).is_empty()

    def test_straight_line(self) -> None:
        """Test a two-anchor straight line."""
        line = build_centerline([Anchor(Point(0, 0)), Anchor(Point(100, 0))])
        assert line.total_length == pytest.approx(100.0)
        assert line.samples[0].point == Point(0, 0)
        assert line.samples[-1].point == Point(100, 0)
        for sample in line.samples:
            assert sample.tangent.x == pytest.approx(1.0)
            assert sample.normal.y == pytest.approx(1.0)

    def test_endpoints_match_anchors(self) -> None:
        """Test that the first and last samples sit on the end anchors."""
        anchors = s_curve_anchors()
        line = build_centerline(anchors)
        assert line.samples[0].point == anchors[0].position
        assert line.samples[-1].point == anchors[-1].position
        assert line.samples[0].s == 0.0
        assert line.samples[-1].s == line.total_length

    def test_arc_length_monotonic(self) -> None:
        """Test that cumulative length never decreases."""
        lengths = build_centerline(s_curve_anchors()).cumulative_lengths
        assert all(b >= a for a, b in zip(lengths, lengths[1:]))

    def test_arc_length_is_polyline_length(self) -> None:
        """Test that s accumulates distances between samples."""
        line = build_centerline(s_curve_anchors())
        points = line.points
        expected = sum(a.distance_to(b) for a, b in zip(points, points[1:]))
        assert line.total_length == pytest.approx(expected)

    def test_unit_orthogonal_frames(self) -> None:
        """Test that every frame is unit length and orthogonal."""
        for sample in build_centerline(s_curve_anchors()).samples:
            assert sample.tangent.length() == pytest.approx(1.0)
            assert sample.normal.length() == pytest.approx(1.0)
            assert sample.tangent.dot(sample.normal) == pytest.approx(0.0, abs=1e-9)

    def test_normal_continuity(self) -> None:
        """Test that consecutive normals never point to opposite sides."""
        samples = build_centerline(s_curve_anchors()).samples
        for prev, curr in zip(samples, samples[1:]):
            assert prev.normal.dot(curr.normal) >= 0.0

    def test_join_emitted_once(self) -> None:
        """Test that segment joins are not duplicated."""
        anchors = s_curve_anchors()
        line = build_centerline(anchors)
        at_join = [s for s in line.samples if s.point == anchors[1].position]
        assert len(at_join) == 1
        assert at_join[0].seg_index == 0
        assert at_join[0].t == 1.0

    def test_deterministic(self) -> None:
        """Test identical inputs give identical centerlines."""
        assert build_centerline(s_curve_anchors()) == build_centerline(s_curve_anchors())

    def test_zero_length_curve(self) -> None:
        """Test coincident anchors give a zero-length centerline with default axes."""
        line = build_centerline([Anchor(Point(50, 50)), Anchor(Point(50, 50))])
        assert line.total_length == 0.0
        assert len(line.samples) == 2
        for sample in line.samples:
            assert sample.tangent == DEFAULT_TANGENT
            assert sample.normal == DEFAULT_NORMAL

    def test_non_finite_samples_dropped(self) -> None:
        """Test that non-finite positions never reach the centerline."""
        segments = [
            Segment(0, Point(0, 0), Point(0, 0), Point(10, 0), Point(10, 0)),
            Segment(1, Point(10, 0), Point(10, 0), Point(math.nan, 0), Point(math.nan, 0)),
        ]
        line = centerline_from_segments(segments)
        assert all(sample.point.is_finite() for sample in line.samples)
        assert line.total_length == pytest.approx(10.0)

    def test_config_tolerance_is_used(self) -> None:
        """Test that a tighter tolerance produces more samples."""
        coarse = build_centerline(s_curve_anchors(), FlattenConfig(tolerance=10.0))
        fine = build_centerline(s_curve_anchors(), FlattenConfig(tolerance=0.1))
        assert len(fine.samples) > len(coarse.samples)


class TestCenterlineFromPolyline:
    """Tests for segment-less centerlines."""

    def test_polyline(self) -> None:
        """Test lengths and frames of an L-shaped polyline."""
        line = centerline_from_polyline([Point(0, 0), Point(10, 0), Point(10, 10)])
        assert not line.has_segments
        assert line.cumulative_lengths == [0.0, 10.0, 20.0]
        assert line.total_length == 20.0
        assert line.samples[0].normal.y == pytest.approx(1.0)
        assert line.samples[-1].normal.x == pytest.approx(-1.0)
        assert line.samples[-1].t == 1.0

    def test_too_few_points(self) -> None:
        """Test that fewer than 2 finite points give an empty centerline."""
        assert centerline_from_polyline([Point(0, 0)]).is_empty()
        assert centerline_from_polyline([Point(0, 0), Point(math.inf, 0)]).is_empty()
