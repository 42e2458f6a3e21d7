"""Adaptive flattening of multi-segment Bezier curves into centerlines.

The flattener turns anchors (or prebuilt segments) into a Centerline: an
ordered list of samples carrying position, unit tangent, sign-continuous
unit normal and cumulative arc length.

Arc length accumulates straight-line distances between consecutive samples,
so the centerline is consistent with the polyline later offset into an
outline.
"""

from collections.abc import Sequence

from curvedarrow.config import FlattenConfig
from curvedarrow.core._bezier import adaptive_t_values
from curvedarrow.core.frames import FrameState, advance_frame, chord_tangent, tangent_with_fallback
from curvedarrow.core.segments import build_segments
from curvedarrow.domain import EMPTY_CENTERLINE, Anchor, Centerline, Point, Sample, Segment


def _raw_stations(segments: Sequence[Segment], config: FlattenConfig) -> list[tuple[Segment, float, Point]]:
    """Evaluate positions at the adaptive parameters of every segment.

    The t=0 station of every segment after the first is dropped because it
    coincides with the previous segment's t=1 station. Non-finite positions
    are filtered out.
    """
    stations: list[tuple[Segment, float, Point]] = []
    for segment in segments:
        ts = adaptive_t_values(segment, config.tolerance, config.max_depth)
        for idx, t in enumerate(ts):
            if stations and idx == 0:
                continue
            point = segment.point_at(t)
            if not point.is_finite():
                continue
            stations.append((segment, t, point))
    return stations


def centerline_from_segments(
    segments: Sequence[Segment], config: FlattenConfig | None = None
) -> Centerline:
    """Flatten Bezier segments into an arc-length sampled centerline.

    Args:
        segments: Consecutive cubic segments
        config: Flattening configuration (defaults if None)

    Returns:
        Centerline; empty when there are no segments or no finite samples
    """
    if config is None:
        config = FlattenConfig()
    if not segments:
        return EMPTY_CENTERLINE

    stations = _raw_stations(segments, config)
    if not stations:
        return EMPTY_CENTERLINE

    samples: list[Sample] = []
    state = FrameState()
    s = 0.0
    previous: Point | None = None

    for i, (segment, t, point) in enumerate(stations):
        if previous is not None:
            s += point.distance_to(previous)

        following = stations[i + 1][2] if i + 1 < len(stations) else None
        raw_tangent = tangent_with_fallback(segment, t, previous, following, config)
        tangent, normal, state = advance_frame(state, raw_tangent)

        samples.append(
            Sample(
                s=s,
                t=t,
                seg_index=segment.index,
                point=point,
                tangent=tangent,
                normal=normal,
            )
        )
        previous = point

    return Centerline(
        segments=tuple(segments),
        samples=tuple(samples),
        total_length=samples[-1].s,
    )


def build_centerline(anchors: Sequence[Anchor], config: FlattenConfig | None = None) -> Centerline:
    """Build the centerline of the curve through the given anchors.

    Args:
        anchors: Anchors in drawing order
        config: Flattening configuration (defaults if None)

    Returns:
        Centerline; empty when fewer than 2 anchors are given
    """
    return centerline_from_segments(build_segments(anchors), config)


def centerline_from_polyline(points: Sequence[Point], config: FlattenConfig | None = None) -> Centerline:
    """Build a segment-less centerline from a raw point list.

    Tangents come from central differences of the neighbouring points (one-sided
    at the ends); normals follow the same sign-continuity rule as the flattener.

    Args:
        points: Polyline vertices in order
        config: Flattening configuration (defaults if None)

    Returns:
        Centerline without segments; empty when fewer than 2 finite points
    """
    if config is None:
        config = FlattenConfig()

    finite = [p for p in points if p.is_finite()]
    if len(finite) < 2:
        return EMPTY_CENTERLINE

    samples: list[Sample] = []
    state = FrameState()
    s = 0.0
    last = len(finite) - 1

    for i, point in enumerate(finite):
        if i > 0:
            s += point.distance_to(finite[i - 1])

        before = finite[i - 1] if i > 0 else point
        after = finite[i + 1] if i < last else point
        raw_tangent = chord_tangent(before, after, config.derivative_epsilon)
        tangent, normal, state = advance_frame(state, raw_tangent)

        samples.append(
            Sample(
                s=s,
                t=1.0 if i == last else 0.0,
                seg_index=min(i, last - 1),
                point=point,
                tangent=tangent,
                normal=normal,
            )
        )

    return Centerline(segments=(), samples=tuple(samples), total_length=s)
