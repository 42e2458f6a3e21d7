"""Arc-length queries on a centerline.

Given a distance along the curve, the query locates the bracketing samples,
interpolates the curve parameter between them and re-evaluates the underlying
Bezier at that parameter. Positions therefore stay on the true curve instead
of on the flattened polyline, which keeps re-rendered and densified output
free of faceting.
"""

import math
from bisect import bisect_left

from curvedarrow.config import FlattenConfig
from curvedarrow.core.frames import chord_tangent, resolve_frame, tangent_with_fallback
from curvedarrow.domain import Centerline, Point, Sample

# Minimum sample spacing for interpolating between two samples
MIN_SPAN = 1e-9


def _arc_length(sample: Sample) -> float:
    return sample.s


def _nearer(lower: Sample, upper: Sample, target: float) -> Sample:
    """The bracketing sample closest to target; ties go to the upper one."""
    return lower if abs(target - lower.s) < abs(upper.s - target) else upper


def _curve_parameter(lower: Sample, upper: Sample, target: float) -> tuple[int, float]:
    """Segment index and parameter t of the station at target.

    Within one segment t is interpolated linearly by arc-length ratio. A pair
    straddling a segment boundary has no shared parameter range, so the
    nearer sample's segment and t are used as is.
    """
    span = upper.s - lower.s
    if span > MIN_SPAN and lower.seg_index == upper.seg_index:
        ratio = (target - lower.s) / span
        return lower.seg_index, lower.t + (upper.t - lower.t) * ratio

    nearer = _nearer(lower, upper, target)
    return nearer.seg_index, nearer.t


def _polyline_station(lower: Sample, upper: Sample, target: float, reference: Point, config: FlattenConfig) -> Sample:
    span = upper.s - lower.s
    nearer = lower if abs(target - lower.s) <= abs(upper.s - target) else upper

    if span > MIN_SPAN:
        ratio = (target - lower.s) / span
        point = lower.point + (upper.point - lower.point) * ratio
    else:
        ratio = 0.0
        point = nearer.point

    raw_tangent = chord_tangent(lower.point, upper.point, config.derivative_epsilon)
    if raw_tangent is None:
        tangent, normal = nearer.tangent, nearer.normal
    else:
        tangent, normal = resolve_frame(raw_tangent, reference)

    return Sample(
        s=target,
        t=ratio,
        seg_index=lower.seg_index,
        point=point,
        tangent=tangent,
        normal=normal,
    )


def sample_at_distance(
    centerline: Centerline, s: float, config: FlattenConfig | None = None
) -> Sample | None:
    """Sample the centerline at an arc-length distance.

    Args:
        centerline: Centerline to query
        s: Distance from the curve start (clamped to [0, total_length])
        config: Flattening configuration for tangent fallbacks (defaults if None)

    Returns:
        Station at the clamped distance, or None if the centerline is empty

    Examples:
        >>> line = build_centerline([Anchor(Point(0, 0)), Anchor(Point(100, 0))])
        >>> station = sample_at_distance(line, 50.0)
        >>> # station.t is 0.5 and station.point is (50.0, 0.0)
    """
    if centerline.is_empty():
        return None
    if config is None:
        config = FlattenConfig()

    samples = centerline.samples
    total = centerline.total_length
    if math.isnan(s):
        s = 0.0
    target = min(max(s, 0.0), total)

    upper_idx = min(bisect_left(samples, target, key=_arc_length), len(samples) - 1)
    lower_idx = max(0, upper_idx - 1)
    lower = samples[lower_idx]
    upper = samples[upper_idx]

    reference = lower.normal if abs(target - lower.s) <= abs(upper.s - target) else upper.normal

    if not centerline.has_segments:
        return _polyline_station(lower, upper, target, reference, config)

    seg_index, t = _curve_parameter(lower, upper, target)
    segment = centerline.segment(seg_index)
    if segment is None:
        return None

    point = segment.point_at(t)
    raw_tangent = tangent_with_fallback(segment, t, lower.point, upper.point, config)
    tangent, normal = resolve_frame(raw_tangent, reference)

    return Sample(
        s=target,
        t=t,
        seg_index=segment.index,
        point=point,
        tangent=tangent,
        normal=normal,
    )
