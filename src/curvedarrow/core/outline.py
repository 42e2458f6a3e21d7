"""Arrow outline generation from a centerline.

The outline is a closed ring made of a linearly tapered shaft (rear width to
neck width) followed by a wedge-shaped head that ends at the curve's tip:

    left shaft (rear -> neck) -> left head base -> tip
        -> right head base -> right shaft (neck -> rear) -> first point

Key functions:
- outline_from_centerline: Outline of a flattened Bezier centerline
- outline_from_polyline: Outline of a raw point list
"""

from collections.abc import Sequence

from curvedarrow.config import FlattenConfig, OutlineConfig
from curvedarrow.core.flatten import centerline_from_polyline
from curvedarrow.core.query import sample_at_distance
from curvedarrow.domain import DEFAULT_NORMAL, Centerline, Point, Sample, ShapeParameters

# Tolerance when selecting shaft samples at or before the neck
NECK_MATCH_EPSILON = 1e-9

# Distance at which the last shaft sample counts as the neck station
NECK_SNAP_DISTANCE = 1e-6

# Minimum point count of a valid closed ring (triangle plus closing point)
MIN_RING_POINTS = 4

Outline = list[Point]


class _RingBuilder:
    """Accumulates ring points, dropping non-finite and coincident ones."""

    def __init__(self, min_distance_sq: float) -> None:
        self._min_distance_sq = min_distance_sq
        self.points: list[Point] = []

    def add(self, point: Point) -> None:
        if not point.is_finite():
            return
        if self.points and (point - self.points[-1]).length_sq() <= self._min_distance_sq:
            return
        self.points.append(point)

    def close(self) -> None:
        """Repeat the first point at the end, snapping a near-duplicate last point."""
        if not self.points:
            return
        first = self.points[0]
        if len(self.points) > 1 and (first - self.points[-1]).length_sq() <= self._min_distance_sq:
            self.points[-1] = first
            return
        self.points.append(first)


def _shaft_samples(
    centerline: Centerline, neck_s: float, neck: Sample, config: FlattenConfig
) -> list[Sample]:
    """Collect the stations the shaft edges are offset from."""
    shaft = [sample for sample in centerline.samples if sample.s <= neck_s + NECK_MATCH_EPSILON]

    if not shaft or abs(shaft[-1].s - neck_s) > NECK_SNAP_DISTANCE:
        shaft.append(neck)

    if len(shaft) < 2:
        tip = sample_at_distance(centerline, centerline.total_length, config)
        if tip is not None:
            shaft.append(tip)

    return shaft


def outline_from_centerline(
    centerline: Centerline,
    params: ShapeParameters,
    config: OutlineConfig | None = None,
    flatten_config: FlattenConfig | None = None,
) -> Outline | None:
    """Generate the closed arrow outline around a centerline.

    Args:
        centerline: Flattened centerline
        params: Arrow widths and head length in centerline units
        config: Outline assembly configuration (defaults if None)
        flatten_config: Configuration for centerline queries (defaults if None)

    Returns:
        Closed ring (first point repeated last) of at least 4 points, or None
        when the centerline is too short or the ring collapses
    """
    if config is None:
        config = OutlineConfig()
    if flatten_config is None:
        flatten_config = FlattenConfig()

    if len(centerline.samples) < 2 or centerline.total_length <= config.min_total_length:
        return None

    total_length = centerline.total_length
    params = params.clamped(total_length)

    tip = sample_at_distance(centerline, total_length, flatten_config)
    neck_s = max(0.0, total_length - params.head_length)
    neck = sample_at_distance(centerline, neck_s, flatten_config)
    if tip is None or neck is None:
        return None

    neck_normal = neck.normal if not neck.normal.is_zero() else DEFAULT_NORMAL
    head_half = params.head_width / 2
    left_head_base = neck.point + neck_normal * head_half
    right_head_base = neck.point - neck_normal * head_half

    left_shaft: list[Point] = []
    right_shaft: list[Point] = []
    for sample in _shaft_samples(centerline, neck_s, neck, flatten_config):
        if neck_s > NECK_SNAP_DISTANCE:
            taper = min(1.0, max(0.0, sample.s / neck_s))
        else:
            taper = 1.0
        half_width = (params.rear_width + (params.neck_width - params.rear_width) * taper) / 2
        left_shaft.append(sample.point + sample.normal * half_width)
        right_shaft.append(sample.point - sample.normal * half_width)

    # Shaft and head must meet exactly at the neck
    neck_half = params.neck_width / 2
    left_shaft[-1] = neck.point + neck_normal * neck_half
    right_shaft[-1] = neck.point - neck_normal * neck_half

    ring = _RingBuilder(config.min_point_distance_sq)
    for point in left_shaft:
        ring.add(point)
    if params.head_length > config.min_head_length:
        ring.add(left_head_base)
        ring.add(tip.point)
        ring.add(right_head_base)
    for point in reversed(right_shaft):
        ring.add(point)
    ring.close()

    if len(ring.points) < MIN_RING_POINTS:
        return None
    return ring.points


def outline_from_polyline(
    points: Sequence[Point],
    params: ShapeParameters,
    config: OutlineConfig | None = None,
    flatten_config: FlattenConfig | None = None,
) -> Outline | None:
    """Generate the arrow outline around a raw polyline.

    Args:
        points: Polyline vertices from tail to tip
        params: Arrow widths and head length in polyline units
        config: Outline assembly configuration (defaults if None)
        flatten_config: Configuration for frame fallbacks (defaults if None)

    Returns:
        Closed ring, or None when the polyline is degenerate
    """
    centerline = centerline_from_polyline(points, flatten_config)
    return outline_from_centerline(centerline, params, config, flatten_config)
