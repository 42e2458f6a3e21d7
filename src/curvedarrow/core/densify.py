"""Export-time re-sampling of centerlines and polylines.

Interactive previews flatten coarsely; exports re-sample at a fixed maximum
step so output fidelity does not depend on the preview's subdivision depth.
Inputs are never mutated.
"""

import math
from collections.abc import Sequence

from curvedarrow.config import FlattenConfig
from curvedarrow.core.query import sample_at_distance
from curvedarrow.domain import Centerline, Point, Sample

# Stations closer than this to the previous one are dropped
MIN_STATION_DISTANCE = 1e-9


def densify_centerline(
    centerline: Centerline,
    max_segment_length: float,
    config: FlattenConfig | None = None,
) -> Centerline:
    """Re-sample a centerline at uniform arc-length steps.

    Takes ceil(total_length / max_segment_length) steps (at least one) and
    queries the centerline at each, so every new station lies on the curve.

    Args:
        centerline: Centerline to re-sample
        max_segment_length: Maximum distance between consecutive stations
        config: Flattening configuration for the queries (defaults if None)

    Returns:
        New centerline sharing the input's segments, or the input itself when
        it is too short to re-sample or the step is not positive
    """
    total_length = centerline.total_length
    if (
        len(centerline.samples) < 2
        or max_segment_length <= 0
        or total_length <= MIN_STATION_DISTANCE
    ):
        return centerline

    step_count = max(1, math.ceil(total_length / max_segment_length))
    dense: list[Sample] = []

    for i in range(step_count + 1):
        distance = min(total_length, (i / step_count) * total_length)
        station = sample_at_distance(centerline, distance, config)
        if station is None:
            continue
        if dense and station.point.distance_to(dense[-1].point) <= MIN_STATION_DISTANCE:
            continue
        dense.append(station)

    if len(dense) < 2:
        return centerline

    return Centerline(
        segments=centerline.segments,
        samples=tuple(dense),
        total_length=total_length,
    )


def densify_polyline(points: Sequence[Point], max_segment_length: float) -> list[Point]:
    """Subdivide every edge of a polyline into equal pieces.

    Each edge is split into ceil(edge_length / max_segment_length) parts, so a
    closed ring stays closed.

    Args:
        points: Polyline or ring vertices
        max_segment_length: Maximum length of the resulting edges

    Returns:
        New list of points (a copy of the input if it cannot be densified)
    """
    if len(points) < 2 or max_segment_length <= 0:
        return list(points)

    densified = [points[0]]
    for prev, curr in zip(points, points[1:]):
        delta = curr - prev
        subdivisions = max(1, math.ceil(delta.length() / max_segment_length))
        for step in range(1, subdivisions + 1):
            if step == subdivisions:
                densified.append(curr)
            else:
                densified.append(prev + delta * (step / subdivisions))

    return densified
