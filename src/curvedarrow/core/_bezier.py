"""Internal cubic Bezier subdivision helpers.

This is an internal module containing helper functions for the flattener.
Not intended for public use.
"""

from curvedarrow.domain import Point, Segment

# Floor for chord length so flatness stays finite for closed segments
MIN_CHORD_LENGTH = 1e-9


def _midpoint(a: Point, b: Point) -> Point:
    return Point((a.x + b.x) / 2, (a.y + b.y) / 2)


def cubic_flatness(p0: Point, p1: Point, p2: Point, p3: Point) -> float:
    """Measure how far a cubic deviates from its chord.

    Args:
        p0, p1, p2, p3: Control points of the cubic

    Returns:
        Maximum perpendicular distance of p1 and p2 from the line p0-p3
    """
    chord = p3 - p0
    chord_length = max(chord.length(), MIN_CHORD_LENGTH)

    def distance_to_chord(pt: Point) -> float:
        return abs((pt.x - p0.x) * chord.y - (pt.y - p0.y) * chord.x) / chord_length

    return max(distance_to_chord(p1), distance_to_chord(p2))


def split_cubic(
    p0: Point, p1: Point, p2: Point, p3: Point
) -> tuple[tuple[Point, Point, Point, Point], tuple[Point, Point, Point, Point]]:
    """Split a cubic at t=0.5 using De Casteljau's algorithm.

    Returns:
        Control points of the left and right halves
    """
    # First level
    ab = _midpoint(p0, p1)
    bc = _midpoint(p1, p2)
    cd = _midpoint(p2, p3)

    # Second level
    abc = _midpoint(ab, bc)
    bcd = _midpoint(bc, cd)

    # Third level (point on curve)
    mid = _midpoint(abc, bcd)

    return (p0, ab, abc, mid), (mid, bcd, cd, p3)


def adaptive_t_values(segment: Segment, tolerance: float = 1.25, max_depth: int = 10) -> list[float]:
    """Choose parameter values that flatten a segment to within tolerance.

    Recursively subdivides the parameter range [0, 1] until each piece is
    flat enough or the maximum depth is reached.

    Args:
        segment: Cubic segment to flatten
        tolerance: Maximum control point distance from the chord
        max_depth: Maximum recursion depth

    Returns:
        Sorted, unique parameter values, always including 0.0 and 1.0
    """
    ts: set[float] = {0.0, 1.0}

    def subdivide(
        points: tuple[Point, Point, Point, Point], t0: float, t1: float, depth: int
    ) -> None:
        if depth >= max_depth or cubic_flatness(*points) <= tolerance:
            return

        t_mid = (t0 + t1) * 0.5
        ts.add(t_mid)

        left, right = split_cubic(*points)
        subdivide(left, t0, t_mid, depth + 1)
        subdivide(right, t_mid, t1, depth + 1)

    subdivide(segment.control_points(), 0.0, 1.0, 0)
    return sorted(ts)
