"""Segment construction from anchors."""

from collections.abc import Sequence

from curvedarrow.domain import Anchor, Segment


def build_segments(anchors: Sequence[Anchor]) -> list[Segment]:
    """Build one cubic Bezier segment per consecutive anchor pair.

    A missing handle falls back to the anchor's own position, which
    straightens the segment at that end.

    Args:
        anchors: Anchors in drawing order

    Returns:
        List of segments; empty when fewer than 2 anchors are given

    Examples:
        >>> a0 = Anchor(Point(0.0, 0.0))
        >>> a1 = Anchor(Point(100.0, 0.0))
        >>> [seg.p3 for seg in build_segments([a0, a1])]
        [Point(x=100.0, y=0.0)]
    """
    segments: list[Segment] = []
    for i in range(1, len(anchors)):
        a0 = anchors[i - 1]
        a1 = anchors[i]
        segments.append(
            Segment(
                index=i - 1,
                p0=a0.position,
                cp1=a0.handle2 if a0.handle2 is not None else a0.position,
                cp2=a1.handle1 if a1.handle1 is not None else a1.position,
                p3=a1.position,
            )
        )
    return segments
