"""Flattened centerline representation.

A centerline is the arc-length indexed form of the whole multi-segment curve:
the Bezier segments it was built from plus an ordered list of samples
(stations) carrying position, tangent, normal and cumulative distance.
"""

from dataclasses import dataclass, field
from typing import Any

from curvedarrow.domain.geometry import Point, Segment

# Frame used when no direction can be derived at all
DEFAULT_TANGENT = Point(1.0, 0.0)
DEFAULT_NORMAL = Point(0.0, 1.0)


@dataclass(frozen=True, slots=True)
class Sample:
    """A station along the flattened curve.

    Attributes:
        s: Cumulative arc length from the curve start
        t: Local Bezier parameter within the owning segment
        seg_index: Index of the owning segment
        point: Position on the curve
        tangent: Unit tangent (direction of travel)
        normal: Unit normal, sign-continuous with the previous station
    """

    s: float
    t: float
    seg_index: int
    point: Point
    tangent: Point
    normal: Point

    def to_dict(self) -> dict[str, Any]:
        return {
            "s": self.s,
            "t": self.t,
            "seg_index": self.seg_index,
            "point": self.point.to_dict(),
            "tangent": self.tangent.to_dict(),
            "normal": self.normal.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Sample":
        return cls(
            s=float(data["s"]),
            t=float(data["t"]),
            seg_index=int(data["seg_index"]),
            point=Point.from_dict(data["point"]),
            tangent=Point.from_dict(data["tangent"]),
            normal=Point.from_dict(data["normal"]),
        )


@dataclass(frozen=True)
class Centerline:
    """Arc-length sampled centerline of a multi-segment Bezier curve.

    Invariants:
    - samples are sorted by ``s``, the first at 0 and the last at total_length
    - tangents and normals are unit length and mutually orthogonal

    A centerline built from a raw polyline has no segments; queries then
    interpolate linearly between sample points.

    Attributes:
        segments: Bezier segments the samples were evaluated on
        samples: Ordered stations along the curve
        total_length: Arc length of the sampled polyline
    """

    segments: tuple[Segment, ...] = field(default_factory=tuple)
    samples: tuple[Sample, ...] = field(default_factory=tuple)
    total_length: float = 0.0

    @property
    def points(self) -> list[Point]:
        """Sample positions in order."""
        return [sample.point for sample in self.samples]

    @property
    def cumulative_lengths(self) -> list[float]:
        """Cumulative distance of each sample."""
        return [sample.s for sample in self.samples]

    @property
    def has_segments(self) -> bool:
        return len(self.segments) > 0

    def is_empty(self) -> bool:
        """Check whether the centerline has no samples."""
        return len(self.samples) == 0

    def segment(self, index: int) -> Segment | None:
        """Look up a segment by index, None if out of range."""
        if 0 <= index < len(self.segments):
            return self.segments[index]
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "segments": [seg.to_dict() for seg in self.segments],
            "samples": [sample.to_dict() for sample in self.samples],
            "total_length": self.total_length,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Centerline":
        return cls(
            segments=tuple(Segment.from_dict(s) for s in data["segments"]),
            samples=tuple(Sample.from_dict(s) for s in data["samples"]),
            total_length=float(data["total_length"]),
        )


EMPTY_CENTERLINE = Centerline()
