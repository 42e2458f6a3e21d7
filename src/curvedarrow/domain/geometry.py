"""Core planar types for curve and outline representation.

This module defines the fundamental geometric types used throughout curvedarrow:
- Point: A 2D planar coordinate with vector helpers
- Segment: A cubic Bezier segment between two consecutive anchors
"""

import math
from dataclasses import dataclass
from typing import Any

# Vectors shorter than this are treated as zero
ZERO_LENGTH = 1e-9


@dataclass(frozen=True, slots=True)
class Point:
    """A point (or vector) in the 2D plane.

    Immutable and hashable. Points carry no identity and are compared by
    distance, never by equality, in geometric code.

    Attributes:
        x: X coordinate in plane units
        y: Y coordinate in plane units
    """

    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Point":
        return Point(self.x * scalar, self.y * scalar)

    def __neg__(self) -> "Point":
        return Point(-self.x, -self.y)

    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.hypot(self.x, self.y)

    def length_sq(self) -> float:
        """Squared Euclidean length of the vector."""
        return self.x * self.x + self.y * self.y

    def normalized(self) -> "Point":
        """Return the unit vector, or the zero vector if too short to normalize."""
        length = self.length()
        if length < ZERO_LENGTH:
            return Point(0.0, 0.0)
        return Point(self.x / length, self.y / length)

    def perpendicular(self) -> "Point":
        """Rotate 90 degrees counter-clockwise: (x, y) -> (-y, x)."""
        return Point(-self.y, self.x)

    def dot(self, other: "Point") -> float:
        return self.x * other.x + self.y * other.y

    def distance_to(self, other: "Point") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def is_zero(self) -> bool:
        return self.x == 0.0 and self.y == 0.0

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=float(data["x"]), y=float(data["y"]))


@dataclass(frozen=True, slots=True)
class Segment:
    """A cubic Bezier segment between two consecutive anchors.

    Attributes:
        index: Position of the segment along the curve (0-based)
        p0: Start point (first anchor position)
        cp1: First control point (first anchor's outgoing handle)
        cp2: Second control point (second anchor's incoming handle)
        p3: End point (second anchor position)
    """

    index: int
    p0: Point
    cp1: Point
    cp2: Point
    p3: Point

    def point_at(self, t: float) -> Point:
        """Evaluate the cubic Bezier at parameter t."""
        mt = 1.0 - t
        a = mt * mt * mt
        b = 3.0 * mt * mt * t
        c = 3.0 * mt * t * t
        d = t * t * t
        return Point(
            a * self.p0.x + b * self.cp1.x + c * self.cp2.x + d * self.p3.x,
            a * self.p0.y + b * self.cp1.y + c * self.cp2.y + d * self.p3.y,
        )

    def derivative_at(self, t: float) -> Point:
        """Evaluate the analytic first derivative at parameter t."""
        mt = 1.0 - t
        a = 3.0 * mt * mt
        b = 6.0 * mt * t
        c = 3.0 * t * t
        return Point(
            a * (self.cp1.x - self.p0.x) + b * (self.cp2.x - self.cp1.x) + c * (self.p3.x - self.cp2.x),
            a * (self.cp1.y - self.p0.y) + b * (self.cp2.y - self.cp1.y) + c * (self.p3.y - self.cp2.y),
        )

    def control_points(self) -> tuple[Point, Point, Point, Point]:
        return (self.p0, self.cp1, self.cp2, self.p3)

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "p0": self.p0.to_dict(),
            "cp1": self.cp1.to_dict(),
            "cp2": self.cp2.to_dict(),
            "p3": self.p3.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Segment":
        return cls(
            index=int(data["index"]),
            p0=Point.from_dict(data["p0"]),
            cp1=Point.from_dict(data["cp1"]),
            cp2=Point.from_dict(data["cp2"]),
            p3=Point.from_dict(data["p3"]),
        )
