"""Arrow shape parameters.

The outline generator only ever sees a normalized ShapeParameters value.
Stored, partial or legacy parameter payloads are resolved into it at the
boundary (see ``curvedarrow.domain.document.ArrowParameters``).
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class ShapeParameters:
    """Width and length parameters of the arrow, in centerline units.

    Attributes:
        rear_width: Full shaft width at the tail
        neck_width: Full shaft width where the head begins
        head_width: Full width of the arrowhead base
        head_length: Length of the arrowhead along the centerline
    """

    rear_width: float
    neck_width: float
    head_width: float
    head_length: float

    @classmethod
    def uniform(cls, shaft_width: float, head_width: float, head_length: float) -> "ShapeParameters":
        """Build parameters for an untapered shaft of constant width."""
        return cls(
            rear_width=shaft_width,
            neck_width=shaft_width,
            head_width=head_width,
            head_length=head_length,
        )

    def clamped(self, total_length: float | None = None) -> "ShapeParameters":
        """Clamp all values to be non-negative and head length to the curve length.

        Args:
            total_length: Centerline length to cap head_length at (None = no cap)

        Returns:
            New ShapeParameters with clamped values
        """
        head_length = max(0.0, self.head_length)
        if total_length is not None:
            head_length = min(head_length, max(0.0, total_length))
        return ShapeParameters(
            rear_width=max(0.0, self.rear_width),
            neck_width=max(0.0, self.neck_width),
            head_width=max(0.0, self.head_width),
            head_length=head_length,
        )

    def scaled(self, factor: float) -> "ShapeParameters":
        """Multiply every value by factor (e.g. a zoom scale)."""
        return ShapeParameters(
            rear_width=self.rear_width * factor,
            neck_width=self.neck_width * factor,
            head_width=self.head_width * factor,
            head_length=self.head_length * factor,
        )

    @property
    def is_tapered(self) -> bool:
        return self.rear_width != self.neck_width

    def to_dict(self) -> dict[str, Any]:
        return {
            "rear_width": self.rear_width,
            "neck_width": self.neck_width,
            "head_width": self.head_width,
            "head_length": self.head_length,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ShapeParameters":
        return cls(
            rear_width=float(data["rear_width"]),
            neck_width=float(data["neck_width"]),
            head_width=float(data["head_width"]),
            head_length=float(data["head_length"]),
        )
