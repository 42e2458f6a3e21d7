"""Anchor types for the editable curve.

An anchor is a user-placed point the curve passes through. Each anchor may carry
two Bezier handles: ``handle1`` shapes the curve arriving from the previous
anchor and ``handle2`` shapes the curve leaving toward the next one.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any

from curvedarrow.domain.geometry import Point


def _new_anchor_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True, slots=True)
class Anchor:
    """A curve anchor in planar coordinates.

    A missing handle straightens the adjacent segment at this end. Only the
    first anchor's ``handle1`` and the last anchor's ``handle2`` are unused.

    Attributes:
        position: Anchor location
        handle1: Incoming handle (None = straight into the anchor)
        handle2: Outgoing handle (None = straight out of the anchor)
        id: Identifier assigned by the editing surface (not used geometrically)
    """

    position: Point
    handle1: Point | None = None
    handle2: Point | None = None
    id: str = field(default_factory=_new_anchor_id, compare=False)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with id, position and handle fields
        """
        return {
            "id": self.id,
            "position": self.position.to_dict(),
            "handle1": self.handle1.to_dict() if self.handle1 is not None else None,
            "handle2": self.handle2.to_dict() if self.handle2 is not None else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Anchor":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of an anchor

        Returns:
            Anchor instance
        """
        handle1 = data.get("handle1")
        handle2 = data.get("handle2")
        return cls(
            position=Point.from_dict(data["position"]),
            handle1=Point.from_dict(handle1) if handle1 is not None else None,
            handle2=Point.from_dict(handle2) if handle2 is not None else None,
            id=data.get("id") or _new_anchor_id(),
        )
