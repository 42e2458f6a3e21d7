"""Domain models for curvedarrow.

This module contains the core domain models representing anchors, Bezier
segments, centerlines and arrow parameters. All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable to plain dictionaries
- Independent of any map, projection or UI library

Key classes:
- Point: A 2D planar coordinate with vector helpers
- Anchor: A curve anchor with optional Bezier handles
- Segment: A cubic Bezier between two consecutive anchors
- Sample: A station on the flattened curve
- Centerline: The arc-length sampled curve
- ShapeParameters: Normalized arrow widths and head length
- ArrowParameters: Stored (possibly legacy or partial) parameters
- ArrowDocument: A saved arrow with geographic anchors
"""

from curvedarrow.domain.anchor import Anchor
from curvedarrow.domain.centerline import (
    DEFAULT_NORMAL,
    DEFAULT_TANGENT,
    EMPTY_CENTERLINE,
    Centerline,
    Sample,
)
from curvedarrow.domain.document import ArrowDocument, ArrowParameters, GeoAnchor, LatLng
from curvedarrow.domain.geometry import Point, Segment
from curvedarrow.domain.shape import ShapeParameters

__all__: list[str] = [
    # Constants
    "DEFAULT_NORMAL",
    "DEFAULT_TANGENT",
    "EMPTY_CENTERLINE",
    # Core types
    "Point",
    "Anchor",
    "Segment",
    "Sample",
    "Centerline",
    "ShapeParameters",
    # Persisted types
    "LatLng",
    "GeoAnchor",
    "ArrowParameters",
    "ArrowDocument",
]
