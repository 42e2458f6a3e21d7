"""Core geometry algorithms for curvedarrow.

This module contains the core algorithms for:

- Segment construction (anchors to cubic Bezier segments)
- Flattening (adaptive subdivision into an arc-length sampled centerline)
- Centerline queries (point, tangent and normal at an arc length)
- Outline assembly (tapered shaft plus triangular head)
- Export densification

The geometry functions are designed to be:
- Pure (no side effects, inputs never mutated)
- Total (degenerate input yields None or an empty result, never an exception)
- Independent of projections, files and logging

Key functions:
- build_segments: Build cubic segments from consecutive anchors
- build_centerline: Flatten anchors into a Centerline
- centerline_from_polyline: Build a segment-less Centerline from points
- sample_at_distance: Query a Centerline by arc length
- outline_from_centerline: Assemble the closed arrow outline
- densify_centerline: Re-sample a Centerline at a maximum step
- densify_polyline: Subdivide polyline edges

Key classes:
- FrameState: Carries the previous normal between frame evaluations
- ArrowProcessor: Exports saved arrow documents to GeoJSON
"""

from curvedarrow.core.densify import densify_centerline, densify_polyline
from curvedarrow.core.flatten import build_centerline, centerline_from_polyline, centerline_from_segments
from curvedarrow.core.frames import FrameState, advance_frame, resolve_frame, stable_normal, tangent_with_fallback
from curvedarrow.core.outline import Outline, outline_from_centerline, outline_from_polyline
from curvedarrow.core.processor import (
    ArrowGeometry,
    ArrowProcessor,
    ArrowResult,
    build_arrow_geometry,
    process_arrow,
)
from curvedarrow.core.query import sample_at_distance
from curvedarrow.core.segments import build_segments

__all__ = [
    # Processor
    "ArrowGeometry",
    "ArrowProcessor",
    "ArrowResult",
    # Frames
    "FrameState",
    "Outline",
    "advance_frame",
    "build_arrow_geometry",
    # Flattening
    "build_centerline",
    "build_segments",
    "centerline_from_polyline",
    "centerline_from_segments",
    # Densification
    "densify_centerline",
    "densify_polyline",
    # Outline
    "outline_from_centerline",
    "outline_from_polyline",
    "process_arrow",
    "resolve_frame",
    # Query
    "sample_at_distance",
    "stable_normal",
    "tangent_with_fallback",
]
