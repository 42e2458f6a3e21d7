"""Curvedarrow - Turn sketched Bezier curves into tapered arrow outlines.

Curvedarrow builds a smooth centerline from a handful of anchors with optional
Bezier handles, samples it at stable arc-length stations and derives a closed
arrow polygon (tapered shaft plus arrowhead) that can be exported as GeoJSON.

Example:
    $ curvedarrow arrows.json

This will create arrows.geojson with one Polygon feature per saved arrow.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
