"""Arrow I/O layer for curvedarrow.

This module handles reading saved arrows, projecting them into the plane the
geometry engine works in, and writing GeoJSON exports. It keeps geographic
concerns out of the engine.

Key responsibilities:
- Load and save arrow documents (JSON)
- Project lat/lng anchors to Web Mercator pixels and back
- Convert outline rings to GeoJSON Polygon features

Key classes:
- ArrowReader: Load arrow documents
- ArrowWriter: Save arrow documents
- WebMercator: Geographic <-> pixel plane projection
"""

from curvedarrow.io.projection import WebMercator, wrap_longitude
from curvedarrow.io.reader import ArrowReader, parse_arrows
from curvedarrow.io.writer import (
    ArrowWriter,
    features_to_collection,
    get_geojson_path,
    outline_to_feature,
    write_geojson,
)

__all__ = [
    "ArrowReader",
    "ArrowWriter",
    "WebMercator",
    "features_to_collection",
    "get_geojson_path",
    "outline_to_feature",
    "parse_arrows",
    "wrap_longitude",
    "write_geojson",
]
