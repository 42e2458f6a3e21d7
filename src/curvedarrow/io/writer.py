"""Writers for arrow documents and GeoJSON exports.

This module provides:
- ArrowWriter: saves arrow documents in the format ArrowReader loads
- GeoJSON helpers: turn outline rings into Polygon features and write them
"""

import json
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from curvedarrow.domain import ArrowDocument, LatLng, Point
from curvedarrow.exceptions import ArrowSaveError

# A closed linear ring needs at least four positions
MIN_RING_POSITIONS = 4


def outline_to_feature(
    points: Sequence[Point],
    name: str,
    unproject: Callable[[Point], LatLng],
    properties: dict[str, Any] | None = None,
) -> dict[str, Any] | None:
    """Build a GeoJSON Polygon feature from an outline ring.

    Args:
        points: Outline ring in plane coordinates
        name: Feature name property
        unproject: Maps a plane point back to a geographic coordinate
        properties: Extra feature properties

    Returns:
        GeoJSON Feature dictionary, or None if the ring has fewer than
        4 positions after closing
    """
    ring: list[list[float]] = []
    for point in points:
        latlng = unproject(point)
        ring.append([latlng.lng, latlng.lat])

    if ring and ring[0] != ring[-1]:
        ring.append(list(ring[0]))

    if len(ring) < MIN_RING_POSITIONS:
        return None

    return {
        "type": "Feature",
        "properties": {"name": name, **(properties or {})},
        "geometry": {"type": "Polygon", "coordinates": [ring]},
    }


def features_to_collection(features: Sequence[dict[str, Any]]) -> dict[str, Any]:
    """Wrap features in a GeoJSON FeatureCollection."""
    return {"type": "FeatureCollection", "features": list(features)}


def write_geojson(path: Path, payload: dict[str, Any]) -> None:
    """Write a GeoJSON payload to disk.

    Raises:
        ArrowSaveError: If the file cannot be written
    """
    try:
        path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    except OSError as e:
        raise ArrowSaveError(str(path), str(e)) from e


def get_geojson_path(input_path: Path) -> Path:
    """Generate the default export path next to the input.

    Converts: arrows.json -> arrows.geojson

    Args:
        input_path: Arrow document path

    Returns:
        Path with a .geojson extension
    """
    return input_path.with_suffix(".geojson")


class ArrowWriter:
    """Writes arrow documents as JSON.

    Example:
        writer = ArrowWriter(Path("arrows.json"))
        writer.add(document)
        writer.save()
    """

    def __init__(self, output_path: Path) -> None:
        """Initialize the arrow writer.

        Args:
            output_path: Path where the document will be saved
        """
        self._output_path = output_path
        self._arrows: list[ArrowDocument] = []

    def add(self, document: ArrowDocument) -> None:
        """Queue an arrow for saving."""
        self._arrows.append(document)

    def save(self) -> None:
        """Save queued arrows; a single arrow is written as an object.

        Raises:
            ArrowSaveError: If the file cannot be written
        """
        if len(self._arrows) == 1:
            payload: Any = self._arrows[0].to_dict()
        else:
            payload = [arrow.to_dict() for arrow in self._arrows]

        try:
            self._output_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        except OSError as e:
            raise ArrowSaveError(str(self._output_path), str(e)) from e
