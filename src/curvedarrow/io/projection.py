"""Spherical Web Mercator projection between lat/lng and a pixel plane.

The geometry engine works on plain planar coordinates. This projection is how
the export layer turns saved geographic anchors into that plane (pixels at a
given zoom, as a slippy map would render them) and maps outlines back.
"""

import math

from curvedarrow.domain import Anchor, GeoAnchor, LatLng, Point
from curvedarrow.exceptions import ProjectionError

# Latitude beyond which Web Mercator is undefined (square world)
MAX_LATITUDE = 85.0511287798


def wrap_longitude(lng: float) -> float:
    """Wrap a longitude into [-180, 180)."""
    return ((lng + 180.0) % 360.0) - 180.0


class WebMercator:
    """Projects geographic coordinates to pixels at a fixed zoom level.

    Example:
        projection = WebMercator(zoom=6)
        point = projection.project(LatLng(51.1657, 10.4515))
        latlng = projection.unproject(point)
    """

    def __init__(self, zoom: float, tile_size: int = 256) -> None:
        """Initialize the projection.

        Args:
            zoom: Zoom level of the pixel plane
            tile_size: Tile edge length in pixels

        Raises:
            ProjectionError: If the zoom does not give a finite, positive world size
        """
        self.zoom = zoom
        self.tile_size = tile_size
        try:
            self._scale = tile_size * 2.0**zoom
        except OverflowError as e:
            raise ProjectionError(f"Zoom {zoom} is out of range") from e
        if not (math.isfinite(self._scale) and self._scale > 0):
            raise ProjectionError(f"Zoom {zoom} gives an unusable world size {self._scale}")

    @property
    def world_size(self) -> float:
        """Width and height of the whole world in pixels."""
        return self._scale

    def project(self, latlng: LatLng) -> Point:
        """Project a geographic coordinate to the pixel plane.

        Raises:
            ProjectionError: If the coordinate is not finite
        """
        if not (math.isfinite(latlng.lat) and math.isfinite(latlng.lng)):
            raise ProjectionError(f"Cannot project non-finite coordinate {latlng}")

        lat = max(-MAX_LATITUDE, min(MAX_LATITUDE, latlng.lat))
        phi = math.radians(lat)
        x = self._scale * (latlng.lng / 360.0 + 0.5)
        y = self._scale * (0.5 - math.log(math.tan(math.pi / 4 + phi / 2)) / (2 * math.pi))
        return Point(x, y)

    def unproject(self, point: Point) -> LatLng:
        """Map a pixel-plane point back to a geographic coordinate.

        Longitude is wrapped into [-180, 180).

        Raises:
            ProjectionError: If the point is not finite
        """
        if not point.is_finite():
            raise ProjectionError(f"Cannot unproject non-finite point {point}")

        lng = (point.x / self._scale - 0.5) * 360.0
        n = (0.5 - point.y / self._scale) * 2 * math.pi
        lat = math.degrees(2 * math.atan(math.exp(n)) - math.pi / 2)
        return LatLng(lat=lat, lng=wrap_longitude(lng))

    def project_anchor(self, anchor: GeoAnchor, anchor_id: str | None = None) -> Anchor:
        """Project a saved anchor and its handles into a planar Anchor."""
        return Anchor(
            position=self.project(anchor.position),
            handle1=self.project(anchor.handle1) if anchor.handle1 is not None else None,
            handle2=self.project(anchor.handle2) if anchor.handle2 is not None else None,
            id=anchor_id or "",
        )

    def project_anchors(self, anchors: list[GeoAnchor]) -> list[Anchor]:
        return [self.project_anchor(anchor, anchor_id=str(i)) for i, anchor in enumerate(anchors)]
