"""Persisted arrow documents.

These types describe arrows as they are saved by the editing surface: anchors
in geographic coordinates plus stored width parameters. They are the input of
the export pipeline and never reach the geometry engine directly.
"""

import math
from dataclasses import dataclass, field
from typing import Any

from curvedarrow.domain.shape import ShapeParameters
from curvedarrow.exceptions import InvalidAnchorError, InvalidParametersError

# Legacy single-thickness field names, superseded by the rear/neck/head fields
LEGACY_SHAFT_THICKNESS = "shaftThicknessPixels"
LEGACY_HEAD_LENGTH = "arrowHeadLengthPixels"
LEGACY_HEAD_WIDTH = "arrowHeadWidthPixels"

# Zoom range of slippy maps; stored base zooms outside it are ignored
MIN_ZOOM = 0.0
MAX_ZOOM = 30.0


def _number_or_none(value: Any) -> float | None:
    # bool is an int subclass but never a width
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def _first_number(*values: Any) -> float | None:
    for value in values:
        number = _number_or_none(value)
        if number is not None:
            return number
    return None


def _zoom_or_none(value: Any) -> float | None:
    zoom = _number_or_none(value)
    if zoom is None or not MIN_ZOOM <= zoom <= MAX_ZOOM:
        return None
    return zoom


@dataclass(frozen=True, slots=True)
class LatLng:
    """A geographic coordinate in degrees.

    Attributes:
        lat: Latitude
        lng: Longitude
    """

    lat: float
    lng: float

    def to_dict(self) -> dict[str, Any]:
        return {"lat": self.lat, "lng": self.lng}

    @classmethod
    def from_dict(cls, data: Any) -> "LatLng":
        """Deserialize and validate a {lat, lng} payload.

        Raises:
            ValueError: If either coordinate is missing or not a finite number
        """
        if not isinstance(data, dict):
            raise ValueError("expected an object with lat and lng")
        lat = _number_or_none(data.get("lat"))
        lng = _number_or_none(data.get("lng"))
        if lat is None or lng is None:
            raise ValueError("lat and lng must be finite numbers")
        return cls(lat=lat, lng=lng)


@dataclass(frozen=True, slots=True)
class GeoAnchor:
    """A saved anchor in geographic coordinates.

    Attributes:
        position: Anchor location
        handle1: Incoming handle location
        handle2: Outgoing handle location
    """

    position: LatLng
    handle1: LatLng | None = None
    handle2: LatLng | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "latlng": self.position.to_dict(),
            "handle1": self.handle1.to_dict() if self.handle1 is not None else None,
            "handle2": self.handle2.to_dict() if self.handle2 is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Any, index: int | None = None) -> "GeoAnchor":
        """Deserialize a saved anchor payload.

        Args:
            data: Dictionary with latlng and optional handle1/handle2
            index: Position in the anchor list, used in error messages

        Raises:
            InvalidAnchorError: If the payload is malformed
        """
        if not isinstance(data, dict):
            raise InvalidAnchorError(index, "expected an object")
        try:
            position = LatLng.from_dict(data.get("latlng"))
            handle1 = LatLng.from_dict(data["handle1"]) if data.get("handle1") else None
            handle2 = LatLng.from_dict(data["handle2"]) if data.get("handle2") else None
        except ValueError as e:
            raise InvalidAnchorError(index, str(e)) from e
        return cls(position=position, handle1=handle1, handle2=handle2)


@dataclass(frozen=True, slots=True)
class ArrowParameters:
    """Stored arrow parameters, possibly partial.

    Widths are expressed in pixels at ``base_zoom``. Missing values are None
    and resolve to 0 when converted to ShapeParameters.

    Attributes:
        rear_width: Tail width
        neck_width: Width where the head begins
        head_width: Arrowhead base width
        head_length: Arrowhead length
        base_zoom: Zoom level the widths were recorded at (None = unscaled)
    """

    rear_width: float | None = None
    neck_width: float | None = None
    head_width: float | None = None
    head_length: float | None = None
    base_zoom: float | None = None

    def zoom_scale(self, zoom: float) -> float:
        """Scale factor from base zoom to zoom (1.0 without a base zoom).

        Raises:
            InvalidParametersError: If the factor overflows
        """
        if self.base_zoom is None:
            return 1.0
        try:
            return 2.0 ** (zoom - self.base_zoom)
        except OverflowError as e:
            raise InvalidParametersError(f"zoom {zoom} is out of range for base zoom {self.base_zoom}") from e

    def to_shape(self, zoom: float | None = None) -> ShapeParameters:
        """Resolve to engine parameters, scaled to the given zoom.

        Args:
            zoom: Zoom level of the plane the engine works in (None = base zoom)

        Returns:
            Normalized ShapeParameters

        Raises:
            InvalidParametersError: If the zoom scale factor overflows
        """
        shape = ShapeParameters(
            rear_width=self.rear_width or 0.0,
            neck_width=self.neck_width or 0.0,
            head_width=self.head_width or 0.0,
            head_length=self.head_length or 0.0,
        )
        if zoom is None:
            return shape
        return shape.scaled(self.zoom_scale(zoom))

    def to_dict(self) -> dict[str, Any]:
        return {
            "rearWidthPx": self.rear_width,
            "neckWidthPx": self.neck_width,
            "headWidthPx": self.head_width,
            "headLengthPx": self.head_length,
            "baseZoom": self.base_zoom,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ArrowParameters":
        """Normalize a stored parameter payload.

        Accepts both the current rear/neck/head fields and the legacy
        single-thickness fields. Current fields take precedence; a legacy
        shaft thickness fills both rear and neck width. Non-numeric and
        non-finite values are treated as missing, as is a base zoom outside
        [0, 30].

        Args:
            data: Parameter dictionary (None = all missing)

        Raises:
            InvalidParametersError: If data is neither a dictionary nor None
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise InvalidParametersError(f"expected an object, got {type(data).__name__}")

        shaft = data.get(LEGACY_SHAFT_THICKNESS)
        return cls(
            rear_width=_first_number(data.get("rearWidthPx"), shaft),
            neck_width=_first_number(data.get("neckWidthPx"), shaft),
            head_width=_first_number(data.get("headWidthPx"), data.get(LEGACY_HEAD_WIDTH)),
            head_length=_first_number(data.get("headLengthPx"), data.get(LEGACY_HEAD_LENGTH)),
            base_zoom=_zoom_or_none(data.get("baseZoom")),
        )


@dataclass
class ArrowDocument:
    """A single saved arrow.

    Attributes:
        name: Display name (used as the GeoJSON feature name)
        anchors: Saved anchors in drawing order
        parameters: Stored shape parameters
    """

    name: str
    anchors: list[GeoAnchor] = field(default_factory=list)
    parameters: ArrowParameters = field(default_factory=ArrowParameters)

    def has_curve(self) -> bool:
        """Check whether there are enough anchors to form a curve."""
        return len(self.anchors) >= 2

    def to_dict(self) -> dict[str, Any]:
        return {
            "arrowName": self.name,
            "savedAnchors": [anchor.to_dict() for anchor in self.anchors],
            "arrowParameters": self.parameters.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ArrowDocument":
        """Deserialize a saved arrow.

        Raises:
            InvalidAnchorError: If an anchor payload is malformed
            InvalidParametersError: If the parameter payload is malformed
        """
        if not isinstance(data, dict):
            raise InvalidParametersError("arrow entry must be an object")
        raw_anchors = data.get("savedAnchors")
        if not isinstance(raw_anchors, list):
            raw_anchors = []
        name = data.get("arrowName")
        return cls(
            name=name if isinstance(name, str) else "",
            anchors=[GeoAnchor.from_dict(a, index=i) for i, a in enumerate(raw_anchors)],
            parameters=ArrowParameters.from_dict(data.get("arrowParameters")),
        )
