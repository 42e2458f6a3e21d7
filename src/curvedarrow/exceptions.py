"""Exception hierarchy for Curvedarrow.

The geometry engine itself never raises for degenerate input; it returns
``None`` or empty results instead. These exceptions belong to the layers
around it (file I/O, payload validation, projection and export).
"""


class CurvedArrowError(Exception):
    """Base exception for all Curvedarrow errors."""

    pass


class ArrowFileError(CurvedArrowError):
    """Errors related to arrow document loading or saving."""

    pass


class ArrowLoadError(ArrowFileError):
    """Error loading an arrow document."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load arrows '{path}': {reason}")


class ArrowSaveError(ArrowFileError):
    """Error saving an arrow document or export."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save '{path}': {reason}")


class ArrowDataError(CurvedArrowError):
    """Errors in arrow payload data."""

    pass


class InvalidAnchorError(ArrowDataError):
    """Anchor payload is missing or has non-finite coordinates."""

    def __init__(self, index: int | None, reason: str) -> None:
        self.index = index
        self.reason = reason
        where = f" {index}" if index is not None else ""
        super().__init__(f"Invalid anchor{where}: {reason}")


class InvalidParametersError(ArrowDataError):
    """Shape parameter payload could not be interpreted."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid arrow parameters: {reason}")


class GeometryError(CurvedArrowError):
    """Errors in geometric calculations outside the engine."""

    pass


class ProjectionError(GeometryError):
    """Coordinates could not be projected or unprojected."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ExportError(CurvedArrowError):
    """Error converting an arrow to an export format."""

    def __init__(self, arrow_name: str, reason: str) -> None:
        self.arrow_name = arrow_name
        self.reason = reason
        super().__init__(f"Export failed for '{arrow_name}': {reason}")
