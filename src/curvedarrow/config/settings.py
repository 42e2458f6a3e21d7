"""Configuration settings for Curvedarrow."""

from pathlib import Path

from pydantic import BaseModel, Field


class FlattenConfig(BaseModel):
    """Configuration for adaptive Bezier flattening and frame fallbacks.

    All distances are in centerline units (the caller's planar coordinates).
    """

    tolerance: float = Field(
        default=1.25,
        gt=0.0,
        le=100.0,
        description="Maximum control point distance from the chord before subdividing",
    )
    max_depth: int = Field(
        default=10,
        ge=0,
        le=20,
        description="Maximum recursion depth for subdivision",
    )
    derivative_epsilon: float = Field(
        default=1e-9,
        gt=0.0,
        description="Derivative length below which the tangent is considered degenerate",
    )
    finite_difference_step: float = Field(
        default=1e-3,
        gt=0.0,
        le=0.1,
        description="Parameter step used for the finite-difference tangent fallback",
    )
    chord_epsilon: float = Field(
        default=1e-6,
        gt=0.0,
        description="Chord length at or below which no usable tangent exists",
    )


class OutlineConfig(BaseModel):
    """Configuration for outline assembly."""

    min_point_distance_sq: float = Field(
        default=1e-12,
        ge=0.0,
        description="Squared distance below which consecutive ring points are merged",
    )
    min_total_length: float = Field(
        default=1e-6,
        ge=0.0,
        description="Centerline length at or below which no outline is produced",
    )
    min_head_length: float = Field(
        default=1e-6,
        ge=0.0,
        description="Head length at or below which the arrowhead is left out",
    )


class ExportConfig(BaseModel):
    """Configuration for GeoJSON export."""

    densify: bool = Field(
        default=True,
        description="Re-sample centerline and outline before export",
    )
    centerline_max_segment_length: float = Field(
        default=2.0,
        gt=0.0,
        le=1000.0,
        description="Maximum centerline step when densifying (pixels at export zoom)",
    )
    outline_max_segment_length: float = Field(
        default=4.0,
        gt=0.0,
        le=1000.0,
        description="Maximum outline edge length when densifying (pixels at export zoom)",
    )
    zoom: float | None = Field(
        default=None,
        ge=0.0,
        le=30.0,
        description="Zoom level of the projected plane (None = arrow's base zoom)",
    )
    default_zoom: float = Field(
        default=6.0,
        ge=0.0,
        le=30.0,
        description="Zoom used when neither zoom nor base zoom is known",
    )
    tile_size: int = Field(
        default=256,
        ge=1,
        description="Web Mercator tile size in pixels",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class CurvedArrowSettings(BaseModel):
    """Main application settings."""

    flatten: FlattenConfig = Field(default_factory=FlattenConfig)
    outline: OutlineConfig = Field(default_factory=OutlineConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> CurvedArrowSettings:
    """Get default application settings."""
    return CurvedArrowSettings()
