"""Export pipeline for saved arrows.

This module wires the geometry engine to the I/O layer: saved arrows are
projected into a pixel plane, flattened, outlined, densified and written as
GeoJSON Polygon features.

Key components:
- build_arrow_geometry: Pure anchors + parameters -> centerline and outline
- process_arrow: Export a single saved arrow, capturing failures
- ArrowProcessor: Main orchestrator for whole documents
"""

import time
import traceback
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from curvedarrow.config import CurvedArrowSettings
from curvedarrow.core.densify import densify_centerline, densify_polyline
from curvedarrow.core.flatten import build_centerline
from curvedarrow.core.outline import Outline, outline_from_centerline
from curvedarrow.domain import Anchor, ArrowDocument, Centerline, ShapeParameters
from curvedarrow.exceptions import CurvedArrowError, ExportError, ProjectionError
from curvedarrow.io import (
    ArrowReader,
    WebMercator,
    features_to_collection,
    get_geojson_path,
    outline_to_feature,
    write_geojson,
)
from curvedarrow.utils import ProcessingLogger, ProcessingStats, configure_logging


@dataclass
class ArrowGeometry:
    """Engine output for one arrow.

    Attributes:
        centerline: Centerline the outline was derived from
        outline: Closed outline ring, or None when nothing can be drawn
    """

    centerline: Centerline
    outline: Outline | None

    @property
    def is_drawable(self) -> bool:
        return self.outline is not None


@dataclass
class ArrowResult:
    """Outcome of exporting a single arrow.

    Exactly one of feature, skipped_reason or error is set. error_type holds
    the class name of the exception behind error.
    """

    name: str
    feature: dict[str, Any] | None = None
    skipped_reason: str | None = None
    error: str | None = None
    error_type: str | None = None
    traceback: str | None = None
    centerline_samples: int = 0
    segment_count: int = 0
    total_length: float = 0.0
    outline_points: int = 0
    duration_ms: float = 0.0


def build_arrow_geometry(
    anchors: Sequence[Anchor],
    params: ShapeParameters,
    settings: CurvedArrowSettings,
    densify: bool = False,
) -> ArrowGeometry:
    """Run the geometry engine on planar anchors.

    Args:
        anchors: Anchors in plane coordinates
        params: Shape parameters in plane units
        settings: Settings with flatten, outline and export configuration
        densify: Re-sample centerline and outline at the export step sizes

    Returns:
        ArrowGeometry with the (possibly densified) centerline and outline
    """
    centerline = build_centerline(anchors, settings.flatten)

    if densify:
        centerline = densify_centerline(
            centerline,
            settings.export.centerline_max_segment_length,
            settings.flatten,
        )

    outline = outline_from_centerline(centerline, params, settings.outline, settings.flatten)

    if densify and outline is not None:
        outline = densify_polyline(outline, settings.export.outline_max_segment_length)

    return ArrowGeometry(centerline=centerline, outline=outline)


def export_zoom(document: ArrowDocument, settings: CurvedArrowSettings) -> float:
    """Zoom of the pixel plane an arrow is exported in."""
    if settings.export.zoom is not None:
        return settings.export.zoom
    if document.parameters.base_zoom is not None:
        return document.parameters.base_zoom
    return settings.export.default_zoom


def process_arrow(document: ArrowDocument, settings: CurvedArrowSettings) -> ArrowResult:
    """Export a single saved arrow to a GeoJSON feature.

    Failures are captured in the result instead of raised, so one bad arrow
    does not abort a batch.

    Args:
        document: Saved arrow
        settings: Application settings

    Returns:
        ArrowResult with a feature, a skip reason, or an error
    """
    start_time = time.time()
    result = ArrowResult(name=document.name)

    try:
        if not document.has_curve():
            result.skipped_reason = "fewer than 2 anchors"
            return result

        zoom = export_zoom(document, settings)
        projection = WebMercator(zoom, tile_size=settings.export.tile_size)
        anchors = projection.project_anchors(document.anchors)
        params = document.parameters.to_shape(zoom)

        geometry = build_arrow_geometry(anchors, params, settings, densify=settings.export.densify)
        result.segment_count = len(geometry.centerline.segments)
        result.centerline_samples = len(geometry.centerline.samples)
        result.total_length = geometry.centerline.total_length

        if not geometry.is_drawable or geometry.outline is None:
            result.skipped_reason = "degenerate outline"
            return result

        try:
            feature = outline_to_feature(geometry.outline, document.name, projection.unproject)
        except ProjectionError as e:
            raise ExportError(document.name, str(e)) from e
        if feature is None:
            result.skipped_reason = "not enough points for polygon"
            return result

        result.feature = feature
        result.outline_points = len(geometry.outline)
        return result

    except CurvedArrowError as e:
        result.error = str(e)
        result.error_type = type(e).__name__
        result.traceback = traceback.format_exc()
        return result
    finally:
        result.duration_ms = (time.time() - start_time) * 1000


class ArrowProcessor:
    """Orchestrates export of saved arrows to GeoJSON.

    Manages the complete workflow:
    1. Load the arrow document
    2. Project, flatten and outline every arrow
    3. Collect results and update statistics
    4. Write a FeatureCollection

    Example:
        settings = CurvedArrowSettings()
        processor = ArrowProcessor(settings)
        stats = processor.process(
            input_path=Path("arrows.json"),
            output_path=Path("arrows.geojson"),
        )
    """

    def __init__(self, config: CurvedArrowSettings, quiet: bool = False) -> None:
        """Initialize the processor with configuration.

        Args:
            config: Application settings
            quiet: Suppress console log output except errors
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=quiet,
        )
        self.processing_logger = ProcessingLogger(self.logger)

    def export_arrows(
        self,
        documents: Iterable[ArrowDocument],
        stats: ProcessingStats,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> list[dict[str, Any]]:
        """Export arrows one by one.

        Args:
            documents: Saved arrows
            stats: Statistics object to update
            progress_callback: Optional callback(completed, total, arrow_name, success)

        Returns:
            GeoJSON features of the arrows that produced an outline
        """
        arrows = list(documents)
        total = len(arrows)
        features: list[dict[str, Any]] = []

        for completed, document in enumerate(arrows, start=1):
            self.processing_logger.log_arrow_start(document.name, len(document.anchors))
            result = process_arrow(document, self.config)
            success = False

            if result.segment_count:
                self.processing_logger.log_centerline(
                    document.name,
                    segment_count=result.segment_count,
                    sample_count=result.centerline_samples,
                    total_length=result.total_length,
                )

            if result.feature is not None:
                success = True
                features.append(result.feature)
                self.processing_logger.log_arrow_complete(
                    arrow_name=document.name,
                    outline_points=result.outline_points,
                    duration_ms=result.duration_ms,
                )
                stats.processed_count += 1
                stats.outline_points += result.outline_points
                stats.arrow_timings_ms.append(result.duration_ms)
            elif result.error is not None:
                self.processing_logger.log_arrow_error(
                    arrow_name=document.name,
                    error=result.error,
                    error_type=result.error_type or CurvedArrowError.__name__,
                    traceback=result.traceback,
                )
                stats.error_count += 1
                stats.errors.append((document.name, result.error))
            else:
                self.processing_logger.log_arrow_skipped(document.name, result.skipped_reason or "no outline")
                stats.skipped_count += 1

            if progress_callback is not None:
                progress_callback(completed, total, document.name, success)

        return features

    def process(
        self,
        input_path: Path,
        output_path: Path | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> ProcessingStats:
        """Export every arrow of a document to a GeoJSON FeatureCollection.

        Args:
            input_path: Arrow document (JSON)
            output_path: GeoJSON output path (next to the input if None)
            progress_callback: Optional callback(completed, total, arrow_name, success)

        Returns:
            ProcessingStats with counts, timing and error details

        Raises:
            FileNotFoundError: If the input file does not exist
            ArrowLoadError: If the input cannot be parsed
            ArrowSaveError: If the output cannot be written
        """
        stats = ProcessingStats()
        stats.start_time = time.time()

        if output_path is None:
            output_path = get_geojson_path(input_path)

        self.logger.info(
            "Starting arrow export",
            input=str(input_path),
            output=str(output_path),
        )

        with ArrowReader(input_path) as reader:
            self.logger.info("Arrows loaded", arrow_count=reader.arrow_count)
            features = self.export_arrows(reader.iter_arrows(), stats, progress_callback)

        write_geojson(output_path, features_to_collection(features))

        stats.end_time = time.time()

        self.logger.info(
            "Export complete",
            processed=stats.processed_count,
            skipped=stats.skipped_count,
            errors=stats.error_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return stats
