"""CLI application entry point for curvedarrow.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from curvedarrow import __version__
from curvedarrow.cli.output import (
    SYM_DOT,
    SYM_OK,
    console,
    create_progress,
    print_arrow_table,
    print_document_info,
    print_error,
    print_errors,
    print_header,
    print_step,
    print_success,
)
from curvedarrow.config import CurvedArrowSettings, ExportConfig, LoggingConfig
from curvedarrow.core import process_arrow
from curvedarrow.core.processor import ArrowProcessor, export_zoom
from curvedarrow.domain import ArrowParameters
from curvedarrow.exceptions import ArrowLoadError, ArrowSaveError, CurvedArrowError
from curvedarrow.io import ArrowReader, get_geojson_path

# Create the Typer app
app = typer.Typer(
    name="curvedarrow",
    help="Export curved, tapered arrows drawn on a map as GeoJSON polygons.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Curvedarrow[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def export(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Path to a saved arrow document (JSON)",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}.geojson)",
        ),
    ] = None,
    zoom: Annotated[
        float | None,
        typer.Option(
            "--zoom",
            "-z",
            help="Zoom level of the export plane (default: each arrow's base zoom)",
            min=0.0,
            max=30.0,
        ),
    ] = None,
    centerline_step: Annotated[
        float,
        typer.Option(
            "--centerline-step",
            help="Maximum centerline step in pixels when densifying",
            min=0.01,
            max=1000.0,
        ),
    ] = 2.0,
    outline_step: Annotated[
        float,
        typer.Option(
            "--outline-step",
            help="Maximum outline edge length in pixels when densifying",
            min=0.01,
            max=1000.0,
        ),
    ] = 4.0,
    no_densify: Annotated[
        bool,
        typer.Option(
            "--no-densify",
            help="Export the flattened outline without re-sampling",
        ),
    ] = False,
    list_arrows: Annotated[
        bool,
        typer.Option(
            "--list",
            help="List the arrows in the document and exit",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Build every outline and report without writing output",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Export the arrows of a saved document as a GeoJSON FeatureCollection.

    Every arrow is projected to Web Mercator pixels, flattened into a
    centerline, outlined with its tapered shaft and head, and written back as
    a Polygon feature in longitude/latitude.

    Example:
        curvedarrow arrows.json

    This will create arrows.geojson next to the input.
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not input_file.exists():
        print_error(
            f"Input file not found: {input_file}",
            details=f"The file '{input_file}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_file.is_file():
        print_error(
            f"Input path is not a file: {input_file}",
            details="Please provide a path to a saved arrow JSON document.",
        )
        raise typer.Exit(code=1)

    if log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR"):
        print_error(
            f"Invalid log level: {log_level}",
            details="Valid values: DEBUG, INFO, WARNING, ERROR",
        )
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    # Create settings from CLI arguments
    settings = CurvedArrowSettings(
        export=ExportConfig(
            densify=not no_densify,
            centerline_max_segment_length=centerline_step,
            outline_max_segment_length=outline_step,
            zoom=zoom,
        ),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level.upper() if not verbose else "INFO",
        ),
    )

    try:
        if list_arrows:
            _handle_list(input_file, quiet)
            raise typer.Exit(code=0)

        if dry_run:
            _handle_dry_run(input_file, settings, quiet, verbose)
            raise typer.Exit(code=0)

        if not quiet:
            print_step("Loading arrows")

        with ArrowReader(input_file) as reader:
            arrow_count = reader.arrow_count

        if not quiet:
            print_document_info(str(input_file), arrow_count, zoom)

        if arrow_count == 0:
            if not quiet:
                console.print("\nNo arrows found. Nothing to export.")
            raise typer.Exit(code=0)

        actual_output_path = output if output is not None else get_geojson_path(input_file)
        processor = ArrowProcessor(settings, quiet=quiet)

        if not quiet:
            print_step("Exporting")
            with create_progress() as progress:
                task_id = progress.add_task(f"Exporting {arrow_count} arrows", total=arrow_count)

                def update_progress(completed: int, *_: object) -> None:
                    progress.update(task_id, completed=completed)

                stats = processor.process(
                    input_path=input_file,
                    output_path=actual_output_path,
                    progress_callback=update_progress,
                )
        else:
            stats = processor.process(input_path=input_file, output_path=actual_output_path)

        if not quiet:
            print_success(
                output_path=str(actual_output_path),
                file_size=_format_file_size(actual_output_path),
                total_time_s=stats.duration_seconds,
                processed=stats.processed_count,
                skipped=stats.skipped_count,
                errors=stats.error_count,
                outline_points=stats.outline_points,
                avg_time_ms=stats.avg_arrow_time_ms,
                min_time_ms=stats.min_arrow_time_ms,
                max_time_ms=stats.max_arrow_time_ms,
            )
            if verbose and stats.errors:
                print_errors(stats.errors)

    except ArrowLoadError as e:
        print_error(f"Could not load arrows: {e.reason}")
        raise typer.Exit(code=1)
    except ArrowSaveError as e:
        print_error(f"Could not save GeoJSON: {e.reason}")
        raise typer.Exit(code=1)
    except CurvedArrowError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _describe_parameters(params: ArrowParameters) -> str:
    """Summarize stored parameters for display."""

    def fmt(value: float | None) -> str:
        return "-" if value is None else f"{value:g}"

    summary = (
        f"rear {fmt(params.rear_width)} {SYM_DOT} neck {fmt(params.neck_width)} {SYM_DOT} "
        f"head {fmt(params.head_width)}x{fmt(params.head_length)}"
    )
    if params.base_zoom is not None:
        summary += f" @ z{params.base_zoom:g}"
    return summary


def _handle_list(input_path: Path, quiet: bool) -> None:
    """Handle --list mode.

    Args:
        input_path: Path to arrow document
        quiet: Suppress output
    """
    if not quiet:
        print_step("Loading arrows")

    with ArrowReader(input_path) as reader:
        rows = [
            (arrow.name, len(arrow.anchors), _describe_parameters(arrow.parameters))
            for arrow in reader.iter_arrows()
        ]

    if not quiet:
        console.print(f"\n[bold]{len(rows)} arrows[/bold]\n")
        print_arrow_table(rows)
    else:
        for name, _, _ in rows:
            console.print(name)


def _handle_dry_run(
    input_path: Path, settings: CurvedArrowSettings, quiet: bool, verbose: bool
) -> None:
    """Handle --dry-run mode.

    Args:
        input_path: Path to arrow document
        settings: Curvedarrow settings
        quiet: Suppress output
        verbose: Show per-arrow results
    """
    if not quiet:
        print_step("Loading arrows")

    with ArrowReader(input_path) as reader:
        documents = list(reader.iter_arrows())

    if not quiet:
        print_document_info(str(input_path), len(documents), settings.export.zoom)
        print_step("Building outlines (dry run)")

    drawable = 0
    total_points = 0
    lines: list[str] = []
    for document in documents:
        result = process_arrow(document, settings)
        zoom_str = f"z{export_zoom(document, settings):g}"
        if result.feature is not None:
            drawable += 1
            total_points += result.outline_points
            lines.append(f"  {document.name}: {result.outline_points} points {SYM_DOT} {zoom_str}")
        elif result.error is not None:
            lines.append(f"  {document.name}: [red]error[/red] {result.error}")
        else:
            lines.append(f"  {document.name}: skipped ({result.skipped_reason})")

    if not quiet:
        console.print("\n[bold]Analysis[/bold]\n")
        console.print(f"  Arrows             {len(documents)}")
        console.print(f"  Drawable           {drawable}")
        console.print(f"  Outline points     {total_points}")
        console.print(f"  Densify            {'on' if settings.export.densify else 'off'}")

        if verbose and lines:
            console.print("\n[bold]Arrows[/bold]")
            for line in lines:
                console.print(line)

        console.print(f"\n[bold green]{SYM_OK} Dry run complete[/bold green] - no file written")


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "12 KB")
    """
    try:
        size_bytes = path.stat().st_size
        if size_bytes < 1024:
            return f"{size_bytes} B"
        elif size_bytes < 1024 * 1024:
            return f"{size_bytes / 1024:.0f} KB"
        else:
            return f"{size_bytes / (1024 * 1024):.1f} MB"
    except OSError:
        return "unknown"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
