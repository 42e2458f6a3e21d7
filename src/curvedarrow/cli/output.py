"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for arrow export.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Curvedarrow[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_document_info(path: str, arrow_count: int, zoom: float | None) -> None:
    """Print arrow document information.

    Args:
        path: Path to the arrow document
        arrow_count: Number of arrows in the document
        zoom: Export zoom override (None = each arrow's base zoom)
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(path)
    console.print(line)
    zoom_str = f"zoom {zoom:g}" if zoom is not None else "base zoom"
    plural = "arrow" if arrow_count == 1 else "arrows"
    console.print(f"  {arrow_count:,} {plural} {SYM_DOT} {zoom_str}")


def print_arrow_table(rows: list[tuple[str, int, str]]) -> None:
    """Print a table of arrows.

    Args:
        rows: (name, anchor count, parameter summary) per arrow
    """
    table = Table(box=None, pad_edge=False, show_edge=False)
    table.add_column("Arrow", style="bold")
    table.add_column("Anchors", justify="right")
    table.add_column("Parameters")
    for name, anchor_count, summary in rows:
        table.add_row(name, str(anchor_count), summary)
    console.print(table)


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(
    output_path: str,
    file_size: str,
    total_time_s: float,
    processed: int,
    skipped: int,
    errors: int,
    outline_points: int,
    avg_time_ms: float | None = None,
    min_time_ms: float | None = None,
    max_time_ms: float | None = None,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        file_size: Human-readable file size string
        total_time_s: Total processing time in seconds
        processed: Number of arrows exported
        skipped: Number of arrows without a drawable outline
        errors: Number of errors encountered
        outline_points: Total number of exported outline points
        avg_time_ms: Average processing time per arrow in milliseconds
        min_time_ms: Minimum processing time per arrow in milliseconds
        max_time_ms: Maximum processing time per arrow in milliseconds
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line)

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {processed} arrows {SYM_DOT} {skipped} skipped {SYM_DOT} "
        f"{outline_points:,} points {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )

    if avg_time_ms is not None:
        timing_str = f"{avg_time_ms:.1f}ms avg"
        if min_time_ms is not None and max_time_ms is not None:
            timing_str += f" ({min_time_ms:.1f}-{max_time_ms:.1f}ms range)"
        console.print(f"  {timing_str}")


def print_errors(errors: list[tuple[str, str]]) -> None:
    """Print per-arrow errors collected during export.

    Args:
        errors: (arrow name, message) pairs
    """
    for name, message in errors:
        console.print(f"  [red]{SYM_ERR}[/red] {name}: {message}")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
