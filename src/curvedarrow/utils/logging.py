"""Logging utilities for Curvedarrow."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Marker attribute on handlers installed by configure_logging
_HANDLER_MARKER = "_curvedarrow_handler"


@dataclass
class ProcessingStats:
    """Statistics from an export run."""

    processed_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    outline_points: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    arrow_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_arrow_time_ms(self) -> float | None:
        if not self.arrow_timings_ms:
            return None
        return sum(self.arrow_timings_ms) / len(self.arrow_timings_ms)

    @property
    def min_arrow_time_ms(self) -> float | None:
        return min(self.arrow_timings_ms) if self.arrow_timings_ms else None

    @property
    def max_arrow_time_ms(self) -> float | None:
        return max(self.arrow_timings_ms) if self.arrow_timings_ms else None


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Handlers installed by a previous call are replaced, so configuring twice
    does not duplicate output.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        setattr(file_handler, _HANDLER_MARKER, True)
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    setattr(console_handler, _HANDLER_MARKER, True)
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("curvedarrow")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file is not None else None,
        level=file_level,
    )

    return logger


class ProcessingLogger:
    """Logger for tracking export progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_arrow_start(self, arrow_name: str, anchor_count: int) -> None:
        """Log start of arrow processing."""
        self._logger.debug("Processing arrow", arrow=arrow_name, anchors=anchor_count)

    def log_arrow_complete(
        self,
        arrow_name: str,
        outline_points: int,
        duration_ms: float,
    ) -> None:
        """Log successful arrow export."""
        self._logger.info(
            "Arrow exported",
            arrow=arrow_name,
            points=outline_points,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        self._stats.outline_points += outline_points
        self._stats.arrow_timings_ms.append(duration_ms)

    def log_arrow_skipped(self, arrow_name: str, reason: str) -> None:
        """Log skipped arrow."""
        self._logger.debug("Arrow skipped", arrow=arrow_name, reason=reason)
        self._stats.skipped_count += 1

    def log_arrow_error(
        self,
        arrow_name: str,
        error: str,
        error_type: str,
        traceback: str | None = None,
    ) -> None:
        """Log arrow processing error.

        Args:
            arrow_name: Arrow that failed
            error: Error message
            error_type: Class name of the exception that was raised
            traceback: Formatted traceback, if captured
        """
        self._logger.error(
            "Arrow export failed",
            arrow=arrow_name,
            error=error,
            error_type=error_type,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((arrow_name, error))

    def log_centerline(
        self,
        arrow_name: str,
        segment_count: int,
        sample_count: int,
        total_length: float,
    ) -> None:
        """Log centerline flattening results."""
        self._logger.debug(
            "Centerline built",
            arrow=arrow_name,
            segments=segment_count,
            samples=sample_count,
            length=round(total_length, 3),
        )

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
