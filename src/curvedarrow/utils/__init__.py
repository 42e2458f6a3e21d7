"""Utility functions for curvedarrow.

This module provides utility functions including:

- Logging setup and configuration
- Export statistics and progress reporting helpers
"""

from curvedarrow.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
]
