"""Configuration management for curvedarrow.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- FlattenConfig: Bezier flattening and tangent fallback settings
- OutlineConfig: Outline assembly settings
- ExportConfig: Densification and projection settings for export
- LoggingConfig: Logging settings
- CurvedArrowSettings: Main application settings
"""

from curvedarrow.config.settings import (
    CurvedArrowSettings,
    ExportConfig,
    FlattenConfig,
    LoggingConfig,
    OutlineConfig,
    get_default_settings,
)

__all__ = [
    "CurvedArrowSettings",
    "ExportConfig",
    "FlattenConfig",
    "LoggingConfig",
    "OutlineConfig",
    "get_default_settings",
]
