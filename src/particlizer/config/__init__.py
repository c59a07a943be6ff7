"""Configuration management for particlizer.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- SamplingConfig: Edge-biased sampling parameters
- ImportConfig: SVG import settings
- CanvasConfig: Raster dimensions
- SmoothingConfig: Freehand path smoothing
- ExportConfig: Particle rendering settings
- LoggingConfig: Logging settings
- ParticlizerSettings: Main application settings
"""

from particlizer.config.settings import (
    CanvasConfig,
    ExportConfig,
    ImportConfig,
    LoggingConfig,
    ParticlizerSettings,
    SamplingConfig,
    SmoothingConfig,
    get_default_settings,
)

__all__ = [
    "CanvasConfig",
    "ExportConfig",
    "ImportConfig",
    "LoggingConfig",
    "ParticlizerSettings",
    "SamplingConfig",
    "SmoothingConfig",
    "get_default_settings",
]
