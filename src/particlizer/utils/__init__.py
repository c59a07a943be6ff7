"""Utility functions for particlizer.

This module provides utility functions including:

- Logging setup and configuration
- Generation statistics tracking
"""

from particlizer.utils.logging import (
    GenerationLogger,
    GenerationStats,
    configure_logging,
)

__all__ = [
    "GenerationLogger",
    "GenerationStats",
    "configure_logging",
]
