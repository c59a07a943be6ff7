"""Document I/O layer for particlizer.

This module handles reading SVG documents and writing particle output.
It provides a clean abstraction layer between file formats and the
domain models.

Key responsibilities:
- Parse SVG markup into flattened outlines fitted to the canvas
- Export particles as JSON, SVG or PNG

Key classes:
- SvgImporter: Load SVG documents as outlines
- ParticleWriter: Save particle sets
"""

from particlizer.io.importer import FitTransform, SvgImporter, ViewBox
from particlizer.io.writer import ParticleWriter

__all__ = [
    "FitTransform",
    "ParticleWriter",
    "SvgImporter",
    "ViewBox",
]
