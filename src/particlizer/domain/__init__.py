"""Domain models for particlizer.

This module contains the shape variants that make up a document and the
particle set produced from them. Shapes are:

- Immutable where possible (using frozen dataclasses)
- Serializable to plain dictionaries for scene files
- Independent of rasterization and file format details

Key classes:
- Point: A 2D point in canvas space
- Rect, Ellipse, FreehandPath, VectorOutline: Shape variants
- ParticleSet: Output of a generation cycle
"""

from particlizer.domain.particles import ParticleSet
from particlizer.domain.shapes import (
    BoundingBox,
    Ellipse,
    FreehandPath,
    Point,
    Rect,
    Shape,
    VectorOutline,
    ensure_shape,
    shape_from_dict,
)

__all__: list[str] = [
    "BoundingBox",
    # Shape variants
    "Ellipse",
    "FreehandPath",
    "ParticleSet",
    "Point",
    "Rect",
    "Shape",
    "VectorOutline",
    "ensure_shape",
    "shape_from_dict",
]
