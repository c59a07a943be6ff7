"""Core processing algorithms for particlizer.

This module contains the core algorithms for:

- Path flattening (SVG path data to polylines)
- Mask rasterization (shapes to a binary interior raster)
- Distance field computation (two-pass chamfer transform)
- Particle sampling (edge-biased rejection sampling with fallback)
- Polyline smoothing (Chaikin corner cutting)

All algorithms are synchronous and take their inputs explicitly; none of
them reads document or canvas state.

Key functions:
- parse_path_data: Split SVG path data into commands
- flatten_path_data: Parse and flatten SVG path data
- rasterize_mask: Fill shapes into a boolean mask
- chamfer_distance: Approximate distance-to-edge field
- chaikin_smooth: Corner-cutting smoothing

Key classes:
- PathFlattener: Flattens path commands into points
- MaskRasterizer: Rasterizes shape lists
- ParticleSampler: Draws edge-biased particles
- ParticleGenerator: Runs a complete generation cycle
- ShapeDocument: Session object holding the shape list
"""

from particlizer.core.distance import chamfer_distance
from particlizer.core.document import ShapeDocument
from particlizer.core.generator import ParticleGenerator, normalize_shapes
from particlizer.core.path import (
    PathCommand,
    PathFlattener,
    flatten_path_data,
    parse_path_data,
)
from particlizer.core.raster import MaskRasterizer, rasterize_mask
from particlizer.core.sampler import ParticleSampler, sampling_box
from particlizer.core.smoothing import chaikin_smooth

__all__ = [
    # Raster classes
    "MaskRasterizer",
    # Path classes
    "PathCommand",
    "PathFlattener",
    # Generation classes
    "ParticleGenerator",
    "ParticleSampler",
    "ShapeDocument",
    # Functions
    "chaikin_smooth",
    "chamfer_distance",
    "flatten_path_data",
    "normalize_shapes",
    "parse_path_data",
    "rasterize_mask",
    "sampling_box",
]
