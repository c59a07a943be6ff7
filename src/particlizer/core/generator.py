"""Particle generation orchestration.

This module runs one full generation cycle:

1. Snapshot and normalize the shape list
2. Rasterize the shapes into an interior mask
3. Compute the chamfer distance field over the mask
4. Sample edge-biased particles, falling back to per-shape box sampling

Each call allocates its own mask and distance field and discards them on
return; only the ParticleSet outlives the call.
"""

import time
from collections.abc import Iterable

import numpy as np
import structlog

from particlizer.config import ParticlizerSettings, SamplingConfig
from particlizer.core.distance import chamfer_distance
from particlizer.core.raster import MaskRasterizer
from particlizer.core.sampler import ParticleSampler
from particlizer.domain import Ellipse, ParticleSet, Rect, Shape
from particlizer.domain.shapes import ensure_shape
from particlizer.utils import GenerationLogger, GenerationStats


def normalize_shapes(shapes: Iterable[Shape]) -> tuple[Shape, ...]:
    """Take an immutable snapshot with rectangles and ellipses normalized.

    Raises:
        ShapeTypeError: If any element is not a shape variant
    """
    snapshot = []
    for shape in shapes:
        shape = ensure_shape(shape)
        if isinstance(shape, (Rect, Ellipse)):
            shape = shape.normalized()
        snapshot.append(shape)
    return tuple(snapshot)


class ParticleGenerator:
    """Turns a shape snapshot into an edge-biased particle set.

    The generator holds no shape state; callers pass the shape list and the
    raster size explicitly on every call.

    Example:
        generator = ParticleGenerator(ParticlizerSettings())
        particles = generator.generate([Rect(0, 0, 100, 100)], 100, 100)
        stats = generator.stats
    """

    def __init__(
        self,
        config: ParticlizerSettings,
        logger: structlog.stdlib.BoundLogger | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            config: Particlizer settings (sampling section is used)
            logger: Structured logger (default: the "particlizer" logger)
            rng: Random generator shared across calls (default: seeded from
                config.sampling.seed)
        """
        self.config = config
        self.logger = logger if logger is not None else structlog.get_logger("particlizer")
        self.generation_logger = GenerationLogger(self.logger)
        self.rng = rng if rng is not None else np.random.default_rng(config.sampling.seed)

    def generate(
        self,
        shapes: Iterable[Shape],
        width: int,
        height: int,
        sampling: SamplingConfig | None = None,
    ) -> ParticleSet:
        """Run one generation cycle.

        Args:
            shapes: Shapes in canvas coordinates
            width: Raster width in pixels
            height: Raster height in pixels
            sampling: Overrides the configured sampling parameters

        Returns:
            Particles in canvas coordinates, at most sampling.target_count

        Raises:
            ShapeTypeError: If shapes contains something other than a shape
        """
        sampling = sampling if sampling is not None else self.config.sampling
        snapshot = normalize_shapes(shapes)

        self.generation_logger.reset()
        stats = self.generation_logger.stats
        stats.start_time = time.time()
        self.generation_logger.log_generation_start(
            len(snapshot), width, height, sampling.target_count
        )

        mask_start = time.time()
        mask = MaskRasterizer(width, height).rasterize(
            snapshot, on_skip=self.generation_logger.log_shape_skipped
        )
        distance_field = chamfer_distance(mask)
        self.generation_logger.log_mask(
            int(np.count_nonzero(mask)), (time.time() - mask_start) * 1000
        )

        sampler = ParticleSampler(sampling, rng=self.rng)
        particles = sampler.sample(mask, distance_field, snapshot)
        self.generation_logger.log_sampling(
            particles.edge_count, particles.fallback_count, particles.attempts
        )

        stats.end_time = time.time()
        self.generation_logger.log_generation_complete(stats.duration_seconds * 1000)
        return particles

    @property
    def stats(self) -> GenerationStats:
        """Statistics of the most recent generation cycle."""
        return self.generation_logger.stats
