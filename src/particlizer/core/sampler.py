"""Edge-biased particle sampling.

Particles are drawn in two phases:

1. Rejection sampling over the raster. An interior candidate pixel at
   distance ``d`` from the nearest edge is accepted with probability
   ``edge_bias * max(0, 1 - min(d, r) / r) ** edge_falloff``, where ``r`` is
   the edge influence radius (10% of the larger raster side by default).
2. Fallback. If the attempt budget runs out before the target is met, the
   remaining quota is spread evenly over the shapes and drawn uniformly from
   each shape's bounding box.
"""

import logging
import math
from collections.abc import Sequence
from typing import ClassVar

import numpy as np

from particlizer.config import SamplingConfig
from particlizer.domain import BoundingBox, ParticleSet, Point, Shape
from particlizer.domain.shapes import ensure_shape

logger = logging.getLogger(__name__)


def sampling_box(shape: Shape) -> BoundingBox | None:
    """Normalized bounding box used by the fallback, or None if it has no area."""
    if ensure_shape(shape).is_degenerate():
        return None
    box = shape.bounding_box()
    if box is None or box[2] <= 0 or box[3] <= 0:
        return None
    return box


class ParticleSampler:
    """Draws particles from a mask with density biased toward edges.

    Example:
        sampler = ParticleSampler(SamplingConfig(target_count=1000), rng)
        particles = sampler.sample(mask, chamfer_distance(mask), shapes)
    """

    # Rejection-sampling candidates drawn per numpy batch
    BATCH_SIZE: ClassVar[int] = 4096

    def __init__(
        self,
        config: SamplingConfig,
        rng: np.random.Generator | None = None,
    ) -> None:
        """Initialize the sampler.

        Args:
            config: Sampling parameters
            rng: Random generator (default: seeded from config.seed)
        """
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng(config.seed)

    def edge_radius(self, width: int, height: int) -> float:
        """Distance from the edge beyond which the acceptance curve is flat."""
        return max(width, height) * self.config.edge_radius_fraction

    def acceptance(self, distances: np.ndarray, max_consider: float) -> np.ndarray:
        """Acceptance probability for interior pixels at the given distances.

        Args:
            distances: Distance-to-edge values in pixels
            max_consider: Edge influence radius in pixels

        Returns:
            Array of probabilities (values above 1 always accept)
        """
        d = np.minimum(distances, max_consider)
        edge_factor = 1.0 - d / max_consider
        return self.config.edge_bias * np.maximum(0.0, edge_factor) ** self.config.edge_falloff

    def sample(
        self,
        mask: np.ndarray,
        distance_field: np.ndarray,
        shapes: Sequence[Shape] = (),
    ) -> ParticleSet:
        """Sample up to ``target_count`` particles.

        Args:
            mask: Boolean (height, width) interior mask
            distance_field: Distance field of the same shape as mask
            shapes: Shapes used for the fallback phase

        Returns:
            ParticleSet with edge-biased points first, then fallback points.
            It is shorter than requested only when both phases are exhausted.
        """
        if mask.shape != distance_field.shape:
            raise ValueError(
                f"Mask shape {mask.shape} does not match distance field {distance_field.shape}"
            )

        target = self.config.target_count
        result = ParticleSet()
        if target == 0:
            return result

        edge_points, attempts = self._sample_edges(mask, distance_field, target)
        result.points.extend(edge_points)
        result.edge_count = len(edge_points)
        result.attempts = attempts

        if len(result.points) < target:
            fallback = self._sample_fallback(shapes, target - len(result.points))
            result.points.extend(fallback)
            result.fallback_count = len(fallback)

        logger.debug(
            "Sampled %d edge and %d fallback particles in %d attempts",
            result.edge_count,
            result.fallback_count,
            result.attempts,
        )
        return result

    def _sample_edges(
        self, mask: np.ndarray, distance_field: np.ndarray, target: int
    ) -> tuple[list[Point], int]:
        height, width = mask.shape
        if mask.size == 0:
            return [], 0

        max_consider = self.edge_radius(width, height)
        budget = target * self.config.attempts_per_particle
        attempts = 0
        xs_accepted: list[np.ndarray] = []
        ys_accepted: list[np.ndarray] = []
        accepted = 0

        while accepted < target and attempts < budget:
            n = min(budget - attempts, max(self.BATCH_SIZE, (target - accepted) * 4))
            xs = self.rng.integers(0, width, size=n)
            ys = self.rng.integers(0, height, size=n)
            draws = self.rng.random(n)

            inside = mask[ys, xs]
            probability = np.zeros(n, dtype=np.float64)
            probability[inside] = self.acceptance(distance_field[ys[inside], xs[inside]], max_consider)
            hits = np.flatnonzero(inside & (draws < probability))

            needed = target - accepted
            if len(hits) >= needed:
                hits = hits[:needed]
                attempts += int(hits[-1]) + 1
            else:
                attempts += n

            xs_accepted.append(xs[hits])
            ys_accepted.append(ys[hits])
            accepted += len(hits)

        if not xs_accepted:
            return [], attempts

        px = np.concatenate(xs_accepted) + 0.5
        py = np.concatenate(ys_accepted) + 0.5
        return [Point(float(x), float(y)) for x, y in zip(px, py, strict=True)], attempts

    def _sample_fallback(self, shapes: Sequence[Shape], remaining: int) -> list[Point]:
        boxes = [box for box in (sampling_box(s) for s in shapes) if box is not None]
        if not boxes:
            logger.debug("No usable shapes for fallback sampling (%d requested)", remaining)
            return []

        quota = math.ceil(remaining / len(boxes))
        points: list[Point] = []
        for x, y, w, h in boxes:
            take = min(quota, remaining - len(points))
            if take <= 0:
                break
            xs = x + self.rng.random(take) * w
            ys = y + self.rng.random(take) * h
            points.extend(Point(float(px), float(py)) for px, py in zip(xs, ys, strict=True))
        return points
