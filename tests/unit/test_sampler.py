"""Unit tests for edge-biased particle sampling."""

import numpy as np
import pytest

from particlizer.config import SamplingConfig
from particlizer.core.distance import chamfer_distance
from particlizer.core.raster import rasterize_mask
from particlizer.core.sampler import ParticleSampler, sampling_box
from particlizer.domain import Ellipse, FreehandPath, Point, Rect


def _field(shapes, width, height):
    mask = rasterize_mask(shapes, width, height)
    return mask, chamfer_distance(mask)


def _inside(box, point):
    x, y, w, h = box
    return x <= point.x <= x + w and y <= point.y <= y + h


class TestSamplingBox:
    """Tests for sampling_box."""

    def test_normalized(self):
        """Test boxes are normalized."""
        assert sampling_box(Rect(10, 10, -4, -2)) == (6, 8, 4, 2)

    def test_degenerate(self):
        """Test degenerate shapes have no sampling box."""
        assert sampling_box(Rect(0, 0, 0, 5)) is None
        assert sampling_box(FreehandPath(points=(Point(0, 0), Point(1, 1)))) is None

    def test_collinear_path(self):
        """Test a path with a zero-area box has no sampling box."""
        path = FreehandPath(points=(Point(0, 0), Point(5, 0), Point(9, 0)))
        assert sampling_box(path) is None


class TestAcceptance:
    """Tests for the acceptance curve."""

    def test_edge_and_far_values(self):
        """Test acceptance equals edge_bias at the edge and 0 beyond the radius."""
        sampler = ParticleSampler(SamplingConfig(edge_bias=0.6, edge_falloff=2.0))
        values = sampler.acceptance(np.array([0.0, 5.0, 10.0, 50.0]), 10.0)
        assert values == pytest.approx([0.6, 0.15, 0.0, 0.0])

    def test_edge_radius(self):
        """Test the radius is a fraction of the larger raster side."""
        sampler = ParticleSampler(SamplingConfig())
        assert sampler.edge_radius(800, 600) == pytest.approx(80.0)


class TestParticleSampler:
    """Tests for ParticleSampler.sample."""

    def test_count_never_exceeds_target(self):
        """Test the result never holds more than target_count particles."""
        mask, dist = _field([Rect(10, 10, 60, 40)], 80, 60)
        for bias in (0.0, 0.3, 1.0, 2.0):
            config = SamplingConfig(target_count=300, edge_bias=bias, seed=1)
            particles = ParticleSampler(config).sample(mask, dist, [Rect(10, 10, 60, 40)])
            assert len(particles) <= 300
            assert len(particles) == particles.edge_count + particles.fallback_count

    def test_zero_target(self):
        """Test a zero target returns an empty set without sampling."""
        mask, dist = _field([Rect(0, 0, 10, 10)], 10, 10)
        particles = ParticleSampler(SamplingConfig(target_count=0)).sample(mask, dist)
        assert len(particles) == 0
        assert particles.attempts == 0

    def test_edge_points_are_interior(self):
        """Test every edge-phase particle lies on an interior pixel center."""
        shapes = [Ellipse(10, 10, 60, 40), Rect(50, 5, 20, 50)]
        mask, dist = _field(shapes, 80, 60)
        config = SamplingConfig(target_count=500, edge_bias=1.0, edge_falloff=1.0, seed=3)
        particles = ParticleSampler(config).sample(mask, dist, shapes)
        assert particles.edge_count > 0
        for p in particles.edge_points:
            assert mask[int(p.y), int(p.x)]
            assert p.x % 1 == 0.5
            assert p.y % 1 == 0.5

    def test_zero_bias_uses_fallback(self):
        """Test edge_bias 0 accepts nothing and the fallback fills the quota."""
        shapes = [Rect(10, 10, 30, 20)]
        mask, dist = _field(shapes, 50, 40)
        config = SamplingConfig(target_count=50, edge_bias=0.0, attempts_per_particle=2, seed=5)
        particles = ParticleSampler(config).sample(mask, dist, shapes)
        assert particles.edge_count == 0
        assert particles.fallback_count == 50
        assert particles.attempts == 100
        assert all(_inside((10, 10, 30, 20), p) for p in particles)

    def test_fallback_quota_split_evenly(self):
        """Test the fallback gives each usable shape an equal share."""
        shapes = [Rect(0, 0, 10, 10), Rect(20, 20, 10, 10)]
        mask, dist = _field(shapes, 40, 40)
        config = SamplingConfig(target_count=10, edge_bias=0.0, attempts_per_particle=1, seed=2)
        particles = ParticleSampler(config).sample(mask, dist, shapes)
        fallback = particles.fallback_points
        assert len(fallback) == 10
        assert all(_inside((0, 0, 10, 10), p) for p in fallback[:5])
        assert all(_inside((20, 20, 10, 10), p) for p in fallback[5:])

    def test_fallback_quota_rounds_up(self):
        """Test an uneven remainder still reaches the target."""
        shapes = [Rect(0, 0, 10, 10), Rect(20, 0, 10, 10), Rect(0, 20, 10, 10)]
        mask, dist = _field(shapes, 40, 40)
        config = SamplingConfig(target_count=7, edge_bias=0.0, attempts_per_particle=1, seed=2)
        particles = ParticleSampler(config).sample(mask, dist, shapes)
        assert particles.fallback_count == 7
        assert sum(_inside((0, 0, 10, 10), p) for p in particles) == 3
        assert sum(_inside((20, 0, 10, 10), p) for p in particles) == 3
        assert sum(_inside((0, 20, 10, 10), p) for p in particles) == 1

    def test_fallback_skips_degenerate_shapes(self):
        """Test degenerate shapes receive no fallback particles."""
        shapes = [Rect(0, 0, 0, 10), Rect(10, 10, 5, 5)]
        mask, dist = _field(shapes, 20, 20)
        config = SamplingConfig(target_count=20, edge_bias=0.0, attempts_per_particle=1, seed=4)
        particles = ParticleSampler(config).sample(mask, dist, shapes)
        assert len(particles) == 20
        assert all(_inside((10, 10, 5, 5), p) for p in particles)

    def test_shorter_when_exhausted(self):
        """Test an empty mask without shapes yields fewer particles, not an error."""
        mask, dist = _field([], 30, 30)
        config = SamplingConfig(target_count=25, attempts_per_particle=3, seed=0)
        particles = ParticleSampler(config).sample(mask, dist, [])
        assert len(particles) == 0
        assert particles.attempts == 75

    def test_higher_bias_accepts_more(self):
        """Test the edge phase accepts more candidates as edge_bias grows."""
        shapes = [Rect(20, 20, 60, 60)]
        mask, dist = _field(shapes, 100, 100)
        counts = []
        for bias in (0.2, 0.5, 0.8):
            config = SamplingConfig(
                target_count=200, edge_bias=bias, edge_falloff=1.0, attempts_per_particle=5
            )
            sampler = ParticleSampler(config, rng=np.random.default_rng(11))
            counts.append(sampler.sample(mask, dist).edge_count)
        assert counts[0] < counts[1] < counts[2] < 200

    def test_seed_reproducible(self):
        """Test equal seeds give equal particle sets."""
        shapes = [Ellipse(5, 5, 50, 30)]
        mask, dist = _field(shapes, 60, 40)
        config = SamplingConfig(target_count=200, seed=42)
        a = ParticleSampler(config).sample(mask, dist, shapes)
        b = ParticleSampler(config).sample(mask, dist, shapes)
        assert a.points == b.points

    def test_shape_mismatch(self):
        """Test mask and distance field must agree in shape."""
        sampler = ParticleSampler(SamplingConfig())
        with pytest.raises(ValueError, match="does not match"):
            sampler.sample(np.zeros((4, 4), dtype=bool), np.zeros((4, 5)))
