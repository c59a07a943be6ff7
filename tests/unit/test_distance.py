"""Unit tests for the chamfer distance transform."""

import math

import numpy as np

from particlizer.core.distance import SQRT2, chamfer_distance
from particlizer.core.raster import rasterize_mask
from particlizer.domain import Ellipse, Rect


def _sequential_chamfer(mask):
    """Pixel-by-pixel two-pass chamfer transform with an exterior border."""
    height, width = mask.shape
    d = [[0.0] * (width + 2) for _ in range(height + 2)]
    for y in range(height):
        for x in range(width):
            if mask[y, x]:
                d[y + 1][x + 1] = math.inf

    for y in range(1, height + 1):
        for x in range(1, width + 1):
            d[y][x] = min(
                d[y][x],
                d[y - 1][x] + 1,
                d[y][x - 1] + 1,
                d[y - 1][x - 1] + SQRT2,
                d[y - 1][x + 1] + SQRT2,
            )
    for y in range(height, 0, -1):
        for x in range(width, 0, -1):
            d[y][x] = min(
                d[y][x],
                d[y + 1][x] + 1,
                d[y][x + 1] + 1,
                d[y + 1][x + 1] + SQRT2,
                d[y + 1][x - 1] + SQRT2,
            )
    return np.array([row[1:-1] for row in d[1:-1]])


class TestChamferDistance:
    """Tests for chamfer_distance."""

    def test_exterior_is_zero(self):
        """Test every exterior pixel has distance exactly 0."""
        mask = rasterize_mask([Rect(5, 5, 20, 10), Ellipse(15, 12, 12, 12)], 40, 30)
        dist = chamfer_distance(mask)
        assert dist.shape == mask.shape
        assert (dist[~mask] == 0).all()
        assert (dist[mask] >= 1).all()

    def test_boundary_values(self):
        """Test interior pixels adjacent to the exterior lie in [1, sqrt(2)]."""
        mask = rasterize_mask([Ellipse(2, 3, 30, 20)], 36, 28)
        dist = chamfer_distance(mask)
        padded = np.pad(mask, 1, constant_values=False)
        height, width = mask.shape
        checked = 0
        for y in range(height):
            for x in range(width):
                if not mask[y, x]:
                    continue
                window = padded[y : y + 3, x : x + 3]
                if not window.all():
                    assert 1.0 <= dist[y, x] <= SQRT2 + 1e-12
                    checked += 1
        assert checked > 0

    def test_full_mask(self):
        """Test the raster border counts as exterior."""
        dist = chamfer_distance(np.ones((5, 5), dtype=bool))
        assert dist[2, 2] == 3.0
        assert dist[0, 0] == 1.0
        assert dist[0, 2] == 1.0

    def test_axis_distance_exact(self):
        """Test distances along a row of a wide strip are exact."""
        mask = np.zeros((3, 21), dtype=bool)
        mask[1, 1:20] = True
        dist = chamfer_distance(mask)
        assert dist[1, 1] == 1.0
        assert dist[1, 10] == 1.0

    def test_matches_sequential_sweep(self):
        """Test the vectorized sweep agrees with the pixel-by-pixel sweep."""
        rng = np.random.default_rng(7)
        mask = rng.random((17, 23)) < 0.8
        mask |= rasterize_mask([Rect(3, 3, 15, 10)], 23, 17)
        assert np.allclose(chamfer_distance(mask), _sequential_chamfer(mask))

    def test_matches_sequential_sweep_on_shapes(self):
        """Test agreement on a smooth shape with wide interior."""
        mask = rasterize_mask([Ellipse(1, 1, 30, 22), Rect(20, 5, 12, 20)], 34, 26)
        assert np.allclose(chamfer_distance(mask), _sequential_chamfer(mask))

    def test_empty_mask(self):
        """Test a mask without interior is all zeros."""
        dist = chamfer_distance(np.zeros((4, 6), dtype=bool))
        assert dist.shape == (4, 6)
        assert not dist.any()

    def test_zero_size(self):
        """Test a zero-size mask."""
        assert chamfer_distance(np.zeros((0, 5), dtype=bool)).shape == (0, 5)
