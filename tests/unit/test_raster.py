"""Unit tests for mask rasterization."""

import numpy as np
import pytest

from particlizer.core.raster import MaskRasterizer, rasterize_mask
from particlizer.domain import Ellipse, FreehandPath, Point, Rect, VectorOutline
from particlizer.exceptions import ShapeTypeError


def _square(x0, y0, x1, y1):
    return [Point(x0, y0), Point(x1, y0), Point(x1, y1), Point(x0, y1)]


class TestRectFill:
    """Tests for rectangle fills."""

    def test_pixel_centers(self):
        """Test a rectangle covers exactly the pixels whose centers it contains."""
        mask = rasterize_mask([Rect(2, 3, 4, 5)], 10, 10)
        assert mask.shape == (10, 10)
        assert mask.dtype == bool
        assert mask[3:8, 2:6].all()
        assert mask.sum() == 20

    def test_negative_extent_matches_normalized(self):
        """Test a rectangle with negative width/height fills like its normal form."""
        a = rasterize_mask([Rect(6, 8, -4, -5)], 10, 10)
        b = rasterize_mask([Rect(2, 3, 4, 5)], 10, 10)
        assert np.array_equal(a, b)

    def test_clipped_to_raster(self):
        """Test a rectangle hanging off the raster is clipped."""
        mask = rasterize_mask([Rect(-5, -5, 10, 10)], 10, 10)
        assert mask[0:5, 0:5].all()
        assert mask.sum() == 25

    def test_half_integer_edges(self):
        """Test centers on the start edge are inside and on the end edge outside."""
        mask = rasterize_mask([Rect(0.5, 0, 1, 1)], 4, 4)
        assert mask[0, 0]
        assert mask.sum() == 1

    def test_fractional_extent(self):
        """Test a fractional rectangle covers only pixels whose centers it contains."""
        mask = rasterize_mask([Rect(0.6, 0.2, 2.0, 0.2)], 4, 4)
        assert not mask.any()
        mask = rasterize_mask([Rect(0.6, 0.2, 2.0, 0.4)], 4, 4)
        assert mask[0, 1:3].all()
        assert mask.sum() == 2

    def test_outside_raster(self):
        """Test a rectangle fully outside the raster fills nothing."""
        assert not rasterize_mask([Rect(50, 50, 10, 10)], 10, 10).any()


class TestEllipseFill:
    """Tests for ellipse fills."""

    def test_center_and_corners(self):
        """Test the center is filled and bounding box corners are not."""
        mask = rasterize_mask([Ellipse(0, 0, 20, 10)], 20, 10)
        assert mask[5, 10]
        assert not mask[0, 0]
        assert not mask[9, 19]

    def test_area(self):
        """Test filled area approximates pi * rx * ry."""
        mask = rasterize_mask([Ellipse(0, 0, 40, 20)], 40, 20)
        assert abs(int(mask.sum()) - np.pi * 20 * 10) < 30

    def test_symmetric(self):
        """Test a centered ellipse is mirror symmetric."""
        mask = rasterize_mask([Ellipse(0, 0, 20, 12)], 20, 12)
        assert np.array_equal(mask, mask[::-1, :])
        assert np.array_equal(mask, mask[:, ::-1])


class TestPolygonFill:
    """Tests for freehand paths and vector outlines."""

    def test_freehand_path(self):
        """Test a freehand path is filled as a closed polygon."""
        mask = rasterize_mask([FreehandPath(points=tuple(_square(2, 2, 8, 8)))], 10, 10)
        assert mask[5, 5]
        assert not mask[0, 0]
        assert not mask[9, 9]

    def test_open_triangle_is_closed(self):
        """Test an open triangle gets its implicit closing edge."""
        triangle = FreehandPath(points=(Point(0, 0), Point(20, 0), Point(0, 20)))
        mask = rasterize_mask([triangle], 20, 20)
        assert mask[3, 3]
        assert not mask[18, 18]

    def test_outline_union(self):
        """Test every outline of a VectorOutline is filled."""
        outline = VectorOutline(paths=[_square(1, 1, 5, 5), _square(12, 12, 18, 18)])
        mask = rasterize_mask([outline], 20, 20)
        assert mask[3, 3]
        assert mask[15, 15]
        assert not mask[9, 9]

    def test_nested_outlines_do_not_cut_holes(self):
        """Test an inner outline adds to the fill instead of subtracting."""
        outline = VectorOutline(paths=[_square(0, 0, 19, 19), _square(5, 5, 14, 14)])
        mask = rasterize_mask([outline], 20, 20)
        assert mask[10, 10]


class TestMaskRasterizer:
    """Tests for MaskRasterizer behaviour across shape lists."""

    def test_union_is_monotonic(self):
        """Test adding shapes never clears interior pixels."""
        shapes = [
            Rect(0, 0, 8, 8),
            Ellipse(5, 5, 10, 6),
            FreehandPath(points=tuple(_square(12, 2, 18, 10))),
            VectorOutline(paths=[_square(2, 12, 9, 19)]),
            Rect(6, 6, 2, 2),
        ]
        previous = np.zeros((20, 20), dtype=bool)
        for count in range(1, len(shapes) + 1):
            mask = rasterize_mask(shapes[:count], 20, 20)
            assert not (previous & ~mask).any()
            previous = mask

    def test_degenerate_shapes_skipped(self):
        """Test degenerate shapes contribute nothing and are reported."""
        skipped = []
        shapes = [
            Rect(2, 2, 0, 5),
            Ellipse(2, 2, 5, 0),
            FreehandPath(points=(Point(0, 0), Point(5, 5))),
            VectorOutline(paths=[[Point(0, 0), Point(9, 9)]]),
        ]
        mask = MaskRasterizer(10, 10).rasterize(
            shapes, on_skip=lambda index, kind, reason: skipped.append((index, kind))
        )
        assert not mask.any()
        assert skipped == [(0, "rect"), (1, "ellipse"), (2, "path"), (3, "outline")]

    def test_unknown_shape_type(self):
        """Test objects that are not shapes are rejected."""
        with pytest.raises(ShapeTypeError):
            rasterize_mask([Rect(0, 0, 2, 2), "circle"], 10, 10)

    def test_zero_size_raster(self):
        """Test an empty raster yields an empty mask."""
        mask = rasterize_mask([Rect(0, 0, 5, 5)], 0, 0)
        assert mask.shape == (0, 0)

    def test_negative_size(self):
        """Test negative raster sizes are rejected."""
        with pytest.raises(ValueError):
            MaskRasterizer(-1, 10)
