"""Binary interior mask rasterization.

Shapes are filled into a boolean numpy array of shape (height, width).
Rectangles and ellipses are filled by testing pixel centers; polygons
(freehand paths and imported outlines) are filled with Pillow's
non-antialiased polygon rasterizer. All fills are unioned.
"""

import logging
import math
from collections.abc import Callable, Iterable

import numpy as np
from PIL import Image, ImageDraw

from particlizer.domain import Ellipse, FreehandPath, Point, Rect, Shape, VectorOutline
from particlizer.exceptions import ShapeTypeError

logger = logging.getLogger(__name__)


def _pixel_span(start: float, length: float, limit: int) -> tuple[int, int]:
    """Pixel index range whose centers fall in [start, start + length)."""
    lo = math.ceil(start - 0.5)
    hi = math.ceil(start + length - 0.5)
    return max(lo, 0), min(hi, limit)


class MaskRasterizer:
    """Rasterizes a shape list into an interior mask.

    Example:
        rasterizer = MaskRasterizer(800, 600)
        mask = rasterizer.rasterize([Rect(10, 10, 100, 50)])
        mask.shape  # (600, 800)
    """

    def __init__(self, width: int, height: int) -> None:
        """Initialize the rasterizer.

        Args:
            width: Raster width in pixels
            height: Raster height in pixels
        """
        if width < 0 or height < 0:
            raise ValueError(f"Raster size must be non-negative, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)

    def rasterize(
        self,
        shapes: Iterable[Shape],
        on_skip: Callable[[int, str, str], None] | None = None,
    ) -> np.ndarray:
        """Fill every shape into a fresh all-exterior mask.

        Args:
            shapes: Shapes in canvas coordinates
            on_skip: Optional callback(index, kind, reason) for degenerate shapes

        Returns:
            Boolean array of shape (height, width), True for interior pixels

        Raises:
            ShapeTypeError: If a shape is not one of the shape variants
        """
        mask = np.zeros((self.height, self.width), dtype=bool)
        polygon_layer = Image.new("L", (self.width, self.height), 0)
        draw = ImageDraw.Draw(polygon_layer) if mask.size else None

        for index, shape in enumerate(shapes):
            if isinstance(shape, Rect):
                if shape.is_degenerate():
                    self._skip(on_skip, index, shape.kind, "zero extent")
                    continue
                self._fill_rect(mask, shape.normalized())
            elif isinstance(shape, Ellipse):
                if shape.is_degenerate():
                    self._skip(on_skip, index, shape.kind, "zero extent")
                    continue
                self._fill_ellipse(mask, shape)
            elif isinstance(shape, FreehandPath):
                if shape.is_degenerate():
                    self._skip(on_skip, index, shape.kind, "fewer than 3 points")
                    continue
                self._fill_polygon(draw, shape.points)
            elif isinstance(shape, VectorOutline):
                if shape.is_degenerate():
                    self._skip(on_skip, index, shape.kind, "no outline with 3 points")
                    continue
                for outline in shape.paths:
                    if len(outline) >= 3:
                        self._fill_polygon(draw, outline)
            else:
                raise ShapeTypeError(shape)

        if mask.size:
            mask |= np.asarray(polygon_layer, dtype=np.uint8) > 127
        return mask

    def _fill_rect(self, mask: np.ndarray, rect: Rect) -> None:
        x0, x1 = _pixel_span(rect.x, rect.w, self.width)
        y0, y1 = _pixel_span(rect.y, rect.h, self.height)
        if x0 < x1 and y0 < y1:
            mask[y0:y1, x0:x1] = True

    def _fill_ellipse(self, mask: np.ndarray, ellipse: Ellipse) -> None:
        n = ellipse.normalized()
        x0, x1 = _pixel_span(n.x, n.w, self.width)
        y0, y1 = _pixel_span(n.y, n.h, self.height)
        if x0 >= x1 or y0 >= y1:
            return

        center = n.center
        rx, ry = n.radii
        xs = (np.arange(x0, x1) + 0.5 - center.x) / rx
        ys = (np.arange(y0, y1) + 0.5 - center.y) / ry
        inside = ys[:, None] ** 2 + xs[None, :] ** 2 <= 1.0
        mask[y0:y1, x0:x1] |= inside

    @staticmethod
    def _fill_polygon(draw: ImageDraw.ImageDraw | None, points: Iterable[Point]) -> None:
        if draw is None:
            return
        draw.polygon([p.to_tuple() for p in points], fill=255)

    @staticmethod
    def _skip(
        on_skip: Callable[[int, str, str], None] | None, index: int, kind: str, reason: str
    ) -> None:
        logger.debug("Skipping degenerate %s shape at index %d: %s", kind, index, reason)
        if on_skip is not None:
            on_skip(index, kind, reason)


def rasterize_mask(shapes: Iterable[Shape], width: int, height: int) -> np.ndarray:
    """Rasterize shapes into a (height, width) boolean interior mask."""
    return MaskRasterizer(width, height).rasterize(shapes)
