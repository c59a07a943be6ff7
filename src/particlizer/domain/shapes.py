"""Shape types consumed by the particle pipeline.

This module defines the closed set of shape variants understood by the core:
- Point: A 2D point in canvas space
- Rect: Axis-aligned rectangle
- Ellipse: Axis-aligned ellipse given by its bounding box
- FreehandPath: Freehand polyline, filled as a closed contour
- VectorOutline: One or more flattened outlines imported from an SVG document

All geometry is expressed in canvas (world) coordinates, y pointing down.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar

from particlizer.exceptions import SceneFormatError, ShapeTypeError

BoundingBox = tuple[float, float, float, float]
"""Box as (x, y, width, height) with non-negative width and height."""


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D canvas space.

    Attributes:
        x: X coordinate in pixels
        y: Y coordinate in pixels
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary."""
        return cls(x=float(data["x"]), y=float(data["y"]))


def _points_bounds(points: list[Point] | tuple[Point, ...]) -> BoundingBox | None:
    if not points:
        return None
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    min_x, min_y = min(xs), min(ys)
    return (min_x, min_y, max(xs) - min_x, max(ys) - min_y)


def _box_contains(box: BoundingBox | None, x: float, y: float) -> bool:
    if box is None:
        return False
    bx, by, bw, bh = box
    return bx <= x <= bx + bw and by <= y <= by + bh


@dataclass(frozen=True, slots=True)
class Rect:
    """Axis-aligned rectangle with its origin at the top-left corner.

    Width and height may be negative while the user is still dragging;
    ``normalized()`` returns the equivalent box with non-negative extents.
    """

    kind: ClassVar[str] = "rect"

    x: float
    y: float
    w: float
    h: float

    def normalized(self) -> "Rect":
        """Return the same box with non-negative width and height."""
        x, w = (self.x + self.w, -self.w) if self.w < 0 else (self.x, self.w)
        y, h = (self.y + self.h, -self.h) if self.h < 0 else (self.y, self.h)
        return Rect(x, y, w, h)

    def is_degenerate(self) -> bool:
        """True when the box has no area."""
        return self.w == 0 or self.h == 0

    def bounding_box(self) -> BoundingBox:
        n = self.normalized()
        return (n.x, n.y, n.w, n.h)

    def contains_point(self, x: float, y: float) -> bool:
        return _box_contains(self.bounding_box(), x, y)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind, "x": self.x, "y": self.y, "w": self.w, "h": self.h}


@dataclass(frozen=True, slots=True)
class Ellipse:
    """Axis-aligned ellipse inscribed in the box (x, y, w, h)."""

    kind: ClassVar[str] = "ellipse"

    x: float
    y: float
    w: float
    h: float

    @property
    def center(self) -> Point:
        return Point(self.x + self.w / 2, self.y + self.h / 2)

    @property
    def radii(self) -> tuple[float, float]:
        return (abs(self.w) / 2, abs(self.h) / 2)

    def normalized(self) -> "Ellipse":
        """Return the same ellipse with a non-negative bounding box."""
        x, w = (self.x + self.w, -self.w) if self.w < 0 else (self.x, self.w)
        y, h = (self.y + self.h, -self.h) if self.h < 0 else (self.y, self.h)
        return Ellipse(x, y, w, h)

    def is_degenerate(self) -> bool:
        return self.w == 0 or self.h == 0

    def bounding_box(self) -> BoundingBox:
        n = self.normalized()
        return (n.x, n.y, n.w, n.h)

    def contains_point(self, x: float, y: float) -> bool:
        """Check if point lies inside the ellipse (boundary included)."""
        rx, ry = self.radii
        if not rx or not ry:
            return False
        c = self.center
        dx = (x - c.x) / rx
        dy = (y - c.y) / ry
        return dx * dx + dy * dy <= 1.0

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind, "x": self.x, "y": self.y, "w": self.w, "h": self.h}


@dataclass(frozen=True, slots=True)
class FreehandPath:
    """Freehand polyline drawn by the user.

    The path may be open; the rasterizer always fills it as a closed contour.
    """

    kind: ClassVar[str] = "path"

    points: tuple[Point, ...]

    def is_degenerate(self) -> bool:
        """Paths with fewer than 3 points enclose no area."""
        return len(self.points) < 3

    def bounding_box(self) -> BoundingBox | None:
        return _points_bounds(self.points)

    def contains_point(self, x: float, y: float) -> bool:
        """Hit test against the bounding box of the path."""
        return _box_contains(self.bounding_box(), x, y)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind, "points": [list(p.to_tuple()) for p in self.points]}


@dataclass
class VectorOutline:
    """Flattened outlines imported from a vector document.

    Each outline is filled as an independent closed polygon; outlines never
    cut holes into one another. ``bounds`` caches the box covering every
    point of every outline and is refreshed by ``recompute_bounds()``.

    Attributes:
        paths: Flattened outlines in canvas coordinates
        bounds: Cached (x, y, w, h) box, None while the shape has no points
    """

    kind: ClassVar[str] = "outline"

    paths: list[list[Point]]
    bounds: BoundingBox | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.recompute_bounds()

    def recompute_bounds(self) -> BoundingBox | None:
        """Recalculate the cached bounding box from all outline points."""
        self.bounds = _points_bounds([p for path in self.paths for p in path])
        return self.bounds

    def is_degenerate(self) -> bool:
        return not any(len(path) >= 3 for path in self.paths)

    def bounding_box(self) -> BoundingBox | None:
        return self.bounds

    def contains_point(self, x: float, y: float) -> bool:
        """Hit test against the cached bounding box."""
        return _box_contains(self.bounds, x, y)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind,
            "paths": [[list(p.to_tuple()) for p in path] for path in self.paths],
        }


Shape = Rect | Ellipse | FreehandPath | VectorOutline

SHAPE_TYPES: tuple[type, ...] = (Rect, Ellipse, FreehandPath, VectorOutline)


def ensure_shape(obj: object) -> Shape:
    """Return obj unchanged if it is a shape variant.

    Raises:
        ShapeTypeError: If obj is not one of the shape variants
    """
    if not isinstance(obj, SHAPE_TYPES):
        raise ShapeTypeError(obj)
    return obj  # type: ignore[return-value]


def _points_from_list(raw: Any) -> list[Point]:
    if not isinstance(raw, list):
        raise SceneFormatError(f"expected a point list, got {type(raw).__name__}")
    try:
        return [Point(float(pair[0]), float(pair[1])) for pair in raw]
    except (TypeError, ValueError, IndexError) as e:
        raise SceneFormatError(f"bad point list: {e}") from e


def shape_from_dict(data: dict[str, Any]) -> Shape:
    """Deserialize a shape from its ``to_dict()`` form.

    Raises:
        SceneFormatError: If the type tag is unknown or fields are missing
    """
    kind = data.get("type")
    try:
        if kind in (Rect.kind, Ellipse.kind):
            cls = Rect if kind == Rect.kind else Ellipse
            return cls(
                x=float(data["x"]),
                y=float(data["y"]),
                w=float(data["w"]),
                h=float(data["h"]),
            )
    except (KeyError, TypeError, ValueError) as e:
        raise SceneFormatError(f"bad {kind} fields: {e}") from e

    if kind == FreehandPath.kind:
        return FreehandPath(points=tuple(_points_from_list(data.get("points", []))))
    if kind == VectorOutline.kind:
        paths = data.get("paths", [])
        if not isinstance(paths, list):
            raise SceneFormatError(f"expected a list of paths, got {type(paths).__name__}")
        return VectorOutline(paths=[_points_from_list(p) for p in paths])

    raise SceneFormatError(f"unknown shape type {kind!r}")
