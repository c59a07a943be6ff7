"""Shape document: the session object holding the editable shape list.

The document owns the shapes produced by drawing tools and SVG imports.
Generation never reads it directly; callers pass ``snapshot()`` to the
ParticleGenerator together with the raster size.
"""

import json
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

from particlizer.core.smoothing import chaikin_smooth
from particlizer.domain import FreehandPath, Point, Shape, VectorOutline, ensure_shape, shape_from_dict
from particlizer.exceptions import DocumentLoadError, SceneFormatError

if TYPE_CHECKING:
    from particlizer.io.importer import SvgImporter

logger = structlog.get_logger("particlizer.document")


class ShapeDocument:
    """Ordered list of shapes, drawn back to front.

    Example:
        document = ShapeDocument()
        document.add(Rect(10, 10, 200, 100))
        document.import_svg(svg_text, 800, 600)
        particles = generator.generate(document.snapshot(), 800, 600)
    """

    def __init__(self, shapes: Iterable[Shape] = ()) -> None:
        self._shapes: list[Shape] = [ensure_shape(s) for s in shapes]

    def __len__(self) -> int:
        return len(self._shapes)

    def __iter__(self) -> Iterator[Shape]:
        return iter(self._shapes)

    def __getitem__(self, index: int) -> Shape:
        return self._shapes[index]

    @property
    def shapes(self) -> list[Shape]:
        """Copy of the current shape list."""
        return list(self._shapes)

    def snapshot(self) -> tuple[Shape, ...]:
        """Immutable view of the shape list for one generation call."""
        return tuple(self._shapes)

    def add(self, shape: Shape) -> int:
        """Append a shape and return its index."""
        self._shapes.append(ensure_shape(shape))
        return len(self._shapes) - 1

    def replace(self, index: int, shape: Shape) -> None:
        """Replace the shape at index, e.g. after a move or resize."""
        self._shapes[index] = ensure_shape(shape)
        if isinstance(shape, VectorOutline):
            self.refresh_outline_bounds()

    def remove(self, index: int) -> Shape:
        """Remove and return the shape at index."""
        return self._shapes.pop(index)

    def clear(self) -> None:
        self._shapes.clear()

    def finalize_path(self, points: Sequence[Point], smoothing_iterations: int = 0) -> FreehandPath:
        """Add a finished freehand stroke, smoothing it first if requested.

        Smoothing is only applied to strokes with more than 2 points.

        Args:
            points: Stroke points in drawing order
            smoothing_iterations: Chaikin passes to apply

        Returns:
            The FreehandPath that was added
        """
        pts = list(points)
        if smoothing_iterations > 0 and len(pts) > 2:
            pts = chaikin_smooth(pts, smoothing_iterations)
        path = FreehandPath(points=tuple(pts))
        self.add(path)
        return path

    def add_outlines(self, outlines: Iterable[Sequence[Point]]) -> list[VectorOutline]:
        """Wrap each imported outline in its own VectorOutline and add it.

        Outlines with fewer than 3 points are dropped. Afterwards the bounds
        of every VectorOutline in the document are recomputed.

        Returns:
            The VectorOutline shapes that were added
        """
        added = []
        for outline in outlines:
            if len(outline) > 2:
                shape = VectorOutline(paths=[list(outline)])
                self._shapes.append(shape)
                added.append(shape)

        self.refresh_outline_bounds()
        logger.info("SVG imported", outlines=len(added))
        return added

    def refresh_outline_bounds(self) -> None:
        """Recompute the cached bounds of every VectorOutline in the document."""
        for shape in self._shapes:
            if isinstance(shape, VectorOutline):
                shape.recompute_bounds()

    def import_svg(
        self,
        text: str | bytes,
        target_width: float,
        target_height: float,
        importer: "SvgImporter | None" = None,
    ) -> list[VectorOutline] | None:
        """Parse an SVG document and add its outlines.

        Args:
            text: SVG markup
            target_width: Canvas width to fit the document into
            target_height: Canvas height to fit the document into
            importer: SvgImporter to use (default: SvgImporter())

        Returns:
            The added shapes, or None if the document has no geometry
        """
        if importer is None:
            from particlizer.io.importer import SvgImporter

            importer = SvgImporter()

        outlines = importer.parse(text, target_width, target_height)
        if outlines is None:
            return None
        return self.add_outlines(outlines)

    def hit_test(self, x: float, y: float) -> int:
        """Index of the topmost shape containing (x, y), or -1."""
        for index in range(len(self._shapes) - 1, -1, -1):
            if self._shapes[index].contains_point(x, y):
                return index
        return -1

    def to_dict(self) -> dict[str, Any]:
        return {"shapes": [s.to_dict() for s in self._shapes]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ShapeDocument":
        """Build a document from its ``to_dict()`` form.

        Raises:
            SceneFormatError: If the data does not describe a shape list
        """
        if not isinstance(data, dict) or not isinstance(data.get("shapes"), list):
            raise SceneFormatError("expected an object with a 'shapes' list")
        for item in data["shapes"]:
            if not isinstance(item, dict):
                raise SceneFormatError(f"shape entries must be objects, got {type(item).__name__}")
        return cls(shape_from_dict(item) for item in data["shapes"])

    @classmethod
    def load_scene(cls, path: Path) -> "ShapeDocument":
        """Load a document from a JSON scene file.

        Raises:
            DocumentLoadError: If the file cannot be read or is not JSON
            SceneFormatError: If the JSON does not describe a shape list
        """
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DocumentLoadError(str(path), str(e)) from e
        return cls.from_dict(data)

    def save_scene(self, path: Path) -> None:
        """Write the document as a JSON scene file."""
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
