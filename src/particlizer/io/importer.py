"""SVG document importer.

This module provides the SvgImporter class, which parses an SVG document
into flattened outlines scaled to fit a target canvas.

Supported elements are path, rect, circle, ellipse, polygon and polyline,
found anywhere below the root ``svg`` element. Transforms, styles and
clip paths are ignored.
"""

import logging
import math
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path

from particlizer.config import ImportConfig
from particlizer.core.path import PathFlattener, parse_path_data
from particlizer.domain import Point
from particlizer.exceptions import DocumentLoadError

logger = logging.getLogger(__name__)

_SEPARATOR_RE = re.compile(r"[\s,]+")
_LEADING_NUMBER_RE = re.compile(r"\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")

# Element kinds in the order their outlines are emitted
ELEMENT_ORDER = ("path", "rect", "circle", "ellipse", "polygon", "polyline")


def _local_name(tag: object) -> str:
    """Strip the XML namespace from a tag, e.g. '{http://...}svg' -> 'svg'."""
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _to_float(token: str | None, default: float = 0.0) -> float:
    """Parse a number, returning default for missing or malformed tokens."""
    if token is None:
        return default
    try:
        value = float(token)
    except ValueError:
        return default
    return value if math.isfinite(value) else default


def _parse_length(value: str | None) -> float | None:
    """Parse the leading number of a length attribute such as '120px'."""
    if value is None:
        return None
    match = _LEADING_NUMBER_RE.match(value)
    if match is None:
        return None
    return _to_float(match.group(1))


def _length_attr(element: ET.Element, name: str) -> float:
    """Read a geometry attribute as a length; missing or unreadable is 0."""
    length = _parse_length(element.get(name))
    return 0.0 if length is None else length


def _parse_number_list(value: str) -> list[float]:
    tokens = [t for t in _SEPARATOR_RE.split(value.strip()) if t]
    return [_to_float(t) for t in tokens]


def _parse_points(value: str) -> list[Point]:
    """Parse a polygon/polyline ``points`` attribute; an odd trailing value gets y = 0."""
    numbers = _parse_number_list(value)
    if len(numbers) % 2:
        numbers.append(0.0)
    return [Point(numbers[i], numbers[i + 1]) for i in range(0, len(numbers), 2)]


@dataclass(frozen=True, slots=True)
class ViewBox:
    """Declared view region of a document."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True, slots=True)
class FitTransform:
    """Uniform scale plus offset mapping document space to canvas space."""

    scale: float
    offset_x: float
    offset_y: float

    @classmethod
    def fit(
        cls, view: ViewBox, target_width: float, target_height: float, padding: float
    ) -> "FitTransform":
        """Scale view into the target, centered, filling at most ``padding`` of it."""
        scale = min(target_width / view.width, target_height / view.height) * padding
        offset_x = (target_width - view.width * scale) / 2 - view.x * scale
        offset_y = (target_height - view.height * scale) / 2 - view.y * scale
        return cls(scale, offset_x, offset_y)

    def apply(self, point: Point) -> Point:
        return Point(point.x * self.scale + self.offset_x, point.y * self.scale + self.offset_y)


class SvgImporter:
    """Parses SVG documents into flattened, canvas-fitted outlines.

    Malformed documents never raise; they produce None ("no geometry").

    Example:
        importer = SvgImporter()
        outlines = importer.parse(svg_text, 800, 600)
        if outlines is not None:
            document.add_outlines(outlines)
    """

    def __init__(self, config: ImportConfig | None = None) -> None:
        """Initialize the importer.

        Args:
            config: Import settings (default: ImportConfig())
        """
        self.config = config if config is not None else ImportConfig()
        self._flattener = PathFlattener(self.config.curve_segments)

    def import_file(
        self, path: Path, target_width: float, target_height: float
    ) -> list[list[Point]] | None:
        """Read and parse an SVG file.

        Args:
            path: Path to the SVG document
            target_width: Canvas width to fit into
            target_height: Canvas height to fit into

        Returns:
            Outlines in canvas coordinates, or None if the document has none

        Raises:
            DocumentLoadError: If the file cannot be read
        """
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentLoadError(str(path), str(e)) from e
        return self.parse(text, target_width, target_height)

    def parse(
        self, text: str | bytes, target_width: float, target_height: float
    ) -> list[list[Point]] | None:
        """Parse SVG markup into outlines fitted to the target canvas.

        Args:
            text: SVG document markup
            target_width: Canvas width to fit into
            target_height: Canvas height to fit into

        Returns:
            Outlines in canvas coordinates, or None if the markup is
            malformed, has no ``svg`` root, or yields no outline
        """
        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            logger.warning("SVG parsing error: %s", e)
            return None

        svg = self._find_svg(root)
        if svg is None:
            logger.warning("SVG document has no svg element")
            return None

        view = self.read_view_box(svg)
        if view.width <= 0 or view.height <= 0:
            logger.warning("SVG view region is empty: %sx%s", view.width, view.height)
            return None

        transform = FitTransform.fit(view, target_width, target_height, self.config.padding)

        elements: dict[str, list[ET.Element]] = {kind: [] for kind in ELEMENT_ORDER}
        for element in svg.iter():
            kind = _local_name(element.tag)
            if kind in elements:
                elements[kind].append(element)

        outlines: list[list[Point]] = []
        for kind in ELEMENT_ORDER:
            reader = getattr(self, f"_read_{kind}")
            for element in elements[kind]:
                outline = reader(element)
                if outline is not None:
                    outlines.append([transform.apply(p) for p in outline])

        logger.info(
            "Parsed SVG: %d outlines, viewBox: %s,%s,%s,%s, scale: %.2f",
            len(outlines),
            view.x,
            view.y,
            view.width,
            view.height,
            transform.scale,
        )
        return outlines if outlines else None

    @staticmethod
    def _find_svg(root: ET.Element) -> ET.Element | None:
        for element in root.iter():
            if _local_name(element.tag) == "svg":
                return element
        return None

    def read_view_box(self, svg: ET.Element) -> ViewBox:
        """Determine the document's view region.

        Uses ``viewBox`` when present (a malformed value keeps the defaults),
        otherwise the ``width``/``height`` attributes, otherwise the
        configured default size.
        """
        default = ViewBox(
            0.0, 0.0, self.config.default_view_width, self.config.default_view_height
        )
        view_box = svg.get("viewBox")
        if view_box is not None:
            parts = _parse_number_list(view_box)
            if len(parts) == 4:
                return ViewBox(*parts)
            return default

        width = _parse_length(svg.get("width"))
        height = _parse_length(svg.get("height"))
        return ViewBox(
            0.0,
            0.0,
            width if width is not None else default.width,
            height if height is not None else default.height,
        )

    def _read_path(self, element: ET.Element) -> list[Point] | None:
        data = element.get("d")
        if not data:
            return None
        points = self._flattener.flatten(parse_path_data(data))
        if points is None or len(points) < 3:
            return None
        return points

    def _read_rect(self, element: ET.Element) -> list[Point] | None:
        x = _length_attr(element, "x")
        y = _length_attr(element, "y")
        w = _length_attr(element, "width")
        h = _length_attr(element, "height")
        if w <= 0 or h <= 0:
            return None
        return [Point(x, y), Point(x + w, y), Point(x + w, y + h), Point(x, y + h), Point(x, y)]

    def _read_circle(self, element: ET.Element) -> list[Point] | None:
        r = _length_attr(element, "r")
        if r <= 0:
            return None
        cx, cy = _length_attr(element, "cx"), _length_attr(element, "cy")
        return self._ellipse_outline(cx, cy, r, r)

    def _read_ellipse(self, element: ET.Element) -> list[Point] | None:
        rx = _length_attr(element, "rx")
        ry = _length_attr(element, "ry")
        if rx <= 0 or ry <= 0:
            return None
        cx, cy = _length_attr(element, "cx"), _length_attr(element, "cy")
        return self._ellipse_outline(cx, cy, rx, ry)

    def _ellipse_outline(self, cx: float, cy: float, rx: float, ry: float) -> list[Point]:
        n = self.config.ellipse_segments
        return [
            Point(cx + math.cos(i / n * 2 * math.pi) * rx, cy + math.sin(i / n * 2 * math.pi) * ry)
            for i in range(n)
        ]

    def _read_polygon(self, element: ET.Element) -> list[Point] | None:
        points = _parse_points(element.get("points", ""))
        if len(set(points)) < 3:
            return None
        return points + [points[0]]

    def _read_polyline(self, element: ET.Element) -> list[Point] | None:
        points = _parse_points(element.get("points", ""))
        if len(points) < 3:
            return None
        return points
