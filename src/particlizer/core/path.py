"""SVG path data parsing and flattening.

This module turns an SVG path ``d`` attribute into an ordered list of points:
- parse_path_data: Split path data into PathCommand records
- PathFlattener: Walk commands and flatten curves into line segments
- flatten_path_data: Convenience wrapper combining both

Curves are flattened at a fixed resolution (10 segments by default) and
elliptical arcs are reduced to a single chord to their endpoint.
"""

import logging
import math
import re
from collections.abc import Iterable
from dataclasses import dataclass

from particlizer.core._bezier import flatten_cubic, flatten_quadratic
from particlizer.domain import Point

logger = logging.getLogger(__name__)

CURVE_SEGMENTS = 10

_COMMAND_RE = re.compile(r"([MmLlHhVvCcSsQqTtAaZz])([^MmLlHhVvCcSsQqTtAaZz]*)")
_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")

# Coordinate group size per command
ARG_COUNTS: dict[str, int] = {
    "m": 2,
    "l": 2,
    "h": 1,
    "v": 1,
    "c": 6,
    "s": 4,
    "q": 4,
    "t": 2,
    "a": 7,
    "z": 0,
}


@dataclass(frozen=True, slots=True)
class PathCommand:
    """A single path command with its raw numeric arguments.

    Attributes:
        letter: Command letter; lowercase means relative coordinates
        args: Numeric arguments, possibly several coordinate groups
    """

    letter: str
    args: tuple[float, ...] = ()

    @property
    def kind(self) -> str:
        """Lowercase command letter."""
        return self.letter.lower()

    @property
    def is_relative(self) -> bool:
        return self.letter.islower()

    def groups(self) -> list[tuple[float, ...]]:
        """Split arguments into coordinate groups of the command's arity.

        A trailing partial group is padded with zeros, and a command without
        arguments still yields one all-zero group.

        Returns:
            List of argument tuples, empty for ClosePath
        """
        size = ARG_COUNTS[self.kind]
        if size == 0:
            return []

        count = max(1, -(-len(self.args) // size))
        padded = list(self.args) + [0.0] * (count * size - len(self.args))
        return [tuple(padded[i : i + size]) for i in range(0, count * size, size)]


def _to_number(token: str) -> float:
    """Parse a number token; overflowing values such as 1e400 read as 0."""
    value = float(token)
    return value if math.isfinite(value) else 0.0


def parse_path_data(path_data: str) -> list[PathCommand]:
    """Parse an SVG path ``d`` string into commands.

    Characters before the first command letter and characters that are not
    part of a number are ignored.

    Args:
        path_data: SVG path data, e.g. "M 0,0 L 10,0 Z"

    Returns:
        List of commands in document order

    Examples:
        >>> parse_path_data("M10-5l3 4")
        [PathCommand(letter='M', args=(10.0, -5.0)), PathCommand(letter='l', args=(3.0, 4.0))]
    """
    commands = []
    for letter, body in _COMMAND_RE.findall(path_data):
        args = tuple(_to_number(token) for token in _NUMBER_RE.findall(body))
        commands.append(PathCommand(letter, args))
    return commands


class PathFlattener:
    """Converts path commands into a flattened point sequence.

    The flattener keeps the cursor, the start of the current subpath and the
    last Bezier control point. Each coordinate group of a repeated command is
    handled as if it were a separate command.

    Example:
        flattener = PathFlattener()
        points = flattener.flatten(parse_path_data("M0 0 C 0 10 10 10 10 0"))
    """

    def __init__(self, curve_segments: int = CURVE_SEGMENTS) -> None:
        """Initialize the flattener.

        Args:
            curve_segments: Line segments emitted per cubic or quadratic curve
        """
        if curve_segments < 1:
            raise ValueError(f"curve_segments must be positive, got {curve_segments}")
        self.curve_segments = curve_segments

    def flatten(self, commands: Iterable[PathCommand]) -> list[Point] | None:
        """Flatten commands into points.

        Args:
            commands: Path commands, e.g. from parse_path_data

        Returns:
            Ordered points, or None if the commands produced no geometry
        """
        points: list[Point] = []
        cur = Point(0.0, 0.0)
        start = cur
        # Control point of the previous segment and its family ("c" or "q")
        prev_ctrl: Point | None = None
        prev_family = ""

        for command in commands:
            kind = command.kind
            rel = command.is_relative

            if kind == "z":
                if points and cur != start:
                    points.append(start)
                cur = start
                prev_family = ""
                continue

            if kind not in ARG_COUNTS:
                logger.debug("Ignoring unknown path command %r", command.letter)
                continue

            for index, group in enumerate(command.groups()):
                family = ""
                ctrl: Point | None = None

                # Pairs after the first moveto pair are line-tos (SVG grammar);
                # the subpath start stays on the first pair.
                if kind == "m" and index == 0:
                    cur = self._resolve(cur, group[0], group[1], rel)
                    start = cur
                    points.append(cur)
                elif kind in ("m", "l"):
                    cur = self._resolve(cur, group[0], group[1], rel)
                    points.append(cur)
                elif kind == "h":
                    cur = Point(cur.x + group[0] if rel else group[0], cur.y)
                    points.append(cur)
                elif kind == "v":
                    cur = Point(cur.x, cur.y + group[0] if rel else group[0])
                    points.append(cur)
                elif kind in ("c", "s"):
                    if kind == "c":
                        c1 = self._resolve(cur, group[0], group[1], rel)
                        rest = group[2:]
                    else:
                        c1 = self._reflect(cur, prev_ctrl if prev_family == "c" else None)
                        rest = group
                    c2 = self._resolve(cur, rest[0], rest[1], rel)
                    end = self._resolve(cur, rest[2], rest[3], rel)
                    points.extend(flatten_cubic([cur, c1, c2, end], self.curve_segments))
                    cur, ctrl, family = end, c2, "c"
                elif kind in ("q", "t"):
                    if kind == "q":
                        c1 = self._resolve(cur, group[0], group[1], rel)
                        rest = group[2:]
                    else:
                        c1 = self._reflect(cur, prev_ctrl if prev_family == "q" else None)
                        rest = group
                    end = self._resolve(cur, rest[0], rest[1], rel)
                    points.extend(flatten_quadratic([cur, c1, end], self.curve_segments))
                    cur, ctrl, family = end, c1, "q"
                elif kind == "a":
                    # Arc reduced to a chord to its endpoint
                    cur = self._resolve(cur, group[5], group[6], rel)
                    points.append(cur)

                prev_ctrl, prev_family = ctrl, family

        return points if points else None

    @staticmethod
    def _resolve(cur: Point, x: float, y: float, relative: bool) -> Point:
        if relative:
            return Point(cur.x + x, cur.y + y)
        return Point(x, y)

    @staticmethod
    def _reflect(cur: Point, ctrl: Point | None) -> Point:
        """Reflect ctrl across cur; without a previous control, return cur."""
        if ctrl is None:
            return cur
        return Point(2 * cur.x - ctrl.x, 2 * cur.y - ctrl.y)


def flatten_path_data(path_data: str, curve_segments: int = CURVE_SEGMENTS) -> list[Point] | None:
    """Parse and flatten SVG path data in one step.

    Args:
        path_data: SVG path ``d`` string
        curve_segments: Line segments per curve

    Returns:
        Ordered points, or None if the path has no geometry
    """
    return PathFlattener(curve_segments).flatten(parse_path_data(path_data))
