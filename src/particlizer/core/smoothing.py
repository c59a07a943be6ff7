"""Chaikin corner-cutting for freehand polylines."""

from collections.abc import Sequence

from particlizer.domain import Point


def chaikin_smooth(points: Sequence[Point], iterations: int) -> list[Point]:
    """Smooth an open polyline with Chaikin's corner-cutting algorithm.

    Each pass replaces every segment (P0, P1) with the points at 1/4 and 3/4
    along it, so a polyline of m points becomes one of 2 * (m - 1) points.
    The curve is treated as open: the original endpoints are not kept.

    Args:
        points: Polyline vertices
        iterations: Number of passes (0 returns the input unchanged)

    Returns:
        New list of points

    Raises:
        ValueError: If iterations is negative

    Examples:
        >>> chaikin_smooth([Point(0, 0), Point(4, 0)], 1)
        [Point(x=1.0, y=0.0), Point(x=3.0, y=0.0)]
    """
    if iterations < 0:
        raise ValueError(f"iterations must be non-negative, got {iterations}")

    pts = list(points)
    if len(pts) < 2:
        return pts

    for _ in range(iterations):
        out = []
        for p0, p1 in zip(pts, pts[1:]):
            out.append(Point(0.75 * p0.x + 0.25 * p1.x, 0.75 * p0.y + 0.25 * p1.y))
            out.append(Point(0.25 * p0.x + 0.75 * p1.x, 0.25 * p0.y + 0.75 * p1.y))
        pts = out
    return pts
