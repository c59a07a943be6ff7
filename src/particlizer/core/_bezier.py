"""Internal Bezier curve flattening helpers.

This is an internal module containing helper functions for the path
flattener. Curves are sampled at equal parameter steps rather than
subdivided adaptively. Not intended for public use.
"""

from particlizer.domain import Point


def flatten_quadratic(points: list[Point], segments: int) -> list[Point]:
    """Flatten a quadratic Bezier curve into equal-parameter line segments.

    Args:
        points: List of 3 control points [p0, p1, p2]
        segments: Number of line segments

    Returns:
        Curve points at t = 1/segments .. 1 (the start point is omitted,
        the last point equals p2)
    """
    p0, p1, p2 = points
    result = []
    for step in range(1, segments + 1):
        t = step / segments
        u = 1 - t
        result.append(
            Point(
                u * u * p0.x + 2 * u * t * p1.x + t * t * p2.x,
                u * u * p0.y + 2 * u * t * p1.y + t * t * p2.y,
            )
        )
    return result


def flatten_cubic(points: list[Point], segments: int) -> list[Point]:
    """Flatten a cubic Bezier curve into equal-parameter line segments.

    Uses the Bernstein form B(t) = u^3 p0 + 3u^2 t p1 + 3u t^2 p2 + t^3 p3.

    Args:
        points: List of 4 control points [p0, p1, p2, p3]
        segments: Number of line segments

    Returns:
        Curve points at t = 1/segments .. 1 (the start point is omitted,
        the last point equals p3)
    """
    p0, p1, p2, p3 = points
    result = []
    for step in range(1, segments + 1):
        t = step / segments
        u = 1 - t
        b0 = u * u * u
        b1 = 3 * u * u * t
        b2 = 3 * u * t * t
        b3 = t * t * t
        result.append(
            Point(
                b0 * p0.x + b1 * p1.x + b2 * p2.x + b3 * p3.x,
                b0 * p0.y + b1 * p1.y + b2 * p2.y + b3 * p3.y,
            )
        )
    return result
