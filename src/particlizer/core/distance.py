"""Approximate interior distance field via a two-pass chamfer transform.

Each interior pixel receives an upper bound on its Euclidean distance, in
pixels, to the nearest non-interior pixel. Axis steps cost 1 and diagonal
steps cost sqrt(2), so distances are exact along the 8 principal directions
only. Pixels outside the raster count as exterior.
"""

import math

import numpy as np

SQRT2 = math.sqrt(2.0)


def _sweep_rows(dist: np.ndarray, rows: range, step: int) -> None:
    """Relax rows in order, each against the row ``step`` before it.

    The in-row sweep d[x] = min(c[x], d[x - 1] + 1) unrolls to
    d[x] = min over k <= x of (c[k] + x - k), which is a running minimum of
    c[k] - k; this gives the same values as the pixel-by-pixel sweep.
    """
    width = dist.shape[1]
    offsets = np.arange(width, dtype=dist.dtype)

    for y in rows:
        prev = dist[y - step]
        c = np.minimum(dist[y], prev + 1.0)
        if step > 0:
            # forward: up-left, up-right
            c[1:] = np.minimum(c[1:], prev[:-1] + SQRT2)
            c[:-1] = np.minimum(c[:-1], prev[1:] + SQRT2)
            dist[y] = np.minimum.accumulate(c - offsets) + offsets
        else:
            # backward: down-right, down-left, then sweep right to left
            c[:-1] = np.minimum(c[:-1], prev[1:] + SQRT2)
            c[1:] = np.minimum(c[1:], prev[:-1] + SQRT2)
            reversed_c = c[::-1]
            dist[y] = (np.minimum.accumulate(reversed_c - offsets) + offsets)[::-1]


def chamfer_distance(mask: np.ndarray) -> np.ndarray:
    """Compute the 8-neighbour chamfer distance field of a mask.

    Args:
        mask: Boolean (height, width) array, True for interior pixels

    Returns:
        Float64 (height, width) array; exterior pixels are exactly 0 and an
        interior pixel next to the exterior (or the raster border) has a
        value in [1, sqrt(2)]

    Examples:
        >>> mask = np.ones((3, 3), dtype=bool)
        >>> float(chamfer_distance(mask)[1, 1])
        2.0
    """
    mask = np.asarray(mask, dtype=bool)
    height, width = mask.shape
    if mask.size == 0:
        return np.zeros((height, width), dtype=np.float64)

    # One-pixel exterior ring so the raster border acts as an edge
    dist = np.zeros((height + 2, width + 2), dtype=np.float64)
    dist[1:-1, 1:-1] = np.where(mask, np.inf, 0.0)

    _sweep_rows(dist, range(1, height + 1), step=1)
    _sweep_rows(dist, range(height, 0, -1), step=-1)

    return dist[1:-1, 1:-1].copy()
