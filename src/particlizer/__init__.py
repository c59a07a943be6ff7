"""Particlizer - Turn 2D shapes into edge-biased particle clouds.

Particlizer converts rectangles, ellipses, freehand paths and imported SVG
outlines into a dense point cloud whose density is biased toward the shape
edges. Shapes are rasterized into an interior mask, a chamfer distance field
is computed over it, and particles are drawn with an edge-weighted acceptance
policy.

Example:
    $ particlize logo.svg -n 8000 -o logo-particles.png

This will import logo.svg, scatter 8000 particles along its outlines and
render them to logo-particles.png.
"""

__version__ = "0.1.0"
__author__ = "Particlizer contributors"

__all__ = ["__author__", "__version__"]
