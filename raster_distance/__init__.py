"""
Euclidean distance transform for raster grids.

This package computes, for every cell of a raster, the straight-line distance
to the nearest target (non-zero, non-nodata) cell using the Shih and Wu (2004)
two-scan algorithm, and provides the raster I/O and command-line tool around it.
"""

from .grid import BoundedGrid
from .core.distance_transform import euclidean_distance, euclidean_distance_grid, distance_field
