"""
Euclidean distance transform for raster grids.

This module provides the Shih and Wu two-scan distance transform, which maps
every cell to its straight-line distance from the nearest target cell
(any non-zero, non-nodata cell).
"""

from raster_distance.core.distance_transform.transform import (
    WORKING_NODATA,
    Neighbour,
    ScanDirection,
    FORWARD_SCAN,
    BACKWARD_SCAN,
    WorkingGrids,
    is_target,
    initialize,
    scan,
    finalize,
    euclidean_distance_grid,
    euclidean_distance,
    distance_field,
)

from raster_distance.core.distance_transform.progress import (
    ProgressCallback,
    RowProgress,
    log_progress,
    PASS_INITIALIZE,
    PASS_FORWARD,
    PASS_BACKWARD,
    PASS_FINALIZE,
)
