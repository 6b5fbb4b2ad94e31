"""
Implementation of the Euclidean distance transform for raster grids.

This module provides the four passes of the Shih and Wu (2004) two-scan
distance transform:

1. initialize: squared distance 0 at target cells, +inf elsewhere
2. scan (forward): top-left to bottom-right over the W, NW, N, NE neighbours
3. scan (backward): bottom-right to top-left over the E, SE, S, SW neighbours
4. finalize: square root, scaling to ground units and nodata masking

Instead of storing the location of the nearest target, every cell keeps the
accumulated (x, y) step counts towards it. Moving one step with unit step
(gx, gy) from a neighbour with offsets (ox, oy) grows the squared distance by

    (ox + gx)^2 + (oy + gy)^2 - ox^2 - oy^2 = 2*(gx*ox + gy*oy) + gx + gy

which is ``2*ox + 1`` for horizontal moves, ``2*oy + 1`` for vertical moves and
``2*(ox + oy + 1)`` for diagonal moves.

Reference:
    Shih FY and Wu Y-T (2004), Fast Euclidean distance transformation in two
    scans using a 3 x 3 neighborhood, Computer Vision and Image Understanding,
    93: 195-205.
"""

import math
import logging
from typing import NamedTuple, Optional, Tuple, Union

import numpy as np
import torch

from raster_distance.grid import BoundedGrid
from raster_distance.core.distance_transform.progress import (
    ProgressCallback,
    RowProgress,
    PASS_INITIALIZE,
    PASS_FORWARD,
    PASS_BACKWARD,
    PASS_FINALIZE,
)

logger = logging.getLogger(__name__)

# Sentinel for the working grids. Squared distances and offsets are never
# negative, so an in-grid cell can not be mistaken for an out-of-range read.
WORKING_NODATA = -1.0


class Neighbour(NamedTuple):
    """Relative position of a neighbouring cell, as (column delta, row delta)."""
    d_col: int
    d_row: int

    @property
    def step_x(self) -> int:
        return abs(self.d_col)

    @property
    def step_y(self) -> int:
        return abs(self.d_row)


class ScanDirection(NamedTuple):
    """
    Descriptor for one directional scan.

    Attributes:
        name: Pass name reported to the progress callback
        reverse: Traverse rows and columns in decreasing order
        neighbours: Already-visited neighbours, in evaluation order. On ties
                    the first neighbour evaluated wins.
    """
    name: str
    reverse: bool
    neighbours: Tuple[Neighbour, ...]


FORWARD_SCAN = ScanDirection(
    name=PASS_FORWARD,
    reverse=False,
    neighbours=(
        Neighbour(-1, 0),   # west
        Neighbour(-1, -1),  # northwest
        Neighbour(0, -1),   # north
        Neighbour(1, -1),   # northeast
    ),
)

BACKWARD_SCAN = ScanDirection(
    name=PASS_BACKWARD,
    reverse=True,
    neighbours=(
        Neighbour(1, 0),    # east
        Neighbour(1, 1),    # southeast
        Neighbour(0, 1),    # south
        Neighbour(-1, 1),   # southwest
    ),
)


class WorkingGrids(NamedTuple):
    """The three mutable buffers shared by the scan passes."""
    sq_dist: BoundedGrid
    offset_x: BoundedGrid
    offset_y: BoundedGrid


def _check_shape(shape: Tuple[int, int], *grids: BoundedGrid) -> None:
    for grid in grids:
        if grid.shape != shape:
            raise ValueError(
                f"Working grid shape {grid.shape} does not match input shape {shape}"
            )


def is_target(grid: BoundedGrid, value: float) -> bool:
    """A target cell holds a value that is neither 0 nor the grid's nodata."""
    return value != 0.0 and not grid.is_nodata(value)


def initialize(input_grid: BoundedGrid,
               progress: Optional[ProgressCallback] = None) -> WorkingGrids:
    """
    Allocate the working grids and set the starting squared distances.

    Args:
        input_grid: Source grid; only read
        progress: Optional progress callback

    Returns:
        WorkingGrids with squared distance 0 at targets, +inf elsewhere, and
        zero offsets everywhere
    """
    rows, columns = input_grid.shape
    working = WorkingGrids(
        sq_dist=BoundedGrid(rows, columns, 0.0, nodata=WORKING_NODATA),
        offset_x=BoundedGrid(rows, columns, 0.0, nodata=WORKING_NODATA),
        offset_y=BoundedGrid(rows, columns, 0.0, nodata=WORKING_NODATA),
    )

    tracker = RowProgress(PASS_INITIALIZE, rows, progress)
    for row in range(rows):
        for col in range(columns):
            if is_target(input_grid, input_grid.get(row, col)):
                working.sq_dist.set(row, col, 0.0)
            else:
                working.sq_dist.set(row, col, math.inf)
        tracker.update(row + 1)

    return working


def scan(working: WorkingGrids, direction: ScanDirection,
         progress: Optional[ProgressCallback] = None) -> None:
    """
    Run one directional pass, updating the working grids in place.

    Every non-target cell looks at the neighbours listed in ``direction``,
    which have already been visited in this pass, and takes the smallest
    candidate squared distance if it improves on its current value.

    Args:
        working: Squared distance and offset grids
        direction: FORWARD_SCAN or BACKWARD_SCAN
        progress: Optional progress callback
    """
    sq_dist, offset_x, offset_y = working
    _check_shape(sq_dist.shape, offset_x, offset_y)
    rows, columns = sq_dist.shape

    if direction.reverse:
        row_order = range(rows - 1, -1, -1)
        col_order = range(columns - 1, -1, -1)
    else:
        row_order = range(rows)
        col_order = range(columns)

    tracker = RowProgress(direction.name, rows, progress)
    for rows_done, row in enumerate(row_order, 1):
        for col in col_order:
            z = sq_dist.get(row, col)
            if z == 0.0:
                continue

            z_min = math.inf
            best = None
            for neighbour in direction.neighbours:
                y = row + neighbour.d_row
                x = col + neighbour.d_col
                z2 = sq_dist.get(y, x)
                if z2 == WORKING_NODATA:
                    continue

                h = (2.0 * (neighbour.step_x * offset_x.get(y, x)
                            + neighbour.step_y * offset_y.get(y, x))
                     + neighbour.step_x + neighbour.step_y)
                z2 += h
                if z2 < z_min:
                    z_min = z2
                    best = neighbour

            if z_min < z:
                y = row + best.d_row
                x = col + best.d_col
                sq_dist.set(row, col, z_min)
                offset_x.set(row, col, offset_x.get(y, x) + best.step_x)
                offset_y.set(row, col, offset_y.get(y, x) + best.step_y)

        tracker.update(rows_done)


def finalize(input_grid: BoundedGrid, sq_dist: BoundedGrid, cell_size: float = 1.0,
             progress: Optional[ProgressCallback] = None) -> BoundedGrid:
    """
    Convert squared cell distances into distances in ground units.

    Args:
        input_grid: Source grid, used for nodata masking
        sq_dist: Squared distance grid produced by the scans
        cell_size: Ground size of one cell
        progress: Optional progress callback

    Returns:
        Output grid with the input's nodata value. Cells that never reached a
        target hold +inf.
    """
    _check_shape(input_grid.shape, sq_dist)
    rows, columns = input_grid.shape
    output = BoundedGrid(rows, columns, input_grid.nodata, nodata=input_grid.nodata)

    tracker = RowProgress(PASS_FINALIZE, rows, progress)
    for row in range(rows):
        for col in range(columns):
            if input_grid.is_nodata(input_grid.get(row, col)):
                output.set(row, col, input_grid.nodata)
            else:
                output.set(row, col, math.sqrt(sq_dist.get(row, col)) * cell_size)
        tracker.update(row + 1)

    return output


def euclidean_distance_grid(input_grid: BoundedGrid, cell_size: float = 1.0,
                            progress: Optional[ProgressCallback] = None) -> BoundedGrid:
    """
    Run all four passes of the transform on a bounded grid.

    Args:
        input_grid: Source grid; target cells are non-zero, non-nodata cells
        cell_size: Ground size of one cell
        progress: Optional progress callback

    Returns:
        Distance grid in ground units
    """
    logger.debug(f"Euclidean distance transform on {input_grid.rows}x{input_grid.columns} grid")
    working = initialize(input_grid, progress)
    scan(working, FORWARD_SCAN, progress)
    scan(working, BACKWARD_SCAN, progress)
    return finalize(input_grid, working.sq_dist, cell_size, progress)


def euclidean_distance(
    data: Union[np.ndarray, torch.Tensor, BoundedGrid],
    nodata: float = -32768.0,
    resolution_x: float = 1.0,
    resolution_y: float = 1.0,
    progress: Optional[ProgressCallback] = None
) -> np.ndarray:
    """
    Compute the Euclidean distance from every cell to the nearest target.

    Args:
        data: 2D numpy array, torch tensor or BoundedGrid. A BoundedGrid keeps
              its own nodata value and ``nodata`` is ignored.
        nodata: Missing-data sentinel for array or tensor input
        resolution_x: Horizontal cell resolution
        resolution_y: Vertical cell resolution
        progress: Optional callable receiving (pass name, percent)

    Returns:
        Array of distances in ground units, with nodata where the input is nodata
    """
    if isinstance(data, BoundedGrid):
        input_grid = data
    else:
        input_grid = BoundedGrid.from_array(data, nodata=nodata)

    cell_size = (resolution_x + resolution_y) / 2.0
    return euclidean_distance_grid(input_grid, cell_size, progress).to_array()


def distance_field(
    volume: Union[torch.Tensor, np.ndarray],
    nodata: float = -32768.0,
    resolution_x: float = 1.0,
    resolution_y: float = 1.0
) -> torch.Tensor:
    """
    Compute the distance transform and return it as a float32 tensor.

    Args:
        volume: 2D input as torch tensor or numpy array
        nodata: Missing-data sentinel
        resolution_x: Horizontal cell resolution
        resolution_y: Vertical cell resolution

    Returns:
        Distance field tensor with the same shape as the input
    """
    distances = euclidean_distance(volume, nodata, resolution_x, resolution_y)
    return torch.from_numpy(distances.astype(np.float32))
