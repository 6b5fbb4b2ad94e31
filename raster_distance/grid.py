"""
Bounded grid data structure for raster processing.

This module contains the 2D container used by the distance transform. Reads
outside the grid return the grid's nodata value instead of failing, so
neighbourhood lookups at the image border need no special casing.
"""

import math
from typing import Tuple, Union

import numpy as np
import torch


class BoundedGrid:
    """
    A 2D grid of float values with a missing-data sentinel.

    Grid coordinates are always given as (row, col). Reading a coordinate
    outside ``[0, rows) x [0, columns)`` returns ``nodata``; writing one is a
    programming error and raises ``IndexError``.
    """

    def __init__(self, rows: int, columns: int, initial_value: float = 0.0,
                 nodata: float = -32768.0, dtype: type = np.float64):
        """
        Initialize a new bounded grid.

        Args:
            rows: Number of rows in the grid
            columns: Number of columns in the grid
            initial_value: Value every cell starts with
            nodata: Missing-data sentinel, also returned for out-of-range reads
            dtype: Data type for the cell values
        """
        if rows < 0 or columns < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {rows}x{columns}")

        self.rows = int(rows)
        self.columns = int(columns)
        self.nodata = float(nodata)

        self.data = np.full((self.rows, self.columns), initial_value, dtype=dtype)

    @classmethod
    def from_array(cls, values: Union[np.ndarray, torch.Tensor],
                   nodata: float = -32768.0, dtype: type = np.float64) -> 'BoundedGrid':
        """
        Create a grid holding a copy of a 2D array or tensor.

        Args:
            values: 2D numpy array or torch tensor
            nodata: Missing-data sentinel for the new grid
            dtype: Data type for the cell values

        Returns:
            BoundedGrid with the same shape as ``values``
        """
        if isinstance(values, torch.Tensor):
            values = values.detach().cpu().numpy()

        array = np.asarray(values, dtype=dtype)
        if array.ndim != 2:
            raise ValueError(f"Expected a 2D array, got shape {array.shape}")

        grid = cls(array.shape[0], array.shape[1], nodata=nodata, dtype=dtype)
        grid.data[:] = array
        return grid

    @property
    def shape(self) -> Tuple[int, int]:
        """Grid shape as (rows, columns)."""
        return (self.rows, self.columns)

    def contains(self, row: int, col: int) -> bool:
        """Check whether (row, col) lies inside the grid."""
        return 0 <= row < self.rows and 0 <= col < self.columns

    def is_nodata(self, value: float) -> bool:
        """Check whether a value equals the sentinel, treating NaN sentinels as equal."""
        if math.isnan(self.nodata):
            return math.isnan(value)
        return value == self.nodata

    def get(self, row: int, col: int) -> float:
        """
        Get the value of a cell.

        Args:
            row: Row index
            col: Column index

        Returns:
            Cell value, or ``nodata`` if (row, col) is outside the grid
        """
        if 0 <= row < self.rows and 0 <= col < self.columns:
            return float(self.data[row, col])
        return self.nodata

    def set(self, row: int, col: int, value: float) -> None:
        """
        Set the value of a cell.

        Args:
            row: Row index
            col: Column index
            value: New cell value
        """
        if not (0 <= row < self.rows and 0 <= col < self.columns):
            raise IndexError(
                f"Cell ({row}, {col}) is outside the {self.rows}x{self.columns} grid"
            )
        self.data[row, col] = value

    def fill(self, value: float) -> None:
        """Set every cell to ``value``."""
        self.data.fill(value)

    def to_array(self) -> np.ndarray:
        """Return a copy of the grid values."""
        return self.data.copy()

    def __repr__(self) -> str:
        return f"BoundedGrid(rows={self.rows}, columns={self.columns}, nodata={self.nodata})"
