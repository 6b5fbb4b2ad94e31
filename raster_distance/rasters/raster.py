"""Raster class pairing a bounded grid with its file path and metadata."""

import pathlib
import logging
from typing import Optional, Union

import numpy as np

from raster_distance.grid import BoundedGrid
from raster_distance.rasters.raster_io import read_stored_array, write_array, raster_format, stored_value
from raster_distance.rasters.raster_meta import RasterMeta

logger = logging.getLogger(__name__)

_DTYPES = {"float32": np.float32, "float64": np.float64}


class Raster:
    """
    A raster grid stored on disk.

    Acts as the grid source and grid sink of the distance tool: it exposes
    the shape, nodata and resolution from its metadata together with bounded
    ``get``/``set`` access to the cells.
    """

    def __init__(self, grid: BoundedGrid, meta: RasterMeta,
                 path: Optional[Union[str, pathlib.Path]] = None):
        if (meta.rows, meta.columns) != grid.shape:
            raise ValueError(
                f"Metadata shape {(meta.rows, meta.columns)} does not match grid shape {grid.shape}"
            )
        self.grid = grid
        self.meta = meta
        self.path = pathlib.Path(path) if path else None

    @classmethod
    def open(cls, path: Union[str, pathlib.Path]) -> 'Raster':
        """
        Read a raster and its sidecar metadata.

        Args:
            path: Raster file path

        Returns:
            Raster object
        """
        path = pathlib.Path(path)
        data = read_stored_array(path)

        meta = RasterMeta.load(path)
        if meta is None:
            logger.debug(f"No metadata sidecar for {path}, using defaults")
            meta = RasterMeta()
        meta.rows, meta.columns = data.shape

        # Stored nodata cells only compare equal to a nodata rounded the same way
        meta.nodata = stored_value(meta.nodata, data.dtype)
        if data.dtype.name in _DTYPES:
            meta.data_type = data.dtype.name

        return cls(BoundedGrid.from_array(data, nodata=meta.nodata), meta, path)

    @classmethod
    def initialize_using(cls, source: 'Raster', path: Union[str, pathlib.Path]) -> 'Raster':
        """
        Create a new raster with the shape, nodata and resolution of another.

        Every cell of the new raster starts as nodata. Metadata entries and the
        palette are not copied.

        Args:
            source: Raster to copy the configuration from
            path: File path for the new raster

        Returns:
            New, unwritten Raster
        """
        raster_format(path)
        meta = RasterMeta(
            rows=source.rows,
            columns=source.columns,
            nodata=source.nodata,
            resolution_x=source.resolution_x,
            resolution_y=source.resolution_y,
            data_type=source.meta.data_type,
        )
        grid = BoundedGrid(source.rows, source.columns, source.nodata, nodata=source.nodata)
        return cls(grid, meta, path)

    @property
    def rows(self) -> int:
        return self.grid.rows

    @property
    def columns(self) -> int:
        return self.grid.columns

    @property
    def nodata(self) -> float:
        return self.grid.nodata

    @property
    def resolution_x(self) -> float:
        return self.meta.resolution_x

    @property
    def resolution_y(self) -> float:
        return self.meta.resolution_y

    def get(self, row: int, col: int) -> float:
        return self.grid.get(row, col)

    def set(self, row: int, col: int, value: float) -> None:
        self.grid.set(row, col, value)

    def set_data(self, grid: BoundedGrid) -> None:
        """Replace all cell values with those of a grid of the same shape."""
        if grid.shape != self.grid.shape:
            raise ValueError(f"Grid shape {grid.shape} does not match raster shape {self.grid.shape}")
        self.grid.data[:] = grid.data

    def add_metadata_entry(self, entry: str) -> None:
        self.meta.metadata.append(entry)

    def write(self) -> pathlib.Path:
        """
        Write the raster and its sidecar metadata to ``self.path``.

        Returns:
            Path of the written raster
        """
        if not self.path:
            raise RuntimeError("No storage path for Raster")

        dtype = _DTYPES.get(self.meta.data_type, np.float32)
        write_array(self.path, self.grid.data, dtype=dtype)
        self.meta.save(self.path)
        return self.path
