"""Raster storage classes for the distance tools."""
from .raster import Raster
from .raster_meta import RasterMeta, NumpyJSONEncoder, meta_path_for, DEFAULT_NODATA
from .raster_io import (
    read_array,
    read_stored_array,
    stored_value,
    write_array,
    raster_format,
    UnsupportedFormatError,
)
from .visualization import mask_invalid, plot_distance_grid
