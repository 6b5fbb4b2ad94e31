"""
Reading and writing raster grids.

The on-disk format is chosen from the file extension:

- ``.npy``: numpy array file
- ``.tif``, ``.tiff``, ``.png``: image files via Pillow (written as 32-bit float TIFF)
- ``.zarr``: zarr array store
- ``.pt``: tensor saved with ``torch.save``
"""

import pathlib
import logging
from typing import Union

import numpy as np
import torch
import zarr
from PIL import Image

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = (".tif", ".tiff", ".png")
WRITABLE_IMAGE_SUFFIXES = (".tif", ".tiff")
SUPPORTED_SUFFIXES = (".npy", ".zarr", ".pt") + IMAGE_SUFFIXES


class UnsupportedFormatError(ValueError):
    """Raised when a raster path has an extension no reader or writer handles."""


def raster_format(path: Union[str, pathlib.Path]) -> str:
    """
    Get the normalized extension of a raster path.

    Raises:
        UnsupportedFormatError: If the extension is not supported
    """
    suffix = pathlib.Path(path).suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise UnsupportedFormatError(
            f"Unsupported raster format '{suffix}' for {path}; "
            f"expected one of {', '.join(SUPPORTED_SUFFIXES)}"
        )
    return suffix


def read_stored_array(path: Union[str, pathlib.Path]) -> np.ndarray:
    """
    Read a 2D raster array from disk, keeping the dtype it was stored with.

    Args:
        path: Raster file path

    Returns:
        2D array in its on-disk dtype
    """
    path = pathlib.Path(path)
    suffix = raster_format(path)

    if suffix == ".npy":
        data = np.load(path)
    elif suffix == ".zarr":
        data = zarr.load(str(path))
        if data is None or not isinstance(data, np.ndarray):
            raise ValueError(f"Expected a zarr array at {path}, found a group or nothing")
    elif suffix == ".pt":
        data = torch.load(path, map_location="cpu")
        if not isinstance(data, torch.Tensor):
            raise ValueError(f"Expected a tensor in {path}, got {type(data).__name__}")
        data = data.detach().numpy()
    else:
        with Image.open(path) as img:
            data = np.array(img)

    data = np.asarray(data)
    if data.ndim != 2:
        raise ValueError(f"Expected a 2D raster in {path}, got shape {data.shape}")

    logger.debug(f"Read {data.shape[0]}x{data.shape[1]} {data.dtype} raster from {path}")
    return data


def read_array(path: Union[str, pathlib.Path]) -> np.ndarray:
    """
    Read a 2D raster array from disk.

    Args:
        path: Raster file path

    Returns:
        2D float64 array
    """
    return np.asarray(read_stored_array(path), dtype=np.float64)


def stored_value(value: float, dtype) -> float:
    """
    Round a value to what a cell of ``dtype`` can hold.

    Integer and unknown dtypes return the value unchanged.
    """
    try:
        dtype = np.dtype(dtype)
    except TypeError:
        return float(value)
    if not np.issubdtype(dtype, np.floating):
        return float(value)
    return float(dtype.type(value))


def write_array(path: Union[str, pathlib.Path], data: np.ndarray,
                dtype: type = np.float32) -> pathlib.Path:
    """
    Write a 2D raster array to disk.

    Args:
        path: Raster file path; the extension selects the format
        data: 2D array to write
        dtype: Data type of the stored cells

    Returns:
        The written path
    """
    path = pathlib.Path(path)
    suffix = raster_format(path)
    if suffix in IMAGE_SUFFIXES and suffix not in WRITABLE_IMAGE_SUFFIXES:
        raise UnsupportedFormatError(f"Can't write float rasters as '{suffix}', use .tif")

    data = np.asarray(data, dtype=dtype)
    if data.ndim != 2:
        raise ValueError(f"Expected a 2D raster, got shape {data.shape}")

    if suffix == ".npy":
        np.save(path, data)
    elif suffix == ".zarr":
        zarr.save_array(str(path), data)
    elif suffix == ".pt":
        torch.save(torch.from_numpy(data), path)
    else:
        # Pillow only stores single-band float images as 32-bit
        Image.fromarray(data.astype(np.float32)).save(path)

    logger.debug(f"Wrote {data.shape[0]}x{data.shape[1]} raster to {path}")
    return path
