"""RasterMeta class for handling raster metadata sidecar files."""

import os
import json
import pathlib
import logging
from typing import Any, Dict, List, Optional, Union

import numpy as np

from raster_distance.rasters.raster_io import stored_value

logger = logging.getLogger(__name__)

DEFAULT_NODATA = -32768.0
META_SUFFIX = ".meta.json"


class NumpyJSONEncoder(json.JSONEncoder):
    """JSON encoder that can handle NumPy types."""
    def default(self, obj):
        if isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, np.ndarray):
            return obj.tolist()
        return super().default(obj)


def meta_path_for(path: Union[str, pathlib.Path]) -> pathlib.Path:
    """Return the sidecar path for a raster file, e.g. ``dem.tif`` -> ``dem.tif.meta.json``."""
    path = pathlib.Path(path)
    return path.with_name(path.name + META_SUFFIX)


class RasterMeta:
    """
    Shape, nodata and resolution bookkeeping for a raster.

    The metadata is stored in a JSON sidecar next to the raster file. Missing
    sidecars fall back to a nodata of -32768 and unit resolution.
    """

    def __init__(self, rows: int = 0, columns: int = 0,
                 nodata: float = DEFAULT_NODATA,
                 resolution_x: float = 1.0, resolution_y: float = 1.0,
                 data_type: str = "float32", palette: str = "default",
                 metadata: Optional[List[str]] = None):
        self.rows = int(rows)
        self.columns = int(columns)
        self.nodata = float(nodata)
        self.resolution_x = float(resolution_x)
        self.resolution_y = float(resolution_y)
        self.data_type = data_type
        self.palette = palette
        self.metadata: List[str] = list(metadata or [])

    @property
    def cell_size(self) -> float:
        """Average of the horizontal and vertical resolution."""
        return (self.resolution_x + self.resolution_y) / 2.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rows": self.rows,
            "columns": self.columns,
            "nodata": stored_value(self.nodata, self.data_type),
            "resolution_x": self.resolution_x,
            "resolution_y": self.resolution_y,
            "data_type": self.data_type,
            "palette": self.palette,
            "metadata": list(self.metadata),
        }

    @classmethod
    def from_dict(cls, json_data: Dict[str, Any]) -> 'RasterMeta':
        return cls(
            rows=json_data.get("rows", 0),
            columns=json_data.get("columns", 0),
            nodata=json_data.get("nodata", DEFAULT_NODATA),
            resolution_x=json_data.get("resolution_x", 1.0),
            resolution_y=json_data.get("resolution_y", 1.0),
            data_type=json_data.get("data_type", "float32"),
            palette=json_data.get("palette", "default"),
            metadata=json_data.get("metadata", []),
        )

    @classmethod
    def load(cls, raster_path: Union[str, pathlib.Path]) -> Optional['RasterMeta']:
        """
        Load the sidecar metadata of a raster.

        Args:
            raster_path: Path of the raster file (not the sidecar)

        Returns:
            RasterMeta, or None if no sidecar exists
        """
        meta_path = meta_path_for(raster_path)
        if not meta_path.exists():
            return None

        with open(meta_path, 'r') as f:
            return cls.from_dict(json.load(f))

    def save(self, raster_path: Union[str, pathlib.Path]) -> pathlib.Path:
        """
        Write the sidecar metadata for a raster.

        Args:
            raster_path: Path of the raster file (not the sidecar)

        Returns:
            Path of the written sidecar
        """
        meta_path = meta_path_for(raster_path)
        tmp_path = meta_path.with_name(meta_path.name + ".tmp")

        with open(tmp_path, 'w') as f:
            json.dump(self.to_dict(), f, indent=4, cls=NumpyJSONEncoder)

        # Rename to make creation atomic
        os.replace(tmp_path, meta_path)
        logger.debug(f"Wrote raster metadata to {meta_path}")
        return meta_path
