"""
EuclideanDistance tool.

Estimates the Euclidean (straight-line) distance between each grid cell and the
nearest target cell of the input raster. Target cells are all non-zero,
non-nodata cells. Distances are measured in the horizontal units of the input.

All nodata cells of the input are nodata in the output, so nodata is not a
suitable background value: background areas should be zero.
"""

import os
import json
import time
import logging
from dataclasses import dataclass, asdict, field
from typing import List, Optional

from raster_distance.core.distance_transform import euclidean_distance_grid, ProgressCallback
from raster_distance.rasters import Raster

logger = logging.getLogger(__name__)


class InvalidInvocationError(ValueError):
    """Raised when the tool is run without its required parameters."""


@dataclass
class ToolParameter:
    name: str
    flags: List[str]
    description: str
    parameter_type: str
    default_value: Optional[str] = None
    optional: bool = False


def format_elapsed_time(seconds: float) -> str:
    """Format a duration as e.g. '532.1ms', '4.210s' or '2min 3.500s'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    minutes, seconds = divmod(seconds, 60.0)
    if minutes < 1:
        return f"{seconds:.3f}s"
    return f"{int(minutes)}min {seconds:.3f}s"


def resolve_path(path: str, working_directory: str) -> str:
    """Resolve a bare file name against the working directory; paths with separators are kept."""
    if os.sep in path or "/" in path:
        return path
    return os.path.join(working_directory, path)


@dataclass
class EuclideanDistanceTool:
    """Descriptor and runner for the Euclidean distance transform."""

    name: str = "EuclideanDistance"
    description: str = "Calculates the Shih and Wu (2004) Euclidean distance transform."
    toolbox: str = "GIS Analysis/Distance Tools"
    parameters: List[ToolParameter] = field(default_factory=lambda: [
        ToolParameter(
            name="Input File",
            flags=["-i", "--input"],
            description="Input raster file.",
            parameter_type="ExistingFile(Raster)",
        ),
        ToolParameter(
            name="Output File",
            flags=["-o", "--output"],
            description="Output raster file.",
            parameter_type="NewFile(Raster)",
        ),
    ])

    def get_tool_parameters(self) -> str:
        """Return the parameter descriptors as a JSON string."""
        return json.dumps({"parameters": [asdict(p) for p in self.parameters]})

    def get_example_usage(self) -> str:
        return 'euclidean-distance -v --wd="/path/to/data/" -i=DEM.tif -o=output.tif'

    def _welcome(self) -> None:
        width = max(len(f"* Welcome to {self.name} *"), 28)
        logger.info("*" * width)
        logger.info(f"* Welcome to {self.name}".ljust(width - 1) + "*")
        logger.info("* Powered by raster_distance".ljust(width - 1) + "*")
        logger.info("*" * width)

    def run(self, input_file: Optional[str], output_file: Optional[str],
            working_directory: str = "", verbose: bool = False,
            progress: Optional[ProgressCallback] = None) -> Raster:
        """
        Read the input raster, run the transform and write the output raster.

        Args:
            input_file: Input raster path or bare file name
            output_file: Output raster path or bare file name
            working_directory: Directory bare file names are resolved against
            verbose: Log the banner and I/O steps
            progress: Optional callable receiving (pass name, percent)

        Returns:
            The written output Raster

        Raises:
            InvalidInvocationError: If either file is missing
        """
        if not input_file or not output_file:
            raise InvalidInvocationError(
                "Tool run with no parameters: both an input and an output file are required."
            )

        input_file = resolve_path(input_file, working_directory)
        output_file = resolve_path(output_file, working_directory)

        if verbose:
            self._welcome()
            logger.info("Reading data...")

        source = Raster.open(input_file)
        output = Raster.initialize_using(source, output_file)
        output.meta.data_type = "float32"

        start = time.perf_counter()
        distances = euclidean_distance_grid(source.grid, source.meta.cell_size, progress)
        output.set_data(distances)
        elapsed_time = format_elapsed_time(time.perf_counter() - start)

        output.meta.palette = "spectrum.plt"
        output.add_metadata_entry(f"Created by raster_distance's {self.name} tool")
        output.add_metadata_entry(f"Input file: {input_file}")
        output.add_metadata_entry(f"Elapsed Time (excluding I/O): {elapsed_time}")

        if verbose:
            logger.info("Saving data...")
        output.write()
        if verbose:
            logger.info("Output file written")
            logger.info(f"Elapsed Time (excluding I/O): {elapsed_time}")

        return output
