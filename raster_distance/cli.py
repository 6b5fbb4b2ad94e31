#!/usr/bin/env python3
"""
Command-line entry point for the EuclideanDistance tool.

Usage:
    euclidean-distance -i <input-raster> -o <output-raster> [--wd <dir>] [-v] [--plot <png>]

Bare file names (without a path separator) are resolved against ``--wd``.
"""

import os
import sys
import logging
import argparse
from typing import List, Optional

from raster_distance.core.distance_transform import log_progress
from raster_distance.rasters import plot_distance_grid
from raster_distance.tool import EuclideanDistanceTool, InvalidInvocationError

logger = logging.getLogger(__name__)

EXIT_INVALID_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="euclidean-distance",
        description="Calculates the Shih and Wu (2004) Euclidean distance transform."
    )
    parser.add_argument("-i", "--input", help="Input raster file")
    parser.add_argument("-o", "--output", help="Output raster file")
    parser.add_argument("--wd", default=os.getcwd(),
                        help="Working directory for bare file names")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log progress of each pass")
    parser.add_argument("--plot", default=None,
                        help="Also save a PNG heatmap of the output to this path")
    parser.add_argument("--tool-info", action="store_true",
                        help="Print the tool parameters as JSON and exit")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main function."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    tool = EuclideanDistanceTool()
    if args.tool_info:
        print(tool.get_tool_parameters())
        return 0

    try:
        output = tool.run(
            args.input,
            args.output,
            working_directory=args.wd,
            verbose=args.verbose,
            progress=log_progress if args.verbose else None,
        )
    except InvalidInvocationError as e:
        logger.error(f"Invalid input: {e}")
        logger.error(f"Example usage: {tool.get_example_usage()}")
        return EXIT_INVALID_INPUT

    if args.plot:
        plot_distance_grid(output.grid.data, output.nodata, savepath=args.plot,
                           title=f"{tool.name}: {os.path.basename(str(output.path))}")
        logger.info(f"Saved plot to {args.plot}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
