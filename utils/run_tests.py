#!/usr/bin/env python3
"""
Script to run tests for the raster_distance package.

This script provides a simple command-line interface for running tests
in the raster_distance package. It supports running tests for specific
components or all tests. The pytest-style raster tests are collected too,
so pytest is used as the runner.

Examples:
    python utils/run_tests.py  # Run all tests
    python utils/run_tests.py rasters  # Run only raster tests
    python utils/run_tests.py core/test_grid.py  # Run a specific test module
"""

import sys
import argparse
from pathlib import Path

import pytest

TESTS_ROOT = Path(__file__).resolve().parent.parent / "tests"


def run_tests(test_path=None, verbose=True):
    """Run tests from the specified path and return the pytest exit code."""
    if test_path is None:
        target = TESTS_ROOT
    else:
        # Accept both "tests/core" and "core" style paths
        test_path = str(test_path)
        if test_path.startswith("tests/"):
            test_path = test_path[len("tests/"):]
        target = TESTS_ROOT / test_path

    args = [str(target)]
    if verbose:
        args.append("-v")
    return pytest.main(args)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description='Run raster_distance tests')
    parser.add_argument('test_path', nargs='?', help='Path to specific test or directory')
    parser.add_argument('-q', '--quiet', action='store_true', help='Less verbose output')
    args = parser.parse_args()

    sys.exit(run_tests(args.test_path, verbose=not args.quiet))
