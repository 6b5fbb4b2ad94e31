"""
Test package for the raster_distance module.

This package contains tests for all components of the raster_distance module,
organized into subdirectories that mirror the structure of the main package.

Subdirectories:
- core: Tests for core functionality (bounded grid, distance transform passes)
- rasters: Tests for raster I/O, metadata and visualization

To run all tests:
    python -m unittest discover tests

To run tests in a specific directory:
    python -m unittest discover tests/core
"""
