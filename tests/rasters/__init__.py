"""Tests for raster storage and visualization."""
