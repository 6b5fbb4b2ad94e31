"""Core functionality for raster_distance package."""

from .distance_transform import euclidean_distance, euclidean_distance_grid, distance_field

__all__ = ["euclidean_distance", "euclidean_distance_grid", "distance_field"]
