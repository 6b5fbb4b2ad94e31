"""
Visualization utilities for distance rasters.
"""

import math
from typing import Optional

import numpy as np
import matplotlib
import matplotlib.pyplot as plt


def mask_invalid(values: np.ndarray, nodata: float) -> np.ma.MaskedArray:
    """
    Mask nodata and non-finite cells of a raster.

    Args:
        values: 2D raster values
        nodata: Missing-data sentinel

    Returns:
        Masked array hiding nodata, NaN and infinite cells
    """
    values = np.asarray(values, dtype=np.float64)
    invalid = ~np.isfinite(values)
    if not math.isnan(nodata):
        invalid |= values == nodata
    return np.ma.masked_array(values, mask=invalid)


def plot_distance_grid(values: np.ndarray, nodata: float,
                       savepath: Optional[str] = None,
                       title: Optional[str] = None,
                       ax: Optional[plt.Axes] = None) -> plt.Axes:
    """
    Plot a distance raster as a heatmap.

    Args:
        values: 2D distance values in ground units
        nodata: Missing-data sentinel, drawn as blank cells
        savepath: Optional PNG path; the figure is saved and closed
        title: Optional title for the plot
        ax: Optional axes to plot on

    Returns:
        The matplotlib Axes used for plotting
    """
    masked = mask_invalid(values, nodata)

    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 6))
    else:
        fig = ax.figure

    cmap = matplotlib.colormaps["Spectral_r"].with_extremes(bad="white")
    image = ax.imshow(masked, cmap=cmap, interpolation="nearest")
    fig.colorbar(image, ax=ax, label="distance")

    ax.set_xlabel("column")
    ax.set_ylabel("row")
    if title:
        ax.set_title(title)

    if savepath:
        fig.savefig(savepath, dpi=150, bbox_inches="tight")
        plt.close(fig)

    return ax
