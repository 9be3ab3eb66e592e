# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
This module defines a function to compute the overlap of a circle with
a pixel grid.
"""

import numpy as np

from aperphot.geometry.core import (circle_contains, circle_polygon_overlap,
                                    pixel_corners, subpixel_fraction)

__all__ = ['circular_overlap_grid']


def circular_overlap_grid(xmin, xmax, ymin, ymax, nx, ny, r, use_exact,
                          subpixels):
    """
    Area of overlap between a circle and a pixel grid. The circle is
    centered on the origin.

    Parameters
    ----------
    xmin, xmax, ymin, ymax : float
        Extent of the grid in the x and y direction.

    nx, ny : int
        Grid dimensions.

    r : float
        The radius of the circle.

    use_exact : 0 or 1
        If ``1`` calculates exact overlap, if ``0`` uses ``subpixels``
        number of subpixels to calculate the overlap.

    subpixels : int
        Each pixel resampled by this factor in each dimension, thus
        each pixel is divided into ``subpixels ** 2`` subpixels.

    Returns
    -------
    frac : `~numpy.ndarray` (float)
        2D array of shape (ny, nx) giving the fraction of the overlap.
    """
    if r <= 0:
        return np.zeros((ny, nx))

    if not use_exact:
        return subpixel_fraction(lambda x, y: circle_contains(x, y, r),
                                 xmin, xmax, ymin, ymax, nx, ny, subpixels)

    cx, cy = pixel_corners(xmin, xmax, ymin, ymax, nx, ny)
    pixel_area = (xmax - xmin) * (ymax - ymin) / (nx * ny)
    frac = circle_polygon_overlap(cx, cy, r) / pixel_area
    return np.clip(frac, 0.0, 1.0)
