# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
This module defines a function to compute the overlap of an ellipse
with a pixel grid.
"""

import numpy as np

from aperphot.geometry.core import (circle_polygon_overlap, ellipse_contains,
                                    ellipse_to_canonical, pixel_corners,
                                    subpixel_fraction)

__all__ = ['elliptical_overlap_grid']


def elliptical_overlap_grid(xmin, xmax, ymin, ymax, nx, ny, rx, ry, theta,
                            use_exact, subpixels):
    """
    Area of overlap between an ellipse and a pixel grid. The ellipse is
    centered on the origin.

    Parameters
    ----------
    xmin, xmax, ymin, ymax : float
        Extent of the grid in the x and y direction.

    nx, ny : int
        Grid dimensions.

    rx : float
        The semimajor axis of the ellipse.

    ry : float
        The semiminor axis of the ellipse.

    theta : float
        The position angle of the semimajor axis in radians (counterclockwise).

    use_exact : 0 or 1
        If set to 1, calculates the exact overlap, while if set to 0,
        uses a subpixel sampling method with ``subpixels`` subpixels in
        each direction.

    subpixels : int
        If ``use_exact`` is 0, each pixel is resampled by this factor in
        each dimension. Thus, each pixel is divided into ``subpixels **
        2`` subpixels.

    Returns
    -------
    frac : `~numpy.ndarray`
        2D array giving the fraction of the overlap.
    """
    if rx <= 0 or ry <= 0:
        return np.zeros((ny, nx))

    if not use_exact:
        return subpixel_fraction(
            lambda x, y: ellipse_contains(x, y, rx, ry, theta),
            xmin, xmax, ymin, ymax, nx, ny, subpixels)

    # the ellipse becomes the unit circle and each pixel a parallelogram
    cx, cy = pixel_corners(xmin, xmax, ymin, ymax, nx, ny)
    cu, cv = ellipse_to_canonical(cx, cy, rx, ry, theta)
    pixel_area = (xmax - xmin) * (ymax - ymin) / (nx * ny)
    frac = circle_polygon_overlap(cu, cv, 1.0) * rx * ry / pixel_area
    return np.clip(frac, 0.0, 1.0)
