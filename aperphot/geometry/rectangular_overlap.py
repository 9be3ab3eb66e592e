# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
This module defines functions to compute the overlap of a rectangle or
a convex polygon with a pixel grid.
"""

import numpy as np

from aperphot.geometry.core import (polygon_contains, polygon_overlap_exact,
                                    rectangle_contains, rectangle_vertices,
                                    subpixel_fraction)

__all__ = ['rectangular_overlap_grid', 'polygon_overlap_grid']


def rectangular_overlap_grid(xmin, xmax, ymin, ymax, nx, ny, width, height,
                             theta, use_exact, subpixels):
    """
    Area of overlap between a rectangle and a pixel grid. The rectangle
    is centered on the origin.

    Parameters
    ----------
    xmin, xmax, ymin, ymax : float
        Extent of the grid in the x and y direction.

    nx, ny : int
        Grid dimensions.

    width : float
        The width of the rectangle.

    height : float
        The height of the rectangle.

    theta : float
        The position angle of the rectangle in radians
        (counterclockwise).

    use_exact : 0 or 1
        If set to 1, calculates the exact overlap by clipping the
        boundary pixels against the rectangle, while if set to 0, uses
        a subpixel sampling method with ``subpixels`` subpixels in each
        direction.

    subpixels : int
        If ``use_exact`` is 0, each pixel is resampled by this factor in
        each dimension. Thus, each pixel is divided into ``subpixels **
        2`` subpixels.

    Returns
    -------
    frac : `~numpy.ndarray`
        2D array giving the fraction of the overlap.
    """
    if width <= 0 or height <= 0:
        return np.zeros((ny, nx))

    if not use_exact:
        return subpixel_fraction(
            lambda x, y: rectangle_contains(x, y, width, height, theta),
            xmin, xmax, ymin, ymax, nx, ny, subpixels)

    vertices = rectangle_vertices(width, height, theta)
    return polygon_overlap_exact(xmin, xmax, ymin, ymax, nx, ny, vertices)


def polygon_overlap_grid(xmin, xmax, ymin, ymax, nx, ny, vertices, use_exact,
                         subpixels):
    """
    Area of overlap between a convex polygon and a pixel grid.

    Parameters
    ----------
    xmin, xmax, ymin, ymax : float
        Extent of the grid in the x and y direction.

    nx, ny : int
        Grid dimensions.

    vertices : array_like
        The ``(n, 2)`` vertices of a convex polygon, in either winding
        order.

    use_exact : 0 or 1
        If set to 1, calculates the exact overlap, while if set to 0,
        uses a subpixel sampling method with ``subpixels`` subpixels in
        each direction.

    subpixels : int
        If ``use_exact`` is 0, each pixel is resampled by this factor in
        each dimension.

    Returns
    -------
    frac : `~numpy.ndarray`
        2D array giving the fraction of the overlap.
    """
    if not use_exact:
        return subpixel_fraction(
            lambda x, y: polygon_contains(x, y, vertices),
            xmin, xmax, ymin, ymax, nx, ny, subpixels)

    return polygon_overlap_exact(xmin, xmax, ymin, ymax, nx, ny, vertices)
