# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
This module defines circular and circular-annulus apertures in pixel
coordinates.
"""

import math

import numpy as np
from astropy.utils import lazyproperty

from aperphot.aperture.attributes import NonNegativeScalar, PixelPosition
from aperphot.aperture.core import PixelAperture
from aperphot.geometry import circle_contains, circular_overlap_grid

__all__ = ['CircularMaskMixin', 'CircularAperture', 'CircularAnnulus']


class CircularMaskMixin:
    """
    Mixin class to compute overlap fractions and inclusion tests for
    circular and circular-annulus aperture objects.
    """

    @property
    def _radius(self):
        if hasattr(self, 'r'):
            return self.r
        if hasattr(self, 'r_out'):  # annulus
            return self.r_out
        raise ValueError('Cannot determine the aperture radius.')

    def _overlap_grid(self, edges, shape, use_exact, subpixels):
        ny, nx = shape
        frac = circular_overlap_grid(*edges, nx, ny, self._radius, use_exact,
                                     subpixels)

        # subtract the inner circle for an annulus
        if hasattr(self, 'r_in'):
            frac -= circular_overlap_grid(*edges, nx, ny, self.r_in,
                                          use_exact, subpixels)
            np.clip(frac, 0.0, None, out=frac)

        return frac

    def contains(self, x, y):
        dx = np.asanyarray(x) - self.position[0]
        dy = np.asanyarray(y) - self.position[1]
        inside = circle_contains(dx, dy, self._radius)
        if hasattr(self, 'r_in'):
            inside = inside & ~circle_contains(dx, dy, self.r_in)
        return inside

    def to_canonical(self, x, y):
        """
        Transform pixel coordinates to the frame where the (outer)
        circle is the unit circle centered on the origin.

        Parameters
        ----------
        x, y : float or array_like
            The absolute pixel coordinates.

        Returns
        -------
        u, v : float or `~numpy.ndarray`
            The canonical coordinates.
        """
        radius = self._radius
        if radius == 0:
            raise ValueError('A zero-radius aperture has no canonical frame.')
        return ((np.asanyarray(x) - self.position[0]) / radius,
                (np.asanyarray(y) - self.position[1]) / radius)


class CircularAperture(CircularMaskMixin, PixelAperture):
    """
    A circular aperture defined in pixel coordinates.

    Parameters
    ----------
    position : array_like
        The ``(x, y)`` pixel coordinates of the aperture center.

    r : float
        The radius of the circle in pixels.

    Raises
    ------
    ValueError : `ValueError`
        If the input radius, ``r``, is negative.

    Examples
    --------
    >>> from aperphot.aperture import CircularAperture
    >>> aper = CircularAperture((10.0, 20.0), 3.0)
    >>> aper.bbox
    BoundingBox(ixmin=7, ixmax=14, iymin=17, iymax=24)
    """

    _params = ('position', 'r')
    position = PixelPosition('The center pixel position.')
    r = NonNegativeScalar('The radius in pixels.')

    def __init__(self, position, r):
        self.position = position
        self.r = r

    @lazyproperty
    def _xy_extents(self):
        return self.r, self.r

    @lazyproperty
    def area(self):
        return math.pi * self.r**2


class CircularAnnulus(CircularMaskMixin, PixelAperture):
    """
    A circular annulus aperture defined in pixel coordinates.

    Parameters
    ----------
    position : array_like
        The ``(x, y)`` pixel coordinates of the aperture center.

    r_in : float
        The inner radius of the circular annulus in pixels.

    r_out : float
        The outer radius of the circular annulus in pixels.

    Raises
    ------
    ValueError : `ValueError`
        If inner radius (``r_in``) is not smaller than the outer radius
        (``r_out``) or if either radius is negative.

    Examples
    --------
    >>> from aperphot.aperture import CircularAnnulus
    >>> aper = CircularAnnulus((10.0, 20.0), 3.0, 5.0)
    """

    _params = ('position', 'r_in', 'r_out')
    position = PixelPosition('The center pixel position.')
    r_in = NonNegativeScalar('The inner radius in pixels.')
    r_out = NonNegativeScalar('The outer radius in pixels.')

    def __init__(self, position, r_in, r_out):
        self.position = position
        self.r_in = r_in
        self.r_out = r_out

        if not self.r_out > self.r_in:
            raise ValueError('r_out must be greater than r_in')

    @lazyproperty
    def _xy_extents(self):
        return self.r_out, self.r_out

    @lazyproperty
    def area(self):
        return math.pi * (self.r_out**2 - self.r_in**2)
