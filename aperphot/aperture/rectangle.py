# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
This module defines rectangular and rectangular-annulus apertures in
pixel coordinates.
"""

import math

import astropy.units as u
import numpy as np
from astropy.utils import lazyproperty

from aperphot.aperture.attributes import (NonNegativeScalar, PixelPosition,
                                          ScalarAngleOrValue)
from aperphot.aperture.core import PixelAperture
from aperphot.geometry import (rectangle_contains, rectangle_to_canonical,
                               rectangular_overlap_grid)

__all__ = ['RectangularMaskMixin', 'RectangularAperture',
           'RectangularAnnulus']


class RectangularMaskMixin:
    """
    Mixin class to compute overlap fractions and inclusion tests for
    rectangular and rectangular-annulus aperture objects.

    The "exact" overlap of a rectangle is computed by clipping the
    boundary pixels against the rectangle polygon.
    """

    @property
    def _outer_size(self):
        if hasattr(self, 'w'):
            return self.w, self.h
        if hasattr(self, 'w_out'):  # annulus
            return self.w_out, self.h_out
        raise ValueError('Cannot determine the aperture shape.')

    @lazyproperty
    def _theta_radians(self):
        return self.theta.to_value(u.radian)

    def _overlap_grid(self, edges, shape, use_exact, subpixels):
        ny, nx = shape
        width, height = self._outer_size
        frac = rectangular_overlap_grid(*edges, nx, ny, width, height,
                                        self._theta_radians, use_exact,
                                        subpixels)

        # subtract the inner rectangle for an annulus
        if hasattr(self, 'w_in'):
            frac -= rectangular_overlap_grid(*edges, nx, ny, self.w_in,
                                             self.h_in, self._theta_radians,
                                             use_exact, subpixels)
            np.clip(frac, 0.0, None, out=frac)

        return frac

    def contains(self, x, y):
        dx = np.asanyarray(x) - self.position[0]
        dy = np.asanyarray(y) - self.position[1]
        width, height = self._outer_size
        inside = rectangle_contains(dx, dy, width, height,
                                    self._theta_radians)
        if hasattr(self, 'w_in'):
            inside &= ~rectangle_contains(dx, dy, self.w_in, self.h_in,
                                          self._theta_radians)
        return inside

    def to_canonical(self, x, y):
        """
        Transform pixel coordinates to the frame where the rectangle is
        axis-aligned and centered on the origin.

        Parameters
        ----------
        x, y : float or array_like
            The absolute pixel coordinates.

        Returns
        -------
        u, v : float or `~numpy.ndarray`
            The canonical coordinates, in pixels.
        """
        return rectangle_to_canonical(np.asanyarray(x) - self.position[0],
                                      np.asanyarray(y) - self.position[1],
                                      self._theta_radians)

    @staticmethod
    def _calc_extents(width, height, theta):
        """
        Calculate half of the bounding box extents of a rectangle.
        """
        half_width = width / 2.0
        half_height = height / 2.0
        sin_theta = abs(math.sin(theta))
        cos_theta = abs(math.cos(theta))
        x_extent = half_width * cos_theta + half_height * sin_theta
        y_extent = half_width * sin_theta + half_height * cos_theta

        return x_extent, y_extent


class RectangularAperture(RectangularMaskMixin, PixelAperture):
    """
    A rectangular aperture defined in pixel coordinates.

    Parameters
    ----------
    position : array_like
        The ``(x, y)`` pixel coordinates of the aperture center.

    w : float
        The full width of the rectangle in pixels. For ``theta=0`` the
        width side is along the ``x`` axis.

    h : float
        The full height of the rectangle in pixels. For ``theta=0``
        the height side is along the ``y`` axis.

    theta : float or `~astropy.units.Quantity`, optional
        The rotation angle as an angular quantity
        (`~astropy.units.Quantity` or `~astropy.coordinates.Angle`)
        or value in radians (as a float) from the positive ``x`` axis.
        The rotation angle increases counterclockwise.

    Raises
    ------
    ValueError : `ValueError`
        If either width (``w``) or height (``h``) is negative.

    Examples
    --------
    >>> from aperphot.aperture import RectangularAperture
    >>> aper = RectangularAperture((10.5, 10.5), 10.0, 10.0)
    >>> aper.bbox
    BoundingBox(ixmin=6, ixmax=16, iymin=6, iymax=16)
    """

    _params = ('position', 'w', 'h', 'theta')
    position = PixelPosition('The center pixel position.')
    w = NonNegativeScalar('The full width in pixels.')
    h = NonNegativeScalar('The full height in pixels.')
    theta = ScalarAngleOrValue('The counterclockwise rotation angle as an '
                               'angular Quantity or value in radians from '
                               'the positive x axis.')

    def __init__(self, position, w, h, theta=0.0):
        self.position = position
        self.w = w
        self.h = h
        self.theta = theta

    @lazyproperty
    def _xy_extents(self):
        return self._calc_extents(self.w, self.h, self._theta_radians)

    @lazyproperty
    def area(self):
        return self.w * self.h


class RectangularAnnulus(RectangularMaskMixin, PixelAperture):
    r"""
    A rectangular annulus aperture defined in pixel coordinates.

    The inner and outer rectangles share the same center and rotation
    angle.

    Parameters
    ----------
    position : array_like
        The ``(x, y)`` pixel coordinates of the aperture center.

    w_in : float
        The inner full width of the rectangular annulus in pixels.

    w_out : float
        The outer full width of the rectangular annulus in pixels.

    h_out : float
        The outer full height of the rectangular annulus in pixels.

    h_in : `None` or float, optional
        The inner full height of the rectangular annulus in pixels. If
        `None`, then the inner full height is calculated as:

        .. math::

            h_{in} = h_{out} \left(\frac{w_{in}}{w_{out}}\right)

    theta : float or `~astropy.units.Quantity`, optional
        The rotation angle as an angular quantity
        (`~astropy.units.Quantity` or `~astropy.coordinates.Angle`)
        or value in radians (as a float) from the positive ``x`` axis.
        The rotation angle increases counterclockwise.

    Raises
    ------
    ValueError : `ValueError`
        If the inner rectangle is not strictly inside the outer
        rectangle (``w_out <= w_in`` or ``h_out <= h_in``).

    Examples
    --------
    >>> from aperphot.aperture import RectangularAnnulus
    >>> aper = RectangularAnnulus((10.0, 20.0), 3.0, 8.0, 5.0)
    """

    _params = ('position', 'w_in', 'w_out', 'h_out', 'h_in', 'theta')
    position = PixelPosition('The center pixel position.')
    w_in = NonNegativeScalar('The inner full width in pixels.')
    w_out = NonNegativeScalar('The outer full width in pixels.')
    h_in = NonNegativeScalar('The inner full height in pixels.')
    h_out = NonNegativeScalar('The outer full height in pixels.')
    theta = ScalarAngleOrValue('The counterclockwise rotation angle as an '
                               'angular Quantity or value in radians from '
                               'the positive x axis.')

    def __init__(self, position, w_in, w_out, h_out, h_in=None, theta=0.0):
        self.position = position
        self.w_in = w_in
        self.w_out = w_out
        self.h_out = h_out
        if not self.w_out > self.w_in:
            raise ValueError('"w_out" must be greater than "w_in"')

        if h_in is None:
            h_in = self.w_in * self.h_out / self.w_out
        self.h_in = h_in
        if not self.h_out > self.h_in:
            raise ValueError('"h_out" must be greater than "h_in"')

        self.theta = theta

    @lazyproperty
    def _xy_extents(self):
        return self._calc_extents(self.w_out, self.h_out,
                                  self._theta_radians)

    @lazyproperty
    def area(self):
        return self.w_out * self.h_out - self.w_in * self.h_in
