# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
This module defines elliptical and elliptical-annulus apertures in
pixel coordinates.
"""

import math

import astropy.units as u
import numpy as np
from astropy.utils import lazyproperty

from aperphot.aperture.attributes import (NonNegativeScalar, PixelPosition,
                                          ScalarAngleOrValue)
from aperphot.aperture.core import PixelAperture
from aperphot.geometry import (ellipse_contains, ellipse_to_canonical,
                               elliptical_overlap_grid)

__all__ = ['EllipticalMaskMixin', 'EllipticalAperture', 'EllipticalAnnulus']


class EllipticalMaskMixin:
    """
    Mixin class to compute overlap fractions and inclusion tests for
    elliptical and elliptical-annulus aperture objects.
    """

    @property
    def _outer_axes(self):
        if hasattr(self, 'a'):
            return self.a, self.b
        if hasattr(self, 'a_out'):  # annulus
            return self.a_out, self.b_out
        raise ValueError('Cannot determine the aperture shape.')

    @lazyproperty
    def _theta_radians(self):
        return self.theta.to_value(u.radian)

    def _overlap_grid(self, edges, shape, use_exact, subpixels):
        ny, nx = shape
        a, b = self._outer_axes
        frac = elliptical_overlap_grid(*edges, nx, ny, a, b,
                                       self._theta_radians, use_exact,
                                       subpixels)

        # subtract the inner ellipse for an annulus
        if hasattr(self, 'a_in'):
            frac -= elliptical_overlap_grid(*edges, nx, ny, self.a_in,
                                            self.b_in, self._theta_radians,
                                            use_exact, subpixels)
            np.clip(frac, 0.0, None, out=frac)

        return frac

    def contains(self, x, y):
        dx = np.asanyarray(x) - self.position[0]
        dy = np.asanyarray(y) - self.position[1]
        a, b = self._outer_axes
        inside = ellipse_contains(dx, dy, a, b, self._theta_radians)
        if hasattr(self, 'a_in'):
            inside = inside & ~ellipse_contains(dx, dy, self.a_in, self.b_in,
                                                self._theta_radians)
        return inside

    def to_canonical(self, x, y):
        """
        Transform pixel coordinates to the frame where the (outer)
        ellipse is the unit circle centered on the origin.

        The coordinates are shifted to the aperture center, rotated by
        ``-theta``, and scaled by ``(1 / a, 1 / b)``.

        Parameters
        ----------
        x, y : float or array_like
            The absolute pixel coordinates.

        Returns
        -------
        u, v : float or `~numpy.ndarray`
            The canonical coordinates.
        """
        a, b = self._outer_axes
        if a == 0 or b == 0:
            raise ValueError('A zero-size aperture has no canonical frame.')
        return ellipse_to_canonical(np.asanyarray(x) - self.position[0],
                                    np.asanyarray(y) - self.position[1],
                                    a, b, self._theta_radians)

    @staticmethod
    def _calc_extents(semimajor_axis, semiminor_axis, theta):
        """
        Calculate half of the bounding box extents of an ellipse.
        """
        cos_theta = math.cos(theta)
        sin_theta = math.sin(theta)
        x_extent = math.hypot(semimajor_axis * cos_theta,
                              semiminor_axis * sin_theta)
        y_extent = math.hypot(semimajor_axis * sin_theta,
                              semiminor_axis * cos_theta)

        return x_extent, y_extent


class EllipticalAperture(EllipticalMaskMixin, PixelAperture):
    """
    An elliptical aperture defined in pixel coordinates.

    Parameters
    ----------
    position : array_like
        The ``(x, y)`` pixel coordinates of the aperture center.

    a : float
        The semimajor axis of the ellipse in pixels.

    b : float
        The semiminor axis of the ellipse in pixels.

    theta : float or `~astropy.units.Quantity`, optional
        The rotation angle as an angular quantity
        (`~astropy.units.Quantity` or `~astropy.coordinates.Angle`)
        or value in radians (as a float) from the positive ``x`` axis.
        The rotation angle increases counterclockwise.

    Raises
    ------
    ValueError : `ValueError`
        If either axis (``a`` or ``b``) is negative.

    Examples
    --------
    >>> from astropy.coordinates import Angle
    >>> from aperphot.aperture import EllipticalAperture

    >>> theta = Angle(80, 'deg')
    >>> aper = EllipticalAperture((10.0, 20.0), 5.0, 3.0)
    >>> aper = EllipticalAperture((10.0, 20.0), 5.0, 3.0, theta=theta)
    """

    _params = ('position', 'a', 'b', 'theta')
    position = PixelPosition('The center pixel position.')
    a = NonNegativeScalar('The semimajor axis in pixels.')
    b = NonNegativeScalar('The semiminor axis in pixels.')
    theta = ScalarAngleOrValue('The counterclockwise rotation angle as an '
                               'angular Quantity or value in radians from '
                               'the positive x axis.')

    def __init__(self, position, a, b, theta=0.0):
        self.position = position
        self.a = a
        self.b = b
        self.theta = theta

    @lazyproperty
    def _xy_extents(self):
        return self._calc_extents(self.a, self.b, self._theta_radians)

    @lazyproperty
    def area(self):
        return math.pi * self.a * self.b


class EllipticalAnnulus(EllipticalMaskMixin, PixelAperture):
    r"""
    An elliptical annulus aperture defined in pixel coordinates.

    The inner and outer ellipses share the same center and rotation
    angle.

    Parameters
    ----------
    position : array_like
        The ``(x, y)`` pixel coordinates of the aperture center.

    a_in : float
        The inner semimajor axis of the elliptical annulus in pixels.

    a_out : float
        The outer semimajor axis of the elliptical annulus in pixels.

    b_out : float
        The outer semiminor axis of the elliptical annulus in pixels.

    b_in : `None` or float, optional
        The inner semiminor axis of the elliptical annulus in pixels.
        If `None`, then the inner semiminor axis is calculated as:

        .. math::

            b_{in} = b_{out} \left(\frac{a_{in}}{a_{out}}\right)

    theta : float or `~astropy.units.Quantity`, optional
        The rotation angle as an angular quantity
        (`~astropy.units.Quantity` or `~astropy.coordinates.Angle`)
        or value in radians (as a float) from the positive ``x`` axis.
        The rotation angle increases counterclockwise.

    Raises
    ------
    ValueError : `ValueError`
        If the inner ellipse is not strictly inside the outer ellipse
        (``a_out <= a_in`` or ``b_out <= b_in``).

    Examples
    --------
    >>> from aperphot.aperture import EllipticalAnnulus
    >>> aper = EllipticalAnnulus((10.0, 20.0), 3.0, 8.0, 5.0)
    >>> aper.b_in
    1.875
    """

    _params = ('position', 'a_in', 'a_out', 'b_out', 'b_in', 'theta')
    position = PixelPosition('The center pixel position.')
    a_in = NonNegativeScalar('The inner semimajor axis in pixels.')
    a_out = NonNegativeScalar('The outer semimajor axis in pixels.')
    b_in = NonNegativeScalar('The inner semiminor axis in pixels.')
    b_out = NonNegativeScalar('The outer semiminor axis in pixels.')
    theta = ScalarAngleOrValue('The counterclockwise rotation angle as an '
                               'angular Quantity or value in radians from '
                               'the positive x axis.')

    def __init__(self, position, a_in, a_out, b_out, b_in=None, theta=0.0):
        self.position = position
        self.a_in = a_in
        self.a_out = a_out
        self.b_out = b_out
        if not self.a_out > self.a_in:
            raise ValueError('"a_out" must be greater than "a_in".')

        if b_in is None:
            b_in = self.b_out * self.a_in / self.a_out
        self.b_in = b_in
        if not self.b_out > self.b_in:
            raise ValueError('"b_out" must be greater than "b_in".')

        self.theta = theta

    @lazyproperty
    def _xy_extents(self):
        return self._calc_extents(self.a_out, self.b_out,
                                  self._theta_radians)

    @lazyproperty
    def area(self):
        return math.pi * (self.a_out * self.b_out - self.a_in * self.b_in)
