# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
Define descriptor classes for aperture attribute validation.

Aperture parameters are validated once, when the aperture is created.
They cannot be changed afterwards; create a new aperture instead.
"""

import astropy.units as u
import numpy as np

__all__ = ['ApertureAttribute', 'PixelPosition', 'NonNegativeScalar',
           'ScalarAngleOrValue']


class ApertureAttribute:
    """
    Base descriptor class for aperture attribute validation.

    Parameters
    ----------
    doc : str, optional
        The description string for the attribute.
    """

    def __init__(self, doc=''):
        self.__doc__ = doc
        self.name = ''

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, instance, owner):
        if instance is None:
            return self
        return instance.__dict__[self.name]

    def __set__(self, instance, value):
        if self.name in instance.__dict__:
            msg = (f'{self.name!r} cannot be changed after the aperture is '
                   'created')
            raise AttributeError(msg)
        instance.__dict__[self.name] = self._validate(value)

    def __delete__(self, instance):
        msg = f'{self.name!r} cannot be deleted'
        raise AttributeError(msg)

    def _validate(self, value):
        """
        Validate the attribute value and return the value to store.

        An exception is raised if the value is invalid.
        """
        raise NotImplementedError  # pragma: no cover


class PixelPosition(ApertureAttribute):
    """
    Validate and set a single ``(x, y)`` pixel position.

    The position is stored as a read-only 1D `~numpy.ndarray` of two
    floats.
    """

    def _validate(self, value):
        if isinstance(value, u.Quantity):
            msg = f'{self.name!r} must not be a Quantity'
            raise TypeError(msg)

        try:
            value = np.array(value, dtype=float)
        except (TypeError, ValueError) as exc:
            msg = f'{self.name!r} must be a (x, y) pixel position'
            raise ValueError(msg) from exc

        if value.shape != (2,):
            msg = (f'{self.name!r} must be a single (x, y) pixel position; '
                   'use a list of apertures for multiple positions')
            raise ValueError(msg)

        if np.any(~np.isfinite(value)):
            msg = (f'{self.name!r} must not contain any non-finite '
                   '(e.g., NaN or inf) values')
            raise ValueError(msg)

        value.flags.writeable = False
        return value


class NonNegativeScalar(ApertureAttribute):
    """
    Check that value is a finite, non-negative (>= 0) scalar.
    """

    def _validate(self, value):
        if isinstance(value, u.Quantity):
            msg = f'{self.name!r} must not be a Quantity'
            raise TypeError(msg)

        if (not np.isscalar(value) or isinstance(value, (str, bytes))
                or not np.isfinite(value) or value < 0):
            msg = f'{self.name!r} must be a non-negative scalar'
            raise ValueError(msg)

        return float(value)


class ScalarAngleOrValue(ApertureAttribute):
    """
    Check that value is a scalar angle, either as a
    `~astropy.coordinates.Angle` or `~astropy.units.Quantity` with
    angular units, or a scalar float.

    The value is always stored as a `~astropy.units.Quantity` with
    angular units. If the value is not a `~astropy.units.Quantity`, it
    is assumed to be in radians.
    """

    def _validate(self, value):
        if isinstance(value, u.Quantity):
            if not value.isscalar:
                msg = f'{self.name!r} must be a scalar'
                raise ValueError(msg)

            if value.unit.physical_type != 'angle':
                msg = f'{self.name!r} must have angular units'
                raise ValueError(msg)

            return value

        if isinstance(value, (str, bytes)) or not np.isscalar(value):
            msg = (f'If not an angle Quantity, {self.name!r} must be a '
                   'scalar float in radians')
            raise TypeError(msg)

        if not np.isfinite(value):
            msg = f'{self.name!r} must be finite'
            raise ValueError(msg)

        return float(value) << u.radian
