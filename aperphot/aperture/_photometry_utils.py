# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
This module contains tools to validate and handle photometry inputs.
"""

import warnings

import astropy.units as u
import numpy as np
from astropy.nddata import StdDevUncertainty
from astropy.utils.exceptions import AstropyUserWarning


def _validate_inputs(data, error):
    """
    Validate inputs.

    ``data`` and ``error`` are converted to a `~numpy.ndarray`, if
    necessary.

    Used to parse inputs to `~aperphot.aperture.aperture_photometry`
    and `~aperphot.aperture.PixelAperture.do_photometry`.
    """
    data = np.asanyarray(data)
    if data.ndim != 2:
        raise ValueError('data must be a 2D array.')

    if error is not None:
        error = np.asanyarray(error)
        if error.shape != data.shape:
            raise ValueError('error and data must have the same shape.')

    return data, error


def _validate_mask(mask, shape):
    """
    Validate an optional boolean pixel mask against the data shape.
    """
    if mask is None:
        return None

    mask = np.asanyarray(mask, dtype=bool)
    if mask.shape != shape:
        raise ValueError('mask and data must have the same shape.')

    return mask


def _handle_units(data, error):
    """
    Handle Quantity inputs.

    Any units on ``data`` and ``error`` are removed. ``data`` and
    ``error`` are returned as `~numpy.ndarray`. The returned ``unit``
    represents the unit for both ``data`` and ``error``.

    Used to parse inputs to `~aperphot.aperture.aperture_photometry`
    and `~aperphot.aperture.PixelAperture.do_photometry`.
    """
    inputs = (data, error)
    has_unit = [isinstance(x, u.Quantity) for x in inputs if x is not None]
    use_units = all(has_unit)
    if any(has_unit) and not use_units:
        raise ValueError('If data or error has units, then they both must '
                         'have the same units.')

    # strip data and error units for performance
    if use_units:
        unit = data.unit
        if error is not None and error.unit != unit:
            raise ValueError('If data or error has units, then they both '
                             'must have the same units.')

        data = data.value
        if error is not None:
            error = error.value
    else:
        unit = None

    return data, error, unit


def _unpack_nddata(data, error, mask):
    """
    Extract the data, error, and mask arrays from an
    `~astropy.nddata.NDData` object.

    The ``error`` and ``mask`` keywords are ignored (with a warning)
    for `~astropy.nddata.NDData` input. The error array is taken from
    the ``uncertainty`` attribute only if it is a
    `~astropy.nddata.StdDevUncertainty`.
    """
    nddata_attr = {'error': error, 'mask': mask}
    for key, value in nddata_attr.items():
        if value is not None:
            warnings.warn(f'The {key!r} keyword will be ignored. Its value '
                          'is obtained from the input NDData object.',
                          AstropyUserWarning)

    mask = data.mask
    error = None
    if isinstance(data.uncertainty, StdDevUncertainty):
        if data.uncertainty.unit is None:
            error = data.uncertainty.array
        else:
            error = data.uncertainty.array * data.uncertainty.unit

    if data.unit is not None:
        values = u.Quantity(data.data, unit=data.unit)
    else:
        values = data.data

    return values, error, mask

