# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
This module defines tools to perform aperture photometry.
"""

import astropy.units as u
import numpy as np
from astropy.nddata import NDData
from astropy.table import QTable

from aperphot.aperture._photometry_utils import (_handle_units,
                                                 _unpack_nddata,
                                                 _validate_inputs,
                                                 _validate_mask)
from aperphot.aperture.core import Aperture, PixelAperture
from aperphot.utils._misc import _get_meta

__all__ = ['aperture_photometry']


def _validate_apertures(apertures):
    if isinstance(apertures, Aperture):
        apertures = (apertures,)

    try:
        apertures = tuple(apertures)
    except TypeError as exc:
        raise TypeError('apertures must be an Aperture or a sequence of '
                        'Aperture objects') from exc

    if len(apertures) == 0:
        raise ValueError('apertures must contain at least one Aperture')

    for aper in apertures:
        if not isinstance(aper, PixelAperture):
            raise TypeError('apertures must be an Aperture or a sequence '
                            'of Aperture objects, got '
                            f'{type(aper).__name__!r}')

    return apertures


def aperture_photometry(data, apertures, error=None, mask=None,
                        method='exact', subpixels=5):
    """
    Perform aperture photometry on the input data by summing the flux
    within the given aperture(s).

    Note that this function returns the sum of the (weighted) input
    ``data`` values within the aperture. It does not convert data
    in surface brightness units to flux or counts.

    Parameters
    ----------
    data : array_like, `~astropy.units.Quantity`, `~astropy.nddata.NDData`
        The 2D array on which to perform photometry. ``data`` should be
        background-subtracted. If ``data`` is a
        `~astropy.units.Quantity` array, then ``error`` (if input) must
        also be a `~astropy.units.Quantity` array with the same units.
        See the Notes section below for more information about
        `~astropy.nddata.NDData` input.

    apertures : `~aperphot.aperture.PixelAperture` or sequence of `~aperphot.aperture.PixelAperture`
        The aperture(s) to use for the photometry. Each aperture
        produces one row of the output table, in input order.

    error : array_like or `~astropy.units.Quantity`, optional
        The pixel-wise Gaussian 1-sigma errors of the input ``data``.
        ``error`` is assumed to include *all* sources of error,
        including the Poisson error of the sources. ``error`` must
        have the same shape as the input ``data``.

    mask : array_like (bool), optional
        A boolean mask with the same shape as ``data`` where a `True`
        value indicates the corresponding element of ``data`` is masked.
        Masked data are excluded from all calculations.

    method : {'exact', 'center', 'subpixel'}, optional
        The method used to determine the overlap of the aperture on the
        pixel grid. Note that the more precise methods are generally
        slower. The following methods are available:

            * ``'exact'`` (default):
                The exact fractional overlap of the aperture and
                each pixel is calculated. The aperture weights will
                contain values between 0 and 1.

            * ``'center'``:
                A pixel is considered to be entirely in or out of the
                aperture depending on whether its center is in or out of
                the aperture. The aperture weights will contain values
                only of 0 (out) and 1 (in).

            * ``'subpixel'``:
                A pixel is divided into subpixels (see the ``subpixels``
                keyword), each of which are considered to be entirely in
                or out of the aperture depending on whether its center
                is in or out of the aperture. If ``subpixels=1``, this
                method is equivalent to ``'center'``. The method can
                also be given as a ``('subpixel', subpixels)`` tuple.

    subpixels : int, optional
        For the ``'subpixel'`` method, resample pixels by this factor
        in each dimension. That is, each pixel is divided into
        ``subpixels**2`` subpixels. This keyword is ignored unless
        ``method='subpixel'``.

    Returns
    -------
    table : `~astropy.table.QTable`
        A table of the photometry with the following columns:

            * ``'id'``:
              The aperture ID (1-based, in input order).

            * ``'xcenter'``, ``'ycenter'``:
              The ``x`` and ``y`` pixel coordinates of the aperture
              centers.

            * ``'aperture_sum'``:
              The sum of the values within the aperture.

            * ``'aperture_sum_err'``:
              The corresponding uncertainty in the ``'aperture_sum'``
              values. Returned only if the input ``error`` is not
              `None`.

        The table metadata includes the package version numbers, the
        date, and the `aperture_photometry` calling arguments.

    Notes
    -----
    The aperture sum is ``sum(f * data)`` and its uncertainty is
    ``sqrt(sum(f * error**2))``, where ``f`` is the overlap fraction
    of each unmasked pixel. Apertures that do not overlap the data
    have a sum (and error) of zero.

    If the input ``data`` is a `~astropy.nddata.NDData` instance, then
    the ``error`` and ``mask`` keyword inputs are ignored. Instead,
    these values should be defined as attributes in the
    `~astropy.nddata.NDData` object. In the case of ``error``, it must
    be defined in the ``uncertainty`` attribute with a
    `~astropy.nddata.StdDevUncertainty` instance.
    """
    if isinstance(data, NDData):
        data, error, mask = _unpack_nddata(data, error, mask)
        return aperture_photometry(data, apertures, error=error, mask=mask,
                                   method=method, subpixels=subpixels)

    # validate all inputs before any pixel is processed
    apertures = _validate_apertures(apertures)
    data, error = _validate_inputs(data, error)
    data, error, unit = _handle_units(data, error)
    mask = _validate_mask(mask, data.shape)
    PixelAperture._translate_mask_mode(method, subpixels)

    calling_args = f'method={method!r}, subpixels={subpixels}'
    meta = _get_meta(aperture_photometry_args=calling_args)

    tbl = QTable()
    tbl.meta.update(meta)  # keep tbl.meta type

    tbl['id'] = np.arange(len(apertures), dtype=int) + 1

    positions = np.array([aper.position for aper in apertures])
    xypos_pixel = np.transpose(positions) * u.pixel
    tbl['xcenter'] = xypos_pixel[0]
    tbl['ycenter'] = xypos_pixel[1]

    aperture_sums = []
    aperture_sum_errs = []
    for aper in apertures:
        aper_sum, aper_sum_err = aper.do_photometry(data, error=error,
                                                    mask=mask, method=method,
                                                    subpixels=subpixels)
        aperture_sums.append(aper_sum)
        aperture_sum_errs.append(aper_sum_err)

    aperture_sums = np.array(aperture_sums)
    if unit is not None:
        aperture_sums <<= unit
    tbl['aperture_sum'] = aperture_sums

    if error is not None:
        aperture_sum_errs = np.array(aperture_sum_errs)
        if unit is not None:
            aperture_sum_errs <<= unit
        tbl['aperture_sum_err'] = aperture_sum_errs

    return tbl
