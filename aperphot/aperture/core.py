# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
Define the base aperture classes.
"""

import abc
import warnings
from copy import deepcopy

import numpy as np
from astropy import log
from astropy.utils import lazyproperty

from aperphot.aperture._photometry_utils import (_handle_units,
                                                 _validate_inputs,
                                                 _validate_mask)
from aperphot.aperture.bounding_box import BoundingBox
from aperphot.aperture.mask import ApertureMask
from aperphot.utils._repr import make_repr
from aperphot.utils.exceptions import NonFiniteValueWarning

__all__ = ['Aperture', 'PixelAperture']


class Aperture(metaclass=abc.ABCMeta):
    """
    Abstract base class for all apertures.
    """

    _params = ()

    def __repr__(self):
        return f'<{make_repr(self, self._params)}>'

    def __str__(self):
        return make_repr(self, self._params, long=True)

    def __eq__(self, other):
        """
        Equality operator for `Aperture`.

        All Aperture parameters are compared for strict equality except
        for Quantity parameters, which allow for different units if they
        are directly convertible.
        """
        if not isinstance(other, self.__class__):
            return False

        if list(self._params) != list(other._params):
            return False

        # Quantity comparisons allow for different units if they are
        # directly convertible (e.g., 1.0 * u.deg == 60.0 * u.arcmin)
        for param in self._params:
            if np.any(getattr(self, param) != getattr(other, param)):
                return False

        return True

    def __ne__(self, other):
        """
        Inequality operator for `Aperture`.
        """
        return not self == other

    def copy(self):
        """
        Make a deep copy of this object.

        Returns
        -------
        result : `Aperture`
            A deep copy of the Aperture object.
        """
        params_copy = {}
        for param in self._params:
            params_copy[param] = deepcopy(getattr(self, param))
        return self.__class__(**params_copy)


class PixelAperture(Aperture):
    """
    Abstract base class for apertures defined in pixel coordinates.

    A pixel aperture has a single center ``position``. Pixel ``(ix,
    iy)`` is centered at the integer coordinates ``(ix, iy)`` and spans
    ``ix - 0.5`` to ``ix + 0.5`` (and likewise in ``y``).
    """

    @staticmethod
    def _translate_mask_mode(method, subpixels):
        """
        Validate the overlap method and return the ``(use_exact,
        subpixels)`` values passed to the low-level geometry functions.

        ``method`` may also be given as a ``('subpixel', subpixels)``
        tuple, which overrides the ``subpixels`` keyword.
        """
        if isinstance(method, tuple):
            if len(method) != 2 or not isinstance(method[0], str):
                msg = f'Invalid mask mode: {method}'
                raise ValueError(msg)
            method, subpixels = method
            if method != 'subpixel':
                msg = (f'Invalid mask mode: {method!r}. Only the "subpixel" '
                       'mode accepts a subpixel count')
                raise ValueError(msg)

        if not isinstance(method, str) or method not in ('center',
                                                          'subpixel',
                                                          'exact'):
            msg = f'Invalid mask mode: {method}'
            raise ValueError(msg)

        if method == 'subpixel' and (not isinstance(subpixels,
                                                    (int, np.integer))
                                     or isinstance(subpixels, bool)
                                     or subpixels <= 0):
            msg = 'subpixels must be a strictly positive integer'
            raise ValueError(msg)

        # the center method is the one-sample subpixel method
        if method == 'center':
            use_exact = 0
            subpixels = 1
        elif method == 'subpixel':
            use_exact = 0
            subpixels = int(subpixels)
        else:
            use_exact = 1
            subpixels = 1

        return use_exact, subpixels

    @property
    @abc.abstractmethod
    def _xy_extents(self):
        """
        The (x, y) extents of the aperture measured from the center
        position.

        In other words, the (x, y) extents are half of the aperture
        minimal bounding box size in each dimension.
        """
        msg = 'Needs to be implemented in a subclass'
        raise NotImplementedError(msg)

    @abc.abstractmethod
    def _overlap_grid(self, edges, shape, use_exact, subpixels):
        """
        Return the ``(ny, nx)`` array of overlap fractions on the pixel
        grid with the given centered ``(xmin, xmax, ymin, ymax)`` edges.
        """
        msg = 'Needs to be implemented in a subclass'
        raise NotImplementedError(msg)

    @lazyproperty
    def bbox(self):
        """
        The minimal bounding box for the aperture.

        The bounding box is not clipped to any image.
        """
        x_delta, y_delta = self._xy_extents
        xpos, ypos = self.position
        return BoundingBox.from_float(xpos - x_delta, xpos + x_delta,
                                      ypos - y_delta, ypos + y_delta)

    def _centered_edges(self, bbox):
        """
        The ``(xmin, xmax, ymin, ymax)`` pixel edges of the bounding box
        after recentering the aperture at the origin.

        These pixel edges are used by the low-level `aperphot.geometry`
        functions.
        """
        xpos, ypos = self.position
        return (bbox.ixmin - 0.5 - xpos, bbox.ixmax - 0.5 - xpos,
                bbox.iymin - 0.5 - ypos, bbox.iymax - 0.5 - ypos)

    def _fractions(self, bbox, use_exact, subpixels):
        return self._overlap_grid(self._centered_edges(bbox), bbox.shape,
                                  use_exact, subpixels)

    @property
    @abc.abstractmethod
    def area(self):
        """
        The exact geometric area of the aperture shape.

        Use the `area_overlap` method to return the area of overlap
        between the data and the aperture, taking into account the
        aperture mask method, masked data pixels (``mask`` keyword), and
        partial/no overlap of the aperture with the data.

        Returns
        -------
        area : float
            The aperture area.

        See Also
        --------
        area_overlap
        """
        msg = 'Needs to be implemented in a subclass'
        raise NotImplementedError(msg)

    @abc.abstractmethod
    def contains(self, x, y):
        """
        Test whether pixel coordinates lie inside the aperture.

        A point exactly on a boundary is outside of that boundary.
        For annuli, a point is inside if it is inside the outer
        boundary and not inside the inner boundary.

        Parameters
        ----------
        x, y : float or array_like
            The absolute pixel coordinates.

        Returns
        -------
        result : bool or `~numpy.ndarray` of bool
            `True` where the points lie inside the aperture.
        """
        msg = 'Needs to be implemented in a subclass'
        raise NotImplementedError(msg)

    @abc.abstractmethod
    def to_canonical(self, x, y):
        """
        Transform pixel coordinates to the canonical frame of the
        aperture shape.
        """
        msg = 'Needs to be implemented in a subclass'
        raise NotImplementedError(msg)

    def to_mask(self, method='exact', subpixels=5):
        """
        Return a mask for the aperture.

        Parameters
        ----------
        method : {'exact', 'center', 'subpixel'}, optional
            The method used to determine the overlap of the aperture
            on the pixel grid. Note that the more precise methods are
            generally slower. The following methods are available:

            * ``'exact'`` (default):
              The exact fractional overlap of the aperture and each
              pixel is calculated. The aperture weights will contain
              values between 0 and 1.

            * ``'center'``:
              A pixel is considered to be entirely in or out of the
              aperture depending on whether its center is in or out of
              the aperture. The aperture weights will contain values
              only of 0 (out) and 1 (in).

            * ``'subpixel'``:
              A pixel is divided into subpixels (see the ``subpixels``
              keyword), each of which are considered to be entirely in
              or out of the aperture depending on whether its center is
              in or out of the aperture. If ``subpixels=1``, this method
              is equivalent to ``'center'``. The aperture weights will
              contain values between 0 and 1. The method can also be
              given as a ``('subpixel', subpixels)`` tuple.

        subpixels : int, optional
            For the ``'subpixel'`` method, resample pixels by this
            factor in each dimension. That is, each pixel is divided
            into ``subpixels**2`` subpixels. This keyword is ignored
            unless ``method='subpixel'``.

        Returns
        -------
        mask : `~aperphot.aperture.ApertureMask`
            A mask for the aperture over its (unclipped) bounding box.
        """
        use_exact, subpixels = self._translate_mask_mode(method, subpixels)
        return ApertureMask(self._fractions(self.bbox, use_exact, subpixels),
                            self.bbox)

    def pixel_overlap(self, ix, iy, method='exact', subpixels=5):
        """
        Return the overlap fraction of the aperture with a single
        pixel.

        Parameters
        ----------
        ix, iy : int
            The pixel indices.

        method : {'exact', 'center', 'subpixel'}, optional
            The overlap method. See `to_mask`.

        subpixels : int, optional
            The subpixel sampling factor. See `to_mask`.

        Returns
        -------
        fraction : float
            The overlap fraction, between 0 and 1.
        """
        use_exact, subpixels = self._translate_mask_mode(method, subpixels)
        bbox = BoundingBox(ix, ix + 1, iy, iy + 1)
        return float(self._fractions(bbox, use_exact, subpixels)[0, 0])

    def area_overlap(self, data, *, mask=None, method='exact', subpixels=5):
        """
        Return the area of overlap between the data and the aperture.

        This method takes into account the aperture mask method, masked
        data pixels (``mask`` keyword), and partial/no overlap of the
        aperture with the data. In other words, it returns the area that
        is used to compute the aperture sum (assuming identical inputs).

        Parameters
        ----------
        data : array_like or `~astropy.units.Quantity`
            A 2D array.

        mask : array_like (bool), optional
            A boolean mask with the same shape as ``data`` where a
            `True` value indicates the corresponding element of ``data``
            is masked. Masked data are excluded from the area overlap.

        method : {'exact', 'center', 'subpixel'}, optional
            The overlap method. See `to_mask`.

        subpixels : int, optional
            The subpixel sampling factor. See `to_mask`.

        Returns
        -------
        area : float
            The area (in pixels**2) of overlap between the data and
            the aperture. Zero is returned if the aperture does not
            overlap the data.

        See Also
        --------
        area
        """
        data, _ = _validate_inputs(data, None)
        mask = _validate_mask(mask, data.shape)
        apermask = self.to_mask(method=method, subpixels=subpixels)
        weights, _, _ = apermask.get_values(data, mask=mask)
        return float(np.sum(weights))

    def _clipped_bbox(self, shape):
        """
        The aperture bounding box clipped to an image of the given
        shape, or `None` if they do not overlap.
        """
        bbox = self.bbox.intersection(BoundingBox.from_shape(shape))
        if bbox is None or bbox.is_empty:
            return None
        return bbox

    def do_photometry(self, data, error=None, mask=None, method='exact',
                      subpixels=5):
        """
        Perform aperture photometry on the input data.

        Parameters
        ----------
        data : array_like or `~astropy.units.Quantity` instance
            The 2D array on which to perform photometry. ``data`` should
            be background subtracted.

        error : array_like or `~astropy.units.Quantity`, optional
            The pixel-wise Gaussian 1-sigma errors of the input
            ``data``. ``error`` must have the same shape (and units)
            as the input ``data``.

        mask : array_like (bool), optional
            A boolean mask with the same shape as ``data`` where a
            `True` value indicates the corresponding element of ``data``
            is masked. Masked data are excluded from all calculations.

        method : {'exact', 'center', 'subpixel'}, optional
            The overlap method. See `to_mask`.

        subpixels : int, optional
            The subpixel sampling factor. See `to_mask`.

        Returns
        -------
        aperture_sum : float or `~astropy.units.Quantity`
            The sum of the overlap-weighted data values.

        aperture_sum_err : float, `~astropy.units.Quantity`, or `None`
            The uncertainty of ``aperture_sum``, ``sqrt(sum(f *
            error**2))`` where ``f`` are the overlap fractions. `None`
            if ``error`` is not input.

        Notes
        -----
        If the aperture does not overlap the data, the sum (and error)
        are zero. Non-finite ``data`` or ``error`` values within the
        aperture are excluded and a warning is issued.
        """
        data, error = _validate_inputs(data, error)
        data, error, unit = _handle_units(data, error)
        mask = _validate_mask(mask, data.shape)
        use_exact, subpixels = self._translate_mask_mode(method, subpixels)

        aperture_sum = 0.0
        aperture_sum_err = None if error is None else 0.0

        bbox = self._clipped_bbox(data.shape)
        if bbox is None:
            log.debug(f'{self.__class__.__name__} at {self.position} does '
                      f'not overlap the data of shape {data.shape}')
        else:
            apermask = ApertureMask(
                self._fractions(bbox, use_exact, subpixels), bbox)
            weights, values, errors = apermask.get_values(data, error=error,
                                                          mask=mask)

            finite = np.isfinite(values)
            if errors is not None:
                finite &= np.isfinite(errors)
                errors = errors[finite]
            if not np.all(finite):
                warnings.warn('Input data or error contains non-finite '
                              'values (e.g., NaN or inf) within the '
                              'aperture. They were excluded from the '
                              'photometry.', NonFiniteValueWarning)

            weights = weights[finite]
            aperture_sum = float(np.sum(values[finite] * weights))
            if errors is not None:
                aperture_sum_err = float(np.sqrt(np.sum(errors**2 * weights)))

        if unit is not None:
            aperture_sum <<= unit
            if aperture_sum_err is not None:
                aperture_sum_err <<= unit

        return aperture_sum, aperture_sum_err
