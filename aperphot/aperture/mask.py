# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
This module defines the overlap-weight mask of an aperture.
"""

import numpy as np

__all__ = ['ApertureMask']


class ApertureMask:
    """
    The overlap fractions of an aperture with the pixels of a bounding
    box.

    Parameters
    ----------
    data : array_like
        A 2D array of overlap fractions, between 0 and 1, with the
        shape of ``bbox``.

    bbox : `aperphot.aperture.BoundingBox`
        The pixel region covered by ``data``. It may extend beyond the
        edges of the images the mask is applied to.
    """

    def __init__(self, data, bbox):
        self.data = np.asanyarray(data)
        if self.data.shape != bbox.shape:
            raise ValueError('mask data and bounding box must have the same '
                             'shape')
        self.bbox = bbox

    def __array__(self, dtype=None, copy=None):
        return np.asarray(self.data, dtype=dtype)

    @property
    def shape(self):
        """
        The shape of the mask data array.
        """
        return self.data.shape

    def get_overlap_slices(self, shape):
        """
        Get slices for the overlapping part of the mask and a 2D array.

        See `~aperphot.aperture.BoundingBox.get_overlap_slices`.
        """
        return self.bbox.get_overlap_slices(shape)

    def get_values(self, data, error=None, mask=None):
        """
        Get the overlap weights and the pixel values covered by the
        mask.

        Only pixels within ``data``, with a nonzero weight and not
        flagged by ``mask`` are returned.

        Parameters
        ----------
        data : array_like
            A 2D array.

        error : array_like, optional
            A 2D array of pixel errors with the same shape as ``data``.

        mask : array_like (bool), optional
            A boolean mask with the same shape as ``data``. `True`
            values exclude the corresponding pixels.

        Returns
        -------
        weights, values : 1D `~numpy.ndarray`
            The overlap fractions and the matching ``data`` values. Both
            are empty if the mask does not overlap ``data``.

        errors : 1D `~numpy.ndarray` or `None`
            The matching ``error`` values, or `None` if ``error`` is not
            input.

        Examples
        --------
        >>> import numpy as np
        >>> from aperphot.aperture import BoundingBox, ApertureMask
        >>> apermask = ApertureMask([[0.0, 0.5], [1.0, 0.25]],
        ...                         BoundingBox(-1, 1, 0, 2))
        >>> data = np.arange(9.0).reshape(3, 3)
        >>> weights, values, errors = apermask.get_values(data)
        >>> weights
        array([0.5 , 0.25])
        >>> values
        array([0., 3.])
        """
        data = np.asanyarray(data)
        slc_large, slc_small = self.get_overlap_slices(data.shape)
        if slc_large is None:
            empty = np.array([])
            return empty, empty, None if error is None else empty

        weights = self.data[slc_small]
        good = weights > 0
        if mask is not None:
            good &= ~np.asanyarray(mask, dtype=bool)[slc_large]

        values = data[slc_large][good]
        if error is not None:
            error = np.asanyarray(error)[slc_large][good]

        return weights[good], values, error
