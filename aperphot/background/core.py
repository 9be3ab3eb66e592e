# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
This module defines classes to estimate the background in an array of
any dimension.
"""

import abc
import warnings

import numpy as np
from astropy.stats import SigmaClip

from aperphot.background.mesh import mesh_background
from aperphot.utils._repr import make_repr

__all__ = ['BackgroundBase', 'MeanBackground', 'MedianBackground',
           'ModeEstimatorBackground', 'estimate_background']


class BackgroundBase(metaclass=abc.ABCMeta):
    """
    Base class for classes that estimate scalar background values.

    Parameters
    ----------
    sigma_clip : `astropy.stats.SigmaClip` object, optional
        A `~astropy.stats.SigmaClip` object that defines the sigma
        clipping parameters. If `None` (default) then no sigma clipping
        will be performed.
    """

    def __init__(self, sigma_clip=None):
        if not isinstance(sigma_clip, SigmaClip) and sigma_clip is not None:
            raise TypeError('sigma_clip must be an astropy SigmaClip '
                            'instance or None')
        self.sigma_clip = sigma_clip

    def __repr__(self):
        return make_repr(self, ('sigma_clip',))

    def __call__(self, data, axis=None):
        return self.calc_background(data, axis=axis)

    def _prepare_data(self, data, axis):
        """
        Return a float array where sigma-clipped and masked values are
        NaN.
        """
        if self.sigma_clip is not None:
            return self.sigma_clip(data, axis=axis, masked=False)

        # convert to ndarray with masked values as np.nan
        if isinstance(data, np.ma.MaskedArray):
            return data.astype(float).filled(np.nan)

        return np.asanyarray(data)

    @abc.abstractmethod
    def calc_background(self, data, axis=None):
        """
        Calculate the background value.

        NaN values are ignored.

        Parameters
        ----------
        data : array_like or `~numpy.ma.MaskedArray`
            The array for which to calculate the background value.

        axis : int, tuple of int, or `None`, optional
            The array axis along which the background is calculated. If
            `None`, then the entire array is used.

        Returns
        -------
        result : float or `~numpy.ndarray`
            The calculated background value. The result is NaN where
            all of the values along ``axis`` are NaN.
        """
        raise NotImplementedError()  # pragma: no cover


class MeanBackground(BackgroundBase):
    """
    Class to calculate the background in an array as the (sigma-clipped)
    mean.

    Parameters
    ----------
    sigma_clip : `astropy.stats.SigmaClip` object, optional
        A `~astropy.stats.SigmaClip` object that defines the sigma
        clipping parameters. If `None` (default) then no sigma clipping
        will be performed.

    Examples
    --------
    >>> import numpy as np
    >>> from aperphot.background import MeanBackground
    >>> data = np.arange(100)
    >>> bkg = MeanBackground()

    The background value can be calculated by using the
    `calc_background` method, e.g.:

    >>> bkg_value = bkg.calc_background(data)
    >>> print(bkg_value)  # doctest: +FLOAT_CMP
    49.5

    Alternatively, the background value can be calculated by calling the
    class instance as a function, e.g.:

    >>> bkg_value = bkg(data)
    >>> print(bkg_value)  # doctest: +FLOAT_CMP
    49.5
    """

    def calc_background(self, data, axis=None):
        data = self._prepare_data(data, axis)

        # ignore RuntimeWarning where axis is all NaN
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', RuntimeWarning)
            return np.nanmean(data, axis=axis)


class MedianBackground(BackgroundBase):
    """
    Class to calculate the background in an array as the (sigma-clipped)
    median.

    Parameters
    ----------
    sigma_clip : `astropy.stats.SigmaClip` object, optional
        A `~astropy.stats.SigmaClip` object that defines the sigma
        clipping parameters. If `None` (default) then no sigma clipping
        will be performed.

    Examples
    --------
    >>> import numpy as np
    >>> from astropy.stats import SigmaClip
    >>> from aperphot.background import MedianBackground
    >>> data = np.arange(100)
    >>> bkg = MedianBackground(SigmaClip(sigma=3.0))
    >>> print(bkg(data))  # doctest: +FLOAT_CMP
    49.5
    """

    def calc_background(self, data, axis=None):
        data = self._prepare_data(data, axis)

        # ignore RuntimeWarning where axis is all NaN
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', RuntimeWarning)
            return np.nanmedian(data, axis=axis)


class ModeEstimatorBackground(BackgroundBase):
    """
    Class to calculate the background in an array using a mode estimator
    of the form ``(median_factor * median) - (mean_factor * mean)``.

    Parameters
    ----------
    median_factor : float, optional
        The multiplicative factor for the data median. Defaults to 3.

    mean_factor : float, optional
        The multiplicative factor for the data mean. Defaults to 2.

    sigma_clip : `astropy.stats.SigmaClip` object, optional
        A `~astropy.stats.SigmaClip` object that defines the sigma
        clipping parameters. If `None` (default) then no sigma clipping
        will be performed.

    Examples
    --------
    >>> import numpy as np
    >>> from aperphot.background import ModeEstimatorBackground
    >>> data = np.arange(100)
    >>> bkg = ModeEstimatorBackground(median_factor=3.0, mean_factor=2.0)
    >>> print(bkg(data))  # doctest: +FLOAT_CMP
    49.5
    """

    def __init__(self, median_factor=3.0, mean_factor=2.0, **kwargs):
        super().__init__(**kwargs)
        self.median_factor = median_factor
        self.mean_factor = mean_factor

    def __repr__(self):
        params = ('median_factor', 'mean_factor', 'sigma_clip')
        return make_repr(self, params)

    def calc_background(self, data, axis=None):
        data = self._prepare_data(data, axis)

        # ignore RuntimeWarning where axis is all NaN
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', RuntimeWarning)
            return ((self.median_factor * np.nanmedian(data, axis=axis))
                    - (self.mean_factor * np.nanmean(data, axis=axis)))


def estimate_background(estimator, data, box_size=None, filter_size=3,
                        axis=None):
    """
    Estimate the background of an array.

    Without ``box_size``, the estimator is applied to the whole array
    (or along ``axis``). With ``box_size``, a 2D background image is
    computed from a grid of meshes (see
    `~aperphot.background.mesh_background`).

    Parameters
    ----------
    estimator : `BackgroundBase` subclass or instance
        The background estimator. A class is instantiated with its
        default parameters.

    data : array_like
        The input array.

    box_size : int, (2,) int array_like, or `None`, optional
        The mesh size along each axis. If `None`, no mesh is used.

    filter_size : int or (2,) int array_like, optional
        The odd size of the median filter applied to the low-resolution
        mesh. Used only with ``box_size``.

    axis : int, tuple of int, or `None`, optional
        The array axis along which the background is calculated.
        Cannot be combined with ``box_size``.

    Returns
    -------
    result : float or `~numpy.ndarray`
        The background value, the background reduced along ``axis``,
        or the 2D background image.

    Examples
    --------
    >>> import numpy as np
    >>> from aperphot.background import MeanBackground, estimate_background
    >>> data = np.ones((5, 5))
    >>> print(estimate_background(MeanBackground, data))
    1.0
    >>> estimate_background(MeanBackground, data, axis=0)
    array([1., 1., 1., 1., 1.])
    """
    if isinstance(estimator, type) and issubclass(estimator, BackgroundBase):
        estimator = estimator()
    if not isinstance(estimator, BackgroundBase):
        raise TypeError('estimator must be a BackgroundBase subclass or '
                        'instance')

    if box_size is None:
        return estimator(data, axis=axis)

    if axis is not None:
        raise ValueError('axis cannot be used with box_size')

    return mesh_background(estimator, data, box_size,
                           filter_size=filter_size)
