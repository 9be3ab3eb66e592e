# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
This module provides a clamping sigma-clip function.
"""

import numpy as np

__all__ = ['sigma_clip']


def _sample_std(data):
    return np.std(data, ddof=1)


def sigma_clip(data, sigma_low, sigma_high=None, cenfunc=np.median,
               stdfunc=_sample_std):
    """
    Clamp the data values to a sigma range around a central value.

    Unlike `astropy.stats.sigma_clip`, which masks outliers, this
    function replaces values below ``center - sigma_low * std`` with
    that lower limit and values above ``center + sigma_high * std``
    with that upper limit. The statistics are computed once from the
    input data (no iterations).

    Parameters
    ----------
    data : array_like
        The data values. The input is not modified.

    sigma_low : float
        The number of standard deviations to use as the lower clamping
        limit.

    sigma_high : float or `None`, optional
        The number of standard deviations to use as the upper clamping
        limit. If `None`, then ``sigma_low`` is used.

    cenfunc : callable, optional
        The function used to compute the central value of ``data``.
        The default is `numpy.median`.

    stdfunc : callable, optional
        The function used to compute the standard deviation of
        ``data``. The default is the sample standard deviation,
        i.e., `numpy.std` with ``ddof=1``.

    Returns
    -------
    result : `~numpy.ndarray`
        A float copy of ``data`` with the clamped values.

    Examples
    --------
    >>> from aperphot.background import sigma_clip
    >>> sigma_clip([1, 2, 3], 1)
    array([1., 2., 3.])
    >>> sigma_clip([1, 2, 3], 0.5)
    array([1.5, 2. , 2.5])
    """
    if sigma_high is None:
        sigma_high = sigma_low

    if sigma_low < 0 or sigma_high < 0:
        msg = 'sigma_low and sigma_high must be non-negative'
        raise ValueError(msg)

    data = np.array(data, dtype=float)
    center = cenfunc(data)
    std = stdfunc(data)

    return np.clip(data, center - sigma_low * std, center + sigma_high * std)
