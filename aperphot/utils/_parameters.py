# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
Tools to validate mesh and filter size parameters.
"""

import numpy as np


def as_size_pair(name, value, max_size=None, odd=False):
    """
    Convert a size given for one or both image axes to a ``(ny, nx)``
    pair of positive integers.

    Parameters
    ----------
    name : str
        The parameter name, used in error messages.

    value : int or (2,) int array_like
        The size. A single value applies to both axes.

    max_size : (2,) int tuple, optional
        The largest allowed size along each axis, typically an image
        shape. Larger sizes are reduced to it.

    odd : bool, optional
        Whether both sizes must be odd.

    Returns
    -------
    result : (2,) `~numpy.ndarray`
        The ``(ny, nx)`` sizes.

    Examples
    --------
    >>> from aperphot.utils._parameters import as_size_pair
    >>> as_size_pair('box_size', 4)
    array([4, 4])
    >>> as_size_pair('box_size', (30, 8), max_size=(20, 20))
    array([20,  8])
    """
    value = np.atleast_1d(value)
    if value.ndim != 1 or value.size not in (1, 2):
        msg = f'{name} must have 1 or 2 elements'
        raise ValueError(msg)

    if not np.all(np.isfinite(value)):
        msg = f'{name} must be a finite value'
        raise ValueError(msg)
    if value.dtype.kind not in 'iu':
        msg = f'{name} must have integer values'
        raise ValueError(msg)

    value = np.broadcast_to(value, 2).astype(int)
    if np.any(value <= 0):
        msg = f'{name} must be > 0'
        raise ValueError(msg)
    if odd and np.any(value % 2 == 0):
        msg = f'{name} must have an odd value for both axes'
        raise ValueError(msg)

    if max_size is not None:
        value = np.minimum(value, max_size)

    return value
