# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
This module provides tools to estimate a 2D background image from a
grid of meshes.
"""

import warnings

import numpy as np
from astropy import log
from astropy.nddata import block_replicate, reshape_as_blocks
from scipy.ndimage import generic_filter

from aperphot.utils._parameters import as_size_pair

__all__ = ['mesh_background']


def _pad_to_boxes(data, box_size):
    """
    Pad the data with NaN to an integer multiple of the box size.
    """
    pad = (-np.array(data.shape)) % box_size
    if np.any(pad > 0):
        log.debug(f'Padding data of shape {data.shape} by {pad.tolist()} '
                  'pixels to complete the edge meshes')
        data = np.pad(data, ((0, pad[0]), (0, pad[1])), mode='constant',
                      constant_values=np.nan)
    return data


def _filter_mesh(mesh, filter_size):
    """
    Apply a 2D median filter to a low-resolution 2D mesh image.

    Mesh values beyond the edges are treated as missing (NaN).
    """
    if tuple(filter_size) == (1, 1):
        return mesh

    # ignore RuntimeWarning where the filter footprint is all NaN
    with warnings.catch_warnings():
        warnings.simplefilter('ignore', RuntimeWarning)
        return generic_filter(mesh, np.nanmedian, size=tuple(filter_size),
                              mode='constant', cval=np.nan)


def mesh_background(estimator, data, box_size, filter_size=3):
    """
    Estimate a 2D background image using a grid of meshes.

    The data are divided into meshes of size ``box_size``. Meshes at
    the upper edges that are only partially covered by the data are
    kept and use only the available pixels. The ``estimator`` is
    applied to each mesh, the low-resolution mesh image is median
    filtered with ``filter_size``, and each mesh value is then
    replicated over the pixels of its mesh.

    Non-finite data values are ignored.

    Parameters
    ----------
    estimator : callable
        The background estimator, e.g., a
        `~aperphot.background.BackgroundBase` instance. It is called as
        ``estimator(data, axis=-1)`` and must ignore NaN values.

    data : 2D array_like
        The input data.

    box_size : int or (2,) int array_like
        The mesh size along each axis. If a single integer is given,
        square meshes are used. Values larger than the data shape are
        reduced to the data shape.

    filter_size : int or (2,) int array_like, optional
        The odd window size of the median filter applied to the
        low-resolution mesh image. A size of 1 disables the filter.

    Returns
    -------
    result : 2D `~numpy.ndarray`
        The background image, with the same shape as ``data``.

    Examples
    --------
    >>> import numpy as np
    >>> from aperphot.background import MedianBackground, mesh_background
    >>> data = np.ones((100, 100))
    >>> bkg = mesh_background(MedianBackground(), data, 25, filter_size=3)
    >>> bkg.shape
    (100, 100)
    """
    data = np.array(data, dtype=float)
    if data.ndim != 2:
        raise ValueError('data must be a 2D array.')

    box_size = as_size_pair('box_size', box_size, max_size=data.shape)
    filter_size = as_size_pair('filter_size', filter_size, odd=True)

    data[~np.isfinite(data)] = np.nan
    padded = _pad_to_boxes(data, box_size)

    # combine the pixels of each mesh along the last axis
    blocks = reshape_as_blocks(padded, tuple(box_size))
    nboxes = blocks.shape[:2]
    blocks = blocks.reshape((*nboxes, -1))
    mesh = np.asarray(estimator(blocks, axis=-1), dtype=float)

    if np.all(np.isnan(mesh)):
        raise ValueError('All meshes contain only non-finite values.')

    mesh = _filter_mesh(mesh, filter_size)

    background = block_replicate(mesh, tuple(box_size), conserve_sum=False)
    return background[:data.shape[0], :data.shape[1]]
