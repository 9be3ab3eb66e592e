# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
Tests for the clipping module.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_equal

from aperphot.background.clipping import sigma_clip


def test_sigma_clip():
    data = np.array([1, 2, 3])
    # median of 2 and sample standard deviation of 1
    result = sigma_clip(data, 1.0)
    assert result.dtype == float
    assert_equal(result, [1.0, 2.0, 3.0])

    result = sigma_clip(data, 0.5)
    assert_equal(result, [1.5, 2.0, 2.5])
    assert_equal(sigma_clip(data, 0.5, 0.5), result)

    # the input is not modified
    assert_equal(data, [1, 2, 3])


def test_sigma_clip_sample_std():
    data = np.array([0.0, 0.0, 0.0, 8.0])
    assert_equal(sigma_clip(data, 1.0), [0.0, 0.0, 0.0, 4.0])

    result = sigma_clip(data, 1.0, stdfunc=np.std)
    assert_allclose(result, [0.0, 0.0, 0.0, np.sqrt(12.0)])


def test_sigma_clip_asymmetric():
    data = np.array([1.0, 2.0, 3.0])
    assert_equal(sigma_clip(data, 0.5, 0.0), [1.5, 2.0, 2.0])
    assert_equal(sigma_clip(data, 0.0, 3.0), [2.0, 2.0, 3.0])


def test_sigma_clip_functions():
    data = np.array([0.0, 0.0, 0.0, 8.0])
    # mean of 2 and sample standard deviation of 4
    result = sigma_clip(data, 1.0, cenfunc=np.mean)
    assert_equal(result, [0.0, 0.0, 0.0, 6.0])

    result = sigma_clip(data, 1.0, stdfunc=lambda x: 1.0)
    assert_equal(result, [0.0, 0.0, 0.0, 1.0])


def test_sigma_clip_unclipped():
    data = np.arange(10.0).reshape((2, 5))
    result = sigma_clip(data, 5.0)
    assert result is not data
    assert_allclose(result, data)


def test_invalid_sigma():
    match = 'sigma_low and sigma_high must be non-negative'
    with pytest.raises(ValueError, match=match):
        sigma_clip([1, 2, 3], -1.0)
    with pytest.raises(ValueError, match=match):
        sigma_clip([1, 2, 3], 1.0, -2.0)
