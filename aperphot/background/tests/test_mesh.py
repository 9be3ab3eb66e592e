# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
Tests for the mesh module.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_equal

from aperphot.background.core import MeanBackground, MedianBackground
from aperphot.background.mesh import mesh_background


@pytest.mark.parametrize('shape', [(100, 100), (103, 101), (30, 45)])
@pytest.mark.parametrize('box_size', [10, (25, 15), 200])
def test_constant_background(shape, box_size):
    data = np.full(shape, 4.2)
    bkg = mesh_background(MedianBackground(), data, box_size)
    assert bkg.shape == shape
    assert_allclose(bkg, 4.2)


def test_piecewise_background():
    data = np.ones((40, 40))
    data[:, 20:] = 3.0
    bkg = mesh_background(MeanBackground(), data, 20, filter_size=1)
    assert_equal(bkg, data)


def test_partial_meshes():
    data = np.tile(np.arange(25.0), (25, 1))
    bkg = mesh_background(MeanBackground(), data, 10, filter_size=1)
    assert bkg.shape == (25, 25)
    assert_allclose(bkg[:, :10], 4.5)
    assert_allclose(bkg[:, 10:20], 14.5)
    # the edge meshes use only the 5 available columns
    assert_allclose(bkg[:, 20:], 22.0)


def test_filter_outlier_mesh():
    data = np.ones((30, 30))
    data[10:20, 10:20] = 100.0
    bkg = mesh_background(MedianBackground(), data, 10, filter_size=1)
    assert_allclose(bkg[15, 15], 100.0)

    bkg = mesh_background(MedianBackground(), data, 10, filter_size=3)
    assert_allclose(bkg, 1.0)


def test_nonfinite_values():
    data = np.ones((20, 20))
    data[3, 4] = np.nan
    data[12, 15] = np.inf
    data_orig = data.copy()
    bkg = mesh_background(MeanBackground(), data, (5, 10))
    assert_allclose(bkg, 1.0)
    assert_equal(data, data_orig)


def test_all_nonfinite():
    data = np.full((20, 20), np.nan)
    match = 'All meshes contain only non-finite values'
    with pytest.raises(ValueError, match=match):
        mesh_background(MeanBackground(), data, 5)


def test_invalid_inputs():
    data = np.ones((20, 20))
    with pytest.raises(ValueError, match='data must be a 2D array'):
        mesh_background(MeanBackground(), np.ones(20), 5)

    with pytest.raises(ValueError, match='box_size must be > 0'):
        mesh_background(MeanBackground(), data, 0)

    with pytest.raises(ValueError, match='box_size must have integer values'):
        mesh_background(MeanBackground(), data, 2.5)

    match = 'filter_size must have an odd value for both axes'
    with pytest.raises(ValueError, match=match):
        mesh_background(MeanBackground(), data, 5, filter_size=(3, 4))
