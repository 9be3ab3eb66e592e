# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
Tests for the parameters module.
"""

import numpy as np
import pytest
from numpy.testing import assert_equal

from aperphot.utils._parameters import as_size_pair


def test_as_size_pair():
    assert_equal(as_size_pair('box_size', 4), (4, 4))
    assert_equal(as_size_pair('box_size', (3, 4)), (3, 4))
    assert_equal(as_size_pair('box_size', [np.uint8(2)]), (2, 2))


def test_as_size_pair_max_size():
    assert_equal(as_size_pair('box_size', (10, 20), max_size=(5, 30)),
                 (5, 20))
    assert_equal(as_size_pair('box_size', 50, max_size=(20, 30)), (20, 30))


def test_as_size_pair_odd():
    assert_equal(as_size_pair('filter_size', (3, 5), odd=True), (3, 5))
    assert_equal(as_size_pair('filter_size', 1, odd=True), (1, 1))

    match = 'filter_size must have an odd value for both axes'
    with pytest.raises(ValueError, match=match):
        as_size_pair('filter_size', (3, 4), odd=True)
    with pytest.raises(ValueError, match=match):
        as_size_pair('filter_size', 4, odd=True)


@pytest.mark.parametrize(('value', 'match'),
                         [(0, 'must be > 0'),
                          ((3, -1), 'must be > 0'),
                          ((1, np.nan), 'must be a finite value'),
                          ((1, np.inf), 'must be a finite value'),
                          (2.5, 'must have integer values'),
                          ((1, 2, 3), 'must have 1 or 2 elements'),
                          ([[1, 2]], 'must have 1 or 2 elements')])
def test_as_size_pair_invalid(value, match):
    with pytest.raises(ValueError, match=match):
        as_size_pair('box_size', value)
