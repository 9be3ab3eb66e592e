# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
Tests for the rectangle module.
"""

import math

import astropy.units as u
import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_equal

from aperphot.aperture.bounding_box import BoundingBox
from aperphot.aperture.rectangle import RectangularAnnulus, RectangularAperture
from aperphot.aperture.tests.test_aperture_common import BaseTestAperture

POSITION = (30.3, 29.6)
RADII = (-1.0, -np.inf, np.nan)


class TestRectangularAperture(BaseTestAperture):
    aperture = RectangularAperture(POSITION, w=10.2, h=5.3, theta=0.5)

    @staticmethod
    @pytest.mark.parametrize('radius', RADII)
    def test_invalid_params(radius):
        match = "' must be a non-negative scalar"
        with pytest.raises(ValueError, match=match):
            RectangularAperture(POSITION, w=radius, h=5.0)
        with pytest.raises(ValueError, match=match):
            RectangularAperture(POSITION, w=10.0, h=radius)

    @staticmethod
    def test_bbox_extents():
        aper = RectangularAperture((20.0, 20.0), 10.0, 4.0, theta=0.0)
        assert aper.bbox.shape == (5, 11)
        aper = RectangularAperture((20.0, 20.0), 10.0, 4.0,
                                   theta=90.0 * u.deg)
        assert aper.bbox.shape == (11, 5)

    @staticmethod
    def test_exact_axis_aligned():
        aper = RectangularAperture((5.0, 5.0), w=3.0, h=2.0)
        mask = aper.to_mask()
        assert mask.bbox == BoundingBox(4, 7, 4, 7)
        expected = np.array([[0.5, 0.5, 0.5],
                             [1.0, 1.0, 1.0],
                             [0.5, 0.5, 0.5]])
        assert_allclose(mask.data, expected, atol=1e-12)

    @staticmethod
    def test_exact_rotated_area():
        aper = RectangularAperture((20.0, 20.0), w=9.0, h=4.0,
                                   theta=math.pi / 7)
        assert_allclose(aper.to_mask().data.sum(), 36.0)
        approx = aper.to_mask(method='subpixel', subpixels=32)
        assert_allclose(approx.data.sum(), 36.0, rtol=1e-2)

    def test_contains(self):
        x0, y0 = POSITION
        along_w = (5.09 * math.cos(0.5), 5.09 * math.sin(0.5))
        assert self.aperture.contains(x0 + along_w[0], y0 + along_w[1])
        along_w = (5.11 * math.cos(0.5), 5.11 * math.sin(0.5))
        assert not self.aperture.contains(x0 + along_w[0], y0 + along_w[1])

    def test_to_canonical(self):
        x0, y0 = POSITION
        u_, v_ = self.aperture.to_canonical(x0 + math.cos(0.5),
                                            y0 + math.sin(0.5))
        assert_allclose((u_, v_), (1.0, 0.0), atol=1e-12)

    @staticmethod
    def test_zero_size():
        aper = RectangularAperture((10.0, 10.0), 0.0, 3.0)
        for method in ('exact', 'center', 'subpixel'):
            assert_equal(aper.to_mask(method=method).data, 0.0)


class TestRectangularAnnulus(BaseTestAperture):
    aperture = RectangularAnnulus(POSITION, w_in=4.1, w_out=10.3, h_out=6.2,
                                  theta=0.3)

    @staticmethod
    def test_default_h_in():
        aper = RectangularAnnulus(POSITION, 3.0, 8.0, 5.0)
        assert aper.h_in == 3.0 * 5.0 / 8.0

    @staticmethod
    @pytest.mark.parametrize('radius', RADII)
    def test_invalid_params(radius):
        match = "' must be a non-negative scalar"
        with pytest.raises(ValueError, match=match):
            RectangularAnnulus(POSITION, w_in=radius, w_out=10.0, h_out=5.0,
                               h_in=2.0)
        with pytest.raises(ValueError, match=match):
            RectangularAnnulus(POSITION, w_in=3.0, w_out=radius, h_out=5.0)
        with pytest.raises(ValueError, match=match):
            RectangularAnnulus(POSITION, w_in=3.0, w_out=10.0, h_out=radius)

    @staticmethod
    def test_inner_not_inside_outer():
        match = '"w_out" must be greater than "w_in"'
        with pytest.raises(ValueError, match=match):
            RectangularAnnulus(POSITION, w_in=10.0, w_out=8.0, h_out=5.0)

        match = '"h_out" must be greater than "h_in"'
        with pytest.raises(ValueError, match=match):
            RectangularAnnulus(POSITION, w_in=3.0, w_out=10.0, h_out=5.0,
                               h_in=6.0)

    @staticmethod
    def test_exact_area():
        aper = RectangularAnnulus((20.0, 20.0), w_in=3.0, w_out=5.0, h_out=4.0)
        assert_allclose(aper.area, 20.0 - 3.0 * 2.4)
        assert_allclose(aper.to_mask().data.sum(), aper.area)
