# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
Tests for the ellipse module.
"""

import math

import astropy.units as u
import numpy as np
import pytest
from astropy.coordinates import Angle
from numpy.testing import assert_allclose

from aperphot.aperture.circle import CircularAperture
from aperphot.aperture.ellipse import EllipticalAnnulus, EllipticalAperture
from aperphot.aperture.tests.test_aperture_common import BaseTestAperture

POSITION = (30.3, 29.6)
RADII = (-1.0, -np.inf, np.nan)


class TestEllipticalAperture(BaseTestAperture):
    aperture = EllipticalAperture(POSITION, a=10.2, b=5.3,
                                  theta=Angle(30, 'deg'))

    @staticmethod
    @pytest.mark.parametrize('radius', RADII)
    def test_invalid_params(radius):
        match = "' must be a non-negative scalar"
        with pytest.raises(ValueError, match=match):
            EllipticalAperture(POSITION, radius, 5.0)
        with pytest.raises(ValueError, match=match):
            EllipticalAperture(POSITION, 10.0, radius)

    @staticmethod
    def test_theta():
        aper = EllipticalAperture(POSITION, 10.0, 5.0, theta=math.pi / 2)
        assert isinstance(aper.theta, u.Quantity)
        assert aper.theta.unit == u.rad

        aper2 = EllipticalAperture(POSITION, 10.0, 5.0, theta=90 * u.deg)
        assert_allclose(aper.to_mask().data, aper2.to_mask().data)

    @staticmethod
    @pytest.mark.parametrize('theta', [3.0 * u.pix, np.ones(2) * u.deg])
    def test_invalid_theta(theta):
        with pytest.raises(ValueError):
            EllipticalAperture(POSITION, 10.0, 5.0, theta=theta)

    @staticmethod
    def test_invalid_theta_type():
        with pytest.raises(TypeError):
            EllipticalAperture(POSITION, 10.0, 5.0, theta='30 deg')
        with pytest.raises(TypeError):
            EllipticalAperture(POSITION, 10.0, 5.0, theta=np.ones(2))

    @staticmethod
    def test_bbox_extents():
        aper = EllipticalAperture((20.0, 20.0), 10.0, 4.0, theta=0.0)
        assert aper.bbox.shape == (9, 21)
        aper = EllipticalAperture((20.0, 20.0), 10.0, 4.0, theta=math.pi / 2)
        assert aper.bbox.shape == (21, 9)

    def test_contains(self):
        x0, y0 = POSITION
        theta = math.radians(30)
        along_major = (10.19 * math.cos(theta), 10.19 * math.sin(theta))
        assert self.aperture.contains(x0 + along_major[0],
                                      y0 + along_major[1])
        assert not self.aperture.contains(x0 + 10.19 * math.cos(theta + 1),
                                          y0 + 10.19 * math.sin(theta + 1))

    def test_to_canonical(self):
        x0, y0 = POSITION
        theta = math.radians(30)
        u_, v_ = self.aperture.to_canonical(
            x0 - 5.3 * math.sin(theta), y0 + 5.3 * math.cos(theta))
        assert_allclose((u_, v_), (0.0, 1.0), atol=1e-12)

    @staticmethod
    def test_circle_equivalence():
        ell = EllipticalAperture((20.2, 19.7), 6.0, 6.0, theta=0.7)
        circ = CircularAperture((20.2, 19.7), 6.0)
        assert_allclose(ell.to_mask().data, circ.to_mask().data, atol=1e-10)

    @staticmethod
    def test_zero_size():
        aper = EllipticalAperture((10.0, 10.0), 5.0, 0.0)
        assert aper.area == 0.0
        for method in ('exact', 'center', 'subpixel'):
            assert np.all(aper.to_mask(method=method).data == 0.0)


class TestEllipticalAnnulus(BaseTestAperture):
    aperture = EllipticalAnnulus(POSITION, a_in=4.1, a_out=10.3, b_out=6.2,
                                 theta=0.3)

    @staticmethod
    def test_default_b_in():
        aper = EllipticalAnnulus(POSITION, 3.0, 8.0, 5.0)
        assert aper.b_in == 5.0 * 3.0 / 8.0

    @staticmethod
    @pytest.mark.parametrize('radius', RADII)
    def test_invalid_params(radius):
        match = "' must be a non-negative scalar"
        with pytest.raises(ValueError, match=match):
            EllipticalAnnulus(POSITION, a_in=radius, a_out=10.0, b_out=5.0,
                              b_in=2.0)
        with pytest.raises(ValueError, match=match):
            EllipticalAnnulus(POSITION, a_in=3.0, a_out=radius, b_out=5.0)
        with pytest.raises(ValueError, match=match):
            EllipticalAnnulus(POSITION, a_in=3.0, a_out=10.0, b_out=radius)
        with pytest.raises(ValueError, match=match):
            EllipticalAnnulus(POSITION, a_in=3.0, a_out=10.0, b_out=5.0,
                              b_in=radius)

    @staticmethod
    def test_inner_not_inside_outer():
        match = '"a_out" must be greater than "a_in"'
        with pytest.raises(ValueError, match=match):
            EllipticalAnnulus(POSITION, a_in=10.0, a_out=10.0, b_out=5.0)

        match = '"b_out" must be greater than "b_in"'
        with pytest.raises(ValueError, match=match):
            EllipticalAnnulus(POSITION, a_in=3.0, a_out=10.0, b_out=5.0,
                              b_in=5.0)

    def test_contains(self):
        x0, y0 = POSITION
        theta = 0.3
        assert not self.aperture.contains(x0, y0)
        for dist, expected in ((4.0, False), (4.2, True), (10.2, True),
                               (10.4, False)):
            x = x0 + dist * math.cos(theta)
            y = y0 + dist * math.sin(theta)
            assert bool(self.aperture.contains(x, y)) is expected
