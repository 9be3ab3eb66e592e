# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
This module provides base classes for aperture tests.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal, assert_equal


class BaseTestAperture:
    """
    Tests shared by all aperture classes.

    Subclasses define an ``aperture`` class attribute.
    """

    def test_immutable(self):
        for param in self.aperture._params:
            match = 'cannot be changed'
            with pytest.raises(AttributeError, match=match):
                setattr(self.aperture, param, getattr(self.aperture, param))

    def test_copy_eq(self):
        aper = self.aperture.copy()
        assert aper is not self.aperture
        assert aper == self.aperture
        assert not aper != self.aperture
        assert aper != self.aperture.__class__.__name__

        kwargs = {param: getattr(self.aperture, param)
                  for param in self.aperture._params}
        kwargs['position'] = self.aperture.position + 1.0
        assert self.aperture.__class__(**kwargs) != self.aperture

    def test_repr_str(self):
        cls_name = self.aperture.__class__.__name__
        assert repr(self.aperture).startswith(f'<{cls_name}(')
        aper_str = str(self.aperture)
        module = self.aperture.__class__.__module__
        assert aper_str.startswith(f'<{module}.{cls_name}>\n')
        for param in self.aperture._params:
            assert f'{param}: ' in aper_str

    def test_position_readonly(self):
        with pytest.raises(ValueError):
            self.aperture.position[0] = 0.0

    def test_exact_mask_area(self):
        mask = self.aperture.to_mask(method='exact')
        assert mask.shape == self.aperture.bbox.shape
        assert_allclose(mask.data.sum(), self.aperture.area)

    @pytest.mark.parametrize('method', ['exact', 'center', 'subpixel'])
    def test_mask_range(self, method):
        data = self.aperture.to_mask(method=method).data
        assert np.all(data >= 0)
        assert np.all(data <= 1)

    def test_subpixel_one_is_center(self):
        center = self.aperture.to_mask(method='center')
        subpix = self.aperture.to_mask(method='subpixel', subpixels=1)
        assert_array_equal(center.data, subpix.data)

    def test_subpixel_tuple_method(self):
        mask1 = self.aperture.to_mask(method=('subpixel', 4))
        mask2 = self.aperture.to_mask(method='subpixel', subpixels=4)
        assert_array_equal(mask1.data, mask2.data)

    def test_center_mask_matches_contains(self):
        bbox = self.aperture.bbox
        yy, xx = np.mgrid[bbox.iymin:bbox.iymax, bbox.ixmin:bbox.ixmax]
        mask = self.aperture.to_mask(method='center')
        assert_equal(mask.data, self.aperture.contains(xx, yy).astype(float))

    @pytest.mark.parametrize('method', ['exact', 'center',
                                        ('subpixel', 3)])
    def test_pixel_overlap(self, method):
        mask = self.aperture.to_mask(method=method)
        bbox = self.aperture.bbox
        for iy, ix in ((0, 0), (1, 2), (bbox.shape[0] // 2,
                                        bbox.shape[1] // 2)):
            frac = self.aperture.pixel_overlap(bbox.ixmin + ix,
                                               bbox.iymin + iy, method=method)
            assert isinstance(frac, float)
            assert_allclose(frac, mask.data[iy, ix], atol=1e-12)

    def test_pixel_overlap_outside(self):
        bbox = self.aperture.bbox
        assert self.aperture.pixel_overlap(bbox.ixmax + 5,
                                           bbox.iymax + 5) == 0.0

    @pytest.mark.parametrize('method', ['invalid', ('exact', 5),
                                        ('subpixel',), 5])
    def test_invalid_method(self, method):
        with pytest.raises(ValueError, match='mask mode'):
            self.aperture.to_mask(method=method)

    @pytest.mark.parametrize('subpixels', [0, -1, 2.5, True, '5'])
    def test_invalid_subpixels(self, subpixels):
        match = 'subpixels must be a strictly positive integer'
        with pytest.raises(ValueError, match=match):
            self.aperture.to_mask(method='subpixel', subpixels=subpixels)
        with pytest.raises(ValueError, match=match):
            self.aperture.to_mask(method=('subpixel', subpixels))

    def test_ignored_subpixels(self):
        # subpixels is only validated for the subpixel method
        mask1 = self.aperture.to_mask(method='exact', subpixels=0)
        mask2 = self.aperture.to_mask(method='exact')
        assert_array_equal(mask1.data, mask2.data)

    def test_area_overlap(self):
        data = np.ones((60, 60))
        assert_allclose(self.aperture.area_overlap(data), self.aperture.area)

        mask = np.ones(data.shape, dtype=bool)
        assert self.aperture.area_overlap(data, mask=mask) == 0.0

        assert self.aperture.area_overlap(np.ones((3, 3))) == 0.0
