# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
aperphot is a package to perform aperture photometry on 2D images.

It computes the exact or subsampled overlap of circular, elliptical,
and rectangular apertures (and their annuli) with the pixel grid and
sums the enclosed flux and its uncertainty. It also has tools for
background estimation.
"""

from .version import version as __version__  # noqa: F401
