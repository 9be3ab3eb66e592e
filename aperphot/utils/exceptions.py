# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
This module provides custom warnings.
"""

from astropy.utils.exceptions import AstropyUserWarning

__all__ = ['NonFiniteValueWarning']


class NonFiniteValueWarning(AstropyUserWarning):
    """
    A warning class to indicate that non-finite (NaN or inf) input
    values were excluded from a calculation.
    """
