# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
Subpackage providing general-purpose utility functions and the package
warning classes.
"""

from .exceptions import *  # noqa: F401, F403
