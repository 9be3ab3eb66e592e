# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
This subpackage contains tools for estimating the background of an
image and for sigma clipping.
"""

from .clipping import *  # noqa: F401, F403
from .core import *  # noqa: F401, F403
from .mesh import *  # noqa: F401, F403
