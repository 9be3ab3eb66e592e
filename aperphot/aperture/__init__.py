# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
This subpackage contains tools to perform aperture photometry.
"""

from .bounding_box import *  # noqa: F401, F403
from .circle import *  # noqa: F401, F403
from .core import *  # noqa: F401, F403
from .ellipse import *  # noqa: F401, F403
from .mask import *  # noqa: F401, F403
from .photometry import *  # noqa: F401, F403
from .rectangle import *  # noqa: F401, F403
