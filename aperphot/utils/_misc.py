# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
This module provides the metadata attached to output tables.
"""

import platform
from datetime import datetime, timezone

import astropy
import numpy as np
import scipy

from aperphot.version import version


def _dependency_versions():
    return {'Python': platform.python_version(),
            'aperphot': version,
            'astropy': astropy.__version__,
            'numpy': np.__version__,
            'scipy': scipy.__version__}


def _timestamp(utc=False):
    now = datetime.now(timezone.utc) if utc else datetime.now().astimezone()
    return now.strftime('%Y-%m-%d %H:%M:%S %Z')


def _get_meta(utc=False, **call_args):
    """
    Return the metadata of an output table.

    The metadata hold the creation date (``'date'``) and the versions
    of Python, aperphot and its dependencies (``'version'``). Any
    keyword arguments are added as extra entries.
    """
    meta = {'date': _timestamp(utc=utc),
            'version': _dependency_versions()}
    meta.update(call_args)
    return meta
