# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
Define tools for class __repr__ and __str__ strings.
"""

import astropy.units as u
import numpy as np


def _format_value(value):
    if isinstance(value, u.Quantity):
        return str(value)
    if isinstance(value, np.ndarray):
        return np.array2string(value, separator=', ')
    return repr(value)


def make_repr(instance, params, *, long=False):
    """
    Generate a __repr__ string for a class instance.

    Quantities are shown with their units and arrays as lists.

    Parameters
    ----------
    instance : object
        The class instance.

    params : str or list of str
        List of parameter names to include in the repr, in order. Each
        name must be an attribute of ``instance``.

    long : bool, optional
        Whether to use the multi-line format typically used by
        __str__.

    Returns
    -------
    repr_str : str
        The generated __repr__ string.
    """
    cls_name = instance.__class__.__name__
    if long:
        cls_name = f'{instance.__class__.__module__}.{cls_name}'

    if isinstance(params, str):
        params = [params]

    cls_info = []
    for param in params:
        if not hasattr(instance, param):
            msg = f'Parameter {param!r} not found in instance'
            raise ValueError(msg)
        cls_info.append((param, _format_value(getattr(instance, param))))

    if long:
        fmt = '\n'.join(f'{key}: {val}' for key, val in cls_info)
        return f'<{cls_name}>\n{fmt}'

    fmt = ', '.join(f'{key}={val}' for key, val in cls_info)
    return f'{cls_name}({fmt})'
