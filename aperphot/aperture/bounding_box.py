# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
This module defines a class for a rectangular bounding box.
"""

import math

import numpy as np

__all__ = ['BoundingBox']


class BoundingBox:
    """
    A rectangular bounding box in integer (not float) pixel indices.

    Parameters
    ----------
    ixmin, ixmax, iymin, iymax : int
        The bounding box pixel indices. Note that the upper values
        (``iymax`` and ``ixmax``) are exclusive as for normal slices in
        Python. The lower values (``ixmin`` and ``iymin``) must not be
        greater than the respective upper values (``ixmax`` and
        ``iymax``).

    Examples
    --------
    >>> from aperphot.aperture import BoundingBox
    >>> bbox = BoundingBox(ixmin=1, ixmax=10, iymin=2, iymax=20)
    >>> bbox
    BoundingBox(ixmin=1, ixmax=10, iymin=2, iymax=20)

    >>> bbox.center  # numpy order: (y, x)
    (10.5, 5.0)
    >>> bbox.shape  # numpy order: (y, x)
    (18, 9)
    >>> bbox.extent  # (xmin, xmax, ymin, ymax) pixel edges
    (0.5, 9.5, 1.5, 19.5)
    """

    def __init__(self, ixmin, ixmax, iymin, iymax):
        for value in (ixmin, ixmax, iymin, iymax):
            if (not isinstance(value, (int, np.integer))
                    or isinstance(value, bool)):
                msg = 'ixmin, ixmax, iymin, and iymax must all be integers'
                raise TypeError(msg)

        if ixmin > ixmax:
            msg = 'ixmin must be <= ixmax'
            raise ValueError(msg)
        if iymin > iymax:
            msg = 'iymin must be <= iymax'
            raise ValueError(msg)

        self.ixmin = int(ixmin)
        self.ixmax = int(ixmax)
        self.iymin = int(iymin)
        self.iymax = int(iymax)

    @classmethod
    def from_float(cls, xmin, xmax, ymin, ymax):
        """
        Return the smallest bounding box that fully contains a given
        rectangle defined by float coordinate values.

        Following the pixel index convention, an integer index
        corresponds to the center of a pixel and the pixel edges span
        from (index - 0.5) to (index + 0.5). Because `BoundingBox`
        upper limits are exclusive, 1 is added to the upper pixel
        edges.

        Parameters
        ----------
        xmin, xmax, ymin, ymax : float
            Float coordinates defining a rectangle. The lower values
            (``xmin`` and ``ymin``) must not be greater than the
            respective upper values (``xmax`` and ``ymax``).

        Returns
        -------
        bbox : `BoundingBox` object
            The minimal ``BoundingBox`` object fully containing the
            input rectangle coordinates.

        Examples
        --------
        >>> from aperphot.aperture import BoundingBox
        >>> BoundingBox.from_float(xmin=1.0, xmax=10.0, ymin=2.0, ymax=20.0)
        BoundingBox(ixmin=1, ixmax=11, iymin=2, iymax=21)

        >>> BoundingBox.from_float(xmin=1.4, xmax=10.4, ymin=1.6, ymax=10.6)
        BoundingBox(ixmin=1, ixmax=11, iymin=2, iymax=12)
        """
        ixmin = math.floor(xmin + 0.5)
        ixmax = math.ceil(xmax + 0.5)
        iymin = math.floor(ymin + 0.5)
        iymax = math.ceil(ymax + 0.5)

        return cls(ixmin, ixmax, iymin, iymax)

    @classmethod
    def from_shape(cls, shape):
        """
        Return the bounding box covering a full 2D array of the given
        ``(ny, nx)`` shape.
        """
        if len(shape) != 2:
            msg = 'input shape must have 2 elements'
            raise ValueError(msg)

        return cls(0, shape[1], 0, shape[0])

    def __eq__(self, other):
        if not isinstance(other, BoundingBox):
            msg = 'Can compare BoundingBox only to another BoundingBox.'
            raise TypeError(msg)

        return ((self.ixmin == other.ixmin)
                and (self.ixmax == other.ixmax)
                and (self.iymin == other.iymin)
                and (self.iymax == other.iymax))

    def __or__(self, other):
        return self.union(other)

    def __and__(self, other):
        return self.intersection(other)

    def __repr__(self):
        return (f'{self.__class__.__name__}(ixmin={self.ixmin}, '
                f'ixmax={self.ixmax}, iymin={self.iymin}, '
                f'iymax={self.iymax})')

    @property
    def center(self):
        """
        The ``(y, x)`` center of the bounding box.
        """
        return (0.5 * (self.iymax - 1 + self.iymin),
                0.5 * (self.ixmax - 1 + self.ixmin))

    @property
    def shape(self):
        """
        The ``(ny, nx)`` shape of the bounding box.
        """
        return self.iymax - self.iymin, self.ixmax - self.ixmin

    @property
    def is_empty(self):
        """
        Whether the bounding box contains no pixels.
        """
        return self.ixmax == self.ixmin or self.iymax == self.iymin

    @property
    def slices(self):
        """
        The bounding box as a tuple of `slice` objects in ``(y, x)``
        order.

        The slices should be applied only to arrays that fully contain
        the bounding box (i.e., no negative indices).
        """
        return (slice(self.iymin, self.iymax), slice(self.ixmin, self.ixmax))

    @property
    def extent(self):
        """
        The ``(xmin, xmax, ymin, ymax)`` pixel edges of the bounding
        box, from the bottom-left corner of the lower-left pixel to the
        upper-right corner of the upper-right pixel.
        """
        return (self.ixmin - 0.5, self.ixmax - 0.5,
                self.iymin - 0.5, self.iymax - 0.5)

    def get_overlap_slices(self, shape):
        """
        Get slices for the overlapping part of the bounding box and a
        2D array.

        Parameters
        ----------
        shape : 2-tuple of int
            The shape of the 2D array.

        Returns
        -------
        slices_large : tuple of slices or `None`
            A tuple of slice objects for each axis of the large array,
            such that ``large_array[slices_large]`` extracts the region
            of the large array that overlaps with the small array.
            `None` is returned if there is no overlap of the bounding
            box with the given image shape.

        slices_small : tuple of slices or `None`
            A tuple of slice objects for each axis of an array enclosed
            by the bounding box such that ``small_array[slices_small]``
            extracts the region that is inside the large array. `None`
            is returned if there is no overlap of the bounding box with
            the given image shape.
        """
        overlap = self.intersection(BoundingBox.from_shape(shape))
        if overlap is None or overlap.is_empty:
            return None, None

        slices_large = overlap.slices
        slices_small = (slice(overlap.iymin - self.iymin,
                              overlap.iymax - self.iymin),
                        slice(overlap.ixmin - self.ixmin,
                              overlap.ixmax - self.ixmin))

        return slices_large, slices_small

    def union(self, other):
        """
        Return a `BoundingBox` representing the union of this
        `BoundingBox` with another `BoundingBox`.

        Parameters
        ----------
        other : `BoundingBox`
            The `BoundingBox` to join with this one.

        Returns
        -------
        result : `BoundingBox`
            A `BoundingBox` representing the union of the input
            `BoundingBox` with this one.
        """
        if not isinstance(other, BoundingBox):
            msg = 'BoundingBox can be joined only with another BoundingBox.'
            raise TypeError(msg)

        ixmin = min((self.ixmin, other.ixmin))
        ixmax = max((self.ixmax, other.ixmax))
        iymin = min((self.iymin, other.iymin))
        iymax = max((self.iymax, other.iymax))

        return BoundingBox(ixmin=ixmin, ixmax=ixmax, iymin=iymin, iymax=iymax)

    def intersection(self, other):
        """
        Return a `BoundingBox` representing the intersection of this
        `BoundingBox` with another `BoundingBox`.

        Parameters
        ----------
        other : `BoundingBox`
            The `BoundingBox` to intersect with this one.

        Returns
        -------
        result : `BoundingBox` or `None`
            A `BoundingBox` representing the intersection of the input
            `BoundingBox` with this one. `None` is returned if the
            boxes are disjoint. Boxes that only share an edge give an
            empty `BoundingBox`.
        """
        if not isinstance(other, BoundingBox):
            msg = ('BoundingBox can be intersected only with another '
                   'BoundingBox.')
            raise TypeError(msg)

        ixmin = max(self.ixmin, other.ixmin)
        ixmax = min(self.ixmax, other.ixmax)
        iymin = max(self.iymin, other.iymin)
        iymax = min(self.iymax, other.iymax)
        if ixmax < ixmin or iymax < iymin:
            return None

        return BoundingBox(ixmin=ixmin, ixmax=ixmax, iymin=iymin, iymax=iymax)
