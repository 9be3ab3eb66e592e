# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
This module provides the low-level building blocks used by the overlap
grid functions: pixel-grid sampling, shape inclusion tests,
canonical-frame transforms, and the circle/polygon intersection
kernels.

All coordinates are relative to the center of the shape.
"""

import math

import numpy as np

__all__ = ['pixel_corners', 'subpixel_fraction', 'circle_contains',
           'ellipse_contains', 'rectangle_contains', 'polygon_contains',
           'ellipse_to_canonical', 'rectangle_to_canonical',
           'rectangle_vertices', 'circle_polygon_overlap', 'clip_polygon',
           'polygon_area', 'polygon_overlap_exact']


def _pixel_size(xmin, xmax, ymin, ymax, nx, ny):
    return (xmax - xmin) / nx, (ymax - ymin) / ny


def pixel_corners(xmin, xmax, ymin, ymax, nx, ny):
    """
    Return the corner coordinates of every pixel in a grid.

    Parameters
    ----------
    xmin, xmax, ymin, ymax : float
        The extent of the grid.

    nx, ny : int
        The grid dimensions.

    Returns
    -------
    cx, cy : `~numpy.ndarray`
        Arrays of shape ``(4, ny, nx)`` giving the ``x`` and ``y``
        coordinates of the four pixel corners, ordered
        counterclockwise starting from the lower-left corner.
    """
    xedges = np.linspace(xmin, xmax, nx + 1)
    yedges = np.linspace(ymin, ymax, ny + 1)
    x0 = xedges[np.newaxis, :-1]
    x1 = xedges[np.newaxis, 1:]
    y0 = yedges[:-1, np.newaxis]
    y1 = yedges[1:, np.newaxis]

    shape = (ny, nx)
    cx = np.stack([np.broadcast_to(val, shape) for val in (x0, x1, x1, x0)])
    cy = np.stack([np.broadcast_to(val, shape) for val in (y0, y0, y1, y1)])
    return cx, cy


def subpixel_fraction(contains, xmin, xmax, ymin, ymax, nx, ny, subpixels):
    """
    Compute the fraction of sub-pixel centers lying inside a shape.

    Each pixel is divided into ``subpixels x subpixels`` sub-pixels.
    With ``subpixels=1`` the only sample is the pixel center.

    Parameters
    ----------
    contains : callable
        A function ``contains(x, y)`` returning a boolean array that
        is `True` where the (broadcast) coordinates lie inside the
        shape.

    xmin, xmax, ymin, ymax : float
        The extent of the grid.

    nx, ny : int
        The grid dimensions.

    subpixels : int
        The sub-sampling factor in each dimension.

    Returns
    -------
    result : `~numpy.ndarray`
        A ``(ny, nx)`` array of fractions.
    """
    dx, dy = _pixel_size(xmin, xmax, ymin, ymax, nx, ny)
    offsets = (np.arange(subpixels) + 0.5) / subpixels

    # sample x positions grouped by pixel: (nx * subpixels,)
    xs = (xmin + (np.arange(nx)[:, np.newaxis] + offsets) * dx).ravel()

    # one row of sub-pixels at a time keeps the memory bounded
    counts = np.zeros((ny, nx))
    for offset in offsets:
        ys = ymin + (np.arange(ny) + offset) * dy
        inside = contains(xs[np.newaxis, :], ys[:, np.newaxis])
        counts += inside.reshape(ny, nx, subpixels).sum(axis=2)

    return counts / subpixels**2


def circle_contains(x, y, r):
    """
    Test whether points lie strictly inside a circle of radius ``r``.
    """
    return x * x + y * y < r * r


def ellipse_to_canonical(x, y, a, b, theta):
    """
    Transform coordinates into the frame where the ellipse is the unit
    circle.

    The coordinates are rotated by ``-theta`` and then scaled by
    ``(1 / a, 1 / b)``.
    """
    cos_theta = math.cos(theta)
    sin_theta = math.sin(theta)
    u = (x * cos_theta + y * sin_theta) / a
    v = (-x * sin_theta + y * cos_theta) / b
    return u, v


def ellipse_contains(x, y, a, b, theta):
    """
    Test whether points lie strictly inside an ellipse.
    """
    if a <= 0 or b <= 0:
        return np.zeros(np.broadcast(x, y).shape, dtype=bool)

    u, v = ellipse_to_canonical(x, y, a, b, theta)
    return u * u + v * v < 1.0


def rectangle_to_canonical(x, y, theta):
    """
    Rotate coordinates by ``-theta`` so that the rectangle becomes
    axis-aligned.
    """
    cos_theta = math.cos(theta)
    sin_theta = math.sin(theta)
    u = x * cos_theta + y * sin_theta
    v = -x * sin_theta + y * cos_theta
    return u, v


def rectangle_contains(x, y, width, height, theta):
    """
    Test whether points lie strictly inside a rotated rectangle.
    """
    u, v = rectangle_to_canonical(x, y, theta)
    return (np.abs(u) < 0.5 * width) & (np.abs(v) < 0.5 * height)


def rectangle_vertices(width, height, theta):
    """
    Return the counterclockwise ``(4, 2)`` vertices of a rotated
    rectangle.
    """
    hw = 0.5 * width
    hh = 0.5 * height
    corners = np.array([[-hw, -hh], [hw, -hh], [hw, hh], [-hw, hh]])
    cos_theta = math.cos(theta)
    sin_theta = math.sin(theta)
    rotation = np.array([[cos_theta, -sin_theta], [sin_theta, cos_theta]])
    return corners @ rotation.T


def _signed_area(vertices):
    x = vertices[:, 0]
    y = vertices[:, 1]
    return 0.5 * np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y)


def polygon_area(vertices):
    """
    Compute the area of a simple polygon with the shoelace formula.

    Parameters
    ----------
    vertices : array_like
        A ``(n, 2)`` sequence of ``(x, y)`` vertices in either
        winding order.

    Returns
    -------
    area : float
        The polygon area (always non-negative).
    """
    vertices = np.asarray(vertices, dtype=float)
    if vertices.ndim != 2 or vertices.shape[0] < 3:
        return 0.0

    return abs(float(_signed_area(vertices)))


def _counterclockwise(vertices):
    vertices = np.asarray(vertices, dtype=float)
    if vertices.ndim != 2 or vertices.shape[1] != 2:
        raise ValueError('vertices must be a (n, 2) array of (x, y) '
                         'coordinates')
    if _signed_area(vertices) < 0:
        vertices = vertices[::-1]
    return vertices


def _edge_sides(vertices, x, y):
    """
    Yield the signed side values of ``(x, y)`` for each polygon edge.

    Positive values are on the inner side of a counterclockwise edge.
    """
    nvertices = len(vertices)
    for i in range(nvertices):
        x0, y0 = vertices[i]
        x1, y1 = vertices[(i + 1) % nvertices]
        yield (x1 - x0) * (y - y0) - (y1 - y0) * (x - x0)


def polygon_contains(x, y, vertices):
    """
    Test whether points lie strictly inside a convex polygon.
    """
    vertices = _counterclockwise(vertices)
    inside = np.ones(np.broadcast(x, y).shape, dtype=bool)
    if _signed_area(vertices) == 0:
        return ~inside

    for side in _edge_sides(vertices, x, y):
        inside &= side > 0
    return inside


def _sector_area(ax, ay, bx, by, r):
    """
    Signed area of the circular sector between directions ``a`` and
    ``b``.
    """
    cross = ax * by - ay * bx
    dot = ax * bx + ay * by
    return 0.5 * r * r * np.arctan2(cross, dot)


def _edge_circle_area(ax, ay, bx, by, r):
    """
    Signed area of the intersection of a circle (centered on the
    origin) with the triangle formed by the origin and the directed
    segment from ``a`` to ``b``.
    """
    dx = bx - ax
    dy = by - ay
    qa = dx * dx + dy * dy
    qb = ax * dx + ay * dy
    qc = ax * ax + ay * ay - r * r
    disc = qb * qb - qa * qc

    # parametric positions where the segment enters and leaves the circle
    chord = (disc > 0) & (qa > 0)
    root = np.sqrt(np.where(chord, disc, 0.0))
    denom = np.where(chord, qa, 1.0)
    t1 = np.where(chord, np.clip((-qb - root) / denom, 0.0, 1.0), 0.0)
    t2 = np.where(chord, np.clip((-qb + root) / denom, 0.0, 1.0), 0.0)

    p1x = ax + t1 * dx
    p1y = ay + t1 * dy
    p2x = ax + t2 * dx
    p2y = ay + t2 * dy

    return (_sector_area(ax, ay, p1x, p1y, r)
            + 0.5 * (p1x * p2y - p1y * p2x)
            + _sector_area(p2x, p2y, bx, by, r))


def _segment_distance_sq(ax, ay, bx, by):
    """
    Squared distance from the origin to the segment from ``a`` to
    ``b``.
    """
    dx = bx - ax
    dy = by - ay
    qa = dx * dx + dy * dy
    nonzero = qa > 0
    t = -(ax * dx + ay * dy) / np.where(nonzero, qa, 1.0)
    t = np.clip(np.where(nonzero, t, 0.0), 0.0, 1.0)
    px = ax + t * dx
    py = ay + t * dy
    return px * px + py * py


def circle_polygon_overlap(cx, cy, r):
    """
    Area of overlap between a circle centered on the origin and convex
    polygons given by their vertices.

    Polygons that lie entirely outside the circle are assigned 0 and
    polygons whose vertices are all inside the circle are assigned
    their own area. The edge decomposition is only evaluated for the
    remaining polygons that cross the circle.

    Parameters
    ----------
    cx, cy : `~numpy.ndarray`
        Arrays of shape ``(n, ...)`` with the ``x`` and ``y``
        coordinates of the ``n`` polygon vertices, in counterclockwise
        order.

    r : float
        The circle radius.

    Returns
    -------
    area : `~numpy.ndarray`
        The overlap area for each polygon.
    """
    nvertices = cx.shape[0]
    area = np.zeros(cx.shape[1:])
    if r <= 0:
        return area

    r2 = r * r
    edges = [(i, (i + 1) % nvertices) for i in range(nvertices)]

    full_area = np.zeros(cx.shape[1:])
    nearest = np.full(cx.shape[1:], np.inf)
    contains_origin = np.ones(cx.shape[1:], dtype=bool)
    for i, j in edges:
        cross = cx[i] * cy[j] - cy[i] * cx[j]
        full_area += 0.5 * cross
        contains_origin &= cross >= 0
        nearest = np.minimum(nearest, _segment_distance_sq(cx[i], cy[i],
                                                           cx[j], cy[j]))

    inside = np.all(cx * cx + cy * cy <= r2, axis=0)
    outside = ~contains_origin & (nearest >= r2)
    area[inside] = np.abs(full_area[inside])

    boundary = ~inside & ~outside
    if np.any(boundary):
        bx = cx[:, boundary]
        by = cy[:, boundary]
        partial = np.zeros(bx.shape[1:])
        for i, j in edges:
            partial += _edge_circle_area(bx[i], by[i], bx[j], by[j], r)
        area[boundary] = np.abs(partial)

    return area


def clip_polygon(subject, clip):
    """
    Clip a polygon against a convex polygon (Sutherland-Hodgman).

    Parameters
    ----------
    subject : sequence of 2-tuple
        The ``(x, y)`` vertices of the polygon to clip.

    clip : `~numpy.ndarray`
        The ``(n, 2)`` vertices of the convex clipping polygon in
        counterclockwise order.

    Returns
    -------
    result : list of 2-tuple
        The vertices of the clipped polygon. The list is empty if the
        polygons do not overlap.
    """
    output = [tuple(vertex) for vertex in subject]
    nclip = len(clip)
    for i in range(nclip):
        if not output:
            break

        x0, y0 = clip[i]
        x1, y1 = clip[(i + 1) % nclip]

        vertices = output
        output = []
        prev = vertices[-1]
        prev_side = (x1 - x0) * (prev[1] - y0) - (y1 - y0) * (prev[0] - x0)
        for vertex in vertices:
            side = (x1 - x0) * (vertex[1] - y0) - (y1 - y0) * (vertex[0] - x0)
            if (side >= 0) != (prev_side >= 0):
                frac = prev_side / (prev_side - side)
                output.append((prev[0] + frac * (vertex[0] - prev[0]),
                               prev[1] + frac * (vertex[1] - prev[1])))
            if side >= 0:
                output.append(vertex)
            prev = vertex
            prev_side = side

    return output


def polygon_overlap_exact(xmin, xmax, ymin, ymax, nx, ny, vertices):
    """
    Exact fractional overlap of a convex polygon with each pixel of a
    grid.

    Pixels whose corners are all inside the polygon are assigned 1 and
    pixels separated from it by a polygon edge or by its bounding box
    are assigned 0. Only the remaining boundary pixels are clipped.

    Parameters
    ----------
    xmin, xmax, ymin, ymax : float
        The extent of the grid.

    nx, ny : int
        The grid dimensions.

    vertices : array_like
        The ``(n, 2)`` vertices of a convex polygon.

    Returns
    -------
    result : `~numpy.ndarray`
        A ``(ny, nx)`` array of fractions.
    """
    vertices = _counterclockwise(vertices)
    frac = np.zeros((ny, nx))
    if _signed_area(vertices) <= 0:
        return frac

    cx, cy = pixel_corners(xmin, xmax, ymin, ymax, nx, ny)
    dx, dy = _pixel_size(xmin, xmax, ymin, ymax, nx, ny)
    pixel_area = abs(dx * dy)

    inside = np.ones((ny, nx), dtype=bool)
    outside = np.zeros((ny, nx), dtype=bool)
    for side in _edge_sides(vertices, cx, cy):
        inside &= np.all(side >= 0, axis=0)
        outside |= np.all(side <= 0, axis=0)

    vxmin, vymin = vertices.min(axis=0)
    vxmax, vymax = vertices.max(axis=0)
    outside |= ((cx.min(axis=0) >= vxmax) | (cx.max(axis=0) <= vxmin)
                | (cy.min(axis=0) >= vymax) | (cy.max(axis=0) <= vymin))

    frac[inside] = 1.0
    for iy, ix in zip(*np.nonzero(~inside & ~outside)):
        pixel = zip(cx[:, iy, ix], cy[:, iy, ix])
        clipped = clip_polygon(pixel, vertices)
        if len(clipped) >= 3:
            frac[iy, ix] = polygon_area(clipped) / pixel_area

    return np.clip(frac, 0.0, 1.0)
