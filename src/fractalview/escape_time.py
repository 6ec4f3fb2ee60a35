# -*- coding: utf-8 -*-
"""
Escape-time kernels (CPU realization).

The recurrence is the same for the Mandelbrot and Julia families::

    z <- z0
    for i in [0, max_iter):
        if |z|^2 > 4.0: escape, stop
        z <- (z.x^2 - z.y^2 + c.x, 2 z.x z.y + c.y)

Mandelbrot uses ``z0 = (0, 0)`` and a per-pixel ``c`` ; Julia uses a
per-pixel ``z0`` and a fixed ``c`` (the Julia constant). The GPU fragment
program in `fractalview.render` implements the same loop in float32.

Escape index: 0-based index of the recurrence step whose output first lies
outside the radius-2 disk. A seed already outside the disk reports 0.
Points still inside after ``max_iter`` steps report `NON_ESCAPING`.
"""
import numpy as np
import numba


NON_ESCAPING = -1

ESCAPE_RADIUS_SQ = 4.0


@numba.njit(nogil=True)
def escape_loop(zx, zy, cx, cy, max_iter):
    """
    Runs the escape-time loop.

    Returns
    -------
    n_check: int
        The loop index at which the escape test fired, or ``max_iter`` if it
        never did
    """
    for i in range(max_iter):
        zx2 = zx * zx
        zy2 = zy * zy
        if zx2 + zy2 > ESCAPE_RADIUS_SQ:
            return i
        zy = 2.0 * zx * zy + cy
        zx = zx2 - zy2 + cx
    return max_iter


@numba.njit(nogil=True)
def escape_index(zx, zy, cx, cy, max_iter):
    """ Escape index of a single point (see module doc) """
    n_check = escape_loop(zx, zy, cx, cy, max_iter)
    if n_check >= max_iter:
        return NON_ESCAPING
    if n_check == 0:
        return 0
    return n_check - 1


@numba.njit(nogil=True)
def iteration_path(zx, zy, cx, cy, max_iter):
    """
    Records every intermediate z, seed included.

    Returns
    -------
    path: np.ndarray of shape (n, 2), float64
        with ``1 <= n <= max_iter + 1``. ``n == max_iter + 1`` means the
        point did not escape.
    """
    path = np.empty((max_iter + 1, 2), dtype=np.float64)
    path[0, 0] = zx
    path[0, 1] = zy
    n = 1
    for i in range(max_iter):
        zx2 = zx * zx
        zy2 = zy * zy
        if zx2 + zy2 > ESCAPE_RADIUS_SQ:
            break
        zy = 2.0 * zx * zy + cy
        zx = zx2 - zy2 + cx
        path[n, 0] = zx
        path[n, 1] = zy
        n += 1
    return path[:n].copy()


@numba.njit(nogil=True)
def escape_grid(min_x, min_y, scale_x, scale_y, nx, ny, kx, ky, julia,
                max_iter):
    """
    Escape indices of a (ny, nx) pixel grid, evaluated at pixel centers.

    Row 0 is the top row of the screen. The pixel (ix, iy) maps to::

        x = min_x + (ix + 0.5) * scale_x
        y = min_y + (ny - iy - 0.5) * scale_y

    which is the CPU twin of the fragment program (``gl_FragCoord`` has its
    origin at the bottom-left corner and points to pixel centers).

    Parameters
    ----------
    julia: bool
        If True the pixel coordinate is the seed and (kx, ky) the constant,
        otherwise the seed is 0 and the pixel coordinate the constant.
    """
    res = np.empty((ny, nx), dtype=np.int32)
    for iy in range(ny):
        y = min_y + (ny - iy - 0.5) * scale_y
        for ix in range(nx):
            x = min_x + (ix + 0.5) * scale_x
            if julia:
                res[iy, ix] = escape_index(x, y, kx, ky, max_iter)
            else:
                res[iy, ix] = escape_index(0.0, 0.0, x, y, max_iter)
    return res


def escaped(path, max_iter):
    """ True if a path returned by `iteration_path` corresponds to an
    escaping point """
    return path.shape[0] < max_iter + 1
