# -*- coding: utf-8 -*-
"""
Camera state and the screen <-> complex plane mapping.

The visible window is described by its center and a half-width ``radius``
along the screen x-axis. The half-height is ``radius / ratio`` where
``ratio = width / height`` is the canvas aspect ratio, so that pixels are
square in the complex plane.

Screen coordinates have their origin at the top-left corner with y
increasing downward ; complex coordinates have the imaginary axis pointing
upward.
"""
import math
import dataclasses

import numpy as np

import fractalview.settings


@dataclasses.dataclass(frozen=True)
class Screen_point:
    """ Pixel coordinates, origin top-left """
    x: float
    y: float

    def distance(self, other):
        return math.hypot(other.x - self.x, other.y - self.y)

    def midpoint(self, other):
        return Screen_point(0.5 * (self.x + other.x), 0.5 * (self.y + other.y))


@dataclasses.dataclass(frozen=True)
class Complex_point:
    """ Real / imaginary parts of a point of the complex plane """
    x: float
    y: float

    def __complex__(self):
        return complex(self.x, self.y)


@dataclasses.dataclass(frozen=True)
class Canvas_size:
    width: float
    height: float

    @property
    def is_valid(self):
        """ A zero-sized (or collapsed) canvas has no defined transform """
        return (
            self.width > 0. and self.height > 0.
            and math.isfinite(self.width) and math.isfinite(self.height)
        )

    @property
    def ratio(self):
        return self.width / self.height


@dataclasses.dataclass(frozen=True)
class Viewport:
    """
    The rectangular window of the complex plane mapped onto the canvas.

    Parameters
    ----------
    x: float
        Real part of the center
    y: float
        Imaginary part of the center
    radius: float
        Half-extent of the window along the screen x-axis, > 0
    """
    x: float
    y: float
    radius: float

    def __post_init__(self):
        if not (math.isfinite(self.x) and math.isfinite(self.y)):
            raise ValueError(
                f"Non-finite viewport center: ({self.x}, {self.y})"
            )
        if not (math.isfinite(self.radius) and self.radius > 0.):
            raise ValueError(f"Expected a finite radius > 0: {self.radius}")

    def bounds(self, canvas):
        """
        Returns the visible rectangle (min_x, max_x, min_y, max_y)
        """
        check_canvas(canvas)
        ratio = canvas.ratio
        return (
            self.x - self.radius,
            self.x + self.radius,
            self.y - self.radius / ratio,
            self.y + self.radius / ratio,
        )

    def pixel_size(self, canvas):
        """ Size of one screen pixel in complex plane units """
        check_canvas(canvas)
        return 2. * self.radius / canvas.width


def check_canvas(canvas):
    if not canvas.is_valid:
        raise ValueError(f"Transform undefined for canvas {canvas}")


def clamp_radius(radius):
    """ Clips a radius to [settings.radius_min, settings.radius_max] """
    settings = fractalview.settings
    return min(max(radius, settings.radius_min), settings.radius_max)


def screen_to_complex(point, viewport, canvas):
    """
    Maps a screen point to the complex plane.

    Parameters
    ----------
    point: `Screen_point`
        Pixel coordinates, origin top-left
    viewport: `Viewport`
    canvas: `Canvas_size`
        Shall be valid (width and height > 0) otherwise ValueError is raised

    Returns
    -------
    c: `Complex_point`
    """
    min_x, max_x, min_y, max_y = viewport.bounds(canvas)
    cx = min_x + (point.x / canvas.width) * (max_x - min_x)
    cy = max_y - (point.y / canvas.height) * (max_y - min_y)
    return Complex_point(cx, cy)


def complex_to_screen(point, viewport, canvas):
    """
    Maps a complex point to screen coordinates - inverse of
    `screen_to_complex`
    """
    min_x, max_x, min_y, max_y = viewport.bounds(canvas)
    sx = (point.x - min_x) / (max_x - min_x) * canvas.width
    sy = (max_y - point.y) / (max_y - min_y) * canvas.height
    return Screen_point(sx, sy)


def complex_to_screen_array(points, viewport, canvas):
    """
    Vectorized `complex_to_screen`

    Parameters
    ----------
    points: array-like of shape (n, 2)
        complex coordinates as (real, imag) pairs

    Returns
    -------
    screen: np.ndarray of shape (n, 2), float64
    """
    min_x, max_x, min_y, max_y = viewport.bounds(canvas)
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    screen = np.empty_like(points)
    screen[:, 0] = (points[:, 0] - min_x) / (max_x - min_x) * canvas.width
    screen[:, 1] = (max_y - points[:, 1]) / (max_y - min_y) * canvas.height
    return screen


def zoom_at_point(viewport, anchor, canvas, scale):
    """
    Scales the radius by ``scale`` keeping the complex point under
    ``anchor`` fixed on screen.

    The new radius is clipped with `clamp_radius` ; the center is solved
    for the clipped radius so that the anchor is preserved in every case.

    Parameters
    ----------
    viewport: `Viewport`
        The current viewport
    anchor: `Screen_point`
        Screen position of the zoom anchor (cursor, pinch centroid)
    canvas: `Canvas_size`
    scale: float
        > 1 zooms out, < 1 zooms in

    Returns
    -------
    viewport: `Viewport`
        The new viewport
    """
    if not scale > 0.:
        raise ValueError(f"Expected a zoom scale > 0: {scale}")
    world = screen_to_complex(anchor, viewport, canvas)
    radius = clamp_radius(viewport.radius * scale)

    nx = anchor.x / canvas.width
    ny = anchor.y / canvas.height
    ratio = canvas.ratio
    x = world.x - (2. * nx - 1.) * radius
    y = world.y - (1. - 2. * ny) * radius / ratio
    return Viewport(x, y, radius)


def pan(viewport, dx, dy, canvas):
    """
    Translates the viewport following a pointer displacement (dx, dy) in
    pixels, for a "grab and drag" feel (y inverted).
    """
    check_canvas(canvas)
    scale = viewport.radius / canvas.width * 2.
    ratio = canvas.ratio
    return Viewport(
        viewport.x - dx * scale,
        viewport.y + dy * scale * ratio,
        viewport.radius
    )
