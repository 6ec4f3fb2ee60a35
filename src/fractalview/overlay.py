# -*- coding: utf-8 -*-
"""
Iteration path overlay.

Tracks the pointer, converts it to a complex coordinate c and produces the
screen-space polyline of its iteration path: the orbit of the recurrence
``z <- z**2 + c`` from the canonical seed ``z0 = (0, 0)``, whatever the
fractal family on display (for a Julia set, c is the pixel coordinate and
the path shows whether it belongs to the Mandelbrot set).

A short click (press / release quick and without displacement) freezes or
unfreezes the coordinate ; a drag never does.
"""
import time
import logging
import typing

import numpy as np

import fractalview.settings
import fractalview.escape_time as fvet
from fractalview.viewport import (
    Screen_point,
    screen_to_complex,
    complex_to_screen,
    complex_to_screen_array,
)


logger = logging.getLogger(__name__)


class Click_detector:
    def __init__(self, max_duration=None, max_distance=None):
        """
        Detects short clicks.

        Parameters
        ----------
        max_duration: float
            Press-to-release duration threshold (s), defaults to
            `fractalview.settings.click_max_duration`
        max_distance: float
            Displacement threshold (pixels), defaults to
            `fractalview.settings.click_max_distance`
        """
        settings = fractalview.settings
        if max_duration is None:
            max_duration = settings.click_max_duration
        if max_distance is None:
            max_distance = settings.click_max_distance
        self.max_duration = max_duration
        self.max_distance = max_distance
        self._press_time = None
        self._press_pos = None

    def press(self, point, timestamp=None):
        if timestamp is None:
            timestamp = time.monotonic()
        self._press_time = timestamp
        self._press_pos = point

    def release(self, point, timestamp=None):
        """ Returns True if press + release qualifies as a short click """
        if self._press_time is None:
            return False
        if timestamp is None:
            timestamp = time.monotonic()
        duration = timestamp - self._press_time
        distance = self._press_pos.distance(point)
        self._press_time = None
        self._press_pos = None
        return (
            duration <= self.max_duration
            and distance < self.max_distance
        )


class Overlay_geometry(typing.NamedTuple):
    """
    What the host draws: a connected polyline through ``points`` with a
    marker on each point, the first ``labelled`` points numbered, and a
    distinct marker + ``label`` at ``origin`` (the tracked coordinate).
    """
    points: np.ndarray
    origin: Screen_point
    label: str
    labelled: int
    escaped: bool


class Path_overlay:
    def __init__(self, fractal, click_detector=None):
        """
        Parameters
        ----------
        fractal: `fractalview.core.Escape_time_fractal`
            The fractal on display, provides the iteration cap
        click_detector: `Click_detector` | None
        """
        self.fractal = fractal
        if click_detector is None:
            click_detector = Click_detector()
        self.click_detector = click_detector
        self.enabled = False
        self.frozen = False
        self.coord = None
        self.last_pointer = None
        self._viewport = None
        self._canvas = None

    def set_fractal(self, fractal):
        self.fractal = fractal

    def toggle_enabled(self):
        """ Disabling clears the coordinate and the frozen flag """
        self.enabled = not self.enabled
        if not self.enabled:
            self.coord = None
            self.frozen = False
        else:
            self.refresh()
        return self.enabled

    def toggle_frozen(self):
        """ Unfreezing refreshes the coordinate from the last pointer
        position immediately """
        self.frozen = not self.frozen
        logger.debug(f"Path overlay frozen: {self.frozen}")
        if not self.frozen:
            self.refresh()
        return self.frozen

    def on_viewport(self, viewport, canvas):
        """ Viewport-update sink: the tracked pointer now points elsewhere """
        self._viewport = viewport
        self._canvas = canvas
        self.refresh()

    def on_pointer_move(self, point):
        self.last_pointer = point
        self.refresh()

    def on_pointer_down(self, point, timestamp=None):
        self.click_detector.press(point, timestamp)

    def on_pointer_up(self, point, timestamp=None):
        """ Returns True if the frozen state was toggled """
        if self.click_detector.release(point, timestamp) and self.enabled:
            self.toggle_frozen()
            return True
        return False

    def refresh(self):
        """ Updates the coordinate from the last pointer, unless frozen """
        if not self.enabled or self.frozen:
            return
        if (
            self.last_pointer is None or self._viewport is None
            or not self._canvas.is_valid
        ):
            return
        self.coord = screen_to_complex(
            self.last_pointer, self._viewport, self._canvas
        )

    def iteration_path(self):
        """ Iteration path of the current coordinate, or None. Always
        starts with (0, 0) """
        if not self.enabled or self.coord is None:
            return None
        c = self.coord
        return fvet.iteration_path(
            0., 0., float(c.x), float(c.y), self.fractal.max_iterations
        )

    def geometry(self, viewport, canvas):
        """
        Returns
        -------
        geometry: `Overlay_geometry` | None
            None when nothing shall be drawn
        """
        if not canvas.is_valid:
            return None
        path = self.iteration_path()
        if path is None:
            return None
        coord = self.coord
        return Overlay_geometry(
            points=complex_to_screen_array(path, viewport, canvas),
            origin=complex_to_screen(coord, viewport, canvas),
            label=f"c = {coord.x:.4f} + {coord.y:.4f}i",
            labelled=min(
                fractalview.settings.overlay_labelled_points, path.shape[0]
            ),
            escaped=fvet.escaped(path, self.fractal.max_iterations),
        )
