# -*- coding: utf-8 -*-
import logging

import fractalview.settings
import fractalview.escape_time as fvet
from fractalview.viewport import Complex_point, check_canvas


logger = logging.getLogger(__name__)


class Escape_time_fractal:
    """
    Base class for the quadratic escape-time families.

    A family defines which quantity varies per pixel: the seed ``z0`` or the
    constant ``c`` of the recurrence ``z <- z**2 + c``. Derived classes shall
    implement `seed_and_constant`.
    """
    family = None
    """ The string identifier of the family, also used by the presets """

    julia_mode = False
    """ Passed to the fragment program: True if the pixel is the seed """

    def __init__(self, max_iterations=None):
        if max_iterations is None:
            max_iterations = fractalview.settings.max_iterations
        self.max_iterations = max_iterations

    @property
    def max_iterations(self):
        return self._max_iterations

    @max_iterations.setter
    def max_iterations(self, val):
        val = int(val)
        if val < 1:
            raise ValueError(f"Expected max_iterations >= 1: {val}")
        self._max_iterations = val

    @property
    def constant(self):
        """ The fixed parameter sent to the GPU (unused for Mandelbrot) """
        return Complex_point(0., 0.)

    def seed_and_constant(self, point):
        """
        Returns (z0, c) as 2 `Complex_point` for the pixel coordinate
        ``point``
        """
        raise NotImplementedError("Derived classes should implement")

    def iteration_path(self, point):
        """
        The full iteration sequence of a point, seed included.

        Returns
        -------
        path: np.ndarray of shape (n, 2)
            ``n == max_iterations + 1`` for a non-escaping point
        """
        z0, c = self.seed_and_constant(point)
        return fvet.iteration_path(
            float(z0.x), float(z0.y), float(c.x), float(c.y),
            self.max_iterations
        )

    def escape_index(self, point):
        """ Escape index of a point or
        `fractalview.escape_time.NON_ESCAPING` """
        z0, c = self.seed_and_constant(point)
        return fvet.escape_index(
            float(z0.x), float(z0.y), float(c.x), float(c.y),
            self.max_iterations
        )

    def escape_grid(self, viewport, canvas):
        """
        Per-pixel escape indices over the canvas, int32 array of shape
        (height, width). Used by the CPU reference renderer.
        """
        check_canvas(canvas)
        nx = int(canvas.width)
        ny = int(canvas.height)
        min_x, max_x, min_y, max_y = viewport.bounds(canvas)
        k = self.constant
        logger.debug(
            f"{self.family} escape grid {nx}x{ny}, "
            f"max_iterations {self.max_iterations}"
        )
        return fvet.escape_grid(
            min_x, min_y,
            (max_x - min_x) / canvas.width, (max_y - min_y) / canvas.height,
            nx, ny,
            float(k.x), float(k.y), self.julia_mode,
            self.max_iterations
        )

    def is_escaping(self, path):
        return fvet.escaped(path, self.max_iterations)

    def __repr__(self):
        return f"{self.__class__.__name__}(max_iterations={self.max_iterations})"

