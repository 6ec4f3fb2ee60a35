# -*- coding: utf-8 -*-
import fractalview.core
from fractalview.viewport import Complex_point


class Mandelbrot(fractalview.core.Escape_time_fractal):
    """
    The standard power-2 Mandelbrot set.

    Iterations start from the canonical seed ``z0 = 0`` ; the pixel
    coordinate is the constant ``c``. Every iteration path hence starts
    with (0, 0).

    Parameters
    ==========
    max_iterations : int
        The maximum iteration number. Defaults to
        `fractalview.settings.max_iterations`
    """
    family = "mandelbrot"
    julia_mode = False

    def seed_and_constant(self, point):
        return Complex_point(0., 0.), point
