# -*- coding: utf-8 -*-
import fractalview.core
import fractalview.settings
from fractalview.viewport import Complex_point


class Julia(fractalview.core.Escape_time_fractal):
    """
    Filled Julia set of ``z <- z**2 + k``.

    The pixel coordinate is the seed ``z0`` ; the Julia constant ``k`` is
    fixed for the whole image (user-adjustable).

    Parameters
    ==========
    julia_constant : `Complex_point` | (float, float)
        The constant k. Defaults to `fractalview.settings.julia_constant`
    max_iterations : int
        The maximum iteration number. Defaults to
        `fractalview.settings.max_iterations`
    """
    family = "julia"
    julia_mode = True

    def __init__(self, julia_constant=None, max_iterations=None):
        super().__init__(max_iterations)
        if julia_constant is None:
            julia_constant = fractalview.settings.julia_constant
        self.julia_constant = julia_constant

    @property
    def julia_constant(self):
        return self._julia_constant

    @julia_constant.setter
    def julia_constant(self, val):
        if not isinstance(val, Complex_point):
            kx, ky = val
            val = Complex_point(float(kx), float(ky))
        self._julia_constant = val

    @property
    def constant(self):
        return self._julia_constant

    def seed_and_constant(self, point):
        return point, self._julia_constant

    def __repr__(self):
        k = self._julia_constant
        return (
            f"Julia(julia_constant=({k.x}, {k.y}), "
            f"max_iterations={self.max_iterations})"
        )
