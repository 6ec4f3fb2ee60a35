# -*- coding: utf-8 -*-
from .mandelbrot import Mandelbrot
from .julia import Julia

families = {
    Mandelbrot.family: Mandelbrot,
    Julia.family: Julia,
}
"""Fractal families by preset identifier"""


def fractal_from_family(family, **kwargs):
    """ Instanciates a fractal from its family identifier """
    try:
        fractal_class = families[family]
    except KeyError:
        raise KeyError(
            f"Unknown fractal family {family}, expected one of "
            f"{list(families.keys())}"
        )
    return fractal_class(**kwargs)
