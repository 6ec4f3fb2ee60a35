# -*- coding: utf-8 -*-
"""
Preset viewports and shader variants, per fractal family.

The viewer only consumes the "current preset viewport" and the "current
shader variant identifier" through a `Preset_cursor` ; it never interprets
the preset contents.

JSON format::

    {
        "mandelbrot": {
            "positions": [{"x": -0.5, "y": 0.0, "radius": 2.0}, ...],
            "shader_variants": ["hue_sweep", "ramped_hue_sweep"]
        },
        "julia": {...}
    }
"""
import json
import logging
import typing

import fractalview.colors
import fractalview.models
from fractalview.utils import Protected_mapping
from fractalview.viewport import Viewport


logger = logging.getLogger(__name__)


class Fractal_variant(typing.NamedTuple):
    name: str
    positions: tuple
    shader_variants: tuple


def make_variant(name, positions, shader_variants):
    """
    Validated `Fractal_variant`

    Parameters
    ----------
    name: str
        A fractal family identifier, see `fractalview.models.families`
    positions: sequence of `Viewport` or of dict with keys x, y, radius
    shader_variants: sequence of color policy identifiers
    """
    if name not in fractalview.models.families:
        raise ValueError(f"Unknown fractal family: {name}")
    positions = tuple(
        p if isinstance(p, Viewport) else Viewport(
            float(p["x"]), float(p["y"]), float(p["radius"])
        )
        for p in positions
    )
    if len(positions) == 0:
        raise ValueError(f"No preset position for {name}")
    shader_variants = tuple(shader_variants)
    if len(shader_variants) == 0:
        raise ValueError(f"No shader variant for {name}")
    known = fractalview.colors.policy_ids()
    for variant in shader_variants:
        if variant not in known:
            raise ValueError(
                f"Unknown shader variant {variant} for {name}, expected one "
                f"of {known}"
            )
    return Fractal_variant(name, positions, shader_variants)


class Preset_config(Protected_mapping):
    """
    Read-only mapping: fractal family name -> `Fractal_variant`
    """
    def __init__(self, variants):
        super().__init__({v.name: v for v in variants})
        if len(self) == 0:
            raise ValueError("Empty preset configuration")

    @classmethod
    def from_dict(cls, dic):
        return cls([
            make_variant(
                name, val["positions"], val["shader_variants"]
            )
            for name, val in dic.items()
        ])

    @classmethod
    def from_json(cls, path):
        with open(path, "r") as f:
            dic = json.load(f)
        logger.info(f"Loading presets from {path}")
        return cls.from_dict(dic)

    def to_dict(self):
        return {
            name: {
                "positions": [
                    {"x": p.x, "y": p.y, "radius": p.radius}
                    for p in variant.positions
                ],
                "shader_variants": list(variant.shader_variants)
            }
            for name, variant in self._dict.items()
        }

    def save_json(self, path):
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=4)


default_presets = {
    "mandelbrot": {
        "positions": [
            {"x": -0.5, "y": 0., "radius": 2.},
            {"x": -1.253488, "y": -0.3846224, "radius": 0.000042},
            {"x": -1.25344342, "y": -0.38461364, "radius": 0.00000356},
            {"x": -0.114961, "y": -0.043555, "radius": 0.000567},
        ],
        "shader_variants": ["hue_sweep", "ramped_hue_sweep"],
    },
    "julia": {
        "positions": [
            {"x": 0., "y": 0., "radius": 2.},
        ],
        "shader_variants": ["ramped_hue_sweep", "hue_sweep"],
    },
}


def default_config():
    return Preset_config.from_dict(default_presets)


class Preset_cursor:
    def __init__(self, config, fractal=None):
        """
        Current selection in a `Preset_config`: fractal family, position
        index and shader variant index.

        Parameters
        ----------
        config: `Preset_config`
        fractal: str | None
            Initial family, defaults to the first one of the config
        """
        self.config = config
        if fractal is None:
            fractal = next(iter(config))
        self.select_fractal(fractal)

    def select_fractal(self, name):
        """ Selects a family and resets the position and shader indices """
        if name not in self.config:
            raise KeyError(
                f"Unknown fractal {name}, expected one of {list(self.config)}"
            )
        self.fractal = name
        self._variant = self.config[name]
        self.position_index = 0
        self.shader_index = 0

    @property
    def fractals(self):
        return tuple(self.config)

    @property
    def viewport(self):
        """ The current preset `Viewport` """
        return self._variant.positions[self.position_index]

    @property
    def shader_variant(self):
        """ The current shader variant identifier """
        return self._variant.shader_variants[self.shader_index]

    @property
    def positions_count(self):
        return len(self._variant.positions)

    @property
    def shaders_count(self):
        return len(self._variant.shader_variants)

    def select_position(self, index):
        if not 0 <= index < self.positions_count:
            raise IndexError(f"Position index out of range: {index}")
        self.position_index = index
        return self.viewport

    def select_shader(self, index):
        if not 0 <= index < self.shaders_count:
            raise IndexError(f"Shader index out of range: {index}")
        self.shader_index = index
        return self.shader_variant

    def next_position(self):
        """ Cycles to the next preset position """
        return self.select_position(
            (self.position_index + 1) % self.positions_count
        )

    def next_shader(self):
        """ Cycles to the next shader variant """
        return self.select_shader(
            (self.shader_index + 1) % self.shaders_count
        )
