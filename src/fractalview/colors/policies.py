# -*- coding: utf-8 -*-
"""
Color policies: escape index -> RGB.

Each policy has a numpy implementation (CPU reference) and a GLSL
implementation (fragment program) of the same formula. Non-escaping points
are painted with the background color.
"""
import textwrap

import numpy as np

import fractalview.escape_time as fvet


BACKGROUND = np.array([0, 0, 0], dtype=np.uint8)

# Shared by all policies, GLSL side of `hsv_to_rgb`
GLSL_HSV_TO_RGB = textwrap.dedent("""\
    vec3 hsv_to_rgb(float h, float s, float v) {
        vec4 K = vec4(1.0, 2.0 / 3.0, 1.0 / 3.0, 3.0);
        vec3 p = abs(fract(vec3(h) + K.xyz) * 6.0 - K.www);
        return v * mix(K.xxx, clamp(p - K.xxx, 0.0, 1.0), s);
    }
""")


def hsv_to_rgb(h, s, v):
    """
    Vectorized HSV -> RGB conversion, float arrays in [0, 1].
    Returns an array of shape h.shape + (3,)
    """
    h = np.asarray(h, dtype=np.float64)
    s = np.asarray(s, dtype=np.float64)[..., np.newaxis]
    v = np.asarray(v, dtype=np.float64)[..., np.newaxis]
    K = np.array([1., 2. / 3., 1. / 3.])
    p = np.abs(np.modf(h[..., np.newaxis] + K)[0] * 6. - 3.)
    return v * (1. + (np.clip(p - 1., 0., 1.) - 1.) * s)


def to_uint8(rgb):
    """ Float [0, 1] -> uint8 with the rounding used by GL normalized
    formats """
    return np.floor(np.clip(rgb, 0., 1.) * 255. + 0.5).astype(np.uint8)


class Color_policy:
    """
    Base class for color policies. Derived classes shall implement
    `hsv` and `glsl_colorize`.
    """
    policy_id = None

    def hsv(self, n):
        """ (h, s, v) float arrays for escape indices ``n`` (all escaping) """
        raise NotImplementedError("Derived classes should implement")

    def glsl_colorize(self):
        """ GLSL source of ``vec3 colorize(int n)`` """
        raise NotImplementedError("Derived classes should implement")

    def uniforms(self):
        """ dict of float uniforms used by `glsl_colorize` """
        return {}

    def glsl_source(self):
        """ Full GLSL block: uniform declarations + helpers + colorize """
        decl = "".join(
            f"uniform float {name};\n" for name in self.uniforms()
        )
        return decl + GLSL_HSV_TO_RGB + self.glsl_colorize()

    def colorize(self, indices):
        """
        Parameters
        ----------
        indices: int array-like
            Escape indices, `fractalview.escape_time.NON_ESCAPING` for
            interior points

        Returns
        -------
        rgb: np.ndarray of uint8, shape indices.shape + (3,)
        """
        indices = np.asarray(indices)
        rgb = np.empty(indices.shape + (3,), dtype=np.uint8)
        interior = (indices == fvet.NON_ESCAPING)
        rgb[interior] = BACKGROUND
        n = indices[~interior].astype(np.float64)
        if n.size > 0:
            h, s, v = self.hsv(n)
            rgb[~interior] = to_uint8(hsv_to_rgb(h, s, v))
        return rgb

    def __eq__(self, other):
        return (
            other.__class__ == self.__class__
            and other.uniforms() == self.uniforms()
        )

    def __repr__(self):
        kwargs = ", ".join(
            f"{k[2:]}={v}" for k, v in self.uniforms().items()
        )
        return f"{self.__class__.__name__}({kwargs})"


class Hue_sweep(Color_policy):
    """
    Periodic hue sweep, full saturation and value.

    Parameters
    ----------
    period: float
        Number of iterations for a full turn of the hue circle
    """
    policy_id = "hue_sweep"

    def __init__(self, period=64.):
        if not period > 0.:
            raise ValueError(f"Expected period > 0: {period}")
        self.period = float(period)

    def hue(self, n):
        return np.modf(n / self.period)[0]

    def hsv(self, n):
        ones = np.ones_like(n)
        return self.hue(n), ones, ones

    def uniforms(self):
        return {"u_period": self.period}

    def glsl_colorize(self):
        return textwrap.dedent("""\
            vec3 colorize(int n) {
                float h = fract(float(n) / u_period);
                return hsv_to_rgb(h, 1.0, 1.0);
            }
        """)


class Ramped_hue_sweep(Hue_sweep):
    """
    Periodic hue sweep where saturation and value fade in linearly over the
    first ``ramp`` iterations.

    Parameters
    ----------
    period: float
        Number of iterations for a full turn of the hue circle
    ramp: float
        Number of iterations of the fade-in
    """
    policy_id = "ramped_hue_sweep"

    def __init__(self, period=64., ramp=32.):
        super().__init__(period)
        if not ramp > 0.:
            raise ValueError(f"Expected ramp > 0: {ramp}")
        self.ramp = float(ramp)

    def hsv(self, n):
        t = np.clip(n / self.ramp, 0., 1.)
        return self.hue(n), t, t

    def uniforms(self):
        return {"u_period": self.period, "u_ramp": self.ramp}

    def glsl_colorize(self):
        return textwrap.dedent("""\
            vec3 colorize(int n) {
                float h = fract(float(n) / u_period);
                float t = clamp(float(n) / u_ramp, 0.0, 1.0);
                return hsv_to_rgb(h, t, t);
            }
        """)


_policies = {
    Hue_sweep.policy_id: Hue_sweep,
    Ramped_hue_sweep.policy_id: Ramped_hue_sweep,
}


def policy_ids():
    return tuple(_policies.keys())


def policy_from_id(policy_id, **kwargs):
    """ Instanciates a color policy from its identifier """
    try:
        return _policies[policy_id](**kwargs)
    except KeyError:
        raise KeyError(
            f"Unknown color policy {policy_id}, expected one of "
            f"{policy_ids()}"
        )
