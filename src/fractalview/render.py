# -*- coding: utf-8 -*-
"""
Render pipeline contract.

The GPU program receives per frame:

    - ``u_min``: complex coordinates of the bottom-left corner of the view
    - ``u_scale``: size of one pixel in complex units, per axis
    - ``u_julia`` / ``u_julia_mode``: the Julia constant and a flag telling
      whether the pixel coordinate is the seed (Julia) or the constant
      (Mandelbrot)
    - ``u_max_iter``: the iteration cap

and evaluates ``c = u_min + gl_FragCoord.xy * u_scale`` - the same pixel
centers as `fractalview.escape_time.escape_grid`. The GPU runs in float32,
the CPU reference in float64: results are expected to diverge at deep zoom.
"""
import os
import logging
import textwrap
import typing

import numpy as np
import PIL.Image
import PIL.PngImagePlugin

import fractalview as fv
import fractalview.colors
import fractalview.utils as fvutils
import fractalview.escape_time as fvet


logger = logging.getLogger(__name__)


class Frame_uniforms(typing.NamedTuple):
    u_min: tuple
    u_scale: tuple
    u_julia: tuple
    u_julia_mode: int
    u_max_iter: int


def frame_uniforms(viewport, canvas, fractal):
    """
    Per-frame uniforms for ``fractal`` seen through ``viewport``.

    Returns
    -------
    uniforms: `Frame_uniforms` | None
        None if the canvas is zero-sized, in which case the frame shall be
        skipped.
    """
    if not canvas.is_valid:
        logger.debug(f"Frame skipped, invalid canvas {canvas}")
        return None
    min_x, max_x, min_y, max_y = viewport.bounds(canvas)
    k = fractal.constant
    return Frame_uniforms(
        u_min=(min_x, min_y),
        u_scale=(
            (max_x - min_x) / canvas.width,
            (max_y - min_y) / canvas.height
        ),
        u_julia=(k.x, k.y),
        u_julia_mode=int(fractal.julia_mode),
        u_max_iter=fractal.max_iterations,
    )


FULLSCREEN_TRIANGLE = np.array(
    [0., 3., -3., -3., 3., -3.], dtype=np.float32
)
""" A single triangle covering the clip space, (x, y) pairs """

VERTEX_SOURCE = textwrap.dedent("""\
    #version 330 core
    in vec2 a_position;
    void main() {
        gl_Position = vec4(a_position, 0.0, 1.0);
    }
""")

_FRAGMENT_HEADER = textwrap.dedent("""\
    #version 330 core
    uniform vec2 u_min;
    uniform vec2 u_scale;
    uniform vec2 u_julia;
    uniform int u_julia_mode;
    uniform int u_max_iter;
    out vec4 frag_color;
""")

_FRAGMENT_ESCAPE = textwrap.dedent(f"""\
    const int NON_ESCAPING = {fvet.NON_ESCAPING};

    int escape_index(vec2 z, vec2 c) {{
        for (int i = 0; i < u_max_iter; i++) {{
            float zx2 = z.x * z.x;
            float zy2 = z.y * z.y;
            if (zx2 + zy2 > {fvet.ESCAPE_RADIUS_SQ:.1f}) {{
                return max(i - 1, 0);
            }}
            z = vec2(zx2 - zy2 + c.x, 2.0 * z.x * z.y + c.y);
        }}
        return NON_ESCAPING;
    }}
""")

_FRAGMENT_MAIN = textwrap.dedent("""\
    void main() {{
        vec2 p = u_min + gl_FragCoord.xy * u_scale;
        int n;
        if (u_julia_mode == 1) {{
            n = escape_index(p, u_julia);
        }} else {{
            n = escape_index(vec2(0.0, 0.0), p);
        }}
        if (n == NON_ESCAPING) {{
            frag_color = vec4({bg}, 1.0);
        }} else {{
            frag_color = vec4(colorize(n), 1.0);
        }}
    }}
""")


def fragment_source(policy):
    """
    Full fragment program source for a color policy
    (`fractalview.colors.Color_policy`)
    """
    bg = ", ".join(
        f"{c / 255.:.6f}" for c in fractalview.colors.policies.BACKGROUND
    )
    return (
        _FRAGMENT_HEADER
        + policy.glsl_source()
        + _FRAGMENT_ESCAPE
        + _FRAGMENT_MAIN.format(bg=bg)
    )


class Render_pipeline:
    def __init__(self, fractal, policy):
        """
        Base class for the renderers: holds the fractal family and the color
        policy. Derived classes shall implement `draw`.

        Parameters
        ----------
        fractal: `fractalview.core.Escape_time_fractal`
        policy: `fractalview.colors.Color_policy`
        """
        self.fractal = fractal
        self.policy = policy

    def set_fractal(self, fractal):
        self.fractal = fractal

    def set_policy(self, policy):
        self.policy = policy

    def draw(self, viewport, canvas):
        raise NotImplementedError("Derived classes should implement")


class Reference_renderer(Render_pipeline):
    """
    CPU renderer - numba escape grid colorized with numpy.

    Same formula and pixel centers as the fragment program, in float64.
    """

    def draw(self, viewport, canvas):
        """
        Returns
        -------
        img: PIL.Image.Image | None
            RGB image of the canvas size, None for a zero-sized canvas
        """
        if not canvas.is_valid:
            logger.debug(f"Reference render skipped, invalid canvas {canvas}")
            return None
        indices = self.fractal.escape_grid(viewport, canvas)
        rgb = self.policy.colorize(indices)
        return PIL.Image.fromarray(rgb)

    def tag_dict(self, viewport):
        return {
            "fractal": self.fractal.family,
            "policy": self.policy.policy_id,
            "x": repr(viewport.x),
            "y": repr(viewport.y),
            "radius": repr(viewport.radius),
            "max_iterations": self.fractal.max_iterations,
            "fractalview_version": fv.__version__,
        }

    def save_png(self, viewport, canvas, img_path):
        """
        Renders and saves to png format at *img_path*, tagging the view
        parameters in the png text chunks.
        """
        img = self.draw(viewport, canvas)
        if img is None:
            logger.warning(f"Nothing to save for canvas {canvas}")
            return None
        fvutils.mkdir_p(os.path.dirname(os.path.abspath(img_path)))
        pnginfo = PIL.PngImagePlugin.PngInfo()
        for k, v in self.tag_dict(viewport).items():
            pnginfo.add_text(k, str(v))
        img.save(img_path, pnginfo=pnginfo)
        logger.info(textwrap.dedent(f"""\
            Image of size {img.size} saved to:
              {img_path}"""
        ))
        return img
