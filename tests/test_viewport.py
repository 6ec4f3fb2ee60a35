# -*- coding: utf-8 -*-
import unittest

import numpy as np

import fractalview.viewport as fvv
from fractalview.viewport import (
    Viewport, Screen_point, Complex_point, Canvas_size
)
import test_config


class Test_transform(unittest.TestCase):

    def setUp(self):
        self.canvas = Canvas_size(800., 600.)
        self.viewports = [
            Viewport(-0.5, 0., 2.),
            Viewport(-1.253488, -0.3846224, 0.000042),
            Viewport(0.3, -0.2, 1.e-6),
        ]

    def test_round_trip(self):
        """ screen -> complex -> screen recovers the pixel (relative 1e-9) """
        points = [
            Screen_point(0., 0.), Screen_point(800., 600.),
            Screen_point(123.25, 456.5), Screen_point(400., 300.)
        ]
        for vp in self.viewports:
            for p in points:
                with self.subTest(viewport=vp, point=p):
                    c = fvv.screen_to_complex(p, vp, self.canvas)
                    q = fvv.complex_to_screen(c, vp, self.canvas)
                    np.testing.assert_allclose(
                        (q.x, q.y), (p.x, p.y), rtol=1e-9, atol=1e-6
                    )

    def test_round_trip_random(self):
        """ Inverse transform over random viewports, canvases and in-bounds
        points """
        rng = np.random.default_rng(20240517)
        for _ in range(200):
            vp = Viewport(
                rng.uniform(-2., 2.),
                rng.uniform(-2., 2.),
                10. ** rng.uniform(-4., 2.)
            )
            canvas = Canvas_size(
                float(rng.integers(16, 4000)), float(rng.integers(16, 4000))
            )
            p = Screen_point(
                rng.uniform(0., canvas.width), rng.uniform(0., canvas.height)
            )
            with self.subTest(viewport=vp, canvas=canvas, point=p):
                c = fvv.screen_to_complex(p, vp, canvas)
                q = fvv.complex_to_screen(c, vp, canvas)
                np.testing.assert_allclose(
                    (q.x, q.y), (p.x, p.y), rtol=1e-9, atol=1e-6
                )

    def test_corners(self):
        vp = Viewport(1., 2., 4.)
        canvas = Canvas_size(400., 200.)
        top_left = fvv.screen_to_complex(Screen_point(0., 0.), vp, canvas)
        self.assertEqual((top_left.x, top_left.y), (-3., 4.))
        bottom_right = fvv.screen_to_complex(
            Screen_point(400., 200.), vp, canvas
        )
        self.assertEqual((bottom_right.x, bottom_right.y), (5., 0.))
        center = fvv.screen_to_complex(Screen_point(200., 100.), vp, canvas)
        self.assertEqual((center.x, center.y), (1., 2.))

    def test_array(self):
        vp = self.viewports[1]
        pts = np.array([[-1.2535, -0.38462], [-1.25348, -0.3846]])
        screen = fvv.complex_to_screen_array(pts, vp, self.canvas)
        for i in range(2):
            expected = fvv.complex_to_screen(
                Complex_point(*pts[i]), vp, self.canvas
            )
            np.testing.assert_allclose(screen[i], (expected.x, expected.y))

    def test_invalid(self):
        with self.assertRaises(ValueError):
            Viewport(0., 0., 0.)
        with self.assertRaises(ValueError):
            Viewport(0., 0., -1.)
        with self.assertRaises(ValueError):
            Viewport(float("nan"), 0., 1.)
        vp = self.viewports[0]
        for canvas in (Canvas_size(0., 600.), Canvas_size(800., 0.)):
            self.assertFalse(canvas.is_valid)
            with self.assertRaises(ValueError):
                fvv.screen_to_complex(Screen_point(1., 1.), vp, canvas)


class Test_zoom_pan(unittest.TestCase):

    def setUp(self):
        self.canvas = Canvas_size(640., 480.)
        self.vp = Viewport(-0.75, 0.1, 1.5)

    def test_zoom_anchor(self):
        """ The complex point under the anchor stays under the anchor """
        anchors = [
            Screen_point(0., 0.), Screen_point(320., 240.),
            Screen_point(17., 401.), Screen_point(640., 10.)
        ]
        for anchor in anchors:
            for scale in (0.95, 1.05, 0.5, 3.):
                with self.subTest(anchor=anchor, scale=scale):
                    before = fvv.screen_to_complex(
                        anchor, self.vp, self.canvas
                    )
                    new_vp = fvv.zoom_at_point(
                        self.vp, anchor, self.canvas, scale
                    )
                    after = fvv.screen_to_complex(
                        anchor, new_vp, self.canvas
                    )
                    self.assertAlmostEqual(new_vp.radius, 1.5 * scale)
                    np.testing.assert_allclose(
                        (after.x, after.y), (before.x, before.y),
                        rtol=1e-12, atol=1e-12
                    )

    def test_zoom_clamped(self):
        """ A clipped radius still preserves the anchor """
        anchor = Screen_point(100., 50.)
        with test_config.override_settings(radius_max=2.):
            before = fvv.screen_to_complex(anchor, self.vp, self.canvas)
            new_vp = fvv.zoom_at_point(self.vp, anchor, self.canvas, 10.)
            self.assertEqual(new_vp.radius, 2.)
            after = fvv.screen_to_complex(anchor, new_vp, self.canvas)
            np.testing.assert_allclose(
                (after.x, after.y), (before.x, before.y), atol=1e-12
            )

    def test_zoom_invalid_scale(self):
        with self.assertRaises(ValueError):
            fvv.zoom_at_point(self.vp, Screen_point(0., 0.), self.canvas, 0.)

    def test_pan_linearity(self):
        d1 = (12., -7.)
        d2 = (-3.5, 22.)
        two_steps = fvv.pan(
            fvv.pan(self.vp, *d1, self.canvas), *d2, self.canvas
        )
        one_step = fvv.pan(
            self.vp, d1[0] + d2[0], d1[1] + d2[1], self.canvas
        )
        self.assertEqual(two_steps.radius, self.vp.radius)
        np.testing.assert_allclose(
            (two_steps.x, two_steps.y), (one_step.x, one_step.y),
            rtol=1e-12
        )

    def test_pan_direction(self):
        """ Dragging right moves the center left, dragging down moves it
        up """
        moved = fvv.pan(self.vp, 10., 10., self.canvas)
        self.assertLess(moved.x, self.vp.x)
        self.assertGreater(moved.y, self.vp.y)
        scale = self.vp.radius / self.canvas.width * 2.
        self.assertAlmostEqual(self.vp.x - moved.x, 10. * scale)
        self.assertAlmostEqual(
            moved.y - self.vp.y, 10. * scale * self.canvas.ratio
        )


if __name__ == "__main__":
    full_test = True
    runner = unittest.TextTestRunner(verbosity=2)
    if full_test:
        runner.run(test_config.suite([Test_transform, Test_zoom_pan]))
    else:
        suite = unittest.TestSuite()
        suite.addTest(Test_zoom_pan("test_zoom_anchor"))
        runner.run(suite)
