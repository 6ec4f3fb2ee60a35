# -*- coding: utf-8 -*-
import unittest

import numpy as np

import fractalview.viewport as fvv
import fractalview.gesture as fvg
from fractalview.gesture import (
    Gesture_controller, Gesture_event, Gesture_mode, Gesture_state
)
from fractalview.viewport import Viewport, Screen_point, Canvas_size
import test_config


class Test_transition(unittest.TestCase):

    def setUp(self):
        self.canvas = Canvas_size(800., 600.)
        self.vp = Viewport(-0.5, 0., 2.)

    def apply(self, state, *events, viewport=None):
        viewport = self.vp if viewport is None else viewport
        for event in events:
            state, viewport = fvg.transition(
                state, viewport, self.canvas, event
            )
        return state, viewport

    def test_drag(self):
        state, vp = self.apply(
            fvg.IDLE,
            Gesture_event.press((100., 100.)),
            Gesture_event.move((110., 95.)),
            Gesture_event.move((130., 90.)),
        )
        self.assertIs(state.mode, Gesture_mode.dragging)
        self.assertEqual(state.last_pointer, Screen_point(130., 90.))
        expected = fvv.pan(self.vp, 30., -10., self.canvas)
        np.testing.assert_allclose((vp.x, vp.y), (expected.x, expected.y))
        self.assertEqual(vp.radius, self.vp.radius)

        state, vp2 = self.apply(state, Gesture_event.release(), viewport=vp)
        self.assertEqual(state, fvg.IDLE)
        self.assertIs(vp2, vp)

    def test_move_while_idle(self):
        """ Hovering does not pan """
        state, vp = self.apply(fvg.IDLE, Gesture_event.move((10., 10.)))
        self.assertEqual(state, fvg.IDLE)
        self.assertIs(vp, self.vp)

    def test_leave(self):
        state, _ = self.apply(
            fvg.IDLE,
            Gesture_event.press((100., 100.)),
            Gesture_event.leave()
        )
        self.assertEqual(state, fvg.IDLE)

    def test_wheel(self):
        anchor = Screen_point(200., 150.)
        for delta_y, factor in ((120., 1.05), (-3., 0.95), (1.e-3, 1.05)):
            with self.subTest(delta_y=delta_y):
                state, vp = self.apply(
                    fvg.IDLE, Gesture_event.wheel(anchor, delta_y)
                )
                self.assertEqual(state, fvg.IDLE)
                self.assertAlmostEqual(vp.radius, self.vp.radius * factor)
                before = fvv.screen_to_complex(anchor, self.vp, self.canvas)
                after = fvv.screen_to_complex(anchor, vp, self.canvas)
                np.testing.assert_allclose(
                    (after.x, after.y), (before.x, before.y), atol=1e-12
                )

    def test_wheel_zero(self):
        state, vp = self.apply(
            fvg.IDLE, Gesture_event.wheel(Screen_point(1., 1.), 0.)
        )
        self.assertIs(vp, self.vp)

    def test_wheel_while_dragging(self):
        """ Wheel is independent from the drag state """
        state, vp = self.apply(
            fvg.IDLE,
            Gesture_event.press((100., 100.)),
            Gesture_event.wheel(Screen_point(100., 100.), -1.)
        )
        self.assertIs(state.mode, Gesture_mode.dragging)
        self.assertAlmostEqual(vp.radius, 0.95 * self.vp.radius)

    def test_pinch_direction(self):
        """ Converging fingers shrink the radius, spreading ones grow it """
        start = Gesture_event.press((300., 300.), (500., 300.))
        closer = Gesture_event.move((320., 300.), (480., 300.))
        farther = Gesture_event.move((280., 300.), (520., 300.))
        state, vp = self.apply(fvg.IDLE, start, closer)
        self.assertIs(state.mode, Gesture_mode.pinching)
        self.assertLess(vp.radius, self.vp.radius)
        self.assertAlmostEqual(state.last_pinch_distance, 160.)
        state, vp = self.apply(fvg.IDLE, start, farther)
        self.assertGreater(vp.radius, self.vp.radius)

    def test_pinch_anchor(self):
        """ Pinch zoom is anchored at the touch centroid """
        state, vp = self.apply(
            fvg.IDLE,
            Gesture_event.press((100., 200.), (300., 400.)),
            Gesture_event.move((110., 210.), (290., 390.)),
        )
        centroid = Screen_point(200., 300.)
        before = fvv.screen_to_complex(centroid, self.vp, self.canvas)
        after = fvv.screen_to_complex(centroid, vp, self.canvas)
        np.testing.assert_allclose(
            (after.x, after.y), (before.x, before.y), atol=1e-12
        )

    def test_pinch_scale(self):
        """ With the default settings the radius follows the ratio """
        self.assertAlmostEqual(fvg.pinch_scale(0.8), 0.8)
        self.assertAlmostEqual(fvg.pinch_scale(1.25), 1.25)
        for amplification in (4., 7.):
            self.assertLess(fvg.pinch_scale(0.9, amplification), 1.)
            self.assertGreater(fvg.pinch_scale(1.1, amplification), 1.)
        with self.assertRaises(ValueError):
            fvg.pinch_scale(0.9, 2.)

    def test_pinch_cancels_drag(self):
        state, _ = self.apply(
            fvg.IDLE,
            Gesture_event.press((100., 100.)),
            Gesture_event.press((100., 100.), (200., 100.)),
        )
        self.assertIs(state.mode, Gesture_mode.pinching)
        self.assertFalse(state.is_dragging)
        self.assertIsNone(state.last_pointer)

    def test_pinch_handoff(self):
        """ Lifting one finger while pinching drags with the other one """
        state, vp = self.apply(
            fvg.IDLE,
            Gesture_event.press((100., 100.), (200., 100.)),
            Gesture_event.release((200., 100.)),
        )
        self.assertIs(state.mode, Gesture_mode.dragging)
        self.assertEqual(state.last_pointer, Screen_point(200., 100.))
        state, vp2 = self.apply(
            state, Gesture_event.move((210., 100.)), viewport=vp
        )
        expected = fvv.pan(vp, 10., 0., self.canvas)
        self.assertAlmostEqual(vp2.x, expected.x)

        state, _ = self.apply(state, Gesture_event.release())
        self.assertEqual(state, fvg.IDLE)

    def test_malformed_pinch(self):
        """ 2-point move without pinch start, or with a zero baseline:
        re-baseline, no zoom, no exception """
        state, vp = self.apply(
            fvg.IDLE, Gesture_event.move((100., 100.), (200., 100.))
        )
        self.assertIs(vp, self.vp)
        self.assertEqual(state.last_pinch_distance, 100.)

        state, vp = self.apply(
            fvg.IDLE,
            Gesture_event.press((100., 100.), (100., 100.)),
            Gesture_event.move((100., 100.), (150., 100.)),
        )
        self.assertIs(vp, self.vp)
        self.assertEqual(state.last_pinch_distance, 50.)

    def test_invalid_canvas(self):
        """ Zero-sized canvas: events are no-op on the viewport """
        canvas = Canvas_size(0., 0.)
        state = fvg.IDLE
        vp = self.vp
        for event in (
            Gesture_event.press((1., 1.)),
            Gesture_event.move((5., 5.)),
            Gesture_event.wheel(Screen_point(1., 1.), 1.),
        ):
            state, vp = fvg.transition(state, vp, canvas, event)
            self.assertIs(vp, self.vp)

    def test_state_exclusive(self):
        self.assertIs(fvg.dragging(Screen_point(0., 0.)).mode,
                      Gesture_mode.dragging)
        self.assertIs(fvg.pinching(3.).mode, Gesture_mode.pinching)
        self.assertIs(Gesture_state().mode, Gesture_mode.idle)


class Test_controller(unittest.TestCase):

    def setUp(self):
        self.received = []
        self.canvas = Canvas_size(800., 600.)
        self.controller = Gesture_controller(
            self.received.append, self.canvas
        )
        self.vp = Viewport(0., 0., 1.)

    def test_sink_only_on_change(self):
        ctrl = self.controller
        vp = ctrl.handle(Gesture_event.press((10., 10.)), self.vp)
        self.assertIs(vp, self.vp)
        self.assertEqual(self.received, [])
        vp = ctrl.handle(Gesture_event.move((20., 10.)), vp)
        self.assertEqual(self.received, [vp])
        vp = ctrl.handle(Gesture_event.move((20., 10.)), vp)
        self.assertEqual(len(self.received), 1)
        vp = ctrl.handle(Gesture_event.wheel(Screen_point(1., 1.), 0.), vp)
        self.assertEqual(len(self.received), 1)
        ctrl.handle(Gesture_event.release(), vp)
        self.assertIs(ctrl.mode, Gesture_mode.idle)

    def test_resize(self):
        ctrl = self.controller
        ctrl.resize(Canvas_size(0., 600.))
        ctrl.handle(Gesture_event.press((10., 10.)), self.vp)
        ctrl.handle(Gesture_event.move((20., 10.)), self.vp)
        self.assertEqual(self.received, [])
        ctrl.resize(self.canvas)
        ctrl.handle(Gesture_event.move((30., 10.)), self.vp)
        self.assertEqual(len(self.received), 1)

    def test_reset(self):
        ctrl = self.controller
        ctrl.handle(Gesture_event.press((10., 10.)), self.vp)
        ctrl.reset()
        self.assertIs(ctrl.mode, Gesture_mode.idle)

    def test_bad_amplification(self):
        with test_config.override_settings(pinch_amplification=20.):
            with self.assertRaises(ValueError):
                Gesture_controller(self.received.append, self.canvas)


if __name__ == "__main__":
    full_test = True
    runner = unittest.TextTestRunner(verbosity=2)
    if full_test:
        runner.run(test_config.suite([Test_transition, Test_controller]))
    else:
        suite = unittest.TestSuite()
        suite.addTest(Test_transition("test_pinch_handoff"))
        runner.run(suite)
