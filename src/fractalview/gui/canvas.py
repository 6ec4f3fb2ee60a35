# -*- coding: utf-8 -*-
"""
OpenGL rendering surface.

`GL_pipeline` compiles the fragment program of `fractalview.render` and
draws a single full-screen triangle per frame. `Fractal_canvas` hosts it in
a `QOpenGLWidget`, owns the current viewport, and translates the Qt mouse,
touch and wheel events into `fractalview.gesture.Gesture_event`.

Gestures and the path overlay work in logical (device independent) pixels ;
the GL frame is drawn in physical pixels.
"""
import logging

from PyQt6 import QtCore, QtGui
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtOpenGLWidgets import QOpenGLWidget

from OpenGL.GL import (
    GL_ARRAY_BUFFER,
    GL_COLOR_BUFFER_BIT,
    GL_FALSE,
    GL_FLOAT,
    GL_FRAGMENT_SHADER,
    GL_STATIC_DRAW,
    GL_TRIANGLES,
    GL_VERTEX_SHADER,
    glBindBuffer,
    glBindVertexArray,
    glBufferData,
    glClear,
    glClearColor,
    glDeleteBuffers,
    glDeleteProgram,
    glDeleteVertexArrays,
    glDrawArrays,
    glEnableVertexAttribArray,
    glGenBuffers,
    glGenVertexArrays,
    glGetAttribLocation,
    glGetUniformLocation,
    glUniform1f,
    glUniform1i,
    glUniform2f,
    glUseProgram,
    glVertexAttribPointer,
    glViewport,
)
from OpenGL.GL.shaders import compileProgram, compileShader

import fractalview.render as fvrender
from fractalview.gesture import Gesture_controller, Gesture_event
from fractalview.overlay import Path_overlay
from fractalview.viewport import Canvas_size, Screen_point


logger = logging.getLogger(__name__)


class GL_pipeline(fvrender.Render_pipeline):
    """
    GPU renderer. Needs a current OpenGL 3.3 core context for `build`,
    `draw` and `release`.

    The program is rebuilt lazily at the next `draw` after a color policy
    change.
    """
    def __init__(self, fractal, policy):
        super().__init__(fractal, policy)
        self.program = None
        self.vao = None
        self.vbo = None
        self._locations = {}
        self._stale = True

    def set_policy(self, policy):
        # GL objects are only touched with a current context, in `draw`
        if policy != self.policy:
            self._stale = True
        super().set_policy(policy)

    def build(self):
        """
        Compiles and links the shader program, and uploads the vertex data
        on first call.

        Raises RuntimeError if the program cannot be built.
        """
        try:
            program = compileProgram(
                compileShader(fvrender.VERTEX_SOURCE, GL_VERTEX_SHADER),
                compileShader(
                    fvrender.fragment_source(self.policy), GL_FRAGMENT_SHADER
                ),
            )
        except RuntimeError as exc:
            logger.error(f"Shader build failed for {self.policy}:\n{exc}")
            raise RuntimeError(
                f"Unable to build the shader program for {self.policy}"
            ) from exc
        self._delete_program()
        self.program = program
        self._stale = False
        self._locations = {
            name: glGetUniformLocation(program, name)
            for name in (
                fvrender.Frame_uniforms._fields
                + tuple(self.policy.uniforms().keys())
            )
        }

        if self.vao is None:
            self.vao = glGenVertexArrays(1)
            self.vbo = glGenBuffers(1)
            glBindVertexArray(self.vao)
            glBindBuffer(GL_ARRAY_BUFFER, self.vbo)
            vertices = fvrender.FULLSCREEN_TRIANGLE
            glBufferData(
                GL_ARRAY_BUFFER, vertices.nbytes, vertices, GL_STATIC_DRAW
            )
        else:
            glBindVertexArray(self.vao)
            glBindBuffer(GL_ARRAY_BUFFER, self.vbo)
        position = glGetAttribLocation(program, "a_position")
        glEnableVertexAttribArray(position)
        glVertexAttribPointer(position, 2, GL_FLOAT, GL_FALSE, 0, None)
        glBindVertexArray(0)
        logger.debug(f"Shader program built for {self.policy}")

    def draw(self, viewport, canvas):
        """
        Draws a frame. ``canvas`` is the framebuffer size in physical
        pixels ; nothing is drawn if it is zero-sized.
        """
        uniforms = fvrender.frame_uniforms(viewport, canvas, self.fractal)
        if uniforms is None:
            return
        if self._stale:
            self.build()

        glViewport(0, 0, int(canvas.width), int(canvas.height))
        glClearColor(0., 0., 0., 1.)
        glClear(GL_COLOR_BUFFER_BIT)
        glUseProgram(self.program)
        loc = self._locations
        glUniform2f(loc["u_min"], *uniforms.u_min)
        glUniform2f(loc["u_scale"], *uniforms.u_scale)
        glUniform2f(loc["u_julia"], *uniforms.u_julia)
        glUniform1i(loc["u_julia_mode"], uniforms.u_julia_mode)
        glUniform1i(loc["u_max_iter"], uniforms.u_max_iter)
        for name, val in self.policy.uniforms().items():
            glUniform1f(loc[name], val)

        glBindVertexArray(self.vao)
        glDrawArrays(GL_TRIANGLES, 0, 3)
        glBindVertexArray(0)
        glUseProgram(0)

    def release(self):
        """ Frees the GL objects """
        self._delete_program()
        if self.vao is not None:
            glDeleteBuffers(1, [self.vbo])
            glDeleteVertexArrays(1, [self.vao])
            self.vao = None
            self.vbo = None

    def _delete_program(self):
        if self.program is not None:
            glDeleteProgram(self.program)
            self.program = None
            self._locations = {}
        self._stale = True


_OVERLAY_PATH_COLOR = QtGui.QColor(255, 255, 255, 220)
_OVERLAY_ESCAPED_COLOR = QtGui.QColor(255, 200, 0, 220)
_OVERLAY_ORIGIN_COLOR = QtGui.QColor("red")


class Fractal_canvas(QOpenGLWidget):
    """
    The interactive fractal view.

    Signals
    -------
    viewport_changed(`fractalview.viewport.Viewport`)
        Emitted each time the viewport is modified, by a gesture or
        programmatically
    """
    viewport_changed = pyqtSignal(object)

    def __init__(self, fractal, policy, viewport, parent=None):
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_AcceptTouchEvents, True)
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setMinimumSize(200, 200)

        self._viewport = viewport
        self._touch_count = 0
        self.pipeline = GL_pipeline(fractal, policy)
        self.controller = Gesture_controller(
            self._on_gesture_viewport, self.logical_canvas()
        )
        self.overlay = Path_overlay(fractal)

    @property
    def viewport(self):
        return self._viewport

    @property
    def fractal(self):
        return self.pipeline.fractal

    @property
    def policy(self):
        return self.pipeline.policy

    def logical_canvas(self):
        return Canvas_size(float(self.width()), float(self.height()))

    def physical_canvas(self):
        dpr = self.devicePixelRatio()
        return Canvas_size(
            float(round(self.width() * dpr)),
            float(round(self.height() * dpr))
        )

    # Programmatic updates
    def set_viewport(self, viewport):
        self.controller.reset()
        self._set_viewport(viewport)

    def set_fractal(self, fractal):
        self.pipeline.set_fractal(fractal)
        self.overlay.set_fractal(fractal)
        self.overlay.refresh()
        self.update()

    def set_policy(self, policy):
        self.pipeline.set_policy(policy)
        self.update()

    def set_julia_constant(self, julia_constant):
        """ Only meaningful for the Julia family """
        fractal = self.pipeline.fractal
        if not fractal.julia_mode:
            logger.warning(
                f"Julia constant ignored for {fractal.family} family"
            )
            return
        fractal.julia_constant = julia_constant
        logger.info(f"Julia constant set to {fractal.julia_constant}")
        self.update()

    def _set_viewport(self, viewport):
        self._viewport = viewport
        self.overlay.on_viewport(viewport, self.logical_canvas())
        self.viewport_changed.emit(viewport)
        self.update()

    def _on_gesture_viewport(self, viewport):
        self._set_viewport(viewport)

    def dispatch(self, event):
        """ Feeds a `Gesture_event` to the gesture controller """
        self.controller.handle(event, self._viewport)

    # OpenGL
    def initializeGL(self):
        self.pipeline.build()
        self.context().aboutToBeDestroyed.connect(self._release_gl)

    def _release_gl(self):
        self.makeCurrent()
        self.pipeline.release()
        self.doneCurrent()

    def resizeGL(self, w, h):
        canvas = self.logical_canvas()
        self.controller.resize(canvas)
        self.overlay.on_viewport(self._viewport, canvas)

    def paintGL(self):
        self.pipeline.draw(self._viewport, self.physical_canvas())
        self.paint_overlay()

    def paint_overlay(self):
        geometry = self.overlay.geometry(
            self._viewport, self.logical_canvas()
        )
        if geometry is None:
            return
        painter = QtGui.QPainter(self)
        try:
            painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing)
            color = (
                _OVERLAY_ESCAPED_COLOR if geometry.escaped
                else _OVERLAY_PATH_COLOR
            )
            points = [
                QtCore.QPointF(float(x), float(y)) for x, y in geometry.points
            ]
            painter.setPen(QtGui.QPen(color, 1.))
            painter.drawPolyline(QtGui.QPolygonF(points))

            painter.setBrush(QtGui.QBrush(color))
            for i, pt in enumerate(points):
                painter.drawEllipse(pt, 2.5, 2.5)
                if i < geometry.labelled:
                    painter.drawText(pt + QtCore.QPointF(5., -5.), str(i))

            origin = QtCore.QPointF(geometry.origin.x, geometry.origin.y)
            painter.setPen(QtGui.QPen(_OVERLAY_ORIGIN_COLOR, 2.))
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.drawEllipse(origin, 5., 5.)
            label = geometry.label
            if self.overlay.frozen:
                label += " (frozen)"
            painter.drawText(origin + QtCore.QPointF(8., 16.), label)
        finally:
            painter.end()

    # Mouse
    @staticmethod
    def _screen_point(pos):
        return Screen_point(pos.x(), pos.y())

    def mousePressEvent(self, event):
        if event.button() != Qt.MouseButton.LeftButton:
            return super().mousePressEvent(event)
        point = self._screen_point(event.position())
        self.overlay.on_pointer_down(point)
        self.dispatch(Gesture_event.press(point))

    def mouseMoveEvent(self, event):
        point = self._screen_point(event.position())
        self.overlay.on_pointer_move(point)
        self.dispatch(Gesture_event.move(point))
        if self.overlay.enabled:
            self.update()

    def mouseReleaseEvent(self, event):
        if event.button() != Qt.MouseButton.LeftButton:
            return super().mouseReleaseEvent(event)
        point = self._screen_point(event.position())
        if self.overlay.on_pointer_up(point):
            self.update()
        self.dispatch(Gesture_event.release())

    def leaveEvent(self, event):
        self.dispatch(Gesture_event.leave())
        super().leaveEvent(event)

    def wheelEvent(self, event):
        point = self._screen_point(event.position())
        # Qt reports a positive angle when scrolling up (away from the user)
        delta_y = -event.angleDelta().y()
        self.dispatch(Gesture_event.wheel(point, delta_y))
        event.accept()

    # Touch
    def event(self, event):
        etype = event.type()
        if etype in (
            QtCore.QEvent.Type.TouchBegin,
            QtCore.QEvent.Type.TouchUpdate,
            QtCore.QEvent.Type.TouchEnd,
        ):
            self.touch_event(event)
            return True
        if etype == QtCore.QEvent.Type.TouchCancel:
            self._touch_count = 0
            self.dispatch(Gesture_event.leave())
            return True
        return super().event(event)

    def touch_event(self, event):
        """
        Maps the touch points to press / move / release gesture events.

        A change in the number of active points is a press (more points)
        or a release (fewer points, the remaining ones are the contact) ;
        otherwise the event is a move.
        """
        active = [
            self._screen_point(p.position()) for p in event.points()
            if p.state() != QtGui.QEventPoint.State.Released
        ]
        if event.type() == QtCore.QEvent.Type.TouchEnd:
            active = []
        count = len(active)
        prev_count = self._touch_count
        self._touch_count = count

        if count > prev_count:
            if count == 1:
                self.overlay.on_pointer_down(active[0])
            self.dispatch(Gesture_event.press(*active))
        elif count < prev_count:
            if count == 0 and prev_count == 1:
                last = event.points()[0].position()
                if self.overlay.on_pointer_up(self._screen_point(last)):
                    self.update()
            self.dispatch(Gesture_event.release(*active))
        elif count > 0:
            if count == 1:
                self.overlay.on_pointer_move(active[0])
            self.dispatch(Gesture_event.move(*active))
        event.accept()

