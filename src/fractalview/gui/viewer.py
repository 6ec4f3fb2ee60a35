# -*- coding: utf-8 -*-
import os
import sys
import logging
import traceback

from PyQt6 import QtCore, QtGui
from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import (
    QApplication,
    QMainWindow,
    QMessageBox,
    QFileDialog,
    QInputDialog,
    QLabel,
)

import fractalview as fv
import fractalview.colors
import fractalview.models
import fractalview.presets
import fractalview.render
from fractalview.gui.canvas import Fractal_canvas


logger = logging.getLogger(__name__)


def getapp():
    app = QtCore.QCoreApplication.instance()
    if app is None:
        # The fragment program targets GLSL 330 core
        fmt = QtGui.QSurfaceFormat()
        fmt.setVersion(3, 3)
        fmt.setProfile(QtGui.QSurfaceFormat.OpenGLContextProfile.CoreProfile)
        QtGui.QSurfaceFormat.setDefaultFormat(fmt)
        app = QApplication([])
    return app


def excepthook(exc_type, exc_value, exc_traceback):
    """ Handling GUI Exceptions"""
    exc_str = "".join(
        traceback.format_exception(exc_type, exc_value, exc_traceback)
    )
    logger.error(exc_str)
    QMessageBox.critical(None, "GUI Error", exc_str)


class Fractal_MainWindow(QMainWindow):

    def __init__(self, cursor, max_iterations=None, julia_constant=None):
        """
        Main window: a `Fractal_canvas` driven by a preset cursor.

        Parameters
        ----------
        cursor: `fractalview.presets.Preset_cursor`
            Initial selection of fractal family, position and shader
        max_iterations: int | None
            Iteration cap, defaults to `fractalview.settings.max_iterations`
        julia_constant: (float, float) | None
            Julia constant, defaults to `fractalview.settings.julia_constant`
        """
        super().__init__(parent=None)
        self.cursor = cursor
        self.max_iterations = max_iterations
        self.julia_constant = julia_constant

        self.canvas = Fractal_canvas(
            self.make_fractal(cursor.fractal),
            fractalview.colors.policy_from_id(cursor.shader_variant),
            cursor.viewport,
            parent=self
        )
        self.setCentralWidget(self.canvas)
        self.set_menubar()
        self.set_statusbar()
        self.canvas.viewport_changed.connect(self.viewport_changed_slot)
        self.setWindowTitle(f"Fractalview {fv.__version__}")
        self.resize(900, 700)
        self.update_status()

    def make_fractal(self, family):
        kwargs = {"max_iterations": self.max_iterations}
        if family == fractalview.models.Julia.family:
            kwargs["julia_constant"] = self.julia_constant
        return fractalview.models.fractal_from_family(family, **kwargs)

    def set_menubar(self):
        bar = self.menuBar()

        fractal_menu = bar.addMenu("Fractal")
        group = QtGui.QActionGroup(fractal_menu)
        for family in self.cursor.fractals:
            action = QAction(family, fractal_menu)
            action.setCheckable(True)
            action.setChecked(family == self.cursor.fractal)
            action.setData(family)
            group.addAction(action)
            fractal_menu.addAction(action)
        fractal_menu.addSeparator()
        julia = QAction("Julia constant", fractal_menu)
        fractal_menu.addAction(julia)
        fractal_menu.triggered[QAction].connect(self.actiontrig)

        view = bar.addMenu("View")
        next_position = QAction("Next position", view)
        next_position.setShortcut(QtGui.QKeySequence("N"))
        next_shader = QAction("Next shader", view)
        next_shader.setShortcut(QtGui.QKeySequence("S"))
        iteration_path = QAction("Iteration path", view)
        iteration_path.setCheckable(True)
        iteration_path.setShortcut(QtGui.QKeySequence("P"))
        view.addActions((next_position, next_shader, iteration_path))
        view.triggered[QAction].connect(self.actiontrig)

        tools = bar.addMenu("Tools")
        save_png = QAction("Save png", tools)
        save_png.setShortcut(QtGui.QKeySequence.StandardKey.Save)
        tools.addAction(save_png)
        tools.triggered[QAction].connect(self.actiontrig)

    def actiontrig(self, action):
        """ Dispatch the action to the matching method """
        family = action.data()
        if family is not None:
            self.select_fractal(family)
            return
        txt = action.text()
        if txt == "Julia constant":
            self.edit_julia_constant()
        elif txt == "Next position":
            self.next_position()
        elif txt == "Next shader":
            self.next_shader()
        elif txt == "Iteration path":
            self.toggle_iteration_path()
        elif txt == "Save png":
            self.save_png()
        else:
            logger.warning(f"Unknown action: {txt}")

    def set_statusbar(self):
        self._status = QLabel(self)
        self.statusBar().addPermanentWidget(self._status)

    def update_status(self):
        vp = self.canvas.viewport
        self._status.setText(
            f"{self.cursor.fractal} | {self.canvas.policy.policy_id} | "
            f"x = {vp.x:.12g}  y = {vp.y:.12g}  radius = {vp.radius:.6g}"
        )

    def viewport_changed_slot(self, viewport):
        self.update_status()

    def select_fractal(self, family):
        self.cursor.select_fractal(family)
        logger.info(f"Fractal selected: {family}")
        self.canvas.set_fractal(self.make_fractal(family))
        self.canvas.set_policy(
            fractalview.colors.policy_from_id(self.cursor.shader_variant)
        )
        self.canvas.set_viewport(self.cursor.viewport)

    def next_position(self):
        viewport = self.cursor.next_position()
        logger.info(
            f"Preset position {self.cursor.position_index}: {viewport}"
        )
        self.canvas.set_viewport(viewport)

    def next_shader(self):
        variant = self.cursor.next_shader()
        logger.info(f"Shader variant: {variant}")
        self.canvas.set_policy(fractalview.colors.policy_from_id(variant))
        self.update_status()

    def toggle_iteration_path(self):
        enabled = self.canvas.overlay.toggle_enabled()
        self.statusBar().showMessage(
            "Iteration path " + ("on, click to freeze" if enabled else "off"),
            3000
        )
        self.canvas.update()

    def edit_julia_constant(self):
        fractal = self.canvas.fractal
        if not fractal.julia_mode:
            QMessageBox.information(
                self, "Julia constant",
                "The Julia constant only applies to the julia family"
            )
            return
        k = fractal.julia_constant
        txt, ok = QInputDialog.getText(
            self, "Julia constant", "k = (real, imag)",
            text=f"{k.x}, {k.y}"
        )
        if not ok:
            return
        try:
            kx, ky = (float(v) for v in txt.split(","))
        except ValueError:
            QMessageBox.warning(
                self, "Julia constant", f"Expected 2 numbers: {txt}"
            )
            return
        self.julia_constant = (kx, ky)
        self.canvas.set_julia_constant(self.julia_constant)

    def save_png(self):
        """ CPU render of the current view, at the canvas size """
        file_path, _ = QFileDialog.getSaveFileName(
            self,
            caption="Save File",
            directory=os.getcwd(),
            filter="Images (*.png)"
        )
        if file_path == "":
            return
        renderer = fractalview.render.Reference_renderer(
            self.canvas.fractal, self.canvas.policy
        )
        QApplication.setOverrideCursor(QtCore.Qt.CursorShape.WaitCursor)
        try:
            renderer.save_png(
                self.canvas.viewport, self.canvas.logical_canvas(), file_path
            )
        finally:
            QApplication.restoreOverrideCursor()
        self.statusBar().showMessage(f"Saved {file_path}", 3000)


def show(cursor=None, max_iterations=None, julia_constant=None):
    """
    Launches the GUI mainloop.

    Parameters
    ----------
    cursor: `fractalview.presets.Preset_cursor` | None
        Defaults to a cursor over the default presets
    """
    if cursor is None:
        cursor = fractalview.presets.Preset_cursor(
            fractalview.presets.default_config()
        )
    app = getapp()
    mainwin = Fractal_MainWindow(cursor, max_iterations, julia_constant)
    mainwin.show()
    sys.excepthook = excepthook
    try:
        return app.exec()
    finally:
        sys.excepthook = sys.__excepthook__
