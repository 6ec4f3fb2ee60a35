# -*- coding: utf-8 -*-
"""
Qt host: OpenGL canvas and main window.

Requires PyQt6 and PyOpenGL ; import this subpackage only where a display is
available.
"""
from .canvas import GL_pipeline, Fractal_canvas
from .viewer import Fractal_MainWindow, show
