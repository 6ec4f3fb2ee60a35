# -*- coding: utf-8 -*-
__author__ = "G. Billotey"
__license__ = "MIT"
__version__ = "0.1.0"

import fractalview.settings
import fractalview.utils

from .viewport import (
    Viewport, Screen_point, Complex_point, Canvas_size,
    screen_to_complex, complex_to_screen
)
from .gesture import Gesture_controller, Gesture_event
from .core import Escape_time_fractal
from .overlay import Path_overlay
from .log import set_log_handlers

import fractalview.models
import fractalview.colors
import fractalview.presets
import fractalview.render
