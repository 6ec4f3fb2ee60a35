# -*- coding: utf-8 -*-
"""
General settings at application-level
"""

max_iterations: int = 1000
"""Default iteration cap for the escape-time loop, on the CPU and on the
GPU"""

zoom_factor: float = 0.1
"""Base zoom step. A wheel tick scales the radius by
``1 +/- wheel_step * zoom_factor``"""

wheel_step: float = 0.5
"""Multiplier applied to the sign of the wheel delta. The magnitude of the
delta is ignored, each tick zooms by the same amount whatever the device"""

pinch_amplification: float = 10.
"""Amplification of the pinch distance ratio, expected in [4, 10].
With the default value and ``zoom_factor = 0.1`` the radius is scaled by the
distance ratio itself"""

radius_min: float = 1.e-12
"""Smallest allowed viewport radius. Below this, float64 pixel coordinates
collapse into rounding noise"""

radius_max: float = 1.e3
"""Largest allowed viewport radius"""

click_max_duration: float = 0.2
"""Maximal press-to-release duration (seconds) for a short click"""

click_max_distance: float = 5.
"""Maximal pointer displacement (pixels) for a short click"""

julia_constant: tuple = (-0.8, 0.156)
"""Default Julia constant k, as (real, imag)"""

overlay_labelled_points: int = 10
"""Number of leading iteration points numbered by the path overlay"""

verbosity: int = 1
"""
Controls the verbosity for the log messages:

    - 0: WARNING & higher severity, output to stderr
    - 1 (default): INFO & higher severity, output to stdout
    - 2:

        - INFO & higher severity, output to stdout
        - DEBUG & higher severity, output to a log file

    - 3 (highest verbosity):

        - INFO & higher severity, output to stdout
        - every level, including those below DEBUG, output to a log file
"""

log_directory: str = None
""" The logging directory for this session - as str"""
