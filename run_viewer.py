# -*- coding: utf-8 -*-
"""
Launches the interactive viewer.

    python run_viewer.py --fractal julia --julia-re -0.4 --julia-im 0.6
"""
import argparse

import fractalview as fv
import fractalview.presets
import fractalview.settings


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Interactive Mandelbrot / Julia set viewer"
    )
    parser.add_argument(
        "--fractal", default=None,
        help="Initial fractal family (default: first preset family)"
    )
    parser.add_argument(
        "--max-iterations", type=int, default=None,
        help="Iteration cap (default: settings.max_iterations)"
    )
    parser.add_argument("--julia-re", type=float, default=None)
    parser.add_argument("--julia-im", type=float, default=None)
    parser.add_argument(
        "--presets", default=None,
        help="JSON file of preset positions and shader variants"
    )
    parser.add_argument(
        "--verbosity", type=int, default=fractalview.settings.verbosity,
        choices=range(4),
        help="0: warn, 1: info, 2: debug, 3: all levels (log file)"
    )
    parser.add_argument(
        "--log-directory", default=None,
        help="Directory for the log file (verbosity >= 2)"
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    if args.log_directory is not None:
        fractalview.settings.log_directory = args.log_directory
    fv.set_log_handlers(verbosity=args.verbosity)

    if args.presets is None:
        config = fractalview.presets.default_config()
    else:
        config = fractalview.presets.Preset_config.from_json(args.presets)
    cursor = fractalview.presets.Preset_cursor(config, args.fractal)

    julia_constant = None
    if args.julia_re is not None or args.julia_im is not None:
        default_k = fractalview.settings.julia_constant
        julia_constant = (
            default_k[0] if args.julia_re is None else args.julia_re,
            default_k[1] if args.julia_im is None else args.julia_im,
        )

    # Deferred import: Qt is only needed for the interactive session
    import fractalview.gui
    return fractalview.gui.show(cursor, args.max_iterations, julia_constant)


if __name__ == "__main__":
    raise SystemExit(main())
