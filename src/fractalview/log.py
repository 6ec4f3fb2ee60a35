# -*- coding: utf-8 -*-
"""
Handlers for the ``fractalview`` logger tree.

Each module logs through ``logging.getLogger(__name__)``; this module only
decides where the records go. A verbosity level is either its index in
`VERBOSITY_LEVELS` or its name:

========================  ==========  =================  ==========
name                      index       console            log file
========================  ==========  =================  ==========
"warn @ console"          0           WARNING, stderr    none
"info @ console"          1           INFO, stdout       none
"debug @ console + log"   2           INFO, stdout       DEBUG
"all @ console + log"     3           INFO, stdout       every level
========================  ==========  =================  ==========
"""
import os
import datetime
import logging
import sys
import typing

import fractalview as fv

logger = logging.getLogger(__name__)

# Below DEBUG: lets through the records logged with an explicit low level
ALL_LEVELS = 1


class Verbosity(typing.NamedTuple):
    name: str
    console_level: int
    file_level: typing.Optional[int]

    @property
    def logger_level(self):
        if self.file_level is None:
            return self.console_level
        return min(self.console_level, self.file_level)


VERBOSITY_LEVELS = (
    Verbosity("warn @ console", logging.WARNING, None),
    Verbosity("info @ console", logging.INFO, None),
    Verbosity("debug @ console + log", logging.INFO, logging.DEBUG),
    Verbosity("all @ console + log", logging.INFO, ALL_LEVELS),
)

CONSOLE_FORMAT = "%(asctime)s - %(levelname)s\n  %(message)s"
FILE_FORMAT = (
    "%(asctime)s - %(levelname)s - %(name)s.%(funcName)s\n  %(message)s"
)


def get_verbosity(verbosity):
    """ Returns the `Verbosity` entry for a name or an index.

    Raises KeyError for an unknown name, ValueError for anything else
    out of the table.
    """
    if isinstance(verbosity, str):
        for level in VERBOSITY_LEVELS:
            if level.name == verbosity:
                return level
        raise KeyError(verbosity)
    if isinstance(verbosity, int) and not isinstance(verbosity, bool):
        if 0 <= verbosity < len(VERBOSITY_LEVELS):
            return VERBOSITY_LEVELS[verbosity]
    raise ValueError(f"Unexpected verbosity: {verbosity!r}")


def log_file_path(directory, now=None):
    """ Session log file, time-stamped to the second """
    now = datetime.datetime.now() if now is None else now
    return os.path.join(
        directory, now.strftime("%Y-%m-%d_%Hh%M_%S") + "_fractalview.log"
    )


def set_log_handlers(verbosity):
    """
    Replaces the handlers of the ``fractalview`` logger.

    Parameters
    ----------
    verbosity: str | int
        A name or an index from `VERBOSITY_LEVELS`.

    Notes
    -----
    The two "+ log" levels open a new file in
    `fractalview.settings.log_directory`. When that directory is not
    set, only the console handler is installed and a warning is logged.
    """
    level = get_verbosity(verbosity)
    root = logging.getLogger("fractalview")

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level.logger_level)

    quiet = level.console_level >= logging.WARNING
    console = logging.StreamHandler(sys.stderr if quiet else sys.stdout)
    console.setLevel(level.console_level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root.addHandler(console)

    log_path = None
    log_dir = fv.settings.log_directory
    if level.file_level is not None and log_dir is not None:
        fv.utils.mkdir_p(log_dir)
        log_path = log_file_path(log_dir)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level.file_level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        root.addHandler(file_handler)

    logger.info(f"fractalview {fv.__version__}, verbosity {level.name!r}")
    if log_path is not None:
        logger.info(f"Log file: {log_path}")
    elif level.file_level is not None:
        logger.warning(
            "No log file written: settings.log_directory is not set"
        )
