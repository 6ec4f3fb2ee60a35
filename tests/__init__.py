# -*- coding: utf-8 -*-
""" Test package: the modules import their shared helpers as a top-level
``test_config``, whichever runner collects them. """
import os
import sys

test_dir = os.path.dirname(os.path.abspath(__file__))
if test_dir not in sys.path:
    sys.path.insert(0, test_dir)
