#!/usr/bin/env python
"""
Run the sacio test suite
"""

import logging
import sys
import unittest
from io import StringIO

import sacio


if __name__ == '__main__':
    # keep warnings logged by the tests off the console
    sacio.logger.removeHandler(sacio.ch)
    sacio.logger.addHandler(logging.StreamHandler(StringIO()))

    suite = unittest.defaultTestLoader.discover('sacio', top_level_dir='.')
    result = unittest.TextTestRunner(verbosity=2).run(suite)
    sys.exit(0 if result.wasSuccessful() else 1)
