import os.path
import unittest


def suite() -> unittest.TestSuite:
    start = os.path.dirname(__file__)
    top = os.path.dirname(os.path.dirname(start))
    return unittest.defaultTestLoader.discover(start, top_level_dir=top)
