# npbezier/__init__.py
# MIT License
# Created on 2025-10-02
# Last update: 2025-10-19

"""
npbezier
========

Piecewise cubic Bezier curves with arc length aware parameterization,
cached lookup tables and point projection, based on numpy.
"""

__version__ = "0.1.0"

from .maths import *

from .errors import InvalidArgumentError, DegenerateGeometryError
from .points import ControlPoint, PointStore, ListPointStore
from .lut import LUTPoint, LUT, closest_sample
from .curve import BezierCurve
