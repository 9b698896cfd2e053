# npbezier/maths/constants.py
# MIT License
# Created on 2025-10-02
# Last update: 2025-10-19

"""
Module Name: constants

Numeric constants and defaults shared by the curve maths.

  - bfloat : float type of all the vectors
  - ZERO_LENGTH : norm below which a vector is considered as null
  - DEFAULT_SAMPLING : default curve sampling resolution
  - DEFAULT_LUT_STEPS : default number of samples in a lookup table
  - DEFAULT_UP : default up vector (z-up world)
"""

__all__ = [
    'bfloat',
    'ZERO_LENGTH',
    'DEFAULT_SAMPLING', 'DEFAULT_LUT_STEPS', 'DEFAULT_UP',
    ]

import numpy as np

bfloat = np.float64

ZERO_LENGTH = 1e-8

DEFAULT_SAMPLING  = 25
DEFAULT_LUT_STEPS = 100
DEFAULT_UP        = (0., 0., 1.)
