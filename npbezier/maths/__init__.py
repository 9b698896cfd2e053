__all__ = [
    'bfloat', 'ZERO_LENGTH', 'DEFAULT_SAMPLING', 'DEFAULT_LUT_STEPS', 'DEFAULT_UP',
    'Rotation', 'cubic',
    'segment_sampling', 'segment_length', 'segment_lengths', 'curve_length',
    ]

# Constants

from .constants import *

# Main imports for global module
from .rotation import Rotation
from . import cubic
from .arclength import segment_sampling, segment_length, segment_lengths, curve_length
