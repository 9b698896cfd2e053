# npbezier/maths/arclength.py
# MIT License
# Created on 2025-10-02
# Last update: 2025-10-19

"""
Approximate arc length of cubic Bezier segments.

The length is the length of the polyline joining `sampling + 1` positions evenly
spaced in local time, from t=0 to t=1. It converges from below toward the exact
arc length as the sampling increases.
"""

__all__ = ['segment_sampling', 'segment_length', 'segment_lengths', 'curve_length']

import numbers

import numpy as np

from .cubic import position
from ..errors import InvalidArgumentError


def is_count(value):
    """True if value is an integer (bool excluded) greater or equal to 1."""
    return isinstance(value, numbers.Integral) and not isinstance(value, bool) and value >= 1

def _check_sampling(sampling):
    if not is_count(sampling):
        raise InvalidArgumentError(f"Sampling must be a positive integer, not {sampling}")
    return int(sampling)

# ----------------------------------------------------------------------------------------------------
# Sampling per segment
# ----------------------------------------------------------------------------------------------------

def segment_sampling(sampling, segments_count):
    """
    Sampling used for each segment of a curve.

    The curve sampling is shared between the segments: `sampling // segments_count + 1`.
    """
    sampling = _check_sampling(sampling)
    if segments_count < 1:
        raise InvalidArgumentError("A curve needs at least 2 control points to have a length")
    return sampling // segments_count + 1

# ----------------------------------------------------------------------------------------------------
# Length of a single segment
# ----------------------------------------------------------------------------------------------------

def segment_length(start, start_handle, end_handle, end, sampling):
    """
    Approximate length of a cubic segment.

    Parameters
    ----------
    start, start_handle, end_handle, end : array_like (3,)
        Control polygon of the segment.
    sampling : int
        Number of chords used to approximate the segment, at least 1.

    Returns
    -------
    float
    """
    sampling = _check_sampling(sampling)

    t = np.arange(sampling + 1) / sampling
    pts = position(t, start, start_handle, end_handle, end)      # (sampling+1, 3)

    return float(np.sum(np.linalg.norm(pts[1:] - pts[:-1], axis=-1)))

# ----------------------------------------------------------------------------------------------------
# Curve
# ----------------------------------------------------------------------------------------------------

def segment_lengths(segments, sampling):
    """
    Lengths of the segments of a curve.

    Parameters
    ----------
    segments : sequence of (start, start_handle, end_handle, end)
        Control polygons of the consecutive segments.
    sampling : int
        Curve sampling, shared between the segments (see `segment_sampling`).

    Returns
    -------
    np.ndarray of shape (S,)
    """
    segments = list(segments)
    seg_sampling = segment_sampling(sampling, len(segments))
    return np.array([segment_length(*seg, seg_sampling) for seg in segments], dtype=float)

def curve_length(segments, sampling):
    """Approximate length of a curve made of consecutive segments."""
    return float(np.sum(segment_lengths(segments, sampling)))
