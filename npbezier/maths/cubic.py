# npbezier/maths/cubic.py
# MIT License
# Created on 2025-10-02
# Last update: 2025-10-19

"""
Cubic Bezier segment
====================

Closed form evaluation of a single cubic Bezier segment defined by its control
polygon:

    start, start_handle, end_handle, end      (P0, R0, L1, P1)

where `start_handle` is the right (outgoing) handle of the start point and
`end_handle` the left (incoming) handle of the end point.

All the functions are vectorized:
- t : scalar or array of shape (T,)
- control vectors : shape (3,) or (T, 3) when each t has its own segment

The result has shape (3,) for a scalar t and (T, 3) otherwise.

t is not clipped: values outside [0, 1] extrapolate the polynomial.
"""

__all__ = ['position', 'derivative', 'tangent', 'binormal', 'normal', 'rotation']

import numpy as np

from .constants import bfloat, ZERO_LENGTH, DEFAULT_UP
from .rotation import Rotation
from ..errors import InvalidArgumentError, DegenerateGeometryError


def _prepare(t, *vectors):
    t = np.asarray(t, dtype=bfloat)
    vectors = [np.asarray(v, dtype=bfloat) for v in vectors]
    for v in vectors:
        if v.shape[-1:] != (3,):
            raise InvalidArgumentError(f"Control vectors must have shape (3,) or (T, 3), not {v.shape}")
    return t[..., None], vectors

def _normalized(v, what):
    norm = np.linalg.norm(v, axis=-1, keepdims=True)
    if np.any(norm < ZERO_LENGTH):
        raise DegenerateGeometryError(f"Unable to compute the {what}: null vector")
    return v / norm

# ----------------------------------------------------------------------------------------------------
# Position
# ----------------------------------------------------------------------------------------------------

def position(t, start, start_handle, end_handle, end):
    """
    Position on the segment at local time t.

        (1-t)³·P0 + 3(1-t)²t·R0 + 3(1-t)t²·L1 + t³·P1

    computed relative to P0 so that a collapsed segment returns P0 exactly:

        P0 + 3(1-t)²t·(R0-P0) + 3(1-t)t²·(L1-P0) + t³·(P1-P0)

    Returns
    -------
    np.ndarray (3,) or (T, 3)
    """
    u, (P0, R0, L1, P1) = _prepare(t, start, start_handle, end_handle, end)

    u2 = u * u
    u3 = u2 * u
    omu = 1 - u
    omu2 = omu * omu

    return P0 + 3*omu2*u*(R0 - P0) + 3*omu*u2*(L1 - P0) + u3*(P1 - P0)

# ----------------------------------------------------------------------------------------------------
# Derivative
# ----------------------------------------------------------------------------------------------------

def derivative(t, start, start_handle, end_handle, end):
    """
    Derivative of the position with respect to the local time (not normalized).
    """
    u, (P0, R0, L1, P1) = _prepare(t, start, start_handle, end_handle, end)

    omu = 1 - u

    return 3*omu*omu*(R0 - P0) + 6*omu*u*(L1 - R0) + 3*u*u*(P1 - L1)

# ----------------------------------------------------------------------------------------------------
# Tangent
# ----------------------------------------------------------------------------------------------------

def tangent(t, start, start_handle, end_handle, end):
    """
    Unit tangent at local time t.

    When the derivative is null (handles collapsed on the points), the
    returned tangent is the null vector.
    """
    dP = derivative(t, start, start_handle, end_handle, end)

    norm = np.linalg.norm(dP, axis=-1, keepdims=True)
    norm[norm < ZERO_LENGTH] = 1.0

    return dP / norm

# ----------------------------------------------------------------------------------------------------
# Frame vectors
# ----------------------------------------------------------------------------------------------------

def binormal(t, start, start_handle, end_handle, end, up=DEFAULT_UP):
    """
    Unit binormal: normalize(up × tangent).

    Raises
    ------
    DegenerateGeometryError
        If the tangent is null or parallel to `up`.
    """
    tg = tangent(t, start, start_handle, end_handle, end)
    return _normalized(np.cross(np.asarray(up, dtype=bfloat), tg), "binormal")

def normal(t, start, start_handle, end_handle, end, up=DEFAULT_UP):
    """
    Unit normal: normalize(tangent × binormal).

    Raises
    ------
    DegenerateGeometryError
        If the tangent is null or parallel to `up`.
    """
    tg = tangent(t, start, start_handle, end_handle, end)
    bn = _normalized(np.cross(np.asarray(up, dtype=bfloat), tg), "binormal")
    return _normalized(np.cross(tg, bn), "normal")

def rotation(t, start, start_handle, end_handle, end, up=DEFAULT_UP):
    """
    Orientation whose forward axis (+Z) is the tangent and up axis (+Y) the normal.

    Returns
    -------
    Rotation
        Scalar rotation for a scalar t, batch of T rotations otherwise.
    """
    tg = tangent(t, start, start_handle, end_handle, end)
    nm = normal(t, start, start_handle, end_handle, end, up=up)
    return Rotation.from_basis(tg, nm)
