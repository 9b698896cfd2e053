# npbezier/lut.py
# MIT License
# Created on 2025-10-02
# Last update: 2025-10-19

"""
Lookup tables of curve samples.

A LUT stores `steps` samples of a whole curve: sample i is the position of the
curve at global time `times[i]`. The arrays are read only: a LUT is never
modified once built, so that it can be shared by the curve cache.

    >>> lut = curve.get_lut(50)
    >>> lut[10]
    LUTPoint(index=10, position=array([...]), time=0.2040...)
"""

__all__ = ['LUTPoint', 'LUT', 'closest_sample']

from typing import NamedTuple

import numpy as np

from .maths.constants import bfloat
from .errors import InvalidArgumentError


class LUTPoint(NamedTuple):
    index: int
    position: np.ndarray
    time: float


# ====================================================================================================
# Lookup table
# ====================================================================================================

class LUT:
    """
    Ordered samples (index, position, time) of a curve.

    Parameters
    ----------
    positions : array_like (N, 3)
    times : array_like (N,)
    """

    __slots__ = ('_positions', '_times')

    def __init__(self, positions, times):
        positions = np.array(positions, dtype=bfloat).reshape(-1, 3)
        times = np.array(times, dtype=bfloat).reshape(-1)
        if len(positions) != len(times):
            raise InvalidArgumentError(f"LUT: {len(positions)} positions for {len(times)} times")

        positions.flags.writeable = False
        times.flags.writeable = False

        self._positions = positions
        self._times = times

    def __str__(self):
        return f"<LUT of {len(self)} samples>"

    def __len__(self):
        return len(self._times)

    def __getitem__(self, index):
        n = len(self)
        if index < 0:
            index += n
        if index < 0 or index >= n:
            raise IndexError(f"LUT index {index} out of range [0, {n}[")
        return LUTPoint(index, self._positions[index], float(self._times[index]))

    def __iter__(self):
        for i in range(len(self)):
            yield self[i]

    @property
    def positions(self):
        return self._positions

    @property
    def times(self):
        return self._times

    @property
    def indices(self):
        return np.arange(len(self))


# ====================================================================================================
# Nearest sample
# ====================================================================================================

def closest_sample(point, lut):
    """
    Sample of the LUT closest to a point.

    Samples are scanned in the given order and ties are resolved in favor of the
    first one. When a sequence of LUTPoint is given, the returned sample is the
    given LUTPoint itself.

    Parameters
    ----------
    point : array_like (3,)
    lut : LUT or sequence of LUTPoint

    Returns
    -------
    LUTPoint, float
        The closest sample and its distance to the point.

    Raises
    ------
    InvalidArgumentError
        If the LUT is empty.
    """
    if isinstance(lut, LUT):
        samples = lut
        positions = lut.positions
    else:
        samples = list(lut)
        positions = np.array([p.position for p in samples], dtype=bfloat).reshape(-1, 3)

    if len(samples) == 0:
        raise InvalidArgumentError("LUT must not be empty")

    dists = np.linalg.norm(positions - np.asarray(point, dtype=bfloat), axis=-1)
    i = int(np.argmin(dists))

    return samples[i], float(dists[i])
