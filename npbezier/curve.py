# npbezier/curve.py
# MIT License
# Created on 2025-10-02
# Last update: 2025-10-19

"""
Module Name: curve

Piecewise cubic Bezier curve in 3D space.

The curve is defined by an ordered sequence of control points, each with a left
(incoming) and a right (outgoing) handle. Two consecutive points P[i], P[i+1]
define the segment:

    P[i].position, P[i].right_handle, P[i+1].left_handle, P[i+1].position

Global time
-----------
The curve is evaluated with a single global time t ∈ [0, 1]. Each segment gets a
share of the global time proportional to its approximate length so that the
traversal speed is roughly uniform along the curve, whatever the spacing of
the points.

Lookup tables
-------------
`get_lut(steps)` samples the whole curve at `steps` evenly spaced global times.
The tables are cached per number of steps and used by `project` to find the
global time of the curve point closest to an arbitrary point.

The cache is cleared when a point is inserted or removed. By default, moving an
existing point does NOT clear it: set `invalidate_on_move` to True to clear it
each time a point or a handle of the curve is moved.

Usage example:

    >>> curve = BezierCurve([
    ...     ControlPoint((0, 0, 0), right_handle=(1, 0, 0)),
    ...     ControlPoint((10, 0, 0), left_handle=(9, 0, 0)),
    ...     ])
    >>> curve.evaluate(.5)
    array([5., 0., 0.])
    >>> curve.project((5, 1, 0))   # ≈ 0.5
"""

__all__ = ['BezierCurve']

import logging

import numpy as np

from .maths.constants import bfloat, ZERO_LENGTH, DEFAULT_SAMPLING, DEFAULT_LUT_STEPS, DEFAULT_UP
from .maths import cubic
from .maths.arclength import segment_lengths, is_count
from .points import PointStore, ListPointStore
from .lut import LUT, closest_sample
from .errors import InvalidArgumentError


# ====================================================================================================
# Bezier curve
# ====================================================================================================

class BezierCurve:

    def __init__(self, points=None, sampling=DEFAULT_SAMPLING, invalidate_on_move=False, cache_lengths=False):
        """
        Bezier curve made of cubic segments.

        Parameters
        ----------
        points : PointStore or iterable of ControlPoint / vectors, optional
            The control points. A PointStore is used as is, other iterables are
            wrapped in a ListPointStore.
        sampling : int, default 25
            Curve sampling used to approximate the length. Each segment is
            sampled with `sampling // segments_count + 1` chords.
        invalidate_on_move : bool, default False
            Clear the LUT cache when a point of the curve is moved.
        cache_lengths : bool, default False
            Memoize the segment lengths. The lengths are dropped with the LUT cache.
        """
        if points is None:
            store = ListPointStore()
        elif isinstance(points, PointStore):
            store = points
        else:
            store = ListPointStore(points)

        self._store = store
        self._sampling = None
        self._luts = {}
        self._lengths = None

        self.sampling = sampling
        self.invalidate_on_move = invalidate_on_move
        self.cache_lengths = cache_lengths

        for point in self._store:
            point.add_observer(self._point_moved)

    def __str__(self):
        return f"<BezierCurve of {len(self)} points, sampling: {self.sampling}, cached LUTs: {sorted(self._luts)}>"

    def __len__(self):
        return len(self._store)

    def __getitem__(self, index):
        return self._store[index]

    # ====================================================================================================
    # Properties
    # ====================================================================================================

    @property
    def points(self):
        """The point store."""
        return self._store

    @property
    def sampling(self):
        return self._sampling

    @sampling.setter
    def sampling(self, value):
        if not is_count(value):
            raise InvalidArgumentError(f"Sampling must be a positive integer, not {value}")
        if value != self._sampling:
            self._sampling = int(value)
            self.clear_cache()

    @property
    def segments_count(self):
        return max(0, len(self) - 1)

    # ====================================================================================================
    # Points management
    # ====================================================================================================

    def _point_moved(self, point):
        if self.invalidate_on_move:
            self.clear_cache()

    @staticmethod
    def _auto_handles(position, prev_pos=None, next_pos=None):
        """
        Smooth handles along the chord joining the neighbors, a third of the
        distance to each neighbor.
        """
        before = position if prev_pos is None else prev_pos
        after  = position if next_pos is None else next_pos

        der = after - before
        norm = np.linalg.norm(der)
        if norm < ZERO_LENGTH:
            return position, position
        der = der / norm

        d_prev = None if prev_pos is None else np.linalg.norm(position - prev_pos)
        d_next = None if next_pos is None else np.linalg.norm(next_pos - position)
        if d_prev is None:
            d_prev = d_next
        if d_next is None:
            d_next = d_prev

        return position - der*d_prev/3, position + der*d_next/3

    def add_point(self):
        """Append a new point at the end of the curve."""
        return self.add_point_at(len(self))

    def add_point_at(self, index):
        """
        Insert a new point at the given index.

        The new point is located:
        - at the origin if the curve has less than 2 points
        - one unit before the first point if index is 0
        - one unit after the last point if index is the number of points
        - in the middle (local time 0.5) of the segment it splits otherwise

        Parameters
        ----------
        index : int
            Index of the new point, between 0 and len(self) inclusive.

        Returns
        -------
        ControlPoint
            The created point.
        """
        n = len(self)
        if index < 0 or index > n:
            raise InvalidArgumentError(f"Insertion index {index} out of range [0, {n}]")

        def unit(v):
            norm = np.linalg.norm(v)
            return v/norm if norm >= ZERO_LENGTH else np.zeros(3, dtype=bfloat)

        if n < 2:
            position = np.zeros(3, dtype=bfloat)
        elif index == 0:
            p0, p1 = self._store[0].position, self._store[1].position
            position = p0 + unit(p0 - p1)
        elif index == n:
            p0, p1 = self._store[n - 2].position, self._store[n - 1].position
            position = p1 + unit(p1 - p0)
        else:
            position = cubic.position(.5, *self.segment(index - 1))

        prev_pos = self._store[index - 1].position if index > 0 else None
        next_pos = self._store[index].position if index < n else None
        left, right = self._auto_handles(position, prev_pos, next_pos)

        point = self._store.create_point(position, left, right)
        self._store.insert(index, point)
        point.add_observer(self._point_moved)

        logging.debug(f"BezierCurve> point inserted at {index}, {len(self)} points.")

        self.clear_cache()
        return point

    def remove_point_at(self, index):
        """
        Remove the point at the given index.

        Returns
        -------
        bool
            False if the curve has less than 2 points (nothing is removed), True otherwise.
        """
        n = len(self)
        if n < 2:
            return False

        if index < 0:
            index += n
        if index < 0 or index >= n:
            raise InvalidArgumentError(f"Point index {index} out of range [0, {n}[")

        point = self._store.pop(index)
        point.remove_observer(self._point_moved)

        logging.debug(f"BezierCurve> point {index} removed, {len(self)} points.")

        self.clear_cache()
        return True

    # ====================================================================================================
    # Segments
    # ====================================================================================================

    def _check_curve(self):
        if len(self) < 2:
            raise InvalidArgumentError(f"The curve needs at least 2 points, it has {len(self)}")

    def segment(self, index):
        """
        Control polygon of a segment.

        Returns
        -------
        tuple of 4 arrays (3,)
            start, start_handle, end_handle, end
        """
        if index < 0 or index >= self.segments_count:
            raise InvalidArgumentError(f"Segment index {index} out of range [0, {self.segments_count}[")
        p0, p1 = self._store[index], self._store[index + 1]
        return p0.position, p0.right_handle, p1.left_handle, p1.position

    def segments(self):
        """Iterate over the control polygons of the segments."""
        for i in range(self.segments_count):
            yield self.segment(i)

    def _control_polygons(self):
        """Control polygons as an array of shape (S, 4, 3)."""
        return np.array(list(self.segments()), dtype=bfloat)

    # ====================================================================================================
    # Length
    # ====================================================================================================

    def segment_lengths(self):
        """
        Approximate length of each segment.

        Returns
        -------
        np.ndarray (S,)
        """
        self._check_curve()

        if self.cache_lengths and self._lengths is not None:
            return self._lengths

        lengths = segment_lengths(self.segments(), self.sampling)
        if self.cache_lengths:
            lengths.flags.writeable = False
            self._lengths = lengths

        return lengths

    def length(self):
        """Approximate length of the curve."""
        return float(np.sum(self.segment_lengths()))

    # ====================================================================================================
    # Global time to segment time
    # ====================================================================================================

    def map_time(self, t):
        """
        Segment index and local time corresponding to a global time.

        The global time is shared between the segments proportionally to their
        length. The selected segment is the first one whose cumulated fraction is
        strictly greater than t: on a boundary, the later segment is selected.
        When no segment is found (t ≥ 1 with rounding errors), the last segment is used.

        t is not clipped: values outside [0, 1] give local times outside [0, 1].

        Parameters
        ----------
        t : float or array_like (T,)

        Returns
        -------
        segment index, local time
            (int, float) for a scalar t, arrays of shape (T,) otherwise.
        """
        lengths = self.segment_lengths()
        n = len(lengths)

        total = np.sum(lengths)
        if total < ZERO_LENGTH:
            logging.debug("BezierCurve> null length curve: uniform segment weights.")
            fractions = np.full(n, 1/n, dtype=bfloat)
        else:
            fractions = lengths / total

        cumul = np.cumsum(fractions)
        starts = np.concatenate(([0.], cumul[:-1]))

        t = np.asarray(t, dtype=bfloat)
        index = np.minimum(np.searchsorted(cumul, t, side='right'), n - 1)

        frac = fractions[index]
        safe = np.where(frac > 0, frac, 1.)
        local = np.where(frac > 0, (t - starts[index]) / safe, 0.)

        if t.shape == ():
            return int(index), float(local)
        return index, local

    def segment_points(self, t):
        """
        Points framing the segment at global time t.

        Returns
        -------
        ControlPoint, ControlPoint, float
            start point, end point and local time in the segment
        """
        index, local = self.map_time(float(t))
        return self._store[index], self._store[index + 1], local

    # ====================================================================================================
    # Evaluation
    # ====================================================================================================

    def _evaluate(self, func, t, **kwargs):
        index, local = self.map_time(t)
        polys = self._control_polygons()[index]          # (4, 3) or (T, 4, 3)
        return func(local, polys[..., 0, :], polys[..., 1, :], polys[..., 2, :], polys[..., 3, :], **kwargs)

    def evaluate(self, t):
        """
        Position at global time(s) t.

        Returns
        -------
        np.ndarray (3,) or (T, 3)
        """
        return self._evaluate(cubic.position, t)

    def tangent(self, t):
        """Unit tangent at global time(s) t, null vector where the derivative is null."""
        return self._evaluate(cubic.tangent, t)

    def binormal(self, t, up=DEFAULT_UP):
        """Unit binormal (up × tangent) at global time(s) t."""
        return self._evaluate(cubic.binormal, t, up=up)

    def normal(self, t, up=DEFAULT_UP):
        """Unit normal (tangent × binormal) at global time(s) t."""
        return self._evaluate(cubic.normal, t, up=up)

    def rotation(self, t, up=DEFAULT_UP):
        """Rotation with the tangent as forward axis and the normal as up axis."""
        return self._evaluate(cubic.rotation, t, up=up)

    def to_poly(self, count=None):
        """
        Positions of `count + 1` evenly spaced global times.

        Parameters
        ----------
        count : int, optional
            Number of polyline segments, default to the curve sampling.

        Returns
        -------
        np.ndarray (count + 1, 3)
        """
        count = self.sampling if count is None else count
        if not is_count(count):
            raise InvalidArgumentError(f"Count must be a positive integer, not {count}")
        return self.evaluate(np.arange(count + 1) / count)

    # ====================================================================================================
    # Lookup tables
    # ====================================================================================================

    def get_lut(self, steps=DEFAULT_LUT_STEPS):
        """
        Lookup table of `steps` samples of the curve.

        The samples are at global times i/(steps - 1). A single sample table
        is made of the position at global time 0.5.

        Tables are cached per number of steps.

        Returns
        -------
        LUT
        """
        if not is_count(steps):
            raise InvalidArgumentError(f"Steps must be 1 or higher, not {steps}")
        steps = int(steps)

        lut = self._luts.get(steps)
        if lut is not None:
            return lut

        self._check_curve()

        if steps == 1:
            times = np.array([.5], dtype=bfloat)
        else:
            times = np.arange(steps, dtype=bfloat) / (steps - 1)

        lut = LUT(self.evaluate(times), times)
        self._luts[steps] = lut

        logging.debug(f"BezierCurve> LUT of {steps} samples built.")

        return lut

    def clear_cache(self):
        """Drop the cached lookup tables and segment lengths."""
        if self._luts:
            logging.debug(f"BezierCurve> clear {len(self._luts)} cached LUTs.")
        self._luts.clear()
        self._lengths = None

    # ====================================================================================================
    # Projection
    # ====================================================================================================

    def project(self, point, steps=DEFAULT_LUT_STEPS):
        """
        Global time of the curve point closest to an off-curve point.

        The closest LUT sample is refined by projecting the point on the line
        joining the sample and its closest neighbor. The interpolation is not
        clamped: the result can be slightly outside [0, 1] at the curve ends.

        Parameters
        ----------
        point : array_like (3,)
        steps : int, default 100
            Number of samples of the lookup table.

        Returns
        -------
        float
        """
        point = np.asarray(point, dtype=bfloat)
        if point.shape != (3,):
            raise InvalidArgumentError(f"Point must be a 3D vector, not shape {point.shape}")

        lut = self.get_lut(steps)
        closest, _ = closest_sample(point, lut)

        n = len(lut)
        if n == 1:
            return closest.time

        i = closest.index
        if i == 0:
            neighbor = lut[1]
        elif i == n - 1:
            neighbor = lut[n - 2]
        else:
            after, before = lut[i + 1], lut[i - 1]
            if np.linalg.norm(after.position - point) < np.linalg.norm(before.position - point):
                neighbor = after
            else:
                neighbor = before

        v = neighbor.position - closest.position
        sq = float(np.dot(v, v))
        if sq < ZERO_LENGTH*ZERO_LENGTH:
            return closest.time

        ratio = float(np.dot(point - closest.position, v)) / sq

        return closest.time + (neighbor.time - closest.time)*ratio
