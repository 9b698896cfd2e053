# npbezier/points.py
# MIT License
# Created on 2025-10-02
# Last update: 2025-10-19

"""
Control points of a Bezier curve and the store holding them.

A control point has a position and two handles:
- left handle  : incoming tangent anchor
- right handle : outgoing tangent anchor

The curve doesn't own its points: it reads them from a PointStore which is
responsible for their creation and destruction. ListPointStore is the default
in-memory store.
"""

__all__ = ['ControlPoint', 'PointStore', 'ListPointStore']

import weakref

import numpy as np

from .maths.constants import bfloat
from .errors import InvalidArgumentError


def _as_vector(v, name):
    v = np.array(v, dtype=bfloat)
    if v.shape != (3,):
        raise InvalidArgumentError(f"{name} must be a 3D vector, not shape {v.shape}")
    if not np.all(np.isfinite(v)):
        raise InvalidArgumentError(f"{name} must be finite: {v}")
    v.flags.writeable = False
    return v


# ====================================================================================================
# Control point
# ====================================================================================================

class ControlPoint:
    """
    A curve point with two independent tangent handles.

    The handles can coincide with the position (degenerate tangent). Moving the
    position moves the handles along with it.

    Vectors are returned as read only arrays: use the setters to change them so
    that the observers (the curves using the point) are notified.
    """

    __slots__ = ('_position', '_left', '_right', '_observers')

    def __init__(self, position=(0., 0., 0.), left_handle=None, right_handle=None):
        self._position = _as_vector(position, "position")
        self._left  = self._position if left_handle is None else _as_vector(left_handle, "left_handle")
        self._right = self._position if right_handle is None else _as_vector(right_handle, "right_handle")
        self._observers = []

    def __str__(self):
        return f"<ControlPoint {self._position}, left: {self._left}, right: {self._right}>"

    def __repr__(self):
        return (f"ControlPoint({self._position.tolist()}, "
                f"left_handle={self._left.tolist()}, right_handle={self._right.tolist()})")

    # ----------------------------------------------------------------------------------------------------
    # Observers
    # ----------------------------------------------------------------------------------------------------

    def add_observer(self, callback):
        """
        Register a callable called with the point each time it is moved.

        Bound methods are held by weak reference: a curve no longer used is not
        kept alive by its points, and its entry is dropped when it is collected.
        """
        if self._find_observer(callback) is None:
            if hasattr(callback, '__self__') and hasattr(callback, '__func__'):
                ref = weakref.WeakMethod(callback, self._observer_collected)
            else:
                ref = lambda: callback
            self._observers.append(ref)

    def remove_observer(self, callback):
        ref = self._find_observer(callback)
        if ref is not None:
            self._observers.remove(ref)

    def _find_observer(self, callback):
        for ref in self._observers:
            if ref() == callback:
                return ref
        return None

    def _observer_collected(self, ref):
        if ref in self._observers:
            self._observers.remove(ref)

    def _changed(self):
        self._observers = [ref for ref in self._observers if ref() is not None]
        for ref in list(self._observers):
            callback = ref()
            if callback is not None:
                callback(self)

    # ----------------------------------------------------------------------------------------------------
    # Vectors
    # ----------------------------------------------------------------------------------------------------

    @property
    def position(self):
        return self._position

    @position.setter
    def position(self, value):
        self.translate(_as_vector(value, "position") - self._position)

    @property
    def left_handle(self):
        return self._left

    @left_handle.setter
    def left_handle(self, value):
        self._left = _as_vector(value, "left_handle")
        self._changed()

    @property
    def right_handle(self):
        return self._right

    @right_handle.setter
    def right_handle(self, value):
        self._right = _as_vector(value, "right_handle")
        self._changed()

    def set_handles(self, left_handle, right_handle):
        """Set both handles with a single notification."""
        self._left  = _as_vector(left_handle, "left_handle")
        self._right = _as_vector(right_handle, "right_handle")
        self._changed()

    def translate(self, offset):
        """Move the point and its handles."""
        offset = _as_vector(offset, "offset")
        self._position = _as_vector(self._position + offset, "position")
        self._left     = _as_vector(self._left + offset, "left_handle")
        self._right    = _as_vector(self._right + offset, "right_handle")
        self._changed()


# ====================================================================================================
# Point store
# ====================================================================================================

class PointStore:
    """
    Ordered, indexable collection of control points.

    Hosts (a scene graph, an editor...) implement this interface to own the
    points lifecycle. The curve only reads the points and asks the store to
    insert or remove them.
    """

    # ----------------------------------------------------------------------------------------------------
    # To be overloaded
    # ----------------------------------------------------------------------------------------------------

    def __len__(self):
        raise Exception(f"{type(self).__name__}.__len__ must be overloaded")

    def __getitem__(self, index):
        raise Exception(f"{type(self).__name__}.__getitem__ must be overloaded")

    def create_point(self, position, left_handle, right_handle):
        """Create a new point entity (not yet inserted)."""
        return ControlPoint(position, left_handle=left_handle, right_handle=right_handle)

    def insert(self, index, point):
        raise Exception(f"{type(self).__name__}.insert must be overloaded")

    def pop(self, index):
        """Remove the point at index, destroy it and return it."""
        raise Exception(f"{type(self).__name__}.pop must be overloaded")

    # ----------------------------------------------------------------------------------------------------
    # Default implementation
    # ----------------------------------------------------------------------------------------------------

    def __iter__(self):
        for i in range(len(self)):
            yield self[i]


class ListPointStore(PointStore):
    """In-memory point store backed by a list."""

    def __init__(self, points=None):
        self._points = []
        if points is not None:
            for p in points:
                self._points.append(p if isinstance(p, ControlPoint) else ControlPoint(p))

    def __len__(self):
        return len(self._points)

    def __getitem__(self, index):
        return self._points[index]

    def insert(self, index, point):
        if not isinstance(point, ControlPoint):
            raise InvalidArgumentError(f"ControlPoint expected, not {type(point).__name__}")
        self._points.insert(index, point)

    def pop(self, index):
        return self._points.pop(index)
