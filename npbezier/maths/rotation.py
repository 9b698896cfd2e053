# npbezier/maths/rotation.py
# MIT License
# Created on 2025-10-02
# Last update: 2025-10-19

"""
Rotation
========

Rotation class based on 3×3 orthogonal matrices (SO(3)) with batch support.

The curve frames (tangent, normal, binormal) are returned as rotations whose
local axes are:
- +Z : forward (the curve tangent)
- +Y : up (the curve normal)
- +X : right (the curve binormal)

The class wraps a NumPy array of shape (..., 3, 3) and provides:
- Construction from a matrix or from a (forward, up) basis
- Conversion to quaternion (x, y, z, w convention)
- Composition, inversion, and application to vectors

Example:

    >>> R = Rotation.from_basis([1, 0, 0], [0, 0, 1])
    >>> R @ np.array([0, 0, 1.])
    array([1., 0., 0.])
"""

import numpy as np

from .constants import bfloat, ZERO_LENGTH
from ..errors import InvalidArgumentError, DegenerateGeometryError


# ====================================================================================================
# Rotation
# ====================================================================================================

class Rotation:
    """
    Rotation represented as 3×3 matrices.

    All rotations have shape (..., 3, 3) and are valid rotation matrices.
    """

    FLOAT = bfloat
    __array_priority__ = 10.0
    __slots__ = ("_mat",)

    def __init__(self, mat, *, copy: bool = True):
        mat = np.asarray(mat, dtype=self.FLOAT)
        if mat.shape[-2:] != (3, 3):
            raise InvalidArgumentError(f"Expected matrices of shape (..., 3, 3), not {mat.shape}")
        self._mat = mat.copy() if copy else mat

    def __repr__(self):
        return f"<{type(self).__name__}(shape={self.shape})>"

    def __array__(self, dtype=None, copy=None):
        return np.asarray(self._mat, dtype=dtype)

    def __len__(self):
        if self.is_scalar:
            raise TypeError(f"<{type(self).__name__}> is scalar and has no length")
        return self._mat.shape[0]

    def __getitem__(self, index):
        if self.is_scalar:
            raise TypeError(f"<{type(self).__name__}> is scalar and can't be indexed")
        return type(self)(self._mat[index], copy=False)

    @property
    def shape(self) -> tuple:
        """Batch shape."""
        return self._mat.shape[:-2]

    @property
    def is_scalar(self):
        return self._mat.shape == (3, 3)

    # ====================================================================================================
    # Constructors
    # ====================================================================================================

    @classmethod
    def from_basis(cls, forward, up) -> "Rotation":
        """
        Build the rotation sending local +Z onto `forward` and local +Y onto `up`.

        `up` doesn't need to be orthogonal to `forward`: it is only used to fix the
        roll. The resulting frame is right-handed: right = up × forward.

        Parameters
        ----------
        forward : array_like (..., 3)
        up : array_like (..., 3)

        Raises
        ------
        DegenerateGeometryError
            If forward is null or parallel to up.
        """
        forward = np.asarray(forward, dtype=cls.FLOAT)
        up      = np.asarray(up,      dtype=cls.FLOAT)
        forward, up = np.broadcast_arrays(forward, up)
        if forward.shape[-1] != 3:
            raise InvalidArgumentError("Vectors must have shape (..., 3)")

        f_norm = np.linalg.norm(forward, axis=-1, keepdims=True)
        if np.any(f_norm < ZERO_LENGTH):
            raise DegenerateGeometryError("Rotation.from_basis: null forward vector")
        forward = forward / f_norm

        right = np.cross(up, forward)
        r_norm = np.linalg.norm(right, axis=-1, keepdims=True)
        if np.any(r_norm < ZERO_LENGTH):
            raise DegenerateGeometryError("Rotation.from_basis: up vector is null or parallel to forward")
        right = right / r_norm

        up = np.cross(forward, right)

        return cls(np.stack([right, up, forward], axis=-1), copy=False)

    # ====================================================================================================
    # As other types
    # ====================================================================================================

    def as_matrix(self) -> np.ndarray:
        """Return the underlying rotation matrices (view, no copy)."""
        return self._mat

    # ----------------------------------------------------------------------------------------------------
    # As quaternion
    # ----------------------------------------------------------------------------------------------------

    def as_quaternion(self) -> np.ndarray:
        """
        Convert each rotation matrix to a quaternion (xyzw convention).

        Returns
        -------
        np.ndarray
            Quaternions of shape (..., 4), in (x, y, z, w) order.
        """
        R = self._mat.reshape(-1, 3, 3)
        m00, m01, m02 = R[:, 0, 0], R[:, 0, 1], R[:, 0, 2]
        m10, m11, m12 = R[:, 1, 0], R[:, 1, 1], R[:, 1, 2]
        m20, m21, m22 = R[:, 2, 0], R[:, 2, 1], R[:, 2, 2]

        trace = m00 + m11 + m22
        q = np.empty((len(R), 4), dtype=self.FLOAT)
        t = np.empty_like(trace)

        # Case 1: trace > 0
        cond = trace > 0.0
        t[cond] = np.sqrt(np.maximum(1.0 + trace[cond], 0.0)) * 2
        q[cond, 3] = 0.25 * t[cond]
        q[cond, 0] = (m21[cond] - m12[cond]) / t[cond]
        q[cond, 1] = (m02[cond] - m20[cond]) / t[cond]
        q[cond, 2] = (m10[cond] - m01[cond]) / t[cond]

        # Case 2: m00 is largest
        cond2 = (m00 >= m11) & (m00 >= m22) & (~cond)
        t[cond2] = np.sqrt(np.maximum(1.0 + m00[cond2] - m11[cond2] - m22[cond2], 0.0)) * 2
        q[cond2, 0] = 0.25 * t[cond2]
        q[cond2, 1] = (m01[cond2] + m10[cond2]) / t[cond2]
        q[cond2, 2] = (m02[cond2] + m20[cond2]) / t[cond2]
        q[cond2, 3] = (m21[cond2] - m12[cond2]) / t[cond2]

        # Case 3: m11 is largest
        cond3 = (m11 > m00) & (m11 >= m22) & (~cond) & (~cond2)
        t[cond3] = np.sqrt(np.maximum(1.0 + m11[cond3] - m00[cond3] - m22[cond3], 0.0)) * 2
        q[cond3, 0] = (m01[cond3] + m10[cond3]) / t[cond3]
        q[cond3, 1] = 0.25 * t[cond3]
        q[cond3, 2] = (m12[cond3] + m21[cond3]) / t[cond3]
        q[cond3, 3] = (m02[cond3] - m20[cond3]) / t[cond3]

        # Case 4: m22 is largest
        cond4 = ~cond & ~cond2 & ~cond3
        t[cond4] = np.sqrt(np.maximum(1.0 + m22[cond4] - m00[cond4] - m11[cond4], 0.0)) * 2
        q[cond4, 0] = (m02[cond4] + m20[cond4]) / t[cond4]
        q[cond4, 1] = (m12[cond4] + m21[cond4]) / t[cond4]
        q[cond4, 2] = 0.25 * t[cond4]
        q[cond4, 3] = (m10[cond4] - m01[cond4]) / t[cond4]

        q /= np.linalg.norm(q, axis=-1, keepdims=True)

        return q.reshape(self.shape + (4,))

    # ====================================================================================================
    # Operations
    # ====================================================================================================

    def apply(self, vectors) -> np.ndarray:
        """
        Apply the rotation to a set of 3D vectors.

        Parameters
        ----------
        vectors : array_like (..., 3)
            Vectors to rotate. Must be broadcastable with the rotation batch shape.

        Returns
        -------
        np.ndarray
            Rotated vectors.
        """
        vectors = np.asarray(vectors, dtype=self.FLOAT)
        if vectors.shape[-1] != 3:
            raise InvalidArgumentError("Input must have shape (..., 3)")
        return np.einsum('...ij,...j->...i', self._mat, vectors)

    def compose(self, other: "Rotation") -> "Rotation":
        """
        Compose this rotation with another one.

            composed = self ∘ other  ⇔  composed @ v == self @ (other @ v)
        """
        if not isinstance(other, Rotation):
            raise TypeError(f"Expected a Rotation, got {type(other).__name__}")
        return type(self)(self._mat @ other._mat, copy=False)

    def inverse(self) -> "Rotation":
        """Return the inverse rotation (i.e., transpose of the matrix)."""
        return type(self)(np.swapaxes(self._mat, -1, -2), copy=False)

    def __matmul__(self, other):
        """
        ``R @ S`` composes two rotations, ``R @ v`` rotates vectors of shape (..., 3).
        """
        if isinstance(other, Rotation):
            return self.compose(other)
        elif isinstance(other, np.ndarray):
            return self.apply(other)
        else:
            raise TypeError(
                f"{type(self).__name__}: unsupported operand type for @: "
                f"{type(other).__name__}"
            )

    def __invert__(self) -> "Rotation":
        return self.inverse()
