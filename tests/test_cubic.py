import numpy as np
import pytest

from npbezier.maths import cubic
from npbezier import DegenerateGeometryError

STRAIGHT = ((0, 0, 0), (1, 0, 0), (9, 0, 0), (10, 0, 0))
CURVED   = ((0, 0, 0), (0, 2, 0), (3, 2, 1), (3, 0, 1))

# ====================================================================================================
# Position
# ====================================================================================================

def test_position_end_points():
    np.testing.assert_allclose(cubic.position(0, *CURVED), CURVED[0], atol=1e-12)
    np.testing.assert_allclose(cubic.position(1, *CURVED), CURVED[3], atol=1e-12)

def test_position_straight_middle():
    np.testing.assert_allclose(cubic.position(.5, *STRAIGHT), (5, 0, 0))

def test_position_collapsed_segment_is_exact():
    p = (.1, 3.7, -2.3)
    t = np.linspace(0, 1, 11)
    np.testing.assert_array_equal(cubic.position(t, p, p, p, p), np.broadcast_to(p, (11, 3)))

def test_position_shapes():
    assert cubic.position(.3, *CURVED).shape == (3,)
    assert cubic.position(np.linspace(0, 1, 7), *CURVED).shape == (7, 3)

    # One segment per t
    starts = np.zeros((4, 3))
    ends = np.ones((4, 3))
    res = cubic.position(np.full(4, .5), starts, starts, ends, ends)
    np.testing.assert_allclose(res, np.full((4, 3), .5))

def test_position_extrapolates():
    P0, P1, P2, P3 = [np.array(v, dtype=float) for v in CURVED]
    t = 1.5
    expected = (1-t)**3*P0 + 3*(1-t)**2*t*P1 + 3*(1-t)*t**2*P2 + t**3*P3
    np.testing.assert_allclose(cubic.position(t, *CURVED), expected)

    t = -.25
    expected = (1-t)**3*P0 + 3*(1-t)**2*t*P1 + 3*(1-t)*t**2*P2 + t**3*P3
    np.testing.assert_allclose(cubic.position(t, *CURVED), expected)

# ====================================================================================================
# Tangent and frame
# ====================================================================================================

def test_tangent_is_unit_derivative():
    t = np.linspace(0, 1, 11)
    tg = cubic.tangent(t, *CURVED)
    np.testing.assert_allclose(np.linalg.norm(tg, axis=-1), 1.)

    dt = 1e-6
    fd = (cubic.position(t + dt, *CURVED) - cubic.position(t - dt, *CURVED)) / (2*dt)
    fd /= np.linalg.norm(fd, axis=-1, keepdims=True)
    np.testing.assert_allclose(tg, fd, atol=1e-6)

def test_tangent_straight():
    np.testing.assert_allclose(cubic.tangent(.3, *STRAIGHT), (1, 0, 0))

def test_null_tangent_is_zero_vector():
    p = (2, 2, 2)
    np.testing.assert_array_equal(cubic.tangent(.5, p, p, p, p), (0, 0, 0))

def test_frame_straight():
    up = (0, 0, 1)
    np.testing.assert_allclose(cubic.binormal(.5, *STRAIGHT, up=up), (0, 1, 0), atol=1e-12)
    np.testing.assert_allclose(cubic.normal(.5, *STRAIGHT, up=up), (0, 0, 1), atol=1e-12)

def test_frame_is_orthonormal():
    t = np.linspace(0, 1, 9)
    up = (0, 0, 1)
    tg = cubic.tangent(t, *CURVED)
    bn = cubic.binormal(t, *CURVED, up=up)
    nm = cubic.normal(t, *CURVED, up=up)
    for a, b in [(tg, bn), (tg, nm), (bn, nm)]:
        np.testing.assert_allclose(np.einsum('...i,...i', a, b), 0, atol=1e-10)
    np.testing.assert_allclose(np.linalg.norm(nm, axis=-1), 1.)
    np.testing.assert_allclose(np.linalg.norm(bn, axis=-1), 1.)

def test_frame_degenerate():
    p = (2, 2, 2)
    with pytest.raises(DegenerateGeometryError):
        cubic.binormal(.5, p, p, p, p)
    with pytest.raises(DegenerateGeometryError):
        cubic.normal(.5, p, p, p, p)

    # Tangent parallel to up
    with pytest.raises(DegenerateGeometryError):
        cubic.normal(.5, *STRAIGHT, up=(1, 0, 0))

# ====================================================================================================
# Rotation
# ====================================================================================================

def test_rotation_axes():
    R = cubic.rotation(.5, *STRAIGHT, up=(0, 0, 1))
    assert R.is_scalar
    np.testing.assert_allclose(R @ np.array([0, 0, 1.]), (1, 0, 0), atol=1e-12)
    np.testing.assert_allclose(R @ np.array([0, 1, 0.]), (0, 0, 1), atol=1e-12)
    np.testing.assert_allclose(R @ np.array([1, 0, 0.]), (0, 1, 0), atol=1e-12)

def test_rotation_batch():
    t = np.linspace(0, 1, 5)
    R = cubic.rotation(t, *CURVED, up=(0, 0, 1))
    assert R.shape == (5,)
    np.testing.assert_allclose(np.linalg.det(R.as_matrix()), 1.)
    np.testing.assert_allclose(R.apply(np.array([0, 0, 1.])), cubic.tangent(t, *CURVED), atol=1e-12)
