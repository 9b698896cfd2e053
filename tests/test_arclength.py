import numpy as np
import pytest

from npbezier.maths import segment_sampling, segment_length, segment_lengths, curve_length
from npbezier import InvalidArgumentError

# Quarter of circle of radius 1
K = 0.5522847498
QUARTER = ((1, 0, 0), (1, K, 0), (K, 1, 0), (0, 1, 0))


def test_straight_length():
    assert segment_length((0, 0, 0), (1, 0, 0), (9, 0, 0), (10, 0, 0), 1) == pytest.approx(10)
    assert segment_length((0, 0, 0), (1, 0, 0), (9, 0, 0), (10, 0, 0), 25) == pytest.approx(10)

def test_quarter_circle():
    assert segment_length(*QUARTER, 200) == pytest.approx(np.pi/2, rel=1e-3)

def test_length_improves_with_sampling():
    lengths = [segment_length(*QUARTER, n) for n in (1, 2, 4, 8, 16, 32)]
    assert np.all(np.diff(lengths) >= 0)
    assert lengths[-1] <= np.pi/2 * (1 + 1e-3)
    assert lengths[0] == pytest.approx(np.sqrt(2))

def test_null_segment():
    p = (3, 1, 2)
    assert segment_length(p, p, p, p, 10) == 0.

def test_invalid_sampling():
    with pytest.raises(InvalidArgumentError):
        segment_length(*QUARTER, 0)
    with pytest.raises(InvalidArgumentError):
        segment_length(*QUARTER, -2)
    with pytest.raises(InvalidArgumentError):
        segment_sampling(0, 3)
    for sampling in (np.nan, np.inf, 2.5):
        with pytest.raises(InvalidArgumentError):
            segment_length(*QUARTER, sampling)
    assert segment_length(*QUARTER, np.int64(4)) == segment_length(*QUARTER, 4)

def test_segment_sampling():
    assert segment_sampling(25, 1) == 26
    assert segment_sampling(25, 3) == 9
    assert segment_sampling(2, 5) == 1
    with pytest.raises(InvalidArgumentError):
        segment_sampling(25, 0)

def test_curve_length():
    segs = [
        ((0, 0, 0), (1, 0, 0), (2, 0, 0), (3, 0, 0)),
        ((3, 0, 0), (3, 1, 0), (3, 2, 0), (3, 4, 0)),
        ]
    np.testing.assert_allclose(segment_lengths(segs, 10), (3, 4))
    assert curve_length(segs, 10) == pytest.approx(7)
    with pytest.raises(InvalidArgumentError):
        curve_length([], 10)
