import numpy as np
import pytest

from npbezier import BezierCurve, ControlPoint


@pytest.fixture
def straight():
    """Straight horizontal segment from (0, 0, 0) to (10, 0, 0)."""
    return BezierCurve([
        ControlPoint((0, 0, 0), left_handle=(-1, 0, 0), right_handle=(1, 0, 0)),
        ControlPoint((10, 0, 0), left_handle=(9, 0, 0), right_handle=(11, 0, 0)),
        ])


@pytest.fixture
def uneven():
    """Straight curve of two segments of lengths 1 and 3, linearly parameterized."""
    return BezierCurve([
        ControlPoint((0, 0, 0), left_handle=(-1/3, 0, 0), right_handle=(1/3, 0, 0)),
        ControlPoint((1, 0, 0), left_handle=(2/3, 0, 0), right_handle=(2, 0, 0)),
        ControlPoint((4, 0, 0), left_handle=(3, 0, 0), right_handle=(5, 0, 0)),
        ])


@pytest.fixture
def wavy():
    """Three points curve bending in 3D."""
    return BezierCurve([
        ControlPoint((0, 0, 0), left_handle=(-1, -2, 0), right_handle=(1, 2, 0)),
        ControlPoint((4, 3, 1), left_handle=(3, 4, 1), right_handle=(5, 2, 1)),
        ControlPoint((8, 0, 0), left_handle=(7, -1, 0), right_handle=(9, 1, 0)),
        ], sampling=60)
