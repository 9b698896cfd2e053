import npbezier
from npbezier import maths


def test_maths_exports():
    for name in maths.__all__:
        assert hasattr(npbezier, name)

def test_maths_submodules_stay_private():
    for name in ('constants', 'rotation', 'arclength'):
        assert not hasattr(npbezier, name)
    assert npbezier.cubic is maths.cubic
