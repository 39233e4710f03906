import math

import numpy as np
import pytest

from trackview.core.errors import FrameMismatchError, InvalidAxisError
from trackview.core.frame_vector import FrameVector
from trackview.core.frames import Frame
from trackview.core.rotation import PointRotation, transform


class CoordinateSystemS(Frame):
    pass


class CoordinateSystemR(Frame):
    pass


# Short names for the test frames
S = CoordinateSystemS
R = CoordinateSystemR


def _v(x, y, z, frame=S, dtype=np.float32):
    return FrameVector(x, y, z, frame=frame, dtype=dtype)


X_AXIS = _v(1.0, 0.0, 0.0)
Y_AXIS = _v(0.0, 1.0, 0.0)
Z_AXIS = _v(0.0, 0.0, 1.0)


def test_zero_rotation_is_identity():
    """A rotation of 0 radians leaves the vector unchanged, in the same frame"""
    v = _v(1.0, 2.0, 3.0)
    rotation = PointRotation(0.0, X_AXIS)

    result = transform(rotation, v)

    assert result.isclose(_v(1.0, 2.0, 3.0))
    assert result.frame is S
    assert result.dtype is np.float32


def test_quarter_turn_around_x():
    """(0, 1, 0) rotated pi/2 around X is (0, 0, 1)"""
    rotation = PointRotation(0.5 * math.pi, X_AXIS)

    result = transform(rotation, _v(0.0, 1.0, 0.0))

    assert result.isclose(_v(0.0, 0.0, 1.0))


def test_rotation_for_other_frame_raises():
    """A rotation in frame S applied to a vector in frame R is rejected"""
    v = _v(1.0, 2.0, 3.0, frame=R)
    rotation = PointRotation(0.0, X_AXIS)

    with pytest.raises(FrameMismatchError):
        transform(rotation, v)


def test_rotation_for_other_scalar_type_raises():
    """A float32 rotation applied to a float64 vector is rejected"""
    v = _v(1.0, 2.0, 3.0, dtype=np.float64)
    rotation = PointRotation(0.0, X_AXIS)

    with pytest.raises(FrameMismatchError):
        transform(rotation, v)


def test_rotation_of_non_vector_raises():
    rotation = PointRotation(0.0, X_AXIS)

    with pytest.raises(TypeError):
        transform(rotation, (1.0, 2.0, 3.0))
    with pytest.raises(TypeError):
        PointRotation(0.0, (1.0, 0.0, 0.0))


# description, vector, angle, axis, expected
POINT_ROTATION_CASES = [
    ("Rotate pi/2 X around Z -> Y", _v(1.0, 0.0, 0.0), 0.5 * math.pi, Z_AXIS, _v(0.0, 1.0, 0.0)),
    ("Rotate pi/2 Y around X -> Z", _v(0.0, 1.0, 0.0), 0.5 * math.pi, X_AXIS, _v(0.0, 0.0, 1.0)),
    ("Rotate pi/2 Z around Y -> X", _v(0.0, 0.0, 1.0), 0.5 * math.pi, Y_AXIS, _v(1.0, 0.0, 0.0)),
    ("Rotate pi/2 Y around Z -> -X", _v(0.0, 1.0, 0.0), 0.5 * math.pi, Z_AXIS, _v(-1.0, 0.0, 0.0)),
]


@pytest.mark.parametrize(
    "vector, angle, axis, expected",
    [case[1:] for case in POINT_ROTATION_CASES],
    ids=[case[0] for case in POINT_ROTATION_CASES],
)
def test_point_rotation_table(vector, angle, axis, expected):
    rotation = PointRotation(angle, axis)

    result = transform(rotation, vector)

    assert result.isclose(expected, atol=1e-6)


def test_negative_angle_rotates_the_other_way():
    rotation = PointRotation(-0.5 * math.pi, Z_AXIS)

    assert transform(rotation, _v(1.0, 0.0, 0.0)).isclose(_v(0.0, -1.0, 0.0), atol=1e-6)


@pytest.mark.parametrize("dtype, rtol", [(np.float32, 1e-5), (np.float64, 1e-12)])
def test_rotation_preserves_norm(dtype, rtol):
    rng = np.random.default_rng(1234)
    for _ in range(50):
        axis = FrameVector.from_iterable(rng.normal(size=3), frame=S, dtype=dtype).normalize()
        v = FrameVector.from_iterable(rng.uniform(-10.0, 10.0, size=3), frame=S, dtype=dtype)
        angle = rng.uniform(-4.0 * math.pi, 4.0 * math.pi)

        result = transform(PointRotation(angle, axis), v)

        assert result.dtype is dtype
        assert float(result.norm()) == pytest.approx(float(v.norm()), rel=rtol)


def test_angle_is_stored_in_axis_scalar_type():
    rotation = PointRotation(math.pi, X_AXIS)

    assert isinstance(rotation.angle, np.float32)
    assert rotation.dtype is np.float32
    assert rotation.frame is S


def test_axis_is_not_normalized():
    """The plain constructor uses the axis as given"""
    rotation = PointRotation(0.5 * math.pi, _v(0.0, 0.0, 2.0))

    result = transform(rotation, _v(1.0, 0.0, 0.0))

    assert rotation.axis == _v(0.0, 0.0, 2.0)
    assert not math.isclose(float(result.norm()), 1.0)


def test_about_normalizes_axis():
    rotation = PointRotation.about(0.5 * math.pi, _v(0.0, 0.0, 2.0))

    assert rotation.axis.isclose(Z_AXIS)
    assert rotation(_v(1.0, 0.0, 0.0)).isclose(_v(0.0, 1.0, 0.0), atol=1e-6)


def test_about_zero_axis_raises():
    with pytest.raises(InvalidAxisError):
        PointRotation.about(1.0, _v(0.0, 0.0, 0.0))


def test_inverse_undoes_rotation():
    rotation = PointRotation(0.3, PointRotation.about(0.0, _v(1.0, 2.0, 3.0)).axis)
    v = _v(0.5, -1.0, 2.0)

    assert rotation.inverse()(rotation(v)).isclose(v, atol=1e-5)


def test_rotation_equality():
    assert PointRotation(1.0, X_AXIS) == PointRotation(1.0, X_AXIS)
    assert PointRotation(1.0, X_AXIS) != PointRotation(1.0, Y_AXIS)
