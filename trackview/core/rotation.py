"""Axis-angle point rotations."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic

import numpy as np

from trackview.core.errors import FrameMismatchError, InvalidAxisError, InvalidVectorError
from trackview.core.frame_vector import F, FrameVector, Scalar, T


@dataclass(frozen=True)
class PointRotation(Generic[T, F]):
    """
    Rotation of points by ``angle`` radians about ``axis``.

    The axis is used as given and is expected to be unit length. A non-unit
    axis is not rejected; it produces a rotation that does not preserve
    length. Use :meth:`about` to normalize the axis on construction.

    The angle is stored in the axis' scalar type. Positive angles rotate
    counter-clockwise when looking down the axis towards the origin
    (right-hand rule).
    """
    angle: T
    axis: FrameVector[T, F]

    def __post_init__(self):
        if not isinstance(self.axis, FrameVector):
            raise TypeError(f"Rotation axis must be a FrameVector, got {type(self.axis).__name__}")
        object.__setattr__(self, "angle", self.axis.dtype(self.angle))

    @classmethod
    def about(cls, angle: Scalar, axis: FrameVector[T, F]) -> PointRotation[T, F]:
        """
        Build a rotation with the axis normalized first.

        :raises InvalidAxisError: if the axis has zero length.
        """
        try:
            unit_axis = axis.normalize()
        except InvalidVectorError as e:
            raise InvalidAxisError(f"Rotation axis {axis!r} has zero length") from e
        return cls(unit_axis.dtype(angle), unit_axis)

    @property
    def frame(self):
        return self.axis.frame

    @property
    def dtype(self):
        return self.axis.dtype

    def inverse(self) -> PointRotation[T, F]:
        return PointRotation(-self.angle, self.axis)

    def __call__(self, vector: FrameVector[T, F]) -> FrameVector[T, F]:
        return transform(self, vector)


def transform(rotation: PointRotation[T, F], vector: FrameVector[T, F]) -> FrameVector[T, F]:
    """
    Rotate ``vector`` with Rodrigues' rotation formula.

        v' = v cos(a) + (k x v) sin(a) + k (k . v)(1 - cos(a))

    :param rotation: rotation with unit axis ``k`` and angle ``a``
    :param vector: vector in the same frame and scalar type as the rotation
    :return: rotated vector
    :raises FrameMismatchError: if the vector's frame or scalar type differs
        from the rotation's.
    """
    _require_compatible(rotation, vector)
    axis = rotation.axis
    cos_a = np.cos(rotation.angle)
    sin_a = np.sin(rotation.angle)
    return (
        vector.scale(cos_a)
        .add(axis.cross(vector).scale(sin_a))
        .add(axis.scale(axis.dot(vector) * (1 - cos_a)))
    )


def _require_compatible(rotation: PointRotation[Any, Any], vector: Any) -> None:
    expected = f"FrameVector[{np.dtype(rotation.dtype).name}, {rotation.frame.__name__}]"
    if not isinstance(vector, FrameVector):
        raise FrameMismatchError("transform", expected, type(vector).__name__)
    if vector.frame is not rotation.frame or vector.dtype is not rotation.dtype:
        raise FrameMismatchError("transform", expected, vector.type_name)
