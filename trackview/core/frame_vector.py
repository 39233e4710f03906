"""Frame-tagged 3D vectors.

A ``FrameVector`` is parameterized by its scalar type (``numpy.float32`` or
``numpy.float64``) and by the coordinate frame it lives in. Both parameters
are part of the static type, so a type checker rejects mixing vectors from
different frames or precisions. Each instance also records its frame and
dtype, and binary operations refuse operands that do not match exactly.
"""
from __future__ import annotations

import numbers
from typing import Any, Generic, Iterable, Iterator, TypeVar, Union

import numpy as np

from trackview.core.errors import FrameMismatchError, InvalidVectorError
from trackview.core.frames import Frame, frame_name

T = TypeVar("T", np.float32, np.float64)
F = TypeVar("F", bound=Frame)

Scalar = Union[float, int, np.floating]

SUPPORTED_DTYPES: tuple[type[np.floating], ...] = (np.float32, np.float64)


def _check_dtype(dtype: Any) -> type[np.floating]:
    for supported in SUPPORTED_DTYPES:
        if dtype is supported:
            return supported
    raise TypeError(f"Unsupported scalar type: {dtype!r}. Use numpy.float32 or numpy.float64.")


def _check_frame(frame: Any) -> type[Frame]:
    if not (isinstance(frame, type) and issubclass(frame, Frame)):
        raise TypeError(f"Frame must be a Frame subclass, got {frame!r}")
    return frame


class FrameVector(Generic[T, F]):
    """Immutable 3D vector tagged with a scalar type and a coordinate frame."""

    __slots__ = ("_data", "_frame")

    def __init__(self, x: Scalar, y: Scalar, z: Scalar, *, frame: type[F], dtype: type[T] = np.float32) -> None:  # type: ignore[assignment]
        data = np.array((x, y, z), dtype=_check_dtype(dtype))
        data.flags.writeable = False
        object.__setattr__(self, "_data", data)
        object.__setattr__(self, "_frame", _check_frame(frame))

    @classmethod
    def _wrap(cls, data: np.ndarray, frame: type[F]) -> FrameVector[T, F]:
        """Build a vector around an already computed array without copying."""
        obj = object.__new__(cls)
        data.flags.writeable = False
        object.__setattr__(obj, "_data", data)
        object.__setattr__(obj, "_frame", frame)
        return obj

    @classmethod
    def from_iterable(cls, values: Iterable[Scalar], *, frame: type[F], dtype: type[T]) -> FrameVector[T, F]:
        x, y, z = values
        return cls(x, y, z, frame=frame, dtype=dtype)

    @classmethod
    def zeros(cls, *, frame: type[F], dtype: type[T]) -> FrameVector[T, F]:
        return cls(0.0, 0.0, 0.0, frame=frame, dtype=dtype)

    @classmethod
    def unit_x(cls, *, frame: type[F], dtype: type[T]) -> FrameVector[T, F]:
        return cls(1.0, 0.0, 0.0, frame=frame, dtype=dtype)

    @classmethod
    def unit_y(cls, *, frame: type[F], dtype: type[T]) -> FrameVector[T, F]:
        return cls(0.0, 1.0, 0.0, frame=frame, dtype=dtype)

    @classmethod
    def unit_z(cls, *, frame: type[F], dtype: type[T]) -> FrameVector[T, F]:
        return cls(0.0, 0.0, 1.0, frame=frame, dtype=dtype)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def x(self) -> T:
        return self._data[0]

    @property
    def y(self) -> T:
        return self._data[1]

    @property
    def z(self) -> T:
        return self._data[2]

    @property
    def frame(self) -> type[F]:
        return self._frame

    @property
    def dtype(self) -> type[T]:
        return self._data.dtype.type

    @property
    def type_name(self) -> str:
        return f"FrameVector[{self._data.dtype.name}, {frame_name(self._frame)}]"

    def as_array(self) -> np.ndarray:
        """Return the underlying components array. It is read-only and shared, not a copy."""
        return self._data

    def to_tuple(self) -> tuple[float, float, float]:
        return float(self._data[0]), float(self._data[1]), float(self._data[2])

    def __iter__(self) -> Iterator[T]:
        return iter(self._data)

    def __len__(self) -> int:
        return 3

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------
    def _require_same_type(self, other: Any, operation: str) -> None:
        if not isinstance(other, FrameVector):
            raise FrameMismatchError(operation, self.type_name, type(other).__name__)
        if other._frame is not self._frame or other._data.dtype != self._data.dtype:
            raise FrameMismatchError(operation, self.type_name, other.type_name)

    def _cast_scalar(self, scalar: Any, operation: str) -> T:
        if isinstance(scalar, FrameVector) or not isinstance(scalar, numbers.Real):
            raise TypeError(f"{operation}: expected a real scalar, got {type(scalar).__name__}")
        return self._data.dtype.type(scalar)

    def add(self, other: FrameVector[T, F]) -> FrameVector[T, F]:
        self._require_same_type(other, "add")
        return self._wrap(self._data + other._data, self._frame)

    def subtract(self, other: FrameVector[T, F]) -> FrameVector[T, F]:
        self._require_same_type(other, "subtract")
        return self._wrap(self._data - other._data, self._frame)

    def scale(self, scalar: Scalar) -> FrameVector[T, F]:
        factor = self._cast_scalar(scalar, "scale")
        return self._wrap(self._data * factor, self._frame)

    def negate(self) -> FrameVector[T, F]:
        return self._wrap(-self._data, self._frame)

    def dot(self, other: FrameVector[T, F]) -> T:
        self._require_same_type(other, "dot")
        a, b = self._data, other._data
        return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]

    def cross(self, other: FrameVector[T, F]) -> FrameVector[T, F]:
        self._require_same_type(other, "cross")
        a, b = self._data, other._data
        data = np.array(
            (
                a[1] * b[2] - a[2] * b[1],
                a[2] * b[0] - a[0] * b[2],
                a[0] * b[1] - a[1] * b[0],
            ),
            dtype=self._data.dtype,
        )
        return self._wrap(data, self._frame)

    def norm(self) -> T:
        """Euclidean length."""
        return np.sqrt(self.dot(self))

    def normalize(self) -> FrameVector[T, F]:
        """
        Return the unit vector pointing in the same direction.

        :raises InvalidVectorError: if the vector has zero (or non-finite) length.
        """
        length = self.norm()
        if length == 0 or not np.isfinite(length):
            raise InvalidVectorError(f"Cannot normalize {self!r}: length is {length}")
        return self._wrap(self._data / length, self._frame)

    def is_unit(self, atol: float = 1e-5) -> bool:
        return abs(float(self.norm()) - 1.0) <= atol

    def __add__(self, other: FrameVector[T, F]) -> FrameVector[T, F]:
        if not isinstance(other, FrameVector):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: FrameVector[T, F]) -> FrameVector[T, F]:
        if not isinstance(other, FrameVector):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, scalar: Scalar) -> FrameVector[T, F]:
        if isinstance(scalar, FrameVector) or not isinstance(scalar, numbers.Real):
            return NotImplemented
        return self.scale(scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: Scalar) -> FrameVector[T, F]:
        if isinstance(scalar, FrameVector) or not isinstance(scalar, numbers.Real):
            return NotImplemented
        return self._wrap(self._data / self._cast_scalar(scalar, "divide"), self._frame)

    def __neg__(self) -> FrameVector[T, F]:
        return self.negate()

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FrameVector):
            return NotImplemented
        return (
            other._frame is self._frame
            and other._data.dtype == self._data.dtype
            and bool(np.array_equal(self._data, other._data))
        )

    def __hash__(self) -> int:
        return hash((self._frame, self._data.dtype.name, self.to_tuple()))

    def isclose(self, other: FrameVector[T, F], rtol: float = 1e-5, atol: float = 1e-6) -> bool:
        """Component-wise comparison within floating tolerance."""
        self._require_same_type(other, "isclose")
        return bool(np.allclose(self._data, other._data, rtol=rtol, atol=atol))

    def __repr__(self) -> str:
        x, y, z = self.to_tuple()
        return f"{self.type_name}({x!r}, {y!r}, {z!r})"


def dot(a: FrameVector[T, F], b: FrameVector[T, F]) -> T:
    return a.dot(b)


def cross(a: FrameVector[T, F], b: FrameVector[T, F]) -> FrameVector[T, F]:
    return a.cross(b)


def norm(v: FrameVector[T, F]) -> T:
    return v.norm()


def normalize(v: FrameVector[T, F]) -> FrameVector[T, F]:
    return v.normalize()
