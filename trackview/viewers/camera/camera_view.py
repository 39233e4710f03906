"""Camera orientation as an immutable direction/up pair."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic

from trackview.core.errors import FrameMismatchError
from trackview.core.frame_vector import F, FrameVector, T


@dataclass(frozen=True)
class CameraView(Generic[T, F]):
    """
    Orientation of the camera: where it looks and which way is up.

    Both vectors are expected to stay unit length and non-parallel. They
    are not re-normalized after rotations, so floating point drift can
    accumulate over many drags. Call :meth:`orthonormalized` to correct it.
    """
    direction: FrameVector[T, F]
    up: FrameVector[T, F]

    def __post_init__(self):
        if (self.up.frame is not self.direction.frame
                or self.up.dtype is not self.direction.dtype):
            raise FrameMismatchError("CameraView", self.direction.type_name, self.up.type_name)

    @classmethod
    def default(cls, frame: type[F], dtype: type[T]) -> CameraView[T, F]:
        """Looking down -Z with +Y up."""
        return cls(
            FrameVector(0.0, 0.0, -1.0, frame=frame, dtype=dtype),
            FrameVector(0.0, 1.0, 0.0, frame=frame, dtype=dtype),
        )

    @property
    def frame(self) -> type[F]:
        return self.direction.frame

    @property
    def dtype(self) -> type[T]:
        return self.direction.dtype

    @property
    def right(self) -> FrameVector[T, F]:
        """``direction x up``, not normalized."""
        return self.direction.cross(self.up)

    def orthonormalized(self) -> CameraView[T, F]:
        """Return the view with unit, mutually orthogonal direction and up."""
        d = self.direction.normalize()
        r = d.cross(self.up).normalize()
        return CameraView(d, r.cross(d))

    def isclose(self, other: CameraView[T, F], rtol: float = 1e-5, atol: float = 1e-6) -> bool:
        return (self.direction.isclose(other.direction, rtol=rtol, atol=atol)
                and self.up.isclose(other.up, rtol=rtol, atol=atol))


def direction(view: CameraView[T, F]) -> FrameVector[T, F]:
    return view.direction


def up(view: CameraView[T, F]) -> FrameVector[T, F]:
    return view.up


def right(view: CameraView[T, F]) -> FrameVector[T, F]:
    return view.right
