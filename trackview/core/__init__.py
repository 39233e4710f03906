"""Core math layer - frame-tagged vectors and rotations, independent of VTK/Qt."""

from trackview.core.errors import (
    FrameMismatchError,
    InvalidAxisError,
    InvalidVectorError,
    TrackviewError,
)
from trackview.core.frames import CameraLocal, Frame, World
from trackview.core.frame_vector import FrameVector, cross, dot, norm, normalize
from trackview.core.rotation import PointRotation, transform

__all__ = [
    "CameraLocal",
    "Frame",
    "FrameMismatchError",
    "FrameVector",
    "InvalidAxisError",
    "InvalidVectorError",
    "PointRotation",
    "TrackviewError",
    "World",
    "cross",
    "dot",
    "norm",
    "normalize",
    "transform",
]
