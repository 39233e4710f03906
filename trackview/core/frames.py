"""Coordinate frame markers.

A frame is never instantiated. Vectors and rotations carry the marker class
itself so that values from different coordinate systems cannot be combined.
"""
from __future__ import annotations


class Frame:
    """Base class for coordinate frame markers."""

    __slots__ = ()

    def __new__(cls, *args, **kwargs):
        raise TypeError(f"{cls.__name__} is a frame marker and cannot be instantiated.")


class World(Frame):
    """The scene coordinate system."""

    __slots__ = ()


class CameraLocal(Frame):
    """Coordinates relative to the camera."""

    __slots__ = ()


def frame_name(frame: type[Frame]) -> str:
    return frame.__name__
