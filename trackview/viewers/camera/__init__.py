"""Camera orientation and trackball drag handling (VTK independent)."""

from trackview.viewers.camera.camera_view import CameraView, direction, right, up
from trackview.viewers.camera.drag import DragEnd, DragEvent, DragPosition, DragStart, on_drag
from trackview.viewers.camera.camera_state import CameraStateManager

__all__ = [
    "CameraStateManager",
    "CameraView",
    "DragEnd",
    "DragEvent",
    "DragPosition",
    "DragStart",
    "direction",
    "on_drag",
    "right",
    "up",
]
