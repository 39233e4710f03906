from __future__ import annotations

from vtkmodules.vtkInteractionStyle import vtkInteractorStyleTrackballCamera

from trackview.viewers.camera.camera_state import CameraStateManager
from trackview.viewers.camera.drag import DragEnd, DragPosition, DragStart


def _clamp(v: float) -> float:
    return max(-1.0, min(1.0, v))


def normalized_delta(dx_px: int, dy_px: int, width: int, height: int) -> tuple[float, float]:
    """
    Convert a pointer delta in pixels to drag units.

    A drag across the full width (or height) of the window is 1.0. Results
    are clamped to [-1, 1]; a zero sized window gives 0.
    """
    dx = _clamp(dx_px / width) if width > 0 else 0.0
    dy = _clamp(dy_px / height) if height > 0 else 0.0
    return dx, dy


class TrackballInteractorStyle(vtkInteractorStyleTrackballCamera):
    """Left-button drags are turned into drag events for a CameraStateManager."""

    def __init__(self, camera_state: CameraStateManager):
        super().__init__()
        self.camera_state = camera_state
        self._last_pos: tuple[int, int] | None = None

        self.RemoveObservers("LeftButtonPressEvent")
        self.AddObserver("LeftButtonPressEvent", self.on_left_button_down)
        self.RemoveObservers("LeftButtonReleaseEvent")
        self.AddObserver("LeftButtonReleaseEvent", self.on_left_button_up)
        self.RemoveObservers("MouseMoveEvent")
        self.AddObserver("MouseMoveEvent", self.on_mouse_move)

    @property
    def dragging(self) -> bool:
        return self._last_pos is not None

    def on_left_button_down(self, obj, event):
        iren = self.GetInteractor()
        self._last_pos = tuple(iren.GetEventPosition())
        self.camera_state.handle(DragStart())

    def on_mouse_move(self, obj, event):
        if self._last_pos is None:
            return
        iren = self.GetInteractor()
        x, y = iren.GetEventPosition()
        lx, ly = self._last_pos
        width, height = iren.GetRenderWindow().GetSize()
        dx, dy = normalized_delta(x - lx, y - ly, width, height)
        self._last_pos = (x, y)
        self.camera_state.handle(DragPosition(dx, dy))

    def on_left_button_up(self, obj, event):
        if self._last_pos is None:
            return
        self._last_pos = None
        self.camera_state.handle(DragEnd())
