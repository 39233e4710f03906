from __future__ import annotations

import logging

import numpy as np
import vtk

from trackview.core.errors import InvalidVectorError
from trackview.core.frame_vector import FrameVector
from trackview.core.frames import World
from trackview.utils import vtk_helpers
from trackview.utils.log_util import log_io
from trackview.viewers.camera.camera_state import CameraStateManager
from trackview.viewers.camera.camera_view import CameraView

logger = logging.getLogger(__name__)


def camera_position(
        view: CameraView,
        focal_point: tuple[float, float, float],
        distance: float,
) -> tuple[float, float, float]:
    """
    Position of a camera looking along ``view.direction`` at ``focal_point``.

    :raises InvalidVectorError: if the view direction has zero length.
    """
    d = view.direction.normalize().to_tuple()
    return tuple(focal_point[i] - d[i] * distance for i in range(3))


class CameraController:
    """Applies CameraView values to a VTK camera."""

    def __init__(self,
                 camera: vtk.vtkCamera,
                 renderer: vtk.vtkRenderer,
                 state: CameraStateManager | None = None) -> None:
        self.camera = camera
        self.renderer = renderer
        self.state = state
        if state is not None:
            state.add_view_changed_callback(self.on_view_changed)

    def detach(self) -> None:
        """Stop following the camera state manager."""
        if self.state is None:
            return
        self.state.remove_view_changed_callback(self.on_view_changed)
        self.state = None

    @log_io()
    def apply_view(self, view: CameraView) -> bool:
        """
        Orient the VTK camera to ``view``, keeping focal point and distance.

        :return: False if the view is degenerate and the camera was left as is.
        """
        fp = self.camera.GetFocalPoint()
        distance = self.get_distance()
        try:
            position = camera_position(view, fp, distance)
        except InvalidVectorError:
            logger.warning("Camera direction has zero length. Aborting apply_view().")
            return False

        self.camera.SetPosition(*position)
        self.camera.SetFocalPoint(*fp)
        self.camera.SetViewUp(*view.up.to_tuple())
        self.camera.OrthogonalizeViewUp()
        self.renderer.ResetCameraClippingRange()
        return True

    def on_view_changed(self, view: CameraView) -> None:
        """View changed callback: apply and render."""
        if self.apply_view(view):
            render_window = self.renderer.GetRenderWindow()
            if render_window is not None:
                render_window.Render()

    def view_from_camera(self, dtype: type[np.floating] = np.float64) -> CameraView:
        """
        Read the VTK camera orientation back as a world frame CameraView.

        :raises InvalidVectorError: if position and focal point coincide.
        """
        pos = self.camera.GetPosition()
        fp = self.camera.GetFocalPoint()
        direction = FrameVector(fp[0] - pos[0], fp[1] - pos[1], fp[2] - pos[2],
                                frame=World, dtype=dtype).normalize()
        up = FrameVector.from_iterable(self.camera.GetViewUp(), frame=World, dtype=dtype)
        return CameraView(direction, up)

    @log_io()
    def reset_to_bounds(self,
                        bounds: tuple[float, float, float, float, float, float],
                        view: CameraView | None = None) -> None:
        """Center the camera on ``bounds`` at twice their largest extent."""
        center = vtk_helpers.bounds_center(bounds)
        max_dim = max(
            bounds[1] - bounds[0],
            bounds[3] - bounds[2],
            bounds[5] - bounds[4],
        )
        distance = 2.0 * max_dim if max_dim > 0 else 1.0

        if view is None:
            view = CameraView.default(World, np.float64)

        self.camera.SetFocalPoint(*center)
        self.camera.SetPosition(*camera_position(view, center, distance))
        self.camera.SetViewUp(*view.up.to_tuple())
        self.renderer.ResetCameraClippingRange()

    def get_position(self) -> tuple[float, float, float]:
        """Get the current camera position."""
        return tuple(self.camera.GetPosition())

    def get_focal_point(self) -> tuple[float, float, float]:
        """Get the current camera focal point."""
        return tuple(self.camera.GetFocalPoint())

    def get_view_up(self) -> tuple[float, float, float]:
        """Get the current camera view up vector."""
        return tuple(self.camera.GetViewUp())

    def get_distance(self) -> float:
        """Get the distance between the camera position and focal point."""
        return vtk_helpers.calculate_distance(self.camera.GetFocalPoint(), self.camera.GetPosition())
