"""Camera state management separated from UI concerns."""
from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Callable

from trackview.core.errors import TrackviewError
from trackview.core.frames import Frame, World
from trackview.viewers.camera.camera_view import CameraView
from trackview.viewers.camera.drag import DragEnd, DragEvent, DragPosition, DragStart, on_drag

if TYPE_CHECKING:
    from trackview.app.app_settings_manager import AppSettingsManager

logger = logging.getLogger(__name__)


class CameraStateManager:
    """
    Holds the current camera view and feeds drag events through it.

    Responsible for:
    - Tracking the current CameraView and whether a drag is in progress.
    - Callbacks for view changes.
    - Don't have concerns about UI or VTK.
    """

    def __init__(self,
                 view: CameraView,
                 *,
                 angle_scale: float = math.pi,
                 renormalize: bool = False) -> None:
        self._initial_view: CameraView = view
        self._view: CameraView = view
        self._dragging: bool = False
        self.angle_scale = angle_scale
        self.renormalize = renormalize
        self._on_view_changed_callbacks: list[Callable[[CameraView], None]] = []

    @classmethod
    def from_settings(cls, settings: AppSettingsManager, frame: type[Frame] = World) -> CameraStateManager:
        """Create a manager with the default view and the trackball settings."""
        view = CameraView.default(frame, settings.scalar_type)
        return cls(view, angle_scale=settings.angle_scale, renormalize=settings.renormalize)

    @property
    def view(self) -> CameraView:
        """Get current camera view."""
        return self._view

    @property
    def dragging(self) -> bool:
        """True between a DragStart and the following DragEnd."""
        return self._dragging

    def set_view(self, view: CameraView) -> None:
        """Replace the current view and notify callbacks if it changed."""
        if view == self._view:
            return
        self._view = view
        self._notify_view_changed()

    def handle(self, event: DragEvent) -> CameraView:
        """
        Apply a drag event to the current view.

        Position events outside a drag are ignored. If the update fails
        (e.g. a degenerate vector), the previous view is kept.

        :param event: drag event from the input layer
        :return: the current view after the event
        """
        if isinstance(event, DragStart):
            if self._dragging:
                logger.debug("Drag start received while already dragging")
            self._dragging = True
        elif isinstance(event, DragEnd):
            self._dragging = False
        elif isinstance(event, DragPosition):
            if not self._dragging:
                logger.debug(f"Ignoring drag position outside a drag: {event}")
                return self._view
            try:
                new_view = on_drag(self._view, event,
                                   angle_scale=self.angle_scale,
                                   renormalize=self.renormalize)
            except TrackviewError:
                logger.exception("Camera drag update failed; keeping previous view")
                return self._view
            self.set_view(new_view)
        else:
            raise TypeError(f"Unsupported drag event: {event!r}")
        return self._view

    def reset(self) -> None:
        """Return to the initial view and end any drag in progress."""
        self._dragging = False
        self.set_view(self._initial_view)
        logger.debug("Camera state reset")

    def add_view_changed_callback(self, callback: Callable[[CameraView], None]) -> None:
        """
        Add a callback for camera view changes.

        Callback signature: callback(view: CameraView) -> None
        """
        self._on_view_changed_callbacks.append(callback)

    def remove_view_changed_callback(self, callback: Callable[[CameraView], None]) -> None:
        """Remove a callback for camera view changes."""
        self._on_view_changed_callbacks.remove(callback)

    def _notify_view_changed(self) -> None:
        """Notify callbacks of camera view changes."""
        for callback in self._on_view_changed_callbacks:
            try:
                callback(self._view)
            except Exception as e:
                logger.exception(f"Error in view changed callback: {e}")
