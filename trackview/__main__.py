# NOTE:
# Startup logging must be set up before anything else is imported so that
#  import-time failures end up in the log file.

from trackview.app.logging_setup import setup_startup_logging

setup_startup_logging(app_name="trackview")

import logging
import sys

import vtk

from trackview.app.app_settings_manager import AppSettingsManager
from trackview.app.logging_setup import LogSystem, apply_logging_policy
from trackview.utils import vtk_helpers
from trackview.viewers.camera.camera_controller import CameraController
from trackview.viewers.camera.camera_state import CameraStateManager
from trackview.viewers.interactor_styles.trackball_interactor_style import TrackballInteractorStyle

logger = logging.getLogger(__name__)


def main() -> int:
    logs = LogSystem("trackview")
    try:
        settings_mgr = AppSettingsManager()
        apply_logging_policy(logs, settings_mgr)
        logger.info("App start (settings=%s)", settings_mgr.to_dict())

        renderer = vtk.vtkRenderer()
        renderer.SetBackground(0.2, 0.3, 0.3)
        cube = vtk_helpers.make_cube_actor()
        renderer.AddActor(cube)
        renderer.AddActor(vtk_helpers.make_axes_actor())

        render_window = vtk.vtkRenderWindow()
        render_window.SetSize(640, 480)
        render_window.SetWindowName("trackview")
        render_window.AddRenderer(renderer)

        interactor = vtk.vtkRenderWindowInteractor()
        interactor.SetRenderWindow(render_window)

        state = CameraStateManager.from_settings(settings_mgr)
        controller = CameraController(renderer.GetActiveCamera(), renderer, state)
        controller.reset_to_bounds(cube.GetBounds(), state.view)

        style = TrackballInteractorStyle(state)
        interactor.SetInteractorStyle(style)
        interactor.Initialize()
        render_window.Render()
        interactor.Start()
        logger.info("App exit")
        return 0
    finally:
        logs.stop()


if __name__ == "__main__":
    sys.exit(main())
