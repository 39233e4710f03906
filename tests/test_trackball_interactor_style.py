import numpy as np
import pytest

from trackview.core.frames import World
from trackview.viewers.camera.camera_state import CameraStateManager
from trackview.viewers.camera.camera_view import CameraView
from trackview.viewers.camera.drag import DragPosition, on_drag
from trackview.viewers.interactor_styles.trackball_interactor_style import (
    TrackballInteractorStyle,
    normalized_delta,
)


class FakeRenderWindow:
    def GetSize(self):
        return 200, 100


class FakeInteractor:
    def __init__(self):
        self.position = (0, 0)
        self.window = FakeRenderWindow()

    def GetEventPosition(self):
        return self.position

    def GetRenderWindow(self):
        return self.window


class StyleUnderTest(TrackballInteractorStyle):
    def __init__(self, camera_state, interactor):
        super().__init__(camera_state)
        self.fake_interactor = interactor

    def GetInteractor(self):
        return self.fake_interactor


@pytest.mark.parametrize("pixels, size, expected", [
    ((50, -25), (200, 100), (0.25, -0.25)),
    ((0, 0), (200, 100), (0.0, 0.0)),
    ((500, -300), (200, 100), (1.0, -1.0)),
    ((10, 10), (0, 0), (0.0, 0.0)),
])
def test_normalized_delta(pixels, size, expected):
    assert normalized_delta(*pixels, *size) == pytest.approx(expected)


def test_left_drag_produces_drag_events():
    camera_state = CameraStateManager(CameraView.default(World, np.float32))
    interactor = FakeInteractor()
    style = StyleUnderTest(camera_state, interactor)

    interactor.position = (100, 50)
    style.on_left_button_down(None, "LeftButtonPressEvent")
    assert style.dragging
    assert camera_state.dragging

    interactor.position = (150, 50)
    style.on_mouse_move(None, "MouseMoveEvent")

    interactor.position = (150, 50)
    style.on_left_button_up(None, "LeftButtonReleaseEvent")

    assert not style.dragging
    assert not camera_state.dragging
    expected = on_drag(CameraView.default(World, np.float32), DragPosition(0.25, 0.0))
    assert camera_state.view == expected


def test_mouse_move_without_button_does_nothing():
    camera_state = CameraStateManager(CameraView.default(World, np.float32))
    interactor = FakeInteractor()
    style = StyleUnderTest(camera_state, interactor)

    interactor.position = (150, 80)
    style.on_mouse_move(None, "MouseMoveEvent")
    style.on_left_button_up(None, "LeftButtonReleaseEvent")

    assert camera_state.view == CameraView.default(World, np.float32)
