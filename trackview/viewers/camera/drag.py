"""Trackball drag handling: pointer drag events -> new CameraView."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Union

from trackview.core.rotation import PointRotation, transform
from trackview.core.frame_vector import F, T
from trackview.viewers.camera.camera_view import CameraView

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DragStart:
    """The pointer was pressed."""


@dataclass(frozen=True)
class DragPosition:
    """
    The pointer moved while pressed.

    dx is the horizontal delta, dy the vertical delta, both normally in [-1, 1].
    """
    dx: float
    dy: float


@dataclass(frozen=True)
class DragEnd:
    """The pointer was released."""


DragEvent = Union[DragStart, DragPosition, DragEnd]


def on_drag(
        view: CameraView[T, F],
        event: DragEvent,
        *,
        angle_scale: float = math.pi,
        renormalize: bool = False,
) -> CameraView[T, F]:
    """
    Return the camera view after a drag event.

    Start and end events return ``view`` unchanged. A position event rotates
    direction and up twice, in this order:

    1. by ``dy * angle_scale`` about ``right`` of the incoming view,
    2. by ``dx * angle_scale`` about ``up`` of the incoming view.

    The two rotations are applied one after the other, not combined into a
    single rotation, so large simultaneous dx/dy depend on this order.

    :param view: current camera view
    :param event: drag event from the input layer
    :param angle_scale: radians per unit of drag
    :param renormalize: normalize the right axis before rotating and
        orthonormalize the result. Changes output compared to the default.
    :return: new camera view
    """
    if isinstance(event, (DragStart, DragEnd)):
        return view
    if not isinstance(event, DragPosition):
        raise TypeError(f"Unsupported drag event: {event!r}")

    # Horizontal drag turns around `up`, vertical drag around `right`.
    up_angle = event.dx * angle_scale
    right_angle = event.dy * angle_scale

    right_axis = view.right
    if renormalize:
        right_axis = right_axis.normalize()

    around_right = PointRotation(right_angle, right_axis)
    around_up = PointRotation(up_angle, view.up)

    new_direction = transform(around_up, transform(around_right, view.direction))
    new_up = transform(around_up, transform(around_right, view.up))

    result = CameraView(new_direction, new_up)
    if renormalize:
        result = result.orthonormalized()

    logger.debug("drag dx=%.4f dy=%.4f -> direction=%s up=%s",
                 event.dx, event.dy, result.direction, result.up)
    return result
