import math

import vtk


def calculate_distance(
        start_point: tuple[float, float, float],
        end_point: tuple[float, float, float]
) -> float:
    """
    Calculate the distance between two points.

    :param start_point: Starting point (x, y, z)
    :param end_point: Ending point (x, y, z)
    :return: Distance between the two points
    """
    dx = end_point[0] - start_point[0]
    dy = end_point[1] - start_point[1]
    dz = end_point[2] - start_point[2]
    return math.sqrt(dx*dx + dy*dy + dz*dz)


def bounds_center(bounds: tuple[float, float, float, float, float, float]) -> tuple[float, float, float]:
    return (
        0.5 * (bounds[0] + bounds[1]),
        0.5 * (bounds[2] + bounds[3]),
        0.5 * (bounds[4] + bounds[5]),
    )


def make_cube_actor(size: float = 1.0) -> vtk.vtkActor:
    """Unit cube centered at the origin, drawn with visible edges."""
    source = vtk.vtkCubeSource()
    source.SetXLength(size)
    source.SetYLength(size)
    source.SetZLength(size)

    mapper = vtk.vtkPolyDataMapper()
    mapper.SetInputConnection(source.GetOutputPort())

    actor = vtk.vtkActor()
    actor.SetMapper(mapper)
    actor.GetProperty().SetColor(0.3, 0.6, 0.9)
    actor.GetProperty().EdgeVisibilityOn()
    return actor


def make_axes_actor() -> vtk.vtkAxesActor:
    axes = vtk.vtkAxesActor()
    axes.SetTotalLength(0.8, 0.8, 0.8)
    return axes
