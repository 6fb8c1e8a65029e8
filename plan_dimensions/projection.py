"""
Orthographic projections onto the three construction planes.

The engine accepts any ``Point3 -> Point2`` callable; these are the ones
the plan and elevation views use. Each plane is a 2x3 matrix whose rows
are the drawing's horizontal and vertical axes in world coordinates.
"""

from typing import Callable, Dict, List, Sequence

import numpy as np

from plan_dimensions.geometry.vectors import Point2, Point3, as_point

Projection = Callable[[Point3], Point2]

PLANE_MATRICES: Dict[str, np.ndarray] = {
    # plan view: world x right, world y up
    "xy": np.array([
        [1, 0, 0],
        [0, 1, 0],
    ], dtype=float),
    # wall elevation: world x right, height up
    "xz": np.array([
        [1, 0, 0],
        [0, 0, 1],
    ], dtype=float),
    # side elevation
    "yz": np.array([
        [0, 1, 0],
        [0, 0, 1],
    ], dtype=float),
}


def project(plane: str) -> Projection:
    """Return the orthographic projection for ``plane``.

    Args:
        plane: one of 'xy', 'xz', 'yz'.

    Raises:
        ValueError: for any other plane name.
    """
    try:
        matrix = PLANE_MATRICES[plane]
    except KeyError:
        raise ValueError(f"Unknown plane: {plane!r} (expected one of {sorted(PLANE_MATRICES)})") from None

    def _projection(point: Point3) -> Point2:
        return as_point(matrix @ np.asarray(point, dtype=float))

    return _projection


def bounds_corners_2d(
    bounds_min: Sequence[float],
    bounds_max: Sequence[float],
    projection: Projection,
) -> List[Point2]:
    """Project the 8 corners of an axis-aligned box and return the 2D
    bounding rectangle as four corners (counter-clockwise from min).

    Used to turn cuboid areas into reference polygon points.
    """
    lo = np.asarray(bounds_min, dtype=float)
    hi = np.asarray(bounds_max, dtype=float)
    corners = [
        (x, y, z)
        for x in (lo[0], hi[0])
        for y in (lo[1], hi[1])
        for z in (lo[2], hi[2])
    ]
    projected = np.array([projection(c) for c in corners], dtype=float)
    x_min, y_min = projected.min(axis=0)
    x_max, y_max = projected.max(axis=0)
    return [
        (float(x_min), float(y_min)),
        (float(x_max), float(y_min)),
        (float(x_max), float(y_max)),
        (float(x_min), float(y_max)),
    ]
