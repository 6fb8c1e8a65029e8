"""
2D vector helpers used by the layout stages.

Points travel through the package as plain tuples; numpy is used for the
arithmetic and results are converted back with :func:`as_point`.
"""

from typing import Iterable, Sequence, Tuple

import numpy as np
from numpy.linalg import norm

from plan_dimensions.config import DIRECTION_TOLERANCE
from plan_dimensions.errors import DegenerateMeasurementError

Point2 = Tuple[float, float]
Point3 = Tuple[float, float, float]


def as_point(v: Sequence[float]) -> Point2:
    """Convert an array-like to a plain (x, y) tuple."""
    return (float(v[0]), float(v[1]))


def direction(source: Sequence[float], target: Sequence[float]) -> np.ndarray:
    """Unit vector from ``source`` to ``target``.

    Raises:
        DegenerateMeasurementError: If both points coincide.
    """
    delta = np.asarray(target, dtype=float)[:2] - np.asarray(source, dtype=float)[:2]
    length = norm(delta)
    if length == 0.0:
        raise DegenerateMeasurementError(f"Zero-length vector from {tuple(source)} to {tuple(target)}")
    return delta / length


def perpendicular_ccw(v: Sequence[float]) -> np.ndarray:
    """Rotate 90 degrees counter-clockwise."""
    return np.array([-float(v[1]), float(v[0])])


def is_canonical(d: Sequence[float], tolerance: float = DIRECTION_TOLERANCE) -> bool:
    """True if unit vector ``d`` points along x > 0, or along y > 0 when
    its x component is within ``tolerance`` of zero.
    """
    if abs(d[0]) < tolerance:
        return d[1] > 0
    return d[0] > 0


def canonical_direction(v: Sequence[float], tolerance: float = DIRECTION_TOLERANCE) -> Point2:
    """Normalise ``v`` and flip it so that x > 0, or x ~ 0 and y > 0.

    Anti-parallel vectors map to the same result. An x component within
    ``tolerance`` of zero counts as zero, so near-vertical vectors whose
    round-off differs in sign still agree.

    Raises:
        DegenerateMeasurementError: For the zero vector.
    """
    d = direction((0.0, 0.0), v)
    if not is_canonical(d, tolerance):
        d = -d
    # +0.0 turns -0.0 into 0.0
    return (float(d[0]) + 0.0, float(d[1]) + 0.0)


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    return float(norm(np.asarray(b, dtype=float)[:2] - np.asarray(a, dtype=float)[:2]))


def project_point_onto_line(
    point: Sequence[float],
    line_point: Sequence[float],
    line_dir: Sequence[float],
) -> Point2:
    """Orthogonal projection of ``point`` onto the infinite line."""
    origin = np.asarray(line_point, dtype=float)
    d = np.asarray(line_dir, dtype=float)
    t = float(np.dot(np.asarray(point, dtype=float) - origin, d))
    return as_point(origin + t * d)


def line_parameter(
    point: Sequence[float],
    line_point: Sequence[float],
    line_dir: Sequence[float],
) -> float:
    """Signed position of ``point`` along the line, measured from ``line_point``."""
    return float(np.dot(np.asarray(point, dtype=float) - np.asarray(line_point, dtype=float),
                        np.asarray(line_dir, dtype=float)))


def distance_to_infinite_line(
    point: Sequence[float],
    line_point: Sequence[float],
    line_dir: Sequence[float],
) -> float:
    """Unsigned perpendicular distance from ``point`` to the line (unit ``line_dir``)."""
    v = np.asarray(point, dtype=float) - np.asarray(line_point, dtype=float)
    d = np.asarray(line_dir, dtype=float)
    return float(abs(v[0] * d[1] - v[1] * d[0]))


def bounds_lines(direction_2d: Sequence[float], points: Iterable[Sequence[float]]) -> Tuple[Point2, Point2]:
    """Two anchor points bounding ``points`` across ``direction_2d``.

    The returned points lie on the two lines parallel to the direction that
    touch the point set on its low and high side of the CCW normal. Both
    anchors sit at the minimum extent along the direction, so ``t`` values
    measured from either anchor agree.

    Returns:
        (left, right); coincident when the set has no perpendicular extent.
    """
    pts = np.asarray(list(points), dtype=float).reshape(-1, 2)
    d = np.asarray(direction_2d, dtype=float)
    n = perpendicular_ccw(d)

    along = pts @ d
    across = pts @ n
    t_min = float(along.min())

    left = t_min * d + float(across.min()) * n
    right = t_min * d + float(across.max()) * n
    return as_point(left), as_point(right)
