"""
Projection and normalisation of raw measurements.

Stage 1 maps every 3D point through the caller's projection. Auto
measurements additionally project the point their band reaches
(``start_point + size``, or each extend point) and keep only the component
of that offset across the measurement, which gives the far edge of the
band the measurement may be drawn from.

Stage 2 drops measurements whose projected ends coincide and flips the rest
so their direction satisfies x > 0, or x ~ 0 and y > 0, with "~ 0" meaning
within the direction tolerance.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from plan_dimensions.config import DIRECTION_TOLERANCE
from plan_dimensions.errors import DegenerateMeasurementError
from plan_dimensions.geometry.vectors import (
    as_point,
    direction,
    distance,
    is_canonical,
    perpendicular_ccw,
)
from plan_dimensions.measurements.model import (
    AutoMeasurement,
    DirectLine,
    DirectMeasurement,
    Measurement,
    ProjectedMeasurement,
)
from plan_dimensions.projection import Projection

logger = logging.getLogger(__name__)


def split_measurements(
    measurements: Iterable[Measurement],
) -> Tuple[List[AutoMeasurement], List[DirectMeasurement]]:
    """Separate auto and direct measurements, keeping input order.

    Raises:
        TypeError: for anything that is neither variant.
    """
    autos: List[AutoMeasurement] = []
    directs: List[DirectMeasurement] = []
    for m in measurements:
        if isinstance(m, AutoMeasurement):
            autos.append(m)
        elif isinstance(m, DirectMeasurement):
            directs.append(m)
        else:
            raise TypeError(f"Expected AutoMeasurement or DirectMeasurement, got {type(m).__name__}")
    return autos, directs


# ---------------------------------------------------------------------------
# Auto measurements
# ---------------------------------------------------------------------------

def normalize_measurement(
    pm: ProjectedMeasurement,
    tolerance: float = DIRECTION_TOLERANCE,
) -> ProjectedMeasurement:
    """Flip ``pm`` so its direction is canonical.

    Start and end swap roles; the band keeps its position, so the range
    changes sign along with the normal.
    """
    d = direction(pm.start_point_min, pm.end_point_min)
    if is_canonical(d, tolerance):
        return pm
    return ProjectedMeasurement(
        start_point_min=pm.end_point_min,
        end_point_min=pm.start_point_min,
        start_point_max=pm.end_point_max,
        end_point_max=pm.start_point_max,
        perpendicular_range=-pm.perpendicular_range,
        length=pm.length,
        tags=pm.tags,
    )


def _band_targets(measurement: AutoMeasurement) -> Sequence[Sequence[float]]:
    """3D points the band should reach: the extend points, or start + size."""
    if measurement.extends:
        return measurement.extends
    start = np.asarray(measurement.start_point, dtype=float)
    return [tuple(start + np.asarray(measurement.size, dtype=float))]


def _perpendicular_range(
    measurement: AutoMeasurement,
    projection: Projection,
    start_2d: np.ndarray,
    normal: np.ndarray,
) -> float:
    """Signed band width across the measurement; the target reaching
    furthest wins, the first one on ties.
    """
    best = 0.0
    for target in _band_targets(measurement):
        offset = np.asarray(projection(tuple(target)), dtype=float)[:2] - start_2d
        reach = float(np.dot(offset, normal))
        if abs(reach) > abs(best):
            best = reach
    return best


def project_measurement(
    measurement: AutoMeasurement,
    projection: Projection,
    tolerance: float = DIRECTION_TOLERANCE,
) -> Optional[ProjectedMeasurement]:
    """Project and normalise one auto measurement.

    Args:
        measurement: the measurement to project.
        projection: maps 3D points into the drawing plane.
        tolerance: how close to zero an x component counts as vertical.

    Returns:
        The projected band, or None when the measurement is degenerate.
    """
    start_min = np.asarray(projection(measurement.start_point), dtype=float)[:2]
    end_min = np.asarray(projection(measurement.end_point), dtype=float)[:2]

    try:
        d = direction(start_min, end_min)
    except DegenerateMeasurementError:
        logger.debug("Dropping zero-length measurement at %s", as_point(start_min))
        return None

    normal = perpendicular_ccw(d)
    perpendicular_range = _perpendicular_range(measurement, projection, start_min, normal)

    projected = ProjectedMeasurement(
        start_point_min=as_point(start_min),
        end_point_min=as_point(end_min),
        start_point_max=as_point(start_min + normal * perpendicular_range),
        end_point_max=as_point(end_min + normal * perpendicular_range),
        perpendicular_range=perpendicular_range,
        length=distance(start_min, end_min),
        tags=measurement.tags,
    )
    return normalize_measurement(projected, tolerance)


def project_measurements(
    measurements: Iterable[AutoMeasurement],
    projection: Projection,
    tolerance: float = DIRECTION_TOLERANCE,
) -> List[ProjectedMeasurement]:
    """Project all auto measurements, dropping degenerate ones."""
    result: List[ProjectedMeasurement] = []
    dropped = 0
    for m in measurements:
        pm = project_measurement(m, projection, tolerance)
        if pm is None:
            dropped += 1
            continue
        result.append(pm)

    if dropped:
        logger.debug("Dropped %d zero-length measurements", dropped)
    return result


# ---------------------------------------------------------------------------
# Direct measurements
# ---------------------------------------------------------------------------

def project_direct_measurement(
    measurement: DirectMeasurement,
    projection: Projection,
) -> Optional[DirectLine]:
    """Project a direct measurement; None when its ends coincide."""
    start = as_point(projection(measurement.start_point))
    end = as_point(projection(measurement.end_point))
    projected_length = distance(start, end)
    if projected_length == 0.0:
        logger.debug("Dropping zero-length direct measurement %r", measurement.label)
        return None

    return DirectLine(
        start_point=start,
        end_point=end,
        label=measurement.label,
        offset=measurement.offset,
        length=projected_length if measurement.length is None else measurement.length,
        tags=measurement.tags,
    )


def project_direct_measurements(
    measurements: Iterable[DirectMeasurement],
    projection: Projection,
) -> List[DirectLine]:
    """Project all direct measurements, dropping degenerate ones."""
    result = []
    for m in measurements:
        line = project_direct_measurement(m, projection)
        if line is not None:
            result.append(line)
    return result
