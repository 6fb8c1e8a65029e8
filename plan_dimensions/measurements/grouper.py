"""
Grouping of projected measurements by direction.

Directions are compared per component with a tolerance, so measurements at
arbitrary angles that differ only by round-off land in one group. Groups are
returned in the order their first measurement was seen.

Each group gets two anchors on the reference polygon: the extreme points
across the group direction. ``start_left`` is on the low side of the CCW
normal, ``start_right`` on the high side.
"""

import logging
from typing import List, Sequence, Tuple

from plan_dimensions.config import DIRECTION_TOLERANCE
from plan_dimensions.geometry.vectors import (
    Point2,
    bounds_lines,
    canonical_direction,
    distance_to_infinite_line,
    line_parameter,
)
from plan_dimensions.measurements.model import (
    IntervalMeasurement,
    MeasurementGroup,
    ProjectedMeasurement,
)

logger = logging.getLogger(__name__)

DirectionGroup = Tuple[Point2, List[ProjectedMeasurement]]


def directions_equal(a: Point2, b: Point2, tolerance: float = DIRECTION_TOLERANCE) -> bool:
    """Component-wise comparison of two unit directions."""
    return abs(a[0] - b[0]) < tolerance and abs(a[1] - b[1]) < tolerance


def group_measurements(
    measurements: Sequence[ProjectedMeasurement],
    tolerance: float = DIRECTION_TOLERANCE,
) -> List[DirectionGroup]:
    """Partition measurements by canonical direction.

    The first measurement of a group fixes its direction.

    Returns:
        List of (direction, measurements) in first-seen order.
    """
    groups: List[DirectionGroup] = []

    for m in measurements:
        d = canonical_direction(m.direction, tolerance)
        for group_dir, members in groups:
            if directions_equal(group_dir, d, tolerance):
                members.append(m)
                break
        else:
            groups.append((d, [m]))

    logger.debug("Grouped %d measurements into %d directions", len(measurements), len(groups))
    return groups


def compute_anchor_sides(direction: Point2, points: Sequence[Point2]) -> Tuple[Point2, Point2]:
    """Left and right anchors of ``points`` across ``direction``.

    A single point, or a polygon with no extent across the direction, gives
    two coincident anchors.

    Raises:
        ValueError: If ``points`` is empty.
    """
    if len(points) == 0:
        raise ValueError("Reference polygon has no points")
    return bounds_lines(direction, points)


def _band_distance(m: ProjectedMeasurement, anchor: Point2, direction: Point2) -> float:
    # start and end of a band edge are equally far from a parallel line
    return min(
        distance_to_infinite_line(m.start_point_min, anchor, direction),
        distance_to_infinite_line(m.start_point_max, anchor, direction),
    )


def to_interval(
    m: ProjectedMeasurement,
    direction: Point2,
    start_left: Point2,
    start_right: Point2,
) -> IntervalMeasurement:
    """Place ``m`` on the group axis and measure its distance to both sides."""
    t_start = line_parameter(m.start_point_min, start_left, direction)
    t_end = line_parameter(m.end_point_min, start_left, direction)

    if t_end < t_start:
        m = ProjectedMeasurement(
            start_point_min=m.end_point_min,
            end_point_min=m.start_point_min,
            start_point_max=m.end_point_max,
            end_point_max=m.start_point_max,
            perpendicular_range=m.perpendicular_range,
            length=m.length,
            tags=m.tags,
        )
        t_start, t_end = t_end, t_start

    return IntervalMeasurement(
        measurement=m,
        t1=t_start,
        t2=t_end,
        distance_left=_band_distance(m, start_left, direction),
        distance_right=_band_distance(m, start_right, direction),
    )


def build_group(
    direction: Point2,
    measurements: Sequence[ProjectedMeasurement],
    points: Sequence[Point2],
) -> MeasurementGroup:
    """Anchor a direction group on the reference polygon."""
    start_left, start_right = compute_anchor_sides(direction, points)
    return MeasurementGroup(
        direction=direction,
        start_left=start_left,
        start_right=start_right,
        measurements=tuple(to_interval(m, direction, start_left, start_right) for m in measurements),
    )
