"""
Entry points of the dimension layout engine.

    process_measurements: lazy generator of MeasurementLines (auto only)
    layout_measurements:  materialised layout of a mixed list

Every call starts from scratch: no state is kept between calls, and calling
process_measurements again restarts the sequence.
"""

import logging
from typing import Iterable, Iterator, Optional, Sequence, Tuple

from plan_dimensions.geometry.vectors import Point2
from plan_dimensions.logging_config import log_timing
from plan_dimensions.measurements.assigner import assign_sides, deduplicate
from plan_dimensions.measurements.grouper import build_group, group_measurements
from plan_dimensions.measurements.model import (
    Measurement,
    MeasurementGroup,
    MeasurementLayout,
    MeasurementLines,
)
from plan_dimensions.measurements.packer import assign_rows, to_line_measurements
from plan_dimensions.measurements.projector import (
    project_direct_measurements,
    project_measurements,
    split_measurements,
)
from plan_dimensions.project_config import LayoutConfig
from plan_dimensions.projection import Projection

logger = logging.getLogger(__name__)


def layout_group(
    group: MeasurementGroup,
    config: Optional[LayoutConfig] = None,
) -> Tuple[MeasurementLines, MeasurementLines]:
    """Assign sides, deduplicate and pack one direction group.

    Returns:
        (left, right); a side without measurements has no rows.
    """
    config = config or LayoutConfig()
    left, right = assign_sides(group)

    left_rows = assign_rows(deduplicate(left, config.interval_tolerance))
    right_rows = assign_rows(deduplicate(right, config.interval_tolerance))

    return (
        MeasurementLines(
            direction=group.direction,
            start=group.start_left,
            lines=tuple(to_line_measurements(row, group.start_left, group.direction) for row in left_rows),
        ),
        MeasurementLines(
            direction=group.direction,
            start=group.start_right,
            lines=tuple(to_line_measurements(row, group.start_right, group.direction, reverse=True)
                        for row in right_rows),
        ),
    )


def process_measurements(
    measurements: Iterable[Measurement],
    projection: Projection,
    reference_points: Sequence[Point2],
    config: Optional[LayoutConfig] = None,
) -> Iterator[MeasurementLines]:
    """Lay out auto measurements as rows of dimension lines.

    Yields the left and then the right side of each direction group, groups
    in the order their first measurement appears. Direct measurements are
    skipped here; see :func:`layout_measurements`.

    Args:
        measurements: auto and/or direct measurements in any order.
        projection: maps 3D points into the drawing plane.
        reference_points: outline the dimension rows are anchored on.
        config: tolerances; defaults from plan_dimensions.config.

    Yields:
        MeasurementLines, two per direction group.
    """
    config = config or LayoutConfig()
    autos, directs = split_measurements(measurements)
    if directs:
        logger.debug("Skipping %d direct measurements in row layout", len(directs))

    points = list(reference_points)
    if not autos or not points:
        return

    projected = project_measurements(autos, projection, config.direction_tolerance)
    for direction, members in group_measurements(projected, config.direction_tolerance):
        group = build_group(direction, members, points)
        left, right = layout_group(group, config)
        logger.debug(
            "Direction (%.4f, %.4f): %d left in %d rows, %d right in %d rows",
            direction[0], direction[1],
            left.count, len(left.lines), right.count, len(right.lines),
        )
        yield left
        yield right


def layout_measurements(
    measurements: Iterable[Measurement],
    projection: Projection,
    reference_points: Sequence[Point2],
    config: Optional[LayoutConfig] = None,
) -> MeasurementLayout:
    """Lay out a mixed list: auto measurements packed into rows, direct
    measurements projected with their own label and offset.
    """
    measurements = list(measurements)
    with log_timing(logger, "measurement layout", measurements=len(measurements)) as info:
        autos, directs = split_measurements(measurements)
        groups = tuple(process_measurements(autos, projection, reference_points, config))
        direct = tuple(project_direct_measurements(directs, projection))
        info["sides"] = len(groups)
        info["lines"] = sum(g.count for g in groups)
        info["direct"] = len(direct)

    return MeasurementLayout(groups=groups, direct=direct)


def count_lines(results: Iterable[MeasurementLines]) -> int:
    """Total number of dimension lines over all sides."""
    return sum(r.count for r in results)

