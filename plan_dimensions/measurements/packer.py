"""
Row packing of one side's intervals and conversion to dimension lines.

Intervals are sorted by t1 and each goes into the first row whose furthest
end is not past its start; otherwise a new row opens. On start-sorted input
this first-fit rule uses the minimum number of rows (interval graph
colouring). Touching intervals (t1 == previous t2) share a row.

Row 0 is nearest the reference polygon; the distance between rows is left
to the drawing layer (see plan_dimensions.measurements.offsets).
"""

import logging
from typing import List, Sequence, Tuple

from plan_dimensions.geometry.vectors import (
    Point2,
    distance_to_infinite_line,
    project_point_onto_line,
)
from plan_dimensions.measurements.model import (
    IntervalMeasurement,
    LineMeasurement,
    ProjectedMeasurement,
)

logger = logging.getLogger(__name__)


def assign_rows(measurements: Sequence[IntervalMeasurement]) -> List[List[IntervalMeasurement]]:
    """Pack intervals into the fewest rows without overlaps."""
    rows: List[List[IntervalMeasurement]] = []
    row_ends: List[float] = []

    for m in sorted(measurements, key=lambda m: m.t1):
        for index, end in enumerate(row_ends):
            if m.t1 >= end:
                rows[index].append(m)
                row_ends[index] = max(end, m.t2)
                break
        else:
            rows.append([m])
            row_ends.append(m.t2)

    return rows


def _closest_edge(m: ProjectedMeasurement, line_start: Point2, direction: Point2) -> Tuple[Point2, Point2]:
    """Start/end of whichever band edge lies nearer to the anchor line."""
    near = distance_to_infinite_line(m.start_point_min, line_start, direction)
    far = distance_to_infinite_line(m.start_point_max, line_start, direction)
    if near <= far:
        return m.start_point_min, m.end_point_min
    return m.start_point_max, m.end_point_max


def to_line_measurements(
    row: Sequence[IntervalMeasurement],
    line_start: Point2,
    direction: Point2,
    reverse: bool = False,
) -> Tuple[LineMeasurement, ...]:
    """Snap a row onto the anchor line through ``line_start``.

    Args:
        row: intervals of one row.
        line_start: anchor of the side.
        direction: group direction.
        reverse: swap start and end (used for the right side).
    """
    lines = []
    for m in row:
        start, end = _closest_edge(m.measurement, line_start, direction)
        start_on_line = project_point_onto_line(start, line_start, direction)
        end_on_line = project_point_onto_line(end, line_start, direction)
        if reverse:
            start, end = end, start
            start_on_line, end_on_line = end_on_line, start_on_line

        lines.append(LineMeasurement(
            start_point=start,
            end_point=end,
            start_on_line=start_on_line,
            end_on_line=end_on_line,
            length=m.length,
            tags=m.tags,
        ))
    return tuple(lines)
