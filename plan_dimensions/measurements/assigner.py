"""
Side assignment and deduplication within a direction group.

A measurement goes to whichever anchor line its band is closer to; ties go
left. Within a side, intervals with the same (t1, t2) and the same tag set
are one dimension, whatever their bands look like, and only the first is
kept.
"""

import logging
from typing import Dict, FrozenSet, List, Sequence, Tuple

from plan_dimensions.config import INTERVAL_TOLERANCE
from plan_dimensions.measurements.model import (
    IntervalMeasurement,
    MeasurementGroup,
    Tag,
    tag_key,
)

logger = logging.getLogger(__name__)


def assign_sides(
    group: MeasurementGroup,
) -> Tuple[List[IntervalMeasurement], List[IntervalMeasurement]]:
    """Split a group's intervals into (left, right)."""
    left: List[IntervalMeasurement] = []
    right: List[IntervalMeasurement] = []

    for m in group.measurements:
        if m.distance_left <= m.distance_right:
            left.append(m)
        else:
            right.append(m)

    return left, right


def _same_interval(a: IntervalMeasurement, b: IntervalMeasurement, tolerance: float) -> bool:
    return abs(a.t1 - b.t1) <= tolerance and abs(a.t2 - b.t2) <= tolerance


def deduplicate(
    measurements: Sequence[IntervalMeasurement],
    tolerance: float = INTERVAL_TOLERANCE,
) -> List[IntervalMeasurement]:
    """Drop intervals equal to an earlier one (t1, t2 within ``tolerance``,
    same tags). Order of survivors is preserved.
    """
    kept_by_tags: Dict[FrozenSet[Tag], List[IntervalMeasurement]] = {}
    unique: List[IntervalMeasurement] = []

    for m in measurements:
        same_tags = kept_by_tags.setdefault(tag_key(m.tags), [])
        if any(_same_interval(m, kept, tolerance) for kept in same_tags):
            continue
        same_tags.append(m)
        unique.append(m)

    if len(unique) < len(measurements):
        logger.debug("Removed %d duplicate measurements", len(measurements) - len(unique))
    return unique
