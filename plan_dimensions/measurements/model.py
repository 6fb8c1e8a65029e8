"""
Value types of the measurement layout pipeline.

Input:
  - AutoMeasurement  : 3D start/end plus a size vector or extend points; laid out automatically
  - DirectMeasurement: 3D start/end with a caller-chosen label and offset

Intermediate:
  - ProjectedMeasurement: 2D band (near and far edge) of one measurement
  - IntervalMeasurement : projected measurement with its [t1, t2] interval
  - MeasurementGroup    : measurements sharing one canonical direction

Output:
  - LineMeasurement : one dimension line snapped onto its row
  - MeasurementLines: rows of one (direction, side) pair
  - DirectLine      : a projected direct measurement
"""

from dataclasses import dataclass
from typing import FrozenSet, Iterator, Optional, Tuple, Union

from plan_dimensions.geometry.vectors import Point2, Point3, direction


@dataclass(frozen=True)
class Tag:
    """Opaque label attached to a measurement.

    The engine only compares tags for equality and passes them through.

    Attributes:
        id: tag identifier, e.g. 'wall-measurement_outer'.
        category: category identifier, e.g. 'wall-measurement'.
        label: display text for custom tags.
    """
    id: str
    category: str
    label: Optional[str] = None


Tags = Tuple[Tag, ...]


def tag_key(tags: Tags) -> FrozenSet[Tag]:
    """Order-independent identity of a tag collection."""
    return frozenset(tags)


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AutoMeasurement:
    """Measurement whose placement is derived automatically.

    The band the helper lines may reach is given either by ``size`` or by
    up to two extend points. When any extend point is set, ``size`` is
    ignored and the extend point reaching furthest across the projected
    measurement wins.

    Attributes:
        start_point: 3D start of the measured distance.
        end_point: 3D end of the measured distance.
        size: 3D extent of the measured element starting at ``start_point``;
              its projected component across the measurement is how far the
              helper lines may reach.
        tags: passed through to the output.
        extend1: 3D point the helper lines should reach, e.g. the far face
                 of a wall in plan.
        extend2: second such point, e.g. the top of the wall in elevation.
    """
    start_point: Point3
    end_point: Point3
    size: Point3 = (0.0, 0.0, 0.0)
    tags: Tags = ()
    extend1: Optional[Point3] = None
    extend2: Optional[Point3] = None

    def __post_init__(self):
        object.__setattr__(self, "tags", tuple(self.tags or ()))

    @property
    def extends(self) -> Tuple[Point3, ...]:
        """Extend points that are set, in order."""
        return tuple(p for p in (self.extend1, self.extend2) if p is not None)


@dataclass(frozen=True)
class DirectMeasurement:
    """Measurement with an explicit label and offset.

    Attributes:
        start_point: 3D start.
        end_point: 3D end.
        label: text chosen by the caller; the formatted length when omitted.
        offset: distance of the dimension line from the measured points, in
                row spacings; negative values place it on the other side.
        length: displayed value; the projected distance when omitted.
        tags: passed through to the output.
    """
    start_point: Point3
    end_point: Point3
    label: Optional[str] = None
    offset: float = 0.0
    length: Optional[float] = None
    tags: Tags = ()

    def __post_init__(self):
        object.__setattr__(self, "tags", tuple(self.tags or ()))


Measurement = Union[AutoMeasurement, DirectMeasurement]


# ---------------------------------------------------------------------------
# Intermediate
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ProjectedMeasurement:
    """2D band covered by one measurement.

    ``*_min`` points are the measured points themselves, ``*_max`` points are
    shifted across the measurement by ``perpendicular_range``.
    """
    start_point_min: Point2
    end_point_min: Point2
    start_point_max: Point2
    end_point_max: Point2
    perpendicular_range: float
    length: float
    tags: Tags = ()

    @property
    def direction(self) -> Point2:
        d = direction(self.start_point_min, self.end_point_min)
        return (float(d[0]), float(d[1]))


@dataclass(frozen=True)
class IntervalMeasurement:
    """Projected measurement placed on a group's direction axis.

    Start and end are ordered so that ``t1 <= t2``.

    Attributes:
        measurement: projected band, start/end swapped to match t1/t2.
        t1: position of the start along the group direction.
        t2: position of the end along the group direction.
        distance_left: distance from the band to the left anchor line.
        distance_right: distance from the band to the right anchor line.
    """
    measurement: ProjectedMeasurement
    t1: float
    t2: float
    distance_left: float
    distance_right: float

    @property
    def tags(self) -> Tags:
        return self.measurement.tags

    @property
    def length(self) -> float:
        return self.measurement.length


@dataclass(frozen=True)
class MeasurementGroup:
    """All intervals sharing one canonical direction."""
    direction: Point2
    start_left: Point2
    start_right: Point2
    measurements: Tuple[IntervalMeasurement, ...] = ()


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LineMeasurement:
    """One finished dimension line.

    Attributes:
        start_point: measured start (band edge nearest to the anchor line).
        end_point: measured end.
        start_on_line: ``start_point`` projected onto the anchor line.
        end_on_line: ``end_point`` projected onto the anchor line.
        length: measured distance.
        tags: tags of the source measurement.
    """
    start_point: Point2
    end_point: Point2
    start_on_line: Point2
    end_on_line: Point2
    length: float
    tags: Tags = ()


@dataclass(frozen=True)
class MeasurementLines:
    """Rows of dimension lines for one side of one direction group.

    ``lines[0]`` is the row nearest the reference polygon.
    """
    direction: Point2
    start: Point2
    lines: Tuple[Tuple[LineMeasurement, ...], ...] = ()

    @property
    def count(self) -> int:
        """Number of dimension lines over all rows."""
        return sum(len(row) for row in self.lines)

    def iter_lines(self) -> Iterator[Tuple[int, LineMeasurement]]:
        """Yield ``(row_index, line)`` pairs, nearest row first."""
        for row_index, row in enumerate(self.lines):
            for line in row:
                yield row_index, line


@dataclass(frozen=True)
class DirectLine:
    """A direct measurement projected into the drawing plane."""
    start_point: Point2
    end_point: Point2
    label: Optional[str]
    offset: float
    length: float
    tags: Tags = ()


@dataclass(frozen=True)
class MeasurementLayout:
    """Materialised result for a mixed list of measurements."""
    groups: Tuple[MeasurementLines, ...] = ()
    direct: Tuple[DirectLine, ...] = ()

    @property
    def line_count(self) -> int:
        return sum(g.count for g in self.groups)
