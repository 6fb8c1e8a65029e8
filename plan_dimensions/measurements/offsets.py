"""
Conversion of packed rows into per-line offsets.

The drawing layer places a dimension line at

    offset = |start_point - start_on_line| + row_spacing * (row + row_start)

i.e. the gap between the measured points and the anchor line, plus the
distance of the row from that line.

Direct measurements give their offset in row spacings, so it is scaled by
``row_spacing``. Views whose horizontal axis is not mirrored (elevations
looked at from the front) draw vertical direct measurements on the other
side, so their offset is negated when ``flip_vertical`` is set.

Every placed line carries a label: the caller's text for direct
measurements that have one, the formatted length otherwise.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from plan_dimensions.geometry.vectors import Point2, distance
from plan_dimensions.measurements.model import DirectLine, MeasurementLines, Tags
from plan_dimensions.project_config import OffsetsConfig

LENGTH_UNITS = ('mm', 'cm', 'm')


@dataclass(frozen=True)
class PlacedDimension:
    """A dimension line ready for the drawing layer.

    Attributes:
        start_point: measured start in the drawing plane.
        end_point: measured end.
        offset: distance of the dimension line from the measured points.
        length: measured distance.
        label: text to draw next to the line.
        row: row index, None for direct measurements.
        tags: tags of the source measurement.
    """
    start_point: Point2
    end_point: Point2
    offset: float
    length: float
    label: str
    row: Optional[int] = None
    tags: Tags = ()


def format_length(length: float, unit: str = 'm') -> str:
    """Format a length given in millimetres.

    >>> format_length(1234.0)
    '1.23m'
    >>> format_length(1234.0, 'cm')
    '123.4cm'

    Raises:
        ValueError: for a unit other than 'mm', 'cm' or 'm'.
    """
    if unit == 'mm':
        return f"{length:.0f}mm"
    if unit == 'cm':
        return f"{length / 10:.1f}cm"
    if unit == 'm':
        return f"{length / 1000:.2f}m"
    raise ValueError(f"Unknown length unit: {unit!r} (expected one of {LENGTH_UNITS})")


def row_offset(row: int, config: Optional[OffsetsConfig] = None) -> float:
    """Distance of row ``row`` from its anchor line."""
    config = config or OffsetsConfig()
    return config.row_spacing * (row + config.row_start)


def direct_offset(
    line: DirectLine,
    config: Optional[OffsetsConfig] = None,
    flip_vertical: bool = False,
) -> float:
    """Offset of a direct measurement in model units."""
    config = config or OffsetsConfig()
    offset = line.offset * config.row_spacing
    if flip_vertical and line.start_point[0] == line.end_point[0]:
        offset = -offset
    return offset


def placed_dimensions(
    sides: Iterable[MeasurementLines],
    config: Optional[OffsetsConfig] = None,
    direct: Iterable[DirectLine] = (),
    flip_vertical: bool = False,
    unit: str = 'm',
) -> List[PlacedDimension]:
    """Flatten layout output into offset dimension lines.

    Args:
        sides: output of ``process_measurements``.
        config: row spacing settings.
        direct: projected direct measurements, appended after the rows.
        flip_vertical: negate the offset of vertical direct measurements.
        unit: unit of generated labels.
    """
    config = config or OffsetsConfig()
    placed: List[PlacedDimension] = []

    for side in sides:
        for row, line in side.iter_lines():
            base = distance(line.start_point, line.start_on_line)
            placed.append(PlacedDimension(
                start_point=line.start_point,
                end_point=line.end_point,
                offset=base + row_offset(row, config),
                length=line.length,
                label=format_length(line.length, unit),
                row=row,
                tags=line.tags,
            ))

    for d in direct:
        placed.append(PlacedDimension(
            start_point=d.start_point,
            end_point=d.end_point,
            offset=direct_offset(d, config, flip_vertical),
            length=d.length,
            label=d.label if d.label is not None else format_length(d.length, unit),
            tags=d.tags,
        ))

    return placed
