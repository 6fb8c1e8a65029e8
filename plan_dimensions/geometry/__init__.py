"""Vector helpers shared by the layout stages."""

from plan_dimensions.geometry.vectors import (
    Point2,
    Point3,
    as_point,
    bounds_lines,
    canonical_direction,
    direction,
    distance,
    distance_to_infinite_line,
    is_canonical,
    line_parameter,
    perpendicular_ccw,
    project_point_onto_line,
)

__all__ = [
    "Point2",
    "Point3",
    "as_point",
    "bounds_lines",
    "canonical_direction",
    "direction",
    "distance",
    "distance_to_infinite_line",
    "is_canonical",
    "line_parameter",
    "perpendicular_ccw",
    "project_point_onto_line",
]
