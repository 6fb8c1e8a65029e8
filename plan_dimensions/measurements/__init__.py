"""
Automatic layout of dimension lines around a plan outline.

Modules:
  - model:     value types (inputs, intermediates, outputs)
  - projector: projection into the drawing plane and direction normalisation
  - grouper:   grouping by direction and anchoring on the outline
  - assigner:  side assignment and deduplication
  - packer:    row packing and snapping onto the anchor lines
  - pipeline:  process_measurements / layout_measurements
  - offsets:   per-line offsets for the drawing layer
"""

from plan_dimensions.measurements.model import (
    AutoMeasurement,
    DirectLine,
    DirectMeasurement,
    IntervalMeasurement,
    LineMeasurement,
    Measurement,
    MeasurementGroup,
    MeasurementLayout,
    MeasurementLines,
    ProjectedMeasurement,
    Tag,
)
from plan_dimensions.measurements.offsets import PlacedDimension, format_length, placed_dimensions
from plan_dimensions.measurements.pipeline import (
    count_lines,
    layout_measurements,
    process_measurements,
)

__all__ = [
    'AutoMeasurement',
    'DirectMeasurement',
    'Measurement',
    'Tag',
    'ProjectedMeasurement',
    'IntervalMeasurement',
    'MeasurementGroup',
    'LineMeasurement',
    'MeasurementLines',
    'DirectLine',
    'MeasurementLayout',
    'PlacedDimension',
    'process_measurements',
    'layout_measurements',
    'placed_dimensions',
    'format_length',
    'count_lines',
]
