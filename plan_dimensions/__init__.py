"""
plan_dimensions: automatic dimension-line layout for plan and elevation drawings.

Entry point: plan_dimensions.measurements.process_measurements.
"""

from plan_dimensions.logging_config import (
    LogContext,
    configure_default_logging,
    get_logger,
    log_timing,
    setup_logging,
    timed,
)
from plan_dimensions.measurements import (
    AutoMeasurement,
    DirectMeasurement,
    LineMeasurement,
    MeasurementLines,
    Tag,
    layout_measurements,
    process_measurements,
)
from plan_dimensions.projection import project

__version__ = "0.1.0"

__all__ = [
    "AutoMeasurement",
    "DirectMeasurement",
    "LineMeasurement",
    "MeasurementLines",
    "Tag",
    "process_measurements",
    "layout_measurements",
    "project",
    "setup_logging",
    "get_logger",
    "configure_default_logging",
    "log_timing",
    "timed",
    "LogContext",
]
