"""Exceptions raised by plan_dimensions."""


class LayoutError(Exception):
    """Base class for all plan_dimensions errors."""


class DegenerateMeasurementError(LayoutError):
    """A measurement projects to a single point and has no direction.

    Raised by the vector helpers; the pipeline catches it and drops the
    measurement, so it never reaches callers of ``process_measurements``.
    """


class ConfigError(LayoutError):
    """A configuration file exists but cannot be parsed."""
