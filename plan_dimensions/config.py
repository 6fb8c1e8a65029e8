"""
Built-in defaults of the layout engine.

Values here are the fallbacks for :mod:`plan_dimensions.project_config`;
a loaded ``.dimlayout.json`` overrides them per call, never by mutating
this module.
"""

# Two canonical directions closer than this (per component) share a group
DIRECTION_TOLERANCE = 1e-5

# Two intervals on one side with t1/t2 closer than this are the same dimension
INTERVAL_TOLERANCE = 1e-6

# Distance between consecutive dimension rows, model units (mm)
ROW_SPACING = 60.0

# Row 0 sits ROW_START * ROW_SPACING away from its anchor line
ROW_START = 1.2
