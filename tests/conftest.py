"""
Pytest configuration and fixtures for plan_dimensions.

Provides:
- XY projection and plane projections
- Reference polygons (rectangle, degenerate shapes)
- Tag and measurement factories
"""

from typing import Callable, List, Sequence

import pytest

from plan_dimensions.measurements.model import (
    AutoMeasurement,
    DirectMeasurement,
    MeasurementLines,
    Tag,
)
from plan_dimensions.projection import project


# ============================================================================
# Projections
# ============================================================================

@pytest.fixture
def xy_projection():
    """Orthographic projection (x, y, z) -> (x, y)."""
    return lambda p: (p[0], p[1])


@pytest.fixture
def xz_projection():
    """Wall elevation projection (x, y, z) -> (x, z)."""
    return project("xz")


# ============================================================================
# Reference polygons
# ============================================================================

@pytest.fixture
def rectangle() -> List[tuple]:
    """200 x 100 rectangle with its corner at the origin."""
    return [(0.0, 0.0), (200.0, 0.0), (200.0, 100.0), (0.0, 100.0)]


@pytest.fixture
def single_point_polygon() -> List[tuple]:
    return [(50.0, 50.0)]


@pytest.fixture
def flat_polygon() -> List[tuple]:
    """Polygon with no extent in y (a horizontal segment)."""
    return [(0.0, 0.0), (200.0, 0.0)]


# ============================================================================
# Factories
# ============================================================================

@pytest.fixture
def make_tag() -> Callable[..., Tag]:
    def _make(name: str, category: str = "measurement") -> Tag:
        return Tag(id=f"{category}_{name}", category=category, label=f"{name} Label")
    return _make


@pytest.fixture
def auto() -> Callable[..., AutoMeasurement]:
    """AutoMeasurement factory with the defaults used throughout the tests."""
    def _make(
        start=(0.0, 0.0, 0.0),
        end=(100.0, 0.0, 0.0),
        size=(100.0, 50.0, 30.0),
        tags: Sequence[Tag] = (),
    ) -> AutoMeasurement:
        return AutoMeasurement(start_point=start, end_point=end, size=size, tags=tuple(tags))
    return _make


@pytest.fixture
def direct() -> Callable[..., DirectMeasurement]:
    def _make(
        start=(0.0, 0.0, 0.0),
        end=(100.0, 0.0, 0.0),
        label="100mm",
        offset=0.0,
        length=None,
        tags: Sequence[Tag] = (),
    ) -> DirectMeasurement:
        return DirectMeasurement(
            start_point=start, end_point=end, label=label,
            offset=offset, length=length, tags=tuple(tags),
        )
    return _make


# ============================================================================
# Helpers
# ============================================================================

def total_lines(results: Sequence[MeasurementLines]) -> int:
    """Number of LineMeasurements over all sides and rows."""
    return sum(len(row) for side in results for row in side.lines)


def approx_point(p, expected, tol=1e-9) -> bool:
    return abs(p[0] - expected[0]) <= tol and abs(p[1] - expected[1]) <= tol
