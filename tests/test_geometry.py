"""
Unit tests for plan_dimensions.geometry.vectors and plan_dimensions.projection.
"""

import math

import numpy as np
import pytest

from plan_dimensions.errors import DegenerateMeasurementError
from plan_dimensions.geometry.vectors import (
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
from plan_dimensions.projection import bounds_corners_2d, project


class TestDirection:

    def test_unit_length(self):
        d = direction((0, 0), (3, 4))
        assert np.allclose(d, [0.6, 0.8])

    def test_zero_vector_raises(self):
        with pytest.raises(DegenerateMeasurementError):
            direction((1, 1), (1, 1))

    def test_ignores_third_component(self):
        assert np.allclose(direction((0, 0, 5), (10, 0, 50)), [1, 0])


class TestCanonicalDirection:

    @pytest.mark.parametrize("vec, expected", [
        ((5, 0), (1.0, 0.0)),
        ((-5, 0), (1.0, 0.0)),
        ((0, 7), (0.0, 1.0)),
        ((0, -7), (0.0, 1.0)),
        ((-3, 4), (0.6, -0.8)),
        ((3, -4), (0.6, -0.8)),
    ])
    def test_sign_rule(self, vec, expected):
        assert canonical_direction(vec) == pytest.approx(expected)

    def test_no_negative_zero(self):
        x, y = canonical_direction((-1, 0))
        assert math.copysign(1.0, y) == 1.0

    def test_anti_parallel_equal(self):
        assert canonical_direction((2, 1)) == canonical_direction((-2, -1))

    def test_zero_raises(self):
        with pytest.raises(DegenerateMeasurementError):
            canonical_direction((0, 0))

    def test_near_vertical_round_off_agrees(self):
        """x drift of either sign below the tolerance counts as vertical."""
        up = canonical_direction((-1e-12, 100))
        down = canonical_direction((1e-12, -100))
        assert up[1] == pytest.approx(1.0)
        assert down[1] == pytest.approx(1.0)
        assert up == pytest.approx(down, abs=1e-12)

    def test_tolerance_is_configurable(self):
        assert canonical_direction((-0.01, -1), tolerance=0.1)[1] > 0
        assert canonical_direction((-0.01, -1), tolerance=1e-5)[0] > 0

    @pytest.mark.parametrize("d, expected", [
        ((1.0, 0.0), True),
        ((-1.0, 0.0), False),
        ((-1e-9, 1.0), True),
        ((1e-9, -1.0), False),
        ((0.6, -0.8), True),
    ])
    def test_is_canonical(self, d, expected):
        assert is_canonical(d) is expected


class TestLineHelpers:

    def test_perpendicular_ccw(self):
        assert np.allclose(perpendicular_ccw((1, 0)), [0, 1])
        assert np.allclose(perpendicular_ccw((0, 1)), [-1, 0])

    def test_distance(self):
        assert distance((0, 0), (3, 4)) == pytest.approx(5.0)

    def test_project_point_onto_line(self):
        assert project_point_onto_line((5, 7), (0, 2), (1, 0)) == pytest.approx((5.0, 2.0))

    def test_line_parameter_is_signed(self):
        assert line_parameter((-5, 3), (0, 0), (1, 0)) == pytest.approx(-5.0)

    def test_distance_to_infinite_line(self):
        s = math.sqrt(0.5)
        assert distance_to_infinite_line((0, 2), (0, 0), (s, s)) == pytest.approx(math.sqrt(2))
        assert distance_to_infinite_line((0, -3), (10, 0), (1, 0)) == pytest.approx(3.0)


class TestBoundsLines:

    def test_rectangle_horizontal(self):
        left, right = bounds_lines((1, 0), [(0, 0), (200, 0), (200, 100), (0, 100)])
        assert left == pytest.approx((0.0, 0.0))
        assert right == pytest.approx((0.0, 100.0))

    def test_rectangle_vertical(self):
        """CCW normal of +y points to -x, so left is the far x edge."""
        left, right = bounds_lines((0, 1), [(0, 0), (200, 0), (200, 100), (0, 100)])
        assert left == pytest.approx((200.0, 0.0))
        assert right == pytest.approx((0.0, 0.0))

    def test_diagonal(self):
        s = math.sqrt(0.5)
        left, right = bounds_lines((s, s), [(0, 0), (10, 0), (10, 10), (0, 10)])
        # both anchors at the minimum extent along the diagonal
        assert np.dot(left, (s, s)) == pytest.approx(0.0)
        assert np.dot(right, (s, s)) == pytest.approx(0.0)
        assert distance(left, right) == pytest.approx(10 * math.sqrt(2))

    def test_zero_extent(self):
        left, right = bounds_lines((1, 0), [(0, 5), (10, 5)])
        assert left == pytest.approx(right)


class TestProjection:

    @pytest.mark.parametrize("plane, expected", [
        ("xy", (1.0, 2.0)),
        ("xz", (1.0, 3.0)),
        ("yz", (2.0, 3.0)),
    ])
    def test_planes(self, plane, expected):
        assert project(plane)((1, 2, 3)) == expected

    def test_unknown_plane(self):
        with pytest.raises(ValueError, match="Unknown plane"):
            project("xw")

    def test_bounds_corners(self):
        corners = bounds_corners_2d((0, 0, 0), (100, 50, 30), project("xz"))
        assert corners == [(0.0, 0.0), (100.0, 0.0), (100.0, 30.0), (0.0, 30.0)]
