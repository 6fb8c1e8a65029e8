"""
Unit tests for plan_dimensions.measurements.offsets.
"""

import pytest

from plan_dimensions.measurements.model import DirectLine
from plan_dimensions.measurements.offsets import (
    PlacedDimension,
    direct_offset,
    format_length,
    placed_dimensions,
    row_offset,
)
from plan_dimensions.measurements.pipeline import layout_measurements, process_measurements
from plan_dimensions.project_config import OffsetsConfig


def direct_line(start=(0.0, 0.0), end=(100.0, 0.0), offset=1.0, label=None, length=100.0):
    return DirectLine(start_point=start, end_point=end, label=label, offset=offset, length=length)


class TestRowOffset:

    def test_defaults(self):
        assert row_offset(0) == pytest.approx(72.0)
        assert row_offset(1) == pytest.approx(132.0)

    def test_custom(self):
        config = OffsetsConfig(row_spacing=10.0, row_start=1.0)
        assert row_offset(2, config) == pytest.approx(30.0)


class TestFormatLength:

    @pytest.mark.parametrize("length, unit, expected", [
        (1234.0, 'm', "1.23m"),
        (1234.0, 'cm', "123.4cm"),
        (1234.4, 'mm', "1234mm"),
        (60.0, 'm', "0.06m"),
    ])
    def test_units(self, length, unit, expected):
        assert format_length(length, unit) == expected

    def test_unknown_unit(self):
        with pytest.raises(ValueError, match="Unknown length unit"):
            format_length(10.0, 'in')


class TestDirectOffset:

    def test_scaled_by_row_spacing(self):
        assert direct_offset(direct_line(offset=-0.5)) == pytest.approx(-30.0)
        assert direct_offset(direct_line(offset=2), OffsetsConfig(row_spacing=10.0)) == pytest.approx(20.0)

    def test_vertical_flipped_on_request(self):
        vertical = direct_line(start=(5.0, 0.0), end=(5.0, 80.0), offset=1)
        assert direct_offset(vertical) == pytest.approx(60.0)
        assert direct_offset(vertical, flip_vertical=True) == pytest.approx(-60.0)

    def test_horizontal_never_flipped(self):
        assert direct_offset(direct_line(offset=1), flip_vertical=True) == pytest.approx(60.0)


class TestPlacedDimensions:

    def test_base_distance_added(self, auto, xy_projection, rectangle):
        """A line 10 above its anchor gets 10 plus the row offset."""
        sides = process_measurements([auto((20, 10, 0), (80, 10, 0))], xy_projection, rectangle)
        (placed,) = placed_dimensions(sides)
        assert isinstance(placed, PlacedDimension)
        assert placed.row == 0
        assert placed.offset == pytest.approx(10.0 + 72.0)
        assert placed.length == pytest.approx(60.0)
        assert placed.label == "0.06m"

    def test_label_unit(self, auto, xy_projection, rectangle):
        sides = process_measurements([auto((20, 10, 0), (80, 10, 0))], xy_projection, rectangle)
        (placed,) = placed_dimensions(sides, unit='mm')
        assert placed.label == "60mm"

    def test_offsets_grow_with_row(self, auto, xy_projection, rectangle):
        ms = [auto((0, 0, 0), (50, 0, 0)), auto((25, 0, 0), (75, 0, 0))]
        placed = placed_dimensions(process_measurements(ms, xy_projection, rectangle))
        by_row = sorted(placed, key=lambda p: p.row)
        assert [p.row for p in by_row] == [0, 1]
        assert by_row[1].offset > by_row[0].offset

    def test_direct_offset_in_row_spacings(self, auto, direct, xy_projection, rectangle):
        layout = layout_measurements([auto(), direct(label="2m", offset=-0.5)], xy_projection, rectangle)
        placed = placed_dimensions(layout.groups, direct=layout.direct)
        direct_placed = [p for p in placed if p.row is None]
        assert len(direct_placed) == 1
        assert direct_placed[0].offset == pytest.approx(-30.0)
        assert direct_placed[0].label == "2m"

    def test_direct_label_defaults_to_length(self, direct, xy_projection, rectangle):
        layout = layout_measurements([direct(label=None, length=2500.0)], xy_projection, rectangle)
        (placed,) = placed_dimensions(layout.groups, direct=layout.direct)
        assert placed.label == "2.50m"

    def test_tags_carried(self, auto, make_tag, xy_projection, rectangle):
        tag = make_tag("wall")
        placed = placed_dimensions(process_measurements([auto(tags=[tag])], xy_projection, rectangle))
        assert placed[0].tags == (tag,)
