"""Tests for the ASCII renderer."""
import pytest

from necrosis.render import render_ascii, render_level


class TestRender:
    """Level slices of a hand-built layout."""

    def test_entry_level(self, line_layout):
        assert render_level(line_layout, 1) == "\n.E.\n"

    def test_wall_levels(self, line_layout):
        assert render_level(line_layout, 2) == "\n #\n"
        assert render_level(line_layout, 0) == "\n #\n"

    def test_level_out_of_range(self, line_layout):
        with pytest.raises(ValueError):
            render_level(line_layout, 3)
        with pytest.raises(ValueError):
            render_level(line_layout, -1)

    def test_all_levels_top_down(self, line_layout):
        text = render_ascii(line_layout)
        lines = text.splitlines()
        assert lines[0] == "-- level 2 --"
        headers = [line for line in lines if line.startswith("-- level")]
        assert headers == ["-- level 2 --", "-- level 1 --", "-- level 0 --"]

    def test_single_level(self, line_layout):
        assert render_ascii(line_layout, 1) == render_level(line_layout, 1)

    def test_generated_layout_marks_entry(self, make_layout):
        layout = make_layout(seed=4)
        assert render_level(layout, layout.entry[1]).count("E") == 1
