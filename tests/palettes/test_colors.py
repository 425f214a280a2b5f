"""Tests for color parsing, formatting and interpolation."""

import re

import numpy as np
import pytest

from mapstyle.palettes.colors import (
    interpolate_stops,
    ordinal_positions,
    parse_color,
    parse_colors,
    rgba_to_hex,
)
from mapstyle.palettes.errors import InvalidSpecError

HEX6 = re.compile(r"^#[0-9A-F]{6}$")


class TestParseColor:
    """Tests for color token parsing."""

    def test_hex_token(self):
        """Six-digit hex should parse to unit floats."""
        assert parse_color("#FF0000") == (1.0, 0.0, 0.0, 1.0)

    def test_named_token(self):
        """CSS names should be accepted."""
        assert parse_color("white") == (1.0, 1.0, 1.0, 1.0)
        assert parse_color("black") == (0.0, 0.0, 0.0, 1.0)

    def test_alpha_hex_token(self):
        """Eight-digit hex should keep its alpha channel."""
        rgba = parse_color("#0000FF80")
        assert rgba[:3] == (0.0, 0.0, 1.0)
        assert rgba[3] == pytest.approx(128 / 255)

    def test_rgb_tuple_token(self):
        """RGB float tuples should get full opacity."""
        assert parse_color((0.0, 1.0, 0.0)) == (0.0, 1.0, 0.0, 1.0)

    def test_invalid_token(self):
        """Unparseable tokens should raise InvalidSpecError."""
        with pytest.raises(InvalidSpecError):
            parse_color("not-a-color")

    def test_empty_sequence(self):
        """An empty color sequence is an invalid spec."""
        with pytest.raises(InvalidSpecError):
            parse_colors([])


class TestHexFormatting:
    """Tests for hex output."""

    def test_rgba_to_hex(self):
        """Output should be uppercase #RRGGBB."""
        assert rgba_to_hex((1.0, 0.0, 0.0, 1.0)) == "#FF0000"
        assert rgba_to_hex((100 / 255, 149 / 255, 237 / 255)) == "#6495ED"

    def test_rgba_to_hex_alpha(self):
        """alpha=True should append the alpha byte."""
        assert rgba_to_hex((1.0, 0.0, 0.0, 0.5), alpha=True) == "#FF000080"
        assert rgba_to_hex((1.0, 0.0, 0.0), alpha=True) == "#FF0000FF"

    def test_rgba_to_hex_clips(self):
        """Out-of-range channels should clip instead of overflowing."""
        assert rgba_to_hex((1.5, -0.2, 0.0, 1.0)) == "#FF0000"


class TestInterpolation:
    """Tests for piecewise-linear stop interpolation."""

    def test_ordinal_positions(self):
        """Items should spread evenly over [0, 1]."""
        assert ordinal_positions(1).tolist() == [0.0]
        assert ordinal_positions(3).tolist() == [0.0, 0.5, 1.0]
        assert ordinal_positions(0).tolist() == []

    def test_endpoints_hit_stops(self):
        """Positions 0 and 1 should reproduce the first and last stop."""
        stops = parse_colors(["#FF0000", "#0000FF"])
        rgba = interpolate_stops(stops, np.array([0.0, 1.0]))
        assert rgba_to_hex(rgba[0]) == "#FF0000"
        assert rgba_to_hex(rgba[1]) == "#0000FF"

    def test_midpoint(self):
        """Midpoint of black and white should be mid gray."""
        stops = parse_colors(["black", "white"])
        rgba = interpolate_stops(stops, np.array([0.5]))
        assert rgba_to_hex(rgba[0]) == "#808080"

    def test_piecewise_segments(self):
        """Each segment should interpolate only between its own stops."""
        stops = parse_colors(["#FF0000", "#00FF00", "#0000FF"])
        rgba = interpolate_stops(stops, np.array([0.25, 0.5, 0.75]))
        assert rgba_to_hex(rgba[0]) == "#808000"
        assert rgba_to_hex(rgba[1]) == "#00FF00"
        assert rgba_to_hex(rgba[2]) == "#008080"

    def test_single_stop(self):
        """A single stop should be returned for every position."""
        stops = parse_colors(["#123456"])
        rgba = interpolate_stops(stops, np.array([0.0, 0.3, 1.0]))
        assert {rgba_to_hex(c) for c in rgba} == {"#123456"}

    def test_output_is_valid_hex(self):
        """Interpolated colors should always format as #RRGGBB."""
        stops = parse_colors(["navy", "gold", "crimson"])
        for color in interpolate_stops(stops, np.linspace(0, 1, 25)):
            assert HEX6.match(rgba_to_hex(color))
