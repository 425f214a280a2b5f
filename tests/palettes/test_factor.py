"""Tests for categorical palettes."""

import numpy as np
import pandas as pd
import pytest

from mapstyle.palettes import FactorPalette, InvalidSpecError, color_factor
from mapstyle.palettes.factor import infer_levels


class TestFactorMapping:
    """Tests for level-to-color assignment."""

    def test_positional_mapping(self, primary_colors):
        """Equal level and color counts map 1:1 in level order."""
        pal = color_factor(primary_colors, levels=["a", "b", "c"])
        assert pal(["a", "b", "c"]) == primary_colors

    def test_unknown_level_is_na(self, primary_colors):
        """Values outside the known levels map to NA."""
        pal = color_factor(primary_colors, levels=["a", "b", "c"])
        assert pal("d") is None

    def test_na_inputs(self, primary_colors):
        """None, NaN and unhashable values are NA, never errors."""
        pal = color_factor(primary_colors, levels=["a", "b", "c"], na_color="#808080")
        assert pal([None, np.nan, ["a"]]) == ["#808080", "#808080", "#808080"]

    def test_interpolated_when_counts_differ(self):
        """Two colors over three levels adds the midpoint color."""
        pal = color_factor(["black", "white"], levels=["low", "mid", "high"])
        assert pal(["low", "mid", "high"]) == ["#000000", "#808080", "#FFFFFF"]

    def test_fewer_levels_than_colors(self, primary_colors):
        """Two levels over three colors take the end stops."""
        pal = color_factor(primary_colors, levels=["x", "y"])
        assert pal(["x", "y"]) == ["#FF0000", "#0000FF"]

    def test_numeric_levels(self, primary_colors):
        """Levels are not limited to strings."""
        pal = color_factor(primary_colors, levels=[1, 2, 3])
        assert pal(2) == "#00FF00"

    def test_qualitative_preset(self):
        """A listed preset with as many colors as levels maps positionally."""
        pal = color_factor("tab10", levels=list(range(10)))
        assert len(set(pal(list(range(10))))) == 10


class TestLevelOrder:
    """Tests for how levels are chosen and ordered."""

    def test_domain_first_appearance(self, primary_colors):
        """Levels inferred from a sample keep first-appearance order."""
        pal = color_factor(primary_colors, ["b", "a", "b", "c", "a"])
        assert pal.levels == ("b", "a", "c")
        assert pal("b") == "#FF0000"

    def test_explicit_levels_win(self, primary_colors):
        """Explicit levels take precedence over the domain."""
        pal = color_factor(primary_colors, ["b", "a", "c"], levels=["c", "b", "a"])
        assert pal.levels == ("c", "b", "a")
        assert pal("c") == "#FF0000"

    def test_categorical_domain(self, primary_colors):
        """Categorical data contributes its declared categories in order."""
        domain = pd.Categorical(["lo", "hi"], categories=["lo", "mid", "hi"], ordered=True)
        pal = color_factor(primary_colors, domain)
        assert pal.levels == ("lo", "mid", "hi")
        assert pal("mid") == "#00FF00"

    def test_categorical_series_domain(self, primary_colors):
        """A categorical Series behaves like a Categorical."""
        domain = pd.Series(["x", "z"], dtype=pd.CategoricalDtype(["x", "y", "z"]))
        assert color_factor(primary_colors, domain).levels == ("x", "y", "z")

    def test_domain_skips_na(self, primary_colors):
        """NA values in a sample are not levels."""
        assert infer_levels(["a", None, np.nan, "b"]) == ["a", "b"]

    def test_auto_levels(self, primary_colors):
        """Without levels or domain, each call infers its own levels."""
        pal = color_factor(primary_colors)
        assert pal.levels is None
        assert pal(["x", "y", "z"]) == primary_colors
        assert pal(["z", "y", "x"]) == primary_colors

    def test_level_colors(self, primary_colors):
        """level_colors exposes the lookup table."""
        pal = color_factor(primary_colors, levels=["a", "b", "c"])
        assert pal.level_colors == dict(zip(["a", "b", "c"], primary_colors))

    def test_legend(self, primary_colors):
        """One legend row per level."""
        pal = color_factor(primary_colors, levels=["a", "b", "c"])
        assert [entry.label for entry in pal.legend()] == ["a", "b", "c"]

    def test_auto_levels_have_no_legend(self, primary_colors):
        """Auto-levelled palettes cannot describe fixed levels."""
        with pytest.raises(ValueError):
            color_factor(primary_colors).legend()


class TestFactorConstruction:
    """Tests for build-time validation."""

    def test_empty_colors_raises(self):
        """build([], levels) raises InvalidSpecError."""
        with pytest.raises(InvalidSpecError):
            color_factor([], levels=["a"])

    def test_duplicate_levels_raise(self, primary_colors):
        """Explicit levels must be distinct."""
        with pytest.raises(InvalidSpecError):
            color_factor(primary_colors, levels=["a", "a"])

    def test_empty_levels_raise(self, primary_colors):
        """At least one level is required."""
        with pytest.raises(InvalidSpecError):
            color_factor(primary_colors, levels=[])

    def test_returns_factor_palette(self, primary_colors):
        """The builder returns a FactorPalette of kind 'factor'."""
        pal = color_factor(primary_colors, levels=["a"])
        assert isinstance(pal, FactorPalette)
        assert pal.kind == "factor"
        assert pal("a") == "#FF0000"
