"""Value-to-color palette builders.

This module provides four palette families sharing one color-spec
resolution and interpolation core:
- color_numeric: continuous linear mapping over a [lo, hi] domain
- color_bin: one color per interval (explicit, equal-width or pretty breaks)
- color_quantile: one color per quantile bin of a sample
- color_factor: one color per categorical level
"""

from .base import LegendEntry, Palette
from .binned import BinnedPalette, color_bin, pretty_breaks
from .color_spec import ResolvedColors, matplotlib_preset, resolve_color_spec
from .colors import parse_color, rgba_to_hex
from .errors import InvalidSpecError
from .factor import FactorPalette, color_factor
from .numeric import AutoDomainNumericPalette, NumericPalette, color_numeric
from .quantile import QuantilePalette, color_quantile

__all__ = [
    # Builders
    "color_numeric",
    "color_bin",
    "color_quantile",
    "color_factor",
    # Palette types
    "Palette",
    "NumericPalette",
    "AutoDomainNumericPalette",
    "BinnedPalette",
    "QuantilePalette",
    "FactorPalette",
    "LegendEntry",
    # Color specs
    "ResolvedColors",
    "resolve_color_spec",
    "matplotlib_preset",
    "parse_color",
    "rgba_to_hex",
    "pretty_breaks",
    # Errors
    "InvalidSpecError",
]
