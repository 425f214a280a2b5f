"""mapstyle: palettes and style resolution for web map layers."""

from .config import PaletteSettings, default_path_style
from .palettes import (
    InvalidSpecError,
    LegendEntry,
    Palette,
    color_bin,
    color_factor,
    color_numeric,
    color_quantile,
)
from .styles import (
    apply_feature_styles,
    resolve_collection_styles,
    resolve_style,
    style_from_palette,
)

__version__ = "0.1.0"

__all__ = [
    "color_numeric",
    "color_bin",
    "color_quantile",
    "color_factor",
    "Palette",
    "LegendEntry",
    "InvalidSpecError",
    "resolve_style",
    "resolve_collection_styles",
    "apply_feature_styles",
    "style_from_palette",
    "PaletteSettings",
    "default_path_style",
]
