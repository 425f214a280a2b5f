"""Package defaults for palettes and feature styles.

Values mirror the defaults of the leaflet mapping library so that resolved
styles and palettes look the same as the renderer's own fallbacks.
"""

import os
from dataclasses import dataclass
from typing import Any

# Palette builder defaults
DEFAULT_BINS = 7
DEFAULT_QUANTILES = 4

# Environment variables read by PaletteSettings.from_env()
NA_COLOR_ENV = "MAPSTYLE_NA_COLOR"
ALPHA_ENV = "MAPSTYLE_ALPHA"

# Leaflet L.Path option defaults
DEFAULT_PATH_STYLE: dict[str, Any] = {
    "stroke": True,
    "color": "#03F",
    "weight": 5,
    "opacity": 0.5,
    "fill": True,
    "fillOpacity": 0.2,
}


@dataclass(frozen=True)
class PaletteSettings:
    """Shared palette options, passed to builders as `settings=`.

    Attributes:
        na_color: Color returned for NA values, or None for a null sentinel
        alpha: Whether palettes emit #RRGGBBAA instead of #RRGGBB
    """

    na_color: str | None = None
    alpha: bool = False

    @classmethod
    def from_env(cls) -> "PaletteSettings":
        """Build settings from MAPSTYLE_* environment variables."""
        na_color = os.environ.get(NA_COLOR_ENV) or None
        alpha = os.environ.get(ALPHA_ENV, "").strip().lower() in {"1", "true", "yes"}
        return cls(na_color=na_color, alpha=alpha)

    def apply(self, na_color: str | None, alpha: bool) -> tuple[str | None, bool]:
        """Fill builder options the caller left unset.

        An explicit `na_color` wins; `alpha` is on if either side asks for it.
        """
        if na_color is None:
            na_color = self.na_color
        return na_color, alpha or self.alpha


def default_path_style() -> dict[str, Any]:
    """Return a fresh copy of the leaflet path style defaults."""
    return dict(DEFAULT_PATH_STYLE)
