"""Categorical palettes.

Each level gets one color. When the number of levels equals the number of
discrete colors the mapping is positional; otherwise the colors are
interpolated so that level i of k sits at ramp position i / (k - 1).
Values that are not a known level map to NA.

Level order decides color assignment:
1. Explicit `levels`, in the order given
2. Categories of a pandas Categorical (or categorical Series) domain
3. First appearance in the domain sample
4. With neither, first appearance in each call's own input
"""

import logging
from typing import Any, Hashable, Iterable, Sequence

import numpy as np
import pandas as pd

from ..config import PaletteSettings
from .base import LegendEntry, Palette
from .color_spec import ColorSpec, PresetLookup, ResolvedColors, resolve_color_spec
from .colors import ordinal_positions, rgba_to_hex
from .errors import InvalidSpecError

logger = logging.getLogger(__name__)


def infer_levels(values: Any) -> list[Hashable]:
    """Distinct non-NA values in order of first appearance.

    Categorical input contributes its declared categories, in order,
    including categories that never occur.
    """
    if isinstance(values, pd.Categorical):
        return list(values.categories)
    if isinstance(values, pd.Series) and isinstance(values.dtype, pd.CategoricalDtype):
        return list(values.cat.categories)

    series = pd.Series(list(values), dtype=object)
    return series[series.notna()].unique().tolist()


def _is_na(value: Any) -> bool:
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


class FactorPalette(Palette):
    """Palette mapping discrete levels to colors.

    Attributes:
        levels: Ordered levels, or None for a palette that infers levels
            from each call's input
        level_colors: Mapping of level to hex color (empty when levels is None)
    """

    kind = "factor"

    def __init__(
        self,
        colors: ResolvedColors,
        levels: Sequence[Hashable] | None,
        na_color: str | None = None,
        alpha: bool = False,
    ):
        super().__init__(na_color=na_color, alpha=alpha)
        self._colors = colors
        self._levels = tuple(levels) if levels is not None else None
        self._lookup = self._build_lookup(self._levels) if self._levels is not None else {}

    @property
    def levels(self) -> tuple[Hashable, ...] | None:
        return self._levels

    @property
    def level_colors(self) -> dict[Hashable, str]:
        return dict(self._lookup)

    def __repr__(self) -> str:
        levels = list(self._levels) if self._levels is not None else "auto"
        return f"FactorPalette(levels={levels})"

    def _build_lookup(self, levels: Sequence[Hashable]) -> dict[Hashable, str]:
        rgba = self._colors.colors_at(ordinal_positions(len(levels)))
        return {
            level: rgba_to_hex(color, alpha=self._alpha)
            for level, color in zip(levels, rgba)
        }

    def _map_values(self, values: np.ndarray) -> list[str | None]:
        lookup = self._lookup
        if self._levels is None:
            levels = infer_levels(values)
            logger.debug(f"Auto levels inferred: {levels}")
            lookup = self._build_lookup(levels)

        result: list[str | None] = []
        for value in values:
            if _is_na(value):
                result.append(self._na_color)
                continue
            try:
                result.append(lookup.get(value, self._na_color))
            except TypeError:
                # Unhashable values cannot be levels
                result.append(self._na_color)
        return result

    def legend(self) -> list[LegendEntry]:
        """One legend row per level."""
        if self._levels is None:
            raise ValueError(
                "Palette has no fixed levels. Build it with levels or a domain to render a legend."
            )
        return [LegendEntry(label=str(level), color=color) for level, color in self._lookup.items()]


def _check_levels(levels: Iterable[Hashable]) -> list[Hashable]:
    levels = list(levels)
    if not levels:
        raise InvalidSpecError("At least one level is required")
    try:
        distinct = len(set(levels))
    except TypeError as e:
        raise InvalidSpecError(f"Levels must be hashable: {levels!r}") from e
    if distinct != len(levels):
        raise InvalidSpecError(f"Levels must be distinct: {levels!r}")
    return levels


def color_factor(
    colors: ColorSpec,
    domain: Iterable[Any] | None = None,
    *,
    levels: Sequence[Hashable] | None = None,
    na_color: str | None = None,
    alpha: bool = False,
    reverse: bool = False,
    preset_lookup: PresetLookup | None = None,
    settings: PaletteSettings | None = None,
) -> FactorPalette:
    """Build a categorical palette.

    Args:
        colors: Color tokens, preset name or ramp callable
        domain: Sample of values; distinct values in first-appearance order
            (or declared categories for categorical data) become the levels
        levels: Explicit ordered levels; takes precedence over `domain`
        na_color: Color for NA and unknown values (default None)
        alpha: Emit #RRGGBBAA instead of #RRGGBB
        reverse: Reverse the color order
        preset_lookup: Resolver for preset names (default: matplotlib)
        settings: Fallback na_color and alpha, e.g. PaletteSettings.from_env()

    Returns:
        FactorPalette; with neither levels nor domain, levels are inferred
        from each call's input

    Raises:
        InvalidSpecError: Bad color spec, duplicated or unhashable levels,
            or an empty level set

    Examples:
        >>> pal = color_factor(["red", "green", "blue"], levels=["a", "b", "c"])
        >>> pal(["a", "c", "d"])
        ['#FF0000', '#0000FF', None]
    """
    if settings is not None:
        na_color, alpha = settings.apply(na_color, alpha)
    resolved = resolve_color_spec(colors, preset_lookup=preset_lookup, reverse=reverse)

    if levels is not None:
        resolved_levels = _check_levels(levels)
    elif domain is not None:
        resolved_levels = _check_levels(infer_levels(domain))
    else:
        logger.debug("Building factor palette with auto levels")
        return FactorPalette(resolved, None, na_color=na_color, alpha=alpha)

    if resolved.is_discrete and resolved.n_stops != len(resolved_levels):
        logger.debug(
            f"Interpolating {resolved.n_stops} colors across {len(resolved_levels)} levels"
        )
    return FactorPalette(resolved, resolved_levels, na_color=na_color, alpha=alpha)
