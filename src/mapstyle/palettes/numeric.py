"""Continuous linear palettes.

Values are normalized against a [lo, hi] domain and mapped onto the color
spec by piecewise-linear interpolation between stops (or by calling the
ramp directly).

Two variants exist:
- NumericPalette: fixed domain, consistent colors across calls
- AutoDomainNumericPalette: no domain; each call rescales to its own
  input, so the same value can get different colors in different calls
"""

import logging
from typing import Any, Sequence

import numpy as np

from ..config import PaletteSettings
from .base import LegendEntry, Palette, format_number, to_float_array
from .color_spec import ColorSpec, PresetLookup, ResolvedColors, resolve_color_spec
from .colors import rgba_to_hex
from .errors import InvalidSpecError

logger = logging.getLogger(__name__)


def finite_range(values: np.ndarray) -> tuple[float, float] | None:
    """Min and max of the finite entries, or None if there are none."""
    finite = values[np.isfinite(values)]
    if finite.size == 0:
        return None
    return float(finite.min()), float(finite.max())


def map_linear(
    colors: ResolvedColors,
    x: np.ndarray,
    lo: float,
    hi: float,
    clamp: bool,
    na_color: str | None,
    alpha: bool,
) -> list[str | None]:
    """Map floats onto the color spec over [lo, hi].

    NaN is always NA. Values outside the domain are clamped to the nearest
    bound, or NA when clamp is False. A zero-width domain maps every
    accepted value to ramp position 0.
    """
    result: list[str | None] = [na_color] * len(x)

    valid = ~np.isnan(x)
    if not clamp:
        valid &= (x >= lo) & (x <= hi)
    if not valid.any():
        return result

    span = hi - lo
    if span > 0:
        t = np.clip((x[valid] - lo) / span, 0.0, 1.0)
    else:
        t = np.zeros(int(valid.sum()))

    rgba = colors.colors_at(t)
    for i, color in zip(np.flatnonzero(valid), rgba):
        result[i] = rgba_to_hex(color, alpha=alpha)
    return result


class NumericPalette(Palette):
    """Continuous palette over a fixed [lo, hi] domain.

    Attributes:
        domain: (lo, hi) tuple the palette is calibrated against
        clamp: Whether out-of-domain values clamp to the bounds (else NA)
    """

    kind = "numeric"

    def __init__(
        self,
        colors: ResolvedColors,
        domain: tuple[float, float],
        na_color: str | None = None,
        alpha: bool = False,
        clamp: bool = True,
    ):
        super().__init__(na_color=na_color, alpha=alpha)
        self._colors = colors
        self._domain = (float(domain[0]), float(domain[1]))
        self._clamp = clamp

    @property
    def domain(self) -> tuple[float, float]:
        return self._domain

    @property
    def clamp(self) -> bool:
        return self._clamp

    def __repr__(self) -> str:
        lo, hi = self._domain
        return f"NumericPalette(domain=[{lo:g}, {hi:g}], clamp={self._clamp})"

    def _map_values(self, values: np.ndarray) -> list[str | None]:
        lo, hi = self._domain
        return map_linear(
            self._colors,
            to_float_array(values),
            lo,
            hi,
            self._clamp,
            self._na_color,
            self._alpha,
        )

    def legend(self, n: int = 5) -> list[LegendEntry]:
        """Legend rows for `n` evenly spaced values across the domain."""
        lo, hi = self._domain
        values = np.linspace(lo, hi, max(n, 1)) if hi > lo else np.array([lo])
        colors = self._map_values(values.astype(object))
        return [
            LegendEntry(label=format_number(v), color=c)
            for v, c in zip(values, colors)
        ]


class AutoDomainNumericPalette(Palette):
    """Continuous palette that infers [lo, hi] from each call's input.

    The domain is recomputed on every call and never cached: applying the
    palette to two different batches produces two different color scales.
    Build with a fixed domain when colors must be comparable across calls.
    A scalar input is its own one-value sample, so it always gets ramp
    position 0.
    """

    kind = "numeric"

    def __init__(
        self,
        colors: ResolvedColors,
        na_color: str | None = None,
        alpha: bool = False,
    ):
        super().__init__(na_color=na_color, alpha=alpha)
        self._colors = colors

    @property
    def domain(self) -> None:
        return None

    def _map_values(self, values: np.ndarray) -> list[str | None]:
        x = to_float_array(values)
        bounds = finite_range(x)
        if bounds is None:
            return [self._na_color] * len(x)

        lo, hi = bounds
        logger.debug(f"Auto domain inferred as [{lo:g}, {hi:g}] from {len(x)} values")
        return map_linear(self._colors, x, lo, hi, True, self._na_color, self._alpha)

    def legend(self) -> list[LegendEntry]:
        raise ValueError(
            "Palette has no fixed domain. Build it with a domain to render a legend."
        )


def color_numeric(
    colors: ColorSpec,
    domain: Sequence[float] | np.ndarray | None,
    *,
    na_color: str | None = None,
    alpha: bool = False,
    reverse: bool = False,
    clamp: bool = True,
    preset_lookup: PresetLookup | None = None,
    settings: PaletteSettings | None = None,
) -> NumericPalette | AutoDomainNumericPalette:
    """Build a continuous linear palette.

    Args:
        colors: Color tokens, preset name or ramp callable
        domain: [lo, hi], or any numeric sample whose finite min/max become
            the bounds. None builds an auto-domain palette.
        na_color: Color for NA values (default None)
        alpha: Emit #RRGGBBAA instead of #RRGGBB
        reverse: Reverse the color order
        clamp: Clamp out-of-domain values to the bounds; False maps them to NA
        preset_lookup: Resolver for preset names (default: matplotlib)
        settings: Fallback na_color and alpha, e.g. PaletteSettings.from_env()

    Returns:
        NumericPalette, or AutoDomainNumericPalette when domain is None

    Raises:
        InvalidSpecError: Bad color spec, or a domain with no finite values

    Examples:
        >>> pal = color_numeric(["black", "white"], [0, 10])
        >>> pal([0, 5, 10, 20])
        ['#000000', '#808080', '#FFFFFF', '#FFFFFF']
    """
    if settings is not None:
        na_color, alpha = settings.apply(na_color, alpha)
    resolved = resolve_color_spec(colors, preset_lookup=preset_lookup, reverse=reverse)

    if domain is None:
        logger.debug("Building numeric palette with auto domain")
        return AutoDomainNumericPalette(resolved, na_color=na_color, alpha=alpha)

    bounds = finite_range(to_float_array(np.ravel(np.asarray(domain, dtype=object))))
    if bounds is None:
        raise InvalidSpecError(f"Domain has no finite values: {domain!r}")

    logger.debug(f"Building numeric palette over [{bounds[0]:g}, {bounds[1]:g}]")
    return NumericPalette(resolved, bounds, na_color=na_color, alpha=alpha, clamp=clamp)
