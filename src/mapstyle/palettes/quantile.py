"""Quantile palettes.

Breaks sit at sample quantiles (linear interpolation between sorted
values), so each bin holds roughly the same number of observations.
When the sample has fewer distinct values than bins, some cut points
coincide. Those zero-width bins stay empty and keep their color slot, so
the palette always has `n` colors.
"""

import logging
from typing import Sequence

import numpy as np

from ..config import DEFAULT_QUANTILES, PaletteSettings
from .base import format_number, to_float_array
from .binned import BinnedPalette
from .color_spec import ColorSpec, PresetLookup, ResolvedColors, resolve_color_spec
from .errors import InvalidSpecError

logger = logging.getLogger(__name__)


class QuantilePalette(BinnedPalette):
    """Binned palette whose breaks are sample quantiles.

    Attributes:
        probs: Probabilities the breaks were computed at
    """

    kind = "quantile"

    def __init__(
        self,
        colors: ResolvedColors,
        breaks: Sequence[float] | np.ndarray,
        probs: Sequence[float] | np.ndarray,
        na_color: str | None = None,
        alpha: bool = False,
        right: bool = False,
    ):
        super().__init__(colors, breaks, na_color=na_color, alpha=alpha, right=right)
        self._probs = tuple(float(p) for p in probs)

    @property
    def probs(self) -> tuple[float, ...]:
        return self._probs

    def _interval_label(self, i: int) -> str:
        lo = format_number(self._probs[i] * 100)
        hi = format_number(self._probs[i + 1] * 100)
        return f"{lo}% - {hi}%"


def _validate_probs(probs: Sequence[float]) -> np.ndarray:
    probs = np.asarray(probs, dtype=float)
    if probs.ndim != 1 or len(probs) < 2:
        raise InvalidSpecError("At least two quantile probabilities are required")
    if np.any(np.isnan(probs)) or probs.min() < 0 or probs.max() > 1:
        raise InvalidSpecError(f"Quantile probabilities must lie in [0, 1]: {probs.tolist()}")
    if np.any(np.diff(probs) <= 0):
        raise InvalidSpecError(f"Quantile probabilities must be increasing: {probs.tolist()}")
    return probs


def color_quantile(
    colors: ColorSpec,
    domain: Sequence[float] | np.ndarray,
    n: int = DEFAULT_QUANTILES,
    *,
    probs: Sequence[float] | None = None,
    right: bool = False,
    na_color: str | None = None,
    alpha: bool = False,
    reverse: bool = False,
    preset_lookup: PresetLookup | None = None,
    settings: PaletteSettings | None = None,
) -> QuantilePalette:
    """Build a quantile palette.

    Args:
        colors: Color tokens, preset name or ramp callable
        domain: Full numeric sample; NaN values are ignored. The sample is
            copied at build time and must not be mutated while building.
        n: Number of quantile bins (>= 1)
        probs: Explicit increasing probabilities in [0, 1]; overrides `n`
        right: Close intervals on the right instead of the left
        na_color: Color for NA values (default None)
        alpha: Emit #RRGGBBAA instead of #RRGGBB
        reverse: Reverse the color order
        preset_lookup: Resolver for preset names (default: matplotlib)
        settings: Fallback na_color and alpha, e.g. PaletteSettings.from_env()

    Returns:
        QuantilePalette exposing its breaks and probabilities

    Raises:
        InvalidSpecError: Bad color spec, n < 1, invalid probs, a missing or
            non-iterable sample, or a sample with no numeric values

    Examples:
        >>> pal = color_quantile(["white", "black"], range(1, 11), n=2)
        >>> pal.breaks
        (1.0, 5.5, 10.0)
    """
    if probs is None:
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 1:
            raise InvalidSpecError(f"Quantile count must be an integer >= 1, got {n!r}")
        probs = np.linspace(0.0, 1.0, int(n) + 1)
    else:
        probs = _validate_probs(probs)

    if settings is not None:
        na_color, alpha = settings.apply(na_color, alpha)
    resolved = resolve_color_spec(colors, preset_lookup=preset_lookup, reverse=reverse)

    if domain is None or isinstance(domain, (str, bytes)):
        raise InvalidSpecError(f"Quantile palettes need a sample of values, got {domain!r}")
    try:
        values = list(domain)
    except TypeError as e:
        raise InvalidSpecError(f"Quantile palettes need a sample of values, got {domain!r}") from e
    sample = to_float_array(np.ravel(np.asarray(values, dtype=object)))
    sample = sample[~np.isnan(sample)]
    if sample.size == 0:
        raise InvalidSpecError("Quantile palettes need a sample with at least one number")

    breaks = np.quantile(sample, probs, method="linear")
    if np.any(np.diff(breaks) == 0):
        logger.info(
            f"Sample has too few distinct values for {len(probs) - 1} quantile bins; "
            f"empty bins share a boundary: {breaks.tolist()}"
        )

    logger.debug(f"Building quantile palette with breaks {breaks.tolist()}")
    return QuantilePalette(
        resolved, breaks, probs, na_color=na_color, alpha=alpha, right=right
    )
