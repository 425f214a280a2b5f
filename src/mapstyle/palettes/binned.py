"""Binned palettes.

Values are cut into intervals by an ordered set of breaks and each interval
gets one color. With the default right=False convention, n breaks define
n - 1 bins [b_i, b_i+1), the last one closed on both ends. Values outside
[b_0, b_last] are NA.

Breaks can be given explicitly or computed from a sample:
- pretty=True: round-number breaks covering the sample range. The number
  of bins may differ from the requested count; check `palette.breaks`.
- pretty=False: exactly `bins` equal-width intervals over [min, max].
"""

import logging
from typing import Sequence

import numpy as np
from matplotlib.ticker import MaxNLocator

from ..config import DEFAULT_BINS, PaletteSettings
from .base import LegendEntry, Palette, format_number, to_float_array
from .color_spec import ColorSpec, PresetLookup, ResolvedColors, resolve_color_spec
from .colors import ordinal_positions, rgba_to_hex
from .errors import InvalidSpecError
from .numeric import finite_range

logger = logging.getLogger(__name__)


def assign_bins(x: np.ndarray, breaks: np.ndarray, right: bool = False) -> np.ndarray:
    """Bin index for each value, or -1 when the value falls in no bin.

    Breaks must be non-decreasing. Repeated breaks produce zero-width bins
    that stay empty: a value equal to a repeated break lands in the highest
    bin whose edge it reaches (right=False) or the lowest (right=True).

    Args:
        x: Float values (NaN allowed)
        breaks: Non-decreasing bin edges, at least two
        right: Close intervals on the right, (b_i, b_i+1], first bin closed

    Returns:
        Integer array of bin indices in [0, len(breaks) - 2], -1 for NA
    """
    n_bins = len(breaks) - 1
    lo, hi = breaks[0], breaks[-1]

    if right:
        idx = np.searchsorted(breaks, x, side="left") - 1
        idx = np.where(x == lo, 0, idx)
    else:
        idx = np.searchsorted(breaks, x, side="right") - 1
        idx = np.where(x == hi, n_bins - 1, idx)

    outside = np.isnan(x) | (x < lo) | (x > hi)
    return np.where(outside, -1, idx).astype(int)


def _clean(value: float) -> float:
    """Strip float noise from a computed break (0.30000000000000004 -> 0.3)."""
    return float(f"{value:.12g}")


def _clean_breaks(raw: np.ndarray, lo: float, hi: float) -> np.ndarray:
    """Clean computed breaks without losing coverage of [lo, hi].

    If cleaning collapses neighbouring breaks (large values over a narrow
    range), the raw breaks are kept. Outer breaks are then stretched to
    reach `lo` and `hi`.
    """
    breaks = np.array([_clean(b) for b in raw])
    if np.any(np.diff(breaks) <= 0):
        breaks = np.array(raw, dtype=float)
    breaks[0] = min(breaks[0], lo)
    breaks[-1] = max(breaks[-1], hi)
    return breaks


def _widen(lo: float, hi: float) -> tuple[float, float]:
    """Give a zero-width range some extent so it can be cut into bins."""
    if hi > lo:
        return lo, hi
    return lo - 0.5, hi + 0.5


def pretty_breaks(lo: float, hi: float, n: int) -> np.ndarray:
    """Round-number breaks covering [lo, hi] with roughly `n` bins.

    Uses matplotlib's MaxNLocator, which picks steps of 1, 2, 2.5, 5 or 10
    times a power of ten. The result has at most `n` bins and always covers
    the full range, so the first and last break may lie outside [lo, hi].

    Examples:
        >>> pretty_breaks(0, 100, 5)
        array([  0.,  20.,  40.,  60.,  80., 100.])
    """
    lo, hi = _widen(lo, hi)
    ticks = MaxNLocator(nbins=n).tick_values(lo, hi)
    return _clean_breaks(np.asarray(ticks, dtype=float), lo, hi)


def equal_width_breaks(lo: float, hi: float, n: int) -> np.ndarray:
    """Exactly `n` equal-width bins spanning [lo, hi].

    The outer breaks are `lo` and `hi` themselves; only interior breaks
    are cleaned.
    """
    lo, hi = _widen(lo, hi)
    raw = np.linspace(lo, hi, n + 1)
    breaks = np.array([_clean(b) for b in raw])
    breaks[0], breaks[-1] = lo, hi
    if np.any(np.diff(breaks) <= 0):
        return raw
    return breaks


class BinnedPalette(Palette):
    """Palette assigning one color per bin.

    Attributes:
        breaks: Bin edges actually used, as a tuple of floats
        n_bins: Number of bins (len(breaks) - 1)
        bin_colors: One hex color per bin
        right: Whether intervals are closed on the right
    """

    kind = "bin"

    def __init__(
        self,
        colors: ResolvedColors,
        breaks: Sequence[float] | np.ndarray,
        na_color: str | None = None,
        alpha: bool = False,
        right: bool = False,
    ):
        super().__init__(na_color=na_color, alpha=alpha)
        self._breaks = np.asarray(breaks, dtype=float).copy()
        self._breaks.setflags(write=False)
        self._right = right

        rgba = colors.colors_at(ordinal_positions(len(self._breaks) - 1))
        self._bin_colors = tuple(rgba_to_hex(c, alpha=alpha) for c in rgba)

    @property
    def breaks(self) -> tuple[float, ...]:
        return tuple(float(b) for b in self._breaks)

    @property
    def n_bins(self) -> int:
        return len(self._breaks) - 1

    @property
    def bin_colors(self) -> tuple[str, ...]:
        return self._bin_colors

    @property
    def right(self) -> bool:
        return self._right

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(breaks={list(self.breaks)}, right={self._right})"

    def bin_index(self, values) -> np.ndarray:
        """Bin index per value (-1 for NA)."""
        return assign_bins(to_float_array(np.atleast_1d(values)), self._breaks, self._right)

    def _map_values(self, values: np.ndarray) -> list[str | None]:
        idx = assign_bins(to_float_array(values), self._breaks, self._right)
        return [self._bin_colors[i] if i >= 0 else self._na_color for i in idx]

    def _interval_label(self, i: int) -> str:
        lo = format_number(self._breaks[i])
        hi = format_number(self._breaks[i + 1])
        return f"{lo} - {hi}"

    def legend(self) -> list[LegendEntry]:
        """One legend row per bin, labelled with its interval."""
        return [
            LegendEntry(label=self._interval_label(i), color=color)
            for i, color in enumerate(self._bin_colors)
        ]


def _explicit_breaks(bins: Sequence[float]) -> np.ndarray:
    breaks = to_float_array(np.ravel(np.asarray(bins, dtype=object)))
    if len(breaks) < 2:
        raise InvalidSpecError(f"At least two breaks are required, got {len(breaks)}")
    if not np.all(np.isfinite(breaks)):
        raise InvalidSpecError(f"Breaks must be finite numbers: {list(bins)!r}")

    breaks = np.sort(breaks)
    if np.any(np.diff(breaks) == 0):
        raise InvalidSpecError(f"Breaks must be distinct: {list(bins)!r}")
    return breaks


def color_bin(
    colors: ColorSpec,
    domain: Sequence[float] | np.ndarray | None,
    bins: int | Sequence[float] = DEFAULT_BINS,
    *,
    pretty: bool = True,
    right: bool = False,
    na_color: str | None = None,
    alpha: bool = False,
    reverse: bool = False,
    preset_lookup: PresetLookup | None = None,
    settings: PaletteSettings | None = None,
) -> BinnedPalette:
    """Build a binned palette.

    Args:
        colors: Color tokens, preset name or ramp callable
        domain: Numeric sample whose range the bins cover. May be None when
            `bins` is an explicit sequence of breaks.
        bins: Bin count (>= 1) or an explicit sequence of breaks. Explicit
            breaks are sorted and must be distinct.
        pretty: With a bin count, use round-number breaks. The actual bin
            count is then `palette.n_bins` and may differ from `bins`.
        right: Close intervals on the right instead of the left
        na_color: Color for NA values (default None)
        alpha: Emit #RRGGBBAA instead of #RRGGBB
        reverse: Reverse the color order
        preset_lookup: Resolver for preset names (default: matplotlib)
        settings: Fallback na_color and alpha, e.g. PaletteSettings.from_env()

    Returns:
        BinnedPalette exposing the breaks it uses

    Raises:
        InvalidSpecError: Bad color spec, bins < 1, fewer than two or
            duplicated breaks, or no finite domain values with a bin count

    Examples:
        >>> pal = color_bin(["#FF0000", "#00FF00", "#0000FF"], None, [0, 10, 20, 30])
        >>> pal([15, 30, 35])
        ['#00FF00', '#0000FF', None]
    """
    if settings is not None:
        na_color, alpha = settings.apply(na_color, alpha)
    resolved = resolve_color_spec(colors, preset_lookup=preset_lookup, reverse=reverse)

    if isinstance(bins, (int, np.integer)) and not isinstance(bins, bool):
        if bins < 1:
            raise InvalidSpecError(f"Bin count must be at least 1, got {bins}")
        if domain is None:
            raise InvalidSpecError("A domain is required when bins is a count")

        bounds = finite_range(to_float_array(np.ravel(np.asarray(domain, dtype=object))))
        if bounds is None:
            raise InvalidSpecError(f"Domain has no finite values: {domain!r}")

        lo, hi = bounds
        if pretty:
            breaks = pretty_breaks(lo, hi, int(bins))
            if len(breaks) - 1 != bins:
                logger.info(
                    f"Pretty breaks produced {len(breaks) - 1} bins "
                    f"instead of the requested {bins}: {breaks.tolist()}"
                )
        else:
            breaks = equal_width_breaks(lo, hi, int(bins))
    else:
        breaks = _explicit_breaks(bins)

    logger.debug(f"Building binned palette with breaks {breaks.tolist()}")
    return BinnedPalette(resolved, breaks, na_color=na_color, alpha=alpha, right=right)
