"""Color token parsing, hex formatting and stop interpolation.

All palettes share these helpers:
- Tokens are parsed with matplotlib, so hex strings (#RGB, #RRGGBB,
  #RRGGBBAA), CSS/X11 names and RGB(A) float tuples are all accepted
- Colors are held internally as RGBA floats in [0, 1]
- Output is always an uppercase #RRGGBB or #RRGGBBAA string
"""

from typing import Any, Sequence

import matplotlib.colors as mcolors
import numpy as np

from .errors import InvalidSpecError


def parse_color(token: Any) -> tuple[float, float, float, float]:
    """Parse a color token to an RGBA float tuple.

    Args:
        token: Hex string, named color or RGB(A) tuple

    Returns:
        Tuple of (R, G, B, A) floats in [0, 1]

    Raises:
        InvalidSpecError: If matplotlib cannot interpret the token

    Examples:
        >>> parse_color("red")
        (1.0, 0.0, 0.0, 1.0)
        >>> parse_color("#00FF0080")[3]
        0.5019607843137255
    """
    try:
        return mcolors.to_rgba(token)
    except (ValueError, TypeError) as e:
        raise InvalidSpecError(f"Invalid color token: {token!r}") from e


def parse_colors(tokens: Sequence[Any]) -> np.ndarray:
    """Parse a sequence of color tokens into an (n, 4) RGBA array."""
    if len(tokens) == 0:
        raise InvalidSpecError("Color sequence must contain at least one color")
    return np.array([parse_color(t) for t in tokens], dtype=float)


def rgba_to_hex(rgba: Sequence[float], alpha: bool = False) -> str:
    """Format an RGBA float tuple as a hex color string.

    Args:
        rgba: (R, G, B, A) floats in [0, 1]; A may be omitted
        alpha: Append the alpha channel (#RRGGBBAA)

    Returns:
        Uppercase hex color string (e.g., "#6495ED")
    """
    channels = np.clip(np.round(np.asarray(rgba, dtype=float) * 255), 0, 255).astype(int)
    if len(channels) == 3:
        channels = np.append(channels, 255)
    r, g, b, a = (int(c) for c in channels[:4])
    if alpha:
        return f"#{r:02X}{g:02X}{b:02X}{a:02X}"
    return f"#{r:02X}{g:02X}{b:02X}"


def ordinal_positions(count: int) -> np.ndarray:
    """Evenly spaced ramp positions for `count` ordered items.

    A single item sits at position 0; otherwise item i sits at i / (count - 1).
    """
    if count <= 1:
        return np.zeros(max(count, 0))
    return np.linspace(0.0, 1.0, count)


def interpolate_stops(stops: np.ndarray, positions: np.ndarray) -> np.ndarray:
    """Piecewise-linear interpolation between color stops.

    Stop i of n sits at position i / (n - 1). Each RGBA channel is
    interpolated independently.

    Args:
        stops: (n, 4) RGBA array, n >= 1
        positions: Ramp positions in [0, 1]

    Returns:
        (len(positions), 4) RGBA array
    """
    positions = np.clip(np.asarray(positions, dtype=float), 0.0, 1.0)
    n = len(stops)
    if n == 1:
        return np.repeat(stops[:1], len(positions), axis=0)

    xp = np.linspace(0.0, 1.0, n)
    return np.column_stack(
        [np.interp(positions, xp, stops[:, channel]) for channel in range(4)]
    )
