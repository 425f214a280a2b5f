"""Base class shared by all palette kinds.

A palette is built once and then applied any number of times. Application
accepts a scalar or a batch (list, tuple, numpy array, pandas Series) and
never raises for per-value anomalies: undefined, out-of-domain or unknown
values come back as the NA color (None unless configured).
"""

import numbers
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class LegendEntry:
    """One row of a palette legend.

    Attributes:
        label: Human-readable label for the value, bin or level
        color: Hex color drawn for it
    """

    label: str
    color: str


def is_scalar(values: Any) -> bool:
    """Whether `values` should be treated as a single input value."""
    return isinstance(values, (str, bytes)) or np.ndim(values) == 0


def to_object_array(values: Any) -> np.ndarray:
    """Copy a batch of values into a 1-D object array, one slot per item."""
    items = list(values)
    array = np.empty(len(items), dtype=object)
    for i, item in enumerate(items):
        array[i] = item
    return array


def to_float_array(values: Any) -> np.ndarray:
    """Coerce a batch of values to floats, with NaN for anything non-numeric.

    Only real numbers (Python or numpy) count as numeric. Strings are NA
    even when they look like numbers ("5"), as are None, containers and
    any other object.
    """
    series = pd.Series(
        [v if isinstance(v, numbers.Real) else None for v in values], dtype=object
    )
    return pd.to_numeric(series, errors="coerce").to_numpy(dtype=float, na_value=np.nan)


def format_number(value: float) -> str:
    """Compact label formatting for legend numbers."""
    return f"{value:,.6g}"


class Palette(ABC):
    """Abstract base class for value-to-color palettes.

    Subclasses implement `_map_values`, which receives a 1-D object array
    and returns one color (or None) per element.

    Attributes:
        kind: Palette family name ("numeric", "bin", "quantile", "factor")
        na_color: Color returned for NA values
        alpha: Whether colors carry an alpha channel (#RRGGBBAA)

    Example:
        >>> pal = color_numeric(["white", "navy"], [0, 100])
        >>> pal(50)
        '#8080C0'
        >>> pal([0, None, 100])
        ['#FFFFFF', None, '#000080']
    """

    kind: str = "palette"

    def __init__(self, na_color: str | None = None, alpha: bool = False):
        self._na_color = na_color
        self._alpha = alpha

    @property
    def na_color(self) -> str | None:
        return self._na_color

    @property
    def alpha(self) -> bool:
        return self._alpha

    def __call__(self, values: Any) -> Any:
        """Map values to colors.

        Args:
            values: Scalar, list, tuple, numpy array or pandas Series

        Returns:
            A color string (or NA) for scalar input, a pandas Series aligned
            on the input index for Series input, otherwise a list
        """
        if is_scalar(values):
            if isinstance(values, np.ndarray):
                values = values.item()
            return self._map_values(np.array([values], dtype=object))[0]

        if isinstance(values, pd.Series):
            colors = self._map_values(values.to_numpy(dtype=object))
            return pd.Series(colors, index=values.index, name=values.name, dtype=object)

        return self._map_values(to_object_array(values))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(kind={self.kind!r})"

    @abstractmethod
    def _map_values(self, values: np.ndarray) -> list[str | None]:
        """Map a 1-D object array to a list of colors."""
        pass

    @abstractmethod
    def legend(self) -> list[LegendEntry]:
        """Legend rows describing the palette's calibrated domain."""
        pass
