"""Three-layer style resolution for map features.

Precedence, highest first:
1. Feature-level style (feature["properties"]["style"])
2. Collection-level style (collection["style"])
3. Caller defaults

Resolution is attribute by attribute. A None value counts as undefined and
falls through to the next layer. Attributes missing from every layer are
left out so the renderer can apply its own fallback. Attribute names are
never validated; unknown ones pass through.
"""

from collections.abc import Mapping
from typing import Any, Optional

StyleLayer = Mapping[str, Any]


def _check_layer(name: str, layer: Any) -> None:
    if layer is not None and not isinstance(layer, Mapping):
        raise TypeError(f"{name} must be a mapping or None, got {type(layer).__name__}")


def resolve_style(
    feature_style: Optional[StyleLayer] = None,
    collection_style: Optional[StyleLayer] = None,
    defaults: Optional[StyleLayer] = None,
) -> dict[str, Any]:
    """Merge the three style layers of one feature.

    Args:
        feature_style: Per-feature overrides (highest precedence)
        collection_style: Collection-wide style
        defaults: Caller-supplied defaults (lowest precedence)

    Returns:
        New dict holding the union of defined attributes. Inputs are not
        modified.

    Raises:
        TypeError: If a layer is neither a mapping nor None

    Examples:
        >>> resolve_style({"color": "red"}, {"color": "blue", "weight": 2},
        ...               {"weight": 1, "opacity": 0.5})
        {'weight': 2, 'opacity': 0.5, 'color': 'red'}
    """
    _check_layer("feature_style", feature_style)
    _check_layer("collection_style", collection_style)
    _check_layer("defaults", defaults)

    resolved: dict[str, Any] = {}
    for layer in (defaults, collection_style, feature_style):
        if not layer:
            continue
        for attribute, value in layer.items():
            if value is not None:
                resolved[attribute] = value
    return resolved
