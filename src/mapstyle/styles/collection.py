"""Style resolution across GeoJSON and TopoJSON feature collections.

Collections are already-parsed dicts and are treated as read-only:
functions here return new structures and never edit their input.

Supported shapes:
- GeoJSON FeatureCollection: {"type": "FeatureCollection", "features": [...]}
- GeoJSON Feature: {"type": "Feature", "properties": {...}, ...}
- TopoJSON Topology: {"type": "Topology", "objects": {name: {...}}}, where
  each object is a GeometryCollection (its "geometries" are the features)
  or a single geometry carrying its own "properties"

Any of them may carry a collection-level "style" at the top.
"""

import copy
import logging
from collections.abc import Mapping
from typing import Any, Iterator, Optional, Sequence

import pandas as pd

from ..config import default_path_style
from ..palettes.base import Palette
from .resolver import StyleLayer, resolve_style

logger = logging.getLogger(__name__)


def iter_features(collection: Mapping[str, Any]) -> Iterator[dict[str, Any]]:
    """Yield the features of a collection in document order.

    Raises:
        ValueError: If the structure is not a recognized collection shape
    """
    kind = collection.get("type")

    if kind == "Feature":
        yield collection
    elif kind == "Topology":
        for obj in (collection.get("objects") or {}).values():
            if obj.get("type") == "GeometryCollection":
                yield from obj.get("geometries") or []
            else:
                yield obj
    elif kind == "FeatureCollection" or "features" in collection:
        yield from collection.get("features") or []
    else:
        raise ValueError(f"Unsupported collection type: {kind!r}")


def feature_style(feature: Mapping[str, Any]) -> Optional[StyleLayer]:
    """The feature's properties.style layer, if it has one."""
    properties = feature.get("properties")
    if not isinstance(properties, Mapping):
        return None
    style = properties.get("style")
    return style if isinstance(style, Mapping) else None


def collection_style(collection: Mapping[str, Any]) -> Optional[StyleLayer]:
    """The collection-level style layer, if it has one."""
    style = collection.get("style")
    return style if isinstance(style, Mapping) else None


def resolve_collection_styles(
    collection: Mapping[str, Any],
    defaults: Optional[StyleLayer] = None,
) -> list[dict[str, Any]]:
    """Resolve the effective style of every feature in a collection.

    Each feature is resolved independently against the same collection
    style and defaults.

    Args:
        collection: Parsed GeoJSON or TopoJSON structure
        defaults: Caller defaults (lowest precedence). None uses the leaflet
            path defaults from default_path_style(); pass {} for no defaults.

    Returns:
        One resolved style dict per feature, in iter_features() order
    """
    if defaults is None:
        defaults = default_path_style()
    shared = collection_style(collection)
    styles = [
        resolve_style(feature_style(feature), shared, defaults)
        for feature in iter_features(collection)
    ]
    logger.debug(f"Resolved styles for {len(styles)} features")
    return styles


def apply_feature_styles(
    collection: Mapping[str, Any],
    styles: Sequence[Optional[StyleLayer]] | Mapping[Any, StyleLayer],
) -> dict[str, Any]:
    """Return a copy of the collection with per-feature style overrides.

    Overrides are merged on top of each feature's existing properties.style;
    None values in an override are ignored.

    Args:
        collection: Parsed GeoJSON or TopoJSON structure (left untouched)
        styles: Either a sequence with one override (or None) per feature in
            iter_features() order, or a mapping of feature "id" to override

    Returns:
        Deep copy of the collection carrying the merged styles

    Raises:
        ValueError: If a sequence of overrides does not match the feature count
    """
    result = copy.deepcopy(dict(collection))
    features = list(iter_features(result))

    if isinstance(styles, Mapping):
        overrides = [styles.get(feature.get("id")) for feature in features]
    else:
        overrides = list(styles)
        if len(overrides) != len(features):
            raise ValueError(
                f"Got {len(overrides)} style overrides for {len(features)} features"
            )

    for feature, override in zip(features, overrides):
        if not override:
            continue
        properties = feature.get("properties")
        if not isinstance(properties, dict):
            properties = {}
            feature["properties"] = properties
        properties["style"] = resolve_style(override, feature_style(feature))

    return result


def style_from_palette(
    palette: Palette,
    values: Any,
    attribute: str = "fillColor",
) -> list[dict[str, Any]]:
    """Per-feature style overrides setting one color attribute from a palette.

    Values mapped to NA produce an empty override, so lower layers still
    decide that attribute.

    Example:
        >>> pal = color_numeric("viridis", populations)
        >>> styled = apply_feature_styles(states, style_from_palette(pal, populations))
    """
    colors = palette(values)
    if isinstance(colors, pd.Series):
        colors = colors.tolist()
    elif isinstance(colors, str) or colors is None:
        colors = [colors]

    return [{attribute: color} if color is not None else {} for color in colors]
