"""Style resolution for GeoJSON/TopoJSON features.

Merges caller defaults, collection-level style and per-feature
properties.style into one effective style per feature.
"""

from .collection import (
    apply_feature_styles,
    collection_style,
    feature_style,
    iter_features,
    resolve_collection_styles,
    style_from_palette,
)
from .resolver import StyleLayer, resolve_style

__all__ = [
    "StyleLayer",
    "resolve_style",
    "resolve_collection_styles",
    "apply_feature_styles",
    "style_from_palette",
    "iter_features",
    "feature_style",
    "collection_style",
]
