"""
Feature descriptors and the session field registry.
"""

from featuremap.features.base import (
    DataType,
    DerivedFeature,
    Feature,
    Field,
    WildcardFeature,
    feature_names,
)
from featuremap.features.registry import FieldRegistry

__all__ = [
    "DataType",
    "DerivedFeature",
    "Feature",
    "Field",
    "FieldRegistry",
    "WildcardFeature",
    "feature_names",
]
