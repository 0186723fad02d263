"""
Column selector resolution.

Turns the column selector of a fitted entry into concrete features. With a
non-empty feature context, names and positions address that context. With
an empty context (raw input), they address registry fields, which are
created on first use and wrapped in wildcard features.
"""

import numbers
from collections.abc import Sequence
from typing import Any

from featuremap.config.settings import ResolverConfig
from featuremap.errors import (
    ColumnIndexError,
    MissingColumnError,
    MixedSelectorError,
    UnsupportedSelectorError,
)
from featuremap.features.base import Feature, WildcardFeature, feature_names
from featuremap.features.registry import FieldRegistry

ColumnRef = str | int


def normalize_selector(columns: Any) -> list[Any]:
    """
    Flatten a column selector into a list of elements.

    Array-likes (NumPy arrays, pandas Index) are unwrapped with `tolist()`.
    Anything that is not a sequence afterwards counts as a single element,
    so a scalar selector yields a one-element list.
    """
    if isinstance(columns, (str, bytes)):
        return [columns]

    if hasattr(columns, "tolist"):
        columns = columns.tolist()

    if isinstance(columns, Sequence) and not isinstance(columns, (str, bytes)):
        return list(columns)
    return [columns]


def as_column_ref(value: Any, *, label: str | None = None) -> ColumnRef:
    """
    Validate a selector element as a column name or integer index.

    NumPy string and integer scalars are converted to their Python
    counterparts. Booleans are rejected.

    Raises:
        UnsupportedSelectorError: If the element is neither.
    """
    if isinstance(value, str):
        return str(value)
    if isinstance(value, numbers.Integral) and not isinstance(value, bool):
        return int(value)
    raise UnsupportedSelectorError(value, label=label)


def resolve_column(
    ref: ColumnRef,
    features: list[Feature],
    registry: FieldRegistry,
    config: ResolverConfig,
    *,
    label: str | None = None,
) -> Feature:
    """
    Resolve one column reference.

    Args:
        ref: Column name or zero-based index.
        features: Current feature context (empty for raw input).
        registry: Session field registry.
        config: Resolver configuration.
        label: Fitted entry label for error context.

    Returns:
        The matching context feature, or a wildcard feature over a
        (possibly new) registry field.

    Raises:
        MissingColumnError: If a name matches no context feature.
        ColumnIndexError: If an index is outside the context, or negative.
    """
    if isinstance(ref, str):
        if features:
            for feature in features:
                if feature.name == ref:
                    return feature
            raise MissingColumnError(ref, feature_names(features), label=label)
        return _wildcard(ref, registry)

    if ref < 0:
        raise ColumnIndexError(ref, len(features) if features else None, label=label)

    if features:
        if ref >= len(features):
            raise ColumnIndexError(ref, len(features), label=label)
        return features[ref]
    return _wildcard(config.index_name(ref), registry)


def resolve_columns(
    columns: Any,
    features: list[Feature],
    registry: FieldRegistry,
    config: ResolverConfig | None = None,
    *,
    label: str | None = None,
) -> list[Feature]:
    """
    Resolve a column selector into an ordered feature list.

    Args:
        columns: Name, index, or sequence/array of them.
        features: Current feature context (empty for raw input).
        registry: Session field registry.
        config: Resolver configuration (default: ResolverConfig()).
        label: Fitted entry label for error context.

    Returns:
        One feature per selector element, in selector order.

    Raises:
        UnsupportedSelectorError: If an element is neither name nor index.
        MixedSelectorError: If names and indices are mixed and the
            configuration does not allow it.
    """
    config = config or ResolverConfig()

    refs = [as_column_ref(value, label=label) for value in normalize_selector(columns)]

    if not config.allow_mixed_selectors:
        kinds = {type(ref) for ref in refs}
        if len(kinds) > 1:
            raise MixedSelectorError(refs, label=label)

    return [
        resolve_column(ref, features, registry, config, label=label) for ref in refs
    ]


def _wildcard(name: str, registry: FieldRegistry) -> WildcardFeature:
    """Wrap the registry field `name` in a wildcard feature, creating it if needed."""
    return WildcardFeature(registry.get_or_create_field(name))
