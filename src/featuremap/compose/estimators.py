"""
Adapters from fitted scikit-learn estimators.

Converts a fitted sklearn ColumnTransformer or Pipeline into featuremap
transformers, so its output features can be resolved without touching any
data. Leaf estimators are described through their get_feature_names_out.
"""

import numbers
from typing import Any

import numpy as np
from sklearn.compose import ColumnTransformer as SkColumnTransformer
from sklearn.pipeline import Pipeline as SkPipeline
from sklearn.preprocessing import FunctionTransformer
from sklearn.utils.validation import check_is_fitted

from featuremap.compose.column_transformer import ColumnTransformer, FittedEntry
from featuremap.compose.dispatch import (
    DROP_TOKEN,
    PASSTHROUGH_TOKEN,
    resolve_transformer,
)
from featuremap.compose.selectors import normalize_selector, resolve_columns
from featuremap.compose.transformers import Transformer, TransformerChain
from featuremap.config.settings import ResolverConfig
from featuremap.errors import (
    FeatureMapError,
    MissingColumnError,
    UnsupportedSelectorError,
    UnsupportedTransformerError,
)
from featuremap.features.base import DerivedFeature, Feature, feature_names
from featuremap.features.registry import FieldRegistry
from featuremap.utils.logging import get_logger

log = get_logger(__name__)


class EstimatorTransformer(Transformer):
    """
    Describes a fitted sklearn transformer by its output feature names.

    Emits one DerivedFeature per name reported by get_feature_names_out.
    Over raw input (empty feature context) the estimator's own input
    columns are registered as fields first.
    """

    def __init__(
        self,
        estimator: Any,
        name: str | None = None,
        config: ResolverConfig | None = None,
    ) -> None:
        """
        Initialize adapter.

        Args:
            estimator: Fitted sklearn estimator with get_feature_names_out.
            name: Optional step/entry name.
            config: Resolver configuration.
        """
        self.estimator = estimator
        self.name = name
        self.config = config or ResolverConfig()

    @property
    def label(self) -> str:
        return self.name or type(self.estimator).__name__

    def transform_features(
        self,
        features: list[Feature],
        registry: FieldRegistry,
    ) -> list[Feature]:
        if not features:
            features = self.input_features(registry)
            registry.notify_consumed(features, self)

        sources = tuple(features)
        return [
            DerivedFeature(name=name, sources=sources, producer=self.label)
            for name in self.output_names(feature_names(features))
        ]

    def input_features(self, registry: FieldRegistry) -> list[Feature]:
        """Wildcard features over the columns the estimator was fitted on."""
        names_in = getattr(self.estimator, "feature_names_in_", None)
        if names_in is not None:
            columns: list[Any] = [str(name) for name in names_in]
        else:
            columns = list(range(getattr(self.estimator, "n_features_in_", 0)))

        if not columns:
            return []
        return resolve_columns(columns, [], registry, self.config, label=self.label)

    def output_names(self, input_names: list[str]) -> list[str]:
        """
        Output feature names for the given input names.

        Estimators fitted on a DataFrame report names from their own
        feature_names_in_; others derive names from `input_names`.

        Raises:
            FeatureMapError: If the estimator rejects the input names.
        """
        try:
            if hasattr(self.estimator, "feature_names_in_"):
                names = self.estimator.get_feature_names_out()
            else:
                names = self.estimator.get_feature_names_out(input_names)
        except ValueError as e:
            msg = f"Cannot derive output names of {self.label}: {e}"
            raise FeatureMapError(msg) from e
        return [str(name) for name in names]

    def __repr__(self) -> str:
        return f"EstimatorTransformer({self.estimator!r})"


def from_sklearn(
    estimator: Any,
    config: ResolverConfig | None = None,
    name: str | None = None,
) -> Transformer | str:
    """
    Convert a fitted sklearn object into a featuremap transformer.

    Args:
        estimator: Fitted ColumnTransformer, Pipeline, leaf transformer,
            or one of the "drop" / "passthrough" tokens.
        config: Resolver configuration.
        name: Step/entry name of the estimator.

    Returns:
        A Transformer, or the unchanged sentinel token.

    Raises:
        UnsupportedTransformerError: If the object cannot be described.
        sklearn.exceptions.NotFittedError: If a composite is not fitted.
    """
    config = config or ResolverConfig()

    if isinstance(estimator, str):
        if estimator in (DROP_TOKEN, PASSTHROUGH_TOKEN):
            return estimator
        raise UnsupportedTransformerError(estimator, label=name)

    if isinstance(estimator, SkColumnTransformer):
        return _convert_column_transformer(estimator, config, name)

    if isinstance(estimator, SkPipeline):
        return _convert_pipeline(estimator, config, name)

    if _is_identity(estimator):
        return PASSTHROUGH_TOKEN

    if hasattr(estimator, "get_feature_names_out"):
        return EstimatorTransformer(estimator, name=name, config=config)

    raise UnsupportedTransformerError(estimator, label=name)


class FittedColumnTransformer(ColumnTransformer):
    """
    ColumnTransformer read back from a fitted sklearn ColumnTransformer.

    Over raw input the entries address the estimator's input columns. Over
    chained input they address positions of feature_names_in_, since an
    upstream sklearn step may have prefixed the names it reports.
    """

    def __init__(
        self,
        entries: list[FittedEntry],
        chained_entries: list[FittedEntry],
        *,
        name: str | None = None,
        config: ResolverConfig | None = None,
    ) -> None:
        super().__init__(entries, name=name, config=config)
        self.chained_entries = list(chained_entries)

    def entries_for(self, features: list[Feature]) -> list[FittedEntry]:
        return self.chained_entries if features else self.entries


def _convert_column_transformer(
    estimator: SkColumnTransformer,
    config: ResolverConfig,
    name: str | None,
) -> FittedColumnTransformer:
    check_is_fitted(estimator)

    names_in = getattr(estimator, "feature_names_in_", None)
    n_features = getattr(estimator, "n_features_in_", None)

    entries = []
    chained_entries = []
    for label, sub, columns in estimator.transformers_:
        if config.use_feature_names:
            raw_columns = translate_columns(columns, names_in, n_features)
        else:
            raw_columns = expand_columns(columns, names_in, n_features)
        # sklearn leaves transformers with an empty selection unfitted
        if _is_empty_selection(raw_columns):
            sub = DROP_TOKEN
        transformer = from_sklearn(sub, config, name=label)

        entries.append(
            FittedEntry(label=label, transformer=transformer, columns=raw_columns)
        )
        chained_entries.append(
            FittedEntry(
                label=label,
                transformer=transformer,
                columns=_column_positions(columns, names_in, n_features),
            )
        )
    log.debug(
        "Converted ColumnTransformer",
        name=name,
        entries=[entry.label for entry in entries],
    )
    return FittedColumnTransformer(entries, chained_entries, name=name, config=config)


def _convert_pipeline(
    estimator: SkPipeline,
    config: ResolverConfig,
    name: str | None,
) -> TransformerChain:
    steps = list(estimator.steps)

    # A final predictor consumes the features; it does not produce any
    final = steps[-1][1] if steps else None
    if final is not None and not isinstance(final, str) and not hasattr(final, "transform"):
        log.debug("Skipping final estimator", step=steps[-1][0])
        steps = steps[:-1]

    chain_steps: list[tuple[str, Transformer]] = []
    for step_name, step in steps:
        converted = PASSTHROUGH_TOKEN if step is None else from_sklearn(step, config, step_name)
        chain_steps.append((step_name, resolve_transformer(converted, label=step_name)))

    return TransformerChain(chain_steps)


def expand_columns(
    columns: Any,
    names_in: Any | None = None,
    n_features: int | None = None,
) -> Any:
    """
    Expand a fitted column selector into the columns it selects.

    Slices and boolean masks become explicit columns, and negative positions
    count back from the number of input features. Selectors that need none
    of this are returned unchanged.

    Args:
        columns: Column selector as stored in transformers_.
        names_in: The estimator's feature_names_in_, if fitted on a DataFrame.
        n_features: The estimator's n_features_in_.

    Raises:
        UnsupportedSelectorError: If a slice cannot be expanded.
        MissingColumnError: If a name slice bound is not an input column.
    """
    if n_features is None and names_in is not None:
        n_features = len(names_in)

    if isinstance(columns, slice):
        return _expand_slice(columns, names_in, n_features)

    elements = normalize_selector(columns)
    if elements and all(_is_bool(element) for element in elements):
        return [i for i, selected in enumerate(elements) if selected]

    if n_features is None or not any(_is_negative(e) for e in elements):
        return columns
    return [
        int(element) + n_features
        if _is_negative(element) and int(element) >= -n_features
        else element
        for element in elements
    ]


def translate_columns(
    columns: Any,
    names_in: Any | None = None,
    n_features: int | None = None,
) -> Any:
    """
    Rewrite a fitted column selector into names or indices.

    The selector is expanded first (see expand_columns). When the input
    column names are known, in-range integer positions become those names.
    Everything else is left for the column resolver to judge.
    """
    columns = expand_columns(columns, names_in, n_features)
    if names_in is None:
        return columns

    n_names = len(names_in)
    return [
        str(names_in[int(element)])
        if _is_index(element) and 0 <= int(element) < n_names
        else element
        for element in normalize_selector(columns)
    ]


def _column_positions(
    columns: Any,
    names_in: Any | None,
    n_features: int | None,
) -> Any:
    """Rewrite a fitted column selector into positions of the input columns."""
    columns = expand_columns(columns, names_in, n_features)
    if names_in is None:
        return columns

    positions = {str(name): i for i, name in enumerate(names_in)}
    return [
        positions.get(element, element) if isinstance(element, str) else element
        for element in normalize_selector(columns)
    ]


def _expand_slice(
    selector: slice,
    names_in: Any | None,
    n_features: int | None,
) -> list[Any]:
    bounds = (selector.start, selector.stop)
    if all(bound is None or _is_index(bound) for bound in bounds):
        if n_features is None:
            msg = "Cannot expand a column slice without the number of input features"
            raise UnsupportedSelectorError(selector, msg)
        return list(range(n_features)[selector])

    if names_in is None:
        msg = "Cannot expand a column name slice without the input column names"
        raise UnsupportedSelectorError(selector, msg)

    # Name slices include their stop column
    names = [str(name) for name in names_in]
    start = 0 if selector.start is None else _name_position(selector.start, names)
    stop = len(names) if selector.stop is None else _name_position(selector.stop, names) + 1
    return names[start:stop:selector.step]


def _name_position(name: Any, names: list[str]) -> int:
    if name not in names:
        raise MissingColumnError(str(name), names)
    return names.index(name)


def _is_bool(value: Any) -> bool:
    return isinstance(value, (bool, np.bool_))


def _is_index(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not _is_bool(value)


def _is_negative(value: Any) -> bool:
    return _is_index(value) and int(value) < 0


def _is_identity(estimator: Any) -> bool:
    """Whether `estimator` is the identity FunctionTransformer sklearn fits for "passthrough"."""
    return (
        isinstance(estimator, FunctionTransformer)
        and estimator.func is None
        and estimator.inverse_func is None
    )


def _is_empty_selection(columns: Any) -> bool:
    return len(normalize_selector(columns)) == 0


def resolve_estimator(
    estimator: Any,
    registry: FieldRegistry | None = None,
    config: ResolverConfig | None = None,
) -> list[Feature]:
    """
    Resolve the output features of a fitted sklearn estimator over raw input.

    Args:
        estimator: Fitted ColumnTransformer, Pipeline or leaf transformer.
        registry: Session registry (default: a new one from `config`).
        config: Resolver configuration.

    Returns:
        Ordered output features.
    """
    config = config or ResolverConfig()
    if registry is None:
        registry = FieldRegistry.from_config(config)

    transformer = resolve_transformer(from_sklearn(estimator, config))
    return transformer.initialize_features(registry)
