"""
Column transformer resolution.

Resolves fitted (label, transformer, columns) entries into ordered feature
lists: column selectors are mapped to features, transformer references are
dispatched, and sub-transformer outputs are concatenated.

Example usage:
    >>> from featuremap.compose import ColumnTransformer
    >>> from featuremap.features import FieldRegistry
    >>> ct = ColumnTransformer([("a", "passthrough", [0]), ("b", "drop", [1])])
    >>> [f.name for f in ct.initialize_features(FieldRegistry())]
    ['x1']
"""

from featuremap.compose.column_transformer import ColumnTransformer, FittedEntry
from featuremap.compose.dispatch import (
    DROP_TOKEN,
    PASSTHROUGH_TOKEN,
    TransformerKind,
    TransformerRef,
    as_transformer_ref,
    get_transformer,
    resolve_transformer,
)
from featuremap.compose.selectors import (
    normalize_selector,
    resolve_column,
    resolve_columns,
)
from featuremap.compose.transformers import (
    DROP,
    PASSTHROUGH,
    Drop,
    PassThrough,
    Transformer,
    TransformerChain,
)

__all__ = [
    # Orchestration
    "ColumnTransformer",
    "FittedEntry",
    # Dispatch
    "DROP_TOKEN",
    "PASSTHROUGH_TOKEN",
    "TransformerKind",
    "TransformerRef",
    "as_transformer_ref",
    "get_transformer",
    "resolve_transformer",
    # Column resolution
    "normalize_selector",
    "resolve_column",
    "resolve_columns",
    # Transformers
    "DROP",
    "PASSTHROUGH",
    "Drop",
    "PassThrough",
    "Transformer",
    "TransformerChain",
]
