"""
Column transformer feature resolution.

Walks the fitted (label, transformer, columns) entries of a column
transformer in order. Each entry's columns are resolved against the feature
context, handed to the entry's transformer, and the outputs are
concatenated. Output order follows entry order exactly.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from featuremap.compose.dispatch import resolve_transformer
from featuremap.compose.selectors import resolve_columns
from featuremap.compose.transformers import Transformer
from featuremap.config.settings import ResolverConfig
from featuremap.errors import FeatureMapError
from featuremap.features.base import Feature
from featuremap.features.registry import FieldRegistry
from featuremap.utils.logging import get_logger, log_context

log = get_logger(__name__)


@dataclass(frozen=True)
class FittedEntry:
    """
    One fitted column transformer entry.

    Attributes:
        label: Entry name (informational).
        transformer: "drop", "passthrough", or a Transformer.
        columns: Column selector (name, index, or sequence of them).
    """

    label: str
    transformer: Any
    columns: Any

    @classmethod
    def coerce(cls, entry: "FittedEntry | tuple[str, Any, Any]") -> "FittedEntry":
        """Accept either a FittedEntry or a (label, transformer, columns) tuple."""
        if isinstance(entry, FittedEntry):
            return entry
        label, transformer, columns = entry
        return cls(label=str(label), transformer=transformer, columns=columns)


class ColumnTransformer(Transformer):
    """
    Resolves fitted column transformer entries into output features.

    A ColumnTransformer is itself a Transformer, so it can be nested inside
    another column transformer or a TransformerChain.
    """

    def __init__(
        self,
        entries: Iterable["FittedEntry | tuple[str, Any, Any]"],
        *,
        name: str | None = None,
        config: ResolverConfig | None = None,
    ) -> None:
        """
        Initialize column transformer.

        Args:
            entries: Fitted entries, in output order.
            name: Optional name used in logs.
            config: Resolver configuration.
        """
        self.entries = [FittedEntry.coerce(entry) for entry in entries]
        self.name = name
        self.config = config or ResolverConfig()

    @property
    def label(self) -> str:
        return self.name or type(self).__name__

    def transform_features(
        self,
        features: list[Feature],
        registry: FieldRegistry,
    ) -> list[Feature]:
        """
        Resolve and transform every entry, concatenating the outputs.

        The first error aborts the whole call; no partial result is
        returned. Fields created in the registry before the failure remain.

        Args:
            features: Feature context (empty for raw input).
            registry: Session field registry.

        Returns:
            Concatenated output features in entry order.

        Raises:
            FeatureMapError: On the first unresolvable column or
                unsupported transformer, labeled with the failing entry.
        """
        result: list[Feature] = []
        entries = self.entries_for(features)

        with log_context(column_transformer=self.label):
            for entry in entries:
                try:
                    transformer = resolve_transformer(
                        entry.transformer, label=entry.label
                    )
                    row_features = resolve_columns(
                        entry.columns,
                        features,
                        registry,
                        self.config,
                        label=entry.label,
                    )
                    registry.notify_consumed(row_features, transformer)
                    row_features = transformer.transform_features(
                        row_features, registry
                    )
                except FeatureMapError as e:
                    e.with_label(entry.label)
                    log.debug("Entry resolution failed", entry=entry.label, error=str(e))
                    raise

                log.debug(
                    "Resolved entry",
                    entry=entry.label,
                    transformer=transformer.label,
                    n_out=len(row_features),
                )
                result.extend(row_features)

            log.info(
                "Resolved column transformer",
                n_entries=len(entries),
                n_in=len(features),
                n_out=len(result),
                mode="chained" if features else "raw",
            )

        return result

    def entries_for(self, features: list[Feature]) -> list[FittedEntry]:
        """Entries to resolve against the given feature context."""
        return self.entries

    def __repr__(self) -> str:
        labels = ", ".join(entry.label for entry in self.entries)
        return f"ColumnTransformer([{labels}])"
