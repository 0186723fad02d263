"""
Transformer contract and the built-in transformers.

Every transformer maps an ordered feature list to an ordered feature list,
with access to the session field registry.
"""

from abc import ABC, abstractmethod

from featuremap.features.base import Feature
from featuremap.features.registry import FieldRegistry
from featuremap.utils.logging import get_logger

log = get_logger(__name__)


class Transformer(ABC):
    """Abstract base class for everything a column transformer can delegate to."""

    @abstractmethod
    def transform_features(
        self,
        features: list[Feature],
        registry: FieldRegistry,
    ) -> list[Feature]:
        """
        Transform the resolved input features into output features.

        Args:
            features: Ordered input features.
            registry: Session field registry.

        Returns:
            Ordered output features.
        """
        ...

    def initialize_features(self, registry: FieldRegistry) -> list[Feature]:
        """Transform over raw input, i.e. with an empty feature context."""
        return self.transform_features([], registry)

    @property
    def label(self) -> str:
        """Human-readable name used in logs and reports."""
        return type(self).__name__


class Drop(Transformer):
    """Excludes the selected columns from the output."""

    def transform_features(
        self,
        features: list[Feature],
        registry: FieldRegistry,
    ) -> list[Feature]:
        return []

    @property
    def label(self) -> str:
        return "drop"

    def __repr__(self) -> str:
        return "Drop()"


class PassThrough(Transformer):
    """Includes the selected columns verbatim."""

    def transform_features(
        self,
        features: list[Feature],
        registry: FieldRegistry,
    ) -> list[Feature]:
        return list(features)

    @property
    def label(self) -> str:
        return "passthrough"

    def __repr__(self) -> str:
        return "PassThrough()"


DROP = Drop()
PASSTHROUGH = PassThrough()


class TransformerChain(Transformer):
    """
    Sequential composition of transformers.

    Each step sees the previous step's output as its feature context, which
    is what puts a nested column transformer into chained resolution mode.
    """

    def __init__(self, steps: list[tuple[str, Transformer]]) -> None:
        """
        Initialize chain.

        Args:
            steps: Ordered (name, transformer) pairs.
        """
        self.steps = list(steps)

    def transform_features(
        self,
        features: list[Feature],
        registry: FieldRegistry,
    ) -> list[Feature]:
        for name, step in self.steps:
            features = step.transform_features(features, registry)
            log.debug("Applied chain step", step=name, n_out=len(features))
        return features

    def __repr__(self) -> str:
        names = ", ".join(name for name, _ in self.steps)
        return f"TransformerChain([{names}])"
