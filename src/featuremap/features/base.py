"""
Feature and field descriptors.

A Field describes a raw input column held by the FieldRegistry. A Feature is
what flows between transformers: either a WildcardFeature aliasing a Field
directly, or a DerivedFeature produced by some transformer.
"""

from dataclasses import dataclass
from enum import Enum


class DataType(str, Enum):
    """Declared data type of a field or feature."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    DOUBLE = "double"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class Field:
    """
    Registry entry for a raw input column.

    Attributes:
        name: Column name.
        data_type: Declared data type.
    """

    name: str
    data_type: DataType = DataType.DOUBLE


class Feature:
    """Base class for named units of data flowing between transformers."""

    name: str
    data_type: DataType

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class WildcardFeature(Feature):
    """Feature that aliases a raw registry field without derivation."""

    field: Field

    @property
    def name(self) -> str:
        return self.field.name

    @property
    def data_type(self) -> DataType:
        return self.field.data_type


@dataclass(frozen=True)
class DerivedFeature(Feature):
    """
    Feature produced by a transformer.

    Attributes:
        name: Output feature name.
        sources: Features the transformer consumed to produce this one.
        producer: Label of the producing transformer.
        data_type: Declared data type.
    """

    name: str
    sources: tuple[Feature, ...] = ()
    producer: str | None = None
    data_type: DataType = DataType.DOUBLE


def feature_names(features: list[Feature]) -> list[str]:
    """Names of the given features, in order."""
    return [feature.name for feature in features]
