"""
Field registry for a single resolution session.

Holds the raw input fields referenced by column selectors. Fields are created
lazily the first time a selector names them and reused afterwards, so every
later stage sees one consistent set of named fields.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from featuremap.errors import DuplicateFieldError
from featuremap.features.base import DataType, Feature, Field
from featuremap.utils.logging import get_logger

if TYPE_CHECKING:
    from featuremap.config.settings import ResolverConfig

log = get_logger(__name__)


@dataclass
class FieldRegistry:
    """
    Registry of raw input fields.

    One instance is scoped to one resolution session and passed explicitly
    to every resolution and transform call. It is not safe to share an
    instance between concurrent resolution runs.
    """

    default_data_type: DataType = DataType.DOUBLE
    fields: dict[str, Field] = field(default_factory=dict)
    _consumers: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_config(cls, config: "ResolverConfig") -> "FieldRegistry":
        """Create an empty registry using the configured default data type."""
        return cls(default_data_type=config.default_data_type)

    def lookup_field(self, name: str) -> Field | None:
        """
        Look up a field by exact name.

        Args:
            name: Field name.

        Returns:
            The registered field, or None if absent.
        """
        return self.fields.get(name)

    def create_field(self, name: str, data_type: DataType | None = None) -> Field:
        """
        Register a new field.

        Args:
            name: Field name.
            data_type: Declared data type (default: registry default).

        Returns:
            The created field.

        Raises:
            DuplicateFieldError: If a field with this name already exists.
        """
        if name in self.fields:
            raise DuplicateFieldError(name)

        created = Field(name=name, data_type=data_type or self.default_data_type)
        self.fields[name] = created
        log.debug("Created field", name=name, data_type=created.data_type.value)
        return created

    def get_or_create_field(self, name: str) -> Field:
        """Return the field named `name`, creating it on first use."""
        existing = self.lookup_field(name)
        if existing is not None:
            return existing
        return self.create_field(name)

    def get_field(self, name: str) -> Field:
        """
        Get a field by name.

        Raises:
            KeyError: If field not found.
        """
        if name not in self.fields:
            available = ", ".join(self.fields.keys())
            msg = f"Unknown field '{name}'. Available: {available}"
            raise KeyError(msg)
        return self.fields[name]

    def list_fields(self) -> list[str]:
        """List registered field names in creation order."""
        return list(self.fields.keys())

    def notify_consumed(self, features: list[Feature], transformer: Any) -> None:
        """
        Record that `transformer` consumes `features`.

        Bookkeeping only: the last consumer of each feature name is kept for
        downstream consistency checks.
        """
        for feature in features:
            self._consumers[feature.name] = transformer

    def last_consumer(self, name: str) -> Any | None:
        """Transformer that most recently consumed the feature `name`."""
        return self._consumers.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def __len__(self) -> int:
        return len(self.fields)
