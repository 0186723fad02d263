"""
Error taxonomy for feature resolution.

Every error is fatal to the resolution call that raised it. Each class also
derives from the builtin exception a Python caller would expect
(KeyError for unknown names, IndexError for bad positions, TypeError for
values of the wrong kind).
"""

from typing import Any


class FeatureMapError(Exception):
    """Base class for all featuremap errors."""

    def __init__(self, message: str, *, label: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.label = label

    def with_label(self, label: str | None) -> "FeatureMapError":
        """Attach the fitted entry label, keeping a label set closer to the failure."""
        if self.label is None:
            self.label = label
        return self

    def __str__(self) -> str:
        if self.label is None:
            return self.message
        return f"{self.message} (transformer '{self.label}')"


class MissingColumnError(FeatureMapError, KeyError):
    """A name selector matches no feature in a non-empty feature context."""

    def __init__(
        self,
        column: str,
        available: list[str] | None = None,
        *,
        label: str | None = None,
    ) -> None:
        self.column = column
        self.available = list(available or [])
        msg = f"Column '{column}' is undefined"
        if self.available:
            msg += f". Available: {', '.join(self.available)}"
        super().__init__(msg, label=label)


class ColumnIndexError(FeatureMapError, IndexError):
    """An integer selector falls outside the feature context."""

    def __init__(
        self,
        index: int,
        size: int | None = None,
        *,
        label: str | None = None,
    ) -> None:
        self.index = index
        self.size = size
        if size is None:
            msg = f"Column index {index} is negative"
        else:
            msg = f"Column index {index} is out of range for {size} feature(s)"
        super().__init__(msg, label=label)


class UnsupportedSelectorError(FeatureMapError, TypeError):
    """A selector element is neither a column name nor an integer index."""

    def __init__(
        self,
        value: Any,
        message: str | None = None,
        *,
        label: str | None = None,
    ) -> None:
        self.value = value
        self.kind = type(value).__name__
        msg = message or (
            f"The column object ({self.kind}) is not a string or integer"
        )
        super().__init__(msg, label=label)


class MixedSelectorError(UnsupportedSelectorError):
    """A selector list mixes column names and integer indices."""

    def __init__(self, value: list[Any], *, label: str | None = None) -> None:
        msg = f"The column selector {value!r} mixes names and integer indices"
        super().__init__(value, msg, label=label)


class UnsupportedTransformerError(FeatureMapError, TypeError):
    """A transformer reference is neither a sentinel nor a Transformer."""

    def __init__(self, reference: Any, *, label: str | None = None) -> None:
        if isinstance(reference, str):
            self.kind = f"str '{reference}'"
        else:
            cls = type(reference)
            self.kind = f"{cls.__module__}.{cls.__qualname__}"
        msg = f"The estimator object ({self.kind}) is not a supported Transformer"
        super().__init__(msg, label=label)


class DuplicateFieldError(FeatureMapError, ValueError):
    """A field with the requested name is already registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Field '{name}' is already defined")
