"""
Transformer reference dispatch.

A fitted entry names its transformer either with one of the sentinel tokens
"drop" / "passthrough" or with a real transformer. The reference is turned
into a TransformerRef once, and get_transformer maps each kind to the
transformer to invoke.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from featuremap.compose.transformers import DROP, PASSTHROUGH, Transformer
from featuremap.errors import UnsupportedTransformerError

DROP_TOKEN = "drop"
PASSTHROUGH_TOKEN = "passthrough"


class TransformerKind(str, Enum):
    """The three kinds of transformer reference."""

    DROP = "drop"
    PASSTHROUGH = "passthrough"
    DELEGATE = "delegate"


@dataclass(frozen=True)
class TransformerRef:
    """
    A classified transformer reference.

    Attributes:
        kind: Reference kind.
        handle: The delegate transformer (DELEGATE only).
    """

    kind: TransformerKind
    handle: Transformer | None = None

    def __post_init__(self) -> None:
        if (self.kind == TransformerKind.DELEGATE) != (self.handle is not None):
            msg = "A transformer handle is required for, and only for, DELEGATE references"
            raise ValueError(msg)


def as_transformer_ref(reference: Any, *, label: str | None = None) -> TransformerRef:
    """
    Classify a raw transformer reference.

    Args:
        reference: Sentinel token, Transformer, or TransformerRef.
        label: Fitted entry label for error context.

    Returns:
        The classified reference.

    Raises:
        UnsupportedTransformerError: If the reference is an unknown string
            or does not implement the Transformer contract.
    """
    if isinstance(reference, TransformerRef):
        return reference

    if isinstance(reference, str):
        if reference == DROP_TOKEN:
            return TransformerRef(TransformerKind.DROP)
        if reference == PASSTHROUGH_TOKEN:
            return TransformerRef(TransformerKind.PASSTHROUGH)
        raise UnsupportedTransformerError(reference, label=label)

    if isinstance(reference, Transformer):
        return TransformerRef(TransformerKind.DELEGATE, reference)

    raise UnsupportedTransformerError(reference, label=label)


def get_transformer(ref: TransformerRef) -> Transformer:
    """Return the transformer to invoke for a classified reference."""
    if ref.kind == TransformerKind.DROP:
        return DROP

    if ref.kind == TransformerKind.PASSTHROUGH:
        return PASSTHROUGH

    if ref.kind == TransformerKind.DELEGATE and ref.handle is not None:
        return ref.handle

    msg = f"Unknown transformer kind: {ref.kind}"
    raise ValueError(msg)


def resolve_transformer(reference: Any, *, label: str | None = None) -> Transformer:
    """Classify `reference` and return the transformer to invoke."""
    return get_transformer(as_transformer_ref(reference, label=label))
