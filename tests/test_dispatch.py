"""Tests for transformer dispatch and the built-in transformers."""

import pytest

from featuremap.compose import (
    DROP,
    PASSTHROUGH,
    ColumnTransformer,
    Transformer,
    TransformerChain,
    TransformerKind,
    TransformerRef,
    as_transformer_ref,
    get_transformer,
    resolve_transformer,
)
from featuremap.errors import UnsupportedTransformerError
from featuremap.features import DerivedFeature, Feature, FieldRegistry


class Prefixer(Transformer):
    """Test transformer deriving one prefixed feature per input."""

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix

    def transform_features(
        self, features: list[Feature], registry: FieldRegistry
    ) -> list[Feature]:
        return [
            DerivedFeature(name=f"{self.prefix}{f.name}", sources=(f,), producer=self.prefix)
            for f in features
        ]


class NotATransformer:
    """Has the right method name but not the contract."""

    def transform_features(self, features, registry):
        return features


class TestAsTransformerRef:
    """Tests for classifying transformer references."""

    def test_drop_token(self) -> None:
        """Test the 'drop' token."""
        ref = as_transformer_ref("drop")
        assert ref.kind == TransformerKind.DROP
        assert ref.handle is None

    def test_passthrough_token(self) -> None:
        """Test the 'passthrough' token."""
        ref = as_transformer_ref("passthrough")
        assert ref.kind == TransformerKind.PASSTHROUGH

    def test_delegate(self) -> None:
        """Test a Transformer becomes a delegate reference."""
        transformer = Prefixer("p_")
        ref = as_transformer_ref(transformer)
        assert ref.kind == TransformerKind.DELEGATE
        assert ref.handle is transformer

    def test_ref_is_returned_unchanged(self) -> None:
        """Test an already classified reference passes through."""
        ref = TransformerRef(TransformerKind.DROP)
        assert as_transformer_ref(ref) is ref

    @pytest.mark.parametrize("token", ["Drop", "PASSTHROUGH", "scale", ""])
    def test_unknown_string(self, token: str) -> None:
        """Test other strings are unsupported and the token is named."""
        with pytest.raises(UnsupportedTransformerError) as exc:
            as_transformer_ref(token, label="num")
        assert exc.value.kind == f"str '{token}'"
        assert exc.value.label == "num"

    def test_unsupported_object(self) -> None:
        """Test non-transformers fail naming their concrete class."""
        with pytest.raises(UnsupportedTransformerError, match="NotATransformer") as exc:
            as_transformer_ref(NotATransformer())
        assert isinstance(exc.value, TypeError)
        assert "is not a supported Transformer" in str(exc.value)

    def test_none_is_unsupported(self) -> None:
        """Test None is not a transformer reference."""
        with pytest.raises(UnsupportedTransformerError, match="NoneType"):
            as_transformer_ref(None)


class TestTransformerRef:
    """Tests for the TransformerRef variant."""

    def test_delegate_requires_handle(self) -> None:
        """Test DELEGATE without a handle is invalid."""
        with pytest.raises(ValueError, match="handle is required"):
            TransformerRef(TransformerKind.DELEGATE)

    def test_sentinel_rejects_handle(self) -> None:
        """Test sentinel kinds cannot carry a handle."""
        with pytest.raises(ValueError, match="handle is required"):
            TransformerRef(TransformerKind.DROP, Prefixer("p_"))


class TestGetTransformer:
    """Tests for mapping references to transformers."""

    def test_sentinels_are_singletons(self) -> None:
        """Test sentinel references map to the shared instances."""
        assert get_transformer(as_transformer_ref("drop")) is DROP
        assert get_transformer(as_transformer_ref("passthrough")) is PASSTHROUGH
        assert resolve_transformer("drop") is resolve_transformer("drop")

    def test_delegate(self) -> None:
        """Test delegate references map to their handle."""
        transformer = Prefixer("p_")
        assert resolve_transformer(transformer) is transformer

    def test_nested_column_transformer_is_delegate(self) -> None:
        """Test a ColumnTransformer is accepted as a sub-transformer."""
        inner = ColumnTransformer([("a", "passthrough", [0])])
        assert as_transformer_ref(inner).kind == TransformerKind.DELEGATE

    def test_unknown_kind(self) -> None:
        """Test a reference of an unknown kind is rejected."""
        with pytest.raises(ValueError, match="Unknown transformer kind: bogus"):
            get_transformer(TransformerRef("bogus"))


class TestSentinels:
    """Tests for Drop and PassThrough."""

    def test_drop_returns_empty(
        self, registry: FieldRegistry, chained_context: list
    ) -> None:
        """Test Drop discards any input."""
        assert DROP.transform_features(chained_context, registry) == []
        assert DROP.transform_features([], registry) == []

    def test_passthrough_returns_input(
        self, registry: FieldRegistry, chained_context: list
    ) -> None:
        """Test PassThrough keeps features and order."""
        result = PASSTHROUGH.transform_features(chained_context, registry)
        assert result == chained_context
        assert all(a is b for a, b in zip(result, chained_context))
        assert result is not chained_context

    def test_sentinels_leave_registry_alone(
        self, registry: FieldRegistry, chained_context: list
    ) -> None:
        """Test sentinels do not create fields."""
        before = registry.list_fields()
        DROP.transform_features(chained_context, registry)
        PASSTHROUGH.transform_features(chained_context, registry)
        assert registry.list_fields() == before

    def test_labels(self) -> None:
        """Test sentinel labels match their tokens."""
        assert DROP.label == "drop"
        assert PASSTHROUGH.label == "passthrough"


class TestTransformerChain:
    """Tests for TransformerChain."""

    def test_steps_feed_each_other(
        self, registry: FieldRegistry, chained_context: list
    ) -> None:
        """Test each step receives the previous step's output."""
        chain = TransformerChain([("a", Prefixer("a_")), ("b", Prefixer("b_"))])
        result = chain.transform_features(chained_context[:1], registry)
        assert [f.name for f in result] == ["b_a_age"]

    def test_nested_column_transformer_runs_chained(self, registry: FieldRegistry) -> None:
        """Test a column transformer after a step resolves against its output."""
        upstream = ColumnTransformer([("raw", "passthrough", ["age", "income"])])
        downstream = ColumnTransformer([("pick", Prefixer("p_"), [1])])
        chain = TransformerChain([("upstream", upstream), ("downstream", downstream)])

        result = chain.initialize_features(registry)

        assert [f.name for f in result] == ["p_income"]
        # Index 1 addressed the upstream output, not a raw column
        assert "x2" not in registry

    def test_empty_chain(self, registry: FieldRegistry, chained_context: list) -> None:
        """Test an empty chain is the identity."""
        chain = TransformerChain([])
        assert chain.transform_features(chained_context, registry) == chained_context
