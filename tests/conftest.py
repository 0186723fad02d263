"""Pytest configuration and shared fixtures."""

from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from featuremap.config import ResolverConfig
from featuremap.features import DerivedFeature, FieldRegistry, WildcardFeature


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def registry() -> FieldRegistry:
    """Create an empty session field registry."""
    return FieldRegistry()


@pytest.fixture
def resolver_config() -> ResolverConfig:
    """Create the default resolver configuration."""
    return ResolverConfig()


@pytest.fixture
def age_feature(registry: FieldRegistry) -> WildcardFeature:
    """Wildcard feature over a registered 'age' field."""
    return WildcardFeature(registry.get_or_create_field("age"))


@pytest.fixture
def chained_context(registry: FieldRegistry) -> list:
    """Feature context as produced by an upstream stage."""
    age = WildcardFeature(registry.get_or_create_field("age"))
    income = WildcardFeature(registry.get_or_create_field("income"))
    log_income = DerivedFeature(name="log_income", sources=(income,), producer="log")
    return [age, income, log_income]


@pytest.fixture
def sample_frame() -> pd.DataFrame:
    """Small mixed-type DataFrame for fitting sklearn transformers."""
    return pd.DataFrame(
        {
            "age": [23.0, 35.0, 47.0, 59.0],
            "income": [1800.0, 2500.0, 3900.0, 4200.0],
            "city": ["berlin", "hamburg", "berlin", "munich"],
            "customer_id": [1, 2, 3, 4],
        }
    )


@pytest.fixture
def sample_array() -> np.ndarray:
    """Small numeric array for fitting sklearn transformers."""
    return np.array(
        [
            [1.0, 2.0, 3.0],
            [4.0, 5.0, 6.0],
            [7.0, 8.0, 10.0],
            [2.0, 1.0, 0.5],
        ]
    )
