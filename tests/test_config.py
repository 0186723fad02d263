"""Tests for configuration system."""

import os
import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

from featuremap.config import (
    FeatureMapConfig,
    LoggingConfig,
    ResolverConfig,
    load_config,
)
from featuremap.features import DataType, FieldRegistry


class TestResolverConfig:
    """Tests for ResolverConfig."""

    def test_defaults(self) -> None:
        """Test default resolver settings."""
        config = ResolverConfig()
        assert config.index_prefix == "x"
        assert config.default_data_type == DataType.DOUBLE
        assert config.allow_mixed_selectors is False
        assert config.use_feature_names is True

    def test_index_name(self) -> None:
        """Test field names synthesized from zero-based positions."""
        config = ResolverConfig()
        assert config.index_name(0) == "x1"
        assert config.index_name(2) == "x3"

    def test_custom_prefix(self) -> None:
        """Test a custom index prefix."""
        config = ResolverConfig(index_prefix="col")
        assert config.index_name(4) == "col5"

    def test_invalid_prefix(self) -> None:
        """Test that a non-identifier prefix raises error."""
        with pytest.raises(ValueError, match="identifier"):
            ResolverConfig(index_prefix="")

        with pytest.raises(ValueError, match="identifier"):
            ResolverConfig(index_prefix="1x")

    def test_frozen(self) -> None:
        """Test that config is immutable."""
        config = ResolverConfig()
        with pytest.raises(ValidationError):
            config.index_prefix = "y"

    def test_registry_from_config(self) -> None:
        """Test registry picks up the configured default data type."""
        config = ResolverConfig(default_data_type=DataType.STRING)
        registry = FieldRegistry.from_config(config)
        assert registry.create_field("city").data_type == DataType.STRING


class TestLoggingConfig:
    """Tests for LoggingConfig."""

    def test_level_normalized(self) -> None:
        """Test level names are upper-cased."""
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_invalid_level(self) -> None:
        """Test that an unknown level raises error."""
        with pytest.raises(ValueError, match="Unknown log level"):
            LoggingConfig(level="chatty")


class TestLoadConfig:
    """Tests for YAML config loading."""

    def test_defaults_without_file(self) -> None:
        """Test loading without a file returns defaults."""
        config = load_config()
        assert config == FeatureMapConfig()

    def test_load_yaml(self) -> None:
        """Test loading settings from a YAML file."""
        yaml_content = """
resolver:
  index_prefix: col
  allow_mixed_selectors: true
  default_data_type: float
logging:
  level: info
"""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write(yaml_content)
            f.flush()
            config = load_config(Path(f.name))

        assert config.resolver.index_prefix == "col"
        assert config.resolver.allow_mixed_selectors is True
        assert config.resolver.default_data_type == DataType.FLOAT
        # Untouched keys keep their defaults
        assert config.resolver.use_feature_names is True
        assert config.logging.level == "INFO"
        assert config.logging.json_output is False

    def test_empty_yaml(self) -> None:
        """Test that an empty file yields defaults."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write("")
            f.flush()
            config = load_config(Path(f.name))

        assert config == FeatureMapConfig()

    def test_non_mapping_yaml(self) -> None:
        """Test that a YAML list is rejected."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write("- a\n- b\n")
            f.flush()
            with pytest.raises(ValueError, match="must contain a mapping"):
                load_config(Path(f.name))

    def test_env_var_interpolation(self) -> None:
        """Test environment variable interpolation in config."""
        yaml_content = """
resolver:
  index_prefix: ${TEST_FEATUREMAP_PREFIX}
logging:
  level: ${TEST_FEATUREMAP_MISSING:ERROR}
"""
        os.environ["TEST_FEATUREMAP_PREFIX"] = "feat"
        try:
            with tempfile.NamedTemporaryFile(
                mode="w", suffix=".yaml", delete=False
            ) as f:
                f.write(yaml_content)
                f.flush()
                config = load_config(Path(f.name))

            assert config.resolver.index_prefix == "feat"
            assert config.logging.level == "ERROR"
        finally:
            del os.environ["TEST_FEATUREMAP_PREFIX"]

    def test_overrides(self) -> None:
        """Test programmatic overrides win over defaults."""
        config = load_config(overrides={"resolver": {"use_feature_names": False}})
        assert config.resolver.use_feature_names is False
        assert config.resolver.index_prefix == "x"
