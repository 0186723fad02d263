"""
Configuration management with typed Pydantic models.

Provides resolver and logging settings, loadable from YAML.
"""

from featuremap.config.loader import load_config
from featuremap.config.settings import (
    FeatureMapConfig,
    LoggingConfig,
    ResolverConfig,
)

__all__ = [
    "FeatureMapConfig",
    "LoggingConfig",
    "ResolverConfig",
    "load_config",
]
