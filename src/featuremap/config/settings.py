"""
Typed configuration models using Pydantic.

All tunable resolution behavior is defined here with explicit typing and
validation. Resolution code receives these models, never raw dicts.
"""

import logging

from pydantic import BaseModel, ConfigDict, Field, field_validator

from featuremap.features.base import DataType


class ResolverConfig(BaseModel):
    """Column resolution configuration."""

    model_config = ConfigDict(frozen=True)

    index_prefix: str = Field(
        default="x",
        description="Prefix for field names synthesized from integer selectors",
    )
    default_data_type: DataType = Field(
        default=DataType.DOUBLE,
        description="Data type of fields created on demand",
    )
    allow_mixed_selectors: bool = Field(
        default=False,
        description="Accept selector lists mixing column names and indices",
    )
    use_feature_names: bool = Field(
        default=True,
        description="Translate integer selectors to fitted input column names",
    )

    @field_validator("index_prefix")
    @classmethod
    def validate_index_prefix(cls, v: str) -> str:
        """Ensure the prefix yields valid identifiers like 'x1'."""
        if not v.isidentifier():
            msg = f"index_prefix must be a non-empty identifier, got: {v!r}"
            raise ValueError(msg)
        return v

    def index_name(self, index: int) -> str:
        """Field name for a zero-based column position (0 -> 'x1')."""
        return f"{self.index_prefix}{index + 1}"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True)

    level: str = Field(default="WARNING", description="Log level name")
    json_output: bool = Field(default=False, description="Render logs as JSON")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Ensure the level is a standard logging level name."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            msg = f"Unknown log level: {v!r}"
            raise ValueError(msg)
        return level


class FeatureMapConfig(BaseModel):
    """Complete featuremap configuration."""

    model_config = ConfigDict(frozen=True)

    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
