"""targetencode: configuration, schema checks and encoding for target encoder stages."""

from __future__ import annotations

from .config import BlendingSettings, NoiseSettings, TargetEncoderConfig
from .encoders import TargetEncoder
from .exceptions import ConfigurationError, SchemaValidationError, TargetEncodingError
from .frames import CategoricalFrame, PandasFrame, change_relevant_columns_to_categorical
from .logging import configure_logging, get_logger
from .schema import Schema, SchemaField, flatten_schema
from .settings import load_config, load_from_env
from .types import HoldoutStrategy, HoldoutStrategyParam
from .validators import transform_schema, validate_input_frame
from .version import version

__all__ = [
    "BlendingSettings",
    "CategoricalFrame",
    "ConfigurationError",
    "HoldoutStrategy",
    "HoldoutStrategyParam",
    "NoiseSettings",
    "PandasFrame",
    "Schema",
    "SchemaField",
    "SchemaValidationError",
    "TargetEncoder",
    "TargetEncoderConfig",
    "TargetEncodingError",
    "change_relevant_columns_to_categorical",
    "configure_logging",
    "flatten_schema",
    "get_logger",
    "load_config",
    "load_from_env",
    "transform_schema",
    "validate_input_frame",
    "version",
]
