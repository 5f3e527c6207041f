"""Load encoder configuration from the environment or a JSON file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict, SettingsError

from .config import TargetEncoderConfig
from .exceptions import ConfigurationError
from .logging import get_logger

logger = get_logger(__name__)


class EnvOptions(BaseSettings):
    """Encoder options read from ``TARGETENCODE__<OPTION>`` environment variables.

    List and object options are given as JSON, e.g.
    ``TARGETENCODE__INPUT_COLS='["color", "city"]'``; ``null`` unsets an option.
    Values are only collected here, TargetEncoderConfig validates them.
    """

    model_config = SettingsConfigDict(
        env_prefix="TARGETENCODE__",
        case_sensitive=False,
        env_parse_none_str="null",
        extra="ignore",
    )

    fold_col: Optional[str] = None
    label_col: Optional[str] = None
    input_cols: Optional[List[str]] = None
    holdout_strategy: Optional[str] = None
    blending: Optional[Dict[str, Any]] = None
    noise: Optional[Dict[str, Any]] = None


def load_from_env(prefix: str = "TARGETENCODE") -> Dict[str, Any]:
    """Collect options from ``<PREFIX>__<OPTION>`` environment variables.

    Args:
        prefix: Environment variable prefix

    Returns:
        Dict of the options present in the environment, suitable for
        ``TargetEncoderConfig(**...)``
    """
    try:
        env = EnvOptions(_env_prefix=f"{prefix}__")
    except (SettingsError, ValidationError) as exc:
        raise ConfigurationError(f"Invalid {prefix}__* environment variables: {exc}") from exc
    options = env.model_dump(exclude_unset=True)
    if options:
        logger.debug(f"Loaded {len(options)} option(s) from environment: {sorted(options)}")
    return options


def load_config(path: str | Path) -> TargetEncoderConfig:
    """Load a TargetEncoderConfig from a JSON object file.

    Keys may use Python names or camelCase aliases.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as file:
        try:
            data = json.load(file)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Config file {config_path} is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError("Config root must be a JSON object.")

    logger.info(f"Loaded target encoder config from {config_path}")
    return TargetEncoderConfig(**data)
