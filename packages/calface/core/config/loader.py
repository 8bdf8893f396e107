"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from calface.core.config.models import AppConfig, LoggingConfig
from calface.core.utils.logging import configure_logging as _configure_logging

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "CALFACE_LOG_LEVEL"


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Args:
        file_path: Path to config file

    Returns:
        Format string: "json" or "yaml"

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("calface.json")
        'json'
        >>> detect_format("calface.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"]:
        return "yaml"
    else:
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return a raw configuration dictionary.

    Format is auto-detected from the file extension.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Raw configuration dictionary

    Raises:
        FileNotFoundError: If config file does not exist
        ValueError: If format is not supported or file content is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)

    if fmt == "json":
        try:
            with path.open("r", encoding="utf-8") as f:
                content = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    else:
        try:
            with path.open("r", encoding="utf-8") as f:
                # safe_load returns None for empty files
                content = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(content, dict):
        raise ValueError(f"Config root in {path} must be a mapping, got {type(content).__name__}")
    return content


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration.

    Missing files yield the defaults. ``CALFACE_LOG_LEVEL`` overrides the
    configured log level.

    Args:
        path: Path to app config file (.json, .yaml, or .yml).
              Defaults to calface.yaml

    Returns:
        Validated AppConfig instance with defaults for missing values

    Raises:
        ValidationError: If config is invalid
    """
    config = AppConfig.load_or_default(path)

    env_level = os.getenv(LOG_LEVEL_ENV)
    if env_level:
        logger.debug(f"Loaded {LOG_LEVEL_ENV} from environment")
        logging_config = LoggingConfig.model_validate(
            {**config.logging.model_dump(), "level": env_level.upper()}
        )
        config = config.model_copy(update={"logging": logging_config})

    return config


def configure_logging(config: AppConfig | None = None) -> None:
    """Configure Python logging from app config.

    Args:
        config: AppConfig instance (loads default if None)
    """
    if config is None:
        config = load_app_config()

    _configure_logging(
        level=config.logging.level,
        format_string=config.logging.format,
        filename=config.logging.filename,
        structured=config.logging.structured,
    )


__all__ = [
    "LOG_LEVEL_ENV",
    "configure_logging",
    "detect_format",
    "load_app_config",
    "load_config",
]
