"""Configuration management for calface."""

from calface.core.config.loader import (
    configure_logging,
    detect_format,
    load_app_config,
    load_config,
)
from calface.core.config.models import (
    AppConfig,
    ConfigBase,
    DialConfig,
    LayoutConfig,
    LoggingConfig,
    RefreshConfig,
)

__all__ = [
    # Loaders
    "load_config",
    "load_app_config",
    "detect_format",
    "configure_logging",
    # Models
    "AppConfig",
    "ConfigBase",
    "DialConfig",
    "LayoutConfig",
    "LoggingConfig",
    "RefreshConfig",
]
