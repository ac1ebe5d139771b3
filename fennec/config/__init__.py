"""
Configuration management for Fennec.

Handles loading and validation of configuration files.
"""

from fennec.config.settings import (
    FennecConfig,
    LoggingConfig,
    RequestConfig,
    TransportConfig,
    get_default_config,
    get_default_config_path,
    load_config,
)

__all__ = [
    "FennecConfig",
    "LoggingConfig",
    "RequestConfig",
    "TransportConfig",
    "get_default_config",
    "get_default_config_path",
    "load_config",
]
