"""
Configuration management for Fennec.

Loads YAML configuration from file with sensible defaults and validation.
Supports environment variable substitution using ${ENV_VAR} syntax.
"""

import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

from fennec.exceptions import InvalidConfigurationError
from fennec.logging_config import get_logger, log_configuration_loaded
from fennec.request.path import PathEscaping

logger = get_logger(__name__)


def _expand_env_vars(value: Any) -> Any:
    """
    Recursively expand environment variables in configuration values.

    Supports ${ENV_VAR} syntax with optional default values: ${ENV_VAR:default}

    Args:
        value: Configuration value (string, dict, list, or other)

    Returns:
        Value with environment variables expanded

    Examples:
        "${SEARCH_URL}" -> value of SEARCH_URL env var
        "${SEARCH_URL:http://localhost:9200}" -> value of SEARCH_URL or the default
    """
    if isinstance(value, str):
        # Pattern matches ${VAR} or ${VAR:default}
        pattern = r'\$\{([^}:]+)(?::([^}]*))?\}'

        def replace_env_var(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return re.sub(pattern, replace_env_var, value)
    elif isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    else:
        return value


@dataclass
class TransportConfig:
    """Connection settings for the default HTTP transport."""

    base_url: str = "http://localhost:9200"
    api_key: str = ""
    timeout: float = 30.0
    verify_tls: bool = True


@dataclass
class RequestConfig:
    """Request construction settings."""

    default_headers: Dict[str, str] = field(default_factory=dict)
    path_escaping: PathEscaping = PathEscaping.VALIDATE


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    file: str = ""
    json_format: bool = True


@dataclass
class FennecConfig:
    """Main Fennec configuration."""

    transport: TransportConfig = field(default_factory=TransportConfig)
    request: RequestConfig = field(default_factory=RequestConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_default_config_path() -> str:
    """Get the default configuration file path."""
    return os.path.expanduser("~/.fennec/config.yaml")


def get_default_config() -> FennecConfig:
    """
    Get default configuration with sensible defaults.

    Returns:
        FennecConfig: Default configuration object
    """
    return FennecConfig()


def load_config(config_path: Optional[str] = None) -> FennecConfig:
    """
    Load configuration from YAML file with validation.

    If config file is not found, returns default configuration.
    If config file is malformed or invalid, raises InvalidConfigurationError.

    Args:
        config_path: Path to configuration file. If None, uses default path.

    Returns:
        FennecConfig: Loaded and validated configuration

    Raises:
        InvalidConfigurationError: If configuration is invalid or malformed
    """
    if config_path is None:
        config_path = get_default_config_path()

    config_path = os.path.expanduser(str(config_path))

    if not os.path.exists(config_path):
        logger.info(f"Configuration file not found at {config_path}, using defaults")
        return get_default_config()

    try:
        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f)
        logger.debug(f"Loaded configuration from {config_path}")
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML configuration file '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Failed to parse YAML configuration file '{config_path}': {e}"
        )
    except OSError as e:
        logger.error(f"Failed to read configuration file '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Failed to read configuration file '{config_path}': {e}"
        )

    if config_data is None:
        logger.info(f"Configuration file {config_path} is empty, using defaults")
        return get_default_config()

    if not isinstance(config_data, dict):
        raise InvalidConfigurationError(
            f"Configuration file '{config_path}' must contain a mapping at the top level"
        )

    config_data = _expand_env_vars(config_data)

    try:
        config = _build_config_from_dict(config_data)
        _validate_config(config)
    except InvalidConfigurationError:
        raise
    except (TypeError, ValueError) as e:
        logger.error(f"Invalid configuration in '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Invalid configuration in '{config_path}': {e}"
        )

    log_configuration_loaded(logger, source=config_path)
    return config


def _section(config_data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = config_data.get(name) or {}
    if not isinstance(section, dict):
        raise InvalidConfigurationError(f"'{name}' section must be a mapping")
    return section


def _as_bool(value: Any) -> bool:
    # Environment substitution turns booleans into strings.
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _build_config_from_dict(config_data: Dict[str, Any]) -> FennecConfig:
    """
    Build configuration object from dictionary.

    Args:
        config_data: Configuration dictionary from YAML

    Returns:
        FennecConfig: Configuration object
    """
    defaults = get_default_config()

    transport_data = _section(config_data, "transport")
    transport = TransportConfig(
        base_url=str(transport_data.get("base_url", defaults.transport.base_url)),
        api_key=str(transport_data.get("api_key", defaults.transport.api_key) or ""),
        timeout=float(transport_data.get("timeout", defaults.transport.timeout)),
        verify_tls=_as_bool(transport_data.get("verify_tls", defaults.transport.verify_tls)),
    )

    request_data = _section(config_data, "request")
    default_headers = request_data.get("default_headers") or {}
    if not isinstance(default_headers, dict):
        raise InvalidConfigurationError("request.default_headers must be a mapping")
    request = RequestConfig(
        default_headers={str(k): str(v) for k, v in default_headers.items()},
        path_escaping=PathEscaping(
            request_data.get("path_escaping", defaults.request.path_escaping.value)
        ),
    )

    logging_data = _section(config_data, "logging")
    logging = LoggingConfig(
        level=str(logging_data.get("level", defaults.logging.level)),
        file=str(logging_data.get("file", defaults.logging.file) or ""),
        json_format=_as_bool(logging_data.get("json_format", defaults.logging.json_format)),
    )

    return FennecConfig(transport=transport, request=request, logging=logging)


def _validate_config(config: FennecConfig) -> None:
    """
    Validate configuration values.

    Args:
        config: Configuration to validate

    Raises:
        InvalidConfigurationError: If configuration is invalid
    """
    if not config.transport.base_url:
        logger.error("Configuration validation failed: transport.base_url cannot be empty")
        raise InvalidConfigurationError("transport.base_url cannot be empty")
    if not config.transport.base_url.startswith(("http://", "https://")):
        raise InvalidConfigurationError(
            f"transport.base_url must start with http:// or https://, got '{config.transport.base_url}'"
        )

    if config.transport.timeout <= 0:
        raise InvalidConfigurationError(
            f"transport.timeout must be positive, got {config.transport.timeout}"
        )

    valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    if config.logging.level.upper() not in valid_levels:
        raise InvalidConfigurationError(
            f"logging.level must be one of {valid_levels}, got '{config.logging.level}'"
        )
