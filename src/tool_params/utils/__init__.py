from tool_params.utils.config_errors import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    MissingEnvironmentVariableError,
)
from tool_params.utils.config_loader import ConfigLoader
from tool_params.utils.settings_base import BaseSettings

__all__ = [
    "BaseSettings",
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigParseError",
    "ConfigValidationError",
    "MissingEnvironmentVariableError",
    "ConfigLoader",
]
