"""Configuration management for the documentation change dispatcher."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import (
    ConfigFileNotFoundError,
    ConfigurationError,
    MissingDependencyError,
    PreconditionError,
)
from .loader import DEFAULT_CONFIG_PATH, load_documentation_config
from .models import (
    DispatchTransport,
    DocumentationConfig,
    JobDefinition,
    LogFormat,
    LogLevel,
)

__all__ = [
    # Loader functions
    "load_documentation_config",
    "load_environment_config",
    "DEFAULT_CONFIG_PATH",
    # Configuration models
    "DocumentationConfig",
    "JobDefinition",
    "EnvironmentConfig",
    # Enums
    "DispatchTransport",
    "LogLevel",
    "LogFormat",
    # Exceptions
    "PreconditionError",
    "ConfigurationError",
    "ConfigFileNotFoundError",
    "MissingDependencyError",
]
