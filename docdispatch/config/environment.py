"""Environment variable loading and validation."""

import os
from typing import Optional

from .exceptions import ConfigurationError
from .models import DispatchTransport, LogFormat, LogLevel

DEFAULT_GITHUB_API_URL = "https://api.github.com"


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        log_level: Optional[str] = None,
        log_format: Optional[str] = None,
        environment: Optional[str] = None,
        dispatch_transport: Optional[str] = None,
        github_token: Optional[str] = None,
        github_api_url: Optional[str] = None,
        http_timeout: int = 30,
    ):
        """Initialize environment configuration."""
        self.log_level = log_level
        self.log_format = log_format or LogFormat.KEY_VALUE.value
        self.environment = environment or "local"
        self.dispatch_transport = dispatch_transport or DispatchTransport.GH_CLI.value
        self.github_token = github_token
        self.github_api_url = (github_api_url or DEFAULT_GITHUB_API_URL).rstrip("/")
        self.http_timeout = http_timeout


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Optional environment variables:
    - LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL
    - LOG_FORMAT: key-value (default) or json
    - ENVIRONMENT: label attached to every log record (default: local)
    - DISPATCH_TRANSPORT: gh (default, uses the GitHub CLI) or api (uses GITHUB_TOKEN)
    - GITHUB_TOKEN: token for the api transport
    - GITHUB_API_URL: REST API root (default: https://api.github.com)
    - DISPATCH_HTTP_TIMEOUT: request timeout in seconds for the api transport (1-300)

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If any variable has an invalid value
    """
    errors = []

    log_level = os.getenv("LOG_LEVEL")
    log_format = os.getenv("LOG_FORMAT")
    environment = os.getenv("ENVIRONMENT")
    transport = os.getenv("DISPATCH_TRANSPORT")
    github_token = os.getenv("GITHUB_TOKEN") or None
    github_api_url = os.getenv("GITHUB_API_URL")
    timeout_str = os.getenv("DISPATCH_HTTP_TIMEOUT")

    if log_level:
        valid_levels = [level.value for level in LogLevel]
        if log_level.upper() not in valid_levels:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(valid_levels)}"
            )
        else:
            log_level = log_level.upper()

    if log_format:
        valid_formats = [fmt.value for fmt in LogFormat]
        if log_format not in valid_formats:
            errors.append(
                f"Invalid LOG_FORMAT: '{log_format}'. Must be one of: {', '.join(valid_formats)}"
            )

    if transport:
        valid_transports = [t.value for t in DispatchTransport]
        if transport not in valid_transports:
            errors.append(
                f"Invalid DISPATCH_TRANSPORT: '{transport}'. Must be one of: {', '.join(valid_transports)}"
            )

    http_timeout = 30
    if timeout_str:
        try:
            http_timeout = int(timeout_str)
            if http_timeout < 1 or http_timeout > 300:
                errors.append(
                    f"Invalid DISPATCH_HTTP_TIMEOUT: {http_timeout}. Must be between 1 and 300."
                )
        except ValueError:
            errors.append(
                f"Invalid DISPATCH_HTTP_TIMEOUT: '{timeout_str}'. Must be a valid integer."
            )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Check the variables in your shell or .env file",
                "Unset a variable to fall back to its default",
            ],
        )

    return EnvironmentConfig(
        log_level=log_level,
        log_format=log_format,
        environment=environment,
        dispatch_transport=transport,
        github_token=github_token,
        github_api_url=github_api_url,
        http_timeout=http_timeout,
    )
