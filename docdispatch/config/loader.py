"""Documentation configuration loader."""

import json
from pathlib import Path

from pydantic import ValidationError

from .exceptions import ConfigFileNotFoundError, ConfigurationError
from .models import DocumentationConfig
from .validators import check_for_warnings, emit_warnings

DEFAULT_CONFIG_PATH = Path("documentation.json")


def ensure_config_file(config_path: Path) -> Path:
    """
    Check that the configuration file exists.

    Args:
        config_path: Path to the documentation configuration

    Returns:
        The same path

    Raises:
        ConfigFileNotFoundError: If the file is missing
    """
    if not config_path.is_file():
        raise ConfigFileNotFoundError(
            f"Documentation config file not found: {config_path}",
            suggestions=[
                "Copy documentation.example.json to documentation.json",
                "Use --config to point at a different file",
            ],
        )
    return config_path


def read_config_document(config_path: Path) -> dict:
    """
    Read and parse the configuration JSON without schema validation.

    Raises:
        ConfigurationError: If the file cannot be read or is not valid JSON
    """
    ensure_config_file(config_path)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_dict = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in {config_path}",
            errors=[f"line {e.lineno}, column {e.colno}: {e.msg}"],
            suggestions=["Check JSON syntax in your config file"],
        ) from e
    except UnicodeDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in {config_path}",
            errors=[f"byte {e.start}: not valid UTF-8"],
            suggestions=["Save the config file with UTF-8 encoding"],
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}",
            suggestions=[
                f"Ensure {config_path} is readable",
                "Check file permissions",
            ],
        ) from e

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Invalid configuration in {config_path}: top level must be an object",
            suggestions=['Wrap your jobs in an object: {"jobs": [...]}'],
        )

    return config_dict


def load_documentation_config(config_path: Path = DEFAULT_CONFIG_PATH) -> DocumentationConfig:
    """
    Load and validate the documentation configuration.

    Args:
        config_path: Path to the JSON configuration file

    Returns:
        Validated DocumentationConfig

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    config_dict = read_config_document(config_path)

    warnings = check_for_warnings(config_dict)
    if warnings:
        emit_warnings(warnings)

    try:
        return DocumentationConfig.model_validate(config_dict)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"])
            error_type = error["type"]

            if error_type == "missing":
                errors.append(f"Missing required field: {field_path}")
            elif error_type in ["string_type", "list_type"]:
                expected_type = error_type.replace("_type", "")
                errors.append(
                    f"Invalid type for '{field_path}': expected {expected_type}, got {error.get('input')!r}"
                )
            elif field_path:
                errors.append(f"{field_path}: {error['msg']}")
            else:
                errors.append(error["msg"])

        raise ConfigurationError(
            "Configuration validation failed",
            errors=errors,
            suggestions=[
                "Review documentation.example.json for the expected format",
                "Every job needs a unique 'key', a 'type' and an 'input' list",
            ],
        ) from e
