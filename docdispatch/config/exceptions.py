"""Custom exceptions for configuration and environment preconditions."""

from typing import List, Optional


class PreconditionError(Exception):
    """
    Exception raised when a run cannot start.

    Precondition failures (missing tools, unreadable input files, repository
    problems) abort the whole run before any job is processed. The message
    carries optional itemized errors and suggestions for the operator.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize PreconditionError.

        Args:
            message: Primary error message
            errors: List of specific errors
            suggestions: List of helpful suggestions to fix the errors
        """
        self.message = message
        self.errors = errors or []
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with all errors and suggestions."""
        parts = [self.message]

        if self.errors:
            parts.append("\nErrors:")
            for i, error in enumerate(self.errors, 1):
                parts.append(f"  {i}. {error}")

        if self.suggestions:
            parts.append("\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"  - {suggestion}")

        return "\n".join(parts)


class ConfigurationError(PreconditionError):
    """Raised when the documentation configuration or environment is invalid."""

    pass


class ConfigFileNotFoundError(ConfigurationError):
    """Raised when the documentation configuration file does not exist."""

    pass


class MissingDependencyError(PreconditionError):
    """Raised when a required command-line tool is not on PATH."""

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(
            f"Missing required dependencies: {' '.join(self.missing)}",
            suggestions=["Please install them and try again"],
        )
