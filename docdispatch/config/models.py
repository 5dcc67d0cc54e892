"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class DispatchTransport(str, Enum):
    """How repository dispatch events reach GitHub."""

    GH_CLI = "gh"
    REST_API = "api"


class JobDefinition(BaseModel):
    """A documentation job watching a fixed set of input paths.

    Input paths are compared to changed files with exact string equality, so
    they are kept exactly as written in the configuration.
    """

    key: str = Field(..., min_length=1, description="Unique job identifier")
    type: str = Field(..., min_length=1, description="Job type, used in the dispatch event name")
    input: List[str] = Field(..., description="Repository-relative paths this job watches")
    documentation: List[str] = Field(
        default_factory=list, description="Documentation files maintained by this job"
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("key", "type")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from identifier fields."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped

    @field_validator("documentation", mode="before")
    @classmethod
    def default_documentation(cls, v):
        """Treat an explicit null like a missing documentation list."""
        return [] if v is None else v


class DocumentationConfig(BaseModel):
    """Root of the documentation configuration document."""

    jobs: List[JobDefinition] = Field(..., description="Jobs in declaration order")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_unique_keys(self):
        """Reject configurations that reuse a job key."""
        seen = set()
        duplicates = []
        for job in self.jobs:
            if job.key in seen and job.key not in duplicates:
                duplicates.append(job.key)
            seen.add(job.key)
        if duplicates:
            raise ValueError(f"Duplicate job keys: {', '.join(duplicates)}")
        return self
