"""Git provenance models."""

import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import InvalidRemoteUrlError

UNKNOWN = "unknown"
UNKNOWN_REPOSITORY = "Unknown"
UNKNOWN_USER = "Unknown"

_GITHUB_PATH = re.compile(r".*github\.com[/:]([^/]+/[^/]+)")
_OWNER_NAME = re.compile(r"^[^/\s]+/[^/\s]+$")


class GitContext(BaseModel):
    """Commit pair, branch and remote the current run is working against.

    Values git could not provide are stored as sentinels rather than None.
    """

    current_commit: str = UNKNOWN
    previous_commit: str = UNKNOWN
    branch: str = UNKNOWN
    repository: str = UNKNOWN_REPOSITORY

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_values(
        cls,
        current_commit: Optional[str] = None,
        previous_commit: Optional[str] = None,
        branch: Optional[str] = None,
        repository: Optional[str] = None,
    ) -> "GitContext":
        """Build a context, replacing missing values with sentinels."""
        return cls(
            current_commit=current_commit or UNKNOWN,
            previous_commit=previous_commit or UNKNOWN,
            branch=branch or UNKNOWN,
            repository=repository or UNKNOWN_REPOSITORY,
        )

    @property
    def has_previous_commit(self) -> bool:
        return self.previous_commit != UNKNOWN


class TargetRepository(BaseModel):
    """An ``owner/name`` pair on GitHub."""

    owner: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)

    model_config = ConfigDict(frozen=True)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def dispatches_endpoint(self) -> str:
        """Relative API path for repository dispatch events."""
        return f"repos/{self.full_name}/dispatches"

    def __str__(self) -> str:
        return self.full_name

    @classmethod
    def parse(cls, value: str) -> "TargetRepository":
        """Parse an explicit ``owner/name`` string.

        Raises:
            InvalidRemoteUrlError: If the value is not in owner/name form
        """
        value = value.strip()
        if value.endswith(".git"):
            value = value[: -len(".git")]
        if not _OWNER_NAME.match(value):
            raise InvalidRemoteUrlError(value)
        owner, name = value.split("/", 1)
        return cls(owner=owner, name=name)

    @classmethod
    def from_remote_url(cls, url: str) -> "TargetRepository":
        """Extract owner/name from an HTTPS or SSH GitHub remote URL.

        Example:
            >>> TargetRepository.from_remote_url("git@github.com:acme/docs.git").full_name
            'acme/docs'

        Raises:
            InvalidRemoteUrlError: If the URL is not a GitHub repository URL
        """
        match = _GITHUB_PATH.match(url.strip())
        if not match:
            raise InvalidRemoteUrlError(url)
        path = match.group(1)
        if path.endswith(".git"):
            path = path[: -len(".git")]
        if not _OWNER_NAME.match(path):
            raise InvalidRemoteUrlError(url)
        owner, name = path.split("/", 1)
        return cls(owner=owner, name=name)
