"""Git access: changed files, provenance and remote discovery."""

from .client import GitClient
from .exceptions import (
    GitError,
    InvalidRemoteUrlError,
    NotAGitRepositoryError,
    RemoteNotFoundError,
)
from .models import UNKNOWN, GitContext, TargetRepository

__all__ = [
    "GitClient",
    "GitContext",
    "TargetRepository",
    "UNKNOWN",
    "GitError",
    "NotAGitRepositoryError",
    "RemoteNotFoundError",
    "InvalidRemoteUrlError",
]
