"""Custom exceptions for git access."""

from docdispatch.config.exceptions import PreconditionError


class GitError(PreconditionError):
    """Base exception for git failures.

    Every git failure happens before job-level work starts, so all of them
    abort the run.
    """

    pass


class NotAGitRepositoryError(GitError):
    """Raised when the working directory is not inside a git working tree."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            "Not in a git repository",
            suggestions=["Please run this command from within a git repository"],
        )


class RemoteNotFoundError(GitError):
    """Raised when the repository has no usable remote."""

    def __init__(self, remote: str = "origin"):
        self.remote = remote
        super().__init__(
            f"No {remote} remote found",
            suggestions=[
                f"Please ensure your repository has an {remote} remote configured",
                "Or pass --repo OWNER/NAME to choose the target repository",
            ],
        )


class InvalidRemoteUrlError(GitError):
    """Raised when a remote URL does not point at a hosted GitHub repository."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(
            f"Invalid repository URL: {url}",
            suggestions=[
                "Expected GitHub repository format: https://github.com/owner/repo "
                "or git@github.com:owner/repo.git",
            ],
        )
