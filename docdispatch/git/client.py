"""Thin wrapper around the git command line."""

import subprocess
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from docdispatch.config.exceptions import MissingDependencyError
from docdispatch.logging import get_logger

from .exceptions import GitError, NotAGitRepositoryError, RemoteNotFoundError
from .models import GitContext, TargetRepository

logger = get_logger(__name__, component="git")

# Added, copied, modified, renamed and type-changed paths; deletions are ignored
DIFF_FILTER = "ACMRT"


class GitClient:
    """Runs read-only git commands against one working tree.

    Designed to be easily mockable: the process runner is injectable and
    defaults to ``subprocess.run``.
    """

    def __init__(
        self,
        root: Optional[Path] = None,
        runner: Optional[Callable[..., subprocess.CompletedProcess]] = None,
    ):
        """Initialize the client.

        Args:
            root: Working directory for git commands (default: current directory)
            runner: Replacement for subprocess.run (for testing)
        """
        self.root = Path(root) if root else Path.cwd()
        self.runner = runner or subprocess.run

    def _run(self, args: Sequence[str]) -> subprocess.CompletedProcess:
        command = ["git", *args]
        logger.debug(
            f"Running: {' '.join(command)}",
            extra={"event": "git.command", "cwd": str(self.root)},
        )
        try:
            return self.runner(
                command,
                cwd=str(self.root),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            raise MissingDependencyError(["git"]) from exc

    def _output(self, args: Sequence[str]) -> Optional[str]:
        """Return stripped stdout, or None when the command fails or prints nothing."""
        result = self._run(args)
        if result.returncode != 0:
            return None
        output = result.stdout.strip()
        return output or None

    def ensure_repository(self) -> None:
        """
        Check that the working directory is inside a git working tree.

        Raises:
            NotAGitRepositoryError: If it is not
        """
        result = self._run(["rev-parse", "--git-dir"])
        if result.returncode != 0:
            raise NotAGitRepositoryError(str(self.root))

    def rev_parse(self, ref: str) -> Optional[str]:
        """Resolve a ref to a full commit hash, or None if it does not exist."""
        return self._output(["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"])

    def current_branch(self) -> Optional[str]:
        """Name of the checked-out branch, or None when HEAD is detached."""
        return self._output(["branch", "--show-current"])

    def remote_url(self, remote: str = "origin") -> Optional[str]:
        return self._output(["config", "--get", f"remote.{remote}.url"])

    def user_name(self) -> Optional[str]:
        return self._output(["config", "user.name"])

    def changed_files(self, previous: str, current: str) -> List[str]:
        """
        List paths changed between two commits.

        Paths are returned in git's order with duplicates and blank lines
        removed. ``core.quotepath`` is disabled so non-ASCII names come back
        verbatim.

        Raises:
            GitError: If git cannot compute the diff
        """
        result = self._run(
            [
                "-c",
                "core.quotepath=off",
                "diff",
                "--name-only",
                f"--diff-filter={DIFF_FILTER}",
                previous,
                current,
            ]
        )
        if result.returncode != 0:
            raise GitError(
                f"Failed to diff {previous}..{current}",
                errors=[result.stderr.strip()] if result.stderr.strip() else None,
            )

        seen = set()
        files = []
        for line in result.stdout.splitlines():
            if line and line not in seen:
                seen.add(line)
                files.append(line)
        return files

    def collect_context(self) -> GitContext:
        """Gather HEAD, its parent, the branch and the origin URL."""
        return GitContext.from_values(
            current_commit=self.rev_parse("HEAD"),
            previous_commit=self.rev_parse("HEAD~1"),
            branch=self.current_branch(),
            repository=self.remote_url(),
        )

    def target_repository(self, remote: str = "origin") -> TargetRepository:
        """
        Resolve the GitHub repository behind a remote.

        Raises:
            NotAGitRepositoryError: If not inside a working tree
            RemoteNotFoundError: If the remote is not configured
            InvalidRemoteUrlError: If the remote is not a GitHub URL
        """
        self.ensure_repository()
        url = self.remote_url(remote)
        if not url:
            raise RemoteNotFoundError(remote)
        return TargetRepository.from_remote_url(url)
