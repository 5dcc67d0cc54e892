"""Scripted replacement for subprocess.run.

GitClient and GhCliClient accept a ``runner`` callable; tests pass a
FakeRunner so that no real git or gh process is started.
"""

import subprocess
from typing import Dict, List, Optional, Sequence, Tuple


class FakeRunner:
    """Returns canned CompletedProcess objects keyed by command arguments.

    Responses are registered with ``add`` using the command without the
    executable (e.g. ``("rev-parse", "--git-dir")``). Unregistered commands
    fail with ``default_returncode``.

    Attributes:
        calls: Every command received, including the executable
        kwargs: Keyword arguments of every call, in order
    """

    def __init__(self, default_returncode: int = 1, missing_executable: bool = False):
        self.responses: Dict[Tuple[str, ...], Tuple[int, str, str]] = {}
        self.default_returncode = default_returncode
        self.missing_executable = missing_executable
        self.calls: List[List[str]] = []
        self.kwargs: List[dict] = []

    def add(self, args: Sequence[str], stdout: str = "", returncode: int = 0, stderr: str = "") -> "FakeRunner":
        self.responses[tuple(args)] = (returncode, stdout, stderr)
        return self

    def __call__(self, command, **kwargs) -> subprocess.CompletedProcess:
        if self.missing_executable:
            raise FileNotFoundError(2, "No such file or directory", command[0])

        self.calls.append(list(command))
        self.kwargs.append(kwargs)
        returncode, stdout, stderr = self.responses.get(
            tuple(command[1:]), (self.default_returncode, "", "")
        )
        return subprocess.CompletedProcess(command, returncode, stdout=stdout, stderr=stderr)

    def called_with(self, *args: str) -> bool:
        return any(call[1:] == list(args) for call in self.calls)

    def find_call(self, first_arg: str) -> Optional[List[str]]:
        for call in self.calls:
            if len(call) > 1 and call[1] == first_arg:
                return call
        return None


def git_repository_runner(
    current: str = "c" * 40,
    previous: Optional[str] = "p" * 40,
    branch: str = "main",
    remote: Optional[str] = "https://github.com/acme/docs.git",
    user: Optional[str] = "Jane Doe",
    changed_files: Sequence[str] = (),
) -> FakeRunner:
    """A FakeRunner scripted like a healthy git working tree."""
    runner = FakeRunner()
    runner.add(["rev-parse", "--git-dir"], ".git\n")
    runner.add(["rev-parse", "--verify", "--quiet", "HEAD^{commit}"], f"{current}\n")
    if previous:
        runner.add(["rev-parse", "--verify", "--quiet", "HEAD~1^{commit}"], f"{previous}\n")
        runner.add(
            [
                "-c",
                "core.quotepath=off",
                "diff",
                "--name-only",
                "--diff-filter=ACMRT",
                previous,
                current,
            ],
            "".join(f"{path}\n" for path in changed_files),
        )
    runner.add(["branch", "--show-current"], f"{branch}\n" if branch else "")
    if remote:
        runner.add(["config", "--get", "remote.origin.url"], f"{remote}\n")
    if user:
        runner.add(["config", "user.name"], f"{user}\n")
    return runner
