"""Test helper utilities for documentation change dispatcher tests."""

from .builders import make_git_context, make_job_result, make_report
from .fake_runner import FakeRunner, git_repository_runner

__all__ = ["FakeRunner", "git_repository_runner", "make_git_context", "make_job_result", "make_report"]
