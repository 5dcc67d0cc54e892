"""Core domain models for job results and the queue report.

This module defines the records exchanged between the two stages:
- JobResult: one triggered documentation job
- Report: the aggregate document written by the queue stage and read by
  the dispatch stage
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, model_validator

from docdispatch.git.models import UNKNOWN, UNKNOWN_REPOSITORY, GitContext

QUEUED = "queued"


class JobMetadata(BaseModel):
    """Who triggered a job result, when, and where it is in processing."""

    triggered_by: str
    timestamp: str
    processing_status: str = QUEUED

    model_config = ConfigDict(frozen=True)


class JobResult(BaseModel):
    """A documentation job whose inputs changed in the inspected commit.

    Only created for jobs with at least one modified input; never mutated
    afterwards.
    """

    job_key: str = Field(..., min_length=1)
    job_type: str = Field(..., min_length=1)
    modified_files: List[str] = Field(..., min_length=1)
    documentation_files: List[str] = Field(default_factory=list)
    modified_count: int = Field(..., ge=1)
    urgent: bool
    git_context: GitContext
    metadata: JobMetadata

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_count(self):
        """modified_count must describe modified_files."""
        if self.modified_count != len(self.modified_files):
            raise ValueError(
                f"modified_count ({self.modified_count}) does not match "
                f"{len(self.modified_files)} modified files"
            )
        return self

    @property
    def event_type(self) -> str:
        """Name of the repository dispatch event for this job."""
        return f"update-documentation-{self.job_type}"

    @property
    def modified_files_csv(self) -> str:
        return ",".join(self.modified_files)


class ReportSummary(BaseModel):
    """Aggregate counters for one queue run."""

    total_jobs_checked: int = Field(..., ge=0)
    jobs_with_changes: int = Field(..., ge=0)
    has_changes: bool
    timestamp: str
    triggered_by: str

    model_config = ConfigDict(frozen=True)


class ReportGitContext(BaseModel):
    """Run-level git context, including the full changed file list."""

    repository: str = UNKNOWN_REPOSITORY
    branch: str = UNKNOWN
    current_commit: str = UNKNOWN
    previous_commit: str = UNKNOWN
    changed_files: List[str] = Field(default_factory=list)
    changed_file_count: int = Field(0, ge=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_count(self):
        if self.changed_file_count != len(self.changed_files):
            raise ValueError(
                f"changed_file_count ({self.changed_file_count}) does not match "
                f"{len(self.changed_files)} changed files"
            )
        return self

    @classmethod
    def from_git_context(cls, context: GitContext, changed_files: List[str]) -> "ReportGitContext":
        return cls(
            repository=context.repository,
            branch=context.branch,
            current_commit=context.current_commit,
            previous_commit=context.previous_commit,
            changed_files=list(changed_files),
            changed_file_count=len(changed_files),
        )


class Report(BaseModel):
    """The queue stage's terminal artifact.

    Invariants:
    - summary.jobs_with_changes == len(jobs)
    - summary.has_changes == (summary.jobs_with_changes > 0)
    """

    summary: ReportSummary
    git_context: ReportGitContext
    jobs: List[JobResult] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_summary(self):
        if self.summary.jobs_with_changes != len(self.jobs):
            raise ValueError(
                f"summary.jobs_with_changes ({self.summary.jobs_with_changes}) "
                f"does not match {len(self.jobs)} jobs"
            )
        if self.summary.has_changes != (self.summary.jobs_with_changes > 0):
            raise ValueError("summary.has_changes is inconsistent with jobs_with_changes")
        if self.summary.total_jobs_checked < len(self.jobs):
            raise ValueError("summary.total_jobs_checked is smaller than the number of jobs")
        return self

    def to_json(self) -> str:
        """Serialize with two-space indentation and a trailing newline."""
        return self.model_dump_json(indent=2) + "\n"
