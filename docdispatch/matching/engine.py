"""Change matching engine for documentation jobs.

This module implements the logic that:
1. Intersects each job's declared inputs with the changed file set
2. Decides whether a triggered job is urgent
3. Assembles the aggregate Report from the triggered jobs
"""

import logging
from typing import Iterable, List, Optional, Sequence

from docdispatch.config.models import DocumentationConfig, JobDefinition
from docdispatch.domain.models import (
    QUEUED,
    JobMetadata,
    JobResult,
    Report,
    ReportGitContext,
    ReportSummary,
)
from docdispatch.git.models import GitContext
from docdispatch.logging import SUCCESS, get_logger

from .models import URGENCY_FILE_COUNT, URGENCY_SENSITIVE_EXTENSION, MatchResult

logger = get_logger(__name__, component="matching")

# A job touching more than this many inputs is urgent
URGENT_FILE_THRESHOLD = 3

# Metadata types whose changes are always urgent (case-sensitive suffix test)
SENSITIVE_SUFFIXES = (".flow-meta.xml", ".cls", ".trigger")


def urgency_reasons(modified_files: Sequence[str]) -> List[str]:
    """Return the urgency rules that fire for a set of modified files."""
    reasons = []
    if len(modified_files) > URGENT_FILE_THRESHOLD:
        reasons.append(URGENCY_FILE_COUNT)
    if any(path.endswith(SENSITIVE_SUFFIXES) for path in modified_files):
        reasons.append(URGENCY_SENSITIVE_EXTENSION)
    return reasons


def is_urgent(modified_files: Sequence[str]) -> bool:
    """
    Decide whether a job's modified files warrant priority handling.

    Urgent when more than three inputs changed, or when any changed input
    ends with one of SENSITIVE_SUFFIXES.

    Example:
        >>> is_urgent(["force-app/classes/Account.cls"])
        True
        >>> is_urgent(["README.md"])
        False
    """
    return bool(urgency_reasons(modified_files))


class ChangeMatcher:
    """Evaluates documentation jobs against the files changed in a commit.

    Matching is exact string equality between a job's input paths and the
    changed paths: no glob expansion and no path normalization.
    """

    def __init__(self, changed_files: Iterable[str], logger_instance: Optional[logging.Logger] = None):
        """Initialize ChangeMatcher.

        Args:
            changed_files: Repository-relative paths changed in the commit
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.changed_files = frozenset(changed_files)
        self.logger = logger_instance or logger

    def evaluate(self, job: JobDefinition) -> MatchResult:
        """Check a single job.

        Args:
            job: Job definition to evaluate

        Returns:
            MatchResult; ``is_match`` is False when no input changed
        """
        modified = []
        for path in job.input:
            if path in self.changed_files and path not in modified:
                modified.append(path)

        reasons = urgency_reasons(modified)
        result = MatchResult(
            job=job,
            modified_files=modified,
            urgent=bool(reasons),
            urgency_reasons=reasons,
        )

        if result.is_match:
            self.logger.log(
                SUCCESS,
                f"Job {job.key} has {result.modified_count} modified input file(s)",
                extra={
                    "event": "queue.job.matched",
                    "job_key": job.key,
                    "job_type": job.type,
                    "modified_files": modified,
                    "urgent": result.urgent,
                    "urgency_reasons": reasons,
                },
            )
        else:
            self.logger.info(
                f"No input files modified for job: {job.key}",
                extra={
                    "event": "queue.job.unchanged",
                    "job_key": job.key,
                    "input_count": len(job.input),
                },
            )

        return result


def build_job_result(
    match: MatchResult, git_context: GitContext, triggered_by: str, timestamp: str
) -> JobResult:
    """Turn a positive MatchResult into the JobResult written to the report."""
    return JobResult(
        job_key=match.job.key,
        job_type=match.job.type,
        modified_files=list(match.modified_files),
        documentation_files=list(match.job.documentation),
        modified_count=match.modified_count,
        urgent=match.urgent,
        git_context=git_context,
        metadata=JobMetadata(
            triggered_by=triggered_by,
            timestamp=timestamp,
            processing_status=QUEUED,
        ),
    )


def match_jobs(
    config: DocumentationConfig,
    changed_files: Sequence[str],
    git_context: GitContext,
    triggered_by: str,
    timestamp: str,
    matcher: Optional[ChangeMatcher] = None,
) -> Report:
    """
    Match every configured job against the changed files and build the Report.

    Jobs are evaluated in declaration order and job results keep that order.
    When ``changed_files`` is empty no job is evaluated and the report is
    empty with ``total_jobs_checked == 0``.

    Args:
        config: Validated documentation configuration
        changed_files: Paths changed between the previous and current commit
        git_context: Commit/branch/remote provenance for the run
        triggered_by: Name recorded as the run's initiator
        timestamp: Second-precision UTC timestamp for the run
        matcher: Optional pre-built matcher (built from changed_files otherwise)

    Returns:
        Report with one JobResult per triggered job
    """
    jobs: List[JobResult] = []
    total_jobs_checked = 0

    if changed_files:
        matcher = matcher or ChangeMatcher(changed_files)
        for job in config.jobs:
            total_jobs_checked += 1
            match = matcher.evaluate(job)
            if match.is_match:
                jobs.append(build_job_result(match, git_context, triggered_by, timestamp))

    return Report(
        summary=ReportSummary(
            total_jobs_checked=total_jobs_checked,
            jobs_with_changes=len(jobs),
            has_changes=len(jobs) > 0,
            timestamp=timestamp,
            triggered_by=triggered_by,
        ),
        git_context=ReportGitContext.from_git_context(git_context, list(changed_files)),
        jobs=jobs,
    )
