"""Payload construction for repository dispatch events.

GitHub accepts ``{"event_type": ..., "client_payload": {...}}`` on
``POST /repos/{owner}/{repo}/dispatches``. Two payload shapes exist:

- basic: ``job_key`` and a comma-joined ``modified_files`` string
- enhanced: basic fields plus documentation files, counts, urgency, the
  report's git context and dispatch metadata
"""

from typing import Any, Dict

from docdispatch.domain.models import JobResult, ReportGitContext

PAYLOAD_SOURCE = "queue_changes_dispatch"


def build_basic_payload(job: JobResult) -> Dict[str, Any]:
    """Minimal client payload for a job."""
    return {
        "job_key": job.job_key,
        "modified_files": job.modified_files_csv,
    }


def build_enhanced_payload(
    job: JobResult,
    git_context: ReportGitContext,
    triggered_by: str,
    timestamp: str,
) -> Dict[str, Any]:
    """
    Full client payload for a job.

    Args:
        job: Job result from the report
        git_context: Run-level git context from the report
        triggered_by: Name of whoever runs the dispatch
        timestamp: Dispatch time, second-precision UTC

    Returns:
        Dictionary ready to be used as ``client_payload``
    """
    return {
        **build_basic_payload(job),
        "documentation_files": list(job.documentation_files),
        "job_type": job.job_type,
        "modified_count": job.modified_count,
        "urgent": job.urgent,
        "git_context": git_context.model_dump(),
        "metadata": {
            "triggered_by": triggered_by,
            "timestamp": timestamp,
            "source": PAYLOAD_SOURCE,
        },
    }


def build_request_body(event_type: str, client_payload: Dict[str, Any]) -> Dict[str, Any]:
    """Wrap a client payload into the dispatch request body."""
    return {
        "event_type": event_type,
        "client_payload": client_payload,
    }
