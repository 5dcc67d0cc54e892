"""Change matching engine for documentation jobs.

This module provides:
- MatchResult: Result of checking one job against the changed files
- ChangeMatcher: Service that evaluates jobs against a changed file set
- match_jobs: Builds the aggregate Report for a whole configuration
"""

from .engine import (
    SENSITIVE_SUFFIXES,
    URGENT_FILE_THRESHOLD,
    ChangeMatcher,
    build_job_result,
    is_urgent,
    match_jobs,
    urgency_reasons,
)
from .models import URGENCY_FILE_COUNT, URGENCY_SENSITIVE_EXTENSION, MatchResult

__all__ = [
    "ChangeMatcher",
    "MatchResult",
    "build_job_result",
    "is_urgent",
    "match_jobs",
    "urgency_reasons",
    "SENSITIVE_SUFFIXES",
    "URGENT_FILE_THRESHOLD",
    "URGENCY_FILE_COUNT",
    "URGENCY_SENSITIVE_EXTENSION",
]
