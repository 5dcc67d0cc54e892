"""Data models and exceptions for repository dispatch.

This module defines result types and custom exceptions used throughout
the dispatch stage.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from docdispatch.config.exceptions import PreconditionError

STATUS_SENT = "sent"
STATUS_DRY_RUN = "dry_run"
STATUS_FAILED = "failed"


class DispatchError(Exception):
    """Base exception for dispatch-related errors."""

    pass


class DispatchDeliveryError(DispatchError):
    """Raised when a transport could not attempt delivery at all."""

    pass


class DispatchAuthenticationError(PreconditionError):
    """Raised when the transport has no usable GitHub credentials."""

    pass


@dataclass(frozen=True)
class DispatchResponse:
    """What a transport reported for one dispatch call.

    Attributes:
        ok: True when GitHub accepted the event
        status: Process exit code (gh transport) or HTTP status (api transport)
        output: Combined response text, for logging
    """

    ok: bool
    status: int
    output: str = ""


@dataclass
class DispatchOutcome:
    """Result of dispatching one job result.

    Attributes:
        job_key: Job that was dispatched
        event_type: Repository dispatch event name
        status: sent, dry_run or failed
        error: Error message when the dispatch failed
    """

    job_key: str
    event_type: str
    status: str
    error: Optional[str] = None

    def is_success(self) -> bool:
        """Dry runs count as successes."""
        return self.status in (STATUS_SENT, STATUS_DRY_RUN)


@dataclass
class DispatchRunResult:
    """Aggregate result of replaying a report.

    Attributes:
        target_repository: owner/name the events were sent to
        dry_run: Whether network calls were suppressed
        enhanced: Whether the enhanced payload was used
        outcomes: One DispatchOutcome per job, in report order
    """

    target_repository: str
    dry_run: bool = False
    enhanced: bool = False
    outcomes: List[DispatchOutcome] = field(default_factory=list)

    @property
    def jobs_processed(self) -> int:
        return len(self.outcomes)

    @property
    def success_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.is_success())

    @property
    def error_count(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.is_success())

    @property
    def had_errors(self) -> bool:
        return self.error_count > 0

    @property
    def failed_job_keys(self) -> List[str]:
        return [outcome.job_key for outcome in self.outcomes if not outcome.is_success()]
