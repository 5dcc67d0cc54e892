"""Dispatch service for replaying a queue report as repository dispatch events.

This module provides the DispatchService class that orchestrates the
dispatch loop: payload construction, dry-run simulation, delivery through a
transport, per-job failure isolation and request pacing.
"""

import logging
import time
from typing import Callable, List, Optional

from docdispatch.domain.models import JobResult, Report
from docdispatch.git.models import TargetRepository
from docdispatch.logging import SUCCESS, get_logger
from docdispatch.logging.context import log_context
from docdispatch.utils.timestamps import format_timestamp

from .clients import DispatchClient
from .models import (
    STATUS_DRY_RUN,
    STATUS_FAILED,
    STATUS_SENT,
    DispatchError,
    DispatchOutcome,
    DispatchRunResult,
)
from .payloads import build_basic_payload, build_enhanced_payload, build_request_body

logger = get_logger(__name__, component="dispatch")

# Delay between successive dispatch calls, to stay inside GitHub rate limits
PACING_SECONDS = 1.0


class DispatchService:
    """Sends one repository dispatch event per job result in a report.

    Jobs are processed sequentially in report order. A failed dispatch is
    recorded and processing continues with the next job.
    """

    def __init__(
        self,
        client: Optional[DispatchClient],
        sleep: Callable[[float], None] = time.sleep,
        pacing_seconds: float = PACING_SECONDS,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize dispatch service.

        Args:
            client: Transport used for real sends (may be None for dry runs)
            sleep: Sleep function used for pacing (injectable for tests)
            pacing_seconds: Delay between successive dispatch attempts
            logger_instance: Logger instance (uses module logger if None)
        """
        self.client = client
        self.sleep = sleep
        self.pacing_seconds = pacing_seconds
        self.logger = logger_instance or logger

    def build_request(
        self,
        job: JobResult,
        report: Report,
        enhanced: bool,
        triggered_by: str,
    ) -> dict:
        """Build the request body for one job."""
        if enhanced:
            payload = build_enhanced_payload(
                job,
                report.git_context,
                triggered_by=triggered_by,
                timestamp=format_timestamp(),
            )
        else:
            payload = build_basic_payload(job)
        return build_request_body(job.event_type, payload)

    def send_job(
        self,
        job: JobResult,
        report: Report,
        target: TargetRepository,
        enhanced: bool = False,
        dry_run: bool = False,
        triggered_by: str = "Unknown",
    ) -> DispatchOutcome:
        """Dispatch a single job result.

        Returns:
            DispatchOutcome; failures are reported, never raised
        """
        event_type = job.event_type

        with log_context(job_key=job.job_key, event_type=event_type):
            if dry_run:
                self.logger.info(
                    f"[DRY RUN] Would send repository dispatch for job: {job.job_key}",
                    extra={
                        "event": "dispatch.job.dry_run",
                        "target": target.full_name,
                        "branch": job.git_context.branch,
                        "modified_files": job.modified_files_csv,
                        "enhanced": enhanced,
                    },
                )
                return DispatchOutcome(job_key=job.job_key, event_type=event_type, status=STATUS_DRY_RUN)

            if self.client is None:
                raise DispatchError("A dispatch client is required when dry_run is False")

            body = self.build_request(job, report, enhanced, triggered_by)
            self.logger.info(
                f"Sending {'enhanced ' if enhanced else ''}repository dispatch for job: {job.job_key}",
                extra={
                    "event": "dispatch.job.sending",
                    "target": target.full_name,
                    "modified_files": job.modified_files_csv,
                    "urgent": job.urgent,
                },
            )
            self.logger.debug("Request body", extra={"event": "dispatch.job.body", "body": body})

            try:
                response = self.client.send(target, body)
            except DispatchError as e:
                self.logger.error(
                    f"Failed to send repository dispatch for job: {job.job_key}: {e}",
                    extra={"event": "dispatch.job.failed", "error_type": type(e).__name__},
                )
                return DispatchOutcome(
                    job_key=job.job_key, event_type=event_type, status=STATUS_FAILED, error=str(e)
                )

            if response.ok:
                self.logger.log(
                    SUCCESS,
                    f"Repository dispatch sent for job: {job.job_key}",
                    extra={"event": "dispatch.job.sent", "status": response.status},
                )
                return DispatchOutcome(job_key=job.job_key, event_type=event_type, status=STATUS_SENT)

            self.logger.error(
                f"Failed to send repository dispatch for job: {job.job_key}",
                extra={
                    "event": "dispatch.job.failed",
                    "status": response.status,
                    "response": response.output,
                },
            )
            return DispatchOutcome(
                job_key=job.job_key,
                event_type=event_type,
                status=STATUS_FAILED,
                error=response.output or f"exit status {response.status}",
            )

    def dispatch(
        self,
        report: Report,
        target: TargetRepository,
        enhanced: bool = False,
        dry_run: bool = False,
        triggered_by: str = "Unknown",
    ) -> DispatchRunResult:
        """
        Dispatch every job result in a report.

        Args:
            report: Report produced by the queue stage
            target: Repository receiving the events
            enhanced: Send the enhanced payload
            dry_run: Log instead of sending; every job counts as a success
            triggered_by: Name recorded in enhanced payload metadata

        Returns:
            DispatchRunResult with one outcome per job
        """
        result = DispatchRunResult(
            target_repository=target.full_name, dry_run=dry_run, enhanced=enhanced
        )

        if not report.jobs:
            self.logger.info("No jobs found in output file", extra={"event": "dispatch.run.empty"})
            return result

        self.logger.info(
            f"Found {len(report.jobs)} job(s) to process",
            extra={"event": "dispatch.run.jobs_found", "job_count": len(report.jobs)},
        )

        outcomes: List[DispatchOutcome] = []
        for index, job in enumerate(report.jobs):
            if index > 0:
                self.sleep(self.pacing_seconds)

            try:
                outcome = self.send_job(job, report, target, enhanced, dry_run, triggered_by)
            except Exception as e:
                # Keep going: one job's failure must not stop the others
                self.logger.error(
                    f"Unexpected error dispatching job {job.job_key}: {e}",
                    exc_info=True,
                    extra={"event": "dispatch.job.failed", "job_key": job.job_key},
                )
                outcome = DispatchOutcome(
                    job_key=job.job_key,
                    event_type=job.event_type,
                    status=STATUS_FAILED,
                    error=str(e),
                )
            outcomes.append(outcome)

        result.outcomes = outcomes
        return result
