"""Dispatch stage: replay the queue report as repository dispatch events."""

import time
from pathlib import Path
from typing import Optional
from uuid import uuid4

from docdispatch.config.exceptions import ConfigurationError
from docdispatch.git.client import GitClient
from docdispatch.git.models import UNKNOWN_USER, TargetRepository
from docdispatch.logging import SUCCESS, get_logger
from docdispatch.logging.context import log_context
from docdispatch.notifications.clients import DispatchClient
from docdispatch.notifications.models import DispatchRunResult
from docdispatch.notifications.service import DispatchService
from docdispatch.report.io import DEFAULT_REPORT_PATH, read_report

logger = get_logger(__name__, component="dispatch")


class DispatchPipeline:
    """
    Sends the dispatch events recorded in a queue report.

    Preconditions (report, target repository, transport credentials) are
    checked before the first job; per-job failures are collected in the
    returned DispatchRunResult.
    """

    def __init__(
        self,
        report_path: Path = DEFAULT_REPORT_PATH,
        client: Optional[DispatchClient] = None,
        git_client: Optional[GitClient] = None,
        target: Optional[TargetRepository] = None,
        enhanced: bool = False,
        dry_run: bool = False,
        service: Optional[DispatchService] = None,
    ):
        """
        Initialize the dispatch pipeline.

        Args:
            report_path: Report written by the queue stage
            client: Transport for real sends (not needed for dry runs)
            git_client: Git access for remote discovery and the user name
            target: Explicit target repository; discovered from origin when None
            enhanced: Send the enhanced payload
            dry_run: Log the would-be calls without sending
            service: DispatchService override (built from client when None)
        """
        self.report_path = Path(report_path)
        self.client = client
        self.git = git_client or GitClient()
        self.target = target
        self.enhanced = enhanced
        self.dry_run = dry_run
        self.service = service or DispatchService(client)

    def resolve_target(self) -> TargetRepository:
        if self.target is not None:
            return self.target
        return self.git.target_repository()

    def run(self) -> DispatchRunResult:
        """
        Execute the dispatch stage.

        Returns:
            DispatchRunResult; check ``had_errors`` for the exit status

        Raises:
            PreconditionError: If the report, target or transport is unusable
        """
        started = time.time()

        with log_context(run_id=uuid4().hex):
            logger.info(
                "Starting repository dispatch sender",
                extra={
                    "event": "dispatch.run.started",
                    "enhanced": self.enhanced,
                    "dry_run": self.dry_run,
                    "report_path": str(self.report_path),
                },
            )

            report = read_report(self.report_path)
            target = self.resolve_target()
            logger.info(f"Target repository: {target}", extra={"event": "dispatch.run.target"})

            if not self.dry_run:
                if self.client is None:
                    raise ConfigurationError("A dispatch client is required unless dry_run is set")
                self.client.check_ready()

            triggered_by = UNKNOWN_USER
            if self.enhanced and not self.dry_run:
                triggered_by = self.git.user_name() or UNKNOWN_USER

            result = self.service.dispatch(
                report,
                target,
                enhanced=self.enhanced,
                dry_run=self.dry_run,
                triggered_by=triggered_by,
            )

            logger.info(
                f"Jobs processed: {result.jobs_processed}, "
                f"successful dispatches: {result.success_count}, "
                f"failed dispatches: {result.error_count}",
                extra={
                    "event": "dispatch.run.completed",
                    "jobs_processed": result.jobs_processed,
                    "success_count": result.success_count,
                    "error_count": result.error_count,
                    "target": target.full_name,
                    "duration_seconds": round(time.time() - started, 3),
                },
            )

            if result.had_errors:
                logger.warning(
                    f"Failed dispatches: {result.error_count}",
                    extra={"event": "dispatch.run.failures", "failed_jobs": result.failed_job_keys},
                )
            if self.dry_run:
                logger.info(
                    "This was a dry run - no actual dispatches were sent",
                    extra={"event": "dispatch.run.dry_run"},
                )
            elif not result.had_errors and result.jobs_processed:
                logger.log(
                    SUCCESS,
                    "All repository dispatches sent successfully!",
                    extra={"event": "dispatch.run.all_sent"},
                )

            return result
