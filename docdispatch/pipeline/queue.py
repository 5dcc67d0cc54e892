"""Queue stage: match the latest commit's changes against documentation jobs."""

import json
import shutil
import time
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional
from uuid import uuid4

from docdispatch.config.exceptions import MissingDependencyError
from docdispatch.config.loader import DEFAULT_CONFIG_PATH, ensure_config_file, load_documentation_config
from docdispatch.config.models import DocumentationConfig
from docdispatch.git.client import GitClient
from docdispatch.git.models import UNKNOWN_USER, GitContext
from docdispatch.logging import SUCCESS, get_logger
from docdispatch.logging.context import log_context
from docdispatch.matching.engine import match_jobs
from docdispatch.report.io import DEFAULT_REPORT_PATH, write_report
from docdispatch.utils.timestamps import format_timestamp, utc_now

from .models import QueueRunResult

logger = get_logger(__name__, component="queue")

REQUIRED_TOOLS = ("git",)


class QueuePipeline:
    """
    Produces the queue report for the most recent commit.

    Preconditions are checked before any matching happens; when one fails
    an exception is raised and no report is written.
    """

    def __init__(
        self,
        config_path: Path = DEFAULT_CONFIG_PATH,
        output_path: Path = DEFAULT_REPORT_PATH,
        git_client: Optional[GitClient] = None,
        which: Callable[[str], Optional[str]] = shutil.which,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize the queue pipeline.

        Args:
            config_path: Documentation configuration file
            output_path: Where the report is written
            git_client: Git access (defaults to the current directory)
            which: Tool lookup used by the dependency check
            clock: Source of the run timestamp
        """
        self.config_path = Path(config_path)
        self.output_path = Path(output_path)
        self.git = git_client or GitClient()
        self.which = which
        self.clock = clock

    def check_dependencies(self) -> None:
        """Raise MissingDependencyError if a required tool is not on PATH."""
        missing = [tool for tool in REQUIRED_TOOLS if self.which(tool) is None]
        if missing:
            raise MissingDependencyError(missing)

    def validate_environment(self) -> DocumentationConfig:
        """
        Check the configuration file and repository, then load the configuration.

        Returns:
            Validated DocumentationConfig

        Raises:
            PreconditionError: If any check fails
        """
        ensure_config_file(self.config_path)
        self.git.ensure_repository()
        return load_documentation_config(self.config_path)

    def collect_changes(self, context: GitContext) -> List[str]:
        """Files changed between HEAD~1 and HEAD; empty when HEAD has no parent."""
        if not context.has_previous_commit:
            logger.warning(
                "No previous commit to compare against",
                extra={"event": "queue.changes.no_parent", "current_commit": context.current_commit},
            )
            return []
        return self.git.changed_files(context.previous_commit, context.current_commit)

    def run(self) -> QueueRunResult:
        """
        Execute the queue stage.

        This method:
        1. Checks dependencies, configuration and repository
        2. Collects git provenance and the changed file list
        3. Matches every job and builds the report
        4. Writes the report atomically

        Returns:
            QueueRunResult with the written report

        Raises:
            PreconditionError: On any precondition failure (nothing is written)
        """
        started = time.time()

        with log_context(run_id=uuid4().hex):
            logger.info(
                "Starting job-based documentation processor",
                extra={
                    "event": "queue.run.started",
                    "config_path": str(self.config_path),
                    "output_path": str(self.output_path),
                },
            )

            self.check_dependencies()
            config = self.validate_environment()

            context = self.git.collect_context()
            changed_files = self.collect_changes(context)

            if changed_files:
                logger.info(
                    f"Files changed in last commit: {len(changed_files)}",
                    extra={"event": "queue.changes.collected", "changed_files": changed_files},
                )
            else:
                logger.info(
                    "No files changed in the last commit",
                    extra={"event": "queue.changes.empty"},
                )

            triggered_by = self.git.user_name() or UNKNOWN_USER
            report = match_jobs(
                config,
                changed_files,
                context,
                triggered_by=triggered_by,
                timestamp=format_timestamp(self.clock()),
            )

            write_report(report, self.output_path)

            summary = report.summary
            logger.info(
                f"Total jobs checked: {summary.total_jobs_checked}, "
                f"jobs with modified input files: {summary.jobs_with_changes}",
                extra={
                    "event": "queue.run.completed",
                    "total_jobs_checked": summary.total_jobs_checked,
                    "jobs_with_changes": summary.jobs_with_changes,
                    "output_path": str(self.output_path),
                },
            )
            if summary.has_changes:
                logger.log(
                    SUCCESS,
                    "Found jobs that need documentation updates!",
                    extra={"event": "queue.run.has_changes"},
                )
            else:
                logger.info("No jobs have modified input files", extra={"event": "queue.run.no_changes"})

            return QueueRunResult(
                report=report,
                report_path=self.output_path,
                duration_seconds=round(time.time() - started, 3),
            )


def summary_json(result: QueueRunResult) -> str:
    """Machine-readable summary printed at the end of a queue run."""
    return json.dumps(result.report.summary.model_dump(), indent=2)
