"""Data models for pipeline execution tracking and reporting."""

from dataclasses import dataclass
from pathlib import Path

from docdispatch.domain.models import Report


@dataclass
class QueueRunResult:
    """
    Outcome of one queue (change matcher) run.

    Attributes:
        report: The report that was written
        report_path: Where the report was written
        duration_seconds: Wall-clock time for the run
    """

    report: Report
    report_path: Path
    duration_seconds: float = 0.0

    @property
    def has_changes(self) -> bool:
        return self.report.summary.has_changes
